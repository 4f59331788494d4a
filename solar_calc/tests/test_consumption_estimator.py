"""
Tests unitaires de l'estimation de consommation et du barème STEG.
"""

import pytest

from core.enums import BuildingType, ClimateZone
from core.exceptions import InvalidInputError
from solar_calc.services.coefficients import (
    CLIMATIC_COEFFICIENTS,
    climatic_profile,
    get_climatic_coefficient,
    get_effective_coefficient,
)
from solar_calc.services.consumption_estimator import estimate_consumption, extrapolate_consumption
from solar_calc.services.tariff import STEG_NON_RESIDENTIAL_BT, TariffBracket, TariffSchedule
from weather.locations import get_climate_weights


class TestClimaticCoefficients:
    """Coefficients K_zone dérivés des pondérations climatiques."""

    def test_nord_janvier(self):
        # hiver : 0.3 / 3 mois × 12 × chauffage 0.95 = 1.14
        assert get_climatic_coefficient(ClimateZone.NORTH, 1) == pytest.approx(1 + 0.3 * 0.14)

    def test_nord_mi_saison(self):
        # mi-saison : 0.2 / 5 mois × 12 = 0.48
        assert get_climatic_coefficient(ClimateZone.NORTH, 4) == pytest.approx(1 + 0.3 * (0.48 - 1))

    def test_sud_plus_climatise_que_le_nord(self):
        assert get_climatic_coefficient(ClimateZone.SOUTH, 7) > get_climatic_coefficient(ClimateZone.NORTH, 7)

    def test_centre_chauffe_davantage_l_hiver(self):
        assert get_climatic_coefficient(ClimateZone.CENTER, 12) > get_climatic_coefficient(ClimateZone.NORTH, 12)

    def test_suit_les_ponderations_de_la_zone(self):
        weights = get_climate_weights(ClimateZone.SOUTH)
        assert weights.cooling_factor == 1.1
        assert CLIMATIC_COEFFICIENTS[ClimateZone.SOUTH] == climatic_profile(ClimateZone.SOUTH)
        assert len(CLIMATIC_COEFFICIENTS[ClimateZone.SOUTH]) == 12

    def test_zone_inconnue(self):
        with pytest.raises(InvalidInputError):
            get_climatic_coefficient('Est', 1)


class TestExtrapolateConsumption:
    """Extrapolation d'un mois mesuré sur 12 mois."""

    def test_mois_de_reference_exact(self):
        """Le mois de référence restitue exactement la mesure."""
        estimate = extrapolate_consumption(1234.567, 7, BuildingType.OFFICE_ADMIN_BANK, ClimateZone.NORTH)

        july = estimate.monthly[6]
        assert july.month == 7
        assert july.estimated_consumption_kwh == 1234.567
        assert july.raw_consumption_kwh == 1234.567

    def test_seul_le_mois_de_reference_est_mesure(self):
        estimate = extrapolate_consumption(800, 3, BuildingType.HOTEL_GUESTHOUSE, ClimateZone.CENTER)

        raw = [m.raw_consumption_kwh for m in estimate.monthly]
        assert raw.count(0.0) == 11
        assert raw[2] == 800

    def test_mise_a_l_echelle_des_autres_mois(self):
        estimate = extrapolate_consumption(1000, 1, BuildingType.OFFICE_ADMIN_BANK, ClimateZone.NORTH)

        reference = get_effective_coefficient(BuildingType.OFFICE_ADMIN_BANK, ClimateZone.NORTH, 1)
        august = get_effective_coefficient(BuildingType.OFFICE_ADMIN_BANK, ClimateZone.NORTH, 8)

        assert estimate.monthly[7].estimated_consumption_kwh == round(1000 * august / reference, 2)
        assert estimate.base_consumption_kwh == round(1000 / reference, 2)

    def test_annuelle_somme_des_mois(self):
        estimate = extrapolate_consumption(500, 5, BuildingType.CLINIC_MEDICAL, ClimateZone.SOUTH)

        assert estimate.annual_consumption_kwh == pytest.approx(sum(estimate.monthly_consumption_kwh), abs=0.01)
        assert len(estimate.to_dataframe()) == 12

    def test_ecole_creuse_l_ete(self):
        estimate = extrapolate_consumption(1000, 10, BuildingType.SCHOOL_TRAINING, ClimateZone.NORTH)

        assert estimate.monthly[7].estimated_consumption_kwh < 0.5 * estimate.monthly[9].estimated_consumption_kwh

    def test_accepte_libelles_et_noms(self):
        estimate = extrapolate_consumption(300, 2, 'OFFICE_ADMIN_BANK', 'Nord')

        assert estimate.building_type is BuildingType.OFFICE_ADMIN_BANK
        assert estimate.climate_zone is ClimateZone.NORTH

    @pytest.mark.parametrize('month', [0, 13, -1, True, 6.5, None])
    def test_mois_invalide(self, month):
        with pytest.raises(InvalidInputError):
            extrapolate_consumption(300, month, BuildingType.SERVICE, ClimateZone.NORTH)

    def test_type_inconnu(self):
        with pytest.raises(InvalidInputError):
            extrapolate_consumption(300, 1, 'Station spatiale', ClimateZone.NORTH)

    def test_zone_inconnue(self):
        with pytest.raises(InvalidInputError):
            extrapolate_consumption(300, 1, BuildingType.SERVICE, 'Ouest')

    def test_consommation_negative(self):
        with pytest.raises(InvalidInputError):
            extrapolate_consumption(-5, 1, BuildingType.SERVICE, ClimateZone.NORTH)


class TestEstimateConsumption:
    """Estimation à partir du montant facturé."""

    def test_montant_converti_par_bareme(self):
        estimate = estimate_consumption(96.30, 3, BuildingType.PHARMACY, ClimateZone.CENTER)

        assert estimate.measured_amount_dt == 96.30
        assert estimate.measured_consumption_kwh == pytest.approx(400.0)
        assert estimate.monthly[2].estimated_consumption_kwh == estimate.measured_consumption_kwh

    def test_montant_negatif(self):
        with pytest.raises(InvalidInputError):
            estimate_consumption(-10, 3, BuildingType.PHARMACY, ClimateZone.CENTER)


class TestTariff:
    """Barème progressif STEG."""

    def test_facture_400_kwh(self):
        bill = STEG_NON_RESIDENTIAL_BT.compute_bill(400)

        assert bill.amount_dt == pytest.approx(96.30)
        assert bill.marginal_rate_dt_per_kwh == 0.333
        assert bill.effective_rate_dt_per_kwh == pytest.approx(96.30 / 400)

    def test_consommation_nulle(self):
        bill = STEG_NON_RESIDENTIAL_BT.compute_bill(0)

        assert bill.amount_dt == 0
        assert bill.marginal_rate_dt_per_kwh == 0

    def test_inversion_derniere_tranche(self):
        # 39 + 24 + 66.6 = 129.6 DT pour 500 kWh, puis 0.391 DT/kWh
        kwh = STEG_NON_RESIDENTIAL_BT.consumption_for_amount(129.6 + 39.1)

        assert kwh == pytest.approx(600.0)
        assert STEG_NON_RESIDENTIAL_BT.compute_bill(kwh).amount_dt == pytest.approx(168.7)

    def test_bareme_sans_tranche_ouverte(self):
        with pytest.raises(InvalidInputError):
            TariffSchedule(name="fermé", brackets=(TariffBracket(0, 100, 0.2),))
