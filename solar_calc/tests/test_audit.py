"""
Tests de l'audit solaire complet (facture → production → rentabilité).
"""

from unittest.mock import patch

import pytest

from core.enums import BuildingType, ClimateZone
from core.exceptions import InvalidInputError, InvalidLocationError
from solar_calc.services.audit import run_solar_audit
from weather.contracts import YieldData
from weather.locations import seasonal_profile

SFAX_YIELD = YieldData(
    location='Sfax',
    annual_kwh_per_kwp=1720.0,
    monthly_kwh_per_kwp=tuple(1720.0 * share for share in seasonal_profile()),
    source='fallback',
)


@pytest.fixture
def sfax_yield():
    with patch('solar_calc.services.audit.get_location_yield', return_value=SFAX_YIELD) as mocked:
        yield mocked


class TestRunSolarAudit:

    def test_enchainement_complet(self, sfax_yield):
        result = run_solar_audit('Sfax', 250.0, 7, BuildingType.OFFICE_ADMIN_BANK)

        assert result.location == 'Sfax'
        assert result.yield_source == 'fallback'
        assert result.consumption.climate_zone is ClimateZone.CENTER
        assert result.consumption.measured_amount_dt == 250.0
        # Dimensionnée sur la consommation annuelle
        assert result.production.installed_kwp == pytest.approx(
            result.consumption.annual_consumption_kwh / 1720.0, abs=0.01
        )
        assert len(result.economics.annual) == 26
        assert result.avoided_emissions.annual_avoided_co2_kg == pytest.approx(
            result.production.annual_production_kwh * 0.512, abs=0.1
        )

    def test_puissance_imposee(self, sfax_yield):
        result = run_solar_audit('Sfax', 250.0, 7, BuildingType.OFFICE_ADMIN_BANK, installed_kwp=3)

        assert result.production.installed_kwp == 3
        assert result.economics.capex_dt == pytest.approx(3 * 2000)

    def test_serialisation(self, sfax_yield):
        data = run_solar_audit('SFAX', 180.0, 1, 'Hôtel').to_dict()

        assert data['location'] == 'Sfax'
        assert data['consumption']['building_type'] == 'Hôtel'
        assert len(data['production']['monthly']) == 12
        assert data['avoided_emissions']['horizon_years'] == 25

    def test_gouvernorat_inconnu(self, sfax_yield):
        with pytest.raises(InvalidLocationError):
            run_solar_audit('Lyon', 250.0, 7, BuildingType.OFFICE_ADMIN_BANK)
        sfax_yield.assert_not_called()

    def test_mois_invalide(self, sfax_yield):
        with pytest.raises(InvalidInputError):
            run_solar_audit('Sfax', 250.0, 13, BuildingType.OFFICE_ADMIN_BANK)
