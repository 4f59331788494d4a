"""
Estimation de la consommation annuelle à partir d'une seule facture.

Étapes :
1. Montant facturé → consommation du mois de référence (inversion du barème)
2. Base normalisée = consommation mesurée / K_effectif(mois de référence)
3. Estimation(m) = Base × K_effectif(m)

Le mois de référence restitue exactement la valeur mesurée.
"""

import logging
from dataclasses import replace

from core.enums import BuildingType, ClimateZone
from core.validators import parse_enum, validate_month, validate_non_negative
from solar_calc.contracts import ConsumptionEstimate, MonthlyConsumptionData
from solar_calc.services.coefficients import (
    get_building_coefficient,
    get_climatic_coefficient,
    get_effective_coefficient,
)
from solar_calc.services.tariff import STEG_NON_RESIDENTIAL_BT, TariffSchedule

logger = logging.getLogger(__name__)


def extrapolate_consumption(
    measured_consumption_kwh: float,
    reference_month: int,
    building_type,
    climate_zone,
) -> ConsumptionEstimate:
    """
    Extrapole une consommation mensuelle mesurée sur les 12 mois de l'année.

    Args:
        measured_consumption_kwh: Consommation du mois de référence (kWh)
        reference_month: Mois de la mesure (1-12)
        building_type: BuildingType (membre, libellé ou nom)
        climate_zone: ClimateZone (membre, libellé ou nom)

    Returns:
        ConsumptionEstimate

    Raises:
        InvalidInputError: Mois hors 1-12, type ou zone inconnus, consommation négative
    """
    measured = validate_non_negative(measured_consumption_kwh, "Consommation mesurée")
    reference_month = validate_month(reference_month)
    building_type = parse_enum(BuildingType, building_type, "Type de bâtiment")
    climate_zone = parse_enum(ClimateZone, climate_zone, "Zone climatique")

    reference_coefficient = get_effective_coefficient(building_type, climate_zone, reference_month)
    base = measured / reference_coefficient

    monthly = []
    for month in range(1, 13):
        climatic = get_climatic_coefficient(climate_zone, month)
        building = get_building_coefficient(building_type, month)
        effective = climatic * building

        if month == reference_month:
            estimated = measured
            raw = measured
        else:
            estimated = round(measured * effective / reference_coefficient, 2)
            raw = 0.0

        monthly.append(MonthlyConsumptionData(
            month=month,
            raw_consumption_kwh=raw,
            estimated_consumption_kwh=estimated,
            climatic_coefficient=climatic,
            building_coefficient=building,
            effective_coefficient=round(effective, 4),
        ))

    annual = round(sum(m.estimated_consumption_kwh for m in monthly), 2)

    logger.info(
        f"📊 Consommation extrapolée ({building_type.value}, zone {climate_zone.value}, "
        f"mois {reference_month}) : base {base:.1f} kWh, annuelle {annual:.0f} kWh"
    )

    return ConsumptionEstimate(
        reference_month=reference_month,
        measured_consumption_kwh=measured,
        base_consumption_kwh=round(base, 2),
        annual_consumption_kwh=annual,
        building_type=building_type,
        climate_zone=climate_zone,
        monthly=tuple(monthly),
    )


def estimate_consumption(
    measured_amount_dt: float,
    reference_month: int,
    building_type,
    climate_zone,
    tariff: TariffSchedule = STEG_NON_RESIDENTIAL_BT,
) -> ConsumptionEstimate:
    """
    Estime la consommation annuelle à partir du montant d'une facture.

    Le montant est converti en kWh par le barème ``tariff`` puis extrapolé
    avec extrapolate_consumption().

    Raises:
        InvalidInputError: Montant négatif, mois hors 1-12, type ou zone inconnus
    """
    amount = validate_non_negative(measured_amount_dt, "Montant de la facture")
    measured_kwh = tariff.consumption_for_amount(amount)

    estimate = extrapolate_consumption(measured_kwh, reference_month, building_type, climate_zone)

    return replace(estimate, measured_amount_dt=amount)
