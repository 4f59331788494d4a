"""
Classement énergétique des bâtiments tertiaires.

BECTh (Besoins Énergétiques liés au Confort Thermique) :

    BECTh = (BECh + BERef) / STC

- BECh : besoins annuels de chauffage (kWh/an)
- BERef : besoins annuels de refroidissement (kWh/an)
- STC : surface totale conditionnée (m²)

Cinq typologies sont couvertes par la réglementation thermique : bureaux,
cafés/restaurants et centres esthétiques, hôtels, cliniques, écoles.

L'indice de performance compare en plus l'intensité totale du site
(électricité + gaz) à l'intensité de référence du secteur.
"""

import logging
from types import MappingProxyType

from core.enums import BuildingType, ClassificationGrade
from core.validators import parse_enum, validate_non_negative
from energy_audit.contracts import EnergyClassResult, EnergyPerformanceResult
from energy_audit.services.banding import build_bands, classify

logger = logging.getLogger(__name__)


# ==============================================================================
# GRILLES BECTh (kWh/m².an)
# ==============================================================================

BECTH_DESCRIPTIONS = (
    'Excellente performance',
    'Très bonne performance',
    'Bonne performance',
    'Performance moyenne',
    'Performance insuffisante',
)

OFFICE_BECTH_BANDS = build_bands((75, 95, 115, 135), BECTH_DESCRIPTIONS)
CAFE_BECTH_BANDS = build_bands((110, 140, 170, 200), BECTH_DESCRIPTIONS)
HOTEL_BECTH_BANDS = build_bands((120, 150, 180, 210), BECTH_DESCRIPTIONS)
CLINIC_BECTH_BANDS = build_bands((130, 165, 200, 235), BECTH_DESCRIPTIONS)
SCHOOL_BECTH_BANDS = build_bands((55, 70, 85, 100), BECTH_DESCRIPTIONS)

BECTH_BANDS = MappingProxyType({
    BuildingType.OFFICE_ADMIN_BANK: OFFICE_BECTH_BANDS,
    BuildingType.CAFE_RESTAURANT: CAFE_BECTH_BANDS,
    BuildingType.BEAUTY_CENTER: CAFE_BECTH_BANDS,
    BuildingType.HOTEL_GUESTHOUSE: HOTEL_BECTH_BANDS,
    BuildingType.CLINIC_MEDICAL: CLINIC_BECTH_BANDS,
    BuildingType.SCHOOL_TRAINING: SCHOOL_BECTH_BANDS,
})


# ==============================================================================
# INDICE DE PERFORMANCE
# ==============================================================================

PERFORMANCE_INDEX_BANDS = build_bands(
    (0.6, 0.85, 1.15, 1.4),
    ('Optimisé', 'Efficace', 'Standard', 'Surconsommation', 'Très énergivore'),
)

# kWh/m².an
REFERENCE_INTENSITIES = MappingProxyType({
    BuildingType.SERVICE: 138,
    BuildingType.CAFE_RESTAURANT: 180,
    BuildingType.BEAUTY_CENTER: 140,
    BuildingType.OFFICE_ADMIN_BANK: 110,
    BuildingType.CLINIC_MEDICAL: 220,
    BuildingType.HOTEL_GUESTHOUSE: 200,
    BuildingType.SCHOOL_TRAINING: 90,
    BuildingType.LIGHT_WORKSHOP: 130,
    BuildingType.HEAVY_FACTORY: 180,
    BuildingType.TEXTILE_PACKAGING: 160,
    BuildingType.FOOD_INDUSTRY: 190,
    BuildingType.PLASTIC_INJECTION: 170,
    BuildingType.COLD_AGRO_INDUSTRY: 240,
})

INVALID_SURFACE = 'Surface conditionnée invalide'


def compute_energy_class(building_type, heating_load: float, cooling_load: float,
                         conditioned_surface: float) -> EnergyClassResult:
    """
    Calcule le BECTh et la classe énergétique A-E.

    Args:
        building_type: Typologie (membre, valeur ou nom)
        heating_load: Besoins de chauffage (kWh/an)
        cooling_load: Besoins de climatisation (kWh/an)
        conditioned_surface: Surface conditionnée (m²)

    Returns:
        EnergyClassResult (N/A si typologie non couverte ou surface <= 0)

    Raises:
        InvalidInputError: Typologie inconnue ou besoins négatifs
    """
    building_type = parse_enum(BuildingType, building_type, "Type de bâtiment")
    heating_load = validate_non_negative(heating_load, "Besoins de chauffage")
    cooling_load = validate_non_negative(cooling_load, "Besoins de climatisation")

    bands = BECTH_BANDS.get(building_type)
    if bands is None:
        return EnergyClassResult(
            becth=None,
            energy_class=ClassificationGrade.NOT_APPLICABLE,
            class_description='Classement énergétique non disponible pour ce type de bâtiment',
            is_applicable=False,
        )

    if conditioned_surface is None or conditioned_surface <= 0:
        return EnergyClassResult(
            becth=None,
            energy_class=ClassificationGrade.NOT_APPLICABLE,
            class_description=INVALID_SURFACE,
            is_applicable=False,
        )

    becth = (heating_load + cooling_load) / conditioned_surface
    grade, description = classify(becth, bands)

    logger.info(f"📊 BECTh {building_type.value} : {becth:.1f} kWh/m².an → classe {grade.value}")

    return EnergyClassResult(
        becth=round(becth, 2),
        energy_class=grade,
        class_description=description,
        is_applicable=True,
    )


def compute_energy_performance_index(building_type, electricity_consumption_kwh: float,
                                     gas_consumption_kwh: float,
                                     conditioned_surface: float) -> EnergyPerformanceResult:
    """
    Compare l'intensité énergétique du site à la référence de son secteur.

    Indice = (électricité + gaz) / surface / intensité de référence.
    """
    building_type = parse_enum(BuildingType, building_type, "Type de bâtiment")
    electricity = validate_non_negative(electricity_consumption_kwh, "Consommation électrique")
    gas = validate_non_negative(gas_consumption_kwh, "Consommation gaz")

    not_applicable = dict(
        total_annual_energy_kwh=0.0,
        site_intensity=0.0,
        reference_intensity=None,
        performance_index=None,
        performance_class=ClassificationGrade.NOT_APPLICABLE,
        is_applicable=False,
    )

    if conditioned_surface is None or conditioned_surface <= 0:
        return EnergyPerformanceResult(class_description=INVALID_SURFACE, **not_applicable)

    reference = REFERENCE_INTENSITIES.get(building_type)
    if reference is None:
        return EnergyPerformanceResult(
            class_description='Intensité de référence non disponible pour ce type de bâtiment',
            **not_applicable
        )

    total = electricity + gas
    site_intensity = total / conditioned_surface
    index = site_intensity / reference
    grade, description = classify(index, PERFORMANCE_INDEX_BANDS)

    logger.debug(
        f"Intensité site {site_intensity:.1f} kWh/m².an, référence {reference} → indice {index:.2f}"
    )

    return EnergyPerformanceResult(
        total_annual_energy_kwh=round(total, 2),
        site_intensity=round(site_intensity, 2),
        reference_intensity=float(reference),
        performance_index=round(index, 2),
        performance_class=grade,
        class_description=description,
        is_applicable=True,
    )
