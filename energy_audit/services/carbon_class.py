"""
Classement carbone : intensité kg CO₂/m².an rapportée à une grille par typologie.
"""

import logging
from types import MappingProxyType

from core.enums import BuildingType, ClassificationGrade
from core.validators import parse_enum, validate_non_negative
from energy_audit.contracts import CarbonClassResult
from energy_audit.services.banding import build_bands, classify

logger = logging.getLogger(__name__)

CARBON_DESCRIPTIONS = (
    'Très faible empreinte carbone',
    'Bonne performance',
    'Niveau moyen',
    'Émissions élevées',
    'Très émissif',
)

GENERAL_BANDS = build_bands((15, 25, 40, 60), CARBON_DESCRIPTIONS)
CAFE_BANDS = build_bands((20, 30, 50, 75), CARBON_DESCRIPTIONS)
HOTEL_BANDS = build_bands((18, 30, 50, 70), CARBON_DESCRIPTIONS)
CLINIC_BANDS = build_bands((20, 35, 55, 80), CARBON_DESCRIPTIONS)
SCHOOL_BANDS = build_bands((12, 20, 30, 45), CARBON_DESCRIPTIONS)

CARBON_BANDS = MappingProxyType({
    BuildingType.OFFICE_ADMIN_BANK: GENERAL_BANDS,
    BuildingType.PHARMACY: GENERAL_BANDS,
    BuildingType.CAFE_RESTAURANT: CAFE_BANDS,
    BuildingType.BEAUTY_CENTER: CAFE_BANDS,
    BuildingType.HOTEL_GUESTHOUSE: HOTEL_BANDS,
    BuildingType.CLINIC_MEDICAL: CLINIC_BANDS,
    BuildingType.SCHOOL_TRAINING: SCHOOL_BANDS,
})


def compute_carbon_class(building_type, total_co2_kg: float, conditioned_surface: float) -> CarbonClassResult:
    """
    Classe un bâtiment selon son intensité carbone.

    Le classement est un enrichissement facultatif : un type non couvert par
    les grilles ou une surface nulle donne N/A plutôt qu'une exception.

    Args:
        building_type: Typologie (membre, valeur ou nom)
        total_co2_kg: Émissions annuelles déjà calculées (kg CO₂/an)
        conditioned_surface: Surface conditionnée (m²)

    Raises:
        InvalidInputError: Typologie inconnue ou émissions négatives
    """
    building_type = parse_enum(BuildingType, building_type, "Type de bâtiment")
    total_co2_kg = validate_non_negative(total_co2_kg, "Émissions CO₂")

    bands = CARBON_BANDS.get(building_type)
    if bands is None:
        return CarbonClassResult(
            intensity=None,
            carbon_class=ClassificationGrade.NOT_APPLICABLE,
            class_description='Type de bâtiment non supporté pour le classement carbone',
            is_applicable=False,
        )

    if conditioned_surface is None or conditioned_surface <= 0:
        logger.warning(f"⚠️ Surface conditionnée invalide ({conditioned_surface}) pour {building_type.value}")
        return CarbonClassResult(
            intensity=None,
            carbon_class=ClassificationGrade.NOT_APPLICABLE,
            class_description='Surface conditionnée invalide',
            is_applicable=False,
        )

    intensity = total_co2_kg / conditioned_surface
    grade, description = classify(intensity, bands)

    return CarbonClassResult(
        intensity=round(intensity, 2),
        carbon_class=grade,
        class_description=description,
        is_applicable=True,
    )

