"""
Coefficients mensuels d'extrapolation de la consommation.

Consommation estimée(m) = Base × K_zone(m) × K_bâtiment(m)

- K_zone : saisonnalité climatique, dérivée des pondérations de la zone
  (poids des saisons, facteurs de chauffage et de climatisation)
- K_bâtiment : rythme d'activité du type de bâtiment (vacances scolaires,
  saison touristique, fermeture d'août...)
"""

from types import MappingProxyType

from core.enums import BuildingType, ClimateZone
from core.exceptions import InvalidInputError
from core.validators import validate_month
from weather.locations import get_climate_weights

# Mois de chaque saison
WINTER_MONTHS = (12, 1, 2)
SUMMER_MONTHS = (6, 7, 8, 9)
MID_SEASON_MONTHS = (3, 4, 5, 10, 11)

# Part de l'écart saisonnier répercutée sur la consommation électrique
CLIMATE_SENSITIVITY = 0.3


def climatic_profile(climate_zone: ClimateZone):
    """
    12 coefficients climatiques (janvier → décembre) d'une zone.

    Niveau d'une saison = poids de la saison ramené au mois × 12, multiplié
    par le facteur de chauffage (hiver) ou de climatisation (été).
    K_zone(m) = 1 + sensibilité × (niveau - 1)
    """
    weights = get_climate_weights(climate_zone)
    winter = weights.winter_weight / len(WINTER_MONTHS) * 12 * weights.heating_factor
    summer = weights.summer_weight / len(SUMMER_MONTHS) * 12 * weights.cooling_factor
    mid_season = weights.mid_season_weight / len(MID_SEASON_MONTHS) * 12

    profile = []
    for month in range(1, 13):
        if month in WINTER_MONTHS:
            level = winter
        elif month in SUMMER_MONTHS:
            level = summer
        else:
            level = mid_season
        profile.append(round(1 + CLIMATE_SENSITIVITY * (level - 1), 4))
    return tuple(profile)


CLIMATIC_COEFFICIENTS = MappingProxyType({zone: climatic_profile(zone) for zone in ClimateZone})

BUILDING_USAGE_COEFFICIENTS = MappingProxyType({
    BuildingType.CAFE_RESTAURANT: (0.90, 0.88, 0.95, 1.00, 1.05, 1.10, 1.15, 1.15, 1.05, 0.98, 0.92, 0.97),
    BuildingType.BEAUTY_CENTER: (0.92, 0.92, 0.98, 1.00, 1.05, 1.10, 1.05, 0.98, 1.02, 1.00, 0.95, 1.03),
    BuildingType.HOTEL_GUESTHOUSE: (0.70, 0.72, 0.85, 0.95, 1.05, 1.20, 1.35, 1.38, 1.15, 0.95, 0.75, 0.80),
    BuildingType.CLINIC_MEDICAL: (1.00, 1.00, 1.00, 1.00, 1.00, 1.02, 1.02, 1.00, 1.00, 1.00, 0.98, 0.98),
    BuildingType.OFFICE_ADMIN_BANK: (1.02, 1.02, 1.00, 1.00, 1.00, 1.00, 0.95, 0.80, 1.00, 1.02, 1.02, 0.97),
    BuildingType.LIGHT_WORKSHOP: (1.00, 1.02, 1.02, 1.00, 1.00, 0.98, 0.95, 0.85, 1.00, 1.02, 1.03, 0.98),
    BuildingType.HEAVY_FACTORY: (1.00, 1.00, 1.02, 1.02, 1.00, 1.00, 0.98, 0.90, 1.00, 1.02, 1.02, 0.98),
    BuildingType.TEXTILE_PACKAGING: (1.00, 1.02, 1.03, 1.02, 1.00, 0.98, 0.95, 0.85, 1.00, 1.03, 1.05, 1.00),
    BuildingType.FOOD_INDUSTRY: (0.95, 0.95, 1.00, 1.00, 1.02, 1.05, 1.05, 1.02, 1.00, 1.00, 0.98, 1.02),
    BuildingType.PLASTIC_INJECTION: (1.00, 1.00, 1.02, 1.02, 1.00, 1.00, 0.97, 0.88, 1.00, 1.02, 1.02, 1.00),
    BuildingType.COLD_AGRO_INDUSTRY: (0.85, 0.85, 0.92, 0.98, 1.05, 1.15, 1.22, 1.22, 1.10, 0.98, 0.88, 0.85),
    BuildingType.SCHOOL_TRAINING: (1.05, 1.05, 1.00, 0.92, 1.00, 0.85, 0.40, 0.35, 0.90, 1.05, 1.08, 0.95),
    BuildingType.SERVICE: (1.00, 1.00, 1.00, 1.00, 1.00, 1.00, 0.95, 0.88, 1.00, 1.00, 1.00, 0.98),
    BuildingType.PHARMACY: (1.00, 1.00, 1.00, 0.98, 1.00, 1.02, 1.03, 1.00, 1.00, 1.00, 1.00, 1.00),
})


def get_climatic_coefficient(climate_zone: ClimateZone, month: int) -> float:
    """
    Raises:
        InvalidInputError: Zone inconnue ou mois hors 1-12
    """
    month = validate_month(month)
    try:
        return CLIMATIC_COEFFICIENTS[climate_zone][month - 1]
    except KeyError:
        raise InvalidInputError(f"Zone climatique inconnue : {climate_zone!r}") from None


def get_building_coefficient(building_type: BuildingType, month: int) -> float:
    """
    Raises:
        InvalidInputError: Type de bâtiment inconnu ou mois hors 1-12
    """
    month = validate_month(month)
    try:
        return BUILDING_USAGE_COEFFICIENTS[building_type][month - 1]
    except KeyError:
        raise InvalidInputError(f"Type de bâtiment inconnu : {building_type!r}") from None


def get_effective_coefficient(building_type: BuildingType, climate_zone: ClimateZone, month: int) -> float:
    """Coefficient effectif K_zone(m) × K_bâtiment(m)."""
    return get_climatic_coefficient(climate_zone, month) * get_building_coefficient(building_type, month)
