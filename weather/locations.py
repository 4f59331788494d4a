"""
Données géographiques et climatiques des gouvernorats tunisiens.

Tables statiques utilisées :
- pour interroger PVGIS (coordonnées du centre de chaque gouvernorat)
- comme repli quand PVGIS est indisponible (productible annuel, profil saisonnier)
- pour les pondérations climatiques (zone Nord / Centre / Sud)
"""

from types import MappingProxyType

import numpy as np

from core.enums import ClimateZone, Governorate
from core.exceptions import InvalidLocationError
from weather.contracts import ClimateWeights, Coordinates


# Centre approximatif de chaque gouvernorat
GOVERNORATE_COORDINATES = MappingProxyType({
    Governorate.TUNIS: Coordinates(36.8065, 10.1815),
    Governorate.ARIANA: Coordinates(36.8625, 10.1956),
    Governorate.BEN_AROUS: Coordinates(36.7545, 10.2220),
    Governorate.MANOUBA: Coordinates(36.8080, 10.0970),
    Governorate.BIZERTE: Coordinates(37.2744, 9.8739),
    Governorate.BEJA: Coordinates(36.7256, 9.1817),
    Governorate.JENDOUBA: Coordinates(36.5011, 8.7802),
    Governorate.KAIROUAN: Coordinates(35.6781, 10.0963),
    Governorate.KASSERINE: Coordinates(35.1676, 8.8365),
    Governorate.MEDENINE: Coordinates(33.3549, 10.5055),
    Governorate.MONASTIR: Coordinates(35.7833, 10.8333),
    Governorate.NABEUL: Coordinates(36.4513, 10.7357),
    Governorate.SFAX: Coordinates(34.7406, 10.7603),
    Governorate.SOUSSE: Coordinates(35.8256, 10.6369),
    Governorate.TATAOUINE: Coordinates(32.9297, 10.4518),
    Governorate.TOZEUR: Coordinates(33.9197, 8.1339),
    Governorate.ZAGHOUAN: Coordinates(36.4029, 10.1429),
    Governorate.SILIANA: Coordinates(36.0843, 9.3708),
    Governorate.KEF: Coordinates(36.1742, 8.7147),
    Governorate.MAHDIA: Coordinates(35.5047, 11.0782),
    Governorate.SIDI_BOUZID: Coordinates(35.0382, 9.4849),
    Governorate.KEBILI: Coordinates(33.7044, 8.9690),
    Governorate.GABES: Coordinates(33.8815, 10.0982),
    Governorate.GAFSA: Coordinates(34.4250, 8.7842),
})

DEFAULT_YIELD_KWH_PER_KWP = 1680  # Moyenne tunisienne

# Productible annuel de repli (kWh/kWc/an)
LOCATION_YIELDS = MappingProxyType({
    Governorate.TUNIS: 1650,
    Governorate.ARIANA: 1650,
    Governorate.BEN_AROUS: 1655,
    Governorate.MANOUBA: 1645,
    Governorate.BIZERTE: 1630,
    Governorate.BEJA: 1640,
    Governorate.JENDOUBA: 1630,
    Governorate.KAIROUAN: 1680,
    Governorate.KASSERINE: 1690,
    Governorate.MEDENINE: 1740,
    Governorate.MONASTIR: 1700,
    Governorate.NABEUL: 1660,
    Governorate.SFAX: 1720,
    Governorate.SOUSSE: 1700,
    Governorate.TATAOUINE: 1750,
    Governorate.TOZEUR: 1760,
    Governorate.ZAGHOUAN: 1665,
    Governorate.SILIANA: 1670,
    Governorate.KEF: 1665,
    Governorate.MAHDIA: 1710,
    Governorate.SIDI_BOUZID: 1700,
    Governorate.KEBILI: 1770,
    Governorate.GABES: 1750,
    Governorate.GAFSA: 1730,
})

# Poids mensuels de production (plan incliné à 30°, plein sud), normalisés par seasonal_profile()
SEASONAL_PRODUCTION_WEIGHTS = (110, 120, 150, 160, 175, 180, 190, 180, 155, 135, 110, 100)

GOVERNORATE_CLIMATE_ZONES = MappingProxyType({
    Governorate.TUNIS: ClimateZone.NORTH,
    Governorate.ARIANA: ClimateZone.NORTH,
    Governorate.BEN_AROUS: ClimateZone.NORTH,
    Governorate.MANOUBA: ClimateZone.NORTH,
    Governorate.BIZERTE: ClimateZone.NORTH,
    Governorate.BEJA: ClimateZone.NORTH,
    Governorate.JENDOUBA: ClimateZone.NORTH,
    Governorate.NABEUL: ClimateZone.NORTH,
    Governorate.ZAGHOUAN: ClimateZone.NORTH,
    Governorate.SILIANA: ClimateZone.NORTH,
    Governorate.KEF: ClimateZone.NORTH,
    Governorate.KAIROUAN: ClimateZone.CENTER,
    Governorate.KASSERINE: ClimateZone.CENTER,
    Governorate.SIDI_BOUZID: ClimateZone.CENTER,
    Governorate.SOUSSE: ClimateZone.CENTER,
    Governorate.MONASTIR: ClimateZone.CENTER,
    Governorate.MAHDIA: ClimateZone.CENTER,
    Governorate.SFAX: ClimateZone.CENTER,
    Governorate.GABES: ClimateZone.SOUTH,
    Governorate.MEDENINE: ClimateZone.SOUTH,
    Governorate.TATAOUINE: ClimateZone.SOUTH,
    Governorate.GAFSA: ClimateZone.SOUTH,
    Governorate.TOZEUR: ClimateZone.SOUTH,
    Governorate.KEBILI: ClimateZone.SOUTH,
})

CLIMATE_FACTORS = MappingProxyType({
    ClimateZone.NORTH: ClimateWeights(
        heating_factor=0.95,
        cooling_factor=1.05,
        winter_weight=0.3,
        summer_weight=0.5,
        mid_season_weight=0.2,
    ),
    ClimateZone.CENTER: ClimateWeights(
        heating_factor=1.1,
        cooling_factor=0.95,
        winter_weight=0.4,
        summer_weight=0.4,
        mid_season_weight=0.2,
    ),
    ClimateZone.SOUTH: ClimateWeights(
        heating_factor=0.9,
        cooling_factor=1.1,
        winter_weight=0.2,
        summer_weight=0.55,
        mid_season_weight=0.25,
    ),
})


def resolve_governorate(location):
    """
    Convertit une clé de localisation (membre, libellé ou nom) en Governorate.

    Raises:
        InvalidLocationError: Si la localisation est inconnue
    """
    if isinstance(location, Governorate):
        return location
    for governorate in Governorate:
        if location == governorate.value or location == governorate.name:
            return governorate
    raise InvalidLocationError(location)


def get_governorate_coordinates(location) -> Coordinates:
    """Coordonnées (latitude, longitude) du centre du gouvernorat."""
    return GOVERNORATE_COORDINATES[resolve_governorate(location)]


def get_fallback_yield(location) -> float:
    """Productible annuel statique (kWh/kWc/an) d'un gouvernorat."""
    return float(LOCATION_YIELDS.get(resolve_governorate(location), DEFAULT_YIELD_KWH_PER_KWP))


def seasonal_profile():
    """
    Répartition mensuelle de la production annuelle (12 fractions, somme = 1).

    Plus élevée en été, plus faible en hiver.
    """
    weights = np.array(SEASONAL_PRODUCTION_WEIGHTS, dtype=float)
    return tuple((weights / weights.sum()).tolist())


def get_climate_zone(location) -> ClimateZone:
    """Zone climatique d'un gouvernorat."""
    return GOVERNORATE_CLIMATE_ZONES[resolve_governorate(location)]


def get_climate_weights(zone: ClimateZone) -> ClimateWeights:
    """Pondérations climatiques (chauffage, climatisation, saisons) d'une zone."""
    return CLIMATE_FACTORS[zone]
