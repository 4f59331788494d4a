"""
Énumérations partagées entre les apps (gouvernorats, bâtiments, classes).
"""

from enum import Enum


class Governorate(Enum):
    """Gouvernorats tunisiens."""
    TUNIS = "Tunis"
    ARIANA = "Ariana"
    BEN_AROUS = "Ben Arous"
    MANOUBA = "Manouba"
    BIZERTE = "Bizerte"
    BEJA = "Béja"
    JENDOUBA = "Jendouba"
    KAIROUAN = "Kairouan"
    KASSERINE = "Kasserine"
    MEDENINE = "Médenine"
    MONASTIR = "Monastir"
    NABEUL = "Nabeul"
    SFAX = "Sfax"
    SOUSSE = "Sousse"
    TATAOUINE = "Tataouine"
    TOZEUR = "Tozeur"
    ZAGHOUAN = "Zaghouan"
    SILIANA = "Siliana"
    KEF = "Le Kef"
    MAHDIA = "Mahdia"
    SIDI_BOUZID = "Sidi Bouzid"
    KEBILI = "Kébili"
    GABES = "Gabès"
    GAFSA = "Gafsa"


class BuildingType(Enum):
    """Typologies de bâtiments tertiaires et industriels."""
    CAFE_RESTAURANT = "Café / Restaurant"
    BEAUTY_CENTER = "Centre esthétique / Spa"
    HOTEL_GUESTHOUSE = "Hôtel"
    CLINIC_MEDICAL = "Clinique / Centre médical"
    OFFICE_ADMIN_BANK = "Bureau / Administration / Banque"
    LIGHT_WORKSHOP = "Atelier léger / Artisanat / Menuiserie"
    HEAVY_FACTORY = "Usine lourde / Mécanique / Métallurgie"
    TEXTILE_PACKAGING = "Industrie textile / Emballage"
    FOOD_INDUSTRY = "Industrie alimentaire"
    PLASTIC_INJECTION = "Industrie plastique / Injection"
    COLD_AGRO_INDUSTRY = "Industrie agroalimentaire réfrigérée"
    SCHOOL_TRAINING = "École / Centre de formation"
    SERVICE = "Service Tertiaire"
    PHARMACY = "Pharmacie"


class ClimateZone(Enum):
    """Zones climatiques tunisiennes."""
    NORTH = "Nord"
    CENTER = "Centre"
    SOUTH = "Sud"


class ClassificationGrade(Enum):
    """Classes énergétiques et carbone."""
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    NOT_APPLICABLE = "N/A"


class DomesticHotWaterType(Enum):
    """Systèmes de production d'eau chaude sanitaire (ECS)."""
    NONE = "Aucune production ECS"
    ELECTRIC = "Chauffe-eau électrique"
    GAS = "Chaudière gaz"
    SOLAR = "Chauffe-eau solaire"
    HEAT_PUMP = "Pompe à chaleur ECS"


class EnergyUnit(Enum):
    KWH_PER_M2_YEAR = "kWh/m².an"
    KWH_PER_YEAR = "kWh/an"


class EmissionUnit(Enum):
    KG_CO2_PER_YEAR = "kg CO₂/an"
    TONS_CO2_PER_YEAR = "t CO₂/an"
    KG_CO2_PER_M2_YEAR = "kg CO₂/m².an"
