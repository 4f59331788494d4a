"""
Contrats de données pour le module energy_audit.
Classements énergie/carbone, émissions et besoins d'eau chaude sanitaire.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from core.enums import ClassificationGrade, DomesticHotWaterType, EmissionUnit, EnergyUnit


@dataclass(frozen=True)
class CarbonClassResult:
    """
    Classement carbone d'un bâtiment.

    Attributes:
        intensity: Intensité carbone (kg CO₂/m².an), None si non applicable
        carbon_class: Classe A-E ou N/A
        class_description: Libellé de la classe ou motif de non-applicabilité
        is_applicable: False si type non supporté ou surface invalide
    """
    intensity: Optional[float]
    carbon_class: ClassificationGrade
    class_description: str
    is_applicable: bool
    unit: EmissionUnit = EmissionUnit.KG_CO2_PER_M2_YEAR

    def to_dict(self) -> Dict[str, Any]:
        return {
            'intensity': self.intensity,
            'unit': self.unit.value,
            'carbon_class': self.carbon_class.value,
            'class_description': self.class_description,
            'is_applicable': self.is_applicable,
        }


@dataclass(frozen=True)
class EnergyClassResult:
    """
    Classement BECTh : besoins de chauffage + climatisation rapportés à la surface.
    """
    becth: Optional[float]
    energy_class: ClassificationGrade
    class_description: str
    is_applicable: bool
    unit: EnergyUnit = EnergyUnit.KWH_PER_M2_YEAR

    def to_dict(self) -> Dict[str, Any]:
        return {
            'becth': self.becth,
            'unit': self.unit.value,
            'energy_class': self.energy_class.value,
            'class_description': self.class_description,
            'is_applicable': self.is_applicable,
        }


@dataclass(frozen=True)
class EnergyPerformanceResult:
    """
    Indice de performance : intensité du site / intensité de référence du secteur.

    Attributes:
        total_annual_energy_kwh: Électricité + gaz (kWh/an)
        site_intensity: kWh/m².an du site
        reference_intensity: kWh/m².an de référence pour le type de bâtiment
        performance_index: Ratio site / référence (1.0 = dans la norme)
    """
    total_annual_energy_kwh: float
    site_intensity: float
    reference_intensity: Optional[float]
    performance_index: Optional[float]
    performance_class: ClassificationGrade
    class_description: str
    is_applicable: bool
    unit: EnergyUnit = EnergyUnit.KWH_PER_M2_YEAR

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_annual_energy_kwh': self.total_annual_energy_kwh,
            'site_intensity': self.site_intensity,
            'reference_intensity': self.reference_intensity,
            'performance_index': self.performance_index,
            'performance_class': self.performance_class.value,
            'class_description': self.class_description,
            'is_applicable': self.is_applicable,
            'unit': self.unit.value,
        }


@dataclass(frozen=True)
class EmissionsResult:
    co2_from_electricity_kg: float
    co2_from_gas_kg: float
    total_co2_kg: float
    total_co2_tons: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'co2_from_electricity_kg': self.co2_from_electricity_kg,
            'co2_from_gas_kg': self.co2_from_gas_kg,
            'total_co2_kg': self.total_co2_kg,
            'total_co2_tons': self.total_co2_tons,
        }


@dataclass(frozen=True)
class AvoidedEmissionsResult:
    """CO₂ évité par la production solaire et équivalents parlants."""
    annual_avoided_co2_kg: float
    horizon_years: int
    horizon_avoided_co2_tons: float
    equivalent_car_km: float
    equivalent_trees: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'annual_avoided_co2_kg': self.annual_avoided_co2_kg,
            'horizon_years': self.horizon_years,
            'horizon_avoided_co2_tons': self.horizon_avoided_co2_tons,
            'equivalent_car_km': self.equivalent_car_km,
            'equivalent_trees': self.equivalent_trees,
        }


@dataclass(frozen=True)
class DomesticHotWaterResult:
    """
    Énergie finale ECS.

    Attributes:
        system_type: Système de production
        useful_need_kwh_m2: Besoin utile (référence × facteur d'usage)
        per_square_kwh_m2: Énergie finale par m² après rendement du système
        annual_kwh: Énergie finale annuelle (0 si la surface n'est pas fournie)
    """
    system_type: DomesticHotWaterType
    useful_need_kwh_m2: float
    per_square_kwh_m2: float
    annual_kwh: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'system_type': self.system_type.value,
            'useful_need_kwh_m2': self.useful_need_kwh_m2,
            'per_square_kwh_m2': self.per_square_kwh_m2,
            'annual_kwh': self.annual_kwh,
        }
