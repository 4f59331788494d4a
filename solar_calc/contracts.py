"""
Contrats de données pour le module solar_calc.
Définit les structures garanties par les calculs de l'audit solaire.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import pandas as pd

from core.enums import BuildingType, ClimateZone


@dataclass(frozen=True)
class MonthlyConsumptionData:
    """
    Consommation estimée d'un mois.

    Attributes:
        month: Numéro du mois (1-12)
        raw_consumption_kwh: Consommation mesurée (non nulle uniquement pour le mois de référence)
        estimated_consumption_kwh: Consommation extrapolée (kWh)
        climatic_coefficient: Coefficient climatique de la zone pour ce mois
        building_coefficient: Coefficient d'usage du type de bâtiment pour ce mois
        effective_coefficient: Produit des deux coefficients
    """
    month: int
    raw_consumption_kwh: float
    estimated_consumption_kwh: float
    climatic_coefficient: float
    building_coefficient: float
    effective_coefficient: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'month': self.month,
            'raw_consumption_kwh': self.raw_consumption_kwh,
            'estimated_consumption_kwh': self.estimated_consumption_kwh,
            'climatic_coefficient': self.climatic_coefficient,
            'building_coefficient': self.building_coefficient,
            'effective_coefficient': self.effective_coefficient,
        }


@dataclass(frozen=True)
class ConsumptionEstimate:
    """
    Courbe de consommation annuelle reconstruite à partir d'une seule facture.

    Attributes:
        reference_month: Mois de la facture mesurée
        measured_consumption_kwh: Consommation du mois de référence (kWh)
        base_consumption_kwh: Base énergétique normalisée (mesure / coefficient de référence)
        annual_consumption_kwh: Somme des 12 estimations
        building_type: Typologie du bâtiment
        climate_zone: Zone climatique
        monthly: 12 MonthlyConsumptionData
        measured_amount_dt: Montant facturé d'origine, si l'estimation part d'un montant
    """
    reference_month: int
    measured_consumption_kwh: float
    base_consumption_kwh: float
    annual_consumption_kwh: float
    building_type: BuildingType
    climate_zone: ClimateZone
    monthly: Tuple[MonthlyConsumptionData, ...]
    measured_amount_dt: Optional[float] = None

    @property
    def monthly_consumption_kwh(self) -> Tuple[float, ...]:
        return tuple(m.estimated_consumption_kwh for m in self.monthly)

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([m.to_dict() for m in self.monthly])

    def to_dict(self) -> Dict[str, Any]:
        return {
            'reference_month': self.reference_month,
            'measured_consumption_kwh': self.measured_consumption_kwh,
            'measured_amount_dt': self.measured_amount_dt,
            'base_consumption_kwh': self.base_consumption_kwh,
            'annual_consumption_kwh': self.annual_consumption_kwh,
            'building_type': self.building_type.value,
            'climate_zone': self.climate_zone.value,
            'monthly': [m.to_dict() for m in self.monthly],
        }


@dataclass(frozen=True)
class MonthlyPVProductionData:
    """
    Bilan mensuel production / consommation en net-metering.

    Attributes:
        month: Numéro du mois (1-12)
        raw_consumption_kwh: Consommation brute
        pv_production_kwh: Production PV du mois
        net_consumption_kwh: Consommation facturée après PV et crédit reporté (>= 0)
        energy_credit_kwh: Surplus reporté sur le mois suivant (>= 0)
    """
    month: int
    raw_consumption_kwh: float
    pv_production_kwh: float
    net_consumption_kwh: float
    energy_credit_kwh: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'month': self.month,
            'raw_consumption_kwh': self.raw_consumption_kwh,
            'pv_production_kwh': self.pv_production_kwh,
            'net_consumption_kwh': self.net_consumption_kwh,
            'energy_credit_kwh': self.energy_credit_kwh,
        }


@dataclass(frozen=True)
class PVProductionResult:
    """
    Résultat de la simulation de production PV.

    Attributes:
        installed_kwp: Puissance installée (kWc)
        yield_kwh_per_kwp: Productible annuel utilisé (kWh/kWc/an)
        annual_production_kwh: Production annuelle (kWh)
        annual_consumption_kwh: Consommation brute annuelle (kWh)
        annual_net_consumption_kwh: Consommation facturée annuelle (kWh)
        unused_credit_kwh: Crédit restant après décembre, perdu (non remboursé)
        coverage_rate_pct: Production / consommation (%)
        monthly: 12 MonthlyPVProductionData
    """
    installed_kwp: float
    yield_kwh_per_kwp: float
    annual_production_kwh: float
    annual_consumption_kwh: float
    annual_net_consumption_kwh: float
    unused_credit_kwh: float
    coverage_rate_pct: float
    monthly: Tuple[MonthlyPVProductionData, ...]

    @property
    def monthly_net_consumption_kwh(self) -> Tuple[float, ...]:
        return tuple(m.net_consumption_kwh for m in self.monthly)

    @property
    def monthly_raw_consumption_kwh(self) -> Tuple[float, ...]:
        return tuple(m.raw_consumption_kwh for m in self.monthly)

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([m.to_dict() for m in self.monthly])

    def to_dict(self) -> Dict[str, Any]:
        return {
            'installed_kwp': self.installed_kwp,
            'yield_kwh_per_kwp': self.yield_kwh_per_kwp,
            'annual_production_kwh': self.annual_production_kwh,
            'annual_consumption_kwh': self.annual_consumption_kwh,
            'annual_net_consumption_kwh': self.annual_net_consumption_kwh,
            'unused_credit_kwh': self.unused_credit_kwh,
            'coverage_rate_pct': self.coverage_rate_pct,
            'monthly': [m.to_dict() for m in self.monthly],
        }


@dataclass(frozen=True)
class SolarAuditResult:
    """
    Résultat complet de l'audit solaire : consommation → production → économie.

    ``economics`` est un EconomicAnalysisResult (financial.contracts),
    ``avoided_emissions`` un AvoidedEmissionsResult (energy_audit.contracts).
    """
    location: str
    yield_source: str
    consumption: ConsumptionEstimate
    production: PVProductionResult
    economics: Any
    avoided_emissions: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'location': self.location,
            'yield_source': self.yield_source,
            'consumption': self.consumption.to_dict(),
            'production': self.production.to_dict(),
            'economics': self.economics.to_dict(),
            'avoided_emissions': self.avoided_emissions.to_dict() if self.avoided_emissions else None,
        }
