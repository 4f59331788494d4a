"""
Émissions de CO₂ liées aux consommations d'électricité et de gaz.

Facteurs d'émission (kg CO₂/kWh) :
- Électricité réseau STEG : 0.512
- Gaz naturel : 0.202
"""

from dataclasses import dataclass
from typing import Optional

from core.validators import validate_non_negative, validate_positive
from energy_audit.contracts import AvoidedEmissionsResult, EmissionsResult


@dataclass(frozen=True)
class EmissionFactors:
    """Facteurs d'émission en kg CO₂ par kWh."""
    electricity: float = 0.512
    natural_gas: float = 0.202
    solar_pv: float = 0.0


DEFAULT_EMISSION_FACTORS = EmissionFactors()

CAR_KG_CO2_PER_KM = 0.12
TREE_KG_CO2_PER_YEAR = 25


def compute_co2_emissions(electricity_consumption_kwh: float, gas_consumption_kwh: float = 0.0,
                          factors: Optional[EmissionFactors] = None) -> EmissionsResult:
    """
    CO₂ annuel = E_élec × facteur_élec + E_gaz × facteur_gaz.

    Args:
        electricity_consumption_kwh: Consommation électrique (kWh/an)
        gas_consumption_kwh: Consommation de gaz (kWh/an)
        factors: Facteurs d'émission (défaut : STEG / gaz naturel)

    Raises:
        InvalidInputError: Consommation négative ou non numérique
    """
    factors = factors or DEFAULT_EMISSION_FACTORS
    electricity = validate_non_negative(electricity_consumption_kwh, "Consommation électrique")
    gas = validate_non_negative(gas_consumption_kwh, "Consommation gaz")

    co2_electricity = electricity * factors.electricity
    co2_gas = gas * factors.natural_gas
    total = co2_electricity + co2_gas

    return EmissionsResult(
        co2_from_electricity_kg=round(co2_electricity, 2),
        co2_from_gas_kg=round(co2_gas, 2),
        total_co2_kg=round(total, 2),
        total_co2_tons=round(total / 1000, 3),
    )


def compute_avoided_co2(annual_production_kwh: float, horizon_years: int = 25,
                        factors: Optional[EmissionFactors] = None) -> AvoidedEmissionsResult:
    """
    CO₂ évité en substituant la production solaire au réseau.

    Args:
        annual_production_kwh: Production solaire annuelle (kWh)
        horizon_years: Durée de vie considérée (ans)
        factors: Facteurs d'émission

    Returns:
        AvoidedEmissionsResult avec équivalents km voiture (120 g/km) et
        arbres (25 kg CO₂/an absorbés par arbre)
    """
    factors = factors or DEFAULT_EMISSION_FACTORS
    production = validate_non_negative(annual_production_kwh, "Production annuelle")
    validate_positive(horizon_years, "Horizon")

    annual = production * (factors.electricity - factors.solar_pv)
    over_horizon = annual * horizon_years

    return AvoidedEmissionsResult(
        annual_avoided_co2_kg=round(annual, 1),
        horizon_years=horizon_years,
        horizon_avoided_co2_tons=round(over_horizon / 1000, 2),
        equivalent_car_km=round(over_horizon / CAR_KG_CO2_PER_KM, 0),
        equivalent_trees=round(over_horizon / (TREE_KG_CO2_PER_YEAR * horizon_years), 0),
    )
