"""
Calcul des grandeurs communes du projet : puissance, CAPEX, production,
économies brutes et OPEX.
"""

import logging

from core.validators import validate_positive, validate_rate
from financial.constants import MONTHS_PER_YEAR, ProjectParameters
from financial.contracts import InstallationSize, ProjectCalculation, ProjectInput

logger = logging.getLogger(__name__)


def calculate_project(project_input: ProjectInput, parameters: ProjectParameters) -> ProjectCalculation:
    """
    Calcule les fondamentaux partagés par les quatre solutions.

    - Puissance donnée : CAPEX = kWc × coût par kWc
    - Budget donné : kWc = budget / coût par kWc, CAPEX = budget

    Raises:
        InvalidInputError: Paramètres projet invalides
    """
    cost_per_kwp = validate_positive(parameters.cost_per_kwp_dt, "Coût par kWc")
    specific_yield = validate_positive(parameters.yield_kwh_per_kwp_year, "Productible annuel")
    price = validate_positive(parameters.electricity_price_dt_per_kwh, "Prix de l'électricité")
    opex_rate = validate_rate(parameters.opex_rate_annual, "Taux d'OPEX annuel")

    if isinstance(project_input.sizing, InstallationSize):
        size_kwp = project_input.sizing.kwp
        capex_dt = size_kwp * cost_per_kwp
    else:
        capex_dt = project_input.sizing.amount_dt
        size_kwp = capex_dt / cost_per_kwp

    annual_production_kwh = size_kwp * specific_yield
    annual_gross_savings_dt = annual_production_kwh * price
    annual_opex_dt = capex_dt * opex_rate

    logger.debug(
        f"Projet {project_input.location.value} : {size_kwp:.2f} kWc, CAPEX {capex_dt:.0f} DT, "
        f"{annual_production_kwh:.0f} kWh/an"
    )

    return ProjectCalculation(
        size_kwp=size_kwp,
        capex_dt=capex_dt,
        annual_production_kwh=annual_production_kwh,
        annual_gross_savings_dt=annual_gross_savings_dt,
        monthly_gross_savings_dt=annual_gross_savings_dt / MONTHS_PER_YEAR,
        annual_opex_dt=annual_opex_dt,
        monthly_opex_dt=annual_opex_dt / MONTHS_PER_YEAR,
    )
