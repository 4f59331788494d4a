"""
Crédit-bail (leasing) avec premier loyer majoré et option de rachat.
"""

from core.exceptions import InvalidInputError
from core.validators import validate_non_negative, validate_rate, validate_self_financing_rate
from financial.constants import DURATION_MONTHS, DURATION_YEARS, MONTHS_PER_YEAR, LeasingParameters
from financial.contracts import FinancingSolutionType, LeasingSolution, ProjectCalculation
from financial.services.annuity import annuity_payment


def calculate_leasing_solution(project_calculation: ProjectCalculation, parameters: LeasingParameters) -> LeasingSolution:
    """
    Calcule la solution leasing.

    apport = CAPEX × taux d'autofinancement
    valeur résiduelle = CAPEX × taux résiduel (payée au rachat, fin de contrat)
    loyer = annuité sur CAPEX - apport - valeur résiduelle au taux de leasing
    OPEX = OPEX de base × multiplicateur leasing

    Raises:
        InvalidInputError: Taux hors bornes, apport + valeur résiduelle > CAPEX
    """
    annual_rate = validate_rate(parameters.leasing_annual_rate, "Taux annuel du leasing")
    residual_rate = validate_rate(parameters.leasing_residual_value_rate, "Taux de valeur résiduelle")
    opex_multiplier = validate_non_negative(parameters.leasing_opex_multiplier, "Multiplicateur d'OPEX leasing")
    self_financing_rate = validate_self_financing_rate(parameters.self_financing_rate, "leasing")

    if self_financing_rate + residual_rate > 1:
        raise InvalidInputError(
            f"Apport ({self_financing_rate:.0%}) et valeur résiduelle ({residual_rate:.0%}) "
            f"dépassent le CAPEX"
        )

    capex_dt = project_calculation.capex_dt
    down_payment_dt = capex_dt * self_financing_rate
    residual_value_dt = capex_dt * residual_rate
    monthly_rate = annual_rate / MONTHS_PER_YEAR

    monthly_payment = annuity_payment(capex_dt - down_payment_dt - residual_value_dt, monthly_rate, DURATION_MONTHS)
    monthly_opex = project_calculation.monthly_opex_dt * opex_multiplier
    total_monthly_cost = monthly_payment + monthly_opex

    return LeasingSolution(
        type=FinancingSolutionType.LEASING,
        initial_investment=down_payment_dt,
        monthly_payment=monthly_payment,
        monthly_opex=monthly_opex,
        total_monthly_cost=total_monthly_cost,
        monthly_cashflow=project_calculation.monthly_gross_savings_dt - total_monthly_cost,
        duration_months=DURATION_MONTHS,
        duration_years=DURATION_YEARS,
        leasing_monthly_rate=monthly_rate,
        leasing_annual_rate=annual_rate,
        leasing_down_payment_dt=down_payment_dt,
        leasing_residual_value_dt=residual_value_dt,
        leasing_residual_value_rate=residual_rate,
    )
