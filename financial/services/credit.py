"""
Crédit bancaire amortissable à mensualités constantes sur 84 mois.
"""

from core.validators import validate_rate, validate_self_financing_rate
from financial.constants import DURATION_MONTHS, DURATION_YEARS, MONTHS_PER_YEAR, CreditParameters
from financial.contracts import CreditSolution, FinancingSolutionType, ProjectCalculation
from financial.services.annuity import annuity_payment


def calculate_credit_solution(project_calculation: ProjectCalculation, parameters: CreditParameters) -> CreditSolution:
    """
    Calcule la solution crédit.

    capital financé = CAPEX × (1 - taux d'autofinancement)
    mensualité = C × r / (1 - (1 + r)^-84), r = taux annuel / 12 ; C / 84 si r = 0

    Raises:
        InvalidInputError: Taux hors bornes
    """
    annual_rate = validate_rate(parameters.credit_annual_rate, "Taux annuel du crédit")
    self_financing_rate = validate_self_financing_rate(parameters.self_financing_rate, "crédit")

    capex_dt = project_calculation.capex_dt
    self_financing_dt = capex_dt * self_financing_rate
    financed_principal_dt = capex_dt - self_financing_dt
    monthly_rate = annual_rate / MONTHS_PER_YEAR

    monthly_payment = annuity_payment(financed_principal_dt, monthly_rate, DURATION_MONTHS)
    monthly_opex = project_calculation.monthly_opex_dt
    total_monthly_cost = monthly_payment + monthly_opex

    return CreditSolution(
        type=FinancingSolutionType.CREDIT,
        initial_investment=self_financing_dt,
        monthly_payment=monthly_payment,
        monthly_opex=monthly_opex,
        total_monthly_cost=total_monthly_cost,
        monthly_cashflow=project_calculation.monthly_gross_savings_dt - total_monthly_cost,
        duration_months=DURATION_MONTHS,
        duration_years=DURATION_YEARS,
        credit_monthly_rate=monthly_rate,
        credit_annual_rate=annual_rate,
        self_financing_dt=self_financing_dt,
        financed_principal_dt=financed_principal_dt,
    )
