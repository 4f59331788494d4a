from financial.constants import DURATION_MONTHS, DURATION_YEARS
from financial.contracts import CashSolution, FinancingSolutionType, ProjectCalculation


def calculate_cash_solution(project_calculation: ProjectCalculation) -> CashSolution:
    """Paiement comptant : le client paie tout le CAPEX, aucune mensualité."""
    monthly_opex = project_calculation.monthly_opex_dt

    return CashSolution(
        type=FinancingSolutionType.CASH,
        initial_investment=project_calculation.capex_dt,
        monthly_payment=0.0,
        monthly_opex=monthly_opex,
        total_monthly_cost=monthly_opex,
        monthly_cashflow=project_calculation.monthly_gross_savings_dt - monthly_opex,
        duration_months=DURATION_MONTHS,
        duration_years=DURATION_YEARS,
    )
