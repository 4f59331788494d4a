"""
Offre ESCO (tiers-investissement).

L'ESCO finance 100% du CAPEX et se rémunère par une redevance mensuelle fixe
sur 84 mois, calculée pour atteindre son TRI cible. Quand l'OPEX est inclus,
l'ESCO l'assume et la redevance couvre aussi sa valeur actuelle.
"""

import logging

from core.validators import validate_positive, validate_target_irr
from financial.constants import DURATION_MONTHS, DURATION_YEARS, MONTHS_PER_YEAR, EscoParameters
from financial.contracts import EscoSolution, FinancingSolutionType, ProjectCalculation
from financial.services.annuity import annuity_payment, annuity_present_value

logger = logging.getLogger(__name__)


def monthly_rate_from_annual(annual_rate: float) -> float:
    """Taux mensuel équivalent : (1 + a)^(1/12) - 1."""
    return (1 + annual_rate) ** (1 / MONTHS_PER_YEAR) - 1


def calculate_esco_solution(project_calculation: ProjectCalculation, parameters: EscoParameters) -> EscoSolution:
    """
    Calcule la redevance ESCO et la viabilité de l'offre pour le client.

    L'offre est viable si le client garde un cashflow mensuel strictement
    positif. Sinon le résultat est tout de même complet, avec
    is_viable = False et un message dans viability_error.

    Raises:
        InvalidInputError: TRI cible hors bornes, coût par kWc ESCO invalide
    """
    target_irr_annual = validate_target_irr(parameters.esco_target_irr_annual)
    target_irr_monthly = monthly_rate_from_annual(target_irr_annual)

    if parameters.esco_cost_per_kwp_dt is not None:
        cost_per_kwp = validate_positive(parameters.esco_cost_per_kwp_dt, "Coût par kWc ESCO")
        capex_dt = project_calculation.size_kwp * cost_per_kwp
    else:
        capex_dt = project_calculation.capex_dt

    base_monthly_opex = project_calculation.monthly_opex_dt
    amount_to_recover = capex_dt
    if parameters.esco_opex_included:
        amount_to_recover += annuity_present_value(base_monthly_opex, target_irr_monthly, DURATION_MONTHS)

    service_fee = annuity_payment(amount_to_recover, target_irr_monthly, DURATION_MONTHS)
    client_opex = 0.0 if parameters.esco_opex_included else base_monthly_opex
    total_monthly_cost = service_fee + client_opex
    savings = project_calculation.monthly_gross_savings_dt
    monthly_cashflow = savings - total_monthly_cost

    is_viable = monthly_cashflow > 0
    viability_error = None
    if not is_viable:
        opex_part = '' if parameters.esco_opex_included else f" + OPEX {client_opex:.2f} DT"
        viability_error = (
            f"La redevance ESCO ({service_fee:.2f} DT{opex_part}) "
            f"dépasse les économies mensuelles ({savings:.2f} DT) : "
            f"offre non viable pour ce projet au TRI cible de {target_irr_annual:.0%}."
        )
        logger.warning(f"⚠️ {viability_error}")

    return EscoSolution(
        type=FinancingSolutionType.ESCO,
        initial_investment=0.0,
        monthly_payment=service_fee,
        monthly_opex=client_opex,
        total_monthly_cost=total_monthly_cost,
        monthly_cashflow=monthly_cashflow,
        duration_months=DURATION_MONTHS,
        duration_years=DURATION_YEARS,
        esco_target_irr_monthly=target_irr_monthly,
        esco_target_irr_annual=target_irr_annual,
        esco_opex_included=parameters.esco_opex_included,
        esco_capex_dt=capex_dt,
        is_viable=is_viable,
        viability_error=viability_error,
    )
