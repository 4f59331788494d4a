"""
Simulation de la production PV mensuelle et du net-metering STEG.

Production(m) = P_PV × Productible(m)

Net-metering : le surplus d'un mois devient un crédit d'énergie imputé sur le
mois suivant. Le crédit non absorbé continue de rouler de mois en mois tant
qu'il reste positif ; le crédit restant après décembre est perdu (jamais
remboursé).
"""

import logging
from typing import Optional, Sequence

import numpy as np

from core.exceptions import InvalidInputError
from core.validators import validate_monthly_series, validate_positive
from solar_calc.contracts import MonthlyPVProductionData, PVProductionResult
from weather.locations import seasonal_profile

logger = logging.getLogger(__name__)


# ==============================================================================
# DIMENSIONNEMENT
# ==============================================================================

def size_from_budget(investment_amount_dt: float, cost_per_kwp_dt: float) -> float:
    """Puissance (kWc) finançable avec un budget donné."""
    amount = validate_positive(investment_amount_dt, "Montant d'investissement")
    cost = validate_positive(cost_per_kwp_dt, "Coût par kWc")
    return amount / cost


def size_from_consumption(annual_consumption_kwh: float, yield_kwh_per_kwp: float) -> float:
    """
    Puissance théorique couvrant la consommation annuelle : P = E_ann / productible.

    Arrondie à 0.01 kWc.
    """
    consumption = validate_positive(annual_consumption_kwh, "Consommation annuelle")
    specific_yield = validate_positive(yield_kwh_per_kwp, "Productible annuel")
    return round(consumption / specific_yield, 2)


def monthly_yield_profile(
    annual_yield_kwh_per_kwp: float,
    monthly_yield_kwh_per_kwp: Optional[Sequence[float]] = None,
) -> list:
    """
    Productible mensuel (kWh/kWc).

    Utilise les 12 valeurs PVGIS quand elles sont disponibles, sinon répartit
    le productible annuel selon le profil saisonnier statique.
    """
    if monthly_yield_kwh_per_kwp:
        return validate_monthly_series(monthly_yield_kwh_per_kwp, "Productible mensuel")
    annual = validate_positive(annual_yield_kwh_per_kwp, "Productible annuel")
    return [annual * share for share in seasonal_profile()]


# ==============================================================================
# NET-METERING
# ==============================================================================

def apply_net_metering(monthly_consumption_kwh: Sequence[float], monthly_production_kwh: Sequence[float]):
    """
    Applique le report de crédit d'énergie sur 12 mois.

    balance(m) = consommation(m) - production(m) - crédit(m-1)
        balance > 0 : facturée, crédit remis à zéro
        balance <= 0 : rien à facturer, |balance| reportée sur le mois suivant

    Returns:
        tuple: (liste de MonthlyPVProductionData, crédit restant après décembre)
    """
    consumption = validate_monthly_series(monthly_consumption_kwh, "Consommation mensuelle")
    production = validate_monthly_series(monthly_production_kwh, "Production mensuelle")

    rows = []
    carried_credit = 0.0
    for index in range(12):
        balance = consumption[index] - production[index] - carried_credit

        if balance > 0:
            billed = balance
            carried_credit = 0.0
        else:
            billed = 0.0
            carried_credit = -balance

        rows.append(MonthlyPVProductionData(
            month=index + 1,
            raw_consumption_kwh=round(consumption[index], 2),
            pv_production_kwh=round(production[index], 2),
            net_consumption_kwh=round(billed, 2),
            energy_credit_kwh=round(carried_credit, 2),
        ))

    return rows, carried_credit


# ==============================================================================
# SIMULATION
# ==============================================================================

def simulate_production(
    monthly_consumption_kwh: Sequence[float],
    annual_yield_kwh_per_kwp: float,
    installed_kwp: Optional[float] = None,
    investment_amount_dt: Optional[float] = None,
    cost_per_kwp_dt: Optional[float] = None,
    monthly_yield_kwh_per_kwp: Optional[Sequence[float]] = None,
) -> PVProductionResult:
    """
    Simule la production PV et le bilan net-metering sur une année.

    Dimensionnement, par ordre de priorité :
        1. installed_kwp fourni
        2. investment_amount_dt / cost_per_kwp_dt
        3. consommation annuelle / productible annuel

    Args:
        monthly_consumption_kwh: 12 consommations mensuelles brutes (kWh)
        annual_yield_kwh_per_kwp: Productible annuel (kWh/kWc/an)
        installed_kwp: Puissance imposée (kWc)
        investment_amount_dt: Budget d'investissement (DT)
        cost_per_kwp_dt: Coût par kWc, requis avec investment_amount_dt
        monthly_yield_kwh_per_kwp: 12 productibles mensuels PVGIS (optionnel)

    Returns:
        PVProductionResult

    Raises:
        InvalidInputError: Séries de longueur != 12, valeurs négatives, dimensionnement impossible
    """
    consumption = validate_monthly_series(monthly_consumption_kwh, "Consommation mensuelle")
    monthly_yield = monthly_yield_profile(annual_yield_kwh_per_kwp, monthly_yield_kwh_per_kwp)
    specific_yield = sum(monthly_yield)
    annual_consumption = sum(consumption)

    if installed_kwp is not None:
        kwp = validate_positive(installed_kwp, "Puissance installée")
    elif investment_amount_dt is not None:
        if cost_per_kwp_dt is None:
            raise InvalidInputError("Le coût par kWc est requis pour dimensionner à partir d'un budget")
        kwp = size_from_budget(investment_amount_dt, cost_per_kwp_dt)
    else:
        kwp = size_from_consumption(annual_consumption, specific_yield)

    production = (kwp * np.asarray(monthly_yield, dtype=float)).tolist()
    rows, unused_credit = apply_net_metering(consumption, production)

    annual_production = sum(production)
    annual_net = sum(row.net_consumption_kwh for row in rows)
    coverage = (annual_production / annual_consumption * 100) if annual_consumption > 0 else 0.0

    if unused_credit > 0:
        logger.warning(
            f"⚠️ {unused_credit:.0f} kWh de crédit non consommés en fin d'année (non remboursés)"
        )
    logger.info(
        f"☀️ Installation {kwp:.2f} kWc : {annual_production:.0f} kWh/an, couverture {coverage:.1f}%"
    )

    return PVProductionResult(
        installed_kwp=round(kwp, 2),
        yield_kwh_per_kwp=round(specific_yield, 2),
        annual_production_kwh=round(annual_production, 2),
        annual_consumption_kwh=round(annual_consumption, 2),
        annual_net_consumption_kwh=round(annual_net, 2),
        unused_credit_kwh=round(unused_credit, 2),
        coverage_rate_pct=round(coverage, 2),
        monthly=tuple(rows),
    )
