"""
Projection économique pluriannuelle d'une installation PV.
Flux sur 25 ans avec inflation du tarif STEG, inflation de l'OPEX,
dégradation des modules et échéancier de financement.
"""

import logging
import math
from typing import List, Optional, Sequence

import numpy_financial as npf

from core.exceptions import CalculationError, InvalidInputError
from core.validators import validate_monthly_series, validate_positive, validate_rate
from financial.constants import DEFAULT_ECONOMIC_ASSUMPTIONS, EconomicAssumptions
from financial.contracts import (
    AnnualEconomicData,
    EconomicAnalysisResult,
    FinancingSchedule,
    MonthlyEconomicData,
)
from solar_calc.services.tariff import STEG_NON_RESIDENTIAL_BT, TariffSchedule

logger = logging.getLogger(__name__)

IRR_LOWER_BOUND = -0.99
IRR_UPPER_BOUND = 10.0
IRR_TOLERANCE = 1e-7
IRR_MAX_ITERATIONS = 200


# ==============================================================================
# INDICATEURS
# ==============================================================================

def compute_irr(cash_flows: Sequence[float]) -> Optional[float]:
    """
    TRI d'une série de flux annuels (année 0 en tête), par dichotomie.

    Returns:
        float: TRI décimal, ou None si la série ne change pas de signe ou
        si aucune racine n'est encadrée entre -99% et 1000%

    Raises:
        CalculationError: Si la dichotomie ne converge pas
    """
    flows = [float(cf) for cf in cash_flows]
    if not any(cf < 0 for cf in flows) or not any(cf > 0 for cf in flows):
        return None

    low, high = IRR_LOWER_BOUND, IRR_UPPER_BOUND
    f_low = npf.npv(low, flows)
    f_high = npf.npv(high, flows)

    if not (math.isfinite(f_low) and math.isfinite(f_high)):
        logger.error(f"❌ VAN non finie aux bornes du TRI pour les flux {flows}")
        raise CalculationError("VAN non finie aux bornes de recherche du TRI")

    if f_low * f_high > 0:
        logger.debug(f"Aucun TRI encadré entre {low:.0%} et {high:.0%}")
        return None

    for _ in range(IRR_MAX_ITERATIONS):
        mid = (low + high) / 2
        f_mid = npf.npv(mid, flows)
        if not math.isfinite(f_mid):
            break
        if abs(f_mid) < IRR_TOLERANCE or (high - low) / 2 < IRR_TOLERANCE:
            return mid
        if f_low * f_mid > 0:
            low, f_low = mid, f_mid
        else:
            high = mid

    logger.error(f"❌ Le calcul du TRI n'a pas convergé (flux : {flows})")
    raise CalculationError(f"Le calcul du TRI n'a pas convergé en {IRR_MAX_ITERATIONS} itérations")


def compute_payback(cumulative_cash_flows: Sequence[float]) -> Optional[float]:
    """
    Délai de retour (années) : passage durable du cumul à zéro, interpolé
    linéairement dans l'année du croisement.

    ``cumulative_cash_flows[0]`` est le cumul de l'année 0. Un cumul positif
    qui redevient négatif (redevance supérieure aux économies, par exemple)
    ne compte pas : seul le dernier passage du négatif au positif est retenu.

    Returns:
        float (0.0 si le cumul n'est jamais négatif), ou None si le cumul
        finit l'horizon en négatif
    """
    if not cumulative_cash_flows:
        return None

    negative_years = [year for year, value in enumerate(cumulative_cash_flows) if value < 0]
    if not negative_years:
        return 0.0

    last_negative = negative_years[-1]
    if last_negative == len(cumulative_cash_flows) - 1:
        return None

    previous = cumulative_cash_flows[last_negative]
    current = cumulative_cash_flows[last_negative + 1]
    return round(last_negative + (-previous) / (current - previous), 2)


# ==============================================================================
# PROJECTION
# ==============================================================================

class EconomicProjector:
    """
    Projection économique année par année.

    L'année 1 est calculée mois par mois à partir des consommations brutes et
    facturées (après net-metering) ; les années suivantes appliquent
    l'inflation tarifaire et la dégradation PV aux économies de l'année 1.
    """

    def __init__(
        self,
        monthly_raw_consumption_kwh: Sequence[float],
        monthly_billed_consumption_kwh: Sequence[float],
        installed_kwp: float,
        schedule: Optional[FinancingSchedule] = None,
        assumptions: EconomicAssumptions = DEFAULT_ECONOMIC_ASSUMPTIONS,
        tariff: TariffSchedule = STEG_NON_RESIDENTIAL_BT,
    ):
        """
        Args:
            monthly_raw_consumption_kwh: 12 consommations sans PV (kWh)
            monthly_billed_consumption_kwh: 12 consommations facturées avec PV (kWh)
            installed_kwp: Puissance installée (kWc)
            schedule: Échéancier de financement (comptant par défaut)
            assumptions: Hypothèses économiques
            tariff: Barème de facturation
        """
        self.raw = validate_monthly_series(monthly_raw_consumption_kwh, "Consommation brute")
        self.billed = validate_monthly_series(monthly_billed_consumption_kwh, "Consommation facturée")
        self.installed_kwp = validate_positive(installed_kwp, "Puissance installée")
        self.assumptions = assumptions
        self.tariff = tariff

        if assumptions.horizon_years < 1:
            raise InvalidInputError(f"Horizon d'analyse invalide : {assumptions.horizon_years} ans")
        validate_rate(assumptions.discount_rate, "Taux d'actualisation")
        validate_rate(assumptions.pv_degradation_rate, "Taux de dégradation PV")

        capex = self.installed_kwp * assumptions.capex_per_kwp_dt
        self.schedule = schedule or FinancingSchedule.cash(capex)

    @property
    def capex_dt(self) -> float:
        return self.schedule.capex_dt

    @property
    def first_year_opex_dt(self) -> float:
        return self.capex_dt * self.assumptions.opex_rate

    def calculate_monthly_economics(self) -> List[MonthlyEconomicData]:
        """Factures avec et sans PV de la première année."""
        months = []
        for index in range(12):
            without_pv = self.tariff.compute_bill(self.raw[index])
            with_pv = self.tariff.compute_bill(self.billed[index])
            months.append(MonthlyEconomicData(
                month=index + 1,
                raw_consumption_kwh=round(self.raw[index], 2),
                billed_consumption_kwh=round(self.billed[index], 2),
                applied_tariff_dt_per_kwh=with_pv.marginal_rate_dt_per_kwh,
                bill_without_pv_dt=round(without_pv.amount_dt, 2),
                bill_with_pv_dt=round(with_pv.amount_dt, 2),
                monthly_savings_dt=round(without_pv.amount_dt - with_pv.amount_dt, 2),
            ))
        return months

    def average_avoided_tariff(self, months: Sequence[MonthlyEconomicData]) -> float:
        """Valeur moyenne d'un kWh économisé (DT/kWh)."""
        saved_kwh = sum(self.raw) - sum(self.billed)
        if saved_kwh <= 0:
            return 0.0
        return round(sum(m.monthly_savings_dt for m in months) / saved_kwh, 4)

    def calculate_projection(self, months: Sequence[MonthlyEconomicData]) -> List[AnnualEconomicData]:
        """
        Calcule les lignes annuelles, année 0 (décaissement initial) incluse.

        Économies(n) = Économies(1) × (1 + i)^(n-1) × (1 - d)^(n-1)
        OPEX(n) = OPEX(1) × (1 + i_OPEX)^(n-1), ajusté pendant le contrat
        Gain net(n) = Économies(n) - OPEX(n) - financement(n)
        """
        a = self.assumptions
        raw_total = sum(self.raw)
        billed_total = sum(self.billed)
        bill_without_1 = sum(m.bill_without_pv_dt for m in months)
        bill_with_1 = sum(m.bill_with_pv_dt for m in months)
        savings_1 = bill_without_1 - bill_with_1

        outlay = self.schedule.initial_outlay_dt
        rows = [AnnualEconomicData(
            year=0,
            annual_raw_consumption_kwh=0.0,
            annual_billed_consumption_kwh=0.0,
            annual_bill_without_pv_dt=0.0,
            annual_bill_with_pv_dt=0.0,
            annual_savings_dt=0.0,
            investment_dt=round(outlay, 2),
            opex_dt=0.0,
            financing_dt=0.0,
            net_gain_dt=0.0,
            cash_flow_dt=round(-outlay, 2),
            discounted_cash_flow_dt=round(-outlay, 2),
            cumulative_cash_flow_dt=round(-outlay, 2),
            cumulative_cash_flow_discounted_dt=round(-outlay, 2),
            cumulative_net_gain_dt=0.0,
            cumulative_net_gain_discounted_dt=0.0,
        )]

        cumulative = -outlay
        cumulative_discounted = -outlay
        cumulative_gain = 0.0
        cumulative_gain_discounted = 0.0

        for year in range(1, a.horizon_years + 1):
            elapsed = year - 1
            tariff_factor = (1 + a.tariff_inflation_rate) ** elapsed
            degradation_factor = (1 - a.pv_degradation_rate) ** elapsed

            savings = savings_1 * tariff_factor * degradation_factor
            bill_without = bill_without_1 * tariff_factor
            opex = (
                self.first_year_opex_dt
                * (1 + a.opex_inflation_rate) ** elapsed
                * self.schedule.opex_factor_in_year(year)
            )
            financing = self.schedule.payments_in_year(year)
            net_gain = savings - opex - financing
            discounted = net_gain / (1 + a.discount_rate) ** year

            cumulative += net_gain
            cumulative_discounted += discounted
            cumulative_gain += net_gain
            cumulative_gain_discounted += discounted

            rows.append(AnnualEconomicData(
                year=year,
                annual_raw_consumption_kwh=round(raw_total, 2),
                annual_billed_consumption_kwh=round(billed_total, 2),
                annual_bill_without_pv_dt=round(bill_without, 2),
                annual_bill_with_pv_dt=round(bill_without - savings, 2),
                annual_savings_dt=round(savings, 2),
                investment_dt=0.0,
                opex_dt=round(opex, 2),
                financing_dt=round(financing, 2),
                net_gain_dt=round(net_gain, 2),
                cash_flow_dt=round(net_gain, 2),
                discounted_cash_flow_dt=round(discounted, 2),
                cumulative_cash_flow_dt=round(cumulative, 2),
                cumulative_cash_flow_discounted_dt=round(cumulative_discounted, 2),
                cumulative_net_gain_dt=round(cumulative_gain, 2),
                cumulative_net_gain_discounted_dt=round(cumulative_gain_discounted, 2),
            ))

        return rows

    def analyze(self) -> EconomicAnalysisResult:
        """Projection complète et indicateurs (paybacks, VAN, TRI, ROI)."""
        months = self.calculate_monthly_economics()
        annual = self.calculate_projection(months)

        flows = [row.cash_flow_dt for row in annual]
        npv = annual[-1].cumulative_cash_flow_discounted_dt
        simple_payback = compute_payback([row.cumulative_cash_flow_dt for row in annual])
        discounted_payback = compute_payback([row.cumulative_cash_flow_discounted_dt for row in annual])
        irr = compute_irr(flows)
        roi = annual[-1].cumulative_cash_flow_dt / self.capex_dt * 100 if self.capex_dt > 0 else 0.0
        total_savings = sum(row.annual_savings_dt for row in annual)

        result = EconomicAnalysisResult(
            financing_type=self.schedule.financing_type,
            capex_dt=round(self.capex_dt, 2),
            initial_investment_dt=round(self.schedule.initial_outlay_dt, 2),
            annual_opex_dt=round(self.first_year_opex_dt, 2),
            average_avoided_tariff=self.average_avoided_tariff(months),
            monthly=tuple(months),
            annual=tuple(annual),
            total_savings_dt=round(total_savings, 2),
            simple_payback_years=simple_payback,
            discounted_payback_years=discounted_payback,
            roi_pct=round(roi, 2),
            npv_dt=npv,
            irr=irr,
        )

        logger.info(
            f"📊 Analyse économique ({self.schedule.financing_type.value}) : VAN {npv:.0f} DT, "
            f"TRI {'non atteint' if irr is None else f'{irr:.1%}'}, "
            f"payback {'non atteint' if simple_payback is None else f'{simple_payback:.1f} ans'}"
        )
        return result

    def get_projection_table_data(self, result: EconomicAnalysisResult) -> List[dict]:
        """
        Lignes clés de la projection pour un tableau de synthèse.

        Années 1, 2, 3, 5, 10, 15, 20, 25 et année du retour sur investissement.
        """
        key_years = [1, 2, 3, 5, 10, 15, 20, 25]
        if result.simple_payback_years is not None:
            payback_year = max(1, math.ceil(result.simple_payback_years))
            if payback_year not in key_years:
                key_years.append(payback_year)
                key_years.sort()

        return [
            {
                'year': row.year,
                'bill_without_pv': row.annual_bill_without_pv_dt,
                'bill_with_pv': row.annual_bill_with_pv_dt,
                'savings': row.annual_savings_dt,
                'net_gain': row.net_gain_dt,
                'cumulative': row.cumulative_cash_flow_dt,
                'status': '✅' if row.cumulative_cash_flow_dt >= 0 else '⏳',
            }
            for row in result.annual
            if row.year in key_years
        ]


def project_economics(
    monthly_raw_consumption_kwh: Sequence[float],
    monthly_billed_consumption_kwh: Sequence[float],
    installed_kwp: float,
    schedule: Optional[FinancingSchedule] = None,
    assumptions: EconomicAssumptions = DEFAULT_ECONOMIC_ASSUMPTIONS,
    tariff: TariffSchedule = STEG_NON_RESIDENTIAL_BT,
) -> EconomicAnalysisResult:
    """
    Projection économique sur l'horizon ``assumptions.horizon_years``.

    Raises:
        InvalidInputError: Séries invalides, hypothèses hors bornes
        CalculationError: Non-convergence du calcul de TRI
    """
    projector = EconomicProjector(
        monthly_raw_consumption_kwh,
        monthly_billed_consumption_kwh,
        installed_kwp,
        schedule=schedule,
        assumptions=assumptions,
        tariff=tariff,
    )
    return projector.analyze()
