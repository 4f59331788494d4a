"""
Contrats de données pour le module financial.
Définit les structures garanties par le comparateur et la projection économique.

Montants en DT, taux en décimal.
"""

from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

import pandas as pd

from core.enums import Governorate
from core.exceptions import InvalidInputError
from core.validators import validate_positive
from financial.constants import MONTHS_PER_YEAR
from financial.services.annuity import amortization_schedule
from weather.locations import resolve_governorate


class FinancingSolutionType(Enum):
    CASH = 'cash'
    CREDIT = 'credit'
    LEASING = 'leasing'
    ESCO = 'esco'


# ==============================================================================
# ENTRÉE PROJET
# ==============================================================================

@dataclass(frozen=True)
class InstallationSize:
    """Dimensionnement par puissance crête."""
    kwp: float

    def __post_init__(self):
        validate_positive(self.kwp, "installation_size_kwp")


@dataclass(frozen=True)
class InvestmentAmount:
    """Dimensionnement par budget d'investissement."""
    amount_dt: float

    def __post_init__(self):
        validate_positive(self.amount_dt, "investment_amount_dt")


Sizing = Union[InstallationSize, InvestmentAmount]


@dataclass(frozen=True)
class ProjectInput:
    """
    Saisie utilisateur : un gouvernorat et SOIT une puissance SOIT un budget.
    """
    location: Governorate
    sizing: Sizing

    @classmethod
    def from_fields(
        cls,
        location,
        installation_size_kwp: Optional[float] = None,
        investment_amount_dt: Optional[float] = None,
    ) -> "ProjectInput":
        """
        Construit l'entrée à partir des deux champs optionnels du formulaire.

        Raises:
            InvalidInputError: Aucun ou les deux champs renseignés, valeur <= 0
            InvalidLocationError: Gouvernorat inconnu
        """
        has_size = installation_size_kwp is not None
        has_amount = investment_amount_dt is not None

        if not has_size and not has_amount:
            raise InvalidInputError(
                "installation_size_kwp ou investment_amount_dt doit être renseigné"
            )
        if has_size and has_amount:
            raise InvalidInputError(
                "Un seul des champs installation_size_kwp / investment_amount_dt doit être renseigné"
            )

        sizing = InstallationSize(installation_size_kwp) if has_size else InvestmentAmount(investment_amount_dt)
        return cls(location=resolve_governorate(location), sizing=sizing)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'location': self.location.value,
            'installation_size_kwp': self.sizing.kwp if isinstance(self.sizing, InstallationSize) else None,
            'investment_amount_dt': self.sizing.amount_dt if isinstance(self.sizing, InvestmentAmount) else None,
        }


@dataclass(frozen=True)
class ProjectCalculation:
    """
    Grandeurs communes à toutes les solutions de financement.

    Invariants : monthly_* = annual_* / 12 ;
    annual_gross_savings_dt = annual_production_kwh × prix du kWh.
    """
    size_kwp: float
    capex_dt: float
    annual_production_kwh: float
    annual_gross_savings_dt: float
    monthly_gross_savings_dt: float
    annual_opex_dt: float
    monthly_opex_dt: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ==============================================================================
# SOLUTIONS DE FINANCEMENT
# ==============================================================================

@dataclass(frozen=True)
class FinancingSolution:
    """
    Forme commune des quatre solutions.

    monthly_cashflow = économies brutes mensuelles - total_monthly_cost
    """
    type: FinancingSolutionType
    initial_investment: float
    monthly_payment: float
    monthly_opex: float
    total_monthly_cost: float
    monthly_cashflow: float
    duration_months: int
    duration_years: int

    def to_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data['type'] = self.type.value
        return data


@dataclass(frozen=True)
class CashSolution(FinancingSolution):
    pass


@dataclass(frozen=True)
class CreditSolution(FinancingSolution):
    credit_monthly_rate: float
    credit_annual_rate: float
    self_financing_dt: float
    financed_principal_dt: float

    def amortization_schedule(self) -> pd.DataFrame:
        """Tableau d'amortissement du capital financé."""
        return amortization_schedule(self.financed_principal_dt, self.credit_monthly_rate, self.duration_months)


@dataclass(frozen=True)
class LeasingSolution(FinancingSolution):
    leasing_monthly_rate: float
    leasing_annual_rate: float
    leasing_down_payment_dt: float
    leasing_residual_value_dt: float
    leasing_residual_value_rate: float


@dataclass(frozen=True)
class EscoSolution(FinancingSolution):
    """
    Offre ESCO : l'investisseur finance 100% du CAPEX.

    Une offre non viable reste calculée ; is_viable = False et
    viability_error explique pourquoi.
    """
    esco_target_irr_monthly: float
    esco_target_irr_annual: float
    esco_opex_included: bool
    esco_capex_dt: float
    is_viable: bool = True
    viability_error: Optional[str] = None


@dataclass(frozen=True)
class ComparisonResult:
    input: ProjectInput
    project_calculation: ProjectCalculation
    cash: CashSolution
    credit: CreditSolution
    leasing: LeasingSolution
    esco: EscoSolution

    def solutions(self) -> Tuple[FinancingSolution, ...]:
        return (self.cash, self.credit, self.leasing, self.esco)

    def to_dataframe(self) -> pd.DataFrame:
        """Tableau comparatif : une ligne par solution."""
        columns = [f.name for f in fields(FinancingSolution)]
        rows = [{name: getattr(s, name) for name in columns} for s in self.solutions()]
        df = pd.DataFrame(rows, columns=columns)
        df['type'] = df['type'].map(lambda t: t.value)
        return df.set_index('type')

    def to_dict(self) -> Dict[str, Any]:
        return {
            'input': self.input.to_dict(),
            'project_calculation': self.project_calculation.to_dict(),
            'cash': self.cash.to_dict(),
            'credit': self.credit.to_dict(),
            'leasing': self.leasing.to_dict(),
            'esco': self.esco.to_dict(),
        }


# ==============================================================================
# PROJECTION ÉCONOMIQUE
# ==============================================================================

@dataclass(frozen=True)
class FinancingSchedule:
    """
    Flux de financement vus par le client, pour la projection pluriannuelle.

    Attributes:
        financing_type: Type de solution
        capex_dt: Valeur de l'installation
        initial_outlay_dt: Décaissement en année 0
        monthly_payment_dt: Mensualité pendant le contrat
        contract_months: Durée du contrat (0 pour le comptant)
        residual_buyout_dt: Rachat payé en fin de contrat (leasing)
        contract_opex_factor: Multiplicateur d'OPEX pendant le contrat
            (1.3 en leasing, 0 si l'ESCO prend l'OPEX en charge)
    """
    financing_type: FinancingSolutionType
    capex_dt: float
    initial_outlay_dt: float
    monthly_payment_dt: float = 0.0
    contract_months: int = 0
    residual_buyout_dt: float = 0.0
    contract_opex_factor: float = 1.0

    @classmethod
    def cash(cls, capex_dt: float) -> "FinancingSchedule":
        return cls(
            financing_type=FinancingSolutionType.CASH,
            capex_dt=capex_dt,
            initial_outlay_dt=capex_dt,
        )

    @classmethod
    def from_solution(cls, solution: FinancingSolution, project_calculation: ProjectCalculation) -> "FinancingSchedule":
        """Adapte une solution du comparateur en échéancier client."""
        if isinstance(solution, CashSolution):
            return cls.cash(project_calculation.capex_dt)

        base_opex = project_calculation.monthly_opex_dt
        opex_factor = solution.monthly_opex / base_opex if base_opex > 0 else 1.0
        residual = solution.leasing_residual_value_dt if isinstance(solution, LeasingSolution) else 0.0
        # L'ESCO peut chiffrer l'installation à son propre coût par kWc
        capex = solution.esco_capex_dt if isinstance(solution, EscoSolution) else project_calculation.capex_dt

        return cls(
            financing_type=solution.type,
            capex_dt=capex,
            initial_outlay_dt=solution.initial_investment,
            monthly_payment_dt=solution.monthly_payment,
            contract_months=solution.duration_months,
            residual_buyout_dt=residual,
            contract_opex_factor=opex_factor,
        )

    @property
    def contract_years(self) -> int:
        return -(-self.contract_months // MONTHS_PER_YEAR)

    def payments_in_year(self, year: int) -> float:
        """Mensualités et rachat payés pendant l'année ``year`` (1-based)."""
        months_before = MONTHS_PER_YEAR * (year - 1)
        months_paid = max(0, min(MONTHS_PER_YEAR, self.contract_months - months_before))
        total = self.monthly_payment_dt * months_paid
        if self.contract_months and year == self.contract_years:
            total += self.residual_buyout_dt
        return total

    def opex_factor_in_year(self, year: int) -> float:
        return self.contract_opex_factor if year <= self.contract_years else 1.0


@dataclass(frozen=True)
class MonthlyEconomicData:
    """Facturation d'un mois de la première année."""
    month: int
    raw_consumption_kwh: float
    billed_consumption_kwh: float
    applied_tariff_dt_per_kwh: float
    bill_without_pv_dt: float
    bill_with_pv_dt: float
    monthly_savings_dt: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AnnualEconomicData:
    """
    Une année de la projection (année 0 = décaissement initial).

    net_gain_dt = économies - OPEX - paiements de financement
    cash_flow_dt = net_gain_dt - investment_dt
    """
    year: int
    annual_raw_consumption_kwh: float
    annual_billed_consumption_kwh: float
    annual_bill_without_pv_dt: float
    annual_bill_with_pv_dt: float
    annual_savings_dt: float
    investment_dt: float
    opex_dt: float
    financing_dt: float
    net_gain_dt: float
    cash_flow_dt: float
    discounted_cash_flow_dt: float
    cumulative_cash_flow_dt: float
    cumulative_cash_flow_discounted_dt: float
    cumulative_net_gain_dt: float
    cumulative_net_gain_discounted_dt: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class EconomicAnalysisResult:
    """
    Projection économique complète et indicateurs dérivés.

    Les paybacks et le TRI valent None quand ils ne sont pas atteints
    sur l'horizon ou que la série de flux ne change pas de signe.
    """
    financing_type: FinancingSolutionType
    capex_dt: float
    initial_investment_dt: float
    annual_opex_dt: float
    average_avoided_tariff: float
    monthly: Tuple[MonthlyEconomicData, ...]
    annual: Tuple[AnnualEconomicData, ...]
    total_savings_dt: float
    simple_payback_years: Optional[float]
    discounted_payback_years: Optional[float]
    roi_pct: float
    npv_dt: float
    irr: Optional[float]

    @property
    def irr_pct(self) -> Optional[float]:
        return None if self.irr is None else round(self.irr * 100, 2)

    def cash_flows(self) -> Tuple[float, ...]:
        return tuple(row.cash_flow_dt for row in self.annual)

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([row.to_dict() for row in self.annual]).set_index('year')

    def to_dict(self) -> Dict[str, Any]:
        return {
            'financing_type': self.financing_type.value,
            'capex_dt': self.capex_dt,
            'initial_investment_dt': self.initial_investment_dt,
            'annual_opex_dt': self.annual_opex_dt,
            'average_avoided_tariff': self.average_avoided_tariff,
            'monthly': [m.to_dict() for m in self.monthly],
            'annual': [a.to_dict() for a in self.annual],
            'total_savings_dt': self.total_savings_dt,
            'simple_payback_years': self.simple_payback_years,
            'discounted_payback_years': self.discounted_payback_years,
            'roi_pct': self.roi_pct,
            'npv_dt': self.npv_dt,
            'irr_pct': self.irr_pct,
        }
