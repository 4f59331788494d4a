"""
Paramètres métier du comparateur de financements.

Montants en DT (dinar tunisien), taux en décimal (0.16 = 16%).
Ces valeurs sont passées explicitement à chaque calcul : aucun calculateur ne
lit de configuration globale.
"""

from dataclasses import dataclass
from typing import Optional

# Toutes les solutions sont comparées sur la même durée
DURATION_YEARS = 7
DURATION_MONTHS = 84
MONTHS_PER_YEAR = 12

# Taux d'autofinancement par solution
SELF_FINANCING_RATES = {
    'cash': 1.0,
    'credit': 0.10,
    'leasing': 0.05,
    'esco': 0.0,
}


@dataclass(frozen=True)
class ProjectParameters:
    """
    Paramètres du projet (configuration, pas saisie utilisateur).

    Attributes:
        cost_per_kwp_dt: Coût installé par kWc (DT)
        yield_kwh_per_kwp_year: Productible annuel (kWh/kWc/an), dépend du site
        electricity_price_dt_per_kwh: Prix du kWh évité (DT)
        opex_rate_annual: OPEX annuel en fraction du CAPEX
    """
    cost_per_kwp_dt: float = 2500
    yield_kwh_per_kwp_year: float = 1680
    electricity_price_dt_per_kwh: float = 0.18
    opex_rate_annual: float = 0.015


@dataclass(frozen=True)
class CreditParameters:
    credit_annual_rate: float = 0.09
    self_financing_rate: float = SELF_FINANCING_RATES['credit']


@dataclass(frozen=True)
class LeasingParameters:
    """
    Attributes:
        leasing_annual_rate: Taux annuel du crédit-bail
        leasing_residual_value_rate: Valeur de rachat en fin de contrat (fraction du CAPEX)
        leasing_opex_multiplier: Surcoût de l'OPEX en leasing (assurance, frais)
        self_financing_rate: Premier loyer majoré (fraction du CAPEX)
    """
    leasing_annual_rate: float = 0.12
    leasing_residual_value_rate: float = 0.10
    leasing_opex_multiplier: float = 1.3
    self_financing_rate: float = SELF_FINANCING_RATES['leasing']


@dataclass(frozen=True)
class EscoParameters:
    """
    Attributes:
        esco_target_irr_annual: TRI annuel visé par l'investisseur ESCO
        esco_opex_included: OPEX intégré à la redevance
        esco_cost_per_kwp_dt: Coût par kWc propre à l'offre ESCO (sinon celui du projet)
    """
    esco_target_irr_annual: float = 0.16
    esco_opex_included: bool = True
    esco_cost_per_kwp_dt: Optional[float] = None


@dataclass(frozen=True)
class EconomicAssumptions:
    """
    Hypothèses de la projection économique pluriannuelle.

    Attributes:
        horizon_years: Durée d'analyse (vie de l'installation)
        tariff_inflation_rate: Hausse annuelle du tarif STEG
        opex_inflation_rate: Hausse annuelle de l'OPEX
        discount_rate: Taux d'actualisation
        pv_degradation_rate: Perte annuelle de production des modules
        capex_per_kwp_dt: Coût installé par kWc (DT)
        opex_rate: OPEX annuel en fraction du CAPEX
    """
    horizon_years: int = 25
    tariff_inflation_rate: float = 0.07
    opex_inflation_rate: float = 0.03
    discount_rate: float = 0.08
    pv_degradation_rate: float = 0.004
    capex_per_kwp_dt: float = 2000
    opex_rate: float = 0.04


DEFAULT_PROJECT_PARAMETERS = ProjectParameters()
DEFAULT_CREDIT_PARAMETERS = CreditParameters()
DEFAULT_LEASING_PARAMETERS = LeasingParameters()
DEFAULT_ESCO_PARAMETERS = EscoParameters()
DEFAULT_ECONOMIC_ASSUMPTIONS = EconomicAssumptions()
