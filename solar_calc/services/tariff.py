"""
Tarif progressif STEG (Non-résidentiel Basse Tension, > 100 kWh/mois).

Chaque tranche de consommation est facturée à son propre prix, comme un
barème d'imposition. Pour 400 kWh :
    200 × 0.195 + 100 × 0.240 + 100 × 0.333 = 96.30 DT
"""

import logging
import math
from dataclasses import dataclass
from typing import Tuple

from core.exceptions import InvalidInputError
from core.validators import validate_non_negative

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TariffBracket:
    """Tranche tarifaire : [min_kwh, max_kwh[ facturée à rate_dt_per_kwh."""
    min_kwh: float
    max_kwh: float
    rate_dt_per_kwh: float


@dataclass(frozen=True)
class TariffResult:
    """
    Montant facturé pour une consommation mensuelle.

    Attributes:
        consumption_kwh: Consommation facturée (kWh)
        amount_dt: Montant (DT)
        marginal_rate_dt_per_kwh: Prix de la tranche atteinte (0 si consommation nulle)
        effective_rate_dt_per_kwh: Prix moyen payé (montant / consommation)
    """
    consumption_kwh: float
    amount_dt: float
    marginal_rate_dt_per_kwh: float
    effective_rate_dt_per_kwh: float


@dataclass(frozen=True)
class TariffSchedule:
    """Barème progressif complet (tranches triées, la dernière ouverte)."""
    name: str
    brackets: Tuple[TariffBracket, ...]

    def __post_init__(self):
        if not self.brackets:
            raise InvalidInputError("Un barème tarifaire doit contenir au moins une tranche")
        if not math.isinf(self.brackets[-1].max_kwh):
            raise InvalidInputError("La dernière tranche tarifaire doit être ouverte")

    def compute_bill(self, consumption_kwh: float) -> TariffResult:
        """
        Facture mensuelle d'une consommation.

        Raises:
            InvalidInputError: Si la consommation est négative
        """
        consumption_kwh = validate_non_negative(consumption_kwh, "Consommation mensuelle")

        amount = 0.0
        marginal_rate = 0.0
        for bracket in self.brackets:
            if consumption_kwh <= bracket.min_kwh:
                break
            in_bracket = min(consumption_kwh, bracket.max_kwh) - bracket.min_kwh
            amount += in_bracket * bracket.rate_dt_per_kwh
            marginal_rate = bracket.rate_dt_per_kwh

        effective_rate = amount / consumption_kwh if consumption_kwh > 0 else 0.0

        return TariffResult(
            consumption_kwh=consumption_kwh,
            amount_dt=amount,
            marginal_rate_dt_per_kwh=marginal_rate,
            effective_rate_dt_per_kwh=effective_rate,
        )

    def consumption_for_amount(self, amount_dt: float) -> float:
        """
        Inverse le barème : consommation (kWh) correspondant à un montant facturé.

        Le barème est continu et strictement croissant, l'inversion est exacte.

        Raises:
            InvalidInputError: Si le montant est négatif
        """
        remaining = validate_non_negative(amount_dt, "Montant de la facture")

        consumption = 0.0
        for bracket in self.brackets:
            bracket_cost = (bracket.max_kwh - bracket.min_kwh) * bracket.rate_dt_per_kwh
            if remaining <= bracket_cost:
                consumption = bracket.min_kwh + remaining / bracket.rate_dt_per_kwh
                break
            remaining -= bracket_cost

        logger.debug(f"Montant {amount_dt:.2f} DT → {consumption:.1f} kWh ({self.name})")
        return consumption


STEG_NON_RESIDENTIAL_BT = TariffSchedule(
    name="STEG Non-résidentiel BT",
    brackets=(
        TariffBracket(0, 200, 0.195),
        TariffBracket(200, 300, 0.240),
        TariffBracket(300, 500, 0.333),
        TariffBracket(500, math.inf, 0.391),
    ),
)
