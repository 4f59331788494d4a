"""
Avantages et inconvénients de chaque solution pour le décideur (DAF).
Complète les chiffres du comparateur par une lecture qualitative.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Tuple

from core.validators import parse_enum
from financial.contracts import FinancingSolutionType


@dataclass(frozen=True)
class SolutionAdvantages:
    type: FinancingSolutionType
    advantages: Tuple[str, ...]
    disadvantages: Tuple[str, ...]
    daf_reading: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type.value,
            'advantages': list(self.advantages),
            'disadvantages': list(self.disadvantages),
            'daf_reading': self.daf_reading,
        }


SOLUTION_ADVANTAGES = MappingProxyType({
    FinancingSolutionType.CASH: SolutionAdvantages(
        type=FinancingSolutionType.CASH,
        advantages=(
            "Aucune dette",
            "Aucune mensualité",
            "Cashflow mensuel maximal",
            "Coût total le plus faible",
            "Propriété immédiate de l'installation",
            "Solution la plus rentable à long terme",
        ),
        disadvantages=(
            "Fort investissement initial",
            "Immobilisation de trésorerie",
            "Risque technique 100% à la charge du client",
            "OPEX et maintenance à gérer soi-même",
            "Moins de flexibilité financière",
        ),
        daf_reading="Très rentable, mais je bloque du cash qui pourrait servir ailleurs.",
    ),
    FinancingSolutionType.CREDIT: SolutionAdvantages(
        type=FinancingSolutionType.CREDIT,
        advantages=(
            "Pas ou peu d'investissement initial",
            "Propriété de l'installation",
            "Mensualité connue à l'avance",
            "Solution bancaire classique et rassurante",
            "Cashflow potentiellement positif",
        ),
        disadvantages=(
            "Dette inscrite au bilan",
            "Coût total plus élevé (intérêts)",
            "Engagement bancaire long terme",
            "OPEX et maintenance à la charge du client",
            "Moins de flexibilité en cas de difficulté",
        ),
        daf_reading="Je finance le projet, mais je prends une dette et je gagne peu chaque mois.",
    ),
    FinancingSolutionType.LEASING: SolutionAdvantages(
        type=FinancingSolutionType.LEASING,
        advantages=(
            "Apport initial réduit",
            "Faible impact immédiat sur la trésorerie",
            "Solution adaptée aux entreprises qui préfèrent louer",
            "Possibilité de rachat en fin de contrat",
        ),
        disadvantages=(
            "Coût total très élevé",
            "Assurance et frais intégrés",
            "Flexibilité limitée",
            "Propriété différée",
            "Cashflow souvent neutre ou faible",
            "OPEX parfois plus élevés",
        ),
        daf_reading="Facile à mettre en place, mais cher sur la durée.",
    ),
    FinancingSolutionType.ESCO: SolutionAdvantages(
        type=FinancingSolutionType.ESCO,
        advantages=(
            "Aucun investissement initial",
            "Aucune dette",
            "OPEX et maintenance inclus",
            "Cashflow positif dès le premier mois",
            "Risque technique porté par l'ESCO",
            "Solution hors bilan",
            "Alignement d'intérêt (l'ESCO gagne si le client économise)",
        ),
        disadvantages=(
            "Part des économies partagée",
            "Durée contractuelle fixe",
            "Moins rentable que le comptant sur le très long terme",
            "Dépendance à un partenaire (ESCO)",
        ),
        daf_reading="Je ne prends aucun risque et j'améliore ma trésorerie immédiatement.",
    ),
})


def get_solution_advantages(solution_type) -> SolutionAdvantages:
    """Fiche qualitative d'une solution (membre, 'cash', 'CASH'...)."""
    return SOLUTION_ADVANTAGES[parse_enum(FinancingSolutionType, solution_type, "Type de solution")]
