"""
Parcours commun des grilles de classement (énergie, carbone, performance).
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

from core.enums import ClassificationGrade


@dataclass(frozen=True)
class Band:
    """Classe attribuée à toute valeur <= ``max``."""
    max: float
    grade: ClassificationGrade
    description: str


def classify(value: float, bands: Sequence[Band]) -> Tuple[ClassificationGrade, str]:
    """
    Renvoie la classe de la première bande dont le plafond couvre la valeur.

    Une valeur égale au plafond appartient à la bande (15 → A si A va jusqu'à 15).
    Au-delà de toutes les bandes, la dernière (la plus mauvaise) s'applique.
    """
    for band in bands:
        if value <= band.max:
            return band.grade, band.description
    last = bands[-1]
    return last.grade, last.description


def build_bands(ceilings: Sequence[float], descriptions: Sequence[str]) -> Tuple[Band, ...]:
    """Grille A→E : quatre plafonds, la classe E est ouverte."""
    grades = (
        ClassificationGrade.A,
        ClassificationGrade.B,
        ClassificationGrade.C,
        ClassificationGrade.D,
        ClassificationGrade.E,
    )
    limits = tuple(ceilings) + (float('inf'),)
    return tuple(Band(m, g, d) for m, g, d in zip(limits, grades, descriptions))
