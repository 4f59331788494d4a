"""
Exceptions métier du simulateur de financement solaire.

Hiérarchie :
- FinancingError : base commune
  - InvalidInputError : entrée utilisateur invalide (corrigeable par l'appelant)
    - InvalidLocationError : gouvernorat inconnu
  - CalculationError : une méthode numérique n'a pas pu produire de résultat
"""


class FinancingError(Exception):
    """Erreur de base du module de financement."""


class InvalidInputError(FinancingError):
    """Entrée mal formée ou hors limites."""


class InvalidLocationError(InvalidInputError):
    """Localisation impossible à résoudre."""

    def __init__(self, location):
        self.location = location
        super().__init__(f"Localisation invalide : {location}")


class CalculationError(FinancingError):
    """Précondition arithmétique non satisfaite (ex : solveur non convergent)."""
