"""
Validators pour le module core

Validation des entrées utilisateur (montants, taux, mois, énumérations)
communes aux simulateurs de financement, d'audit solaire et d'audit énergétique.
"""

import math
import warnings

from core.exceptions import InvalidInputError


# ==============================================================================
# VALIDATORS NUMÉRIQUES
# ==============================================================================

def validate_positive(value, field_name):
    """
    Vérifie qu'une grandeur est un nombre fini strictement positif.

    Args:
        value: Valeur à contrôler
        field_name: Nom du champ (pour le message d'erreur)

    Returns:
        float: La valeur convertie

    Raises:
        InvalidInputError: Si la valeur est absente, non numérique ou <= 0
    """
    number = _as_number(value, field_name)
    if number <= 0:
        raise InvalidInputError(f"{field_name} doit être strictement positif (reçu {value})")
    return number


def validate_non_negative(value, field_name):
    """Vérifie qu'une grandeur est un nombre fini >= 0."""
    number = _as_number(value, field_name)
    if number < 0:
        raise InvalidInputError(f"{field_name} ne peut pas être négatif (reçu {value})")
    return number


def validate_rate(value, field_name, minimum=0.0, maximum=1.0):
    """
    Vérifie qu'un taux (décimal, 0.16 = 16%) est dans l'intervalle autorisé.

    Raises:
        InvalidInputError: Si le taux sort de [minimum, maximum]
    """
    number = _as_number(value, field_name)
    if not minimum <= number <= maximum:
        raise InvalidInputError(
            f"{field_name} invalide : {value}. "
            f"Doit être entre {minimum} et {maximum}"
        )
    return number


def validate_month(month):
    """
    Vérifie un numéro de mois (1 = janvier, 12 = décembre).

    Raises:
        InvalidInputError: Si le mois n'est pas un entier entre 1 et 12
    """
    if isinstance(month, bool) or not isinstance(month, int):
        raise InvalidInputError(f"Mois de référence invalide : {month!r} (entier 1-12 attendu)")
    if not 1 <= month <= 12:
        raise InvalidInputError(f"Mois de référence invalide : {month} (doit être entre 1 et 12)")
    return month


def validate_monthly_series(values, field_name):
    """Vérifie une série de 12 valeurs mensuelles positives ou nulles."""
    if values is None or len(values) != 12:
        received = 0 if values is None else len(values)
        raise InvalidInputError(f"{field_name} doit contenir 12 valeurs mensuelles, reçu {received}")
    return [validate_non_negative(v, f"{field_name}[{i + 1}]") for i, v in enumerate(values)]


def _as_number(value, field_name):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(f"{field_name} doit être numérique (reçu {value!r})")
    if not math.isfinite(value):
        raise InvalidInputError(f"{field_name} doit être fini (reçu {value})")
    return float(value)


# ==============================================================================
# VALIDATORS ÉNUMÉRATIONS
# ==============================================================================

def parse_enum(enum_cls, value, field_name):
    """
    Convertit une valeur (membre, valeur ou nom) en membre d'énumération.

    Accepte indifféremment ``BuildingType.HOTEL_GUESTHOUSE``, ``"Hôtel"`` ou
    ``"HOTEL_GUESTHOUSE"``.

    Raises:
        InvalidInputError: Si la valeur ne correspond à aucun membre
    """
    if isinstance(value, enum_cls):
        return value
    for member in enum_cls:
        if value == member.value or value == member.name:
            return member
    raise InvalidInputError(f"{field_name} inconnu : {value!r}")


# ==============================================================================
# VALIDATORS FINANCEMENT
# ==============================================================================

def validate_self_financing_rate(rate, solution_label):
    """
    Vérifie le taux d'autofinancement d'une solution de financement.

    Warnings:
        UserWarning: Si le client finance tout lui-même (le crédit n'a plus d'objet)
    """
    rate = validate_rate(rate, f"Taux d'autofinancement {solution_label}")
    if rate == 1.0:
        warnings.warn(
            f"Autofinancement à 100% pour la solution {solution_label} : "
            f"aucun montant financé, la mensualité sera nulle.",
            UserWarning
        )
    return rate


def validate_target_irr(rate):
    """
    Vérifie le TRI cible de l'investisseur ESCO.

    Warnings:
        UserWarning: Si le TRI cible dépasse 30% (offre rarement viable)
    """
    rate = validate_rate(rate, "TRI cible ESCO", minimum=0.0, maximum=2.0)
    if rate == 0:
        raise InvalidInputError("TRI cible ESCO doit être strictement positif")
    if rate > 0.30:
        warnings.warn(
            f"TRI cible ESCO élevé : {rate * 100:.0f}%. "
            f"La redevance risque de dépasser les économies du client.",
            UserWarning
        )
    return rate
