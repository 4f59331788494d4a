"""
Formules d'annuité constante (prêt amortissable, crédit-bail, redevance ESCO).
"""

import pandas as pd


def annuity_payment(principal: float, monthly_rate: float, months: int) -> float:
    """
    Mensualité constante remboursant ``principal`` en ``months`` mois.

        P × r / (1 - (1 + r)^-n)     si r > 0
        P / n                        si r = 0
    """
    if principal <= 0:
        return 0.0
    if monthly_rate == 0:
        return principal / months
    return principal * monthly_rate / (1 - (1 + monthly_rate) ** -months)


def annuity_present_value(payment: float, monthly_rate: float, months: int) -> float:
    """Valeur actuelle de ``months`` versements constants de ``payment``."""
    if monthly_rate == 0:
        return payment * months
    return payment * (1 - (1 + monthly_rate) ** -months) / monthly_rate


def amortization_schedule(principal: float, monthly_rate: float, months: int) -> pd.DataFrame:
    """
    Tableau d'amortissement mois par mois.

    Returns:
        pd.DataFrame: colonnes 'month', 'payment', 'interest', 'principal', 'balance'
    """
    payment = annuity_payment(principal, monthly_rate, months)
    balance = principal
    rows = []

    for month in range(1, months + 1):
        interest = balance * monthly_rate
        principal_part = payment - interest
        balance -= principal_part
        rows.append({
            'month': month,
            'payment': payment,
            'interest': interest,
            'principal': principal_part,
            'balance': balance,
        })

    return pd.DataFrame(rows, columns=['month', 'payment', 'interest', 'principal', 'balance'])
