"""
Contrats de données pour le module weather.
Définit les structures de données garanties par le module.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

import pandas as pd


@dataclass(frozen=True)
class Coordinates:
    """Coordonnées géographiques en degrés décimaux."""
    latitude: float
    longitude: float


@dataclass(frozen=True)
class ClimateWeights:
    """
    Pondérations climatiques d'une zone.

    Attributes:
        heating_factor: Facteur de besoins de chauffage
        cooling_factor: Facteur de besoins de climatisation
        winter_weight: Poids de l'hiver dans l'année
        summer_weight: Poids de l'été dans l'année
        mid_season_weight: Poids de la mi-saison
    """
    heating_factor: float
    cooling_factor: float
    winter_weight: float
    summer_weight: float
    mid_season_weight: float


@dataclass(frozen=True)
class YieldData:
    """
    Productible solaire d'une localisation.

    Attributes:
        location: Libellé du gouvernorat
        annual_kwh_per_kwp: Productible annuel (kWh/kWc/an)
        monthly_kwh_per_kwp: 12 valeurs mensuelles (kWh/kWc)
        source: Source des données ('api', 'cache', 'fallback')
        retrieved_at: Timestamp ISO de récupération
    """
    location: str
    annual_kwh_per_kwp: float
    monthly_kwh_per_kwp: Tuple[float, ...]
    source: str
    retrieved_at: Optional[str] = field(default=None, compare=False)

    def with_source(self, source: str) -> "YieldData":
        return YieldData(
            location=self.location,
            annual_kwh_per_kwp=self.annual_kwh_per_kwp,
            monthly_kwh_per_kwp=self.monthly_kwh_per_kwp,
            source=source,
            retrieved_at=self.retrieved_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'location': self.location,
            'annual_kwh_per_kwp': self.annual_kwh_per_kwp,
            'monthly_kwh_per_kwp': list(self.monthly_kwh_per_kwp),
            'source': self.source,
            'retrieved_at': self.retrieved_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "YieldData":
        return cls(
            location=data['location'],
            annual_kwh_per_kwp=float(data['annual_kwh_per_kwp']),
            monthly_kwh_per_kwp=tuple(float(v) for v in data['monthly_kwh_per_kwp']),
            source=data['source'],
            retrieved_at=data.get('retrieved_at'),
        )


def validate_monthly_dataframe(df: pd.DataFrame) -> bool:
    """
    Valide qu'un DataFrame de production mensuelle respecte le contrat.

    Contrat :
        - 12 lignes exactement (une par mois)
        - Colonnes obligatoires : ['month', 'energy_kwh_per_kwp']
        - Pas de valeurs manquantes
        - Production >= 0

    Raises:
        ValueError: Si non-conforme au contrat
    """
    if len(df) != 12:
        raise ValueError(f"PVGIS a renvoyé {len(df)} mois, 12 attendus")

    required_cols = ['month', 'energy_kwh_per_kwp']
    missing = set(required_cols) - set(df.columns)
    if missing:
        raise ValueError(f"Colonnes manquantes : {missing}")

    if df[required_cols].isna().any().any():
        raise ValueError("Valeurs manquantes détectées dans la production mensuelle")

    if (df['energy_kwh_per_kwp'] < 0).any():
        raise ValueError("Production mensuelle négative")

    return True


def create_yield_data(location: str, df: pd.DataFrame, source: str = 'api') -> YieldData:
    """
    Construit un YieldData à partir du DataFrame mensuel PVGIS.

    Le productible annuel est la somme des productions mensuelles, arrondie au kWh.
    """
    validate_monthly_dataframe(df)
    monthly = df.sort_values('month')['energy_kwh_per_kwp'].astype(float)

    return YieldData(
        location=location,
        annual_kwh_per_kwp=float(round(monthly.sum())),
        monthly_kwh_per_kwp=tuple(round(v, 2) for v in monthly.tolist()),
        source=source,
        retrieved_at=datetime.now().isoformat(),
    )
