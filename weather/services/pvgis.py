"""
Client API PVGIS pour récupérer le productible solaire mensuel.

Documentation PVGIS 5.3 : https://joint-research-centre.ec.europa.eu/photovoltaic-geographical-information-system-pvgis/getting-started-pvgis/pvgis-user-manual_en
API Documentation : https://joint-research-centre.ec.europa.eu/pvgis-tools/api_en
"""

import logging
from typing import Dict, Optional

import pandas as pd
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger(__name__)


class PVGISClient:
    """
    Client pour l'endpoint PVcalc de PVGIS (Photovoltaic Geographical Information System).

    PVcalc simule un système PV raccordé au réseau et renvoie la production
    mensuelle (E_m, kWh/mois) pour la puissance crête demandée. Avec
    peakpower=1, E_m est directement le productible en kWh/kWc.
    """

    BASE_URL = "https://re.jrc.ec.europa.eu/api/v5_3/PVcalc"

    DEFAULT_PEAK_POWER = 1     # 1 kWc
    DEFAULT_SYSTEM_LOSS = 14   # 14% de pertes système
    DEFAULT_PANEL_ANGLE = 30   # Inclinaison 30°
    USE_HORIZON = 1

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: int = 30,
        max_retries: int = 2,
        backoff_factor: float = 0.5,
    ):
        """
        Initialise le client PVGIS.

        Args:
            base_url: URL de l'endpoint PVcalc (défaut : PVGIS 5.3)
            timeout: Timeout des requêtes HTTP en secondes
            max_retries: Nombre de nouvelles tentatives sur erreur réseau / 5xx
            backoff_factor: Facteur d'attente exponentielle entre tentatives
        """
        self.base_url = base_url or self.BASE_URL
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            'User-Agent': 'SolarFinancingSimulator/1.0 (Python; PVGIS Client)'
        })

        retry = Retry(
            total=max_retries,
            backoff_factor=backoff_factor,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=("GET",),
        )
        adapter = HTTPAdapter(max_retries=retry)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

    @staticmethod
    def validate_coordinates(latitude: float, longitude: float) -> None:
        """
        Raises:
            ValueError: Coordonnées hors limites
        """
        if not -90 <= latitude <= 90:
            raise ValueError(f"Latitude invalide: {latitude} (doit être entre -90 et 90)")
        if not -180 <= longitude <= 180:
            raise ValueError(f"Longitude invalide: {longitude} (doit être entre -180 et 180)")

    def get_pv_calculation(self, latitude: float, longitude: float, **kwargs) -> Dict:
        """
        Appelle PVcalc pour un système de 1 kWc.

        Args:
            latitude: Latitude en degrés décimaux
            longitude: Longitude en degrés décimaux
            **kwargs: Paramètres PVcalc supplémentaires (aspect, mountingplace, ...)

        Returns:
            dict: Réponse JSON brute de PVGIS

        Raises:
            requests.RequestException: Erreur lors de l'appel API
            ValueError: Coordonnées invalides ou réponse non JSON
        """
        self.validate_coordinates(latitude, longitude)

        params = {
            'lat': latitude,
            'lon': longitude,
            'peakpower': self.DEFAULT_PEAK_POWER,
            'loss': self.DEFAULT_SYSTEM_LOSS,
            'angle': self.DEFAULT_PANEL_ANGLE,
            'usehorizon': self.USE_HORIZON,
            'outputformat': 'json',
        }
        params.update(kwargs)

        logger.info(f"Appel PVGIS PVcalc pour {latitude}, {longitude}")
        logger.debug(f"Paramètres: {params}")

        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.Timeout:
            logger.error(f"Timeout lors de l'appel PVGIS (>{self.timeout}s)")
            raise
        except requests.exceptions.HTTPError as e:
            logger.error(f"Erreur HTTP {e.response.status_code}: {e}")
            raise
        except requests.exceptions.JSONDecodeError as e:
            logger.error(f"Erreur de parsing JSON: {e}")
            raise ValueError("Réponse PVGIS invalide (pas du JSON)") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Erreur lors de l'appel PVGIS: {e}")
            raise

    def parse_monthly_to_dataframe(self, pv_data: Dict) -> pd.DataFrame:
        """
        Parse la production mensuelle PVcalc en DataFrame pandas.

        Args:
            pv_data: Réponse depuis get_pv_calculation()

        Returns:
            pd.DataFrame: 12 lignes, colonnes 'month', 'energy_kwh_per_kwp',
            'daily_energy_kwh_per_kwp', 'irradiation_kwh_m2'

        Raises:
            ValueError: Structure inattendue ou nombre de mois != 12
        """
        outputs = pv_data.get('outputs') if isinstance(pv_data, dict) else None
        by_mounting = outputs.get('monthly') if isinstance(outputs, dict) else None
        monthly = by_mounting.get('fixed') if isinstance(by_mounting, dict) else None

        if not isinstance(monthly, list):
            raise ValueError("Structure de réponse PVGIS invalide (outputs.monthly.fixed absent)")

        if not all(isinstance(row, dict) for row in monthly):
            raise ValueError("Structure de réponse PVGIS invalide (mois non structurés)")

        if len(monthly) != 12:
            raise ValueError(f"PVGIS a renvoyé {len(monthly)} mois, 12 attendus")

        df = pd.DataFrame(monthly)

        column_mapping = {
            'E_m': 'energy_kwh_per_kwp',    # Production mensuelle (kWh/mois)
            'E_d': 'daily_energy_kwh_per_kwp',
            'H(i)_m': 'irradiation_kwh_m2',  # Irradiation mensuelle sur plan incliné
        }
        existing_mappings = {k: v for k, v in column_mapping.items() if k in df.columns}
        df = df.rename(columns=existing_mappings)

        if 'energy_kwh_per_kwp' not in df.columns or 'month' not in df.columns:
            raise ValueError("Colonnes month/E_m manquantes dans la réponse PVGIS")

        df['energy_kwh_per_kwp'] = df['energy_kwh_per_kwp'].fillna(0).astype(float)

        available_columns = ['month'] + [
            col for col in ('energy_kwh_per_kwp', 'daily_energy_kwh_per_kwp', 'irradiation_kwh_m2')
            if col in df.columns
        ]
        return df[available_columns].sort_values('month').reset_index(drop=True)
