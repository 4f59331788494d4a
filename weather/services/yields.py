"""
Productible solaire par gouvernorat.

PVGIS en priorité, cache Django entre deux appels, table statique en repli.
Aucune fonction publique de ce module ne propage une panne de PVGIS.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, Optional, TypeVar

import requests
from django.conf import settings
from django.core.cache import cache

from core.enums import Governorate
from weather.contracts import YieldData, create_yield_data
from weather.locations import (
    get_fallback_yield,
    get_governorate_coordinates,
    resolve_governorate,
    seasonal_profile,
)
from weather.services.pvgis import PVGISClient

logger = logging.getLogger(__name__)

T = TypeVar('T')

CACHE_KEY_PREFIX = 'location_yield'


def resolve_with_default(fetch: Callable[[], T], default: Callable[[], T], label: str) -> T:
    """
    Exécute ``fetch`` et bascule sur ``default`` en cas d'échec externe.

    Seul point du projet qui décide de la politique de repli : l'erreur est
    journalisée puis remplacée par la valeur par défaut, jamais propagée.

    Args:
        fetch: Appel externe (HTTP, parsing)
        default: Fabrique de la valeur de repli
        label: Libellé pour les logs
    """
    try:
        return fetch()
    except (requests.RequestException, ValueError, KeyError, TypeError) as e:
        logger.warning(f"⚠️ {label} indisponible ({e.__class__.__name__}: {e}), utilisation des valeurs par défaut")
        return default()


def _cache_key(governorate: Governorate) -> str:
    return f"{CACHE_KEY_PREFIX}:{governorate.name}"


def _build_client() -> PVGISClient:
    return PVGISClient(
        base_url=getattr(settings, 'PVGIS_API_URL', None),
        timeout=getattr(settings, 'PVGIS_TIMEOUT', 30),
        max_retries=getattr(settings, 'PVGIS_MAX_RETRIES', 2),
    )


def _fetch_from_pvgis(governorate: Governorate, client: PVGISClient) -> YieldData:
    coordinates = get_governorate_coordinates(governorate)
    pv_data = client.get_pv_calculation(coordinates.latitude, coordinates.longitude)
    df = client.parse_monthly_to_dataframe(pv_data)
    yield_data = create_yield_data(governorate.value, df, source='api')
    logger.info(f"✅ Productible PVGIS {governorate.value} : {yield_data.annual_kwh_per_kwp:.0f} kWh/kWc/an")
    return yield_data


def _fallback_yield(governorate: Governorate) -> YieldData:
    annual = get_fallback_yield(governorate)
    return YieldData(
        location=governorate.value,
        annual_kwh_per_kwp=annual,
        monthly_kwh_per_kwp=tuple(round(annual * share, 2) for share in seasonal_profile()),
        source='fallback',
    )


def get_location_yield(location, use_cache: bool = True, client: Optional[PVGISClient] = None) -> YieldData:
    """
    Productible d'un gouvernorat (kWh/kWc/an et 12 valeurs mensuelles).

    Args:
        location: Governorate, libellé ("Sfax") ou nom ("SFAX")
        use_cache: Lire et alimenter le cache Django
        client: Client PVGIS (un client configuré depuis les settings par défaut)

    Returns:
        YieldData avec source 'api', 'cache' ou 'fallback'

    Raises:
        InvalidLocationError: Si la localisation est inconnue
    """
    governorate = resolve_governorate(location)
    key = _cache_key(governorate)

    if use_cache:
        cached = cache.get(key)
        if cached is not None:
            logger.debug(f"Productible {governorate.value} trouvé en cache")
            return YieldData.from_dict(cached).with_source('cache')

    client = client or _build_client()
    yield_data = resolve_with_default(
        lambda: _fetch_from_pvgis(governorate, client),
        lambda: _fallback_yield(governorate),
        label=f"PVGIS ({governorate.value})",
    )

    # Le repli n'est pas mis en cache : PVGIS sera réessayé au prochain appel
    if use_cache and yield_data.source == 'api':
        cache.set(key, yield_data.to_dict(), getattr(settings, 'YIELD_CACHE_TIMEOUT', 60 * 60 * 24 * 30))

    return yield_data


def get_location_yields(use_cache: bool = True, client: Optional[PVGISClient] = None) -> Dict[str, float]:
    """
    Productible annuel de tous les gouvernorats, pour alimenter une liste de sélection.

    Les appels sont indépendants et lancés en parallèle. Ne lève jamais :
    tout gouvernorat en échec reçoit sa valeur statique.

    Sans ``client`` fourni, chaque thread construit son propre PVGISClient
    (une requests.Session n'est pas partagée entre threads). Un client fourni
    est utilisé tel quel par tous les threads.

    Returns:
        dict: {libellé du gouvernorat: kWh/kWc/an}
    """
    workers = getattr(settings, 'YIELD_LOOKUP_WORKERS', 6)
    local = threading.local()

    def worker_client() -> PVGISClient:
        if client is not None:
            return client
        if not hasattr(local, 'client'):
            local.client = _build_client()
        return local.client

    def lookup(governorate: Governorate) -> float:
        return resolve_with_default(
            lambda: get_location_yield(governorate, use_cache=use_cache, client=worker_client()).annual_kwh_per_kwp,
            lambda: get_fallback_yield(governorate),
            label=f"Productible {governorate.value}",
        )

    governorates = list(Governorate)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        results = list(executor.map(lookup, governorates))

    yields = {governorate.value: value for governorate, value in zip(governorates, results)}
    logger.info(f"📊 Productibles chargés pour {len(yields)} gouvernorats")
    return yields


def clear_yield_cache() -> None:
    """Vide le cache des productibles de tous les gouvernorats."""
    cache.delete_many([_cache_key(governorate) for governorate in Governorate])
    logger.info("🗑️ Cache des productibles vidé")
