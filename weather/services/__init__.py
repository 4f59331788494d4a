"""
Services pour l'app weather.
"""

from .pvgis import PVGISClient
from .yields import (
    clear_yield_cache,
    get_location_yield,
    get_location_yields,
    resolve_with_default,
)

__all__ = [
    'PVGISClient',
    'clear_yield_cache',
    'get_location_yield',
    'get_location_yields',
    'resolve_with_default',
]
