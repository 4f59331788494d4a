"""
Services pour l'app energy_audit.
"""

from .carbon_class import compute_carbon_class
from .ecs import compute_domestic_hot_water_load
from .emissions import compute_avoided_co2, compute_co2_emissions
from .energy_class import compute_energy_class, compute_energy_performance_index

__all__ = [
    'compute_avoided_co2',
    'compute_carbon_class',
    'compute_co2_emissions',
    'compute_domestic_hot_water_load',
    'compute_energy_class',
    'compute_energy_performance_index',
]
