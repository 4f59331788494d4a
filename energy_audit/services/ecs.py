"""
Besoins d'eau chaude sanitaire (ECS) en énergie finale.

Le besoin utile (référence × facteur d'usage) est converti en énergie finale
selon le système :
- Électrique : besoin / rendement électrique
- Gaz : besoin / rendement chaudière
- Solaire : seule la part non couverte passe par l'appoint
- Pompe à chaleur : besoin / COP
"""

import logging
from typing import Optional

from core.enums import DomesticHotWaterType
from core.validators import parse_enum, validate_non_negative, validate_positive, validate_rate
from energy_audit.contracts import DomesticHotWaterResult

logger = logging.getLogger(__name__)


def compute_domestic_hot_water_load(
    system_type,
    reference_kwh_m2: float,
    usage_factor: float,
    electric_efficiency: float = 1.0,
    gas_efficiency: float = 0.9,
    solar_coverage: float = 0.7,
    solar_backup_efficiency: float = 0.9,
    heat_pump_cop: float = 3.0,
    conditioned_surface: Optional[float] = None,
) -> DomesticHotWaterResult:
    """
    Calcule l'énergie finale ECS par m² (et annuelle si la surface est connue).

    Args:
        system_type: DomesticHotWaterType (membre, valeur ou nom)
        reference_kwh_m2: Besoin de référence du secteur (kWh/m².an)
        usage_factor: Facteur d'usage du site (0.8 = 80% de la référence)
        electric_efficiency: Rendement du ballon électrique
        gas_efficiency: Rendement de la chaudière gaz
        solar_coverage: Taux de couverture solaire (0-1)
        solar_backup_efficiency: Rendement de l'appoint du chauffe-eau solaire
        heat_pump_cop: Coefficient de performance de la PAC
        conditioned_surface: Surface (m²) pour l'énergie annuelle

    Raises:
        InvalidInputError: Type inconnu, rendement <= 0 ou couverture hors [0, 1]
    """
    system_type = parse_enum(DomesticHotWaterType, system_type, "Système ECS")
    reference = validate_non_negative(reference_kwh_m2, "Référence ECS")
    factor = validate_non_negative(usage_factor, "Facteur d'usage ECS")

    useful = reference * factor

    if system_type == DomesticHotWaterType.NONE:
        per_square = 0.0
    elif system_type == DomesticHotWaterType.ELECTRIC:
        per_square = useful / validate_positive(electric_efficiency, "Rendement électrique")
    elif system_type == DomesticHotWaterType.GAS:
        per_square = useful / validate_positive(gas_efficiency, "Rendement gaz")
    elif system_type == DomesticHotWaterType.SOLAR:
        coverage = validate_rate(solar_coverage, "Couverture solaire")
        backup = validate_positive(solar_backup_efficiency, "Rendement appoint solaire")
        per_square = useful * (1 - coverage) / backup
    else:
        per_square = useful / validate_positive(heat_pump_cop, "COP pompe à chaleur")

    annual = 0.0
    if conditioned_surface is not None:
        annual = per_square * validate_non_negative(conditioned_surface, "Surface conditionnée")

    logger.debug(f"ECS {system_type.value} : utile {useful:.1f}, finale {per_square:.1f} kWh/m².an")

    return DomesticHotWaterResult(
        system_type=system_type,
        useful_need_kwh_m2=round(useful, 3),
        per_square_kwh_m2=round(per_square, 3),
        annual_kwh=round(annual, 2),
    )
