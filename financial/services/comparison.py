"""
Comparateur de financements : comptant, crédit, leasing et ESCO.

Le calcul commun du projet est fait une seule fois, puis chaque solution est
calculée indépendamment à partir de ce socle.
"""

import logging
from dataclasses import fields, replace
from typing import Any, Mapping, Optional, TypeVar, Union

from core.exceptions import InvalidInputError
from financial.constants import (
    DEFAULT_CREDIT_PARAMETERS,
    DEFAULT_ESCO_PARAMETERS,
    DEFAULT_LEASING_PARAMETERS,
    DEFAULT_PROJECT_PARAMETERS,
    ProjectParameters,
)
from financial.contracts import ComparisonResult, ProjectInput
from financial.services.cash import calculate_cash_solution
from financial.services.credit import calculate_credit_solution
from financial.services.esco import calculate_esco_solution
from financial.services.leasing import calculate_leasing_solution
from financial.services.project_calculator import calculate_project
from weather.services.yields import get_location_yield

logger = logging.getLogger(__name__)

P = TypeVar('P')


def merge_parameters(defaults: P, overrides: Optional[Union[P, Mapping[str, Any]]]) -> P:
    """
    Fusionne des surcharges partielles dans les paramètres par défaut.

    Args:
        defaults: Instance de paramètres par défaut
        overrides: None, une instance complète, ou un dict de champs à remplacer

    Raises:
        InvalidInputError: Champ inconnu dans les surcharges
    """
    if overrides is None:
        return defaults
    if isinstance(overrides, type(defaults)):
        return overrides

    known = {f.name for f in fields(defaults)}
    unknown = set(overrides) - known
    if unknown:
        raise InvalidInputError(
            f"Paramètres inconnus pour {type(defaults).__name__} : {sorted(unknown)}"
        )
    return replace(defaults, **{k: v for k, v in overrides.items() if v is not None})


def compare_all_solutions(
    project_input: ProjectInput,
    credit_params=None,
    leasing_params=None,
    esco_params=None,
    project_parameters: Optional[ProjectParameters] = None,
    use_cache: bool = True,
) -> ComparisonResult:
    """
    Calcule les quatre solutions de financement pour un même projet.

    Le productible du gouvernorat remplace celui des paramètres projet ;
    une panne de PVGIS bascule sur la table statique.

    Args:
        project_input: Gouvernorat + puissance ou budget
        credit_params: Surcharges partielles (dict) ou CreditParameters
        leasing_params: Surcharges partielles (dict) ou LeasingParameters
        esco_params: Surcharges partielles (dict) ou EscoParameters
        project_parameters: Paramètres projet (défaut : DEFAULT_PROJECT_PARAMETERS)
        use_cache: Utiliser le cache des productibles

    Returns:
        ComparisonResult

    Raises:
        InvalidLocationError: Gouvernorat inconnu
        InvalidInputError: Paramètres invalides
    """
    yield_data = get_location_yield(project_input.location, use_cache=use_cache)
    parameters = replace(
        project_parameters or DEFAULT_PROJECT_PARAMETERS,
        yield_kwh_per_kwp_year=yield_data.annual_kwh_per_kwp,
    )

    credit_parameters = merge_parameters(DEFAULT_CREDIT_PARAMETERS, credit_params)
    leasing_parameters = merge_parameters(DEFAULT_LEASING_PARAMETERS, leasing_params)
    esco_parameters = merge_parameters(DEFAULT_ESCO_PARAMETERS, esco_params)

    project_calculation = calculate_project(project_input, parameters)

    result = ComparisonResult(
        input=project_input,
        project_calculation=project_calculation,
        cash=calculate_cash_solution(project_calculation),
        credit=calculate_credit_solution(project_calculation, credit_parameters),
        leasing=calculate_leasing_solution(project_calculation, leasing_parameters),
        esco=calculate_esco_solution(project_calculation, esco_parameters),
    )

    logger.info(
        f"✅ Comparaison {project_input.location.value} ({yield_data.source}) : "
        f"{project_calculation.size_kwp:.1f} kWc, CAPEX {project_calculation.capex_dt:.0f} DT, "
        f"ESCO {'viable' if result.esco.is_viable else 'non viable'}"
    )
    return result
