import logging

from celery import shared_task

from financial.contracts import ProjectInput
from financial.services.comparison import compare_all_solutions

logger = logging.getLogger(__name__)


@shared_task(bind=True)
def run_comparison_task(
    self,
    location,
    installation_size_kwp=None,
    investment_amount_dt=None,
    credit_params=None,
    leasing_params=None,
    esco_params=None,
):
    """Comparer les quatre financements et renvoyer le résultat sérialisé."""
    try:
        project_input = ProjectInput.from_fields(
            location,
            installation_size_kwp=installation_size_kwp,
            investment_amount_dt=investment_amount_dt,
        )
        result = compare_all_solutions(
            project_input,
            credit_params=credit_params,
            leasing_params=leasing_params,
            esco_params=esco_params,
        )
    except Exception as e:
        logger.error(f"❌ Erreur comparaison {location}: {e}", exc_info=True)
        raise

    logger.info(f"✅ Comparaison terminée pour {location}")
    return result.to_dict()
