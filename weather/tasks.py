import logging

from celery import shared_task

from weather.services.yields import clear_yield_cache, get_location_yields

logger = logging.getLogger(__name__)


@shared_task(bind=True)
def refresh_location_yields_task(self, force: bool = False):
    """Recharge les productibles de tous les gouvernorats dans le cache."""
    if force:
        clear_yield_cache()

    self.update_state(
        state='PROGRESS',
        meta={'percentage': 10, 'message': '🌐 Interrogation PVGIS...'}
    )

    yields = get_location_yields(use_cache=True)
    logger.info(f"✅ Cache des productibles rafraîchi ({len(yields)} gouvernorats)")
    return yields
