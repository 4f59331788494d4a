from celery import shared_task
import logging

from solar_calc.services.audit import run_solar_audit


logger = logging.getLogger(__name__)


@shared_task(bind=True)
def run_solar_audit_task(
    self,
    location,
    measured_amount_dt,
    reference_month,
    building_type,
    installed_kwp=None,
    investment_amount_dt=None,
):
    """Exécuter l'audit solaire et renvoyer le résultat sérialisé."""

    try:
        # === ÉTAPE 1: Consommation, productible, production (50%) ===
        self.update_state(
            state='PROGRESS',
            meta={'percentage': 50, 'message': '☀️ Calcul production solaire...'}
        )

        result = run_solar_audit(
            location,
            measured_amount_dt,
            reference_month,
            building_type,
            installed_kwp=installed_kwp,
            investment_amount_dt=investment_amount_dt,
        )

        # === ÉTAPE 2: Sérialisation (100%) ===
        self.update_state(
            state='PROGRESS',
            meta={'percentage': 100, 'message': '💾 Sérialisation résultats...'}
        )

        logger.info(
            f"✅ Audit {location} terminé - {result.production.installed_kwp} kWc, "
            f"VAN {result.economics.npv_dt:.0f} DT"
        )
        return result.to_dict()

    except Exception as e:
        logger.error(f"❌ Erreur audit solaire {location}: {e}", exc_info=True)
        raise
