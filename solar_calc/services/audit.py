"""
Audit solaire complet : facture → consommation annuelle → production PV → rentabilité.
"""

import logging
from typing import Optional

from energy_audit.services.emissions import compute_avoided_co2
from financial.constants import DEFAULT_ECONOMIC_ASSUMPTIONS, EconomicAssumptions
from financial.contracts import FinancingSchedule
from financial.services.economic_projection import project_economics
from solar_calc.contracts import SolarAuditResult
from solar_calc.services.consumption_estimator import estimate_consumption
from solar_calc.services.pv_production import simulate_production
from solar_calc.services.tariff import STEG_NON_RESIDENTIAL_BT, TariffSchedule
from weather.locations import get_climate_zone, resolve_governorate
from weather.services.yields import get_location_yield

logger = logging.getLogger(__name__)


def run_solar_audit(
    location,
    measured_amount_dt: float,
    reference_month: int,
    building_type,
    installed_kwp: Optional[float] = None,
    investment_amount_dt: Optional[float] = None,
    schedule: Optional[FinancingSchedule] = None,
    assumptions: EconomicAssumptions = DEFAULT_ECONOMIC_ASSUMPTIONS,
    tariff: TariffSchedule = STEG_NON_RESIDENTIAL_BT,
    use_cache: bool = True,
) -> SolarAuditResult:
    """
    Enchaîne estimation de consommation, simulation PV et projection économique.

    Sans puissance ni budget, l'installation est dimensionnée pour couvrir la
    consommation annuelle estimée.

    Args:
        location: Gouvernorat du site
        measured_amount_dt: Montant de la facture de référence (DT)
        reference_month: Mois de la facture (1-12)
        building_type: Typologie du bâtiment
        installed_kwp: Puissance imposée (kWc)
        investment_amount_dt: Budget d'investissement (DT)
        schedule: Échéancier de financement (comptant par défaut)
        assumptions: Hypothèses économiques
        tariff: Barème STEG
        use_cache: Utiliser le cache des productibles

    Raises:
        InvalidLocationError: Gouvernorat inconnu
        InvalidInputError: Entrées invalides
    """
    governorate = resolve_governorate(location)
    climate_zone = get_climate_zone(governorate)

    logger.info(f"🔧 Audit solaire {governorate.value} (zone {climate_zone.value})")

    consumption = estimate_consumption(
        measured_amount_dt,
        reference_month,
        building_type,
        climate_zone,
        tariff=tariff,
    )

    yield_data = get_location_yield(governorate, use_cache=use_cache)

    production = simulate_production(
        consumption.monthly_consumption_kwh,
        yield_data.annual_kwh_per_kwp,
        installed_kwp=installed_kwp,
        investment_amount_dt=investment_amount_dt,
        cost_per_kwp_dt=assumptions.capex_per_kwp_dt,
        monthly_yield_kwh_per_kwp=yield_data.monthly_kwh_per_kwp,
    )

    economics = project_economics(
        production.monthly_raw_consumption_kwh,
        production.monthly_net_consumption_kwh,
        production.installed_kwp,
        schedule=schedule,
        assumptions=assumptions,
        tariff=tariff,
    )

    avoided = compute_avoided_co2(production.annual_production_kwh, horizon_years=assumptions.horizon_years)

    logger.info(f"✅ Audit solaire {governorate.value} terminé")

    return SolarAuditResult(
        location=governorate.value,
        yield_source=yield_data.source,
        consumption=consumption,
        production=production,
        economics=economics,
        avoided_emissions=avoided,
    )
