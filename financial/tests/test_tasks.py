"""
Tests des tâches Celery (exécution locale avec apply()).
"""

from unittest.mock import patch

import pytest

from core.exceptions import InvalidInputError
from financial.tasks import run_comparison_task
from solar_calc.tasks import run_solar_audit_task
from weather.contracts import YieldData
from weather.locations import seasonal_profile
from weather.tasks import refresh_location_yields_task

TUNIS_YIELD = YieldData(
    location='Tunis',
    annual_kwh_per_kwp=1650.0,
    monthly_kwh_per_kwp=tuple(1650.0 * share for share in seasonal_profile()),
    source='fallback',
)


class TestComparisonTask:

    def test_resultat_serialise(self):
        with patch('financial.services.comparison.get_location_yield', return_value=TUNIS_YIELD):
            data = run_comparison_task.apply(
                args=('Tunis',), kwargs={'installation_size_kwp': 8, 'credit_params': {'credit_annual_rate': 0.07}}
            ).get()

        assert data['input']['installation_size_kwp'] == 8
        assert data['credit']['credit_annual_rate'] == 0.07
        assert data['cash']['monthly_payment'] == 0

    def test_entree_invalide_propagee(self):
        with pytest.raises(InvalidInputError):
            run_comparison_task.apply(args=('Tunis',)).get()


class TestSolarAuditTask:

    def test_resultat_serialise(self):
        with patch('solar_calc.services.audit.get_location_yield', return_value=TUNIS_YIELD), \
                patch.object(run_solar_audit_task, 'update_state') as progress:
            data = run_solar_audit_task.apply(args=('Tunis', 150.0, 2, 'Pharmacie')).get()

        assert data['location'] == 'Tunis'
        assert data['yield_source'] == 'fallback'
        assert progress.call_count == 2


class TestRefreshYieldsTask:

    def test_rafraichissement(self):
        with patch('weather.tasks.get_location_yields', return_value={'Tunis': 1650.0}) as lookup, \
                patch('weather.tasks.clear_yield_cache') as clear, \
                patch.object(refresh_location_yields_task, 'update_state'):
            data = refresh_location_yields_task.apply(kwargs={'force': True}).get()

        assert data == {'Tunis': 1650.0}
        clear.assert_called_once()
        lookup.assert_called_once_with(use_cache=True)
