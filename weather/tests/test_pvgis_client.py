"""
Tests unitaires du client PVGIS (sans appel réseau).
weather/tests/test_pvgis_client.py
"""

import unittest
from unittest.mock import MagicMock, patch

import pandas as pd
import requests

from weather.contracts import create_yield_data, validate_monthly_dataframe
from weather.services.pvgis import PVGISClient


def fake_response(payload=None, status=200, json_error=None):
    response = MagicMock()
    response.status_code = status
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(response=response)
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


class TestPVGISClient(unittest.TestCase):
    """Appel PVcalc et parsing de la production mensuelle"""

    def setUp(self):
        self.client = PVGISClient(max_retries=0)
        self.payload = {
            'outputs': {
                'monthly': {
                    'fixed': [
                        {'month': m, 'E_d': 4.0, 'E_m': 120.0 + m, 'H(i)_m': 150.0}
                        for m in range(12, 0, -1)
                    ]
                }
            }
        }

    def test_parametres_pvcalc(self):
        with patch.object(self.client.session, 'get', return_value=fake_response(self.payload)) as mocked:
            self.client.get_pv_calculation(36.8, 10.18)

        params = mocked.call_args.kwargs['params']
        self.assertEqual(params['peakpower'], 1)
        self.assertEqual(params['loss'], 14)
        self.assertEqual(params['outputformat'], 'json')
        self.assertEqual(mocked.call_args.kwargs['timeout'], 30)

    def test_coordonnees_invalides(self):
        with self.assertRaises(ValueError):
            self.client.get_pv_calculation(95, 10)
        with self.assertRaises(ValueError):
            self.client.get_pv_calculation(36, 200)

    def test_erreur_http_propagee(self):
        with patch.object(self.client.session, 'get', return_value=fake_response(status=503)):
            with self.assertRaises(requests.HTTPError):
                self.client.get_pv_calculation(36.8, 10.18)

    def test_reponse_non_json(self):
        error = requests.exceptions.JSONDecodeError("Expecting value", "<html>", 0)
        with patch.object(self.client.session, 'get', return_value=fake_response(json_error=error)):
            with self.assertRaises(ValueError):
                self.client.get_pv_calculation(36.8, 10.18)

    def test_parsing_mensuel(self):
        df = self.client.parse_monthly_to_dataframe(self.payload)

        self.assertEqual(len(df), 12)
        self.assertEqual(list(df['month']), list(range(1, 13)))
        self.assertIn('energy_kwh_per_kwp', df.columns)
        self.assertIn('irradiation_kwh_m2', df.columns)
        self.assertEqual(df['energy_kwh_per_kwp'].iloc[0], 121.0)

    def test_structure_invalide(self):
        with self.assertRaises(ValueError):
            self.client.parse_monthly_to_dataframe({'outputs': {}})


class TestYieldContract(unittest.TestCase):
    """Contrat du DataFrame mensuel"""

    def test_creation_yield_data(self):
        df = pd.DataFrame({'month': range(1, 13), 'energy_kwh_per_kwp': [140.004] * 12})
        data = create_yield_data('Sfax', df)

        self.assertEqual(data.source, 'api')
        self.assertEqual(data.annual_kwh_per_kwp, 1680.0)
        self.assertEqual(data.monthly_kwh_per_kwp[0], 140.0)

    def test_production_negative_refusee(self):
        df = pd.DataFrame({'month': range(1, 13), 'energy_kwh_per_kwp': [-1.0] + [100.0] * 11})
        with self.assertRaises(ValueError):
            validate_monthly_dataframe(df)

    def test_valeurs_manquantes_refusees(self):
        df = pd.DataFrame({'month': range(1, 13), 'energy_kwh_per_kwp': [None] + [100.0] * 11})
        with self.assertRaises(ValueError):
            validate_monthly_dataframe(df)


if __name__ == '__main__':
    unittest.main()
