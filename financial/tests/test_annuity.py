"""
Tests unitaires des formules d'annuité
financial/tests/test_annuity.py
"""

import unittest

from financial.services.annuity import amortization_schedule, annuity_payment, annuity_present_value


class TestAnnuity(unittest.TestCase):
    """Mensualité constante et tableau d'amortissement"""

    def test_pret_totalement_amorti(self):
        """
        84 mensualités moins les intérêts = capital emprunté,
        solde nul au 84e mois.
        """
        principal = 22500.0
        rate = 0.09 / 12
        df = amortization_schedule(principal, rate, 84)

        self.assertEqual(len(df), 84)
        self.assertAlmostEqual(df['balance'].iloc[-1], 0.0, places=6)
        self.assertAlmostEqual(df['principal'].sum(), principal, places=6)
        self.assertAlmostEqual(df['payment'].sum() - df['interest'].sum(), principal, places=6)

    def test_taux_nul(self):
        self.assertEqual(annuity_payment(8400.0, 0.0, 84), 100.0)
        df = amortization_schedule(8400.0, 0.0, 84)
        self.assertAlmostEqual(df['balance'].iloc[-1], 0.0, places=9)
        self.assertEqual(df['interest'].sum(), 0.0)

    def test_principal_nul(self):
        self.assertEqual(annuity_payment(0.0, 0.01, 84), 0.0)

    def test_valeur_actuelle_inverse_mensualite(self):
        payment = annuity_payment(10000.0, 0.01, 84)
        self.assertAlmostEqual(annuity_present_value(payment, 0.01, 84), 10000.0, places=6)

    def test_formule_standard(self):
        # 10 000 à 1%/mois sur 12 mois
        self.assertAlmostEqual(annuity_payment(10000.0, 0.01, 12), 888.4879, places=3)


if __name__ == '__main__':
    unittest.main()
