"""
Tests des quatre calculateurs de financement (comptant, crédit, leasing, ESCO).
"""

import pytest

from core.exceptions import InvalidInputError
from financial.constants import (
    DEFAULT_CREDIT_PARAMETERS,
    DEFAULT_ESCO_PARAMETERS,
    DEFAULT_LEASING_PARAMETERS,
    CreditParameters,
    EscoParameters,
    LeasingParameters,
    ProjectParameters,
)
from financial.contracts import FinancingSolutionType, ProjectInput
from financial.services.annuity import annuity_present_value
from financial.services.cash import calculate_cash_solution
from financial.services.credit import calculate_credit_solution
from financial.services.esco import calculate_esco_solution
from financial.services.leasing import calculate_leasing_solution
from financial.services.project_calculator import calculate_project


@pytest.fixture
def project():
    """10 kWc à Tunis : CAPEX 25 000 DT, 16 800 kWh/an, 252 DT/mois d'économies."""
    return calculate_project(ProjectInput.from_fields('Tunis', installation_size_kwp=10), ProjectParameters())


@pytest.fixture
def profitable_project():
    """Même projet avec un kWh évité à 0.45 DT (630 DT/mois d'économies)."""
    parameters = ProjectParameters(electricity_price_dt_per_kwh=0.45)
    return calculate_project(ProjectInput.from_fields('Tunis', installation_size_kwp=10), parameters)


class TestProjectCalculation:

    def test_grandeurs_communes(self, project):
        assert project.capex_dt == 25000
        assert project.annual_production_kwh == 16800
        assert project.annual_gross_savings_dt == pytest.approx(3024)
        assert project.monthly_gross_savings_dt == project.annual_gross_savings_dt / 12
        assert project.monthly_opex_dt == project.annual_opex_dt / 12
        assert project.annual_opex_dt == pytest.approx(375)

    def test_dimensionnement_par_budget(self):
        calc = calculate_project(ProjectInput.from_fields('Sfax', investment_amount_dt=50000), ProjectParameters())

        assert calc.capex_dt == 50000
        assert calc.size_kwp == 20


class TestCashSolution:

    def test_comptant(self, project):
        cash = calculate_cash_solution(project)

        assert cash.type is FinancingSolutionType.CASH
        assert cash.initial_investment == project.capex_dt
        assert cash.monthly_payment == 0
        assert cash.monthly_cashflow == pytest.approx(252 - 31.25)


class TestCreditSolution:

    def test_autofinancement_et_capital(self, project):
        credit = calculate_credit_solution(project, DEFAULT_CREDIT_PARAMETERS)

        assert credit.self_financing_dt == pytest.approx(2500)
        assert credit.financed_principal_dt == pytest.approx(22500)
        assert credit.initial_investment + credit.financed_principal_dt == pytest.approx(project.capex_dt)
        assert credit.credit_monthly_rate == pytest.approx(0.0075)

    def test_amortissement_complet(self, project):
        credit = calculate_credit_solution(project, DEFAULT_CREDIT_PARAMETERS)
        schedule = credit.amortization_schedule()

        assert len(schedule) == 84
        assert schedule['balance'].iloc[-1] == pytest.approx(0, abs=1e-6)
        assert 84 * credit.monthly_payment - schedule['interest'].sum() == pytest.approx(credit.financed_principal_dt)

    def test_taux_nul(self, project):
        credit = calculate_credit_solution(project, CreditParameters(credit_annual_rate=0))

        assert credit.monthly_payment == pytest.approx(22500 / 84)

    def test_cashflow(self, project):
        credit = calculate_credit_solution(project, DEFAULT_CREDIT_PARAMETERS)

        assert credit.monthly_cashflow == pytest.approx(
            project.monthly_gross_savings_dt - credit.monthly_payment - credit.monthly_opex
        )

    def test_autofinancement_total(self, project):
        with pytest.warns(UserWarning):
            credit = calculate_credit_solution(project, CreditParameters(self_financing_rate=1.0))

        assert credit.monthly_payment == 0
        assert credit.initial_investment == project.capex_dt

    def test_taux_hors_bornes(self, project):
        with pytest.raises(InvalidInputError):
            calculate_credit_solution(project, CreditParameters(credit_annual_rate=1.5))


class TestLeasingSolution:

    def test_apport_residuel_et_loyers_reconstituent_le_capex(self, project):
        leasing = calculate_leasing_solution(project, DEFAULT_LEASING_PARAMETERS)
        financed = annuity_present_value(leasing.monthly_payment, leasing.leasing_monthly_rate, 84)

        assert leasing.leasing_down_payment_dt == pytest.approx(1250)
        assert leasing.leasing_residual_value_dt == pytest.approx(2500)
        assert leasing.initial_investment + financed + leasing.leasing_residual_value_dt == pytest.approx(
            project.capex_dt
        )

    def test_opex_majore(self, project):
        leasing = calculate_leasing_solution(project, DEFAULT_LEASING_PARAMETERS)

        assert leasing.monthly_opex == pytest.approx(project.monthly_opex_dt * 1.3)

    def test_taux_nul(self, project):
        leasing = calculate_leasing_solution(project, LeasingParameters(leasing_annual_rate=0))

        assert leasing.monthly_payment == pytest.approx((25000 - 1250 - 2500) / 84)

    def test_apport_et_residuel_depassent_le_capex(self, project):
        with pytest.raises(InvalidInputError):
            calculate_leasing_solution(
                project, LeasingParameters(self_financing_rate=0.95, leasing_residual_value_rate=0.10)
            )


class TestEscoSolution:

    def test_aucun_investissement_client(self, profitable_project):
        esco = calculate_esco_solution(profitable_project, DEFAULT_ESCO_PARAMETERS)

        assert esco.initial_investment == 0
        assert esco.monthly_opex == 0
        assert esco.esco_capex_dt == profitable_project.capex_dt
        assert esco.esco_target_irr_monthly == pytest.approx(1.16 ** (1 / 12) - 1)
        assert esco.is_viable
        assert esco.viability_error is None

    def test_offre_non_viable_reste_calculee(self, project):
        esco = calculate_esco_solution(project, DEFAULT_ESCO_PARAMETERS)

        assert not esco.is_viable
        assert esco.monthly_payment > project.monthly_gross_savings_dt
        assert esco.monthly_cashflow < 0
        assert 'non viable' in esco.viability_error

    def test_redevance_recupere_capex_au_tri_cible(self, project):
        esco = calculate_esco_solution(project, EscoParameters(esco_opex_included=False))

        recovered = annuity_present_value(esco.monthly_payment, esco.esco_target_irr_monthly, 84)
        assert recovered == pytest.approx(project.capex_dt)
        assert esco.monthly_opex == pytest.approx(project.monthly_opex_dt)

    def test_opex_inclus_augmente_la_redevance(self, project):
        included = calculate_esco_solution(project, EscoParameters(esco_opex_included=True))
        excluded = calculate_esco_solution(project, EscoParameters(esco_opex_included=False))

        assert included.monthly_payment > excluded.monthly_payment

    def test_cout_par_kwc_propre_a_l_esco(self, project):
        esco = calculate_esco_solution(project, EscoParameters(esco_cost_per_kwp_dt=2000))

        assert esco.esco_capex_dt == pytest.approx(20000)

    def test_tri_cible_monotone(self, profitable_project):
        """Un TRI cible plus élevé ne peut qu'augmenter la redevance."""
        results = [
            calculate_esco_solution(profitable_project, EscoParameters(esco_target_irr_annual=irr))
            for irr in (0.02, 0.08, 0.16, 0.22, 0.26, 0.30)
        ]

        cashflows = [r.monthly_cashflow for r in results]
        assert cashflows == sorted(cashflows, reverse=True)

        viability = [r.is_viable for r in results]
        first_failure = viability.index(False) if False in viability else len(viability)
        assert all(not v for v in viability[first_failure:])

    def test_tri_cible_eleve(self, project):
        with pytest.warns(UserWarning):
            esco = calculate_esco_solution(project, EscoParameters(esco_target_irr_annual=0.5))
        assert not esco.is_viable

    def test_tri_cible_nul(self, project):
        with pytest.raises(InvalidInputError):
            calculate_esco_solution(project, EscoParameters(esco_target_irr_annual=0))
