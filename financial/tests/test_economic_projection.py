"""
Tests de la projection économique (VAN, TRI, paybacks).
"""

import numpy_financial as npf
import pytest

from core.exceptions import CalculationError, InvalidInputError
from financial.constants import (
    DEFAULT_CREDIT_PARAMETERS,
    DEFAULT_ESCO_PARAMETERS,
    DEFAULT_LEASING_PARAMETERS,
    EconomicAssumptions,
    EscoParameters,
    ProjectParameters,
)
from financial.contracts import FinancingSchedule, FinancingSolutionType, ProjectInput
from financial.services.cash import calculate_cash_solution
from financial.services.credit import calculate_credit_solution
from financial.services.economic_projection import (
    EconomicProjector,
    compute_irr,
    compute_payback,
    project_economics,
)
from financial.services.esco import calculate_esco_solution
from financial.services.leasing import calculate_leasing_solution
from financial.services.project_calculator import calculate_project
from solar_calc.services.tariff import STEG_NON_RESIDENTIAL_BT

RAW = [1000.0] * 12
BILLED = [200.0] * 12


@pytest.fixture
def project():
    return calculate_project(ProjectInput.from_fields('Tunis', installation_size_kwp=5), ProjectParameters())


class TestIndicators:

    def test_tri_simple(self):
        assert compute_irr([-1000, 1100]) == pytest.approx(0.10, abs=1e-6)

    def test_tri_sans_changement_de_signe(self):
        assert compute_irr([-100, -50, -10]) is None
        assert compute_irr([100, 50]) is None

    def test_tri_van_non_finie(self):
        with pytest.raises(CalculationError):
            compute_irr([-1e308, 1e308])

    def test_payback_interpole(self):
        assert compute_payback([-100, -50, 50]) == 1.5

    def test_payback_non_atteint(self):
        assert compute_payback([-100, -90, -80]) is None

    def test_payback_immediat(self):
        assert compute_payback([0, 10]) == 0.0

    def test_cumul_qui_redevient_negatif(self):
        assert compute_payback([0, -10, -20]) is None
        assert compute_payback([0, -10, 10]) == 1.5
        assert compute_payback([-100, 50, -10, 30]) == 2.25


class TestCashProjection:
    """Projection d'un achat comptant (5 kWc, CAPEX 10 000 DT)."""

    @pytest.fixture
    def result(self):
        return project_economics(RAW, BILLED, 5)

    def test_annee_zero(self, result):
        year0 = result.annual[0]

        assert year0.year == 0
        assert year0.investment_dt == 10000
        assert year0.cash_flow_dt == -10000
        assert result.initial_investment_dt == result.capex_dt == 10000

    def test_economies_premiere_annee(self, result):
        monthly = STEG_NON_RESIDENTIAL_BT.compute_bill(1000).amount_dt - STEG_NON_RESIDENTIAL_BT.compute_bill(200).amount_dt

        assert result.monthly[0].monthly_savings_dt == pytest.approx(monthly, abs=0.01)
        assert result.annual[1].annual_savings_dt == pytest.approx(12 * monthly, abs=0.05)

    def test_inflation_et_degradation(self, result):
        year1 = result.annual[1].annual_savings_dt

        assert result.annual[2].annual_savings_dt == pytest.approx(year1 * 1.07 * 0.996, abs=0.05)
        assert result.annual[1].opex_dt == pytest.approx(400)
        assert result.annual[2].opex_dt == pytest.approx(412)

    def test_van_et_tri(self, result):
        assert len(result.annual) == 26
        assert result.npv_dt == result.annual[-1].cumulative_cash_flow_discounted_dt
        assert result.npv_dt > 0
        assert result.irr is not None
        assert npf.npv(result.irr, result.cash_flows()) == pytest.approx(0, abs=0.05)
        assert result.irr_pct == round(result.irr * 100, 2)

    def test_paybacks(self, result):
        assert 0 < result.simple_payback_years < result.discounted_payback_years < 25
        assert result.roi_pct == pytest.approx(result.annual[-1].cumulative_cash_flow_dt / 10000 * 100, abs=0.01)

    def test_tarif_evite_moyen(self, result):
        saved = 12 * 800
        assert result.average_avoided_tariff == pytest.approx(
            sum(m.monthly_savings_dt for m in result.monthly) / saved, abs=1e-4
        )

    def test_export_dataframe(self, result):
        df = result.to_dataframe()

        assert list(df.index) == list(range(26))
        assert 'cumulative_cash_flow_discounted_dt' in df.columns

    def test_tableau_synthese(self, result):
        projector = EconomicProjector(RAW, BILLED, 5)
        rows = projector.get_projection_table_data(result)

        years = [row['year'] for row in rows]
        assert {1, 2, 3, 5, 10, 15, 20, 25} <= set(years)
        assert rows[-1]['status'] == '✅'


class TestProjectNeverPaysBack:
    """Économies inférieures à l'OPEX : aucun retour sur l'horizon."""

    def test_indicateurs_non_atteints(self):
        result = project_economics([300.0] * 12, [290.0] * 12, 10)

        assert result.simple_payback_years is None
        assert result.discounted_payback_years is None
        assert result.irr is None
        assert result.npv_dt < 0

    def test_horizon_court(self):
        result = project_economics(RAW, BILLED, 5, assumptions=EconomicAssumptions(horizon_years=3))

        assert len(result.annual) == 4
        assert result.discounted_payback_years is None


class TestFinancedProjection:
    """Échéanciers crédit, leasing et ESCO."""

    def test_credit(self, project):
        credit = calculate_credit_solution(project, DEFAULT_CREDIT_PARAMETERS)
        schedule = FinancingSchedule.from_solution(credit, project)
        result = project_economics(RAW, BILLED, 5, schedule=schedule)

        assert result.financing_type is FinancingSolutionType.CREDIT
        assert result.annual[0].cash_flow_dt == pytest.approx(-credit.initial_investment, abs=0.01)
        assert result.annual[1].financing_dt == pytest.approx(12 * credit.monthly_payment, abs=0.01)
        assert result.annual[7].financing_dt == pytest.approx(12 * credit.monthly_payment, abs=0.01)
        assert result.annual[8].financing_dt == 0

    def test_leasing_rachat_en_fin_de_contrat(self, project):
        leasing = calculate_leasing_solution(project, DEFAULT_LEASING_PARAMETERS)
        schedule = FinancingSchedule.from_solution(leasing, project)

        assert schedule.contract_years == 7
        assert schedule.payments_in_year(7) == pytest.approx(
            12 * leasing.monthly_payment + leasing.leasing_residual_value_dt
        )
        assert schedule.opex_factor_in_year(3) == pytest.approx(1.3)
        assert schedule.opex_factor_in_year(8) == 1.0

    def test_esco_opex_pris_en_charge_pendant_le_contrat(self, project):
        esco = calculate_esco_solution(project, DEFAULT_ESCO_PARAMETERS)
        schedule = FinancingSchedule.from_solution(esco, project)
        result = project_economics(RAW, BILLED, 5, schedule=schedule)

        assert result.annual[0].cash_flow_dt == 0
        assert result.annual[7].opex_dt == 0
        assert result.annual[8].opex_dt > 0

    def test_esco_cumul_jamais_rattrape(self):
        """Une redevance supérieure aux économies ne donne pas de retour immédiat."""
        schedule = FinancingSchedule(
            financing_type=FinancingSolutionType.ESCO,
            capex_dt=25000.0,
            initial_outlay_dt=0.0,
            monthly_payment_dt=5000.0,
            contract_months=84,
            contract_opex_factor=0.0,
        )
        result = project_economics(RAW, [600.0] * 12, 5, schedule=schedule)

        assert result.annual[0].cumulative_cash_flow_dt == 0
        assert result.annual[-1].cumulative_cash_flow_dt < 0
        assert result.npv_dt < 0
        assert result.simple_payback_years is None
        assert result.discounted_payback_years is None

    def test_esco_cout_par_kwc_propre(self, project):
        esco = calculate_esco_solution(project, EscoParameters(esco_cost_per_kwp_dt=2000))
        schedule = FinancingSchedule.from_solution(esco, project)
        result = project_economics(RAW, BILLED, 5, schedule=schedule)

        assert schedule.capex_dt == pytest.approx(10000)
        assert result.capex_dt == pytest.approx(10000)
        assert result.roi_pct == pytest.approx(result.annual[-1].cumulative_cash_flow_dt / 10000 * 100, abs=0.01)

    def test_comptant(self, project):
        schedule = FinancingSchedule.from_solution(calculate_cash_solution(project), project)

        assert schedule.initial_outlay_dt == project.capex_dt
        assert schedule.payments_in_year(1) == 0


class TestInvalidInputs:

    def test_serie_incomplete(self):
        with pytest.raises(InvalidInputError):
            project_economics([1000.0] * 11, BILLED, 5)

    def test_puissance_nulle(self):
        with pytest.raises(InvalidInputError):
            project_economics(RAW, BILLED, 0)

    def test_horizon_nul(self):
        with pytest.raises(InvalidInputError):
            project_economics(RAW, BILLED, 5, assumptions=EconomicAssumptions(horizon_years=0))
