"""Comparateur de régimes fiscaux"""
import pytest

from config.constants import Regime
from core.errors import InvalidFiscalInputs
from core.models import FiscalInputs, RegimeResult
from core.taxation import (
    compare_all, compute_lmnp_reel, compute_micro, compute_sci_is, corporate_tax,
    recommend_regime, savings_versus,
)


class TestMicro:
    def test_abatement(self):
        """15 000 € de loyers -> base 10 500 €, impôt 4 956 € à TMI 30%"""
        result = compute_micro(FiscalInputs(15000, marginal_tax_rate_percent=30))
        assert result.regime == Regime.MICRO
        assert result.taxable_base == pytest.approx(10500)
        assert result.estimated_tax == pytest.approx(4956)

    def test_ignores_real_expenses(self):
        plain = compute_micro(FiscalInputs(15000))
        loaded = compute_micro(FiscalInputs(15000, 5000, 4000, 2000))
        assert plain == loaded


class TestLmnpReel:
    def test_real_base(self):
        """15 000 - 3 000 - 6 000 - 2 000 = 4 000 € -> 4 000 x 47,2% = 1 888 €"""
        inputs = FiscalInputs(15000, 3000, 6000, 2000, marginal_tax_rate_percent=30)
        result = compute_lmnp_reel(inputs)
        assert result.taxable_base == pytest.approx(4000)
        assert result.estimated_tax == pytest.approx(1888)

    def test_cheaper_than_micro_with_charges(self):
        """Micro sur les mêmes revenus : 10 500 x 47,2% = 4 956 €"""
        inputs = FiscalInputs(15000, 3000, 6000, 2000, marginal_tax_rate_percent=30)
        micro = compute_micro(inputs)
        assert micro.taxable_base == pytest.approx(10500)
        assert micro.estimated_tax == pytest.approx(4956)
        assert compute_lmnp_reel(inputs).estimated_tax < micro.estimated_tax

    def test_deficit_floored(self):
        result = compute_lmnp_reel(FiscalInputs(5000, 3000, 4000, 2000))
        assert result.taxable_base == 0.0
        assert result.estimated_tax == 0.0

    def test_tmi_scales_tax(self):
        low = compute_lmnp_reel(FiscalInputs(12000, 2000, marginal_tax_rate_percent=11))
        high = compute_lmnp_reel(FiscalInputs(12000, 2000, marginal_tax_rate_percent=41))
        assert high.estimated_tax > low.estimated_tax


class TestSciIs:
    def test_progressive_rate(self):
        """Base 50 000 € -> 42 500 x 15% + 7 500 x 25% = 8 250 €"""
        result = compute_sci_is(FiscalInputs(60000, 10000))
        assert result.taxable_base == pytest.approx(50000)
        assert result.estimated_tax == pytest.approx(8250)

    def test_reduced_rate_only(self):
        assert corporate_tax(42500) == pytest.approx(6375)
        assert corporate_tax(10000) == pytest.approx(1500)

    def test_zero_base(self):
        assert corporate_tax(0) == 0.0

    def test_independent_of_tmi(self):
        a = compute_sci_is(FiscalInputs(60000, 10000, marginal_tax_rate_percent=0))
        b = compute_sci_is(FiscalInputs(60000, 10000, marginal_tax_rate_percent=45))
        assert a.estimated_tax == b.estimated_tax


class TestCompareAll:
    def test_order(self):
        results = compare_all(FiscalInputs(15000))
        assert [r.regime for r in results] == [Regime.MICRO, Regime.LMNP_REEL, Regime.SCI_IS]

    def test_non_negative(self):
        for inputs in (FiscalInputs(0), FiscalInputs(1000, 50000, 5000, 5000), FiscalInputs(80000)):
            for result in compare_all(inputs):
                assert result.taxable_base >= 0
                assert result.estimated_tax >= 0

    def test_recommend_lowest(self):
        results = compare_all(FiscalInputs(15000, 3000, 4000, 2000))
        best = recommend_regime(results)
        assert best.estimated_tax == min(r.estimated_tax for r in results)

    def test_recommend_tie_keeps_first(self):
        results = compare_all(FiscalInputs(0))
        assert recommend_regime(results).regime == Regime.MICRO

    def test_recommend_empty(self):
        with pytest.raises(ValueError):
            recommend_regime([])

    def test_savings_versus_micro(self):
        results = compare_all(FiscalInputs(15000, 3000, 4000, 2000))
        savings = savings_versus(results, Regime.MICRO)
        assert savings[Regime.MICRO] == 0
        assert savings[Regime.LMNP_REEL] == pytest.approx(4956 - 6000 * 0.472)


class TestFiscalValidation:
    @pytest.mark.parametrize("kwargs", [
        dict(gross_income=-1),
        dict(gross_income=1000, deductible_expenses=-1),
        dict(gross_income=1000, depreciation_amount=-1),
        dict(gross_income=1000, loan_interest_paid=-1),
        dict(gross_income=float("inf")),
        dict(gross_income=1000, marginal_tax_rate_percent=150),
        dict(gross_income=1000, social_contribution_rate_percent=-5),
    ])
    def test_rejected(self, kwargs):
        with pytest.raises(InvalidFiscalInputs):
            FiscalInputs(**kwargs)

    def test_negative_result_rejected(self):
        with pytest.raises(InvalidFiscalInputs):
            RegimeResult(Regime.MICRO, -1, 0)

    def test_combined_rate(self):
        assert FiscalInputs(1000, marginal_tax_rate_percent=30).combined_rate == pytest.approx(0.472)
