"""Moteur d'amortissement"""
from datetime import date

import pytest

from core.amortization import (
    compare_scenarios, compute_schedule, effective_annual_rate, iter_months,
    monthly_payment, payoff_date,
)
from core.errors import FinancialInputError, InvalidLoanConfiguration
from core.models import LoanTerms


@pytest.fixture
def base_terms():
    return LoanTerms(315000, 4.0, 240)


class TestMonthlyPayment:
    def test_reference_loan(self, base_terms):
        """315 000 € à 4% sur 20 ans -> environ 1 909 €"""
        assert monthly_payment(base_terms) == pytest.approx(1908.8, abs=1)

    def test_zero_rate(self):
        assert monthly_payment(LoanTerms(120000, 0, 120)) == 1000.0

    def test_higher_rate_costs_more(self):
        low = compute_schedule(LoanTerms(200000, 3.0, 240))
        high = compute_schedule(LoanTerms(200000, 4.5, 240))
        assert high.monthly_payment > low.monthly_payment
        assert high.total_interest > low.total_interest

    def test_payment_excludes_extra(self, base_terms):
        with_extra = base_terms.with_changes(extra_monthly_payment=300)
        assert monthly_payment(with_extra) == monthly_payment(base_terms)


class TestSchedule:
    def test_balance_reaches_zero_at_term(self, base_terms):
        schedule = compute_schedule(base_terms)
        assert schedule.payoff_month == 240
        assert schedule.final_point.month_index == 240
        assert schedule.final_point.remaining_balance == 0.0

    def test_sampled_yearly(self, base_terms):
        schedule = compute_schedule(base_terms)
        assert len(schedule) == 20
        assert [p.month_index for p in schedule] == list(range(12, 241, 12))
        assert [p.year_index for p in schedule] == list(range(1, 21))

    def test_total_paid(self, base_terms):
        schedule = compute_schedule(base_terms)
        assert schedule.total_paid == pytest.approx(base_terms.principal + schedule.total_interest)
        assert schedule.total_paid == pytest.approx(schedule.monthly_payment * 240, abs=0.01)

    def test_totals_cover_every_month(self, base_terms):
        months = list(iter_months(base_terms))
        schedule = compute_schedule(base_terms)
        assert len(months) == 240
        assert schedule.total_interest == pytest.approx(sum(p.interest_portion for p in months))
        assert sum(p.principal_portion for p in months) == pytest.approx(base_terms.principal)

    def test_balance_non_increasing(self, base_terms):
        balances = [p.remaining_balance for p in iter_months(base_terms)]
        assert all(b2 <= b1 for b1, b2 in zip(balances, balances[1:]))

    def test_portions_add_up(self, base_terms):
        for p in iter_months(base_terms):
            assert p.interest_portion >= 0
            assert p.principal_portion >= 0
            assert p.interest_portion + p.principal_portion == pytest.approx(p.total_monthly_payment)

    def test_idempotent(self, base_terms):
        assert compute_schedule(base_terms) == compute_schedule(base_terms)

    def test_iterator_restarts(self, base_terms):
        first = next(iter_months(base_terms))
        again = next(iter_months(base_terms))
        assert first.month_index == again.month_index == 1

    def test_year_index(self, base_terms):
        months = list(iter_months(base_terms))
        assert months[11].year_index == 1
        assert months[12].year_index == 2

    def test_zero_rate_schedule(self):
        schedule = compute_schedule(LoanTerms(120000, 0, 120))
        assert schedule.total_interest == 0.0
        assert schedule.payoff_month == 120


class TestExtraPayment:
    def test_extra_shortens_loan(self, base_terms):
        base = compute_schedule(base_terms)
        faster = compute_schedule(base_terms.with_changes(extra_monthly_payment=300))
        assert faster.payoff_month < 240
        assert faster.total_interest < base.total_interest
        assert faster.final_point.remaining_balance == 0.0

    def test_exact_payoff(self):
        """1 200 € à taux nul, 100 €/mois + 100 € supplémentaires -> soldé en 6 mois"""
        months = list(iter_months(LoanTerms(1200, 0, 12, extra_monthly_payment=100)))
        assert len(months) == 6
        assert months[-1].remaining_balance == 0.0
        assert months[-1].total_monthly_payment == pytest.approx(200)

    def test_last_payment_clamped(self):
        months = list(iter_months(LoanTerms(1000, 0, 12, extra_monthly_payment=250)))
        assert months[-1].principal_portion <= 1000
        assert sum(p.principal_portion for p in months) == pytest.approx(1000)


class TestValidation:
    @pytest.mark.parametrize("kwargs", [
        dict(principal=0, annual_rate_percent=4, term_months=240),
        dict(principal=-1000, annual_rate_percent=4, term_months=240),
        dict(principal=float("nan"), annual_rate_percent=4, term_months=240),
        dict(principal=1000, annual_rate_percent=-0.5, term_months=240),
        dict(principal=1000, annual_rate_percent=101, term_months=240),
        dict(principal=1000, annual_rate_percent=4, term_months=0),
        dict(principal=1000, annual_rate_percent=4, term_months=12.5),
        dict(principal=1000, annual_rate_percent=4, term_months=True),
        dict(principal=1000, annual_rate_percent=4, term_months=240, extra_monthly_payment=-1),
    ])
    def test_rejected(self, kwargs):
        with pytest.raises(InvalidLoanConfiguration):
            LoanTerms(**kwargs)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            LoanTerms(0, 4, 240)
        assert issubclass(InvalidLoanConfiguration, FinancialInputError)

    def test_integral_float_term_accepted(self):
        assert LoanTerms(1000, 4, 12.0).term_months == 12

    def test_non_amortizing_loan(self):
        """Mensualité égale aux intérêts du premier mois : le prêt ne s'amortit pas"""
        terms = LoanTerms(100000, 100, 10 ** 6)
        with pytest.raises(InvalidLoanConfiguration):
            iter_months(terms)
        with pytest.raises(InvalidLoanConfiguration):
            compute_schedule(terms)


class TestCompareScenarios:
    def test_renegotiation(self, base_terms):
        comparison = compare_scenarios(base_terms, base_terms.with_changes(annual_rate_percent=3.0))
        assert comparison.monthly_gain > 0
        assert comparison.interest_saved > 0
        assert comparison.months_saved == 0
        assert comparison.remaining_term_years == 20

    def test_extra_payment(self, base_terms):
        comparison = compare_scenarios(base_terms, base_terms.with_changes(extra_monthly_payment=300))
        assert comparison.monthly_gain == 0
        assert comparison.months_saved > 0
        assert comparison.remaining_term_years < 20

    def test_identical(self, base_terms):
        comparison = compare_scenarios(base_terms, base_terms)
        assert comparison.monthly_gain == 0
        assert comparison.interest_saved == 0


class TestEffectiveRate:
    def test_without_insurance(self):
        rate = effective_annual_rate(LoanTerms(200000, 4.0, 240))
        assert rate == pytest.approx(((1 + 0.04 / 12) ** 12 - 1) * 100, abs=0.01)

    def test_insurance_raises_rate(self):
        terms = LoanTerms(200000, 4.0, 240)
        assert effective_annual_rate(terms, 0.35) > effective_annual_rate(terms)

    def test_zero_rate(self):
        assert effective_annual_rate(LoanTerms(120000, 0, 120)) == pytest.approx(0.0, abs=1e-6)

    def test_negative_insurance(self):
        with pytest.raises(InvalidLoanConfiguration):
            effective_annual_rate(LoanTerms(200000, 4.0, 240), -0.1)


class TestPayoffDate:
    def test_full_term(self, base_terms):
        assert payoff_date(date(2024, 1, 1), compute_schedule(base_terms)) == date(2044, 1, 1)

    def test_early_payoff(self):
        schedule = compute_schedule(LoanTerms(1200, 0, 12, extra_monthly_payment=100))
        assert payoff_date(date(2024, 1, 31), schedule) == date(2024, 7, 31)
