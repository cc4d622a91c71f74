"""Tables de comparaison"""
from core.amortization import compare_scenarios, compute_schedule, iter_months
from core.comparison import (
    SCHEDULE_COLUMNS, compare_loan_scenarios, compare_regimes, schedule_to_frame,
)
from core.models import FiscalInputs, LoanTerms
from core.taxation import compare_all


class TestScheduleFrame:
    def test_yearly(self):
        df = schedule_to_frame(compute_schedule(LoanTerms(315000, 4.0, 240)).points)
        assert list(df.columns) == SCHEDULE_COLUMNS
        assert len(df) == 20
        assert df["balance"].iloc[-1] == 0.0

    def test_monthly(self):
        df = schedule_to_frame(iter_months(LoanTerms(120000, 0, 120)))
        assert len(df) == 120
        assert (df["interest"] == 0).all()
        assert df["year"].iloc[12] == 2

    def test_empty(self):
        df = schedule_to_frame([])
        assert df.empty
        assert list(df.columns) == SCHEDULE_COLUMNS


class TestCompareRegimes:
    def test_sorted_and_flagged(self):
        df = compare_regimes(compare_all(FiscalInputs(15000, 3000, 4000, 2000)))
        assert len(df) == 3
        assert df["Impôt estimé"].is_monotonic_increasing
        assert df["Recommandé"].sum() == 1
        assert bool(df.iloc[0]["Recommandé"])

    def test_empty(self):
        df = compare_regimes([])
        assert df.empty
        assert "Impôt estimé" in df.columns


class TestCompareLoanScenarios:
    def test_two_rows(self):
        base = LoanTerms(315000, 4.0, 240)
        comparison = compare_scenarios(base, base.with_changes(extra_monthly_payment=300))
        df = compare_loan_scenarios(comparison)
        assert df["Scénario"].tolist() == ["Actuel", "Simulation"]
        assert df.loc[1, "Durée (mois)"] < df.loc[0, "Durée (mois)"]
        assert df.loc[1, "Mensualité totale"] == df.loc[1, "Mensualité"] + 300
