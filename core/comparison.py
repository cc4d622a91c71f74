"""Tables de comparaison pour l'affichage"""
from typing import Iterable, Sequence

import pandas as pd

from core.models import AmortizationPoint, AmortizationSchedule, RegimeResult, ScenarioComparison
from core.taxation import recommend_regime

SCHEDULE_COLUMNS = [
    "month", "year", "balance", "interest", "principal", "payment",
]


def schedule_to_frame(points: Iterable[AmortizationPoint]) -> pd.DataFrame:
    """Points d'échéancier -> DataFrame (valeurs non arrondies)"""
    rows = [{
        "month": p.month_index,
        "year": p.year_index,
        "balance": p.remaining_balance,
        "interest": p.interest_portion,
        "principal": p.principal_portion,
        "payment": p.total_monthly_payment,
    } for p in points]
    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)


def compare_regimes(results: Sequence[RegimeResult]) -> pd.DataFrame:
    """Tableau comparatif des régimes, trié par impôt croissant"""
    if not results:
        return pd.DataFrame(columns=["regime", "Régime", "Base imposable", "Impôt estimé", "Recommandé"])
    best = recommend_regime(results)
    rows = [{
        "regime": r.regime.value,
        "Régime": r.regime.label,
        "Base imposable": r.taxable_base,
        "Impôt estimé": r.estimated_tax,
        "Recommandé": r.regime == best.regime,
    } for r in results]
    df = pd.DataFrame(rows)
    return df.sort_values("Impôt estimé", kind="stable").reset_index(drop=True)


def _schedule_row(name: str, schedule: AmortizationSchedule) -> dict:
    terms = schedule.terms
    return {
        "Scénario": name,
        "Taux (%)": terms.annual_rate_percent,
        "Remboursement suppl.": terms.extra_monthly_payment,
        "Mensualité": schedule.monthly_payment,
        "Mensualité totale": schedule.monthly_payment + terms.extra_monthly_payment,
        "Intérêts totaux": schedule.total_interest,
        "Coût total": schedule.total_paid,
        "Durée (mois)": schedule.payoff_month,
        "Durée (ans)": schedule.payoff_years,
    }


def compare_loan_scenarios(comparison: ScenarioComparison) -> pd.DataFrame:
    """Prêt actuel vs simulation"""
    return pd.DataFrame([
        _schedule_row("Actuel", comparison.base),
        _schedule_row("Simulation", comparison.alternative),
    ])
