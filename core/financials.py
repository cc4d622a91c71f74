"""Synthèse financière d'un bien : revenus, charges, crédit, fiscalité, alertes.

Construit à partir des lignes brutes du classeur (biens, loyers, dépenses).
Les montants restent non arrondis ; l'arrondi se fait à l'affichage.
"""
import math
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple

import pandas as pd

from config.constants import (
    AlertLevel, ExpenseCategory, PaymentStatus, Regime, TransactionType, TRANSACTIONS_COLUMNS,
)
from config.settings import (
    DEFAULT_LOAN_RATE, DEFAULT_LOAN_TERM_MONTHS, DEFAULT_LOAN_TO_VALUE,
    DEFAULT_MARGINAL_TAX_RATE, DEPRECIABLE_SHARE, DEPRECIATION_RATE,
    LOW_DEDUCTIONS_ALERT_RATIO, LOW_DEDUCTIONS_RATIO, MICRO_TIP_INCOME_CEILING,
    YIELD_ALERT_THRESHOLD,
)
from core.amortization import compute_schedule, iter_months
from core.models import AmortizationSchedule, FiscalInputs, LoanTerms, RegimeResult
from core.taxation import compare_all, recommend_regime
from utils.date_utils import last_n_months, months_between


@dataclass
class LoanYear:
    """Flux du crédit sur une année de prêt"""
    year: int
    interest: float
    capital: float
    payments: float


@dataclass
class PropertyFinancials:
    property_id: str
    name: str
    property_value: float
    income: float
    expenses: float
    deductible_expenses: float
    depreciation: float
    loan_terms: Optional[LoanTerms]
    loan_schedule: Optional[AmortizationSchedule]
    loan_year: LoanYear
    fiscal_inputs: FiscalInputs
    regimes: Tuple[RegimeResult, ...]
    monthly: pd.DataFrame
    transactions: pd.DataFrame
    suggestions: List[dict] = field(default_factory=list)
    alerts: List[dict] = field(default_factory=list)

    @property
    def monthly_loan_payment(self) -> float:
        if self.loan_schedule is None:
            return 0.0
        return self.loan_schedule.monthly_payment + self.loan_terms.extra_monthly_payment

    @property
    def cashflow(self) -> float:
        return self.income - self.expenses - self.loan_year.payments

    @property
    def yield_gross(self) -> float:
        if self.property_value <= 0:
            return 0.0
        return self.income / self.property_value * 100

    @property
    def recommended(self) -> RegimeResult:
        return recommend_regime(self.regimes)

    def regime(self, regime: Regime) -> RegimeResult:
        return next(r for r in self.regimes if r.regime == regime)

    def waterfall(self) -> pd.DataFrame:
        """Revenus -> charges -> crédit -> cashflow"""
        return pd.DataFrame([
            {"name": "Revenus", "value": self.income, "type": "income"},
            {"name": "Charges", "value": -self.expenses, "type": "expense"},
            {"name": "Crédit", "value": -(self.loan_year.interest + self.loan_year.capital), "type": "expense"},
            {"name": "Cashflow", "value": self.cashflow, "type": "total"},
        ])


def _num(value, default: float = 0.0) -> float:
    """Cellule Excel -> float (vide ou NaN -> default)"""
    if value is None:
        return default
    try:
        value = float(value)
    except (TypeError, ValueError):
        return default
    return default if math.isnan(value) else value


def _to_bool(series: pd.Series) -> pd.Series:
    if series.dtype == bool:
        return series
    return series.map(lambda v: str(v).strip().lower() in ("true", "1", "oui", "yes"))


def _text(value) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    return str(value).strip()


def _dated(df: pd.DataFrame) -> pd.DataFrame:
    """Dates et montants typés ; lignes sans date écartées"""
    if df.empty or "date" not in df.columns:
        return pd.DataFrame(columns=["date", "amount"])
    df = df.copy()
    df["date"] = pd.to_datetime(df["date"], errors="coerce")
    df["amount"] = pd.to_numeric(df["amount"], errors="coerce").fillna(0.0)
    return df.dropna(subset=["date"])


def default_depreciation(property_value: float) -> float:
    """Amortissement annuel : 85% de la valeur (hors terrain) à 3%"""
    return property_value * DEPRECIABLE_SHARE * DEPRECIATION_RATE


def loan_terms_for(prop) -> Optional[LoanTerms]:
    """Conditions du prêt d'un bien ; quotité par défaut si le montant est absent"""
    value = _num(prop.get("property_value"))
    amount = _num(prop.get("loan_amount"), default=value * DEFAULT_LOAN_TO_VALUE)
    if amount <= 0:
        return None
    return LoanTerms(
        principal=amount,
        annual_rate_percent=_num(prop.get("loan_rate"), DEFAULT_LOAN_RATE),
        term_months=int(_num(prop.get("loan_term_months"), DEFAULT_LOAN_TERM_MONTHS)),
        extra_monthly_payment=_num(prop.get("extra_monthly_payment")),
    )


def loan_year_figures(terms: Optional[LoanTerms], year: int = 1) -> LoanYear:
    """Intérêts et capital remboursés pendant l'année de prêt `year` (mois exacts)"""
    if terms is None:
        return LoanYear(year, 0.0, 0.0, 0.0)
    interest = capital = 0.0
    for point in iter_months(terms):
        if point.year_index < year:
            continue
        if point.year_index > year:
            break
        interest += point.interest_portion
        capital += point.principal_portion
    return LoanYear(year, interest, capital, interest + capital)


def current_loan_year(start, today: date) -> int:
    start = pd.to_datetime(start, errors="coerce") if start is not None else None
    if start is None or pd.isna(start):
        return 1
    elapsed = months_between(start.date(), today)
    return max(1, elapsed // 12 + 1)


def monthly_cashflow(payments: pd.DataFrame, expenses: pd.DataFrame, today: date, n: int = 12) -> pd.DataFrame:
    """Revenus, dépenses et cashflow des n derniers mois (plus ancien en premier)"""
    rows = []
    for start in last_n_months(today, n):
        rows.append({
            "month": start,
            "name": start.strftime("%Y-%m"),
            "income": 0.0,
            "expenses": 0.0,
        })
    df = pd.DataFrame(rows)
    keys = [(m.year, m.month) for m in df["month"]]

    paid = payments
    if not paid.empty and "status" in paid.columns:
        paid = paid[paid["status"] == PaymentStatus.PAID.value]
    for col, source in (("income", paid), ("expenses", expenses)):
        if source.empty:
            continue
        years = source["date"].dt.year.rename("year")
        months = source["date"].dt.month.rename("month")
        grouped = source.groupby([years, months])["amount"].sum()
        df[col] = [float(grouped.get(k, 0.0)) for k in keys]

    df["cashflow"] = df["income"] - df["expenses"]
    return df


def build_transactions(payments: pd.DataFrame, expenses: pd.DataFrame) -> pd.DataFrame:
    """Loyers et dépenses dans un même journal, plus récent en premier"""
    rows = []
    for _, p in payments.iterrows():
        rows.append({
            "id": p.get("payment_id"),
            "date": p["date"],
            "amount": float(p["amount"]),
            "type": TransactionType.INCOME.value,
            "category": "Loyer",
            "description": f"Loyer {_text(p.get('tenant_name'))}".strip(),
            "status": _text(p.get("status")),
        })
    for _, e in expenses.iterrows():
        category = _text(e.get("category"))
        if category in [c.value for c in ExpenseCategory]:
            category = ExpenseCategory(category).label
        description = _text(e.get("description")) or category
        rows.append({
            "id": e.get("expense_id"),
            "date": e["date"],
            "amount": float(e["amount"]),
            "type": TransactionType.EXPENSE.value,
            "category": category,
            "description": description,
            "status": "",
        })
    df = pd.DataFrame(rows, columns=TRANSACTIONS_COLUMNS)
    if df.empty:
        return df
    return df.sort_values("date", ascending=False, kind="stable").reset_index(drop=True)


def filter_transactions(transactions: pd.DataFrame, kind: str = "ALL", search: str = "") -> pd.DataFrame:
    """Filtre par type (ALL / INCOME / EXPENSE) et recherche libre"""
    df = transactions
    if kind != "ALL":
        df = df[df["type"] == kind]
    if search:
        needle = search.lower()
        mask = (
            df["description"].astype(str).str.lower().str.contains(needle, regex=False)
            | df["category"].astype(str).str.lower().str.contains(needle, regex=False)
        )
        df = df[mask]
    return df.reset_index(drop=True)


def build_suggestions(income: float, deductible: float, regimes) -> List[dict]:
    suggestions = []
    if income > 0 and deductible / income < LOW_DEDUCTIONS_RATIO:
        suggestions.append({
            "type": AlertLevel.WARNING.value,
            "message": "Vos charges semblent faibles (<10%). Avez-vous pensé à déduire tous vos déplacements ?",
        })
    by_regime = {r.regime: r for r in regimes}
    if income < MICRO_TIP_INCOME_CEILING and by_regime[Regime.MICRO].estimated_tax > by_regime[Regime.LMNP_REEL].estimated_tax:
        suggestions.append({
            "type": AlertLevel.TIP.value,
            "message": "Le régime Micro semble moins intéressant que le Réel cette année.",
        })
    return suggestions


def build_yield_alerts(yield_gross: float, income: float, deductible: float) -> List[dict]:
    alerts = []
    if yield_gross < YIELD_ALERT_THRESHOLD:
        alerts.append({
            "type": AlertLevel.WARNING.value,
            "title": "Rentabilité sous pression",
            "message": f"Votre rendement brut ({yield_gross:.1f} %) est inférieur à {YIELD_ALERT_THRESHOLD} %.",
        })
    else:
        alerts.append({
            "type": AlertLevel.SUCCESS.value,
            "title": "Rentabilité optimale",
            "message": f"Votre rendement brut ({yield_gross:.1f} %) dépasse {YIELD_ALERT_THRESHOLD} %.",
        })
    if income > 0 and deductible / income < LOW_DEDUCTIONS_ALERT_RATIO:
        alerts.append({
            "type": AlertLevel.INFO.value,
            "title": "Déductions faibles",
            "message": f"Vous ne déduisez que {deductible / income * 100:.0f} % de vos revenus. "
                       "Avez-vous pensé aux frais kilométriques ?",
        })
    return alerts


def build_property_financials(
    prop,
    payments: pd.DataFrame,
    expenses: pd.DataFrame,
    today: Optional[date] = None,
    marginal_tax_rate: float = DEFAULT_MARGINAL_TAX_RATE,
) -> PropertyFinancials:
    """Synthèse annuelle (année civile de `today`) d'un bien"""
    today = today or date.today()
    payments = _dated(payments)
    expenses = _dated(expenses)

    year_payments = payments[payments["date"].dt.year == today.year] if not payments.empty else payments
    if not year_payments.empty and "status" in year_payments.columns:
        year_payments = year_payments[year_payments["status"] == PaymentStatus.PAID.value]
    income = float(year_payments["amount"].sum()) if not year_payments.empty else 0.0

    year_expenses = expenses[expenses["date"].dt.year == today.year] if not expenses.empty else expenses
    total_expenses = float(year_expenses["amount"].sum()) if not year_expenses.empty else 0.0
    if not year_expenses.empty and "is_deductible" in year_expenses.columns:
        deductible = float(year_expenses.loc[_to_bool(year_expenses["is_deductible"]), "amount"].sum())
    else:
        deductible = total_expenses

    property_value = _num(prop.get("property_value"))
    depreciation = _num(prop.get("depreciation_amount"), default=default_depreciation(property_value))

    terms = loan_terms_for(prop)
    schedule = compute_schedule(terms) if terms is not None else None
    loan_year = loan_year_figures(terms, current_loan_year(prop.get("loan_start_date"), today))

    fiscal = FiscalInputs(
        gross_income=income,
        deductible_expenses=deductible,
        depreciation_amount=depreciation,
        loan_interest_paid=loan_year.interest,
        marginal_tax_rate_percent=marginal_tax_rate,
    )
    regimes = compare_all(fiscal)

    result = PropertyFinancials(
        property_id=str(prop.get("property_id", "")),
        name=str(prop.get("name", "")),
        property_value=property_value,
        income=income,
        expenses=total_expenses,
        deductible_expenses=deductible,
        depreciation=depreciation,
        loan_terms=terms,
        loan_schedule=schedule,
        loan_year=loan_year,
        fiscal_inputs=fiscal,
        regimes=regimes,
        monthly=monthly_cashflow(payments, expenses, today),
        transactions=build_transactions(payments, expenses),
    )
    result.suggestions = build_suggestions(income, deductible, regimes)
    result.alerts = build_yield_alerts(result.yield_gross, income, deductible)
    return result
