"""Enregistrements de valeur du moteur : prêt, échéancier, fiscalité"""
from __future__ import annotations

import math
from dataclasses import dataclass

from config.constants import Regime
from config.settings import DEFAULT_MARGINAL_TAX_RATE, SOCIAL_CONTRIBUTION_RATE
from core.errors import InvalidFiscalInputs, InvalidLoanConfiguration


@dataclass(frozen=True)
class LoanTerms:
    """Prêt à taux fixe. Taux annuel en pourcentage (4.0 = 4%)."""

    principal: float
    annual_rate_percent: float
    term_months: int
    extra_monthly_payment: float = 0.0

    def __post_init__(self):
        if not math.isfinite(self.principal) or self.principal <= 0:
            raise InvalidLoanConfiguration(f"principal must be > 0, got {self.principal}")
        if not 0 <= self.annual_rate_percent <= 100:
            raise InvalidLoanConfiguration(
                f"annual_rate_percent must be within 0..100, got {self.annual_rate_percent}"
            )
        if isinstance(self.term_months, bool) or int(self.term_months) != self.term_months or self.term_months <= 0:
            raise InvalidLoanConfiguration(f"term_months must be a positive integer, got {self.term_months}")
        object.__setattr__(self, "term_months", int(self.term_months))
        if not math.isfinite(self.extra_monthly_payment) or self.extra_monthly_payment < 0:
            raise InvalidLoanConfiguration(
                f"extra_monthly_payment must be >= 0, got {self.extra_monthly_payment}"
            )

    @property
    def monthly_rate(self) -> float:
        return self.annual_rate_percent / 100 / 12

    def with_changes(self, **changes) -> "LoanTerms":
        values = {
            "principal": self.principal,
            "annual_rate_percent": self.annual_rate_percent,
            "term_months": self.term_months,
            "extra_monthly_payment": self.extra_monthly_payment,
        }
        values.update(changes)
        return LoanTerms(**values)


@dataclass(frozen=True)
class AmortizationPoint:
    month_index: int
    remaining_balance: float
    interest_portion: float
    principal_portion: float
    total_monthly_payment: float

    @property
    def year_index(self) -> int:
        return math.ceil(self.month_index / 12)


@dataclass(frozen=True)
class AmortizationSchedule:
    """Échéancier échantillonné par année, plus le mois de remboursement final.

    Les agrégats (intérêts totaux, durée) sont calculés sur tous les mois,
    pas sur les points échantillonnés.
    """

    terms: LoanTerms
    points: tuple[AmortizationPoint, ...]
    monthly_payment: float
    total_interest: float
    total_paid: float
    payoff_month: int

    @property
    def payoff_years(self) -> float:
        return self.payoff_month / 12

    @property
    def final_point(self) -> AmortizationPoint:
        return self.points[-1]

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)


@dataclass(frozen=True)
class ScenarioComparison:
    base: AmortizationSchedule
    alternative: AmortizationSchedule
    monthly_gain: float
    remaining_term_years: int

    @property
    def interest_saved(self) -> float:
        return self.base.total_interest - self.alternative.total_interest

    @property
    def months_saved(self) -> int:
        return self.base.payoff_month - self.alternative.payoff_month


@dataclass(frozen=True)
class FiscalInputs:
    """Données fiscales annuelles d'un bien. Taux en pourcentage."""

    gross_income: float
    deductible_expenses: float = 0.0
    depreciation_amount: float = 0.0
    loan_interest_paid: float = 0.0
    marginal_tax_rate_percent: float = DEFAULT_MARGINAL_TAX_RATE
    social_contribution_rate_percent: float = SOCIAL_CONTRIBUTION_RATE

    def __post_init__(self):
        for name in ("gross_income", "deductible_expenses", "depreciation_amount", "loan_interest_paid"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise InvalidFiscalInputs(f"{name} must be >= 0, got {value}")
        for name in ("marginal_tax_rate_percent", "social_contribution_rate_percent"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise InvalidFiscalInputs(f"{name} must be within 0..100, got {value}")

    @property
    def combined_rate(self) -> float:
        """TMI + prélèvements sociaux, en fraction."""
        return self.marginal_tax_rate_percent / 100 + self.social_contribution_rate_percent / 100

    @property
    def real_expenses_total(self) -> float:
        return self.deductible_expenses + self.depreciation_amount + self.loan_interest_paid


@dataclass(frozen=True)
class RegimeResult:
    regime: Regime
    taxable_base: float
    estimated_tax: float

    def __post_init__(self):
        if self.taxable_base < 0 or self.estimated_tax < 0:
            raise InvalidFiscalInputs(
                f"{self.regime.value}: taxable base and tax must be >= 0"
            )
