"""Moteur d'amortissement : mensualité, échéancier, comparaison de scénarios, TAEG"""
from __future__ import annotations

from datetime import date
from typing import Iterator

import numpy as np
from scipy import optimize

from core.errors import InvalidLoanConfiguration
from core.models import AmortizationPoint, AmortizationSchedule, LoanTerms, ScenarioComparison
from utils.date_utils import add_months

_EPS = 1e-6  # résidu de capital considéré comme soldé


def monthly_payment(terms: LoanTerms) -> float:
    """Mensualité constante hors remboursement supplémentaire.

    payment = P * r / (1 - (1 + r)^-n), ou P / n à taux nul.
    """
    r = terms.monthly_rate
    if r == 0:
        return terms.principal / terms.term_months
    return terms.principal * r / (1 - (1 + r) ** -terms.term_months)


def _check_amortizing(terms: LoanTerms, payment: float) -> None:
    first_interest = terms.principal * terms.monthly_rate
    if payment <= first_interest:
        raise InvalidLoanConfiguration(
            f"payment {payment:.2f} does not exceed first month interest {first_interest:.2f}"
        )


def _months(terms: LoanTerms, payment: float) -> Iterator[AmortizationPoint]:
    r = terms.monthly_rate
    extra = terms.extra_monthly_payment
    balance = float(terms.principal)

    for month in range(1, terms.term_months + 1):
        interest = balance * r
        principal_paid = payment - interest + extra
        if principal_paid <= 0:
            raise InvalidLoanConfiguration(f"loan stops amortizing at month {month}")

        # Dernière échéance ou remboursement anticipé : on solde le capital
        if principal_paid >= balance - _EPS or month == terms.term_months:
            principal_paid = balance
            balance = 0.0
        else:
            balance -= principal_paid

        yield AmortizationPoint(
            month_index=month,
            remaining_balance=balance,
            interest_portion=interest,
            principal_portion=principal_paid,
            total_monthly_payment=interest + principal_paid,
        )
        if balance == 0.0:
            return


def iter_months(terms: LoanTerms) -> Iterator[AmortizationPoint]:
    """Itérateur paresseux, mois par mois, jusqu'au solde du prêt.

    Chaque appel repart du premier mois. La garde de non-amortissement est
    évaluée immédiatement, pas au premier `next()`.
    """
    payment = monthly_payment(terms)
    _check_amortizing(terms, payment)
    return _months(terms, payment)


def compute_schedule(terms: LoanTerms) -> AmortizationSchedule:
    """Échéancier échantillonné tous les 12 mois et au mois de solde."""
    payment = monthly_payment(terms)
    _check_amortizing(terms, payment)

    sampled = []
    total_interest = 0.0
    last = None
    for point in _months(terms, payment):
        total_interest += point.interest_portion
        last = point
        if point.month_index % 12 == 0 or point.remaining_balance == 0.0:
            sampled.append(point)

    return AmortizationSchedule(
        terms=terms,
        points=tuple(sampled),
        monthly_payment=payment,
        total_interest=total_interest,
        total_paid=terms.principal + total_interest,
        payoff_month=last.month_index,
    )


def compare_scenarios(base: LoanTerms, alternative: LoanTerms) -> ScenarioComparison:
    """Gain mensuel et durée restante d'une renégociation ou d'un remboursement anticipé."""
    base_schedule = compute_schedule(base)
    alt_schedule = compute_schedule(alternative)
    return ScenarioComparison(
        base=base_schedule,
        alternative=alt_schedule,
        monthly_gain=base_schedule.monthly_payment - alt_schedule.monthly_payment,
        remaining_term_years=alt_schedule.final_point.year_index,
    )


def payoff_date(start_date: date, schedule: AmortizationSchedule) -> date:
    """Date de la dernière échéance"""
    return add_months(start_date, schedule.payoff_month)


def effective_annual_rate(terms: LoanTerms, insurance_rate_percent: float = 0.0) -> float:
    """Taux annuel effectif (%) incluant l'assurance emprunteur, par TRI.

    L'assurance est calculée sur le capital initial, versée chaque mois
    jusqu'au solde du prêt. Retourne 0.0 si aucune racine n'est encadrée.
    """
    if insurance_rate_percent < 0:
        raise InvalidLoanConfiguration(f"insurance rate must be >= 0, got {insurance_rate_percent}")

    insurance = terms.principal * insurance_rate_percent / 100 / 12
    flows = [-terms.principal]
    flows.extend(p.total_monthly_payment + insurance for p in iter_months(terms))
    cash_flows = np.asarray(flows, dtype=float)
    periods = np.arange(len(cash_flows))

    def npv(rate):
        return float(np.sum(cash_flows / (1 + rate) ** periods))

    try:
        monthly_irr = optimize.brentq(npv, -0.05, 1.0)
    except (ValueError, RuntimeError):
        return 0.0
    return ((1 + monthly_irr) ** 12 - 1) * 100
