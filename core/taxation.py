"""Comparateur de régimes fiscaux : Micro, LMNP réel, SCI à l'IS"""
from typing import Sequence, Tuple

from config.constants import Regime
from config.settings import (
    IS_NORMAL_RATE,
    IS_REDUCED_RATE,
    IS_REDUCED_THRESHOLD,
    MICRO_ABATEMENT,
)
from core.models import FiscalInputs, RegimeResult


def _real_base(inputs: FiscalInputs) -> float:
    """Résultat au réel, plancher à zéro (pas de report de déficit)"""
    return max(0.0, inputs.gross_income - inputs.real_expenses_total)


def corporate_tax(base: float) -> float:
    """IS progressif : taux réduit jusqu'au seuil, taux normal au-delà"""
    if base <= 0:
        return 0.0
    reduced = min(base, IS_REDUCED_THRESHOLD)
    return reduced * IS_REDUCED_RATE + max(0.0, base - IS_REDUCED_THRESHOLD) * IS_NORMAL_RATE


def compute_micro(inputs: FiscalInputs) -> RegimeResult:
    base = inputs.gross_income * (1 - MICRO_ABATEMENT)
    return RegimeResult(Regime.MICRO, base, base * inputs.combined_rate)


def compute_lmnp_reel(inputs: FiscalInputs) -> RegimeResult:
    base = _real_base(inputs)
    return RegimeResult(Regime.LMNP_REEL, base, base * inputs.combined_rate)


def compute_sci_is(inputs: FiscalInputs) -> RegimeResult:
    """La TMI du propriétaire n'intervient pas : l'impôt est payé par la société."""
    base = _real_base(inputs)
    return RegimeResult(Regime.SCI_IS, base, corporate_tax(base))


def compare_all(inputs: FiscalInputs) -> Tuple[RegimeResult, RegimeResult, RegimeResult]:
    return (
        compute_micro(inputs),
        compute_lmnp_reel(inputs),
        compute_sci_is(inputs),
    )


def recommend_regime(results: Sequence[RegimeResult]) -> RegimeResult:
    """Régime le moins imposé ; à égalité, le premier dans l'ordre donné"""
    if not results:
        raise ValueError("no regime results to compare")
    return min(results, key=lambda r: r.estimated_tax)


def savings_versus(results: Sequence[RegimeResult], reference: Regime) -> dict:
    """Économie annuelle de chaque régime par rapport à `reference`"""
    by_regime = {r.regime: r for r in results}
    ref_tax = by_regime[reference].estimated_tax
    return {r.regime: ref_tax - r.estimated_tax for r in results}
