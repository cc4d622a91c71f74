"""Outils du propriétaire : révision de loyer, plus-value, DPE"""
from typing import Dict, Tuple

from config.settings import (
    CAPITAL_GAINS_ABATEMENT_PER_YEAR,
    CAPITAL_GAINS_ABATEMENT_START,
    CAPITAL_GAINS_FULL_EXEMPTION,
    CAPITAL_GAINS_TAX_RATE,
    DEFAULT_ENERGY_IMPROVEMENT,
    ENERGY_CLASS_THRESHOLDS,
    SOCIAL_CONTRIBUTION_RATE,
)


def revise_rent(current_rent: float, old_index: float, new_index: float) -> Tuple[float, float]:
    """Révision annuelle selon l'IRL. Retourne (nouveau loyer, augmentation)"""
    if old_index <= 0 or new_index <= 0:
        raise ValueError("IRL indexes must be > 0")
    if current_rent < 0:
        raise ValueError("rent must be >= 0")
    revised = current_rent * new_index / old_index
    return revised, revised - current_rent


def capital_gains_abatement(years_owned: int) -> float:
    """Abattement pour durée de détention, en fraction (0 à 1)"""
    if years_owned > CAPITAL_GAINS_FULL_EXEMPTION:
        return 1.0
    if years_owned > CAPITAL_GAINS_ABATEMENT_START:
        return min(1.0, (years_owned - CAPITAL_GAINS_ABATEMENT_START) * CAPITAL_GAINS_ABATEMENT_PER_YEAR)
    return 0.0


def capital_gains_tax(purchase_price: float, selling_price: float, years_owned: int) -> Dict[str, float]:
    """Impôt latent sur la plus-value : 19% + 17,2% de prélèvements sociaux.

    Une moins-value n'est pas imposée.
    """
    if years_owned < 0:
        raise ValueError("years_owned must be >= 0")
    gain = selling_price - purchase_price
    abatement = capital_gains_abatement(years_owned)
    taxable = max(0.0, gain) * (1 - abatement)
    income_tax = taxable * CAPITAL_GAINS_TAX_RATE
    social = taxable * SOCIAL_CONTRIBUTION_RATE / 100
    tax = income_tax + social
    return {
        "gain": gain,
        "abatement_rate": abatement,
        "taxable_base": taxable,
        "income_tax": income_tax,
        "social_levies": social,
        "tax": tax,
        "net": gain - tax,
    }


def energy_class(score: float) -> str:
    """Classe DPE (A à G) à partir de la consommation en kWh/m²/an"""
    for label, upper in ENERGY_CLASS_THRESHOLDS:
        if score < upper:
            return label
    return "G"


def projected_energy_class(score: float, improvement: float = DEFAULT_ENERGY_IMPROVEMENT) -> str:
    """Classe après travaux d'isolation"""
    return energy_class(max(0.0, score - improvement))
