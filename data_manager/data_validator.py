from datetime import date
from typing import Optional, Tuple

from config.constants import ExpenseCategory, PaymentStatus
from config.settings import CONFIG_BOUNDS


def validate_property(
    name: str,
    property_value: float,
    loan_amount: float,
    loan_rate: float,
    loan_term_months: int,
    extra_monthly_payment: float = 0.0,
    depreciation_amount: Optional[float] = None,
) -> Tuple[bool, str]:
    """Valide la saisie d'un bien, retourne (valide, message d'erreur)"""
    if not name or not name.strip():
        return False, "Le nom du bien est obligatoire"

    if property_value <= 0:
        return False, "La valeur du bien doit être supérieure à 0"

    if loan_amount < 0:
        return False, "Le montant emprunté ne peut pas être négatif"

    if loan_amount > 0:
        if not 0 <= loan_rate <= 30:
            return False, "Le taux du prêt doit être compris entre 0 et 30 %"
        if loan_term_months <= 0 or loan_term_months > 420:
            return False, "La durée du prêt doit être comprise entre 1 et 420 mois"

    if extra_monthly_payment < 0:
        return False, "Le remboursement supplémentaire ne peut pas être négatif"

    if depreciation_amount is not None and depreciation_amount < 0:
        return False, "L'amortissement ne peut pas être négatif"

    return True, ""


def validate_payment(
    tenant_name: str,
    amount: float,
    status: str,
    payment_date: date,
) -> Tuple[bool, str]:
    """Valide un encaissement de loyer"""
    if not tenant_name or not tenant_name.strip():
        return False, "Le nom du locataire est obligatoire"

    if amount <= 0:
        return False, "Le montant du loyer doit être supérieur à 0"

    if status not in [e.value for e in PaymentStatus]:
        return False, f"Statut de paiement invalide : {status}"

    if payment_date > date.today():
        return False, "La date de paiement ne peut pas être dans le futur"

    return True, ""


def validate_expense(
    amount: float,
    category: str,
    expense_date: date,
) -> Tuple[bool, str]:
    """Valide une dépense"""
    if amount <= 0:
        return False, "Le montant de la dépense doit être supérieur à 0"

    if category not in [e.value for e in ExpenseCategory]:
        return False, f"Catégorie de dépense invalide : {category}"

    if expense_date > date.today():
        return False, "La date de la dépense ne peut pas être dans le futur"

    return True, ""


def validate_loan_inputs(
    principal: float,
    annual_rate: float,
    term_months: int,
    extra_monthly_payment: float = 0.0,
) -> Tuple[bool, str]:
    """Contrôle de saisie du simulateur de prêt, avant appel au moteur"""
    if principal <= 0:
        return False, "Le capital emprunté doit être supérieur à 0"

    if not 0 <= annual_rate <= 30:
        return False, "Le taux doit être compris entre 0 et 30 %"

    if term_months <= 0:
        return False, "La durée doit être d'au moins 1 mois"

    if extra_monthly_payment < 0:
        return False, "Le remboursement supplémentaire ne peut pas être négatif"

    return True, ""


def validate_fiscal_inputs(
    gross_income: float,
    deductible_expenses: float,
    depreciation_amount: float,
    loan_interest_paid: float,
    marginal_tax_rate: float,
) -> Tuple[bool, str]:
    """Contrôle de saisie du simulateur fiscal"""
    if gross_income < 0:
        return False, "Les revenus bruts ne peuvent pas être négatifs"

    if deductible_expenses < 0:
        return False, "Les charges déductibles ne peuvent pas être négatives"

    if depreciation_amount < 0:
        return False, "L'amortissement ne peut pas être négatif"

    if loan_interest_paid < 0:
        return False, "Les intérêts d'emprunt ne peuvent pas être négatifs"

    if not 0 <= marginal_tax_rate <= 45:
        return False, "La TMI doit être comprise entre 0 et 45 %"

    return True, ""


def validate_config(key: str, value: str) -> Tuple[bool, str]:
    """Contrôle d'un paramètre avant enregistrement ; les clés sans borne sont libres"""
    if key not in CONFIG_BOUNDS:
        return True, ""

    try:
        number = float(value)
    except (ValueError, TypeError):
        return False, f"La valeur de {key} doit être numérique"

    low, high = CONFIG_BOUNDS[key]
    if not low <= number <= high:
        return False, f"La valeur de {key} doit être comprise entre {low:g} et {high:g}"

    return True, ""
