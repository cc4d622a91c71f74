"""Formulaires de saisie"""
from datetime import date
from typing import Optional

import streamlit as st
import pandas as pd

from config.constants import ExpenseCategory, PaymentStatus
from config.settings import (
    DEFAULT_LOAN_RATE, DEFAULT_LOAN_TERM_MONTHS, DEFAULT_LOAN_TO_VALUE,
    DEFAULT_MARGINAL_TAX_RATE, MARGINAL_TAX_RATES,
)
from data_manager.excel_handler import get_config_float


def _cell(data: Optional[pd.Series], key: str, default):
    if data is None:
        return default
    value = data.get(key, default)
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return default
    return value


def render_property_form(
    key_prefix: str = "new",
    property_data: Optional[pd.Series] = None,
) -> dict | None:
    """Formulaire de création/modification d'un bien, retourne un dict ou None

    Args:
        key_prefix: préfixe des clés des widgets
        property_data: le bien existant en mode édition
    """
    is_edit = property_data is not None

    default_rate = get_config_float("loan_rate", DEFAULT_LOAN_RATE)
    default_term = int(get_config_float("loan_term_months", DEFAULT_LOAN_TERM_MONTHS))
    default_ltv = get_config_float("loan_to_value", DEFAULT_LOAN_TO_VALUE)

    default_value = float(_cell(property_data, "property_value", 250000.0))
    default_start = _cell(property_data, "loan_start_date", date.today())
    default_start = pd.to_datetime(default_start).date()
    default_depreciation = _cell(property_data, "depreciation_amount", None)

    with st.form(f"{key_prefix}_property_form"):
        st.subheader("Modifier le bien" if is_edit else "Nouveau bien")

        c1, c2 = st.columns(2)
        with c1:
            name = st.text_input("Nom du bien", value=str(_cell(property_data, "name", "")),
                                 key=f"{key_prefix}_name")
        with c2:
            address = st.text_input("Adresse", value=str(_cell(property_data, "address", "")),
                                    key=f"{key_prefix}_address")

        c1, c2 = st.columns(2)
        with c1:
            property_value = st.number_input(
                "Valeur du bien (€)", min_value=0.0, value=default_value,
                step=5000.0, key=f"{key_prefix}_value")
        with c2:
            loan_amount = st.number_input(
                "Montant emprunté (€)", min_value=0.0,
                value=float(_cell(property_data, "loan_amount", default_value * default_ltv)),
                step=5000.0, key=f"{key_prefix}_loan")

        c1, c2, c3 = st.columns(3)
        with c1:
            loan_rate = st.number_input(
                "Taux annuel (%)", min_value=0.0, max_value=30.0,
                value=float(_cell(property_data, "loan_rate", default_rate)),
                step=0.05, format="%.2f", key=f"{key_prefix}_rate")
        with c2:
            loan_term_years = st.number_input(
                "Durée (années)", min_value=1, max_value=35,
                value=int(_cell(property_data, "loan_term_months", default_term)) // 12,
                key=f"{key_prefix}_years")
        with c3:
            loan_start_date = st.date_input("Début du prêt", value=default_start,
                                            key=f"{key_prefix}_start")

        c1, c2 = st.columns(2)
        with c1:
            extra_monthly_payment = st.number_input(
                "Remboursement supplémentaire mensuel (€)", min_value=0.0,
                value=float(_cell(property_data, "extra_monthly_payment", 0.0)),
                step=50.0, key=f"{key_prefix}_extra")
        with c2:
            depreciation_amount = st.number_input(
                "Amortissement annuel (€, 0 = automatique)", min_value=0.0,
                value=float(default_depreciation or 0.0),
                step=100.0, key=f"{key_prefix}_depr")

        notes = st.text_area("Notes", value=str(_cell(property_data, "notes", "")),
                             key=f"{key_prefix}_notes")

        submit_label = "Enregistrer les modifications" if is_edit else "Ajouter le bien"
        submitted = st.form_submit_button(submit_label, width='stretch', type="primary")

        if submitted:
            return {
                "name": name,
                "address": address,
                "property_value": property_value,
                "loan_amount": loan_amount,
                "loan_rate": loan_rate,
                "loan_term_months": int(loan_term_years) * 12,
                "loan_start_date": loan_start_date,
                "extra_monthly_payment": extra_monthly_payment,
                "depreciation_amount": depreciation_amount or None,
                "notes": notes,
            }
    return None


def render_payment_form(key_prefix: str = "payment") -> dict | None:
    """Saisie d'un loyer encaissé"""
    with st.form(f"{key_prefix}_form", clear_on_submit=True):
        c1, c2 = st.columns(2)
        with c1:
            tenant_name = st.text_input("Locataire", key=f"{key_prefix}_tenant")
            amount = st.number_input("Montant (€)", min_value=0.0, value=800.0,
                                     step=10.0, key=f"{key_prefix}_amount")
        with c2:
            payment_date = st.date_input("Date", value=date.today(), key=f"{key_prefix}_date")
            status = st.selectbox(
                "Statut",
                options=[s.value for s in PaymentStatus],
                format_func=lambda x: PaymentStatus(x).label,
                key=f"{key_prefix}_status",
            )
        submitted = st.form_submit_button("Ajouter le loyer", width='stretch', type="primary")
        if submitted:
            return {
                "tenant_name": tenant_name,
                "amount": amount,
                "date": payment_date,
                "status": status,
            }
    return None


def render_expense_form(key_prefix: str = "expense") -> dict | None:
    """Saisie d'une dépense"""
    with st.form(f"{key_prefix}_form", clear_on_submit=True):
        c1, c2 = st.columns(2)
        with c1:
            category = st.selectbox(
                "Catégorie",
                options=[c.value for c in ExpenseCategory],
                format_func=lambda x: ExpenseCategory(x).label,
                key=f"{key_prefix}_category",
            )
            amount = st.number_input("Montant (€)", min_value=0.0, value=100.0,
                                     step=10.0, key=f"{key_prefix}_amount")
        with c2:
            expense_date = st.date_input("Date", value=date.today(), key=f"{key_prefix}_date")
            is_deductible = st.checkbox("Déductible", value=True, key=f"{key_prefix}_deductible")
        description = st.text_input("Libellé", key=f"{key_prefix}_description")
        submitted = st.form_submit_button("Ajouter la dépense", width='stretch', type="primary")
        if submitted:
            return {
                "category": category,
                "amount": amount,
                "date": expense_date,
                "description": description,
                "is_deductible": is_deductible,
            }
    return None


def render_loan_simulator_inputs(
    principal: float,
    base_rate: float,
    base_term_months: int,
    key_prefix: str = "sim",
) -> dict:
    """Curseurs du simulateur de dette, mis à jour en direct"""
    c1, c2, c3 = st.columns(3)
    with c1:
        rate = st.slider("Taux de renégociation (%)", min_value=0.0, max_value=10.0,
                         value=float(min(base_rate, 10.0)), step=0.05, key=f"{key_prefix}_rate")
    with c2:
        term_years = st.slider("Durée (années)", min_value=1, max_value=35,
                               value=max(1, min(35, base_term_months // 12)), key=f"{key_prefix}_years")
    with c3:
        extra = st.slider("Remboursement supplémentaire (€/mois)", min_value=0, max_value=2000,
                          value=0, step=50, key=f"{key_prefix}_extra")
    return {
        "principal": principal,
        "annual_rate_percent": rate,
        "term_months": term_years * 12,
        "extra_monthly_payment": float(extra),
    }


def render_fiscal_inputs(
    gross_income: float = 0.0,
    deductible_expenses: float = 0.0,
    depreciation_amount: float = 0.0,
    loan_interest_paid: float = 0.0,
    key_prefix: str = "fiscal",
) -> dict:
    """Saisie des paramètres du simulateur fiscal"""
    default_tmi = get_config_float("marginal_tax_rate", DEFAULT_MARGINAL_TAX_RATE)
    options = list(MARGINAL_TAX_RATES)
    c1, c2 = st.columns(2)
    with c1:
        gross = st.number_input("Revenus locatifs bruts (€)", min_value=0.0,
                                value=float(gross_income), step=500.0, key=f"{key_prefix}_gross")
        expenses = st.number_input("Charges déductibles (€)", min_value=0.0,
                                   value=float(deductible_expenses), step=100.0, key=f"{key_prefix}_expenses")
        tmi = st.select_slider(
            "Tranche marginale d'imposition (%)",
            options=options,
            value=default_tmi if default_tmi in options else DEFAULT_MARGINAL_TAX_RATE,
            key=f"{key_prefix}_tmi",
        )
    with c2:
        depreciation = st.number_input("Amortissement (€)", min_value=0.0,
                                       value=float(depreciation_amount), step=100.0, key=f"{key_prefix}_depr")
        interest = st.number_input("Intérêts d'emprunt (€)", min_value=0.0,
                                   value=float(loan_interest_paid), step=100.0, key=f"{key_prefix}_interest")
    return {
        "gross_income": gross,
        "deductible_expenses": expenses,
        "depreciation_amount": depreciation,
        "loan_interest_paid": interest,
        "marginal_tax_rate_percent": float(tmi),
    }
