"""Tableaux formatés"""
import pandas as pd
import streamlit as st

from config.constants import PaymentStatus, TransactionType
from utils.formatters import fmt_amount, fmt_rate


def render_schedule_table(schedule: pd.DataFrame, show_all: bool = False):
    """Tableau d'amortissement mois par mois"""
    if schedule.empty:
        st.info("Aucun échéancier à afficher")
        return

    col_map = {
        "month": "Mois",
        "year": "Année",
        "payment": "Échéance (€)",
        "principal": "Capital (€)",
        "interest": "Intérêts (€)",
        "balance": "Capital restant (€)",
    }
    display_cols = [c for c in col_map if c in schedule.columns]
    display_df = schedule[display_cols].rename(columns=col_map)

    for col in ["Échéance (€)", "Capital (€)", "Intérêts (€)", "Capital restant (€)"]:
        display_df[col] = display_df[col].apply(lambda x: fmt_amount(x, unit="").strip())

    if not show_all and len(display_df) > 24:
        st.dataframe(display_df, width='stretch', height=600, hide_index=True)
    else:
        st.dataframe(display_df, width='stretch', hide_index=True)


def render_regime_table(regimes: pd.DataFrame):
    """Base imposable et impôt par régime, le recommandé marqué"""
    if regimes.empty:
        st.info("Aucune donnée fiscale")
        return

    display = regimes.drop(columns=["regime"]).copy()
    for col in ["Base imposable", "Impôt estimé"]:
        display[col] = display[col].apply(fmt_amount)
    display["Recommandé"] = display["Recommandé"].apply(lambda x: "✅" if x else "")
    st.dataframe(display, width='stretch', hide_index=True)


def render_transactions_table(transactions: pd.DataFrame):
    """Journal des loyers et dépenses"""
    if transactions.empty:
        st.info("Aucune transaction enregistrée")
        return

    display = transactions.copy()
    display["date"] = pd.to_datetime(display["date"]).dt.strftime("%d/%m/%Y")
    display["amount"] = [
        ("+" if t == TransactionType.INCOME.value else "-") + fmt_amount(a)
        for t, a in zip(display["type"], display["amount"])
    ]
    display["type"] = display["type"].map(lambda t: TransactionType(t).label)
    statuses = [s.value for s in PaymentStatus]
    display["status"] = display["status"].map(lambda s: PaymentStatus(s).label if s in statuses else "")
    display = display.drop(columns=["id"]).rename(columns={
        "date": "Date",
        "amount": "Montant",
        "type": "Type",
        "category": "Catégorie",
        "description": "Libellé",
        "status": "Statut",
    })
    st.dataframe(display, width='stretch', hide_index=True)


def render_scenario_table(scenarios: pd.DataFrame):
    """Prêt actuel vs simulation"""
    if scenarios.empty:
        st.info("Aucune donnée de comparaison")
        return

    display = scenarios.copy()
    for col in ["Remboursement suppl.", "Mensualité", "Mensualité totale", "Intérêts totaux", "Coût total"]:
        if col in display.columns:
            display[col] = display[col].apply(fmt_amount)
    if "Taux (%)" in display.columns:
        display["Taux (%)"] = display["Taux (%)"].apply(fmt_rate)
    if "Durée (ans)" in display.columns:
        display["Durée (ans)"] = display["Durée (ans)"].apply(lambda x: f"{x:.1f}".replace(".", ","))
    st.dataframe(display, width='stretch', hide_index=True)
