"""Tableau de bord"""
from datetime import date

import pandas as pd
import streamlit as st

from config.constants import TransactionType
from config.settings import DEFAULT_MARGINAL_TAX_RATE
from data_manager.excel_handler import (
    get_all_properties, get_payments, get_expenses, get_config_float, init_excel,
)
from core.comparison import compare_regimes
from core.errors import FinancialInputError
from core.financials import build_property_financials, filter_transactions
from components.charts import (
    create_cashflow_waterfall, create_monthly_cashflow_bar, create_pie_chart, create_regime_bar,
)
from components.metrics import render_property_kpis, render_alerts
from components.tables import render_transactions_table

st.set_page_config(page_title="Tableau de bord", page_icon="📊", layout="wide")
st.title("📊 Tableau de bord")

init_excel()

properties = get_all_properties()
if properties.empty:
    st.info("Aucun bien enregistré. Ajoutez-en un depuis la page « Biens ».")
    st.stop()

names = properties["name"].astype(str).tolist()
selected = st.selectbox("Bien", names)
prop = properties.iloc[names.index(selected)]
property_id = prop["property_id"]

tmi = get_config_float("marginal_tax_rate", DEFAULT_MARGINAL_TAX_RATE)
today = date.today()
try:
    fin = build_property_financials(
        prop, get_payments(property_id), get_expenses(property_id),
        today=today, marginal_tax_rate=tmi,
    )
except FinancialInputError as e:
    st.error(f"Calcul impossible pour ce bien : {e}")
    st.stop()

st.caption(f"Année {today.year} · TMI {tmi:.0f} %")
render_property_kpis(fin)

st.divider()

render_alerts(fin.alerts)
if fin.suggestions:
    st.subheader("💡 Suggestions")
    render_alerts(fin.suggestions)

st.divider()

c1, c2 = st.columns(2)
with c1:
    st.plotly_chart(create_cashflow_waterfall(fin.waterfall()), width='stretch')
with c2:
    st.plotly_chart(create_regime_bar(compare_regimes(fin.regimes)), width='stretch')

c1, c2 = st.columns([3, 2])
with c1:
    st.plotly_chart(create_monthly_cashflow_bar(fin.monthly), width='stretch')
with c2:
    tx = fin.transactions
    year_expenses = tx[(tx["type"] == TransactionType.EXPENSE.value)
                       & (pd.to_datetime(tx["date"]).dt.year == today.year)] if not tx.empty else tx
    if year_expenses.empty:
        st.info("Aucune dépense cette année")
    else:
        by_category = year_expenses.groupby("category")["amount"].sum()
        st.plotly_chart(
            create_pie_chart(by_category.index.tolist(), by_category.values.tolist(), title="Répartition des charges"),
            width='stretch',
        )

st.divider()

st.subheader("Transactions")
c1, c2 = st.columns([1, 2])
with c1:
    kind = st.radio(
        "Type",
        options=["ALL", TransactionType.INCOME.value, TransactionType.EXPENSE.value],
        format_func=lambda x: "Tout" if x == "ALL" else TransactionType(x).label,
        horizontal=True,
    )
with c2:
    search = st.text_input("Rechercher", placeholder="Libellé ou catégorie")

render_transactions_table(filter_transactions(fin.transactions, kind, search))
