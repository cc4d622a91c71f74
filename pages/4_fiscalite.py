"""Simulateur fiscal"""
from datetime import date

import streamlit as st

from config.constants import Regime
from config.settings import DEFAULT_MARGINAL_TAX_RATE
from data_manager.excel_handler import (
    get_all_properties, get_payments, get_expenses, get_config_float, init_excel,
)
from data_manager.data_validator import validate_fiscal_inputs
from core.comparison import compare_regimes
from core.errors import FinancialInputError
from core.financials import build_property_financials
from core.models import FiscalInputs
from core.taxation import compare_all, recommend_regime, savings_versus
from components.charts import create_regime_bar
from components.forms import render_fiscal_inputs
from components.tables import render_regime_table
from utils.formatters import fmt_amount_round, fmt_signed

st.set_page_config(page_title="Simulateur fiscal", page_icon="⚖️", layout="wide")
st.title("⚖️ Simulateur fiscal")

init_excel()

st.markdown("Comparez l'impôt annuel de vos revenus locatifs selon le régime : "
            + " · ".join(f"**{r.label}** : {r.description}" for r in Regime))

# Pré-remplissage à partir d'un bien
properties = get_all_properties()
prefill = {}
source = "Aucun"
if not properties.empty:
    names = ["Aucun"] + properties["name"].astype(str).tolist()
    source = st.selectbox("Pré-remplir avec un bien", names)
    if source != "Aucun":
        prop = properties.iloc[names.index(source) - 1]
        try:
            fin = build_property_financials(
                prop, get_payments(prop["property_id"]), get_expenses(prop["property_id"]),
                today=date.today(),
                marginal_tax_rate=get_config_float("marginal_tax_rate", DEFAULT_MARGINAL_TAX_RATE),
            )
        except FinancialInputError as e:
            st.error(f"Pré-remplissage impossible : {e}")
            st.stop()
        prefill = {
            "gross_income": fin.income,
            "deductible_expenses": fin.deductible_expenses,
            "depreciation_amount": fin.depreciation,
            "loan_interest_paid": fin.loan_year.interest,
        }

# Les widgets changent de clé avec le bien pour reprendre ses valeurs
values = render_fiscal_inputs(key_prefix=f"fiscal_{source}", **prefill)

valid, msg = validate_fiscal_inputs(
    values["gross_income"], values["deductible_expenses"], values["depreciation_amount"],
    values["loan_interest_paid"], values["marginal_tax_rate_percent"],
)
if not valid:
    st.error(msg)
    st.stop()

try:
    results = compare_all(FiscalInputs(**values))
except FinancialInputError as e:
    st.error(str(e))
    st.stop()

best = recommend_regime(results)
savings = savings_versus(results, Regime.MICRO)

st.divider()

c1, c2, c3 = st.columns(3)
for col, result in zip((c1, c2, c3), results):
    with col:
        delta = None
        if result.regime != Regime.MICRO:
            delta = f"{fmt_signed(savings[result.regime])} vs Micro"
        st.metric(
            f"{result.regime.label}{' ✅' if result.regime == best.regime else ''}",
            fmt_amount_round(result.estimated_tax),
            delta=delta,
        )

st.success(f"Régime recommandé : **{best.regime.label}** ({fmt_amount_round(best.estimated_tax)} / an)")

table = compare_regimes(results)
c1, c2 = st.columns([3, 2])
with c1:
    st.plotly_chart(create_regime_bar(table), width='stretch')
with c2:
    render_regime_table(table)
