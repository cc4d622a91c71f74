"""Simulateur de dette"""
from datetime import date

import pandas as pd
import streamlit as st

from config.settings import (
    DEFAULT_INSURANCE_RATE, DEFAULT_LOAN_RATE, DEFAULT_LOAN_TERM_MONTHS,
)
from data_manager.excel_handler import get_all_properties, get_config_float, init_excel
from data_manager.data_validator import validate_loan_inputs
from core.amortization import compare_scenarios, effective_annual_rate, iter_months, payoff_date
from core.comparison import compare_loan_scenarios, schedule_to_frame
from core.errors import FinancialInputError
from core.financials import current_loan_year, loan_terms_for
from core.models import LoanTerms
from components.charts import create_balance_area, create_principal_interest_stack
from components.forms import render_loan_simulator_inputs
from components.metrics import render_scenario_metrics, render_schedule_metrics
from components.tables import render_scenario_table, render_schedule_table
from utils.formatters import fmt_rate

st.set_page_config(page_title="Simulateur de dette", page_icon="🏦", layout="wide")
st.title("🏦 Simulateur de dette")

init_excel()

properties = get_all_properties()
options = ["Saisie libre"] + properties["name"].astype(str).tolist() if not properties.empty else ["Saisie libre"]
source = st.selectbox("Prêt de référence", options)

start = None
if source == "Saisie libre":
    c1, c2, c3 = st.columns(3)
    with c1:
        principal = st.number_input("Capital emprunté (€)", min_value=1000.0, value=200000.0, step=5000.0)
    with c2:
        base_rate = st.number_input("Taux actuel (%)", min_value=0.0, max_value=30.0,
                                    value=get_config_float("loan_rate", DEFAULT_LOAN_RATE), step=0.05)
    with c3:
        base_years = st.number_input("Durée (années)", min_value=1, max_value=35,
                                     value=int(get_config_float("loan_term_months", DEFAULT_LOAN_TERM_MONTHS)) // 12)
    base_term = int(base_years) * 12
else:
    prop = properties.iloc[options.index(source) - 1]
    base_terms = loan_terms_for(prop)
    if base_terms is None:
        st.info("Ce bien n'a pas de crédit.")
        st.stop()
    principal = base_terms.principal
    base_rate = base_terms.annual_rate_percent
    base_term = base_terms.term_months
    start = pd.to_datetime(prop.get("loan_start_date"), errors="coerce")
    start = None if pd.isna(start) else start.date()

valid, msg = validate_loan_inputs(principal, base_rate, base_term)
if not valid:
    st.error(msg)
    st.stop()

st.divider()
st.subheader("Renégociation et remboursement anticipé")
sim = render_loan_simulator_inputs(principal, base_rate, base_term)

try:
    base = LoanTerms(principal, base_rate, base_term)
    alternative = LoanTerms(**sim)
    comparison = compare_scenarios(base, alternative)
except FinancialInputError as e:
    st.error(f"Simulation impossible : {e}")
    st.stop()

st.markdown("**Prêt actuel**")
render_schedule_metrics(comparison.base)
st.markdown("**Simulation**")
render_scenario_metrics(comparison)

insurance = get_config_float("insurance_rate", DEFAULT_INSURANCE_RATE)
c1, c2 = st.columns(2)
with c1:
    st.metric("TAEG estimé (simulation)", fmt_rate(effective_annual_rate(alternative, insurance)),
              help=f"Assurance emprunteur de {fmt_rate(insurance)} du capital initial incluse")
with c2:
    if start is not None:
        st.metric("Fin du prêt (simulation)", payoff_date(start, comparison.alternative).strftime("%m/%Y"))

current_year = current_loan_year(start, date.today()) if start is not None else None
st.plotly_chart(
    create_balance_area(
        schedule_to_frame(comparison.alternative.points),
        baseline=schedule_to_frame(comparison.base.points),
        current_year=current_year,
    ),
    width='stretch',
)

render_scenario_table(compare_loan_scenarios(comparison))

st.divider()

monthly = schedule_to_frame(iter_months(alternative))
st.plotly_chart(create_principal_interest_stack(monthly), width='stretch')

with st.expander("Tableau d'amortissement détaillé"):
    show_all = st.checkbox("Afficher toutes les lignes", value=False)
    render_schedule_table(monthly, show_all=show_all)
