"""Cartes d'indicateurs"""
import streamlit as st

from config.constants import AlertLevel
from core.financials import PropertyFinancials
from core.models import AmortizationSchedule, ScenarioComparison
from utils.formatters import fmt_amount, fmt_amount_round, fmt_months, fmt_percent, fmt_signed


def render_property_kpis(fin: PropertyFinancials):
    """KPIs annuels d'un bien : revenus, cashflow, rendement, impôt"""
    recommended = fin.recommended
    c1, c2, c3, c4 = st.columns(4)
    with c1:
        st.metric("Revenus annuels", fmt_amount_round(fin.income))
    with c2:
        st.metric("Cashflow annuel", fmt_amount_round(fin.cashflow),
                  delta=fmt_signed(fin.cashflow / 12) + " / mois")
    with c3:
        st.metric("Rendement brut", fmt_percent(fin.yield_gross / 100))
    with c4:
        st.metric(f"Impôt estimé ({recommended.regime.label})", fmt_amount_round(recommended.estimated_tax))

    c5, c6, c7, c8 = st.columns(4)
    with c5:
        st.metric("Charges", fmt_amount_round(fin.expenses))
    with c6:
        st.metric("Mensualité de crédit", fmt_amount(fin.monthly_loan_payment))
    with c7:
        st.metric(f"Intérêts (année {fin.loan_year.year})", fmt_amount_round(fin.loan_year.interest))
    with c8:
        st.metric("Amortissement", fmt_amount_round(fin.depreciation))


def render_schedule_metrics(schedule: AmortizationSchedule):
    c1, c2, c3 = st.columns(3)
    with c1:
        st.metric("Mensualité", fmt_amount(schedule.monthly_payment))
    with c2:
        st.metric("Coût total des intérêts", fmt_amount_round(schedule.total_interest))
    with c3:
        st.metric("Durée effective", fmt_months(schedule.payoff_month))


def render_scenario_metrics(comparison: ScenarioComparison):
    """Gains de la simulation par rapport au prêt actuel"""
    c1, c2, c3 = st.columns(3)
    with c1:
        st.metric("Nouvelle mensualité", fmt_amount(comparison.alternative.monthly_payment),
                  delta=fmt_signed(-comparison.monthly_gain), delta_color="inverse")
    with c2:
        st.metric("Intérêts économisés", fmt_amount_round(comparison.interest_saved))
    with c3:
        st.metric("Durée restante", fmt_months(comparison.alternative.payoff_month),
                  delta=f"-{fmt_months(comparison.months_saved)}" if comparison.months_saved > 0 else None,
                  delta_color="inverse")


def render_alerts(alerts: list):
    """Affiche suggestions et alertes selon leur niveau"""
    for alert in alerts:
        title = alert.get("title")
        text = f"**{title}** : {alert['message']}" if title else alert["message"]
        level = alert.get("type")
        if level == AlertLevel.SUCCESS.value:
            st.success(text)
        elif level == AlertLevel.WARNING.value:
            st.warning(text)
        elif level == AlertLevel.TIP.value:
            st.info(text, icon="💡")
        else:
            st.info(text)
