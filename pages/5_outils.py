"""Outils du propriétaire"""
import streamlit as st

from config.settings import DEFAULT_ENERGY_IMPROVEMENT
from core.tools import capital_gains_tax, energy_class, projected_energy_class, revise_rent
from utils.formatters import fmt_amount, fmt_amount_round, fmt_percent

st.set_page_config(page_title="Outils", page_icon="🧰", layout="wide")
st.title("🧰 Outils")

tab_irl, tab_pv, tab_dpe = st.tabs(["Révision IRL", "Plus-value", "DPE"])

with tab_irl:
    st.subheader("Révision annuelle du loyer")
    c1, c2, c3 = st.columns(3)
    with c1:
        rent = st.number_input("Loyer actuel (€)", min_value=0.0, value=800.0, step=10.0)
    with c2:
        old_index = st.number_input("IRL de référence", min_value=0.01, value=142.06, step=0.01, format="%.2f")
    with c3:
        new_index = st.number_input("Nouvel IRL", min_value=0.01, value=145.47, step=0.01, format="%.2f")

    revised, increase = revise_rent(rent, old_index, new_index)
    c1, c2 = st.columns(2)
    c1.metric("Nouveau loyer", fmt_amount(revised), delta=f"{increase:+.2f} € / mois")
    c2.metric("Gain annuel", fmt_amount_round(increase * 12))

with tab_pv:
    st.subheader("Impôt latent sur la plus-value")
    c1, c2, c3 = st.columns(3)
    with c1:
        purchase = st.number_input("Prix d'achat (€)", min_value=0.0, value=200000.0, step=5000.0)
    with c2:
        selling = st.number_input("Prix de vente estimé (€)", min_value=0.0, value=260000.0, step=5000.0)
    with c3:
        years = st.number_input("Années de détention", min_value=0, max_value=50, value=8)

    result = capital_gains_tax(purchase, selling, int(years))
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Plus-value brute", fmt_amount_round(result["gain"]))
    c2.metric("Abattement", fmt_percent(result["abatement_rate"]))
    c3.metric("Impôt total", fmt_amount_round(result["tax"]))
    c4.metric("Net vendeur", fmt_amount_round(result["net"]))
    st.caption(f"IR 19 % : {fmt_amount_round(result['income_tax'])} · "
               f"Prélèvements sociaux 17,2 % : {fmt_amount_round(result['social_levies'])}")

with tab_dpe:
    st.subheader("Diagnostic de performance énergétique")
    score = st.slider("Consommation (kWh/m²/an)", min_value=0, max_value=600, value=230)
    current = energy_class(score)
    projected = projected_energy_class(score)
    c1, c2 = st.columns(2)
    c1.metric("Classe actuelle", current)
    c2.metric(f"Après isolation (-{DEFAULT_ENERGY_IMPROVEMENT} kWh)", projected)
    if current in ("F", "G"):
        st.warning("Logement classé passoire thermique : la location sera progressivement interdite.")
