"""Paramètres par défaut"""
import streamlit as st

from config.settings import (
    DEFAULT_LOAN_RATE, DEFAULT_LOAN_TERM_MONTHS, DEFAULT_LOAN_TO_VALUE,
    DEFAULT_INSURANCE_RATE, DEFAULT_MARGINAL_TAX_RATE, MARGINAL_TAX_RATES, CONFIG_BOUNDS,
)
from data_manager.excel_handler import get_all_config, get_config_float, set_config, init_excel

st.set_page_config(page_title="Configuration", page_icon="⚙️", layout="wide")
st.title("⚙️ Configuration")

init_excel()


def _current(key: str, default: float) -> float:
    # les widgets refusent une valeur hors de min_value/max_value
    low, high = CONFIG_BOUNDS[key]
    return min(max(get_config_float(key, default), low), high)


current_rate = _current("loan_rate", DEFAULT_LOAN_RATE)
current_term = int(_current("loan_term_months", DEFAULT_LOAN_TERM_MONTHS))
current_ltv = _current("loan_to_value", DEFAULT_LOAN_TO_VALUE)
current_insurance = _current("insurance_rate", DEFAULT_INSURANCE_RATE)
current_tmi = get_config_float("marginal_tax_rate", DEFAULT_MARGINAL_TAX_RATE)

st.info("Les valeurs enregistrées ici sont utilisées par défaut lors de la saisie d'un bien et dans les simulateurs.")

with st.form("settings_form"):
    st.subheader("Crédit")
    c1, c2 = st.columns(2)
    with c1:
        new_rate = st.number_input("Taux par défaut (%)", min_value=CONFIG_BOUNDS["loan_rate"][0],
                                   max_value=CONFIG_BOUNDS["loan_rate"][1],
                                   value=current_rate, step=0.05, format="%.2f")
        new_ltv = st.number_input("Quotité financée par défaut", min_value=CONFIG_BOUNDS["loan_to_value"][0],
                                  max_value=CONFIG_BOUNDS["loan_to_value"][1],
                                  value=current_ltv, step=0.05, format="%.2f",
                                  help="Utilisée quand le montant emprunté d'un bien n'est pas renseigné")
    with c2:
        new_term = st.number_input("Durée par défaut (mois)", min_value=CONFIG_BOUNDS["loan_term_months"][0],
                                   max_value=CONFIG_BOUNDS["loan_term_months"][1],
                                   value=current_term, step=12)
        new_insurance = st.number_input("Assurance emprunteur (%)", min_value=CONFIG_BOUNDS["insurance_rate"][0],
                                        max_value=CONFIG_BOUNDS["insurance_rate"][1],
                                        value=current_insurance, step=0.01, format="%.2f")

    st.subheader("Fiscalité")
    options = list(MARGINAL_TAX_RATES)
    new_tmi = st.select_slider("Tranche marginale d'imposition (%)", options=options,
                               value=current_tmi if current_tmi in options else DEFAULT_MARGINAL_TAX_RATE)

    submitted = st.form_submit_button("Enregistrer", width='stretch', type="primary")

    if submitted:
        set_config("loan_rate", str(new_rate))
        set_config("loan_term_months", str(int(new_term)))
        set_config("loan_to_value", str(new_ltv))
        set_config("insurance_rate", str(new_insurance))
        set_config("marginal_tax_rate", str(new_tmi))
        st.success("Configuration enregistrée")
        st.rerun()

st.divider()

st.subheader("Configuration actuelle")
config_df = get_all_config()
if not config_df.empty:
    display_df = config_df.rename(columns={
        "key": "Paramètre",
        "value": "Valeur",
        "description": "Description",
        "updated_at": "Mis à jour",
    })
    st.dataframe(display_df, width='stretch', hide_index=True)
else:
    st.info("Aucune configuration enregistrée, valeurs par défaut utilisées.")
