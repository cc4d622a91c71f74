"""Cockpit Propriétaire - point d'entrée"""
import streamlit as st

from config.settings import PAGE_TITLE, PAGE_ICON, LAYOUT, EXCEL_FILE
from data_manager.excel_handler import init_excel

st.set_page_config(
    page_title=PAGE_TITLE,
    page_icon=PAGE_ICON,
    layout=LAYOUT,
    initial_sidebar_state="expanded",
)

init_excel()

st.title(f"{PAGE_ICON} {PAGE_TITLE}")

st.markdown("""
Bienvenue dans le Cockpit Propriétaire : suivez la rentabilité de vos biens locatifs,
simulez votre crédit et comparez les régimes fiscaux.

### Navigation

| Page | Fonction |
|------|----------|
| 📊 **Tableau de bord** | Cashflow, rendement, impôt estimé, alertes |
| 🏘️ **Biens** | Biens, loyers encaissés et dépenses |
| 🏦 **Dette** | Échéancier, renégociation, remboursements anticipés |
| ⚖️ **Fiscalité** | Micro, LMNP Réel et SCI IS comparés |
| 🧰 **Outils** | Révision IRL, plus-value, DPE |
| ⚙️ **Configuration** | Taux et paramètres par défaut |

### Démarrage

1. Ajoutez un bien dans **Biens**
2. Saisissez loyers et dépenses
3. Consultez le **Tableau de bord** et le **Simulateur fiscal**
""")

with st.sidebar:
    st.markdown("### À propos")
    st.markdown("Cockpit Propriétaire v1.0")
    st.markdown(f"Données enregistrées dans `{EXCEL_FILE.name}`")
