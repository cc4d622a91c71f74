"""Biens, loyers et dépenses"""
from dataclasses import asdict

import streamlit as st

from data_manager.excel_handler import (
    get_all_properties, save_property, delete_property,
    get_payments, save_payment, delete_payment,
    get_expenses, save_expense, delete_expense,
    init_excel,
)
from data_manager.data_validator import validate_property, validate_payment, validate_expense
from data_manager.schema import Property, RentPayment, Expense
from core.amortization import compute_schedule
from core.errors import FinancialInputError
from core.financials import build_transactions, default_depreciation, loan_terms_for
from components.forms import render_property_form, render_payment_form, render_expense_form
from components.tables import render_transactions_table
from utils.id_generator import generate_property_id, generate_payment_id, generate_expense_id
from utils.formatters import fmt_amount, fmt_rate

st.set_page_config(page_title="Biens", page_icon="🏘️", layout="wide")
st.title("🏘️ Biens")

init_excel()

tab_list, tab_edit, tab_flows = st.tabs(["Mes biens", "Ajouter / modifier", "Loyers et dépenses"])

with tab_list:
    properties = get_all_properties()
    if properties.empty:
        st.info("Aucun bien. Utilisez l'onglet « Ajouter / modifier ».")
    else:
        for _, prop in properties.iterrows():
            pid = prop["property_id"]
            with st.container(border=True):
                col_info, col_actions = st.columns([4, 1])
                with col_info:
                    st.subheader(prop["name"])
                    c1, c2, c3 = st.columns(3)
                    c1.write(f"**Adresse :** {prop.get('address', '') or '-'}")
                    c1.write(f"**Valeur :** {fmt_amount(float(prop['property_value']))}")
                    terms = loan_terms_for(prop)
                    if terms is None:
                        c2.write("**Crédit :** aucun")
                    else:
                        c2.write(f"**Emprunt :** {fmt_amount(terms.principal)}")
                        c2.write(f"**Taux :** {fmt_rate(terms.annual_rate_percent)} sur {terms.term_months} mois")
                        c3.write(f"**Mensualité :** {fmt_amount(compute_schedule(terms).monthly_payment)}")
                    if prop.get("notes"):
                        st.write(f"**Notes :** {prop['notes']}")
                with col_actions:
                    st.button("Modifier", key=f"edit_{pid}", type="primary",
                              on_click=lambda p=pid: st.session_state.update(editing_property_id=p))
                    if st.button("Supprimer", key=f"del_{pid}", type="secondary"):
                        delete_property(pid)
                        st.rerun()

with tab_edit:
    editing_id = st.session_state.get("editing_property_id")
    editing = None
    if editing_id:
        properties = get_all_properties()
        match = properties[properties["property_id"] == editing_id]
        if not match.empty:
            editing = match.iloc[0]
            st.info(f"Modification de **{editing['name']}**")
            if st.button("Annuler", key="cancel_edit"):
                del st.session_state["editing_property_id"]
                st.rerun()

    form_data = render_property_form("edit" if editing is not None else "new", editing)

    if form_data:
        valid, msg = validate_property(
            name=form_data["name"],
            property_value=form_data["property_value"],
            loan_amount=form_data["loan_amount"],
            loan_rate=form_data["loan_rate"],
            loan_term_months=form_data["loan_term_months"],
            extra_monthly_payment=form_data["extra_monthly_payment"],
            depreciation_amount=form_data["depreciation_amount"],
        )
        if not valid:
            st.error(msg)
        else:
            prop = Property(
                property_id=editing_id if editing is not None else generate_property_id(),
                name=form_data["name"].strip(),
                address=form_data["address"],
                property_value=form_data["property_value"],
                loan_amount=form_data["loan_amount"],
                loan_rate=form_data["loan_rate"],
                loan_term_months=form_data["loan_term_months"],
                loan_start_date=form_data["loan_start_date"].strftime("%Y-%m-%d"),
                extra_monthly_payment=form_data["extra_monthly_payment"],
                depreciation_amount=form_data["depreciation_amount"],
                notes=form_data["notes"],
            )
            try:
                terms = loan_terms_for(asdict(prop))
                if terms is not None:
                    schedule = compute_schedule(terms)
                    st.success(f"Mensualité : {fmt_amount(schedule.monthly_payment)} | "
                               f"Intérêts totaux : {fmt_amount(schedule.total_interest)}")
            except FinancialInputError as e:
                st.error(f"Crédit incohérent : {e}")
            else:
                if prop.depreciation_amount is None:
                    st.caption(f"Amortissement automatique : {fmt_amount(default_depreciation(prop.property_value))} / an")
                save_property(prop)
                st.success(f"Bien « {prop.name} » enregistré")
                if editing_id:
                    del st.session_state["editing_property_id"]
                    st.rerun()

with tab_flows:
    properties = get_all_properties()
    if properties.empty:
        st.info("Ajoutez d'abord un bien.")
        st.stop()

    names = properties["name"].astype(str).tolist()
    selected = st.selectbox("Bien", names, key="flows_property")
    property_id = properties.iloc[names.index(selected)]["property_id"]

    c1, c2 = st.columns(2)
    with c1:
        st.subheader("Nouveau loyer")
        data = render_payment_form()
        if data:
            valid, msg = validate_payment(data["tenant_name"], data["amount"], data["status"], data["date"])
            if not valid:
                st.error(msg)
            else:
                save_payment(RentPayment(
                    payment_id=generate_payment_id(),
                    property_id=property_id,
                    tenant_name=data["tenant_name"].strip(),
                    date=data["date"].strftime("%Y-%m-%d"),
                    amount=data["amount"],
                    status=data["status"],
                ))
                st.success("Loyer enregistré")
    with c2:
        st.subheader("Nouvelle dépense")
        data = render_expense_form()
        if data:
            valid, msg = validate_expense(data["amount"], data["category"], data["date"])
            if not valid:
                st.error(msg)
            else:
                save_expense(Expense(
                    expense_id=generate_expense_id(),
                    property_id=property_id,
                    date=data["date"].strftime("%Y-%m-%d"),
                    amount=data["amount"],
                    category=data["category"],
                    description=data["description"],
                    is_deductible=data["is_deductible"],
                ))
                st.success("Dépense enregistrée")

    st.divider()
    payments = get_payments(property_id)
    expenses = get_expenses(property_id)
    transactions = build_transactions(payments, expenses)
    render_transactions_table(transactions)

    if not transactions.empty:
        to_delete = st.selectbox(
            "Supprimer une transaction",
            options=[""] + transactions["id"].astype(str).tolist(),
            format_func=lambda x: "-" if not x else
            f"{x} · {transactions.loc[transactions['id'] == x, 'description'].iloc[0]}",
        )
        if to_delete and st.button("Supprimer", type="secondary"):
            if to_delete.startswith("LY"):
                delete_payment(to_delete)
            else:
                delete_expense(to_delete)
            st.rerun()
