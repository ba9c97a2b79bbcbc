import streamlit as st

from core.forms import (
    AssetsForm,
    DealForm,
    HumanDecisionForm,
    IncomeForm,
    LiabilitiesForm,
    PropertyForm,
)
from core.presets import (
    DEAL_PURPOSE_OPTIONS,
    GIFT_FUNDS_OPTIONS,
    OCCUPANCY_OPTIONS,
    PROPERTY_TYPE_OPTIONS,
)
from ui.borrowers import render_borrowers_editor
from ui.components import lines_input, number_text, select_option


def render_deal_inputs(deal: DealForm, prefix: str) -> DealForm:
    c1, c2, c3 = st.columns(3)
    with c1:
        purpose = select_option("Purpose", DEAL_PURPOSE_OPTIONS, deal.purpose, f"{prefix}_purpose")
        occupancy = select_option("Occupancy", OCCUPANCY_OPTIONS, deal.occupancy, f"{prefix}_occupancy")
    with c2:
        property_type = select_option(
            "Property Type", PROPERTY_TYPE_OPTIONS, deal.property_type, f"{prefix}_property_type"
        )
        state = st.text_input("State", value=deal.state, max_chars=2, key=f"{prefix}_state")
    with c3:
        days = st.text_input("Target Close (days)", value=deal.target_close_days, key=f"{prefix}_close_days")
    return DealForm(
        purpose=purpose,
        occupancy=occupancy,
        property_type=property_type,
        state=state,
        target_close_days=days,
    )


def render_income_inputs(income: IncomeForm, prefix: str) -> IncomeForm:
    gross = number_text("Monthly Gross Income", income.monthly_gross_income, f"{prefix}_gross_income")
    notes = st.text_area("Income Notes", value=income.income_notes, key=f"{prefix}_income_notes")
    docs = lines_input("Documents Seen", income.documents_seen, f"{prefix}_documents_seen")
    return IncomeForm(monthly_gross_income=gross, income_notes=notes, documents_seen=docs)


def render_assets_inputs(assets: AssetsForm, prefix: str) -> AssetsForm:
    c1, c2 = st.columns(2)
    with c1:
        down = number_text("Down Payment", assets.down_payment_amount, f"{prefix}_down_payment")
        reserves = number_text("Reserves (months)", assets.reserves_months, f"{prefix}_reserves")
    with c2:
        gift = select_option("Gift Funds", GIFT_FUNDS_OPTIONS, assets.gift_funds, f"{prefix}_gift_funds")
        gift_amount = number_text("Gift Amount", assets.gift_amount, f"{prefix}_gift_amount")
    return AssetsForm(
        down_payment_amount=down,
        reserves_months=reserves,
        gift_funds=gift,
        gift_amount=gift_amount,
    )


def render_liabilities_inputs(liabilities: LiabilitiesForm, prefix: str) -> LiabilitiesForm:
    c1, c2 = st.columns(2)
    with c1:
        debts = number_text("Monthly Debts Total", liabilities.monthly_debts_total, f"{prefix}_debts")
        current = number_text(
            "Current Housing Payment", liabilities.current_housing_payment, f"{prefix}_current_housing"
        )
    with c2:
        future = number_text(
            "Future Housing Payment (est.)",
            liabilities.future_housing_payment_est,
            f"{prefix}_future_housing",
        )
    notes = st.text_area("Liability Notes", value=liabilities.notes, key=f"{prefix}_liability_notes")
    return LiabilitiesForm(
        monthly_debts_total=debts,
        current_housing_payment=current,
        future_housing_payment_est=future,
        notes=notes,
    )


def render_property_inputs(prop: PropertyForm, prefix: str) -> PropertyForm:
    c1, c2 = st.columns(2)
    with c1:
        price = number_text("Purchase Price", prop.purchase_price, f"{prefix}_purchase_price")
        value = number_text("Estimated Value", prop.estimated_value, f"{prefix}_estimated_value")
    with c2:
        loan = number_text("Loan Amount", prop.loan_amount, f"{prefix}_loan_amount")
        hoa = number_text("HOA Dues (monthly)", prop.hoa_dues_monthly, f"{prefix}_hoa")
    return PropertyForm(purchase_price=price, estimated_value=value, loan_amount=loan, hoa_dues_monthly=hoa)


def render_human_decision_inputs(decision: HumanDecisionForm, prefix: str) -> HumanDecisionForm:
    path = st.text_input("Selected Path", value=decision.selected_path, key=f"{prefix}_selected_path")
    notes = st.text_area("Decision Notes", value=decision.notes, key=f"{prefix}_decision_notes")
    return HumanDecisionForm(selected_path=path, notes=notes)


def render_intake_form(form_key: str = "intake_form", prefix: str = "intake"):
    """Full intake editor over the ``IntakeForm`` in ``st.session_state[form_key]``."""

    def update(**groups):
        st.session_state[form_key] = st.session_state[form_key].model_copy(update=groups)

    form = st.session_state[form_key]
    with st.expander("Deal", expanded=True):
        update(deal=render_deal_inputs(form.deal, prefix))
    st.markdown("**Borrowers**")
    render_borrowers_editor(form_key, prefix)
    form = st.session_state[form_key]
    with st.expander("Income"):
        update(income=render_income_inputs(form.income, prefix))
    with st.expander("Assets"):
        update(assets=render_assets_inputs(form.assets, prefix))
    with st.expander("Liabilities"):
        update(liabilities=render_liabilities_inputs(form.liabilities, prefix))
    with st.expander("Property"):
        update(property=render_property_inputs(form.property, prefix))
    with st.expander("Human Decision"):
        update(human_decision=render_human_decision_inputs(form.human_decision, prefix))
    return st.session_state[form_key]
