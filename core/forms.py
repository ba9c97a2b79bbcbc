"""Editable form state for the intake and outcome screens.

Numbers are held as text so a blank field can mean Unknown; see
``core.mapper`` for the conversions to and from ``core.models.Case``.
"""
from __future__ import annotations

import re
from typing import List, Literal

from pydantic import BaseModel, Field

from core.models import new_borrower_id
from core.presets import DEAL_DEFAULTS, MAX_TARGET_CLOSE_DAYS, UNKNOWN_LABEL
from core.unknown import from_editable_text, is_unknown


class DealForm(BaseModel):
    purpose: str = DEAL_DEFAULTS["purpose"]
    occupancy: str = DEAL_DEFAULTS["occupancy"]
    property_type: str = DEAL_DEFAULTS["property_type"]
    state: str = DEAL_DEFAULTS["state"]
    target_close_days: str = str(DEAL_DEFAULTS["target_close_days"])


class BorrowerForm(BaseModel):
    borrower_id: str = Field(default_factory=new_borrower_id)
    is_primary: bool = False
    credit_score_mid: str = ""
    citizenship: str = UNKNOWN_LABEL
    income_type: str = UNKNOWN_LABEL
    job_time_months: str = ""
    self_employed_time_months: str = ""


class IncomeForm(BaseModel):
    monthly_gross_income: str = ""
    income_notes: str = ""
    documents_seen: List[str] = Field(default_factory=list)


class AssetsForm(BaseModel):
    down_payment_amount: str = ""
    reserves_months: str = ""
    gift_funds: Literal["true", "false", "unknown"] = "unknown"
    gift_amount: str = ""


class LiabilitiesForm(BaseModel):
    monthly_debts_total: str = ""
    current_housing_payment: str = ""
    future_housing_payment_est: str = ""
    notes: str = ""


class PropertyForm(BaseModel):
    purchase_price: str = ""
    estimated_value: str = ""
    loan_amount: str = ""
    hoa_dues_monthly: str = ""


class HumanDecisionForm(BaseModel):
    selected_path: str = ""
    notes: str = ""


class IntakeForm(BaseModel):
    deal: DealForm = Field(default_factory=DealForm)
    borrowers: List[BorrowerForm] = Field(default_factory=list)
    income: IncomeForm = Field(default_factory=IncomeForm)
    assets: AssetsForm = Field(default_factory=AssetsForm)
    liabilities: LiabilitiesForm = Field(default_factory=LiabilitiesForm)
    property: PropertyForm = Field(default_factory=PropertyForm)
    human_decision: HumanDecisionForm = Field(default_factory=HumanDecisionForm)


class OutcomeForm(BaseModel):
    aus: str = UNKNOWN_LABEL
    decision: str = UNKNOWN_LABEL
    conditions: List[str] = Field(default_factory=list)
    denial_reasons: List[str] = Field(default_factory=list)
    final_lender: str = ""
    closed_date: str = ""


def new_borrower_form(is_primary: bool = False) -> BorrowerForm:
    return BorrowerForm(is_primary=is_primary)


_STATE_CODE = re.compile(r"^[A-Za-z]{2}$")


def validate_deal(deal: DealForm) -> List[str]:
    errors = []
    state = deal.state.strip()
    if not state:
        errors.append("State is required")
    elif not _STATE_CODE.match(state):
        errors.append("Use 2-letter code")
    days = from_editable_text(deal.target_close_days)
    if not deal.target_close_days.strip():
        errors.append("Target close days is required")
    elif is_unknown(days) or days != int(days) or not 1 <= days <= MAX_TARGET_CLOSE_DAYS:
        errors.append(f"Target close days must be between 1 and {MAX_TARGET_CLOSE_DAYS}")
    return errors


def validate_intake_form(form: IntakeForm) -> List[str]:
    """Return human-readable problems; an empty list means the form can be saved."""
    errors = validate_deal(form.deal)
    if not form.borrowers:
        errors.append("At least one borrower is required")
    elif sum(1 for b in form.borrowers if b.is_primary) != 1:
        errors.append("Exactly one primary borrower is required")
    return errors
