"""Convert between ``Case`` records and the all-text editable forms."""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Dict, Mapping, Optional, Union

from core.borrowers import normalize_primary, unique_ids
from core.forms import (
    AssetsForm,
    BorrowerForm,
    DealForm,
    HumanDecisionForm,
    IncomeForm,
    IntakeForm,
    LiabilitiesForm,
    OutcomeForm,
    PropertyForm,
    new_borrower_form,
)
from core.models import (
    Assets,
    Borrower,
    Case,
    Deal,
    Employment,
    HumanDecision,
    Income,
    Liabilities,
    Outcome,
    PropertyDetails,
    Record,
    new_case,
)
from core.presets import UNKNOWN_LABEL
from core.unknown import from_editable_text, is_unknown, to_editable_text

# Numeric (UnknownNumber) fields of the flat groups; everything else in a
# group is copied across unchanged.
NUMERIC_FIELDS = {
    "income": ("monthly_gross_income",),
    "assets": ("down_payment_amount", "reserves_months", "gift_amount"),
    "liabilities": ("monthly_debts_total", "current_housing_payment", "future_housing_payment_est"),
    "property": ("purchase_price", "estimated_value", "loan_amount", "hoa_dues_monthly"),
}


def _gift_to_form(value: Any) -> str:
    if value is True:
        return "true"
    if value is False:
        return "false"
    return UNKNOWN_LABEL


def _gift_from_form(value: str) -> Union[bool, str]:
    if value == "true":
        return True
    if value == "false":
        return False
    return UNKNOWN_LABEL


def _group_to_form(name: str, group: Record) -> Dict[str, Any]:
    data = group.model_dump()
    for field in NUMERIC_FIELDS[name]:
        data[field] = to_editable_text(data[field])
    return data


def _group_from_form(name: str, group) -> Dict[str, Any]:
    data = group.model_dump()
    for field in NUMERIC_FIELDS[name]:
        data[field] = from_editable_text(data[field])
    return data


def _borrower_to_form(b: Borrower) -> BorrowerForm:
    return BorrowerForm(
        borrower_id=b.borrower_id,
        is_primary=b.is_primary,
        credit_score_mid=to_editable_text(b.credit_score_mid),
        citizenship=b.citizenship,
        income_type=b.employment.income_type,
        job_time_months=to_editable_text(b.employment.job_time_months),
        self_employed_time_months=to_editable_text(b.employment.self_employed_time_months),
    )


def _borrower_from_form(b: BorrowerForm) -> Borrower:
    return Borrower(
        borrower_id=b.borrower_id,
        is_primary=b.is_primary,
        credit_score_mid=from_editable_text(b.credit_score_mid),
        citizenship=b.citizenship,
        employment=Employment(
            income_type=b.income_type,
            job_time_months=from_editable_text(b.job_time_months),
            self_employed_time_months=from_editable_text(b.self_employed_time_months),
        ),
    )


def to_form_state(record: Union[Case, Mapping[str, Any]]) -> IntakeForm:
    """Build the editable intake form for a case.

    Accepts a parsed ``Case`` or the raw record dict. The borrower list is
    repaired on every load because the case service does not always keep
    exactly one primary borrower or distinct borrower ids.
    """
    case = record if isinstance(record, Case) else Case.from_payload(dict(record))
    assets = _group_to_form("assets", case.assets)
    assets["gift_funds"] = _gift_to_form(case.assets.gift_funds)
    borrowers = [_borrower_to_form(b) for b in case.borrowers]
    return IntakeForm(
        deal=DealForm(
            purpose=case.deal.purpose,
            occupancy=case.deal.occupancy,
            property_type=case.deal.property_type,
            state=case.deal.state,
            target_close_days=str(case.deal.target_close_days),
        ),
        borrowers=normalize_primary(unique_ids(borrowers), factory=new_borrower_form),
        income=IncomeForm(**_group_to_form("income", case.income)),
        assets=AssetsForm(**assets),
        liabilities=LiabilitiesForm(**_group_to_form("liabilities", case.liabilities)),
        property=PropertyForm(**_group_to_form("property", case.property)),
        human_decision=HumanDecisionForm(**case.human_decision.model_dump()),
    )


def to_persisted_record(form: IntakeForm, base: Optional[Case] = None) -> Case:
    """Apply the edited form to ``base`` and return the full record to send.

    Fields the form does not edit (identity, status, calculations, risk
    flags, copilot output, outcome) are carried over from ``base``; without
    a base a fresh ``new_case()`` is used.
    """
    base = base if base is not None else new_case()
    days = from_editable_text(form.deal.target_close_days)
    if is_unknown(days) or days <= 0:
        days = base.deal.target_close_days
    assets = _group_from_form("assets", form.assets)
    assets["gift_funds"] = _gift_from_form(form.assets.gift_funds)
    return base.model_copy(
        deep=True,
        update={
            "deal": Deal(
                purpose=form.deal.purpose,
                occupancy=form.deal.occupancy,
                property_type=form.deal.property_type,
                state=form.deal.state.strip().upper(),
                target_close_days=int(days),
            ),
            "borrowers": [_borrower_from_form(b) for b in form.borrowers],
            "income": Income(**_group_from_form("income", form.income)),
            "assets": Assets(**assets),
            "liabilities": Liabilities(**_group_from_form("liabilities", form.liabilities)),
            "property": PropertyDetails(**_group_from_form("property", form.property)),
            "human_decision": HumanDecision(**form.human_decision.model_dump()),
        },
    )


def closed_date_to_text(value: Optional[str]) -> str:
    """Calendar date (``YYYY-MM-DD``, UTC) of a stored timestamp, or ``""``."""
    if not value:
        return ""
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return ""
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date().isoformat()


def closed_date_from_text(value: str) -> Optional[str]:
    """UTC start-of-day ISO 8601 timestamp for a ``YYYY-MM-DD`` date.

    Blank input persists as ``None``. Raises ``ValueError`` for text that is
    not a calendar date.
    """
    text = (value or "").strip()
    if not text:
        return None
    day = date.fromisoformat(text)
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc).strftime(
        "%Y-%m-%dT%H:%M:%S.000Z"
    )


def outcome_to_form(outcome: Outcome) -> OutcomeForm:
    lender = "" if outcome.final_lender == UNKNOWN_LABEL else outcome.final_lender
    return OutcomeForm(
        aus=outcome.aus,
        decision=outcome.decision,
        conditions=list(outcome.conditions),
        denial_reasons=list(outcome.denial_reasons),
        final_lender=lender,
        closed_date=closed_date_to_text(outcome.closed_date),
    )


def form_to_outcome(form: OutcomeForm) -> Outcome:
    lender = form.final_lender.strip()
    return Outcome(
        aus=form.aus,
        decision=form.decision,
        conditions=list(form.conditions),
        denial_reasons=list(form.denial_reasons),
        final_lender=lender or UNKNOWN_LABEL,
        closed_date=closed_date_from_text(form.closed_date),
    )
