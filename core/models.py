"""Typed case record shared by the API layer, forms and views.

Parsing is deliberately forgiving: the case service is not trusted to send
every field, and unrecognised enumeration values fall back to a baseline
member instead of failing the whole record. Structural invariants (one
primary borrower) are enforced by ``core.borrowers`` and ``core.mapper``,
not here.
"""
from __future__ import annotations

import uuid
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator

from core.presets import (
    AUS_OPTIONS,
    CASE_STATUSES,
    CITIZENSHIP_OPTIONS,
    DEAL_DEFAULTS,
    DEAL_PURPOSE_OPTIONS,
    DECISION_OPTIONS,
    INCOME_TYPE_OPTIONS,
    OCCUPANCY_OPTIONS,
    PROPERTY_TYPE_OPTIONS,
    RETRIEVER_BACKENDS,
    RISK_SEVERITIES,
    UNKNOWN_LABEL,
    USER_ROLES,
)
from core.unknown import UNKNOWN, Unknown, from_editable_text, is_unknown


def new_borrower_id() -> str:
    return str(uuid.uuid4())


def _closed(options, default):
    """Replace values outside ``options`` with ``default``."""

    def check(value: Any) -> Any:
        return value if isinstance(value, str) and value in options else default

    return BeforeValidator(check)


def _optional_number(value: Any) -> Optional[float]:
    n = from_editable_text(value)
    return None if is_unknown(n) else n


def _gift_funds(value: Any) -> Any:
    return value if isinstance(value, bool) else UNKNOWN_LABEL


def _close_days(value: Any) -> int:
    n = from_editable_text(value)
    if is_unknown(n) or n <= 0:
        return DEAL_DEFAULTS["target_close_days"]
    return int(n)


def _text(value: Any) -> Any:
    """Numbers (and booleans) sent for text fields are kept as their text."""
    if isinstance(value, (int, float)):
        return str(value)
    return value


Text = Annotated[str, BeforeValidator(_text)]
Number = Annotated[Union[int, float, Unknown], BeforeValidator(from_editable_text)]
Confidence = Annotated[Optional[float], BeforeValidator(_optional_number)]

CaseStatus = Annotated[
    Literal["intake", "submitted", "approved", "denied", "withdrawn", "stalled"],
    _closed(CASE_STATUSES, "intake"),
]
UserRole = Annotated[Literal["broker", "mlo", "assistant"], _closed(USER_ROLES, "broker")]
DealPurpose = Annotated[
    Literal["purchase", "refi", "cash_out"], _closed(DEAL_PURPOSE_OPTIONS, "purchase")
]
Occupancy = Annotated[
    Literal["primary", "second", "investment"], _closed(OCCUPANCY_OPTIONS, "primary")
]
PropertyType = Annotated[
    Literal["sfr", "condo", "townhome", "2-4_unit", "manufactured", "other"],
    _closed(PROPERTY_TYPE_OPTIONS, "sfr"),
]
Citizenship = Annotated[
    Literal["us_citizen", "permanent_resident", "non_permanent_resident", "unknown"],
    _closed(CITIZENSHIP_OPTIONS, UNKNOWN_LABEL),
]
IncomeType = Annotated[
    Literal["w2", "1099", "self_employed", "retired", "mixed", "unknown"],
    _closed(INCOME_TYPE_OPTIONS, UNKNOWN_LABEL),
]
RiskSeverity = Annotated[Literal["low", "medium", "high"], _closed(RISK_SEVERITIES, "low")]
RetrieverBackend = Annotated[
    Optional[Literal["pinecone", "opensearch"]], _closed(RETRIEVER_BACKENDS, None)
]
OutcomeAUS = Annotated[
    Literal["approve", "eligible", "refer", "ineligible", "unknown"],
    _closed(AUS_OPTIONS, UNKNOWN_LABEL),
]
OutcomeDecision = Annotated[
    Literal["approved", "denied", "pending", "unknown"],
    _closed(DECISION_OPTIONS, UNKNOWN_LABEL),
]
GiftFunds = Annotated[Union[bool, Literal["unknown"]], BeforeValidator(_gift_funds)]


class Record(BaseModel):
    """Base for every part of a case: extra keys ignored, ``null`` means absent."""

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class CreatedBy(Record):
    user_id: Text = ""
    role: UserRole = "broker"


class Deal(Record):
    purpose: DealPurpose = DEAL_DEFAULTS["purpose"]
    occupancy: Occupancy = DEAL_DEFAULTS["occupancy"]
    property_type: PropertyType = DEAL_DEFAULTS["property_type"]
    state: Text = DEAL_DEFAULTS["state"]
    target_close_days: Annotated[int, BeforeValidator(_close_days)] = DEAL_DEFAULTS[
        "target_close_days"
    ]


class Employment(Record):
    income_type: IncomeType = UNKNOWN_LABEL
    job_time_months: Number = UNKNOWN
    self_employed_time_months: Number = UNKNOWN


class Borrower(Record):
    borrower_id: Text = Field(default_factory=new_borrower_id)
    is_primary: bool = False
    credit_score_mid: Number = UNKNOWN
    citizenship: Citizenship = UNKNOWN_LABEL
    employment: Employment = Field(default_factory=Employment)

    @field_validator("borrower_id", mode="before")
    @classmethod
    def _fresh_id_when_blank(cls, value: Any) -> Any:
        return _text(value) if value not in (None, "") else new_borrower_id()


class Income(Record):
    monthly_gross_income: Number = UNKNOWN
    income_notes: Text = ""
    documents_seen: List[Text] = Field(default_factory=list)


class Assets(Record):
    down_payment_amount: Number = UNKNOWN
    reserves_months: Number = UNKNOWN
    gift_funds: GiftFunds = UNKNOWN_LABEL
    gift_amount: Number = UNKNOWN


class Liabilities(Record):
    monthly_debts_total: Number = UNKNOWN
    current_housing_payment: Number = UNKNOWN
    future_housing_payment_est: Number = UNKNOWN
    notes: Text = ""


class PropertyDetails(Record):
    purchase_price: Number = UNKNOWN
    estimated_value: Number = UNKNOWN
    loan_amount: Number = UNKNOWN
    hoa_dues_monthly: Number = UNKNOWN


class CalculationMath(Record):
    ltv: Optional[Text] = None
    front_dti: Optional[Text] = None
    back_dti: Optional[Text] = None


class Calculations(Record):
    ltv: Number = UNKNOWN
    front_dti: Number = UNKNOWN
    back_dti: Number = UNKNOWN
    math: Optional[CalculationMath] = None


class RiskFlag(Record):
    code: Text = ""
    severity: RiskSeverity = "low"
    details: Text = ""


class SuggestedDirection(Record):
    option: Text = ""
    confidence: Confidence = None
    why: List[Text] = Field(default_factory=list)


class GuidelineCitation(Record):
    doc_id: Text = ""
    section: Text = ""
    quote: Text = ""
    retrieval_confidence: Confidence = None
    retriever_backend: RetrieverBackend = None
    snippet_hash: Optional[Text] = None
    retrieved_at: Optional[Text] = None


class Copilot(Record):
    suggested_directions: List[SuggestedDirection] = Field(default_factory=list)
    questions_to_ask_next: List[Text] = Field(default_factory=list)
    doc_checklist: List[Text] = Field(default_factory=list)
    guideline_citations: List[GuidelineCitation] = Field(default_factory=list)


class HumanDecision(Record):
    selected_path: Text = ""
    notes: Text = ""


class Outcome(Record):
    aus: OutcomeAUS = UNKNOWN_LABEL
    decision: OutcomeDecision = UNKNOWN_LABEL
    conditions: List[Text] = Field(default_factory=list)
    denial_reasons: List[Text] = Field(default_factory=list)
    final_lender: Text = UNKNOWN_LABEL
    closed_date: Optional[Text] = None


# Assigned by the case service; never sent on create.
IDENTITY_FIELDS = {"case_id", "created_at", "updated_at"}


class Case(Record):
    """Aggregate root; the only unit the case service persists."""

    case_id: Text = ""
    created_at: Text = ""
    updated_at: Text = ""
    created_by: CreatedBy = Field(default_factory=CreatedBy)
    status: CaseStatus = "intake"
    deal: Deal = Field(default_factory=Deal)
    borrowers: List[Borrower] = Field(default_factory=list)
    income: Income = Field(default_factory=Income)
    assets: Assets = Field(default_factory=Assets)
    liabilities: Liabilities = Field(default_factory=Liabilities)
    property: PropertyDetails = Field(default_factory=PropertyDetails)
    calculations: Calculations = Field(default_factory=Calculations)
    risk_flags: List[RiskFlag] = Field(default_factory=list)
    copilot: Copilot = Field(default_factory=Copilot)
    human_decision: HumanDecision = Field(default_factory=HumanDecision)
    outcome: Outcome = Field(default_factory=Outcome)

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "Case":
        return cls.model_validate(data)

    def to_payload(self, include_identity: bool = True) -> Dict[str, Any]:
        """JSON-ready dict; the full object is sent on create and update."""
        exclude = None if include_identity else IDENTITY_FIELDS
        return self.model_dump(mode="json", exclude=exclude)

    def primary_borrower(self) -> Optional[Borrower]:
        for b in self.borrowers:
            if b.is_primary:
                return b
        return self.borrowers[0] if self.borrowers else None


def new_case(user_id: str = "", role: str = "broker") -> Case:
    """Defaults for a scenario that has not been saved yet."""
    return Case(
        created_by=CreatedBy(user_id=user_id, role=role),
        status="intake",
        borrowers=[Borrower(is_primary=True)],
    )
