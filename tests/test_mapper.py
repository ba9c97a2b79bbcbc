import pytest

from core.forms import OutcomeForm
from core.mapper import (
    closed_date_from_text,
    closed_date_to_text,
    form_to_outcome,
    outcome_to_form,
    to_form_state,
    to_persisted_record,
)
from core.models import Case, Outcome
from core.unknown import UNKNOWN


def _record():
    return {
        "case_id": "c1",
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-02T00:00:00Z",
        "status": "submitted",
        "deal": {"purpose": "refi", "occupancy": "investment", "property_type": "condo", "state": "TX", "target_close_days": 45},
        "borrowers": [
            {"borrower_id": "b1", "is_primary": True, "credit_score_mid": 701, "citizenship": "us_citizen",
             "employment": {"income_type": "w2", "job_time_months": 30}},
            {"borrower_id": "b2", "credit_score_mid": "unknown"},
        ],
        "income": {"monthly_gross_income": 8250.5, "documents_seen": ["paystub"]},
        "assets": {"down_payment_amount": 50000, "gift_funds": True},
        "liabilities": {"monthly_debts_total": "unknown", "current_housing_payment": 1900},
        "property": {"purchase_price": 400000, "loan_amount": 350000},
        "calculations": {"ltv": 87.5},
        "risk_flags": [{"code": "HIGH_LTV", "severity": "medium", "details": "LTV over 80"}],
        "outcome": {"decision": "approved", "final_lender": "Acme"},
    }


def test_round_trip_keeps_numbers_and_unknowns():
    case = Case.from_payload(_record())
    again = to_persisted_record(to_form_state(case), base=case)
    assert again.income.monthly_gross_income == 8250.5
    assert again.assets.down_payment_amount == 50000
    assert again.assets.reserves_months is UNKNOWN
    assert again.liabilities.monthly_debts_total is UNKNOWN
    assert again.liabilities.current_housing_payment == 1900
    assert again.property.purchase_price == 400000
    assert again.borrowers[0].credit_score_mid == 701
    assert again.borrowers[1].credit_score_mid is UNKNOWN
    assert again.borrowers[0].employment.job_time_months == 30
    assert again.deal == case.deal
    assert again.to_payload() == case.to_payload()


def test_form_state_is_text():
    form = to_form_state(_record())
    assert form.income.monthly_gross_income == "8250.5"
    assert form.liabilities.monthly_debts_total == ""
    assert form.borrowers[1].credit_score_mid == ""
    assert form.deal.target_close_days == "45"
    assert form.assets.gift_funds == "true"


def test_untouched_fields_carry_over_from_base():
    case = Case.from_payload(_record())
    form = to_form_state(case)
    form.property.loan_amount = "360000"
    saved = to_persisted_record(form, base=case)
    assert saved.property.loan_amount == 360000
    assert saved.case_id == "c1"
    assert saved.status == "submitted"
    assert saved.calculations.ltv == 87.5
    assert saved.risk_flags[0].code == "HIGH_LTV"
    assert saved.outcome.final_lender == "Acme"
    assert case.property.loan_amount == 350000


def test_unknown_enums_and_gift_funds():
    form = to_form_state({"case_id": "c1", "borrowers": [{"citizenship": "alien", "employment": {"income_type": "crypto"}}]})
    assert form.borrowers[0].citizenship == "unknown"
    assert form.borrowers[0].income_type == "unknown"
    assert form.assets.gift_funds == "unknown"
    form.assets.gift_funds = "false"
    assert to_persisted_record(form).assets.gift_funds is False


def test_missing_borrowers_get_a_primary():
    form = to_form_state({"case_id": "c1"})
    assert len(form.borrowers) == 1
    assert form.borrowers[0].is_primary


def test_state_is_upper_cased_and_bad_days_fall_back():
    form = to_form_state(_record())
    form.deal.state = " ny "
    form.deal.target_close_days = "soon"
    saved = to_persisted_record(form, base=Case.from_payload(_record()))
    assert saved.deal.state == "NY"
    assert saved.deal.target_close_days == 45


def test_final_lender_unknown_is_blank_in_form():
    form = outcome_to_form(Outcome())
    assert form.final_lender == ""
    assert form_to_outcome(form).final_lender == "unknown"
    assert form_to_outcome(OutcomeForm(final_lender=" Acme ")).final_lender == "Acme"


def test_closed_date_conversion():
    assert closed_date_from_text("2024-03-05") == "2024-03-05T00:00:00.000Z"
    assert closed_date_from_text("") is None
    assert closed_date_to_text("2024-03-05T00:00:00.000Z") == "2024-03-05"
    assert closed_date_to_text("2024-03-05T23:30:00-05:00") == "2024-03-06"
    assert closed_date_to_text("garbage") == ""
    assert closed_date_to_text(None) == ""


def test_bad_closed_date_raises():
    with pytest.raises(ValueError):
        closed_date_from_text("03/05/2024")


def test_outcome_round_trip():
    outcome = Outcome(
        aus="refer",
        decision="denied",
        denial_reasons=["DTI"],
        final_lender="Acme",
        closed_date="2024-03-05T00:00:00.000Z",
    )
    assert form_to_outcome(outcome_to_form(outcome)) == outcome


def test_repeated_borrower_ids_get_fresh_ids_on_load():
    form = to_form_state(
        {"case_id": "c", "borrowers": [{"borrower_id": "X", "is_primary": True}, {"borrower_id": "X"}]}
    )
    ids = [b.borrower_id for b in form.borrowers]
    assert ids[0] == "X"
    assert ids[1] not in ("X", "")
    assert [b.is_primary for b in form.borrowers] == [True, False]
