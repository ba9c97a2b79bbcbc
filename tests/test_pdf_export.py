from core.models import Case, new_case
from export.pdf_export import build_case_summary_pdf


def test_new_case_summary_renders():
    pdf = build_case_summary_pdf(new_case())
    assert pdf.startswith(b"%PDF")


def test_full_case_summary_renders():
    case = Case.from_payload(
        {
            "case_id": "c1",
            "status": "submitted",
            "borrowers": [{"is_primary": True, "credit_score_mid": 700}, {"credit_score_mid": "unknown"}],
            "property": {"purchase_price": 500000, "loan_amount": 400000},
            "calculations": {"ltv": 80, "front_dti": "unknown"},
            "risk_flags": [{"code": "DTI", "severity": "high", "details": "Back DTI & reserves unknown"}],
            "copilot": {"doc_checklist": ["Two paystubs", "W-2s"]},
            "outcome": {"decision": "approved", "final_lender": "Acme"},
        }
    )
    pdf = build_case_summary_pdf(case, title="Case c1")
    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 1000
