from streamlit.testing.v1 import AppTest


def broken_detail_app():
    from core.normalize import ShapeError
    from ui.case_detail import render_case_detail

    class BrokenClient:
        def get_case(self, case_id):
            raise ShapeError({"unexpected": True})

    render_case_detail(BrokenClient(), "c1")


def detail_app():
    import streamlit as st
    from core.models import Case
    from ui.case_detail import render_case_detail

    record = {
        "case_id": "c1",
        "status": "submitted",
        "updated_at": "2024-05-01T10:00:00Z",
        "borrowers": [{"borrower_id": "b1", "is_primary": True, "credit_score_mid": 690}],
        "property": {"loan_amount": 320000},
        "calculations": {"ltv": 80},
        "risk_flags": [{"code": "LOW_RESERVES", "severity": "high", "details": "Reserves unknown"}],
    }

    class StubClient:
        def get_case(self, case_id):
            return Case.from_payload(record)

        def patch_case(self, case_id, case):
            st.session_state["patched"] = case.to_payload()
            return case

    render_case_detail(StubClient(), "c1")


def test_shape_error_shows_error_state():
    at = AppTest.from_function(broken_detail_app)
    at.run()
    assert not at.exception
    assert "Unexpected case detail response shape" in at.error[0].value
    assert at.button(key="retry_case")
    assert "case_record" not in at.session_state


def test_loaded_case_renders_header_and_flags():
    at = AppTest.from_function(detail_app)
    at.run()
    assert not at.exception
    assert at.header[0].value == "Case c1"
    assert any("LOW_RESERVES" in e.value for e in at.error)
    assert at.text_input(key="intake_c1_1_loan_amount").value == "320000"


def test_invalid_form_is_not_saved():
    at = AppTest.from_function(detail_app)
    at.run()
    at.text_input(key="intake_c1_1_state").set_value("")
    at.button(key="save_case").click().run()
    assert any(e.value == "State is required" for e in at.error)
    assert "patched" not in at.session_state


def test_save_sends_full_record():
    at = AppTest.from_function(detail_app)
    at.run()
    at.text_input(key="intake_c1_1_gross_income").set_value("9100")
    at.button(key="save_case").click().run()
    assert not at.exception
    patched = at.session_state["patched"]
    assert patched["income"]["monthly_gross_income"] == 9100
    assert patched["property"]["loan_amount"] == 320000
    assert patched["risk_flags"][0]["code"] == "LOW_RESERVES"
    assert at.success[0].value == "Case saved"


def unreadable_detail_app():
    import httpx
    from core.api import CasesClient
    from core.config import Settings
    from ui.case_detail import render_case_detail

    def handler(request):
        return httpx.Response(200, json={"case": {"case_id": {"id": 1}}})

    client = CasesClient("t1", "u1", settings=Settings(API_BASE_URL="http://cases.test"), transport=httpx.MockTransport(handler))
    render_case_detail(client, "c1")


def test_unreadable_case_shows_error_state():
    at = AppTest.from_function(unreadable_detail_app)
    at.run()
    assert not at.exception
    assert "unreadable case" in at.error[0].value
    assert at.button(key="retry_case")
