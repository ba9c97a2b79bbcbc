from streamlit.testing.v1 import AppTest

from core.models import Case
from ui.cases_list import cases_frame, filter_cases


def _cases():
    return [
        Case.from_payload({"case_id": "old", "updated_at": "2024-01-01T00:00:00Z"}),
        Case.from_payload(
            {
                "case_id": "new",
                "updated_at": "2024-06-01T00:00:00Z",
                "borrowers": [{"is_primary": True, "credit_score_mid": 744}],
                "property": {"loan_amount": 250000},
            }
        ),
    ]


def test_frame_sorted_by_updated_desc():
    df = cases_frame(_cases())
    assert list(df["Case ID"]) == ["new", "old"]
    assert df.loc[0, "Primary Credit"] == "744"
    assert df.loc[0, "Loan Amount"] == "$250,000.00"
    assert df.loc[1, "Loan Amount"] == "Unknown"


def test_filter_by_case_id():
    assert [c.case_id for c in filter_cases(_cases(), " NE ")] == ["new"]
    assert len(filter_cases(_cases(), "")) == 2


def list_app():
    from core.models import Case
    from ui.cases_list import render_cases_list

    class StubClient:
        def list_cases(self, status=None):
            return [Case.from_payload({"case_id": "c1", "status": "intake"})]

    render_cases_list(StubClient())


def failing_list_app():
    from core.api import ApiError
    from ui.cases_list import render_cases_list

    class StubClient:
        def list_cases(self, status=None):
            raise ApiError("503: unavailable", status_code=503)

    render_cases_list(StubClient())


def test_list_renders_table():
    at = AppTest.from_function(list_app)
    at.run()
    assert not at.exception
    assert list(at.dataframe[0].value["Case ID"]) == ["c1"]


def test_open_case_requests_detail_page():
    at = AppTest.from_function(list_app)
    at.run()
    at.button(key="cases_open").click().run()
    assert at.session_state["selected_case_id"] == "c1"
    assert at.session_state["nav_request"] == "Case Detail"


def test_list_failure_shows_retry():
    at = AppTest.from_function(failing_list_app)
    at.run()
    assert "503: unavailable" in at.error[0].value
    assert at.button(key="retry_cases")
