from streamlit.testing.v1 import AppTest

from core.forms import BorrowerForm, IntakeForm


def borrowers_app():
    from ui.borrowers import render_borrowers_editor

    render_borrowers_editor()


def _start(*borrowers):
    at = AppTest.from_function(borrowers_app)
    at.session_state["intake_form"] = IntakeForm(borrowers=list(borrowers))
    at.run()
    return at


def _primaries(at):
    return [b.borrower_id for b in at.session_state["intake_form"].borrowers if b.is_primary]


def test_single_borrower_cannot_be_removed():
    at = _start(BorrowerForm(borrower_id="A", is_primary=True))
    assert at.button(key="intake_remove_borrower_A").disabled
    assert not at.exception


def test_add_borrower_keeps_primary():
    at = _start(BorrowerForm(borrower_id="A", is_primary=True))
    at.button(key="intake_add_borrower").click().run()
    borrowers = at.session_state["intake_form"].borrowers
    assert len(borrowers) == 2
    assert _primaries(at) == ["A"]
    assert not at.button(key="intake_remove_borrower_A").disabled


def test_make_primary_moves_flag():
    at = _start(BorrowerForm(borrower_id="A", is_primary=True), BorrowerForm(borrower_id="B"))
    at.button(key="intake_make_primary_B").click().run()
    assert _primaries(at) == ["B"]


def test_removing_primary_promotes_next():
    at = _start(
        BorrowerForm(borrower_id="A", is_primary=True),
        BorrowerForm(borrower_id="B"),
        BorrowerForm(borrower_id="C"),
    )
    at.button(key="intake_remove_borrower_A").click().run()
    assert [b.borrower_id for b in at.session_state["intake_form"].borrowers] == ["B", "C"]
    assert _primaries(at) == ["B"]


def test_inputs_follow_borrower_id():
    at = _start(BorrowerForm(borrower_id="A", is_primary=True), BorrowerForm(borrower_id="B"))
    at.text_input(key="intake_borrower_B_credit").input("705").run()
    borrowers = at.session_state["intake_form"].borrowers
    assert borrowers[1].credit_score_mid == "705"
    assert borrowers[0].credit_score_mid == ""


def two_editors_app():
    from ui.borrowers import render_borrowers_editor

    render_borrowers_editor("first_form", prefix="first")
    render_borrowers_editor("second_form", prefix="second")


def test_two_editors_on_one_page():
    at = AppTest.from_function(two_editors_app)
    at.session_state["first_form"] = IntakeForm(borrowers=[BorrowerForm(borrower_id="A", is_primary=True)])
    at.session_state["second_form"] = IntakeForm(borrowers=[BorrowerForm(borrower_id="A", is_primary=True)])
    at.run()
    assert not at.exception
    at.button(key="second_add_borrower").click().run()
    assert len(at.session_state["first_form"].borrowers) == 1
    assert len(at.session_state["second_form"].borrowers) == 2


def loaded_case_editor_app():
    import streamlit as st
    from core.mapper import to_form_state
    from ui.borrowers import render_borrowers_editor

    if "intake_form" not in st.session_state:
        st.session_state["intake_form"] = to_form_state(
            {"case_id": "c", "borrowers": [{"borrower_id": "X", "is_primary": True}, {"borrower_id": "X"}]}
        )
    render_borrowers_editor()


def test_repeated_borrower_ids_from_service_render():
    at = AppTest.from_function(loaded_case_editor_app)
    at.run()
    assert not at.exception
    second = at.session_state["intake_form"].borrowers[1].borrower_id
    assert second != "X"
    at.button(key=f"intake_remove_borrower_{second}").click().run()
    assert [b.borrower_id for b in at.session_state["intake_form"].borrowers] == ["X"]
