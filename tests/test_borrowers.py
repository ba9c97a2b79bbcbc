from core.borrowers import (
    add_borrower,
    has_single_primary,
    index_of,
    normalize_primary,
    remove_borrower,
    set_primary,
    unique_ids,
)
from core.forms import BorrowerForm
from core.models import Borrower


def _abc():
    return [
        BorrowerForm(borrower_id="A", is_primary=True),
        BorrowerForm(borrower_id="B"),
        BorrowerForm(borrower_id="C"),
    ]


def _ids(borrowers):
    return [b.borrower_id for b in borrowers]


def _primaries(borrowers):
    return [b.borrower_id for b in borrowers if b.is_primary]


def test_removing_primary_promotes_next():
    result = remove_borrower(_abc(), 0)
    assert _ids(result) == ["B", "C"]
    assert _primaries(result) == ["B"]


def test_removing_non_primary_keeps_primary():
    result = remove_borrower(_abc(), 2)
    assert _ids(result) == ["A", "B"]
    assert _primaries(result) == ["A"]


def test_last_borrower_cannot_be_removed():
    only = [BorrowerForm(borrower_id="A", is_primary=True)]
    assert remove_borrower(only, 0) == only


def test_out_of_range_remove_is_ignored():
    assert _ids(remove_borrower(_abc(), 5)) == ["A", "B", "C"]


def test_inputs_are_not_mutated():
    borrowers = _abc()
    set_primary(borrowers, 2)
    remove_borrower(borrowers, 0)
    assert _primaries(borrowers) == ["A"]


def test_add_to_empty_is_primary():
    result = add_borrower([])
    assert len(result) == 1
    assert result[0].is_primary


def test_add_to_existing_keeps_primary():
    result = add_borrower(_abc())
    assert len(result) == 4
    assert not result[-1].is_primary
    assert _primaries(result) == ["A"]


def test_add_with_model_factory():
    result = add_borrower([], factory=lambda is_primary: Borrower(is_primary=is_primary))
    assert isinstance(result[0], Borrower)
    assert result[0].is_primary


def test_set_primary_moves_the_flag():
    result = set_primary(_abc(), 1)
    assert _primaries(result) == ["B"]
    assert has_single_primary(result)


def test_index_of():
    assert index_of(_abc(), "C") == 2
    assert index_of(_abc(), "Z") is None


def test_normalize_empty_synthesises_primary():
    result = normalize_primary([])
    assert len(result) == 1 and result[0].is_primary


def test_normalize_promotes_first_when_none_primary():
    borrowers = [BorrowerForm(borrower_id="A"), BorrowerForm(borrower_id="B")]
    assert _primaries(normalize_primary(borrowers)) == ["A"]


def test_normalize_keeps_first_of_several_primaries():
    borrowers = [
        BorrowerForm(borrower_id="A"),
        BorrowerForm(borrower_id="B", is_primary=True),
        BorrowerForm(borrower_id="C", is_primary=True),
    ]
    assert _primaries(normalize_primary(borrowers)) == ["B"]


def test_has_single_primary():
    assert has_single_primary(_abc())
    assert not has_single_primary([])
    assert not has_single_primary([BorrowerForm(), BorrowerForm()])


def test_unique_ids_renames_repeats_only():
    borrowers = [
        BorrowerForm(borrower_id="X", is_primary=True),
        BorrowerForm(borrower_id="X"),
        BorrowerForm(borrower_id="Y"),
    ]
    fresh = iter(["N1"])
    result = unique_ids(borrowers, id_factory=lambda: next(fresh))
    assert _ids(result) == ["X", "N1", "Y"]
    assert _primaries(result) == ["X"]
    assert _ids(borrowers) == ["X", "X", "Y"]
