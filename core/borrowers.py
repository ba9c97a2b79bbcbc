"""Keep exactly one primary borrower through add, remove and toggle.

All functions take a sequence of borrower models (``Borrower`` or
``BorrowerForm``) and return a new list; inputs are never mutated. Requests
that would break the invariant, such as removing the last borrower, are
ignored rather than raised because they come straight from UI actions.
"""
from __future__ import annotations

from typing import Callable, List, Optional, Sequence, TypeVar

from pydantic import BaseModel

from core.forms import new_borrower_form
from core.models import new_borrower_id

B = TypeVar("B", bound=BaseModel)


def has_single_primary(borrowers: Sequence[BaseModel]) -> bool:
    return bool(borrowers) and sum(1 for b in borrowers if b.is_primary) == 1


def index_of(borrowers: Sequence[BaseModel], borrower_id: str) -> Optional[int]:
    for i, b in enumerate(borrowers):
        if b.borrower_id == borrower_id:
            return i
    return None


def _with_primary(borrowers: Sequence[B], index: int) -> List[B]:
    return [b.model_copy(update={"is_primary": i == index}) for i, b in enumerate(borrowers)]


def set_primary(borrowers: Sequence[B], index: int) -> List[B]:
    """Make ``borrowers[index]`` the only primary borrower."""
    if not 0 <= index < len(borrowers):
        return list(borrowers)
    return _with_primary(borrowers, index)


def remove_borrower(borrowers: Sequence[B], index: int) -> List[B]:
    """Drop ``borrowers[index]``; the new first borrower inherits primary."""
    if len(borrowers) <= 1 or not 0 <= index < len(borrowers):
        return list(borrowers)
    remaining = [b for i, b in enumerate(borrowers) if i != index]
    if borrowers[index].is_primary:
        return _with_primary(remaining, 0)
    return remaining


def add_borrower(
    borrowers: Sequence[B], factory: Callable[..., B] = new_borrower_form
) -> List[B]:
    """Append a fresh borrower; it is primary only when the list was empty."""
    return list(borrowers) + [factory(is_primary=not borrowers)]


def normalize_primary(
    borrowers: Sequence[B], factory: Callable[..., B] = new_borrower_form
) -> List[B]:
    """Repair a borrower list received from the case service.

    Empty lists get one synthesised primary borrower; with no primary the
    first borrower is promoted; with several only the first flagged one keeps
    the flag.
    """
    if not borrowers:
        return [factory(is_primary=True)]
    flagged = [i for i, b in enumerate(borrowers) if b.is_primary]
    if len(flagged) == 1:
        return list(borrowers)
    return _with_primary(borrowers, flagged[0] if flagged else 0)


def unique_ids(borrowers: Sequence[B], id_factory: Callable[[], str] = new_borrower_id) -> List[B]:
    """Give a fresh id to every borrower whose id repeats an earlier one."""
    seen = set()
    result = []
    for b in borrowers:
        if b.borrower_id in seen:
            b = b.model_copy(update={"borrower_id": id_factory()})
        seen.add(b.borrower_id)
        result.append(b)
    return result
