"""Assorted display helpers."""
from core.unknown import is_unknown, to_editable_text


def show_unknown(value) -> str:
    """Render an UnknownNumber as entered; Unknown is shown as such, never as 0."""
    if value is None or is_unknown(value):
        return "Unknown"
    return to_editable_text(value)


def format_money(value) -> str:
    if value is None or is_unknown(value):
        return "Unknown"
    return f"${value:,.2f}"


def format_confidence(value) -> str:
    """Retrieval/suggestion confidence (0-1) as a whole percentage."""
    if value is None:
        return "—"
    return f"{round(value * 100)}%"


def pretty_label(value: str) -> str:
    """Turn an enumeration value such as ``cash_out`` into ``Cash Out``."""
    return value.replace("_", " ").title() if value else ""
