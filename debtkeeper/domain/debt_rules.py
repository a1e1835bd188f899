from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


PENDING = "Pending"
PAID = "Paid"
STATUSES = (PENDING, PAID)


class Outcome(str, Enum):
    OK = "ok"
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"


@dataclass
class DebtResult:
    """Result of a store mutation. `debt` is the affected row on OK."""

    outcome: Outcome
    debt: Optional[dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK


def flip_status(status: str) -> str:
    return PAID if status == PENDING else PENDING


def normalize_status(value: Any) -> str | None:
    """Map user input onto one of STATUSES, case-insensitively.

    None/blank means "use the default" and yields PENDING. Anything else
    that is not a known status yields None.
    """
    if value is None:
        return PENDING
    s = str(value).strip()
    if not s:
        return PENDING
    for known in STATUSES:
        if s.lower() == known.lower():
            return known
    return None


def parse_amount(value: Any) -> float | None:
    """Parse a user-entered amount. Returns None when it is missing or not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            amt = float(value)
        except OverflowError:
            return None
    else:
        s = str(value).strip().replace(",", "")
        if not s:
            return None
        try:
            amt = float(s)
        except ValueError:
            return None
    if not math.isfinite(amt):
        return None
    return amt


def _present(value: Any) -> bool:
    return value is not None and str(value).strip() != ""


def clean_fields(name: Any, amount: Any, date: Any, status: Any) -> tuple[str, float, str, str] | None:
    """Validate presence of name/amount/date and a known status.

    Returns the cleaned tuple, or None when any precondition fails.
    Amount sign and date shape are not checked.
    """
    if not (_present(name) and _present(date)):
        return None
    amt = parse_amount(amount)
    if amt is None:
        return None
    st = normalize_status(status)
    if st is None:
        return None
    return str(name), amt, str(date), st


def row_to_debt(row) -> dict[str, Any]:
    return {
        "id": int(row["id"]),
        "name": row["name"],
        "amount": float(row["amount"]),
        "date": row["date"],
        "status": row["status"] if row["status"] is not None else PENDING,
    }


def format_amount(amount: float) -> str:
    """Grouped thousands without forced decimals: 1234.5 -> '1,234.5'."""
    amt = round(float(amount), 3)
    if amt.is_integer():
        return f"{int(amt):,}"
    return f"{amt:,.3f}".rstrip("0")


def format_debt_line(debt: dict[str, Any], currency_symbol: str = "₱") -> str:
    return f"{currency_symbol}{format_amount(debt['amount'])} | {debt['date']}"
