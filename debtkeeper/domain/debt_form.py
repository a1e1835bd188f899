from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .debt_rules import PENDING, flip_status

logger = logging.getLogger(__name__)

NAME_MAX_LEN = 25
AMOUNT_MAX_LEN = 10
DATE_MAX_LEN = 16
DATE_MIN_LEN = 10  # len("MM/DD/YYYY")

ADD_LABEL = "Add a Debtor"
UPDATE_LABEL = "Update Debtor's Details"
DATE_WARNING = "Input a Proper Date Format"


@dataclass
class DebtForm:
    """Transient input state of the entry form."""

    name: str = ""
    amount: str = ""
    date: str = ""
    status: str = PENDING
    editing_id: Optional[int] = None

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    @property
    def primary_label(self) -> str:
        return UPDATE_LABEL if self.is_editing else ADD_LABEL

    def set_name(self, value: str):
        self.name = (value or "")[:NAME_MAX_LEN]

    def set_amount(self, value: str):
        self.amount = (value or "")[:AMOUNT_MAX_LEN]

    def set_date(self, value: str) -> str | None:
        """Store the date text. Returns a warning when it is too short to be MM/DD/YYYY."""
        self.date = (value or "")[:DATE_MAX_LEN]
        if len(self.date) < DATE_MIN_LEN:
            logger.warning(DATE_WARNING)
            return DATE_WARNING
        return None

    def start_edit(self, debt: dict[str, Any]):
        self.editing_id = int(debt["id"])
        self.name = debt["name"]
        amt = float(debt["amount"])
        self.amount = str(int(amt)) if amt.is_integer() else str(amt)
        self.date = debt["date"]
        self.status = debt["status"]

    def toggle_status(self):
        self.status = flip_status(self.status)

    def reset(self):
        self.name = ""
        self.amount = ""
        self.date = ""
        self.status = PENDING
        self.editing_id = None
