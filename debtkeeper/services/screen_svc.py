from __future__ import annotations

import logging
from typing import Any

from ..domain.debt_form import DebtForm
from ..domain.debt_rules import PAID, DebtResult, Outcome, format_debt_line
from .debt_svc import DebtStore

logger = logging.getLogger(__name__)


class DebtScreen:
    """
    Form + list controller for the single debt screen.

    Holds the entry form and the displayed list. Every mutation goes to the
    injected DebtStore and is followed by a full re-read that replaces
    `items`.
    """

    def __init__(self, store: DebtStore, currency_symbol: str = "₱"):
        self.store = store
        self.currency_symbol = currency_symbol
        self.form = DebtForm()
        self.items: list[dict[str, Any]] = []

    def refresh(self) -> list[dict[str, Any]]:
        self.items = self.store.list_all()
        return self.items

    def _find(self, debt_id: int) -> dict[str, Any] | None:
        return next((d for d in self.items if d["id"] == debt_id), None)

    def submit(self) -> DebtResult:
        """Primary button: update the row being edited, otherwise add a new one."""
        f = self.form
        if f.is_editing:
            res = self.store.update(f.editing_id, f.name, f.amount, f.date, f.status)
        else:
            res = self.store.create(f.name, f.amount, f.date, f.status)
        if res.ok:
            f.reset()
            self.refresh()
        else:
            logger.info("submit ignored: %s", res.outcome.value)
        return res

    def start_edit(self, debt_id: int) -> bool:
        debt = self._find(debt_id)
        if debt is None:
            return False
        self.form.start_edit(debt)
        return True

    def cancel_edit(self):
        self.form.reset()

    def toggle(self, debt_id: int) -> DebtResult:
        debt = self._find(debt_id)
        shown = debt["status"] if debt else None
        res = self.store.toggle_status(debt_id, shown)
        if res.debt is not None and self.form.editing_id == debt_id:
            # stored status, also on CONFLICT
            self.form.status = res.debt["status"]
        if res.outcome in (Outcome.OK, Outcome.CONFLICT):
            self.refresh()
        return res

    def delete(self, debt_id: int) -> DebtResult:
        res = self.store.delete(debt_id)
        if res.ok:
            if self.form.editing_id == debt_id:
                self.form.reset()
            self.refresh()
        return res

    def rows(self) -> list[dict[str, Any]]:
        """Display-ready rows: name, amount/date line, status, and paid highlight."""
        return [
            {
                "id": d["id"],
                "name": d["name"],
                "line": format_debt_line(d, self.currency_symbol),
                "status": d["status"],
                "paid": d["status"] == PAID,
            }
            for d in self.items
        ]
