from __future__ import annotations

import logging
from typing import Any

from ..db import get_conn, get_db_path
from ..domain.debt_rules import (
    PENDING,
    DebtResult,
    Outcome,
    clean_fields,
    flip_status,
    normalize_status,
    row_to_debt,
)
from ..repository import debt_repo

logger = logging.getLogger(__name__)


class StoreNotInitialized(RuntimeError):
    pass


def _coerce_id(value: Any) -> int | None:
    """Ids are positive integers; anything else (None, 0, "", "abc") is not an id."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and not value.is_integer():
        return None
    try:
        did = int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return did if did > 0 else None


class DebtStore:
    """
    Handle on the local debts table.

    Built and initialized once by the application's startup sequence and
    handed to whoever needs it. Every operation opens its own short-lived
    connection and runs a single statement (plus a lookup where the outcome
    needs one). Mutations never raise on bad input or missing rows; they
    report an Outcome instead.
    """

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or get_db_path()
        self._ready = False

    @property
    def ready(self) -> bool:
        return self._ready

    def initialize(self) -> "DebtStore":
        with get_conn(self.db_path) as conn:
            debt_repo.ensure_schema(conn)
            conn.commit()
        self._ready = True
        logger.info("debt store ready at %s", self.db_path)
        return self

    def close(self) -> None:
        self._ready = False

    def _check_ready(self):
        if not self._ready:
            raise StoreNotInitialized("debt store used before initialize()")

    def list_all(self) -> list[dict[str, Any]]:
        self._check_ready()
        with get_conn(self.db_path) as conn:
            return [row_to_debt(r) for r in debt_repo.list_all(conn)]

    def get(self, debt_id: Any) -> dict[str, Any] | None:
        self._check_ready()
        did = _coerce_id(debt_id)
        if did is None:
            return None
        with get_conn(self.db_path) as conn:
            row = debt_repo.get_one(conn, did)
        return row_to_debt(row) if row else None

    def create(self, name: Any, amount: Any, date: Any, status: Any = PENDING) -> DebtResult:
        self._check_ready()
        cleaned = clean_fields(name, amount, date, status)
        if cleaned is None:
            logger.debug("create rejected: name=%r amount=%r date=%r status=%r", name, amount, date, status)
            return DebtResult(Outcome.INVALID_INPUT)
        n, amt, d, st = cleaned
        with get_conn(self.db_path) as conn:
            new_id = debt_repo.insert_debt(conn, n, amt, d, st)
            conn.commit()
            row = debt_repo.get_one(conn, new_id)
        return DebtResult(Outcome.OK, row_to_debt(row))

    def update(self, debt_id: Any, name: Any, amount: Any, date: Any, status: Any) -> DebtResult:
        self._check_ready()
        did = _coerce_id(debt_id)
        if did is None:
            return DebtResult(Outcome.INVALID_INPUT)
        cleaned = clean_fields(name, amount, date, status)
        if cleaned is None:
            return DebtResult(Outcome.INVALID_INPUT)
        n, amt, d, st = cleaned
        with get_conn(self.db_path) as conn:
            written = debt_repo.update_debt(conn, did, n, amt, d, st)
            conn.commit()
            if not written:
                return DebtResult(Outcome.NOT_FOUND)
            row = debt_repo.get_one(conn, did)
        return DebtResult(Outcome.OK, row_to_debt(row))

    def delete(self, debt_id: Any) -> DebtResult:
        self._check_ready()
        did = _coerce_id(debt_id)
        if did is None:
            return DebtResult(Outcome.INVALID_INPUT)
        with get_conn(self.db_path) as conn:
            row = debt_repo.get_one(conn, did)
            if row is None:
                return DebtResult(Outcome.NOT_FOUND)
            debt_repo.delete_debt(conn, did)
            conn.commit()
        return DebtResult(Outcome.OK, row_to_debt(row))

    def toggle_status(self, debt_id: Any, current_status: Any = None) -> DebtResult:
        """
        Flip Pending <-> Paid based on the stored value.

        When current_status is given it must match what is stored, otherwise
        the caller is looking at a stale row and nothing is written (CONFLICT).
        """
        self._check_ready()
        did = _coerce_id(debt_id)
        if did is None:
            return DebtResult(Outcome.INVALID_INPUT)
        expected = None
        if current_status is not None:
            expected = normalize_status(current_status)
            if expected is None:
                return DebtResult(Outcome.INVALID_INPUT)
        with get_conn(self.db_path) as conn:
            row = debt_repo.get_one(conn, did)
            if row is None:
                return DebtResult(Outcome.NOT_FOUND)
            stored = row_to_debt(row)["status"]
            if expected is not None and expected != stored:
                return DebtResult(Outcome.CONFLICT, row_to_debt(row))
            written = debt_repo.set_status_if(conn, did, flip_status(stored), row["status"])
            conn.commit()
            if not written:
                # changed or removed between the read and the write
                row = debt_repo.get_one(conn, did)
                return DebtResult(Outcome.CONFLICT if row else Outcome.NOT_FOUND,
                                  row_to_debt(row) if row else None)
            row = debt_repo.get_one(conn, did)
        return DebtResult(Outcome.OK, row_to_debt(row))
