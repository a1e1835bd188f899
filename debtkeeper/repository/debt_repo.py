from __future__ import annotations

from sqlite3 import Connection
from typing import Optional


def ensure_schema(conn: Connection):
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS debts (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            amount REAL NOT NULL,
            date TEXT NOT NULL,
            status TEXT DEFAULT 'Pending'
        )
        """
    )


def insert_debt(conn: Connection, name: str, amount: float, date: str, status: str) -> int:
    cur = conn.execute(
        "INSERT INTO debts(name, amount, date, status) VALUES(?,?,?,?)",
        (name, amount, date, status),
    )
    return int(cur.lastrowid)


def list_all(conn: Connection):
    # natural scan order, no ORDER BY
    return conn.execute("SELECT id, name, amount, date, status FROM debts").fetchall()


def get_one(conn: Connection, debt_id: int) -> Optional[object]:
    return conn.execute(
        "SELECT id, name, amount, date, status FROM debts WHERE id=?", (debt_id,)
    ).fetchone()


def update_debt(conn: Connection, debt_id: int, name: str, amount: float, date: str, status: str) -> int:
    cur = conn.execute(
        "UPDATE debts SET name=?, amount=?, date=?, status=? WHERE id=?",
        (name, amount, date, status, debt_id),
    )
    return cur.rowcount


def delete_debt(conn: Connection, debt_id: int) -> int:
    cur = conn.execute("DELETE FROM debts WHERE id=?", (debt_id,))
    return cur.rowcount


def set_status_if(conn: Connection, debt_id: int, new_status: str, expected_status: str) -> int:
    """Compare-and-set on status; returns the number of rows written (0 or 1)."""
    cur = conn.execute(
        "UPDATE debts SET status=? WHERE id=? AND status IS ?",
        (new_status, debt_id, expected_status),
    )
    return cur.rowcount
