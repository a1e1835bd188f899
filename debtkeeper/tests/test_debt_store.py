from __future__ import annotations

import pytest

from debtkeeper.domain.debt_rules import PAID, PENDING, Outcome
from debtkeeper.services.debt_svc import DebtStore, StoreNotInitialized


def test_walkthrough_create_toggle_delete(store):
    res = store.create("Ana", "500.50", "01/15/2025")
    assert res.ok
    assert store.list_all() == [
        {"id": 1, "name": "Ana", "amount": 500.5, "date": "01/15/2025", "status": "Pending"}
    ]

    assert store.toggle_status(1, "Pending").ok
    assert store.list_all()[0]["status"] == "Paid"

    assert store.delete(1).ok
    assert store.list_all() == []


def test_create_round_trip_assigns_fresh_id(store):
    first = store.create("Ana", "10", "01/01/2025").debt
    second = store.create("Ben", 25.75, "02/02/2025", "Paid").debt
    assert second["id"] != first["id"]

    rows = [r for r in store.list_all() if r["id"] == second["id"]]
    assert rows == [{"id": second["id"], "name": "Ben", "amount": 25.75, "date": "02/02/2025", "status": PAID}]


def test_list_all_empty_table(store):
    assert store.list_all() == []


def test_initialize_is_idempotent(tmp_db_path, store):
    store.create("Ana", "1", "01/01/2025")
    again = DebtStore(tmp_db_path).initialize()
    assert len(again.list_all()) == 1


def test_operations_before_initialize_raise(tmp_db_path):
    fresh = DebtStore(tmp_db_path)
    with pytest.raises(StoreNotInitialized):
        fresh.list_all()
    with pytest.raises(StoreNotInitialized):
        fresh.create("Ana", "1", "01/01/2025")


def test_closed_store_refuses_work(store):
    store.close()
    assert not store.ready
    with pytest.raises(StoreNotInitialized):
        store.toggle_status(1)


@pytest.mark.parametrize(
    "name, amount, date, status",
    [
        ("", "", "", PENDING),
        ("", "10", "01/01/2025", PENDING),
        ("Ana", "", "01/01/2025", PENDING),
        ("Ana", "ten", "01/01/2025", PENDING),
        ("Ana", "10", "", PENDING),
        ("Ana", "10", "01/01/2025", "Overdue"),
    ],
)
def test_create_rejects_missing_fields(store, name, amount, date, status):
    store.create("Keep", "1", "01/01/2025")
    before = store.list_all()
    res = store.create(name, amount, date, status)
    assert res.outcome is Outcome.INVALID_INPUT
    assert res.debt is None
    assert store.list_all() == before


def test_amount_sign_and_date_shape_are_not_checked(store):
    res = store.create("Ana", "-20", "someday")
    assert res.ok
    assert res.debt["amount"] == -20.0
    assert res.debt["date"] == "someday"


def test_update_overwrites_all_fields(store):
    debt = store.create("Ana", "1", "01/01/2025").debt
    res = store.update(debt["id"], "Ana Cruz", "99.9", "03/03/2025", "paid")
    assert res.ok
    assert store.get(debt["id"]) == {
        "id": debt["id"], "name": "Ana Cruz", "amount": 99.9, "date": "03/03/2025", "status": PAID,
    }


def test_update_twice_equals_once(store):
    debt = store.create("Ana", "1", "01/01/2025").debt
    store.update(debt["id"], "Ana", "2", "01/02/2025", PAID)
    once = store.list_all()
    store.update(debt["id"], "Ana", "2", "01/02/2025", PAID)
    assert store.list_all() == once


def test_update_guards(store):
    debt = store.create("Ana", "1", "01/01/2025").debt
    before = store.list_all()
    assert store.update(debt["id"], "", "1", "01/01/2025", PENDING).outcome is Outcome.INVALID_INPUT
    assert store.update(None, "Ana", "1", "01/01/2025", PENDING).outcome is Outcome.INVALID_INPUT
    assert store.update(0, "Ana", "1", "01/01/2025", PENDING).outcome is Outcome.INVALID_INPUT
    assert store.update(debt["id"] + 50, "Ana", "1", "01/01/2025", PENDING).outcome is Outcome.NOT_FOUND
    # fractional ids must not be truncated onto an existing row
    assert store.update(debt["id"] + 0.9, "Other", "2", "01/02/2025", PAID).outcome is Outcome.INVALID_INPUT
    assert store.delete(debt["id"] + 0.9).outcome is Outcome.INVALID_INPUT
    assert store.toggle_status(debt["id"] + 0.9).outcome is Outcome.INVALID_INPUT
    assert store.list_all() == before


def test_toggle_twice_restores_status(store):
    debt = store.create("Ana", "1", "01/01/2025").debt
    assert store.toggle_status(debt["id"], "Pending").debt["status"] == PAID
    assert store.toggle_status(debt["id"], "Paid").debt["status"] == PENDING
    assert store.get(debt["id"])["status"] == PENDING


def test_toggle_without_current_status_uses_stored_value(store):
    debt = store.create("Ana", "1", "01/01/2025", PAID).debt
    assert store.toggle_status(debt["id"]).debt["status"] == PENDING


def test_toggle_with_stale_status_is_a_conflict(store):
    debt = store.create("Ana", "1", "01/01/2025").debt
    store.toggle_status(debt["id"], "Pending")

    # caller still shows "Pending" although the row is already Paid
    res = store.toggle_status(debt["id"], "Pending")
    assert res.outcome is Outcome.CONFLICT
    assert res.debt["status"] == PAID
    assert store.get(debt["id"])["status"] == PAID


def test_toggle_rejects_unknown_current_status(store):
    debt = store.create("Ana", "1", "01/01/2025").debt
    assert store.toggle_status(debt["id"], "Overdue").outcome is Outcome.INVALID_INPUT


def test_delete_is_final(store):
    keep = store.create("Keep", "1", "01/01/2025").debt
    gone = store.create("Gone", "2", "01/02/2025").debt

    res = store.delete(gone["id"])
    assert res.ok and res.debt["name"] == "Gone"
    assert [r["id"] for r in store.list_all()] == [keep["id"]]

    before = store.list_all()
    assert store.delete(gone["id"]).outcome is Outcome.NOT_FOUND
    assert store.update(gone["id"], "Back", "3", "01/03/2025", PENDING).outcome is Outcome.NOT_FOUND
    assert store.toggle_status(gone["id"], PENDING).outcome is Outcome.NOT_FOUND
    assert store.list_all() == before


def test_get_missing_or_bad_id(store):
    assert store.get(12345) is None
    assert store.get("abc") is None


def test_create_with_overflowing_amount_is_rejected(store):
    res = store.create("Ana", 10**400, "01/01/2025")
    assert res.outcome is Outcome.INVALID_INPUT
    assert store.list_all() == []


def test_toggle_losing_the_write_to_a_concurrent_change(store, monkeypatch):
    from debtkeeper.repository import debt_repo

    debt = store.create("Ana", "1", "01/01/2025").debt
    monkeypatch.setattr(debt_repo, "set_status_if", lambda conn, debt_id, new_status, expected: 0)

    res = store.toggle_status(debt["id"], PENDING)
    assert res.outcome is Outcome.CONFLICT
    assert res.debt == debt


def test_toggle_losing_the_write_to_a_concurrent_delete(store, monkeypatch):
    from debtkeeper.repository import debt_repo

    debt = store.create("Ana", "1", "01/01/2025").debt

    def _deleted_meanwhile(conn, debt_id, new_status, expected):
        debt_repo.delete_debt(conn, debt_id)
        return 0

    monkeypatch.setattr(debt_repo, "set_status_if", _deleted_meanwhile)

    res = store.toggle_status(debt["id"], PENDING)
    assert res.outcome is Outcome.NOT_FOUND
    assert res.debt is None
