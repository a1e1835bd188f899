import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "debtkeeper_test.db"
    # Point the app to this temp DB
    os.environ["DEBTKEEPER_DB_PATH"] = str(path)
    from debtkeeper.logs import ensure_log_schema
    from debtkeeper.services.config_svc import ensure_default_config
    from debtkeeper.services.debt_svc import DebtStore
    ensure_log_schema(str(path))
    ensure_default_config(str(path))
    DebtStore(str(path)).initialize()
    return str(path)


@pytest.fixture()
def store(tmp_db_path):
    from debtkeeper.services.debt_svc import DebtStore
    return DebtStore(tmp_db_path).initialize()


@pytest.fixture()
def client(tmp_db_path):
    from debtkeeper.api import app
    from fastapi.testclient import TestClient
    # context manager runs startup/shutdown, which owns the store
    with TestClient(app) as c:
        yield c


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Clean tables before each test for isolation
    # Safety: ensure we only ever wipe the temp DB, never a real one
    assert os.environ.get("DEBTKEEPER_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    conn = sqlite3.connect(tmp_db_path)
    try:
        conn.execute("DELETE FROM debts")
        conn.execute("DELETE FROM operation_log")
        conn.execute("DELETE FROM config")
        # restart AUTOINCREMENT so ids start at 1 in every test
        conn.execute("DELETE FROM sqlite_sequence WHERE name IN ('debts', 'operation_log')")
        conn.commit()
    finally:
        conn.close()
    from debtkeeper.services.config_svc import ensure_default_config
    ensure_default_config(tmp_db_path)
    yield
