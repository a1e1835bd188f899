# debtkeeper/services/config_svc.py
from ..db import get_conn
from ..logs import LogContext

DEFAULTS = {
    # shown in front of every amount in the list
    "currency_symbol": "₱",
    # placeholder for the borrowed-date input; never used for parsing
    "date_hint": "MM/DD/YYYY",
}

DDL = "CREATE TABLE IF NOT EXISTS config (key TEXT PRIMARY KEY, value TEXT)"


def ensure_default_config(db_path: str | None = None):
    """Make sure every known setting exists (never overwrites existing values)."""
    with get_conn(db_path) as conn:
        conn.execute(DDL)
        for k, v in DEFAULTS.items():
            conn.execute(
                "INSERT INTO config(key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO NOTHING",
                (k, v),
            )
        conn.commit()

def get_config(db_path: str | None = None) -> dict:
    with get_conn(db_path) as conn:
        rows = conn.execute("SELECT key, value FROM config").fetchall()
    cfg = {r["key"]: r["value"] for r in rows}
    return {k: (cfg.get(k) or DEFAULTS[k]) for k in DEFAULTS}

def update_config(upd: dict, log: LogContext, db_path: str | None = None) -> list[str]:
    unknown = sorted(k for k in upd if k not in DEFAULTS)
    if unknown:
        raise ValueError(f"unknown_setting: {', '.join(unknown)}")
    bad = sorted(k for k, v in upd.items() if v is not None and not isinstance(v, str))
    if bad:
        raise ValueError(f"invalid_setting_value: {', '.join(bad)}")
    updated = []
    with get_conn(db_path) as conn:
        before = {r["key"]: r["value"] for r in conn.execute("SELECT key,value FROM config")}
        for k, v in upd.items():
            # null resets to the default
            conn.execute(
                "INSERT INTO config(key,value) VALUES(?,?) "
                "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                (k, DEFAULTS[k] if v is None else v)
            )
            updated.append(k)
        conn.commit()
        after = {r["key"]: r["value"] for r in conn.execute("SELECT key,value FROM config")}
    log.set_before(before); log.set_after(after)
    return updated
