from __future__ import annotations

from fastapi import APIRouter, Depends

from ..logs import search_logs
from ..services.debt_svc import DebtStore
from .deps import get_store

router = APIRouter()


@router.get("/api/logs/search")
def api_logs_search(
    page: int = 1,
    size: int = 20,
    action: str | None = None,
    query: str | None = None,
    ts_from: str | None = None,
    ts_to: str | None = None,
    store: DebtStore = Depends(get_store),
):
    total, items = search_logs(query, action, ts_from, ts_to, page, size, db_path=store.db_path)
    return {"total": total, "items": items}
