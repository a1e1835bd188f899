from __future__ import annotations

from fastapi import HTTPException, Request

from ..services.debt_svc import DebtStore


def get_store(request: Request) -> DebtStore:
    store = getattr(request.app.state, "debt_store", None)
    if store is None or not store.ready:
        raise HTTPException(status_code=503, detail="store_not_ready")
    return store
