from __future__ import annotations

from typing import Optional, Union

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel

from ..domain.debt_rules import PENDING, DebtResult, Outcome
from ..logs import LogContext
from ..services.config_svc import get_config
from ..services.debt_svc import DebtStore
from ..services.screen_svc import DebtScreen
from .deps import get_store

router = APIRouter()

_STATUS_CODES = {
    Outcome.INVALID_INPUT: 400,
    Outcome.NOT_FOUND: 404,
    Outcome.CONFLICT: 409,
}


class DebtCreate(BaseModel):
    name: str
    # the form sends text ("500.50"); numbers are accepted too
    amount: Union[str, float]
    date: str  # MM/DD/YYYY, not parsed
    status: str = PENDING


class DebtUpdate(DebtCreate):
    id: int


class DebtToggle(BaseModel):
    id: int
    current_status: Optional[str] = None


def _respond(res: DebtResult, log: LogContext, store: DebtStore) -> dict:
    if not res.ok:
        log.write("ERROR", res.outcome.value)
        raise HTTPException(status_code=_STATUS_CODES[res.outcome], detail=res.outcome.value)
    log.set_entity("DEBT", str(res.debt["id"]))
    log.set_after(res.debt)
    log.write("OK")
    return {"message": "ok", "debt": res.debt, "items": store.list_all()}


@router.get("/api/debts/list")
def api_debts_list(store: DebtStore = Depends(get_store)):
    return {"items": store.list_all()}


@router.get("/api/debts/view")
def api_debts_view(store: DebtStore = Depends(get_store)):
    """Rows formatted for display (currency symbol from settings)."""
    cfg = get_config(store.db_path)
    screen = DebtScreen(store, currency_symbol=cfg["currency_symbol"])
    screen.refresh()
    return {"items": screen.rows(), "date_hint": cfg["date_hint"]}


@router.post("/api/debts/create", status_code=201)
def api_debts_create(body: DebtCreate, store: DebtStore = Depends(get_store)):
    log = LogContext("CREATE_DEBT", db_path=store.db_path)
    log.set_payload(body.dict())
    try:
        res = store.create(body.name, body.amount, body.date, body.status)
        return _respond(res, log, store)
    except HTTPException:
        raise
    except Exception:
        log.write("ERROR", "internal error")
        raise HTTPException(status_code=500, detail="internal error")


@router.post("/api/debts/update")
def api_debts_update(body: DebtUpdate, store: DebtStore = Depends(get_store)):
    log = LogContext("UPDATE_DEBT", db_path=store.db_path)
    log.set_payload(body.dict())
    try:
        log.set_before(store.get(body.id))
        res = store.update(body.id, body.name, body.amount, body.date, body.status)
        return _respond(res, log, store)
    except HTTPException:
        raise
    except Exception:
        log.write("ERROR", "internal error")
        raise HTTPException(status_code=500, detail="internal error")


@router.post("/api/debts/delete")
def api_debts_delete(debt_id: int = Body(..., embed=True, alias="id"), store: DebtStore = Depends(get_store)):
    log = LogContext("DELETE_DEBT", db_path=store.db_path)
    log.set_payload({"id": debt_id})
    try:
        res = store.delete(debt_id)
        if res.ok:
            log.set_before(res.debt)
            log.set_entity("DEBT", str(debt_id))
            log.write("OK")
            return {"message": "ok", "debt": res.debt, "items": store.list_all()}
        log.write("ERROR", res.outcome.value)
        raise HTTPException(status_code=_STATUS_CODES[res.outcome], detail=res.outcome.value)
    except HTTPException:
        raise
    except Exception:
        log.write("ERROR", "internal error")
        raise HTTPException(status_code=500, detail="internal error")


@router.post("/api/debts/toggle")
def api_debts_toggle(body: DebtToggle, store: DebtStore = Depends(get_store)):
    log = LogContext("TOGGLE_DEBT_STATUS", db_path=store.db_path)
    log.set_payload(body.dict())
    try:
        res = store.toggle_status(body.id, body.current_status)
        return _respond(res, log, store)
    except HTTPException:
        raise
    except Exception:
        log.write("ERROR", "internal error")
        raise HTTPException(status_code=500, detail="internal error")
