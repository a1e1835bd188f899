from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..logs import LogContext
from ..services.config_svc import get_config, update_config
from ..services.debt_svc import DebtStore
from .deps import get_store

router = APIRouter()


@router.get("/api/settings/get")
def api_settings_get(store: DebtStore = Depends(get_store)):
    return get_config(store.db_path)


class SettingsUpdateBody(BaseModel):
    updates: dict


@router.post("/api/settings/update")
def api_settings_update(body: SettingsUpdateBody, store: DebtStore = Depends(get_store)):
    log = LogContext("SETTINGS_UPDATE", db_path=store.db_path)
    log.set_payload(body.dict())
    try:
        updated_keys = update_config(body.updates, log, store.db_path)
        log.write("OK")
        return {"message": "ok", "updated": updated_keys}
    except ValueError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=400, detail=str(e))
