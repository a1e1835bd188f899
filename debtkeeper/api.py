"""
FastAPI app entry point aggregating the routers under debtkeeper/routes.
Keep as `uvicorn debtkeeper.api:app`.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .db import get_db_path
from .logs import ensure_log_schema
from .routes.base import APP_NAME, APP_VERSION
from .services.config_svc import ensure_default_config
from .services.debt_svc import DebtStore

logger = logging.getLogger(__name__)

app = FastAPI(title=APP_NAME, version=APP_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    db_path = get_db_path()
    ensure_log_schema(db_path)
    ensure_default_config(db_path)
    app.state.debt_store = DebtStore(db_path).initialize()


@app.on_event("shutdown")
def on_shutdown():
    store = getattr(app.state, "debt_store", None)
    if store is not None:
        store.close()
        logger.info("debt store closed")


from .routes import base as base_routes
from .routes import debts as debts_routes
from .routes import settings as settings_routes
from .routes import logs as logs_routes

app.include_router(base_routes.router)
app.include_router(debts_routes.router)
app.include_router(settings_routes.router)
app.include_router(logs_routes.router)
