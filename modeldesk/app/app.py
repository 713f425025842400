# -*- coding: utf-8 -*-
"""FastAPI application exposing the settings over HTTP."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from ..settings import ModelConfigRegistry, SettingsStore
from .routers import router

logger = logging.getLogger(__name__)


def create_app(store: Optional[SettingsStore] = None) -> FastAPI:
    """Build the app; settings are loaded once at startup."""
    store = store if store is not None else SettingsStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not store.loaded:
            await store.load()
        app.state.registry = ModelConfigRegistry.from_store(store)
        logger.info(f"serving settings from {store.path}")
        yield
        await store.drain()

    app = FastAPI(title="modeldesk", lifespan=lifespan)
    app.state.store = store
    app.include_router(router)
    return app
