# -*- coding: utf-8 -*-
"""Settings page: wires the store, model list, dialog and auto-save."""
from __future__ import annotations

import logging
from typing import Optional

from ..constant import AUTOSAVE_QUIET_PERIOD
from ..settings import ModelConfig, ModelConfigRegistry, SettingsStore
from .autosave import AutoSaveController
from .model_list import IconRenderer, ModelListView
from .model_modal import ModelEditModal, OnModalDone
from .surface import Dialogs, ModalSurface

logger = logging.getLogger(__name__)


class SettingsPage:
    """Loads settings once, then builds the views on top of them.

    The registry, list view and dialog only exist after
    :meth:`initialize`.
    """

    def __init__(
        self,
        store: SettingsStore,
        surface: ModalSurface,
        dialogs: Dialogs,
        render_icons: IconRenderer = None,
        quiet_period: float = AUTOSAVE_QUIET_PERIOD,
    ):
        self.store = store
        self.autosave = AutoSaveController(store, quiet_period=quiet_period)
        self._surface = surface
        self._dialogs = dialogs
        self._render_icons = render_icons

        self.registry: Optional[ModelConfigRegistry] = None
        self.modal: Optional[ModelEditModal] = None
        self.model_list: Optional[ModelListView] = None

    async def initialize(self) -> "SettingsPage":
        if not self.store.loaded:
            await self.store.load()
        settings = self.store.settings
        self.autosave.seed(settings)

        self.registry = ModelConfigRegistry.from_store(self.store)
        self.modal = ModelEditModal(
            self.registry,
            self._surface,
            self._dialogs,
        )
        self.model_list = ModelListView(
            self.registry,
            self._dialogs,
            modal=self.modal,
            render_icons=self._render_icons,
        )
        self.model_list.render()
        logger.debug(f"settings page ready models={len(self.registry)}")
        return self

    def add_model(self, on_done: OnModalDone = None) -> ModelConfig:
        """Open the dialog for a new model; returns the draft."""
        if self.modal is None:
            raise RuntimeError("SettingsPage is not initialized")
        return self.modal.open_for_add(on_done=on_done)

    async def close(self) -> None:
        """Flush a pending auto-save and wait for all writes."""
        self.autosave.flush()
        if self.model_list is not None:
            self.model_list.close()
        await self.store.drain()
