# -*- coding: utf-8 -*-
"""Headless settings views: model list, edit dialog and auto-save."""

from .autosave import (
    AutoSaveController,
    Debouncer,
    PreferenceForm,
)
from .model_list import ModelListView, ModelRow
from .model_modal import ModalState, ModelEditModal, ModelForm
from .settings_page import SettingsPage
from .surface import (
    Dialogs,
    ModalSurface,
    ToggleControl,
    VisibilitySurface,
    update_toggle_state,
)

__all__ = [
    "AutoSaveController",
    "Debouncer",
    "PreferenceForm",
    "ModelListView",
    "ModelRow",
    "ModalState",
    "ModelEditModal",
    "ModelForm",
    "SettingsPage",
    "Dialogs",
    "ModalSurface",
    "ToggleControl",
    "VisibilitySurface",
    "update_toggle_state",
]
