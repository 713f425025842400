# -*- coding: utf-8 -*-
"""Settings management — models, registry + persistent store."""

from .errors import (
    ModelFormError,
    ModelSettingsError,
    ProtectedEntryError,
    StaleEntryError,
)
from .models import (
    DEFAULT_MODELS,
    GeneralSettings,
    ModelConfig,
    default_models,
    is_protected_provider,
    new_model_id,
)
from .registry import ModelConfigRegistry
from .store import (
    SettingsStore,
    get_settings_json_path,
    mask_api_key,
    normalize_partial,
)

__all__ = [
    # errors
    "ModelFormError",
    "ModelSettingsError",
    "ProtectedEntryError",
    "StaleEntryError",
    # models
    "DEFAULT_MODELS",
    "GeneralSettings",
    "ModelConfig",
    "default_models",
    "is_protected_provider",
    "new_model_id",
    # registry
    "ModelConfigRegistry",
    # store
    "SettingsStore",
    "get_settings_json_path",
    "mask_api_key",
    "normalize_partial",
]
