# -*- coding: utf-8 -*-
"""Reading and writing general settings (settings.json)."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Set

from ..constant import SETTINGS_FILE, WORKING_DIR
from .models import GeneralSettings, default_models

logger = logging.getLogger(__name__)

# Called with the merged settings after every successful save.
SettingsListener = Callable[[GeneralSettings], None]


def get_settings_json_path() -> Path:
    """Return the default settings.json path."""
    return WORKING_DIR / SETTINGS_FILE


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _parse_settings(raw: dict) -> GeneralSettings:
    """Validate raw JSON; seed built-in models when the key is absent."""
    settings = GeneralSettings.model_validate(raw)
    if "models" not in raw:
        settings.models = default_models()
    return settings


def normalize_partial(partial: Mapping[str, Any]) -> dict:
    """Map camelCase aliases to field names and reject unknown keys."""
    fields = GeneralSettings.model_fields
    aliases = {f.alias: name for name, f in fields.items() if f.alias}
    out: dict = {}
    for key, value in partial.items():
        name = aliases.get(key, key)
        if name not in fields:
            raise ValueError(f"Unknown settings key: {key!r}")
        out[name] = value
    return out


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class SettingsStore:
    """JSON-file backed settings with partial saves and change listeners.

    ``load`` is expected once at start; afterwards :attr:`settings` holds
    the last loaded or saved state.  ``save`` merges a partial update into
    that state and writes the whole document.  Writes are serialised, so
    concurrent saves resolve last-writer-wins.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = (
            Path(path) if path is not None else get_settings_json_path()
        )
        self._settings: Optional[GeneralSettings] = None
        self._lock = asyncio.Lock()
        self._listeners: List[SettingsListener] = []
        self._pending: Set[asyncio.Task] = set()

    @property
    def loaded(self) -> bool:
        return self._settings is not None

    @property
    def settings(self) -> GeneralSettings:
        if self._settings is None:
            raise RuntimeError("Settings are not loaded; call load() first")
        return self._settings

    def subscribe(self, listener: SettingsListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ── load / save ─────────────────────────────────────────────────

    async def load(self) -> GeneralSettings:
        """Load settings.json, falling back to defaults when unusable."""
        async with self._lock:
            self._settings = await asyncio.to_thread(self._read)
        logger.debug(
            f"loaded settings from {self.path} "
            f"models={len(self._settings.models)}",
        )
        return self._settings

    async def save(
        self,
        partial: Optional[Mapping[str, Any]] = None,
    ) -> GeneralSettings:
        """Merge *partial* into the current settings and persist.

        Keys may be field names (``openai_api_key``) or their camelCase
        aliases (``openaiApiKey``).  Returns the merged settings.
        """
        update = normalize_partial(partial or {})
        async with self._lock:
            current = self._settings
            if current is None:
                current = await asyncio.to_thread(self._read)
            data = current.model_dump()
            data.update(update)
            settings = GeneralSettings.model_validate(data)
            await asyncio.to_thread(self._write, settings)
            self._settings = settings
        self._notify(settings)
        return settings

    def schedule_save(
        self,
        partial: Optional[Mapping[str, Any]] = None,
    ) -> asyncio.Task:
        """Fire-and-forget :meth:`save` on the running loop.

        Failures are logged, not raised; use :meth:`drain` to wait for
        outstanding writes.
        """
        if partial is not None:
            normalize_partial(partial)
        task = asyncio.get_running_loop().create_task(self.save(partial))
        self._pending.add(task)
        task.add_done_callback(self._on_save_done)
        return task

    async def drain(self) -> None:
        """Wait until every scheduled save has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # ── internals ───────────────────────────────────────────────────

    def _read(self) -> GeneralSettings:
        if not self.path.is_file():
            return GeneralSettings(models=default_models())
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                raw = json.load(fh)
            if not isinstance(raw, dict):
                raise ValueError("settings root must be a JSON object")
            return _parse_settings(raw)
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning(
                f"invalid settings file {self.path}, using defaults: {e}",
            )
            return GeneralSettings(models=default_models())

    def _write(self, settings: GeneralSettings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        out = settings.model_dump(mode="json", by_alias=True)
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump(out, fh, indent=2, ensure_ascii=False)

    def _notify(self, settings: GeneralSettings) -> None:
        for listener in list(self._listeners):
            try:
                listener(settings)
            except Exception:
                logger.exception("settings listener failed")

    def _on_save_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                f"saving settings to {self.path} failed: {exc}",
                exc_info=exc,
            )


# ---------------------------------------------------------------------------
# Utilities
# ---------------------------------------------------------------------------


def mask_api_key(api_key: Optional[str], visible_chars: int = 4) -> str:
    """Mask an API key for safe display.

    Example: ``"sk-abcdefghijk"`` → ``"sk-****hijk"``
    """
    if not api_key:
        return ""
    if len(api_key) <= visible_chars:
        return "*" * len(api_key)
    prefix = api_key[:3] if len(api_key) > 3 else ""
    suffix = api_key[-visible_chars:]
    hidden_len = len(api_key) - len(prefix) - visible_chars
    return f"{prefix}{'*' * max(hidden_len, 4)}{suffix}"
