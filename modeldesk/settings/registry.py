# -*- coding: utf-8 -*-
"""In-memory registry of configured models.

The registry is the single writer of the ``models`` list.  Entries are
displayed by position but every mutation can be addressed by the stable
``id``; index-addressed mutations accept the id captured alongside the
index and refuse to act when the two no longer match.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, List, Optional

from .errors import ProtectedEntryError, StaleEntryError
from .models import ModelConfig
from .store import SettingsStore

logger = logging.getLogger(__name__)

# Called with a copy of the models list after every successful mutation.
RegistryListener = Callable[[List[ModelConfig]], None]


class ModelConfigRegistry:
    def __init__(
        self,
        models: Iterable[ModelConfig] = (),
        store: Optional[SettingsStore] = None,
    ):
        self._models: List[ModelConfig] = list(models)
        self._store = store
        self._listeners: List[RegistryListener] = []

    @classmethod
    def from_store(cls, store: SettingsStore) -> "ModelConfigRegistry":
        """Build a registry over the store's loaded models."""
        return cls(
            (m.model_copy() for m in store.settings.models),
            store=store,
        )

    # ── queries ─────────────────────────────────────────────────────

    @property
    def models(self) -> List[ModelConfig]:
        return list(self._models)

    def __len__(self) -> int:
        return len(self._models)

    def __iter__(self) -> Iterator[ModelConfig]:
        return iter(list(self._models))

    def get(self, index: int) -> Optional[ModelConfig]:
        if 0 <= index < len(self._models):
            return self._models[index]
        return None

    def index_of(self, model_id: str) -> int:
        """Return the position of *model_id*, or -1."""
        for i, m in enumerate(self._models):
            if m.id == model_id:
                return i
        return -1

    def find(self, model_id: str) -> Optional[ModelConfig]:
        return self.get(self.index_of(model_id))

    def subscribe(self, listener: RegistryListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ── index-addressed mutations ───────────────────────────────────

    def append(self, config: ModelConfig) -> int:
        """Add *config* at the end; returns its position."""
        self._models.append(config)
        self._commit(f"added model id={config.id}")
        return len(self._models) - 1

    def replace_at(
        self,
        index: int,
        config: ModelConfig,
        expected_id: Optional[str] = None,
    ) -> bool:
        """Replace the entry at *index* with *config*.

        The original ``id`` is always kept; the original ``enabled`` is
        kept unless *config* sets it explicitly.
        """
        try:
            original = self._resolve(index, expected_id)
            self._check_editable(original, "edit")
        except (StaleEntryError, ProtectedEntryError) as e:
            logger.warning(f"replace skipped: {e}")
            return False
        update = {"id": original.id}
        if "enabled" not in config.model_fields_set:
            update["enabled"] = original.enabled
        self._models[index] = config.model_copy(update=update)
        self._commit(f"replaced model id={original.id}")
        return True

    def remove_at(self, index: int, expected_id: Optional[str] = None) -> bool:
        """Remove the entry at *index*; later entries shift down by one."""
        try:
            original = self._resolve(index, expected_id)
            self._check_editable(original, "delete")
        except (StaleEntryError, ProtectedEntryError) as e:
            logger.warning(f"remove skipped: {e}")
            return False
        del self._models[index]
        self._commit(f"removed model id={original.id}")
        return True

    def set_enabled_at(
        self,
        index: int,
        value: bool,
        expected_id: Optional[str] = None,
    ) -> bool:
        """Set ``enabled``; allowed for protected entries too.

        Returns False for a stale position so the caller can revert its
        control.
        """
        try:
            entry = self._resolve(index, expected_id)
        except StaleEntryError as e:
            logger.error(f"toggle skipped: {e}")
            return False
        entry.enabled = bool(value)
        self._commit(f"set enabled={entry.enabled} for model id={entry.id}")
        return True

    # ── id-addressed mutations ──────────────────────────────────────

    def replace(self, model_id: str, config: ModelConfig) -> bool:
        return self.replace_at(self.index_of(model_id), config, model_id)

    def remove(self, model_id: str) -> bool:
        return self.remove_at(self.index_of(model_id), model_id)

    def set_enabled(self, model_id: str, value: bool) -> bool:
        return self.set_enabled_at(self.index_of(model_id), value, model_id)

    def can_modify(self, model_id: str, action: str = "edit") -> bool:
        """True when *model_id* exists and is editable; logs otherwise."""
        try:
            entry = self._resolve(self.index_of(model_id), model_id)
            self._check_editable(entry, action)
        except (StaleEntryError, ProtectedEntryError) as e:
            logger.warning(str(e))
            return False
        return True

    # ── internals ───────────────────────────────────────────────────

    def _resolve(self, index: int, expected_id: Optional[str]) -> ModelConfig:
        entry = self.get(index)
        if entry is None:
            raise StaleEntryError(
                f"no model at index {index} "
                f"(expected id={expected_id}, size={len(self._models)})",
            )
        if expected_id is not None and entry.id != expected_id:
            raise StaleEntryError(
                f"model at index {index} is id={entry.id}, "
                f"expected id={expected_id}",
            )
        return entry

    @staticmethod
    def _check_editable(entry: ModelConfig, action: str) -> None:
        if entry.is_protected:
            raise ProtectedEntryError(
                f"cannot {action} built-in model id={entry.id} "
                f"provider={entry.provider}",
            )

    def _commit(self, what: str) -> None:
        logger.debug(what)
        if self._store is not None:
            self._store.schedule_save(
                {"models": [m.model_copy() for m in self._models]},
            )
        snapshot = self.models
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("model list listener failed")
