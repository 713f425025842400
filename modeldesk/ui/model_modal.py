# -*- coding: utf-8 -*-
"""Reusable add/edit dialog for model configs."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..settings import ModelConfig, ModelConfigRegistry, ModelFormError
from .surface import Dialogs, ModalSurface

logger = logging.getLogger(__name__)

ADD_TITLE = "Add model"
EDIT_TITLE = "Edit model"
REQUIRED_FIELDS_MESSAGE = "Model name and Base URL are required."

# Called once when the dialog closes, with True if a change was committed.
OnModalDone = Optional[Callable[[bool], None]]


class ModalState(str, Enum):
    CLOSED = "closed"
    OPEN_FOR_ADD = "add"
    OPEN_FOR_EDIT = "edit"


@dataclass
class ModelForm:
    """Editable fields of the model dialog (raw text, as typed)."""

    name: str = ""
    provider: str = ""
    base_url: str = ""
    api_key: str = ""

    @classmethod
    def from_config(cls, config: ModelConfig) -> "ModelForm":
        return cls(
            name=config.name,
            provider=config.provider or "",
            base_url=config.base_url or "",
            api_key=config.api_key or "",
        )

    def to_config(
        self,
        draft: ModelConfig,
        with_enabled: bool = True,
    ) -> ModelConfig:
        """Build the committed config with the ``id`` of *draft*.

        ``enabled`` is copied from *draft* only when *with_enabled* is set;
        otherwise it is left unset so a replace keeps the live value.
        Raises :class:`ModelFormError` when name or base URL is empty.
        """
        name = self.name.strip()
        base_url = self.base_url.strip()
        if not name or not base_url:
            raise ModelFormError(REQUIRED_FIELDS_MESSAGE)
        fields = dict(
            id=draft.id,
            name=name,
            provider=self.provider.strip() or None,
            base_url=base_url,
            api_key=self.api_key.strip() or None,
        )
        if with_enabled:
            fields["enabled"] = draft.enabled
        return ModelConfig(**fields)


class ModelEditModal:
    """Single dialog reused for every add and edit.

    Each ``open_*`` call installs fresh confirm/done callbacks, so callbacks
    from earlier openings can never fire again.
    """

    def __init__(
        self,
        registry: ModelConfigRegistry,
        surface: ModalSurface,
        dialogs: Dialogs,
    ):
        self._registry = registry
        self._surface = surface
        self._dialogs = dialogs

        self.state = ModalState.CLOSED
        self.title = ""
        self.form = ModelForm()
        self.edit_index: Optional[int] = None
        self._draft: Optional[ModelConfig] = None
        self._on_confirm: Optional[Callable[[ModelConfig], bool]] = None
        self._on_done: OnModalDone = None

    @property
    def is_open(self) -> bool:
        return self.state is not ModalState.CLOSED

    @property
    def draft(self) -> Optional[ModelConfig]:
        return self._draft

    # ── open ────────────────────────────────────────────────────────

    def open_for_add(self, on_done: OnModalDone = None) -> ModelConfig:
        """Open with a blank draft; returns the draft."""
        draft = ModelConfig()

        def _commit(config: ModelConfig) -> bool:
            self._registry.append(config)
            return True

        self._open(
            ModalState.OPEN_FOR_ADD,
            ADD_TITLE,
            draft,
            _commit,
            on_done,
        )
        return draft

    def open_for_edit(
        self,
        index: int,
        expected_id: Optional[str] = None,
        on_done: OnModalDone = None,
    ) -> bool:
        """Open on ``models[index]``; no-op for protected or stale rows."""
        entry = self._registry.get(index)
        if entry is None or (
            expected_id is not None and entry.id != expected_id
        ):
            logger.warning(
                f"edit skipped: no model at index {index} "
                f"(expected id={expected_id})",
            )
            return False
        if not self._registry.can_modify(entry.id, "edit"):
            return False

        model_id = entry.id

        def _commit(config: ModelConfig) -> bool:
            return self._registry.replace(model_id, config)

        self._open(
            ModalState.OPEN_FOR_EDIT,
            EDIT_TITLE,
            entry.model_copy(),
            _commit,
            on_done,
        )
        self.edit_index = index
        return True

    def open_for_edit_id(
        self,
        model_id: str,
        on_done: OnModalDone = None,
    ) -> bool:
        return self.open_for_edit(
            self._registry.index_of(model_id),
            expected_id=model_id,
            on_done=on_done,
        )

    # ── actions ─────────────────────────────────────────────────────

    def confirm(self) -> bool:
        """Validate and commit the form.

        On a missing field an alert is shown and the dialog stays open.
        Returns True when the registry accepted the change.
        """
        if not self.is_open or self._on_confirm is None:
            logger.debug("confirm ignored: model dialog is closed")
            return False
        try:
            config = self.form.to_config(
                self._draft,
                with_enabled=self.state is ModalState.OPEN_FOR_ADD,
            )
        except ModelFormError as e:
            self._dialogs.alert(str(e))
            return False

        committed = self._on_confirm(config)
        self._close(committed)
        return committed

    def cancel(self) -> None:
        if self.is_open:
            self._close(False)

    # ── internals ───────────────────────────────────────────────────

    def _open(
        self,
        state: ModalState,
        title: str,
        draft: ModelConfig,
        on_confirm: Callable[[ModelConfig], bool],
        on_done: OnModalDone,
    ) -> None:
        self.state = state
        self.title = title
        self.edit_index = None
        self._draft = draft
        self.form = ModelForm.from_config(draft)
        self._on_confirm = on_confirm
        self._on_done = on_done
        self._surface.show(self)

    def _close(self, committed: bool) -> None:
        on_done = self._on_done
        self.state = ModalState.CLOSED
        self.edit_index = None
        self._draft = None
        self._on_confirm = None
        self._on_done = None
        self._surface.hide(self)
        if on_done is not None:
            on_done(committed)
