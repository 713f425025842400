# -*- coding: utf-8 -*-
"""Row projection of the model registry."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, List, Optional, Tuple

from ..constant import DEFAULT_PROVIDER_LABEL
from ..settings import ModelConfig, ModelConfigRegistry
from .surface import Dialogs, ToggleControl

if TYPE_CHECKING:
    from .model_modal import ModelEditModal

logger = logging.getLogger(__name__)

EDIT_ICON = "pen-line"
DELETE_ICON = "trash-2"
DELETE_CONFIRM_MESSAGE = "Are you sure you want to delete this model?"

# Replaces a row's icon placeholders with rendered glyphs.
IconRenderer = Optional[Callable[["ModelRow"], None]]


@dataclass
class ModelRow:
    """One rendered list entry.

    Actions are bound to ``model_id`` captured at render time; ``index`` is
    display order only.
    """

    index: int
    model_id: str
    name: str
    provider_label: str
    checkbox: ToggleControl
    editable: bool
    icons: Tuple[str, ...] = ()
    view: Optional["ModelListView"] = field(
        default=None,
        repr=False,
        compare=False,
    )

    def toggle(self, checked: bool) -> bool:
        """Optimistically set the checkbox; revert if the entry is gone."""
        prior = self.checkbox.checked
        self.checkbox.checked = checked
        if self.view is None or not self.view.registry.set_enabled(
            self.model_id,
            checked,
        ):
            self.checkbox.checked = prior
            return False
        return True

    def edit(self) -> bool:
        if not self.editable or self.view is None:
            logger.warning(f"row {self.model_id} has no edit action")
            return False
        return self.view.edit_model(self.model_id)

    def delete(self) -> bool:
        if not self.editable or self.view is None:
            logger.warning(f"row {self.model_id} has no delete action")
            return False
        return self.view.delete_model(self.model_id)


class ModelListView:
    """Renders the registry into rows and re-renders on every change."""

    def __init__(
        self,
        registry: ModelConfigRegistry,
        dialogs: Dialogs,
        modal: Optional["ModelEditModal"] = None,
        render_icons: IconRenderer = None,
    ):
        self.registry = registry
        self.modal = modal
        self._dialogs = dialogs
        self._render_icons = render_icons
        self.rows: List[ModelRow] = []
        self._unsubscribe = registry.subscribe(lambda _models: self.render())

    def render(self) -> List[ModelRow]:
        """Rebuild every row from the registry; no row state is kept."""
        rows = [self._build_row(i, m) for i, m in enumerate(self.registry)]
        self.rows = rows
        return rows

    def close(self) -> None:
        self._unsubscribe()

    def edit_model(self, model_id: str) -> bool:
        if self.modal is None:
            logger.warning("no model dialog attached to the list")
            return False
        return self.modal.open_for_edit_id(model_id)

    def delete_model(self, model_id: str) -> bool:
        """Ask for confirmation, then remove a non-protected entry."""
        if not self.registry.can_modify(model_id, "delete"):
            return False
        if not self._dialogs.confirm(DELETE_CONFIRM_MESSAGE):
            return False
        return self.registry.remove(model_id)

    def _build_row(self, index: int, model: ModelConfig) -> ModelRow:
        editable = not model.is_protected
        checkbox = ToggleControl(
            name=f"model-{index}",
            checked=model.enabled,
        )
        row = ModelRow(
            index=index,
            model_id=model.id,
            name=model.name,
            provider_label=model.provider or DEFAULT_PROVIDER_LABEL,
            checkbox=checkbox,
            editable=editable,
            icons=(EDIT_ICON, DELETE_ICON) if editable else (),
            view=self,
        )
        if self._render_icons is not None:
            self._render_icons(row)
        return row
