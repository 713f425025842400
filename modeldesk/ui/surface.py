# -*- coding: utf-8 -*-
"""Front-end collaborators used by the headless settings views.

A front end (CLI, web page, TUI) supplies a :class:`ModalSurface` to show
and hide the edit dialog and :class:`Dialogs` for blocking messages.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Set

TOGGLE_ON_CLASS = "is-enabled"


class ModalSurface(ABC):
    """Pure visibility toggles for a modal component."""

    @abstractmethod
    def show(self, modal: Any) -> None:
        ...

    @abstractmethod
    def hide(self, modal: Any) -> None:
        ...


class VisibilitySurface(ModalSurface):
    """Tracks which modals are visible; renders nothing."""

    def __init__(self) -> None:
        self.visible: Set[int] = set()

    def show(self, modal: Any) -> None:
        self.visible.add(id(modal))

    def hide(self, modal: Any) -> None:
        self.visible.discard(id(modal))

    def is_visible(self, modal: Any) -> bool:
        return id(modal) in self.visible


class Dialogs(ABC):
    """Blocking messages that need user acknowledgement."""

    @abstractmethod
    def alert(self, message: str) -> None:
        ...

    @abstractmethod
    def confirm(self, message: str) -> bool:
        ...


@dataclass
class ToggleControl:
    """A checkbox-like control and the classes of its container."""

    name: str = ""
    checked: bool = False
    container_classes: Set[str] = field(default_factory=set)

    @property
    def is_on(self) -> bool:
        return TOGGLE_ON_CLASS in self.container_classes


def update_toggle_state(toggle: ToggleControl) -> None:
    """Sync the container's on/off class with ``toggle.checked``."""
    if toggle.checked:
        toggle.container_classes.add(TOGGLE_ON_CLASS)
    else:
        toggle.container_classes.discard(TOGGLE_ON_CLASS)
