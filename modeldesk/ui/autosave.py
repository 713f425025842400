# -*- coding: utf-8 -*-
"""Auto-save for the general preference form.

Text fields are saved once the form has been quiet for the configured
period; toggles are saved as soon as they change.  Every save writes all
preference fields, so the last save always carries the final values.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from ..constant import AUTOSAVE_QUIET_PERIOD, DEFAULT_PROMPT_CONTEXT
from ..settings import GeneralSettings, SettingsStore
from .surface import ToggleControl, update_toggle_state

logger = logging.getLogger(__name__)

TEXT_FIELDS = (
    "openai_api_key",
    "anthropic_api_key",
    "default_prompt_context",
)
INTERPRETER_TOGGLE = "interpreter_enabled"
AUTO_RUN_TOGGLE = "interpreter_auto_run"


class Debouncer:
    """Run *func* once *delay* seconds after the last call.

    Each call cancels the pending timer and schedules a new one on the
    running event loop.
    """

    def __init__(self, func: Callable[..., Any], delay: float):
        self._func = func
        self.delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None
        self._args: tuple = ()
        self._kwargs: dict = {}

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        self.cancel()
        self._args, self._kwargs = args, kwargs
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def flush(self) -> None:
        """Run a pending call now."""
        if self._handle is not None:
            self.cancel()
            self._fire()

    def _fire(self) -> None:
        self._handle = None
        self._func(*self._args, **self._kwargs)


@dataclass
class PreferenceForm:
    openai_api_key: str = ""
    anthropic_api_key: str = ""
    interpreter_toggle: ToggleControl = field(
        default_factory=lambda: ToggleControl(name=INTERPRETER_TOGGLE),
    )
    auto_run_toggle: ToggleControl = field(
        default_factory=lambda: ToggleControl(name=AUTO_RUN_TOGGLE),
    )
    default_prompt_context: str = ""
    # Prompt-context panel is only shown while the interpreter is on.
    prompt_context_visible: bool = False

    @property
    def toggles(self) -> Dict[str, ToggleControl]:
        return {
            INTERPRETER_TOGGLE: self.interpreter_toggle,
            AUTO_RUN_TOGGLE: self.auto_run_toggle,
        }

    def to_partial(self) -> Dict[str, Any]:
        return {
            "openai_api_key": self.openai_api_key,
            "anthropic_api_key": self.anthropic_api_key,
            "interpreter_enabled": self.interpreter_toggle.checked,
            "interpreter_auto_run": self.auto_run_toggle.checked,
            "default_prompt_context": self.default_prompt_context,
        }


class AutoSaveController:
    def __init__(
        self,
        store: SettingsStore,
        form: Optional[PreferenceForm] = None,
        quiet_period: float = AUTOSAVE_QUIET_PERIOD,
    ):
        self._store = store
        self.form = form or PreferenceForm()
        self._debounced_save = Debouncer(self.save_from_form, quiet_period)

    @property
    def save_pending(self) -> bool:
        return self._debounced_save.pending

    def seed(self, settings: GeneralSettings) -> None:
        """Copy loaded settings into the form without saving."""
        form = self.form
        form.openai_api_key = settings.openai_api_key or ""
        form.anthropic_api_key = settings.anthropic_api_key or ""
        form.interpreter_toggle.checked = settings.interpreter_enabled
        form.auto_run_toggle.checked = settings.interpreter_auto_run
        form.default_prompt_context = (
            settings.default_prompt_context or DEFAULT_PROMPT_CONTEXT
        )
        for toggle in form.toggles.values():
            update_toggle_state(toggle)
        self.update_prompt_context_visibility()

    def on_input(self, name: str, value: Any) -> None:
        """A field was edited; save after the quiet period."""
        if name in TEXT_FIELDS:
            setattr(self.form, name, "" if value is None else str(value))
        elif name in self.form.toggles:
            self.form.toggles[name].checked = bool(value)
        else:
            raise KeyError(f"Unknown preference field: {name!r}")
        self._debounced_save()

    def on_toggle_change(self, name: str, checked: bool) -> asyncio.Task:
        """A toggle was flipped; save immediately."""
        toggle = self.form.toggles[name]
        toggle.checked = bool(checked)
        task = self.save_from_form()
        if name == INTERPRETER_TOGGLE:
            self.update_prompt_context_visibility()
        update_toggle_state(toggle)
        return task

    def update_prompt_context_visibility(self) -> bool:
        self.form.prompt_context_visible = self.form.interpreter_toggle.checked
        return self.form.prompt_context_visible

    def save_from_form(self) -> asyncio.Task:
        logger.debug("saving preference form")
        return self._store.schedule_save(self.form.to_partial())

    def flush(self) -> None:
        """Save a pending debounced edit right away."""
        self._debounced_save.flush()

    def close(self) -> None:
        self._debounced_save.cancel()
