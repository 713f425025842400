# -*- coding: utf-8 -*-
"""Terminal implementations of the dialog and modal surfaces."""
from __future__ import annotations

from typing import Any

import click

from ..ui import Dialogs, VisibilitySurface


class ClickDialogs(Dialogs):
    def __init__(self, assume_yes: bool = False):
        self.assume_yes = assume_yes

    def alert(self, message: str) -> None:
        click.echo(click.style(message, fg="red"))

    def confirm(self, message: str) -> bool:
        if self.assume_yes:
            return True
        return click.confirm(message, default=False)


class ClickSurface(VisibilitySurface):
    """Prints the dialog title when it opens."""

    def show(self, modal: Any) -> None:
        super().show(modal)
        title = getattr(modal, "title", "")
        if title:
            click.echo(f"\n--- {title} ---")
