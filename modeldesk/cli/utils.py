# -*- coding: utf-8 -*-
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Awaitable, Callable, NoReturn, Optional, TypeVar

import click

from ..settings import SettingsStore
from ..ui import SettingsPage
from .console import ClickDialogs, ClickSurface

T = TypeVar("T")


def fail(message: str) -> NoReturn:
    """Abort the command with *message*; click exits with status 1."""
    raise click.ClickException(message)


def settings_path(ctx: click.Context) -> Optional[Path]:
    """Resolve the settings file from the global ``--settings-file``."""
    return (ctx.obj or {}).get("settings_file")


def run_with_page(
    ctx: click.Context,
    body: Callable[[SettingsPage], Awaitable[T]],
    *,
    assume_yes: bool = False,
) -> T:
    """Load the settings page, run *body*, then flush pending writes."""

    async def _main() -> T:
        page = SettingsPage(
            SettingsStore(settings_path(ctx)),
            ClickSurface(),
            ClickDialogs(assume_yes=assume_yes),
        )
        await page.initialize()
        try:
            return await body(page)
        finally:
            await page.close()

    return asyncio.run(_main())
