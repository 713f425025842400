# -*- coding: utf-8 -*-
"""CLI commands for the general preferences (API keys, interpreter)."""
from __future__ import annotations

from typing import Optional

import click

from ..settings import GeneralSettings, mask_api_key
from ..ui import PreferenceForm, SettingsPage
from ..ui.autosave import AUTO_RUN_TOGGLE, INTERPRETER_TOGGLE
from .utils import fail, run_with_page


def _on_off(value: bool) -> str:
    return "on" if value else "off"


@click.group("prefs")
def prefs_group() -> None:
    """Show and edit general preferences."""


@prefs_group.command("show")
@click.pass_context
def show_cmd(ctx: click.Context) -> None:
    """Show the current preferences (API keys masked)."""

    async def _body(page: SettingsPage) -> GeneralSettings:
        return page.store.settings

    settings = run_with_page(ctx, _body)
    openai_key = mask_api_key(settings.openai_api_key) or "(not set)"
    anthropic_key = mask_api_key(settings.anthropic_api_key) or "(not set)"

    click.echo("\n=== Preferences ===")
    click.echo(f"  {'openai_api_key':20s}: {openai_key}")
    click.echo(f"  {'anthropic_api_key':20s}: {anthropic_key}")
    click.echo(
        f"  {'interpreter':20s}: {_on_off(settings.interpreter_enabled)}",
    )
    click.echo(
        f"  {'auto_run':20s}: {_on_off(settings.interpreter_auto_run)}",
    )
    if settings.interpreter_enabled:
        click.echo(f"  {'prompt_context':20s}:")
        click.echo(f"    {settings.default_prompt_context}")
    click.echo()


@prefs_group.command("set")
@click.option("--openai-api-key", default=None, help="OpenAI API key")
@click.option("--anthropic-api-key", default=None, help="Anthropic API key")
@click.option(
    "--interpreter/--no-interpreter",
    default=None,
    help="Enable the interpreter",
)
@click.option(
    "--auto-run/--no-auto-run",
    default=None,
    help="Run the interpreter automatically",
)
@click.option(
    "--prompt-context",
    default=None,
    help="Default prompt context for the interpreter",
)
@click.pass_context
def set_cmd(
    ctx: click.Context,
    openai_api_key: Optional[str],
    anthropic_api_key: Optional[str],
    interpreter: Optional[bool],
    auto_run: Optional[bool],
    prompt_context: Optional[str],
) -> None:
    """Update preferences; unspecified ones keep their value."""
    text_values = {
        "openai_api_key": openai_api_key,
        "anthropic_api_key": anthropic_api_key,
        "default_prompt_context": prompt_context,
    }
    toggle_values = {
        INTERPRETER_TOGGLE: interpreter,
        AUTO_RUN_TOGGLE: auto_run,
    }
    if all(
        v is None for v in (*text_values.values(), *toggle_values.values())
    ):
        fail("Nothing to set; pass at least one option.")

    async def _body(page: SettingsPage) -> PreferenceForm:
        autosave = page.autosave
        for name, value in text_values.items():
            if value is not None:
                autosave.on_input(name, value)
        for name, checked in toggle_values.items():
            if checked is not None:
                autosave.on_toggle_change(name, checked)
        return autosave.form

    form = run_with_page(ctx, _body)
    click.echo("✓ Preferences saved")
    if not form.prompt_context_visible and prompt_context is not None:
        click.echo(
            click.style(
                "Note: the prompt context is only used while the "
                "interpreter is on.",
                fg="yellow",
            ),
        )
