# -*- coding: utf-8 -*-
"""CLI commands for managing the model list."""
from __future__ import annotations

from typing import Optional

import click

from ..settings import ModelConfig, ModelConfigRegistry, mask_api_key
from ..ui import ModelEditModal, ModelForm, ModelRow, SettingsPage
from .utils import fail, run_with_page


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _resolve_ref(registry: ModelConfigRegistry, ref: str) -> str:
    """Accept a model id or a 1-based list position; return the id."""
    if registry.find(ref) is not None:
        return ref
    if ref.isdigit():
        entry = registry.get(int(ref) - 1)
        if entry is not None:
            return entry.id
    fail(f"Unknown model: {ref}")


def _row_for(page: SettingsPage, model_id: str) -> ModelRow:
    for row in page.model_list.rows:
        if row.model_id == model_id:
            return row
    fail(f"Unknown model: {model_id}")


def _apply_options(
    form: ModelForm,
    *,
    name: Optional[str],
    provider: Optional[str],
    base_url: Optional[str],
    api_key: Optional[str],
) -> None:
    if name is not None:
        form.name = name
    if provider is not None:
        form.provider = provider
    if base_url is not None:
        form.base_url = base_url
    if api_key is not None:
        form.api_key = api_key


def _prompt_form(form: ModelForm) -> None:
    """Ask for each field, offering the current value as default."""
    form.name = click.prompt(
        "Model name",
        default=form.name,
        show_default=bool(form.name),
    )
    form.provider = click.prompt(
        "Provider (blank for Custom)",
        default=form.provider,
        show_default=bool(form.provider),
    )
    form.base_url = click.prompt(
        "Base URL",
        default=form.base_url,
        show_default=bool(form.base_url),
    )
    form.api_key = click.prompt(
        "API key",
        default=form.api_key,
        hide_input=True,
        show_default=False,
        prompt_suffix=f" [{'set' if form.api_key else 'not set'}]: ",
    )


def _commit_form(modal: ModelEditModal, interactive: bool) -> bool:
    """Confirm the dialog, re-prompting after a failed validation."""
    while True:
        if interactive:
            _prompt_form(modal.form)
        if modal.confirm():
            return True
        if not modal.is_open:
            return False
        if not interactive or not click.confirm("Try again?", default=True):
            modal.cancel()
            return False


def _form_options(func):
    func = click.option("--api-key", default=None, help="API key")(func)
    func = click.option("--base-url", default=None, help="API endpoint")(func)
    func = click.option(
        "--provider",
        default=None,
        help="Provider name (blank for Custom)",
    )(func)
    func = click.option("--name", default=None, help="Display name")(func)
    return func


# ---------------------------------------------------------------------------
# Group
# ---------------------------------------------------------------------------


@click.group("models")
def models_group() -> None:
    """Manage configured models.

    \b
    MODEL arguments accept a model id or a 1-based list position.
    """


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------


@models_group.command("list")
@click.pass_context
def list_cmd(ctx: click.Context) -> None:
    """Show all configured models."""

    async def _body(page: SettingsPage):
        return [
            (row, page.registry.find(row.model_id))
            for row in page.model_list.rows
        ]

    rows = run_with_page(ctx, _body)

    click.echo("\n=== Models ===")
    if not rows:
        click.echo("  (none)")
    for row, entry in rows:
        mark = "x" if row.checkbox.checked else " "
        lock = " (built-in)" if not row.editable else ""
        click.echo(f"\n{'─' * 44}")
        click.echo(
            f"  [{mark}] {row.index + 1}. {row.name} "
            f"— {row.provider_label}{lock}",
        )
        click.echo(f"{'─' * 44}")
        click.echo(f"  {'id':9s}: {row.model_id}")
        click.echo(f"  {'base_url':9s}: {entry.base_url or '(not set)'}")
        key = mask_api_key(entry.api_key) or "(not set)"
        click.echo(f"  {'api_key':9s}: {key}")
    click.echo()


# ---------------------------------------------------------------------------
# add / edit
# ---------------------------------------------------------------------------


@models_group.command("add")
@_form_options
@click.option("--disabled", is_flag=True, help="Add the model disabled")
@click.pass_context
def add_cmd(
    ctx: click.Context,
    name: Optional[str],
    provider: Optional[str],
    base_url: Optional[str],
    api_key: Optional[str],
    disabled: bool,
) -> None:
    """Add a model. Prompts for fields unless --name/--base-url are given."""
    interactive = name is None and base_url is None

    async def _body(page: SettingsPage) -> ModelConfig:
        draft = page.add_model()
        if disabled:
            draft.enabled = False
        _apply_options(
            page.modal.form,
            name=name,
            provider=provider,
            base_url=base_url,
            api_key=api_key,
        )
        if not _commit_form(page.modal, interactive):
            fail("Model was not added.")
        return page.registry.find(draft.id)

    entry = run_with_page(ctx, _body)
    click.echo(f"✓ Added {entry.name} (id={entry.id})")


@models_group.command("edit")
@click.argument("model")
@_form_options
@click.pass_context
def edit_cmd(
    ctx: click.Context,
    model: str,
    name: Optional[str],
    provider: Optional[str],
    base_url: Optional[str],
    api_key: Optional[str],
) -> None:
    """Edit a custom model. Built-in models cannot be edited."""
    interactive = all(
        v is None for v in (name, provider, base_url, api_key)
    )

    async def _body(page: SettingsPage) -> ModelConfig:
        model_id = _resolve_ref(page.registry, model)
        row = _row_for(page, model_id)
        if not row.editable:
            fail(f"Built-in model '{row.name}' cannot be edited.")
        if not row.edit():
            fail(f"Model '{row.name}' could not be opened for editing.")
        _apply_options(
            page.modal.form,
            name=name,
            provider=provider,
            base_url=base_url,
            api_key=api_key,
        )
        if not _commit_form(page.modal, interactive):
            fail("Model was not updated.")
        return page.registry.find(model_id)

    entry = run_with_page(ctx, _body)
    click.echo(f"✓ Updated {entry.name} (id={entry.id})")


# ---------------------------------------------------------------------------
# delete
# ---------------------------------------------------------------------------


@models_group.command("delete")
@click.argument("model")
@click.option("--yes", "-y", is_flag=True, help="Do not ask to confirm")
@click.pass_context
def delete_cmd(ctx: click.Context, model: str, yes: bool) -> None:
    """Delete a custom model. Built-in models cannot be deleted."""

    async def _body(page: SettingsPage):
        model_id = _resolve_ref(page.registry, model)
        row = _row_for(page, model_id)
        if not row.editable:
            fail(f"Built-in model '{row.name}' cannot be deleted.")
        return row.name, row.delete()

    name, deleted = run_with_page(ctx, _body, assume_yes=yes)
    if deleted:
        click.echo(f"✓ Deleted {name}")
    else:
        click.echo("Cancelled.")


# ---------------------------------------------------------------------------
# enable / disable
# ---------------------------------------------------------------------------


def _set_enabled(ctx: click.Context, model: str, value: bool) -> None:
    async def _body(page: SettingsPage):
        row = _row_for(page, _resolve_ref(page.registry, model))
        if not row.toggle(value):
            fail(f"Model '{row.name}' is no longer in the list.")
        return row.name

    name = run_with_page(ctx, _body)
    click.echo(f"✓ {name}: {'enabled' if value else 'disabled'}")


@models_group.command("enable")
@click.argument("model")
@click.pass_context
def enable_cmd(ctx: click.Context, model: str) -> None:
    """Enable a model."""
    _set_enabled(ctx, model, True)


@models_group.command("disable")
@click.argument("model")
@click.pass_context
def disable_cmd(ctx: click.Context, model: str) -> None:
    """Disable a model."""
    _set_enabled(ctx, model, False)
