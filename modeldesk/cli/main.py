# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from ..constant import DEFAULT_HOST, DEFAULT_PORT, WORKING_DIR
from ..utils.logging import setup_logger
from .models_cmd import models_group
from .prefs_cmd import prefs_group
from .utils import settings_path

logger = logging.getLogger(__name__)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--settings-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Settings JSON file (default: ~/.modeldesk/settings.json)",
)
@click.option(
    "--log-level",
    default=None,
    help="Log level (debug/info/warning/error); "
    "defaults to MODELDESK_LOG_LEVEL or warning",
)
@click.pass_context
def cli(
    ctx: click.Context,
    settings_file: Optional[Path],
    log_level: Optional[str],
) -> None:
    """Manage model configurations and general preferences."""
    env_path = WORKING_DIR / ".env"
    if env_path.is_file():
        load_dotenv(env_path)
    setup_logger(log_level)
    logger.debug(f"working dir {WORKING_DIR}")

    ctx.ensure_object(dict)
    ctx.obj["settings_file"] = settings_file


@cli.command("app")
@click.option("--host", default=DEFAULT_HOST, show_default=True)
@click.option("--port", default=DEFAULT_PORT, type=int, show_default=True)
@click.pass_context
def app_cmd(ctx: click.Context, host: str, port: int) -> None:
    """Serve the settings HTTP API."""
    import uvicorn

    from ..app import create_app
    from ..settings import SettingsStore

    app = create_app(SettingsStore(settings_path(ctx)))
    uvicorn.run(app, host=host, port=port, log_level="info")


cli.add_command(models_group)
cli.add_command(prefs_group)


def main() -> None:
    cli()
