# -*- coding: utf-8 -*-
import os
from pathlib import Path

WORKING_DIR = (
    Path(os.environ.get("MODELDESK_WORKING_DIR", "~/.modeldesk"))
    .expanduser()
    .resolve()
)

SETTINGS_FILE = os.environ.get("MODELDESK_SETTINGS_FILE", "settings.json")

# Env key for app log level (used by CLI and app load).
LOG_LEVEL_ENV = "MODELDESK_LOG_LEVEL"

# Quiet period (seconds) before debounced preference edits are saved.
AUTOSAVE_QUIET_PERIOD = float(
    os.environ.get("MODELDESK_AUTOSAVE_QUIET_PERIOD", "0.5"),
)

# ---------------------------------------------------------------------------
# Model list
# ---------------------------------------------------------------------------

# Built-in providers; entries carrying one of these cannot be edited or
# deleted, only enabled/disabled.
PROTECTED_PROVIDERS = ("OpenAI", "Anthropic")

# Label shown for entries without a provider.
DEFAULT_PROVIDER_LABEL = "Custom"

DEFAULT_PROMPT_CONTEXT = (
    "You are a helpful assistant. Please analyze the following content "
    "and provide a concise summary."
)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8089
