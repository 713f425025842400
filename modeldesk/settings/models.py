# -*- coding: utf-8 -*-
"""Pydantic data models for general settings and model configs."""

from __future__ import annotations

import uuid
from typing import List, Optional

from pydantic import BaseModel, Field

from ..constant import DEFAULT_PROMPT_CONTEXT, PROTECTED_PROVIDERS


def new_model_id() -> str:
    """Return a fresh, collision-free model identifier."""
    return uuid.uuid4().hex


def is_protected_provider(provider: Optional[str]) -> bool:
    return provider in PROTECTED_PROVIDERS


class ModelConfig(BaseModel):
    """One configured model/provider entry."""

    model_config = {"populate_by_name": True}

    id: str = Field(
        default_factory=new_model_id,
        description="Stable identifier, never reassigned",
    )
    name: str = Field(default="", description="Display name")
    provider: Optional[str] = Field(
        default=None,
        description="Provider name; built-in providers are protected",
    )
    base_url: str = Field(
        default="",
        alias="baseUrl",
        description="API endpoint",
    )
    api_key: Optional[str] = Field(
        default=None,
        alias="apiKey",
        description="API key",
    )
    enabled: bool = Field(default=True, description="Shown in model menus")

    @property
    def is_protected(self) -> bool:
        return is_protected_provider(self.provider)


class GeneralSettings(BaseModel):
    """Top-level structure of settings.json."""

    model_config = {"populate_by_name": True}

    openai_api_key: str = Field(default="", alias="openaiApiKey")
    anthropic_api_key: str = Field(default="", alias="anthropicApiKey")
    interpreter_enabled: bool = Field(
        default=False,
        alias="interpreterEnabled",
    )
    interpreter_auto_run: bool = Field(
        default=False,
        alias="interpreterAutoRun",
    )
    default_prompt_context: str = Field(
        default=DEFAULT_PROMPT_CONTEXT,
        alias="defaultPromptContext",
    )
    models: List[ModelConfig] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Built-in model list (seeded on first run)
# ---------------------------------------------------------------------------

DEFAULT_MODELS: List[ModelConfig] = [
    ModelConfig(
        id="gpt-4o-mini",
        name="GPT-4o Mini",
        provider="OpenAI",
        base_url="https://api.openai.com/v1/chat/completions",
    ),
    ModelConfig(
        id="gpt-4o",
        name="GPT-4o",
        provider="OpenAI",
        base_url="https://api.openai.com/v1/chat/completions",
    ),
    ModelConfig(
        id="claude-3-5-sonnet",
        name="Claude 3.5 Sonnet",
        provider="Anthropic",
        base_url="https://api.anthropic.com/v1/messages",
    ),
    ModelConfig(
        id="claude-3-haiku",
        name="Claude 3 Haiku",
        provider="Anthropic",
        base_url="https://api.anthropic.com/v1/messages",
        enabled=False,
    ),
]


def default_models() -> List[ModelConfig]:
    return [m.model_copy() for m in DEFAULT_MODELS]
