# -*- coding: utf-8 -*-
"""API routes for general preferences."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel, Field

from ...settings import GeneralSettings, SettingsStore, mask_api_key
from .models import get_store

router = APIRouter(prefix="/settings", tags=["settings"])


class GeneralSettingsInfo(BaseModel):
    """General preferences returned by API (API keys masked)."""

    openai_api_key: str = ""
    anthropic_api_key: str = ""
    interpreter_enabled: bool = False
    interpreter_auto_run: bool = False
    default_prompt_context: str = ""
    prompt_context_visible: bool = Field(
        default=False,
        description="The prompt context applies only with the interpreter",
    )


class GeneralSettingsUpdate(BaseModel):
    """Partial update; omitted fields keep their value."""

    model_config = {"populate_by_name": True, "extra": "forbid"}

    openai_api_key: Optional[str] = Field(default=None, alias="openaiApiKey")
    anthropic_api_key: Optional[str] = Field(
        default=None,
        alias="anthropicApiKey",
    )
    interpreter_enabled: Optional[bool] = Field(
        default=None,
        alias="interpreterEnabled",
    )
    interpreter_auto_run: Optional[bool] = Field(
        default=None,
        alias="interpreterAutoRun",
    )
    default_prompt_context: Optional[str] = Field(
        default=None,
        alias="defaultPromptContext",
    )


def _build_info(settings: GeneralSettings) -> GeneralSettingsInfo:
    return GeneralSettingsInfo(
        openai_api_key=mask_api_key(settings.openai_api_key),
        anthropic_api_key=mask_api_key(settings.anthropic_api_key),
        interpreter_enabled=settings.interpreter_enabled,
        interpreter_auto_run=settings.interpreter_auto_run,
        default_prompt_context=settings.default_prompt_context,
        prompt_context_visible=settings.interpreter_enabled,
    )


@router.get(
    "/general",
    response_model=GeneralSettingsInfo,
    summary="Get general preferences",
)
async def get_general_settings(
    store: SettingsStore = Depends(get_store),
) -> GeneralSettingsInfo:
    return _build_info(store.settings)


@router.put(
    "/general",
    response_model=GeneralSettingsInfo,
    summary="Update general preferences",
    description="Only the fields present in the body are changed.",
)
async def update_general_settings(
    body: GeneralSettingsUpdate = Body(...),
    store: SettingsStore = Depends(get_store),
) -> GeneralSettingsInfo:
    partial = body.model_dump(exclude_unset=True, exclude_none=True)
    settings = await store.save(partial)
    return _build_info(settings)
