# -*- coding: utf-8 -*-
"""API routes for the configured model list."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Request
from pydantic import BaseModel, Field

from ...constant import DEFAULT_PROVIDER_LABEL
from ...settings import (
    ModelConfig,
    ModelConfigRegistry,
    ModelFormError,
    SettingsStore,
    mask_api_key,
)
from ...ui import ModelForm

router = APIRouter(prefix="/models", tags=["models"])


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------


class ModelConfigRequest(BaseModel):
    """Request body for adding or editing a model."""

    model_config = {"populate_by_name": True}

    name: str = Field(default="", description="Display name")
    provider: Optional[str] = Field(
        default=None,
        description="Provider name (empty for Custom)",
    )
    base_url: str = Field(default="", alias="baseUrl")
    api_key: Optional[str] = Field(default=None, alias="apiKey")
    enabled: Optional[bool] = Field(
        default=None,
        description="Omit to keep the current value (true for new models)",
    )


class ModelEnabledRequest(BaseModel):
    enabled: bool = Field(..., description="Enable or disable the model")


class ModelInfo(BaseModel):
    """Model entry returned by API (API key masked)."""

    index: int
    id: str
    name: str
    provider: Optional[str] = None
    provider_label: str
    base_url: str
    has_api_key: bool = False
    current_api_key: str = Field(
        default="",
        description="Currently configured API key (masked)",
    )
    enabled: bool
    protected: bool = Field(
        default=False,
        description="Built-in entry; only 'enabled' can change",
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def get_registry(request: Request) -> ModelConfigRegistry:
    return request.app.state.registry


def get_store(request: Request) -> SettingsStore:
    return request.app.state.store


def _build_model_info(index: int, model: ModelConfig) -> ModelInfo:
    return ModelInfo(
        index=index,
        id=model.id,
        name=model.name,
        provider=model.provider,
        provider_label=model.provider or DEFAULT_PROVIDER_LABEL,
        base_url=model.base_url,
        has_api_key=bool(model.api_key),
        current_api_key=mask_api_key(model.api_key),
        enabled=model.enabled,
        protected=model.is_protected,
    )


def _info_for(registry: ModelConfigRegistry, model_id: str) -> ModelInfo:
    index = registry.index_of(model_id)
    return _build_model_info(index, registry.get(index))


def _get_editable(
    registry: ModelConfigRegistry,
    model_id: str,
) -> ModelConfig:
    entry = registry.find(model_id)
    if entry is None:
        raise HTTPException(
            status_code=404,
            detail=f"Model '{model_id}' not found",
        )
    if entry.is_protected:
        raise HTTPException(
            status_code=403,
            detail=f"Built-in model '{entry.name}' cannot be modified",
        )
    return entry


def _to_config(
    body: ModelConfigRequest,
    draft: ModelConfig,
    is_new: bool = False,
) -> ModelConfig:
    if body.enabled is not None:
        draft.enabled = body.enabled
    form = ModelForm(
        name=body.name,
        provider=body.provider or "",
        base_url=body.base_url,
        api_key=body.api_key or "",
    )
    try:
        return form.to_config(
            draft,
            with_enabled=is_new or body.enabled is not None,
        )
    except ModelFormError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=List[ModelInfo],
    summary="List configured models",
)
async def list_models(
    registry: ModelConfigRegistry = Depends(get_registry),
) -> List[ModelInfo]:
    return [_build_model_info(i, m) for i, m in enumerate(registry)]


@router.post(
    "",
    response_model=ModelInfo,
    status_code=201,
    summary="Add a model",
    description="Name and base URL are required.",
)
async def add_model(
    body: ModelConfigRequest = Body(..., description="Model to add"),
    registry: ModelConfigRegistry = Depends(get_registry),
    store: SettingsStore = Depends(get_store),
) -> ModelInfo:
    config = _to_config(body, ModelConfig(), is_new=True)
    index = registry.append(config)
    await store.drain()
    return _build_model_info(index, registry.get(index))


@router.put(
    "/{model_id}",
    response_model=ModelInfo,
    summary="Edit a model",
    description="Built-in models (OpenAI, Anthropic) cannot be edited.",
)
async def edit_model(
    model_id: str = Path(..., description="Model identifier"),
    body: ModelConfigRequest = Body(..., description="New model values"),
    registry: ModelConfigRegistry = Depends(get_registry),
    store: SettingsStore = Depends(get_store),
) -> ModelInfo:
    entry = _get_editable(registry, model_id)
    config = _to_config(body, entry.model_copy())
    if not registry.replace(model_id, config):
        raise HTTPException(
            status_code=409,
            detail=f"Model '{model_id}' changed while editing",
        )
    await store.drain()
    return _info_for(registry, model_id)


@router.put(
    "/{model_id}/enabled",
    response_model=ModelInfo,
    summary="Enable or disable a model",
)
async def set_model_enabled(
    model_id: str = Path(..., description="Model identifier"),
    body: ModelEnabledRequest = Body(...),
    registry: ModelConfigRegistry = Depends(get_registry),
    store: SettingsStore = Depends(get_store),
) -> ModelInfo:
    if not registry.set_enabled(model_id, body.enabled):
        raise HTTPException(
            status_code=404,
            detail=f"Model '{model_id}' not found",
        )
    await store.drain()
    return _info_for(registry, model_id)


@router.delete(
    "/{model_id}",
    status_code=204,
    summary="Delete a model",
    description="Built-in models (OpenAI, Anthropic) cannot be deleted.",
)
async def delete_model(
    model_id: str = Path(..., description="Model identifier"),
    registry: ModelConfigRegistry = Depends(get_registry),
    store: SettingsStore = Depends(get_store),
) -> None:
    _get_editable(registry, model_id)
    registry.remove(model_id)
    await store.drain()
