"""
Tests for SettingsStore - loading, partial saves, notification and masking.
"""
import json
import logging

import pytest

from modeldesk.constant import DEFAULT_PROMPT_CONTEXT
from modeldesk.settings import (
    DEFAULT_MODELS,
    GeneralSettings,
    ModelConfig,
    mask_api_key,
    normalize_partial,
)


class TestLoad:

    @pytest.mark.asyncio
    async def test_missing_file_seeds_builtin_models(self, store):
        """A fresh install gets the built-in OpenAI/Anthropic entries."""
        settings = await store.load()

        assert [m.id for m in settings.models] == [m.id for m in DEFAULT_MODELS]
        assert all(m.is_protected for m in settings.models)
        assert settings.default_prompt_context == DEFAULT_PROMPT_CONTEXT
        assert store.loaded

    @pytest.mark.asyncio
    async def test_reads_camel_case_keys(self, store, write_settings):
        write_settings(
            openaiApiKey="sk-test",
            interpreterEnabled=True,
            models=[
                {"id": "a", "name": "Local", "baseUrl": "http://x", "enabled": False},
            ],
        )

        settings = await store.load()

        assert settings.openai_api_key == "sk-test"
        assert settings.interpreter_enabled is True
        assert settings.interpreter_auto_run is False
        assert len(settings.models) == 1
        assert settings.models[0].base_url == "http://x"
        assert settings.models[0].enabled is False

    @pytest.mark.asyncio
    async def test_explicit_empty_models_is_kept(self, store, write_settings):
        write_settings(models=[])

        settings = await store.load()

        assert settings.models == []

    @pytest.mark.asyncio
    async def test_corrupt_file_falls_back_to_defaults(
        self, store, settings_path, caplog
    ):
        settings_path.write_text("{not json", encoding="utf-8")

        with caplog.at_level(logging.WARNING):
            settings = await store.load()

        assert len(settings.models) == len(DEFAULT_MODELS)
        assert "invalid settings file" in caplog.text

    def test_settings_before_load_raises(self, store):
        with pytest.raises(RuntimeError):
            _ = store.settings


class TestSave:

    @pytest.mark.asyncio
    async def test_partial_save_merges_and_writes_aliases(
        self, store, write_settings, settings_path
    ):
        write_settings(
            openaiApiKey="old",
            anthropicApiKey="keep-me",
            models=[{"id": "a", "name": "Local", "baseUrl": "http://x"}],
        )
        await store.load()

        result = await store.save({"openaiApiKey": "new"})

        assert result.openai_api_key == "new"
        assert result.anthropic_api_key == "keep-me"
        raw = json.loads(settings_path.read_text(encoding="utf-8"))
        assert raw["openaiApiKey"] == "new"
        assert raw["anthropicApiKey"] == "keep-me"
        assert raw["models"][0]["baseUrl"] == "http://x"
        assert "base_url" not in raw["models"][0]

    @pytest.mark.asyncio
    async def test_save_accepts_field_names_and_models(self, store):
        await store.load()
        models = [ModelConfig(id="m", name="M", base_url="http://m")]

        result = await store.save(
            {"interpreter_enabled": True, "models": models},
        )

        assert result.interpreter_enabled is True
        assert [m.id for m in result.models] == ["m"]
        assert store.settings is result

    @pytest.mark.asyncio
    async def test_unknown_key_is_rejected(self, store):
        await store.load()

        with pytest.raises(ValueError):
            await store.save({"notAField": 1})

    def test_normalize_partial_maps_aliases(self):
        partial = {"openaiApiKey": "k", "interpreter_enabled": True}

        assert normalize_partial(partial) == {
            "openai_api_key": "k",
            "interpreter_enabled": True,
        }

    @pytest.mark.asyncio
    async def test_listeners_are_notified_and_can_unsubscribe(self, store):
        await store.load()
        seen = []
        unsubscribe = store.subscribe(seen.append)

        await store.save({"interpreterAutoRun": True})
        unsubscribe()
        await store.save({"interpreterAutoRun": False})

        assert len(seen) == 1
        assert isinstance(seen[0], GeneralSettings)
        assert seen[0].interpreter_auto_run is True

    @pytest.mark.asyncio
    async def test_schedule_save_then_drain(self, store, settings_path):
        await store.load()

        store.schedule_save({"anthropicApiKey": "sk-ant"})
        store.schedule_save({"anthropicApiKey": "sk-ant-2"})
        await store.drain()

        raw = json.loads(settings_path.read_text(encoding="utf-8"))
        assert raw["anthropicApiKey"] == "sk-ant-2"

    @pytest.mark.asyncio
    async def test_failed_background_save_is_logged(
        self, store, mocker, caplog
    ):
        await store.load()
        mocker.patch.object(store, "_write", side_effect=OSError("disk full"))

        with caplog.at_level(logging.ERROR):
            store.schedule_save({"openaiApiKey": "x"})
            await store.drain()

        assert "disk full" in caplog.text
        assert store.settings.openai_api_key == ""


class TestMaskApiKey:

    @pytest.mark.parametrize(
        "key, expected",
        [
            ("", ""),
            (None, ""),
            ("abcd", "****"),
            ("sk-abcdefghijk", "sk-*******hijk"),
            ("abcdefg", "abc****defg"),
        ],
    )
    def test_mask(self, key, expected):
        assert mask_api_key(key) == expected
