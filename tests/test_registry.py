"""
Tests for ModelConfigRegistry - ordering, protection, staleness and persistence.
"""
import logging
from unittest.mock import Mock

import pytest

from modeldesk.settings import ModelConfig, ModelConfigRegistry


class TestAppend:

    def test_append_adds_exactly_one_entry_at_the_end(self, registry):
        before = registry.models
        new = ModelConfig(name="New", base_url="http://new")

        index = registry.append(new)

        assert len(registry) == len(before) + 1
        assert index == len(before)
        assert registry.models[-1] is new
        assert registry.models[:-1] == before

    def test_add_after_builtin_entry(self, openai_model):
        """models = [OpenAI] + add Local -> OpenAI untouched, Local last."""
        registry = ModelConfigRegistry([openai_model])
        snapshot = openai_model.model_copy()

        registry.append(ModelConfig(name="Local", base_url="http://x"))

        first, second = registry.models
        assert first == snapshot
        assert second.name == "Local"
        assert second.base_url == "http://x"
        assert second.enabled is True
        assert second.id and second.id != first.id


class TestProtection:

    @pytest.mark.parametrize("provider", ["OpenAI", "Anthropic"])
    def test_remove_protected_is_a_noop(self, provider, caplog):
        entry = ModelConfig(id="p", name="Built-in", provider=provider)
        registry = ModelConfigRegistry([entry])

        with caplog.at_level(logging.WARNING):
            assert registry.remove_at(0) is False

        assert registry.models == [entry]
        assert "cannot delete built-in model" in caplog.text

    @pytest.mark.parametrize("provider", ["OpenAI", "Anthropic"])
    def test_replace_protected_is_a_noop(self, provider, caplog):
        entry = ModelConfig(id="p", name="Built-in", provider=provider)
        registry = ModelConfigRegistry([entry])

        with caplog.at_level(logging.WARNING):
            ok = registry.replace_at(0, ModelConfig(name="X", base_url="y"))

        assert ok is False
        assert registry.models[0].name == "Built-in"
        assert "cannot edit built-in model" in caplog.text

    def test_protected_entry_can_still_be_toggled(self, registry):
        assert registry.set_enabled("1", False) is True
        assert registry.find("1").enabled is False

    def test_can_modify(self, registry, caplog):
        with caplog.at_level(logging.WARNING):
            assert registry.can_modify("local") is True
            assert registry.can_modify("1", "delete") is False
            assert registry.can_modify("missing") is False


class TestReplace:

    def test_replace_preserves_id_and_enabled(self, registry):
        original = registry.find("ollama")
        assert original.enabled is False

        ok = registry.replace_at(
            2,
            ModelConfig(
                name="Renamed",
                provider="LM Studio",
                base_url="http://lm",
                api_key="secret",
            ),
        )

        assert ok is True
        updated = registry.get(2)
        assert updated.id == "ollama"
        assert updated.enabled is False
        assert updated.name == "Renamed"
        assert updated.provider == "LM Studio"
        assert updated.base_url == "http://lm"
        assert updated.api_key == "secret"

    def test_explicit_enabled_is_applied(self, registry):
        registry.replace("ollama", ModelConfig(name="O", base_url="u", enabled=True))

        assert registry.find("ollama").enabled is True

    def test_out_of_bounds_index_is_logged_and_ignored(self, registry, caplog):
        before = registry.models

        with caplog.at_level(logging.WARNING):
            ok = registry.replace_at(7, ModelConfig(name="X", base_url="y"))

        assert ok is False
        assert registry.models == before
        assert "no model at index 7" in caplog.text

    def test_mismatched_expected_id_is_stale(self, registry, caplog):
        with caplog.at_level(logging.WARNING):
            ok = registry.replace_at(
                1,
                ModelConfig(name="X", base_url="y"),
                expected_id="ollama",
            )

        assert ok is False
        assert registry.find("local").name == "Local"


class TestRemove:

    def test_remove_shifts_later_entries(self, registry):
        assert registry.remove_at(1) is True

        assert [m.id for m in registry] == ["1", "ollama"]
        assert registry.index_of("ollama") == 1

    def test_old_index_goes_stale_after_remove(self, registry, caplog):
        registry.remove("local")

        with caplog.at_level(logging.WARNING):
            # "ollama" used to be at index 2
            assert registry.remove_at(2, expected_id="ollama") is False

        assert registry.remove("ollama") is True
        assert [m.id for m in registry] == ["1"]


class TestSetEnabled:

    def test_sets_only_that_entry(self, registry):
        before = {m.id: m.enabled for m in registry}

        assert registry.set_enabled_at(1, False) is True

        after = {m.id: m.enabled for m in registry}
        assert after["local"] is False
        assert {k: v for k, v in after.items() if k != "local"} == {
            k: v for k, v in before.items() if k != "local"
        }

    def test_stale_index_returns_false(self, registry, caplog):
        with caplog.at_level(logging.ERROR):
            assert registry.set_enabled_at(10, True) is False
            assert registry.set_enabled("missing", True) is False

        assert "toggle skipped" in caplog.text


class TestNotification:

    def test_each_mutation_notifies_once(self, registry):
        listener = Mock()
        registry.subscribe(listener)

        registry.append(ModelConfig(name="A", base_url="a"))
        registry.set_enabled("local", False)
        registry.remove("local")
        registry.remove("1")  # protected, no notification

        assert listener.call_count == 3
        last_models = listener.call_args[0][0]
        assert [m.id for m in last_models] == [m.id for m in registry]

    def test_unsubscribe(self, registry):
        listener = Mock()
        unsubscribe = registry.subscribe(listener)
        unsubscribe()

        registry.set_enabled("local", False)

        listener.assert_not_called()


class TestPersistence:

    @pytest.mark.asyncio
    async def test_toggle_triggers_one_save_with_updated_list(
        self, recording_store, openai_model, custom_models
    ):
        await recording_store.load()
        registry = ModelConfigRegistry(
            [openai_model, *custom_models],
            store=recording_store,
        )

        registry.set_enabled("local", False)
        await recording_store.drain()

        assert len(recording_store.saved) == 1
        saved_models = recording_store.saved[0]["models"]
        assert [m.id for m in saved_models] == ["1", "local", "ollama"]
        assert saved_models[1].enabled is False
        assert [m.id for m in recording_store.settings.models] == [
            "1",
            "local",
            "ollama",
        ]

    @pytest.mark.asyncio
    async def test_rejected_mutation_does_not_save(
        self, recording_store, openai_model
    ):
        await recording_store.load()
        registry = ModelConfigRegistry([openai_model], store=recording_store)

        registry.remove_at(0)
        registry.replace_at(5, ModelConfig(name="x", base_url="y"))
        await recording_store.drain()

        assert recording_store.saved == []

    @pytest.mark.asyncio
    async def test_from_store_copies_loaded_models(self, store, write_settings):
        write_settings(models=[{"id": "a", "name": "A", "baseUrl": "http://a"}])
        await store.load()

        registry = ModelConfigRegistry.from_store(store)
        registry.set_enabled("a", False)

        assert store.settings.models[0].enabled is True
        await store.drain()
        assert store.settings.models[0].enabled is False
