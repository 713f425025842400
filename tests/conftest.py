import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from modeldesk.settings import ModelConfig, ModelConfigRegistry, SettingsStore
from modeldesk.ui import Dialogs, ModelEditModal, ModelListView, VisibilitySurface


class RecordingStore(SettingsStore):
    """SettingsStore that remembers every partial it was asked to save."""

    def __init__(self, path):
        super().__init__(path)
        self.saved = []

    async def save(self, partial=None):
        self.saved.append(dict(partial or {}))
        return await super().save(partial)


@pytest.fixture
def settings_path(tmp_path) -> Path:
    return tmp_path / "settings.json"


@pytest.fixture
def write_settings(settings_path):
    """
    Return a function that writes raw settings JSON to the test file.
    """

    def _write(**data) -> Path:
        settings_path.write_text(json.dumps(data), encoding="utf-8")
        return settings_path

    return _write


@pytest.fixture
def store(settings_path) -> SettingsStore:
    return SettingsStore(settings_path)


@pytest.fixture
def recording_store(settings_path) -> RecordingStore:
    return RecordingStore(settings_path)


@pytest.fixture
def openai_model() -> ModelConfig:
    return ModelConfig(
        id="1",
        name="GPT-4o",
        provider="OpenAI",
        base_url="https://api.openai.com/v1/chat/completions",
        enabled=True,
    )


@pytest.fixture
def custom_models():
    return [
        ModelConfig(id="local", name="Local", base_url="http://x"),
        ModelConfig(
            id="ollama",
            name="Ollama",
            provider="Ollama",
            base_url="http://localhost:11434",
            enabled=False,
        ),
    ]


@pytest.fixture
def registry(openai_model, custom_models) -> ModelConfigRegistry:
    """OpenAI entry at index 0 followed by two custom entries."""
    return ModelConfigRegistry([openai_model, *custom_models])


@pytest.fixture
def dialogs():
    mock = MagicMock(spec=Dialogs)
    mock.confirm.return_value = True
    return mock


@pytest.fixture
def surface() -> VisibilitySurface:
    return VisibilitySurface()


@pytest.fixture
def modal(registry, surface, dialogs) -> ModelEditModal:
    return ModelEditModal(registry, surface, dialogs)


@pytest.fixture
def view(registry, dialogs, modal) -> ModelListView:
    list_view = ModelListView(registry, dialogs, modal=modal)
    list_view.render()
    return list_view
