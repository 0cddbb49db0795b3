from __future__ import annotations

import logging
from types import SimpleNamespace
from typing import Any, List, Optional

import pytest

import config.settings as settings_module
from config.settings import Settings
from models.types import GenerationResult, RemoteCallError

PROVIDER_KEYS = (
    "GOOGLE_API_KEY",
    "GEMINI_MODEL",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_BASE_URL",
    "OPENAI_MAX_TOKENS",
    "OPENAI_TEMPERATURE",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    monkeypatch.setattr(settings_module, "_settings", None)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Process environment without provider keys, cwd without a .env file."""
    for key in PROVIDER_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def gemini_settings() -> Settings:
    return Settings(google_api_key="test-google-key")


@pytest.fixture
def openai_settings() -> Settings:
    return Settings(openai_api_key="test-openai-key", openai_max_tokens=512, openai_temperature=0.2)


class FakeGeminiModels:
    def __init__(self, response: Any = None, error: Optional[Exception] = None) -> None:
        self.response = response if response is not None else SimpleNamespace(text="ok", usage_metadata=None)
        self.error = error
        self.calls: List[dict] = []

    def generate_content(self, *, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error is not None:
            raise self.error
        return self.response


class FakeGeminiFiles:
    def __init__(self, upload_error: Optional[Exception] = None, delete_error: Optional[Exception] = None) -> None:
        self.upload_error = upload_error
        self.delete_error = delete_error
        self.uploaded: List[dict] = []
        self.deleted: List[str] = []

    def upload(self, *, file, config=None):
        if self.upload_error is not None:
            raise self.upload_error
        self.uploaded.append({"file": file, "config": config})
        return SimpleNamespace(
            name="files/abc123",
            uri="https://generativelanguage.googleapis.com/v1beta/files/abc123",
            mime_type=config.mime_type,
        )

    def delete(self, *, name, config=None):
        if self.delete_error is not None:
            raise self.delete_error
        self.deleted.append(name)


def fake_gemini_sdk(**kwargs: Any) -> SimpleNamespace:
    files_kwargs = {k: kwargs.pop(k) for k in ("upload_error", "delete_error") if k in kwargs}
    return SimpleNamespace(models=FakeGeminiModels(**kwargs), files=FakeGeminiFiles(**files_kwargs))


class ScriptedClient:
    """ModelClient stand-in that replays canned results."""

    provider = "fake"
    model = "fake-model"

    def __init__(self, fail_on: Optional[set] = None) -> None:
        self.fail_on = fail_on or set()
        self.prompts: List[str] = []

    def generate(self, prompt: str, system_prompt: Optional[str] = None) -> GenerationResult:
        self.prompts.append(prompt)
        if len(self.prompts) in self.fail_on:
            return GenerationResult.failure(RemoteCallError(self.provider, "connection reset"))
        return GenerationResult.success(f"analysis #{len(self.prompts)}")
