from __future__ import annotations

from config.settings import MissingCredentialError, Settings
from .types import ModelClient
from .clients_openai import OpenAIChatClient
from .clients_google import GoogleGeminiClient


def resolve_provider(name: str, settings: Settings) -> str:
    """Map a provider alias to "gemini" or "openai"; "auto" picks the first usable one."""
    key = name.lower()
    if key in {"gemini", "google"}:
        return "gemini"
    if key in {"openai", "chatgpt", "gpt"}:
        return "openai"
    if key == "auto":
        if settings.is_gemini_valid():
            return "gemini"
        if settings.is_openai_valid():
            return "openai"
        raise MissingCredentialError("No provider credentials found. Set GOOGLE_API_KEY or OPENAI_API_KEY in the .env file.")
    raise ValueError(f"Unknown model provider: {name}")


def create_model_client(name: str, settings: Settings) -> ModelClient:
    if resolve_provider(name, settings) == "gemini":
        return GoogleGeminiClient(settings)
    return OpenAIChatClient(settings)
