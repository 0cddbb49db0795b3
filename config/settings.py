"""Provider settings loaded from a `.env` file and the process environment.

Both generative-AI providers (Google Gemini and OpenAI) are configured here.
The object is built once per process; drivers pass it explicitly into the
clients instead of letting each client read the environment on its own.
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from dotenv import dotenv_values, find_dotenv

logger = logging.getLogger(__name__)

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"
DEFAULT_OPENAI_MAX_TOKENS = "4096"
DEFAULT_OPENAI_TEMPERATURE = "0.7"
DEFAULT_LOG_LEVEL = "INFO"


class ConfigurationError(ValueError):
    """A setting is present but cannot be parsed."""


class MissingCredentialError(RuntimeError):
    """No usable credential for the requested provider."""


_REMEDIATION = {
    "gemini": "Set GOOGLE_API_KEY in the .env file with your Google Gemini API key.",
    "openai": "Set OPENAI_API_KEY in the .env file with your OpenAI API key.",
}


def _has_value(value: Optional[str]) -> bool:
    return value is not None and value.strip() != ""


@dataclass(frozen=True)
class Settings:
    google_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    openai_api_key: Optional[str] = None
    openai_model: str = DEFAULT_OPENAI_MODEL
    openai_base_url: str = DEFAULT_OPENAI_BASE_URL
    openai_max_tokens: int = int(DEFAULT_OPENAI_MAX_TOKENS)
    openai_temperature: float = float(DEFAULT_OPENAI_TEMPERATURE)
    log_level: str = DEFAULT_LOG_LEVEL

    def is_gemini_valid(self) -> bool:
        return _has_value(self.google_api_key)

    def is_openai_valid(self) -> bool:
        return _has_value(self.openai_api_key)

    def is_valid(self) -> bool:
        """True if at least one provider can be used."""
        return self.is_gemini_valid() or self.is_openai_valid()

    def require(self, provider: Optional[str] = None) -> None:
        """Raise MissingCredentialError unless `provider` (or any provider) is usable."""
        if provider is None:
            if not self.is_valid():
                raise MissingCredentialError(
                    "No provider credentials found. " + " ".join(_REMEDIATION.values())
                )
            return
        key = provider.lower()
        if key == "gemini":
            ok = self.is_gemini_valid()
        elif key == "openai":
            ok = self.is_openai_valid()
        else:
            raise ValueError(f"Unknown provider: {provider}")
        if not ok:
            raise MissingCredentialError(_REMEDIATION[key])

    def describe(self) -> str:
        """Human-readable summary. Credentials are never included."""

        def _redact(value: Optional[str]) -> str:
            return "configured" if _has_value(value) else "NOT FOUND"

        lines = [
            "=== LOADED SETTINGS ===",
            f"Google API Key: {_redact(self.google_api_key)}",
            f"Gemini Model: {self.gemini_model}",
            f"OpenAI API Key: {_redact(self.openai_api_key)}",
            f"OpenAI Model: {self.openai_model}",
            f"OpenAI Base URL: {self.openai_base_url}",
            f"OpenAI Max Tokens: {self.openai_max_tokens}",
            f"OpenAI Temperature: {self.openai_temperature}",
            f"Log Level: {self.log_level}",
            "=======================",
        ]
        return "\n".join(lines)

    def log_config_info(self, log: Optional[logging.Logger] = None) -> None:
        log = log or logger
        for line in self.describe().splitlines():
            log.info(line)


def _get(values: Mapping[str, Optional[str]], key: str, default: str) -> str:
    value = values.get(key)
    if not _has_value(value):
        return default
    return value.strip()  # type: ignore[union-attr]


def _parse_int(values: Mapping[str, Optional[str]], key: str, default: str) -> int:
    raw = _get(values, key, default)
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from None


def _parse_float(values: Mapping[str, Optional[str]], key: str, default: str) -> float:
    raw = _get(values, key, default)
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from None


def _read_sources(
    env_file: Optional[Union[str, Path]],
    environ: Optional[Mapping[str, str]],
) -> Dict[str, Optional[str]]:
    if env_file is None:
        found = find_dotenv(usecwd=True)
        env_file = found or None
    values: Dict[str, Optional[str]] = {}
    if env_file is not None and Path(env_file).is_file():
        logger.debug("Reading settings from %s", env_file)
        values.update(dotenv_values(env_file))
    else:
        logger.debug("No .env file found, using environment and defaults")
    values.update(os.environ if environ is None else environ)
    return values


def load_settings(
    env_file: Optional[Union[str, Path]] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Build a Settings object from a `.env` file overlaid with the environment.

    Args:
        env_file: Explicit `.env` path. When omitted, the nearest `.env` above the
            working directory is used if one exists.
        environ: Mapping used instead of `os.environ`. Its values take precedence
            over the file.

    Raises:
        ConfigurationError: a numeric setting is not a number.
    """
    values = _read_sources(env_file, environ)

    google_api_key = values.get("GOOGLE_API_KEY")
    openai_api_key = values.get("OPENAI_API_KEY")

    settings = Settings(
        google_api_key=google_api_key.strip() if _has_value(google_api_key) else None,
        gemini_model=_get(values, "GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
        openai_api_key=openai_api_key.strip() if _has_value(openai_api_key) else None,
        openai_model=_get(values, "OPENAI_MODEL", DEFAULT_OPENAI_MODEL),
        openai_base_url=_get(values, "OPENAI_BASE_URL", DEFAULT_OPENAI_BASE_URL),
        openai_max_tokens=_parse_int(values, "OPENAI_MAX_TOKENS", DEFAULT_OPENAI_MAX_TOKENS),
        openai_temperature=_parse_float(values, "OPENAI_TEMPERATURE", DEFAULT_OPENAI_TEMPERATURE),
        log_level=_get(values, "LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )

    if not settings.is_gemini_valid():
        logger.warning("GOOGLE_API_KEY not found")
    if not settings.is_openai_valid():
        logger.warning("OPENAI_API_KEY not found")
    logger.info(
        "Settings loaded - Gemini: %s, OpenAI: %s, Log: %s",
        settings.gemini_model,
        settings.openai_model,
        settings.log_level,
    )
    return settings


_settings: Optional[Settings] = None
_settings_lock = threading.Lock()


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        with _settings_lock:
            if _settings is None:
                _settings = load_settings()
    return _settings
