from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from openai import OpenAI

from config.settings import MissingCredentialError, Settings
from .types import GenerationResult, RemoteCallError, UsageStats

logger = logging.getLogger(__name__)

EMPTY_RESPONSE = "Empty response from OpenAI"


class OpenAIChatClient:
    provider = "openai"

    def __init__(self, settings: Settings, sdk_client: Optional[Any] = None) -> None:
        if not settings.is_openai_valid():
            raise MissingCredentialError("OPENAI_API_KEY not found in the .env file")
        self.model = settings.openai_model
        self.max_tokens = settings.openai_max_tokens
        self.temperature = settings.openai_temperature
        self.client = sdk_client or OpenAI(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
        )
        logger.info("OpenAI client initialised with model: %s", self.model)

    def generate(self, prompt: str, system_prompt: Optional[str] = None) -> GenerationResult:
        messages: List[Dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        try:
            resp = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_completion_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except Exception as exc:
            logger.error("OpenAI generation failed: %s", exc)
            return GenerationResult.failure(RemoteCallError(self.provider, str(exc)))

        choices = getattr(resp, "choices", None) or []
        content = choices[0].message.content if choices else None
        text = content or EMPTY_RESPONSE
        usage = None
        raw_usage = getattr(resp, "usage", None)
        if raw_usage is not None:
            usage = UsageStats(
                prompt_tokens=getattr(raw_usage, "prompt_tokens", None) or 0,
                output_tokens=getattr(raw_usage, "completion_tokens", None) or 0,
                total_tokens=getattr(raw_usage, "total_tokens", None) or 0,
            )
        logger.info("OpenAI analysis finished (%d chars)", len(text))
        return GenerationResult.success(text, usage=usage)
