from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Protocol


class RemoteCallError(Exception):
    """A generation request failed in transport or on the provider side."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.message = message


class CleanupError(Exception):
    """Deleting an uploaded file failed after generation."""


@dataclass(frozen=True)
class Candidate:
    index: int
    text: Optional[str]
    finish_reason: str = "N/A"


@dataclass(frozen=True)
class UsageStats:
    prompt_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0


@dataclass(frozen=True)
class UploadedFile:
    name: str
    uri: str
    mime_type: str


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one remote call: either text or the error that prevented it."""

    ok: bool
    text: str = ""
    candidates: List[Candidate] = field(default_factory=list)
    usage: Optional[UsageStats] = None
    error: Optional[RemoteCallError] = None

    @classmethod
    def success(
        cls,
        text: str,
        candidates: Optional[List[Candidate]] = None,
        usage: Optional[UsageStats] = None,
    ) -> "GenerationResult":
        return cls(ok=True, text=text, candidates=list(candidates or []), usage=usage)

    @classmethod
    def failure(cls, error: RemoteCallError) -> "GenerationResult":
        return cls(ok=False, error=error)

    def text_or(self, placeholder: str) -> str:
        return self.text if self.ok else placeholder


class ModelClient(Protocol):
    provider: str
    model: str

    def generate(self, prompt: str, system_prompt: Optional[str] = None) -> GenerationResult:
        ...
