from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from google import genai
from google.genai import types

from config.settings import MissingCredentialError, Settings
from .types import Candidate, CleanupError, GenerationResult, RemoteCallError, UploadedFile, UsageStats

logger = logging.getLogger(__name__)

PROVIDER = "gemini"


def _finish_reason(candidate: Any) -> str:
    reason = getattr(candidate, "finish_reason", None)
    if reason is None:
        return "N/A"
    return str(getattr(reason, "value", reason))


def _candidate_text(candidate: Any) -> Optional[str]:
    content = getattr(candidate, "content", None)
    parts = getattr(content, "parts", None) if content is not None else None
    if not parts:
        return None
    return getattr(parts[0], "text", None)


def _usage(resp: Any) -> Optional[UsageStats]:
    meta = getattr(resp, "usage_metadata", None)
    if meta is None:
        return None
    return UsageStats(
        prompt_tokens=getattr(meta, "prompt_token_count", None) or 0,
        output_tokens=getattr(meta, "candidates_token_count", None) or 0,
        total_tokens=getattr(meta, "total_token_count", None) or 0,
    )


class GoogleGeminiClient:
    """Google Gemini client built on the `google-genai` SDK.

    Every generation method returns a GenerationResult; SDK and transport
    errors are captured in the result instead of being raised.
    """

    provider = PROVIDER

    def __init__(self, settings: Settings, sdk_client: Optional[Any] = None) -> None:
        if not settings.is_gemini_valid():
            raise MissingCredentialError("GOOGLE_API_KEY not found in the .env file")
        self.model = settings.gemini_model
        # v1beta currently provides the Files API surface
        self.client = sdk_client or genai.Client(
            api_key=settings.google_api_key, http_options={"api_version": "v1beta"}
        )
        logger.info("Gemini client initialised with model: %s", self.model)

    def _call(self, contents: Any, config: Optional[types.GenerateContentConfig] = None) -> Any:
        return self.client.models.generate_content(
            model=self.model,
            contents=contents,
            config=config,
        )

    def _fail(self, what: str, exc: Exception) -> GenerationResult:
        error = RemoteCallError(self.provider, f"{what}: {exc}")
        logger.error("Gemini %s failed: %s", what, exc)
        return GenerationResult.failure(error)

    def generate(self, prompt: str, system_prompt: Optional[str] = None) -> GenerationResult:
        """Generate text from a single prompt.

        Args:
            prompt: User prompt content.
            system_prompt: Optional system instruction sent alongside the prompt.

        Returns:
            A success result carrying the response text, or a failure result.
        """
        config = types.GenerateContentConfig(system_instruction=system_prompt) if system_prompt else None
        logger.debug("Sending prompt to %s: %s", self.model, prompt)
        try:
            resp = self._call(prompt, config)
        except Exception as exc:
            return self._fail("generation", exc)
        text = (getattr(resp, "text", None) or "").strip()
        logger.info("Gemini response received (%d chars)", len(text))
        return GenerationResult.success(text, usage=_usage(resp))

    def generate_with_details(
        self,
        prompt: str,
        *,
        candidate_count: int = 2,
        temperature: float = 0.7,
    ) -> GenerationResult:
        """Request several candidates and keep their finish reasons and token usage."""
        config = types.GenerateContentConfig(
            candidate_count=candidate_count,
            temperature=temperature,
        )
        logger.info("Generating %d candidates for: %s", candidate_count, prompt)
        try:
            resp = self._call(prompt, config)
        except Exception as exc:
            return self._fail("detailed generation", exc)

        candidates: List[Candidate] = [
            Candidate(index=i, text=_candidate_text(c), finish_reason=_finish_reason(c))
            for i, c in enumerate(getattr(resp, "candidates", None) or [])
        ]
        if candidates:
            text = (candidates[0].text or "").strip()
        else:
            text = (getattr(resp, "text", None) or "").strip()
        return GenerationResult.success(text, candidates=candidates, usage=_usage(resp))

    def upload_file(self, path: Union[str, Path], mime_type: str, display_name: str) -> UploadedFile:
        """Upload a local file to the Files API. Errors propagate to the caller."""
        uploaded = self.client.files.upload(
            file=str(path),
            config=types.UploadFileConfig(mime_type=mime_type, display_name=display_name),
        )
        handle = UploadedFile(
            name=getattr(uploaded, "name", None) or "",
            uri=getattr(uploaded, "uri", None) or "",
            mime_type=getattr(uploaded, "mime_type", None) or mime_type,
        )
        logger.info("Upload finished: %s", handle.name or "<unnamed>")
        return handle

    def delete_file(self, uploaded: UploadedFile) -> None:
        """Best-effort removal of an uploaded file. Never raises."""
        try:
            self.client.files.delete(name=uploaded.name)
        except Exception as exc:
            err = CleanupError(f"could not delete {uploaded.name}: {exc}")
            logger.warning("Uploaded file was not removed: %s", err, exc_info=err)
            return
        logger.info("Uploaded file %s removed from the Files API", uploaded.name)

    def generate_with_file(
        self,
        prompt: str,
        path: Union[str, Path],
        *,
        mime_type: str,
        display_name: str,
    ) -> GenerationResult:
        """Upload `path`, ask about it, then delete the upload."""
        try:
            uploaded = self.upload_file(path, mime_type, display_name)
        except Exception as exc:
            return self._fail("upload", exc)

        content = types.Content(
            role="user",
            parts=[
                types.Part.from_text(text=prompt),
                types.Part.from_uri(file_uri=uploaded.uri, mime_type=uploaded.mime_type),
            ],
        )
        logger.info("Sending request with %s attached", display_name)
        try:
            try:
                resp = self._call([content])
            except Exception as exc:
                return self._fail("generation with file", exc)
            text = (getattr(resp, "text", None) or "").strip()
            logger.info("Analysis with attachment finished (%d chars)", len(text))
            return GenerationResult.success(text, usage=_usage(resp))
        finally:
            self.delete_file(uploaded)
