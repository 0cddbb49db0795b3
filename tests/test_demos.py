from __future__ import annotations

import logging
from types import SimpleNamespace

import pytest

import demos.aquaculture as aquaculture
import demos.basic_gemini as basic_gemini
import demos.file_integration as file_integration
import models.clients_google as clients_google
from models import registry
from models.clients_google import GoogleGeminiClient
from models.types import Candidate, GenerationResult, UsageStats
from utils.logging_setup import configure_logging, resolve_level

from conftest import fake_gemini_sdk


@pytest.fixture
def quiet_logging(monkeypatch):
    for module in (aquaculture, basic_gemini, file_integration):
        monkeypatch.setattr(module, "configure_logging", lambda *args, **kwargs: None)


@pytest.fixture
def gemini_sdk(monkeypatch):
    sdk = fake_gemini_sdk(response=SimpleNamespace(text="Risk level: ALERT", usage_metadata=None))
    monkeypatch.setattr(clients_google.genai, "Client", lambda **kwargs: sdk)
    return sdk


def test_aquaculture_exits_nonzero_without_credentials(clean_env, quiet_logging, capsys) -> None:
    assert aquaculture.main(["--delay", "0"]) == 1
    assert "API_KEY" in capsys.readouterr().err


def test_aquaculture_exits_nonzero_on_bad_number(clean_env, quiet_logging) -> None:
    clean_env.setenv("GOOGLE_API_KEY", "g-key")
    clean_env.setenv("OPENAI_MAX_TOKENS", "not-a-number")
    assert aquaculture.main(["--delay", "0"]) == 1


def test_aquaculture_runs_with_gemini_only(clean_env, quiet_logging, gemini_sdk, monkeypatch, tmp_path) -> None:
    clean_env.setenv("GOOGLE_API_KEY", "g-key")

    def no_openai(*args, **kwargs):
        raise AssertionError("OpenAI must not be used")

    monkeypatch.setattr(registry, "OpenAIChatClient", no_openai)

    assert aquaculture.main(["--delay", "0", "--seed", "11", "--out", str(tmp_path / "out")]) == 0
    assert len(gemini_sdk.models.calls) == 3
    written = list((tmp_path / "out").glob("aquaculture_*.csv"))
    assert len(written) == 1


def test_aquaculture_openai_requested_but_missing(clean_env, quiet_logging, gemini_sdk) -> None:
    clean_env.setenv("GOOGLE_API_KEY", "g-key")
    assert aquaculture.main(["--provider", "openai", "--delay", "0"]) == 1
    assert gemini_sdk.models.calls == []


def test_aquaculture_remote_failures_do_not_change_exit_code(clean_env, quiet_logging, monkeypatch) -> None:
    clean_env.setenv("GOOGLE_API_KEY", "g-key")
    sdk = fake_gemini_sdk(error=ConnectionError("offline"))
    monkeypatch.setattr(clients_google.genai, "Client", lambda **kwargs: sdk)
    assert aquaculture.main(["--delay", "0"]) == 0
    assert len(sdk.models.calls) == 3


def test_basic_demo_prints_all_examples(clean_env, quiet_logging, gemini_sdk, capsys) -> None:
    clean_env.setenv("GOOGLE_API_KEY", "g-key")
    assert basic_gemini.main([]) == 0
    out = capsys.readouterr().out
    assert "Example 1" in out and "Example 3" in out
    assert "Response: Risk level: ALERT" in out
    assert "Message 3: Which concepts" in gemini_sdk.models.calls[1]["contents"]


def test_basic_demo_requires_gemini(clean_env, quiet_logging) -> None:
    clean_env.setenv("OPENAI_API_KEY", "o-key")
    assert basic_gemini.main([]) == 1


def test_format_details() -> None:
    result = GenerationResult.success(
        "a",
        candidates=[Candidate(0, "a", "STOP"), Candidate(1, None, "MAX_TOKENS")],
        usage=UsageStats(3, 4, 7),
    )
    text = basic_gemini.format_details(result)
    assert "Number of candidates generated: 2" in text
    assert "Text not available for this candidate" in text
    assert "Total tokens: 7" in text
    assert "Overall response status: STOP" in text
    assert "Usage information not available" in basic_gemini.format_details(GenerationResult.success("x"))


def test_missing_pdf_falls_back_to_text_prompt(gemini_settings, tmp_path) -> None:
    sdk = fake_gemini_sdk(response=SimpleNamespace(text="General proposal", usage_metadata=None))
    client = GoogleGeminiClient(gemini_settings, sdk_client=sdk)

    assert file_integration.analyze_project(client, tmp_path / "absent.pdf") == "General proposal"
    assert "PDF file not found" in sdk.models.calls[0]["contents"]
    assert sdk.files.uploaded == []


def test_missing_log_file_message(gemini_settings, tmp_path) -> None:
    sdk = fake_gemini_sdk()
    client = GoogleGeminiClient(gemini_settings, sdk_client=sdk)
    assert file_integration.analyze_log_file(client, tmp_path / "none.log") == file_integration.LOG_NOT_FOUND
    assert sdk.models.calls == []


def test_file_demo_uploads_existing_files(clean_env, quiet_logging, gemini_sdk, tmp_path) -> None:
    clean_env.setenv("GOOGLE_API_KEY", "g-key")
    pdf = tmp_path / "summary.pdf"
    pdf.write_bytes(b"%PDF-1.4")
    log = tmp_path / "app.log"
    log.write_text("2025-01-01 INFO started\n", encoding="utf-8")

    assert file_integration.main(["--pdf", str(pdf), "--log", str(log)]) == 0
    assert [u["config"].mime_type for u in gemini_sdk.files.uploaded] == ["application/pdf", "text/plain"]
    assert gemini_sdk.files.deleted == ["files/abc123", "files/abc123"]


def test_configure_logging_writes_file(tmp_path, restore_root_logger) -> None:
    log_file = tmp_path / "logs" / "app.log"
    configure_logging("debug", log_file)
    logging.getLogger("demo.test").debug("hello file")
    for h in restore_root_logger.handlers:
        h.flush()
    assert "hello file" in log_file.read_text(encoding="utf-8")
    assert restore_root_logger.level == logging.DEBUG


def test_resolve_level_falls_back_to_info() -> None:
    assert resolve_level("warning") == logging.WARNING
    assert resolve_level("loud") == logging.INFO
    assert resolve_level(None) == logging.INFO


def test_basic_demo_help_does_not_call_the_model(clean_env, quiet_logging, gemini_sdk, capsys) -> None:
    clean_env.setenv("GOOGLE_API_KEY", "g-key")
    with pytest.raises(SystemExit) as exc:
        basic_gemini.main(["--help"])
    assert exc.value.code == 0
    assert "usage:" in capsys.readouterr().out
    assert gemini_sdk.models.calls == []


def test_file_demo_setup_error_exits_nonzero(clean_env, quiet_logging, monkeypatch, capsys) -> None:
    clean_env.setenv("GOOGLE_API_KEY", "g-key")

    def broken_client(**kwargs):
        raise RuntimeError("invalid http options")

    monkeypatch.setattr(clients_google.genai, "Client", broken_client)
    assert file_integration.main([]) == 1
    assert "invalid http options" in capsys.readouterr().err
