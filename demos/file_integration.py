"""
Gemini Files API demo: uploads a project summary PDF and the application log,
asks the model about each one, and removes the uploads afterwards.

Usage:
  python -m demos.file_integration
  python -m demos.file_integration --pdf docs/summary.pdf --log logs/app.log
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from config.settings import ConfigurationError, MissingCredentialError, get_settings
from models.clients_google import GoogleGeminiClient
from monitoring.prompts import LOG_ANALYSIS_PROMPT, MISSING_DOCUMENT_NOTE, PROJECT_ANALYSIS_PROMPT
from utils.logging_setup import DEFAULT_LOG_FILE, configure_logging

logger = logging.getLogger(__name__)

DEFAULT_PDF = Path("resources") / "project_summary.pdf"
ANALYSIS_ERROR_PLACEHOLDER = "ERROR: Could not obtain an analysis of the file."
LOG_NOT_FOUND = "Log file not found. Run some operations first to generate logs."
RULE = "=" * 80


def analyze_project(client: GoogleGeminiClient, pdf_path: Path) -> str:
    """Ask about the project PDF; without the file, fall back to a text-only prompt."""
    if not pdf_path.exists():
        logger.warning("PDF not found at %s. Sending prompt without the file.", pdf_path)
        result = client.generate(PROJECT_ANALYSIS_PROMPT + MISSING_DOCUMENT_NOTE)
        return result.text_or(ANALYSIS_ERROR_PLACEHOLDER)

    logger.info("PDF found, uploading to the Files API")
    result = client.generate_with_file(
        PROJECT_ANALYSIS_PROMPT,
        pdf_path,
        mime_type="application/pdf",
        display_name="Structured Project Summary",
    )
    return result.text_or(ANALYSIS_ERROR_PLACEHOLDER)


def analyze_log_file(client: GoogleGeminiClient, log_path: Path) -> str:
    if not log_path.exists():
        logger.warning("Log file not found: %s", log_path)
        return LOG_NOT_FOUND

    logger.info("Log file found: %s", log_path.resolve())
    result = client.generate_with_file(
        LOG_ANALYSIS_PROMPT,
        log_path,
        mime_type="text/plain",
        display_name=log_path.name,
    )
    return result.text_or(ANALYSIS_ERROR_PLACEHOLDER)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Gemini file integration demo (PDF and log analysis).")
    parser.add_argument("--pdf", type=Path, default=DEFAULT_PDF, help="Project summary PDF to analyse")
    parser.add_argument("--log", type=Path, default=DEFAULT_LOG_FILE, help="Application log file to analyse")
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ConfigurationError as e:
        configure_logging("INFO")
        logger.error("Invalid configuration: %s", e)
        return 1

    configure_logging(settings.log_level, DEFAULT_LOG_FILE)
    logger.info("=== FILE INTEGRATION DEMONSTRATION - GEMINI ===")

    try:
        client = GoogleGeminiClient(settings)
    except MissingCredentialError as e:
        logger.error("Invalid configuration: %s", e)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.error("Error while setting up the Gemini client: %s", e, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("ANALYSIS 1: Structured project summary (PDF)")
    print(RULE)
    print(analyze_project(client, args.pdf))

    print("\n" + RULE)
    print("ANALYSIS 2: Application log file")
    print(RULE)
    print(analyze_log_file(client, args.log))

    logger.info("=== DEMONSTRATION FINISHED ===")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
