"""
Basic Gemini calls: a simple question, a short conversation folded into one
prompt, and a detailed response with several candidates and token usage.

Usage:
  python -m demos.basic_gemini
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from config.settings import ConfigurationError, MissingCredentialError, get_settings
from models.clients_google import GoogleGeminiClient
from models.types import GenerationResult
from monitoring.prompts import build_context_prompt
from utils.logging_setup import DEFAULT_LOG_FILE, configure_logging

logger = logging.getLogger(__name__)

GENERATION_ERROR_PLACEHOLDER = "ERROR: The model did not return a response."
RULE = "=" * 50


def format_details(result: GenerationResult) -> str:
    """Render candidates, finish reasons and token counts as plain text."""
    if not result.ok:
        return GENERATION_ERROR_PLACEHOLDER
    lines = ["=== DETAILED RESPONSE WITH MULTIPLE CANDIDATES ==="]
    if result.candidates:
        lines.append(f"Number of candidates generated: {len(result.candidates)}")
        for c in result.candidates:
            lines.append(f"\n--- CANDIDATE {c.index + 1} ---")
            lines.append(f"Text: {c.text}" if c.text is not None else "Text not available for this candidate")
            lines.append(f"Finish reason: {c.finish_reason}")
    else:
        lines.append(f"Text: {result.text}")

    lines.append("\n=== TOKENS AND METADATA ===")
    if result.usage is not None:
        lines.append(f"Input tokens: {result.usage.prompt_tokens}")
        lines.append(f"Output tokens: {result.usage.output_tokens}")
        lines.append(f"Total tokens: {result.usage.total_tokens}")
    else:
        lines.append("Usage information not available")
    if result.candidates:
        lines.append(f"Overall response status: {result.candidates[0].finish_reason}")
    return "\n".join(lines)


def demonstrate_basic_calls(client: GoogleGeminiClient) -> None:
    print("\n" + RULE)
    print("BASIC CALLS - GEMINI API")
    print(RULE)

    print("\n--- Example 1: Simple question ---")
    r1 = client.generate("What is artificial intelligence?")
    print("Response: " + r1.text_or(GENERATION_ERROR_PLACEHOLDER))

    print("\n--- Example 2: Conversation with context ---")
    messages = [
        "I am a beginner in Python programming.",
        "I need tips to learn better.",
        "Which concepts should I focus on first?",
    ]
    for i, m in enumerate(messages, start=1):
        logger.info("Message %d: %r", i, m)
    r2 = client.generate(build_context_prompt(messages))
    print("Response: " + r2.text_or(GENERATION_ERROR_PLACEHOLDER))

    print("\n--- Example 3: Response with technical details ---")
    r3 = client.generate_with_details("Explain the difference between a list and a tuple in Python.")
    print(format_details(r3))


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Basic Gemini calls: simple question, conversation context and candidate details.")
    parser.parse_args(argv)

    try:
        settings = get_settings()
    except ConfigurationError as e:
        configure_logging("INFO")
        logger.error("Invalid configuration: %s", e)
        return 1

    configure_logging(settings.log_level, DEFAULT_LOG_FILE)
    logger.info("=== Starting basic Gemini API demonstration ===")
    settings.log_config_info(logger)

    try:
        settings.require("gemini")
        client = GoogleGeminiClient(settings)
    except MissingCredentialError as e:
        logger.error("Invalid configuration: %s", e)
        print(f"ERROR: {e}", file=sys.stderr)
        print("Configure the .env file with your Google Gemini API key", file=sys.stderr)
        return 1
    except Exception as e:
        logger.error("Error while setting up the examples: %s", e, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    demonstrate_basic_calls(client)
    logger.info("=== Demonstration finished ===")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
