"""
Aquaculture monitoring demo.

Generates simulated sensor readings for three ponds (normal, alert and critical
conditions) and asks a generative model for a risk assessment of each one.

Usage:
  python -m demos.aquaculture
  python -m demos.aquaculture --provider openai --out results/run.csv
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional

from config.settings import ConfigurationError, MissingCredentialError, get_settings
from models import create_model_client, resolve_provider
from monitoring.service import AquacultureMonitor, write_results
from utils.logging_setup import DEFAULT_LOG_FILE, configure_logging

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Aquaculture monitoring demo with Gemini or OpenAI.")
    parser.add_argument("--provider", default="auto", choices=["auto", "gemini", "openai"],
                        help="Provider to use; auto picks Gemini when configured, else OpenAI")
    parser.add_argument("--delay", type=float, default=1.0, help="Seconds to wait between scenarios")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the simulated sensor data")
    parser.add_argument("--out", type=Path, default=None,
                        help="Write results to this file (.csv/.json) or directory")
    parser.add_argument("--save", action="store_true", help="Write results under results/ when --out is not given")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ConfigurationError as e:
        configure_logging("INFO")
        logger.error("Invalid configuration: %s", e)
        return 1

    configure_logging(settings.log_level, DEFAULT_LOG_FILE)
    settings.log_config_info(logger)

    try:
        provider = resolve_provider(args.provider, settings)
        settings.require(provider)
        client = create_model_client(provider, settings)
    except MissingCredentialError as e:
        logger.error("Invalid %s configuration: %s", args.provider, e)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.error("Setup failed: %s", e, exc_info=True)
        return 1

    monitor = AquacultureMonitor(client)
    rng = random.Random(args.seed) if args.seed is not None else None
    results = monitor.run_demo(delay=args.delay, rng=rng, progress=args.progress)

    if args.out is not None or args.save:
        write_results(results, args.out, monitor.provider, monitor.model)

    logger.info("=== DEMONSTRATION FINISHED ===")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
