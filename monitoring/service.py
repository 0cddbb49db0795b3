"""Scenario-driven pond monitoring backed by a generative model."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import pandas as pd
from tqdm import tqdm

from models.types import ModelClient
from utils.output_paths import compute_output_path
from .prompts import SYSTEM_INSTRUCTION, build_analysis_prompt
from .sensors import POND_IDS, SCENARIOS, SensorReading, generate_reading

logger = logging.getLogger(__name__)

ANALYSIS_ERROR_PLACEHOLDER = (
    "ERROR: Could not obtain an AI analysis. Check the sensors manually."
)


@dataclass(frozen=True)
class ScenarioResult:
    index: int
    scenario: str
    reading: SensorReading
    response: str
    ok: bool

    def to_record(self, provider: str, model: str) -> Dict[str, Any]:
        return {
            "index": self.index,
            "scenario": self.scenario,
            "pond_id": self.reading.pond_id,
            "oxygen_level": self.reading.oxygen_level,
            "water_temperature": self.reading.water_temperature,
            "ph": self.reading.ph,
            "ammonia_level": self.reading.ammonia_level,
            "weather_forecast": self.reading.weather_forecast,
            "provider": provider,
            "model": model,
            "ok": self.ok,
            "response": self.response,
        }


class AquacultureMonitor:
    def __init__(self, client: ModelClient) -> None:
        self.client = client

    @property
    def provider(self) -> str:
        return getattr(self.client, "provider", "unknown")

    @property
    def model(self) -> str:
        return getattr(self.client, "model", "unknown")

    def _analyze(self, reading: SensorReading) -> Tuple[str, bool]:
        prompt = build_analysis_prompt(reading)
        logger.info("Analysing: %s", reading)
        logger.debug("--- PROMPT START ---\n%s\n--- PROMPT END ---", prompt)
        result = self.client.generate(prompt, system_prompt=SYSTEM_INSTRUCTION)
        if not result.ok:
            logger.error("Analysis for %s failed: %s", reading.pond_id, result.error)
        return result.text_or(ANALYSIS_ERROR_PLACEHOLDER), result.ok

    def analyze(self, reading: SensorReading) -> str:
        """Model analysis of `reading`, or the error placeholder if the call failed."""
        text, _ = self._analyze(reading)
        return text

    def run_demo(
        self,
        *,
        delay: float = 1.0,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
        progress: bool = False,
    ) -> List[ScenarioResult]:
        """Run the normal, alert and critical scenarios once each, in that order.

        A failed call yields the placeholder for that scenario and the run
        moves on to the next one.
        """
        rng = rng or random.Random()
        logger.info("=== AQUACULTURE MONITORING SYSTEM (%s) ===", self.provider)
        results: List[ScenarioResult] = []
        steps = list(zip(SCENARIOS, POND_IDS))
        for i, (scenario, pond_id) in enumerate(tqdm(steps, desc="Scenarios", disable=not progress)):
            logger.info("--- SCENARIO %d: %s ---", i + 1, scenario.upper())
            reading = generate_reading(pond_id, scenario, rng)
            response, ok = self._analyze(reading)
            logger.info("%s RESPONSE:\n%s", self.provider.upper(), response)
            results.append(ScenarioResult(i + 1, scenario, reading, response, ok))
            if delay > 0 and i < len(steps) - 1:
                sleep(delay)
        logger.info("=== END OF DEMONSTRATION ===")
        return results


def write_results(
    results: List[ScenarioResult],
    out_arg: Optional[Path],
    provider: str,
    model: str,
) -> Path:
    """Save scenario results as CSV, or JSON when the target ends in `.json`."""
    out_path = compute_output_path(out_arg, "aquaculture", provider, organize_by_provider=out_arg is None)
    df = pd.DataFrame([r.to_record(provider, model) for r in results])
    if out_path.suffix.lower() == ".json":
        df.to_json(out_path, orient="records", force_ascii=False, indent=2)
    else:
        df.to_csv(out_path, index=False)
    logger.info("Wrote %d results to %s", len(df), out_path)
    return out_path
