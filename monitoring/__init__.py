"""Aquaculture pond monitoring: simulated sensors, prompts and the analysis loop."""

from .prompts import build_analysis_prompt
from .sensors import SCENARIOS, SensorReading, generate_reading
from .service import ANALYSIS_ERROR_PLACEHOLDER, AquacultureMonitor, ScenarioResult, write_results

__all__ = [
    "ANALYSIS_ERROR_PLACEHOLDER",
    "AquacultureMonitor",
    "SCENARIOS",
    "ScenarioResult",
    "SensorReading",
    "build_analysis_prompt",
    "generate_reading",
    "write_results",
]
