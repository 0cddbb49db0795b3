"""Simulated pond sensor readings for the monitoring demos."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)

SCENARIOS = ("normal", "alert", "critical")
POND_IDS = ("TANK-001", "TANK-002", "TANK-003")
DEFAULT_SCENARIO = "normal"

Band = Tuple[float, float]


@dataclass(frozen=True)
class ScenarioBands:
    oxygen: Band
    temperature: Band
    ph: Band
    ammonia: Band
    weather: str


# Half-open [low, high) ranges per scenario.
SCENARIO_BANDS: Dict[str, ScenarioBands] = {
    "normal": ScenarioBands(
        oxygen=(6.5, 8.5),
        temperature=(24.0, 28.0),
        ph=(7.0, 8.0),
        ammonia=(0.1, 0.5),
        weather="Sunny, light winds",
    ),
    "alert": ScenarioBands(
        oxygen=(5.0, 6.0),
        temperature=(28.0, 30.0),
        ph=(6.5, 7.0),
        ammonia=(0.8, 1.2),
        weather="Cloudy, light rain expected",
    ),
    "critical": ScenarioBands(
        oxygen=(2.0, 4.0),
        temperature=(30.0, 33.0),
        ph=(8.5, 9.5),
        ammonia=(1.5, 2.5),
        weather="Storm expected, high temperature",
    ),
}


@dataclass(frozen=True)
class SensorReading:
    pond_id: str
    oxygen_level: float  # mg/L
    water_temperature: float  # °C
    ph: float
    ammonia_level: float  # mg/L
    weather_forecast: str

    def __str__(self) -> str:
        return (
            f"Pond {self.pond_id} - O2: {self.oxygen_level:.1f} mg/L, "
            f"Temp: {self.water_temperature:.1f}°C, pH: {self.ph:.1f}, "
            f"NH3: {self.ammonia_level:.1f} mg/L, Weather: {self.weather_forecast}"
        )


def _sample(rng: random.Random, band: Band) -> float:
    low, high = band
    return low + rng.random() * (high - low)


def bands_for(scenario: str) -> ScenarioBands:
    """Bands for `scenario`; unknown names get the normal bands."""
    bands = SCENARIO_BANDS.get(scenario)
    if bands is None:
        logger.debug("Unknown scenario %r, falling back to %s", scenario, DEFAULT_SCENARIO)
        return SCENARIO_BANDS[DEFAULT_SCENARIO]
    return bands


def generate_reading(pond_id: str, scenario: str, rng: Optional[random.Random] = None) -> SensorReading:
    rng = rng or random.Random()
    bands = bands_for(scenario)
    return SensorReading(
        pond_id=pond_id,
        oxygen_level=_sample(rng, bands.oxygen),
        water_temperature=_sample(rng, bands.temperature),
        ph=_sample(rng, bands.ph),
        ammonia_level=_sample(rng, bands.ammonia),
        weather_forecast=bands.weather,
    )
