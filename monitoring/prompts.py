from __future__ import annotations

from typing import Sequence

from .sensors import SensorReading

SYSTEM_INSTRUCTION = (
    "You are an aquaculture specialist with extensive experience monitoring tilapia ponds."
)

ANALYSIS_TEMPLATE = """Analyse the real-time sensor data from the aquaculture pond.

POND {pond_id} DATA:
- Dissolved Oxygen: {oxygen:.2f} mg/L
- Water Temperature: {temperature:.1f}°C
- pH: {ph:.1f}
- Ammonia (NH3): {ammonia:.2f} mg/L
- Weather Forecast: {weather}

IDEAL PARAMETERS FOR TILAPIA:
- Oxygen: 6.0-8.0 mg/L (critical below 4.0)
- Temperature: 24-28°C (stress above 30°C)
- pH: 7.0-8.0 (mortality outside 6.5-9.0)
- Ammonia: <0.5 mg/L (toxic above 1.0 mg/L)

PROVIDE A STRUCTURED ANALYSIS:

1. RISK LEVEL: [NORMAL/ALERT/CRITICAL]

2. CRITICAL ACTIONS (if needed):
- URGENT actions that must be taken IMMEDIATELY
- Focus on saving the fish and preventing mortality

3. PREVENTIVE ACTIONS:
- Measures to optimise conditions
- Management adjustments for the next hours/days

4. NOTIFICATIONS:
- Who must be alerted
- When to reassess the situation

Be SPECIFIC and PRACTICAL. Assume this is a real automated system.
"""

PROJECT_ANALYSIS_PROMPT = """Based on the attached structured project summary (PDF file), propose a high-level
integration of this solution with the Gemini API and give a simple implementation example in Python.

Please include:
1. High-level integration proposal
2. Specific benefits for the educational project
3. Simple implementation example in Python
"""

MISSING_DOCUMENT_NOTE = (
    "\n\nNOTE: PDF file not found. Analysis based on general knowledge about educational systems."
)

LOG_ANALYSIS_PROMPT = """You are an expert in analysing Python application logs.

Analyse the attached log file and provide a detailed report covering:

EXECUTIVE SUMMARY:
- Time period covered by the logs
- Total number of events/operations
- Overall application status (healthy/problems)

PROBLEM ANALYSIS:
- Critical errors found
- Warnings that deserve attention
- Exceptions and tracebacks
- Performance problems

BEHAVIOUR PATTERNS:
- Most frequent operations
- Activity peaks
- Identified execution flows

RECOMMENDATIONS:
- Logging improvements
- Monitoring focus points
- Optimisation suggestions
- Alerts worth configuring

SECURITY ALERTS:
- Suspicious access attempts
- Exposed sensitive information
- Anomalous patterns

Be specific and practical. Focus on actionable insights for developers.
"""


def build_analysis_prompt(reading: SensorReading) -> str:
    return ANALYSIS_TEMPLATE.format(
        pond_id=reading.pond_id,
        oxygen=reading.oxygen_level,
        temperature=reading.water_temperature,
        ph=reading.ph,
        ammonia=reading.ammonia_level,
        weather=reading.weather_forecast,
    )


def build_context_prompt(messages: Sequence[str]) -> str:
    """Fold a short conversation into one prompt."""
    lines = [f"Message {i}: {m}" for i, m in enumerate(messages, start=1)]
    return "\n".join(lines) + "\n\nAnswer taking the whole context above into account:"
