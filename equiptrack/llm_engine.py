# equiptrack/llm_engine.py - maintenance helpers backed by the Groq API
import json
import logging
import os
import threading
from contextlib import contextmanager
from typing import Optional

import requests
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from equiptrack.derived import build_service_history
from equiptrack.errors import EmptyServiceReports, GenerationError, GenerationInProgress
from equiptrack.models import Equipment

load_dotenv()

logger = logging.getLogger(__name__)

# Groq API Configuration
GROQ_API_KEY = os.getenv("GROQ_API_KEY")
GROQ_MODEL = os.getenv("GROQ_MODEL", "meta-llama/llama-4-scout-17b-16e-instruct")
GROQ_API_URL = os.getenv("GROQ_API_URL", "https://api.groq.com/openai/v1/chat/completions")
GROQ_TIMEOUT_SECONDS = 120

DEFAULT_ENVIRONMENT = "Standard industrial environment, 24/7 operation."
NO_HISTORY = "No historical data available."


class MaintenanceScheduleRequest(BaseModel):
    equipment_type: str
    operational_hours: Optional[float] = None
    failure_rate: Optional[float] = None
    environmental_factors: str
    historical_maintenance_data: str


class MaintenanceScheduleSuggestion(BaseModel):
    suggested_maintenance_schedule: str
    reasoning: str


class ServiceReportSummaryRequest(BaseModel):
    service_reports: str = Field(min_length=1)


class ServiceReportSummary(BaseModel):
    summary: str


class InFlightGuard:
    """
    Allows one outstanding generation request per (kind, equipment).
    A second trigger while the first is running is refused rather than
    racing it for the displayed result.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._running = set()

    def is_running(self, kind: str, key: str) -> bool:
        with self._lock:
            return (kind, key) in self._running

    @contextmanager
    def claim(self, kind: str, key: str):
        with self._lock:
            if (kind, key) in self._running:
                raise GenerationInProgress(f"A {kind} request for {key} is already running")
            self._running.add((kind, key))
        try:
            yield
        finally:
            with self._lock:
                self._running.discard((kind, key))


def build_schedule_request(equipment: Equipment, environmental_factors: Optional[str] = None) -> MaintenanceScheduleRequest:
    return MaintenanceScheduleRequest(
        equipment_type=f"{equipment.name} ({equipment.model})",
        operational_hours=equipment.operational_hours,
        failure_rate=equipment.failure_rate,
        environmental_factors=environmental_factors or DEFAULT_ENVIRONMENT,
        historical_maintenance_data=build_service_history(equipment.service_logs) or NO_HISTORY,
    )


def build_summary_request(equipment: Equipment) -> ServiceReportSummaryRequest:
    if not equipment.service_logs:
        raise EmptyServiceReports("Please add service logs before summarizing.")
    return ServiceReportSummaryRequest(service_reports=build_service_history(equipment.service_logs))


def _optional(value) -> str:
    return "Unknown" if value is None else str(value)


def schedule_prompt(request: MaintenanceScheduleRequest) -> str:
    return f"""
You are an expert maintenance schedule optimizer.

Based on the equipment's type, usage, environmental factors and historical maintenance data, suggest an optimized maintenance schedule that reduces downtime and extends the equipment's lifespan.

Equipment Type: {request.equipment_type}
Operational Hours: {_optional(request.operational_hours)}
Failure Rate: {_optional(request.failure_rate)}
Environmental Factors: {request.environmental_factors}
Historical Maintenance Data:
{request.historical_maintenance_data}

Respond with a JSON object with exactly two string fields:
- "suggested_maintenance_schedule": the detailed maintenance schedule
- "reasoning": the reasoning behind the suggested schedule
"""


def summary_prompt(request: ServiceReportSummaryRequest) -> str:
    return f"""
You are a maintenance technician summarizing service reports and preventative maintenance records for a piece of equipment.

Summarize the following service reports and preventative maintenance records:

{request.service_reports}

Respond with a JSON object with exactly one string field, "summary".
"""


def _chat_completion(prompt: str) -> str:
    headers = {
        "Authorization": f"Bearer {GROQ_API_KEY}",
        "Content-Type": "application/json"
    }
    payload = {
        "model": GROQ_MODEL,
        "messages": [
            {
                "role": "user",
                "content": prompt
            }
        ],
        "response_format": {"type": "json_object"},
        "max_tokens": 2048,
        "temperature": 0.7,
        "top_p": 1,
        "stream": False
    }

    try:
        response = requests.post(
            GROQ_API_URL,
            headers=headers,
            json=payload,
            timeout=GROQ_TIMEOUT_SECONDS
        )
        response.raise_for_status()
        result = response.json()
        return result["choices"][0]["message"]["content"]
    except requests.exceptions.RequestException as e:
        raise GenerationError(f"Groq API error: {str(e)}") from e
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise GenerationError(f"Groq response format error: {str(e)}") from e


def _parse_output(content: str, model):
    try:
        return model.model_validate(json.loads(content))
    except (TypeError, ValueError, ValidationError) as e:
        raise GenerationError(f"Could not parse {model.__name__} from Groq reply: {str(e)}") from e


def suggest_maintenance_schedule(request: MaintenanceScheduleRequest) -> MaintenanceScheduleSuggestion:
    logger.info("Requesting maintenance schedule for %s", request.equipment_type)
    return _parse_output(_chat_completion(schedule_prompt(request)), MaintenanceScheduleSuggestion)


def summarize_service_reports(request: ServiceReportSummaryRequest) -> ServiceReportSummary:
    logger.info("Requesting service report summary (%d chars)", len(request.service_reports))
    return _parse_output(_chat_completion(summary_prompt(request)), ServiceReportSummary)
