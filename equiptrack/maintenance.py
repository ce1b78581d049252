# equiptrack/maintenance.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from equiptrack import llm_engine
from equiptrack.dependencies import get_guard, get_store, require_equipment
from equiptrack.derived import build_service_history
from equiptrack.errors import EmptyServiceReports, GenerationError, GenerationInProgress
from equiptrack.llm_engine import InFlightGuard
from equiptrack.models import RecordModel
from equiptrack.store import EquipmentStore

logger = logging.getLogger(__name__)

router = APIRouter()

SCHEDULE = "schedule"
SUMMARY = "summary"


class ScheduleSuggestionIn(RecordModel):
    environmental_factors: Optional[str] = None


# --- Service history text, as fed to both helpers ---
@router.get("/{equipment_id}/history")
def get_service_history(equipment_id: str, store: EquipmentStore = Depends(get_store)):
    equipment = require_equipment(store, equipment_id)
    return {
        "equipmentId": equipment.id,
        "lastCertificationDate": equipment.last_certification_date,
        "history": build_service_history(equipment.service_logs),
    }


# === AI maintenance schedule ===
@router.post("/{equipment_id}/schedule-suggestion")
def suggest_schedule(
    equipment_id: str,
    data: Optional[ScheduleSuggestionIn] = None,
    store: EquipmentStore = Depends(get_store),
    guard: InFlightGuard = Depends(get_guard),
):
    equipment = require_equipment(store, equipment_id)
    request = llm_engine.build_schedule_request(equipment, data.environmental_factors if data else None)
    try:
        with guard.claim(SCHEDULE, equipment_id):
            suggestion = llm_engine.suggest_maintenance_schedule(request)
    except GenerationInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))
    except GenerationError as e:
        logger.error("Maintenance schedule suggestion failed for %s: %s", equipment_id, e)
        raise HTTPException(status_code=502, detail="There was an error generating the maintenance schedule. Please try again.")
    return {
        "suggestedMaintenanceSchedule": suggestion.suggested_maintenance_schedule,
        "reasoning": suggestion.reasoning,
    }


# === AI service report summary ===
@router.post("/{equipment_id}/summary")
def summarize_reports(
    equipment_id: str,
    store: EquipmentStore = Depends(get_store),
    guard: InFlightGuard = Depends(get_guard),
):
    equipment = require_equipment(store, equipment_id)
    try:
        request = llm_engine.build_summary_request(equipment)
    except EmptyServiceReports as e:
        raise HTTPException(status_code=400, detail=str(e))
    try:
        with guard.claim(SUMMARY, equipment_id):
            result = llm_engine.summarize_service_reports(request)
    except GenerationInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))
    except GenerationError as e:
        logger.error("Service report summary failed for %s: %s", equipment_id, e)
        raise HTTPException(status_code=502, detail="There was an error summarizing the service logs. Please try again.")
    return {"summary": result.summary}
