# equiptrack/dependencies.py
from fastapi import HTTPException, Request, status

from equiptrack.llm_engine import InFlightGuard
from equiptrack.models import Equipment
from equiptrack.store import EquipmentStore


def get_store(request: Request) -> EquipmentStore:
    return request.app.state.store


def get_guard(request: Request) -> InFlightGuard:
    return request.app.state.generation_guard


def require_equipment(store: EquipmentStore, equipment_id: str) -> Equipment:
    equipment = store.get(equipment_id)
    if equipment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Equipment not found")
    return equipment
