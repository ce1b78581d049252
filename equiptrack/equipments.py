# equiptrack/equipments.py
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, File, HTTPException, Query, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from pydantic import ValidationError

from equiptrack.dependencies import get_store, require_equipment
from equiptrack.derived import contract_status, sort_contracts
from equiptrack.errors import EquipmentNotFound, ImportValidationError, NotFoundError, UnsupportedFileType
from equiptrack.import_export import EXPORT_FILENAME, XLSX_MEDIA_TYPE, export_equipment, import_equipment
from equiptrack.models import CHILD_SPECS, ChildKind, EquipmentIn, dump
from equiptrack.store import STATUS_ALL, EquipmentStore

logger = logging.getLogger(__name__)

router = APIRouter()


def _validate(model, payload: dict):
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors())


# List Equipments, optionally searched and filtered by status
@router.get("/")
def list_equipments(
    q: Optional[str] = Query(None),
    status: str = Query(STATUS_ALL),
    store: EquipmentStore = Depends(get_store),
):
    found = store.filter_by_status(status, store.search(q or ""))
    return {"equipments": [dump(e) for e in found], "selectedId": store.selected_id}


@router.post("/", status_code=201)
def add_equipment(data: EquipmentIn, store: EquipmentStore = Depends(get_store)):
    equipment = store.add(data)
    return {"message": "Equipment added", "equipment": dump(equipment)}


# --- Import / Export ---

@router.get("/export")
def export_all(store: EquipmentStore = Depends(get_store)):
    content = export_equipment(store.snapshot())
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


@router.post("/import")
def import_all(file: UploadFile = File(...), store: EquipmentStore = Depends(get_store)):
    content = file.file.read()
    try:
        records = import_equipment(file.filename, content)
    except UnsupportedFileType as e:
        raise HTTPException(status_code=415, detail=str(e))
    except ImportValidationError as e:
        logger.warning("Rejected import of %s: %s", file.filename, e)
        raise HTTPException(status_code=400, detail=f"Import failed: {e}")

    store.replace_all(records)
    return {
        "message": f"{len(records)} equipment items have been loaded.",
        "selectedId": store.selected_id,
    }


# --- Associated equipment ---

@router.get("/by-tag/{value}")
def find_by_tag(
    value: str,
    exclude_id: Optional[str] = Query(None),
    store: EquipmentStore = Depends(get_store),
):
    equipment = store.find_by_property_tag_value(value, exclude_id)
    if equipment is None:
        raise HTTPException(status_code=404, detail=f"No other equipment found with tag {value}")
    return {"equipment": dump(equipment)}


# --- Single equipment ---

@router.get("/{equipment_id}")
def get_equipment(equipment_id: str, store: EquipmentStore = Depends(get_store)):
    return {"equipment": dump(require_equipment(store, equipment_id))}


@router.put("/{equipment_id}")
def update_equipment(equipment_id: str, data: EquipmentIn, store: EquipmentStore = Depends(get_store)):
    try:
        equipment = store.edit(equipment_id, data)
    except EquipmentNotFound:
        raise HTTPException(status_code=404, detail="Equipment not found")
    return {"message": "Equipment updated", "equipment": dump(equipment)}


@router.delete("/{equipment_id}")
def delete_equipment(equipment_id: str, store: EquipmentStore = Depends(get_store)):
    try:
        store.delete(equipment_id)
    except EquipmentNotFound:
        raise HTTPException(status_code=404, detail="Equipment not found")
    return {"message": f"Equipment {equipment_id} deleted"}


@router.post("/{equipment_id}/select")
def select_equipment(equipment_id: str, store: EquipmentStore = Depends(get_store)):
    try:
        equipment = store.select(equipment_id)
    except EquipmentNotFound:
        raise HTTPException(status_code=404, detail="Equipment not found")
    return {"selectedId": equipment.id}


@router.get("/{equipment_id}/contracts")
def list_contracts(equipment_id: str, store: EquipmentStore = Depends(get_store)):
    equipment = require_equipment(store, equipment_id)
    contracts = []
    for contract in sort_contracts(equipment.contracts):
        contracts.append({**dump(contract), "status": contract_status(contract).value})
    return {"contracts": contracts}


# --- Child collections (contracts, documents, software, serviceLogs, propertyTags) ---

@router.post("/{equipment_id}/{kind}", status_code=201)
def add_child(
    equipment_id: str,
    kind: ChildKind,
    payload: dict = Body(...),
    store: EquipmentStore = Depends(get_store),
):
    data = _validate(CHILD_SPECS[kind][1], payload)
    try:
        child = store.add_child(kind, equipment_id, data)
    except EquipmentNotFound:
        raise HTTPException(status_code=404, detail="Equipment not found")
    return {"message": f"Added to {kind.value}", "record": dump(child), "equipment": dump(store.get(equipment_id))}


@router.put("/{equipment_id}/{kind}/{child_id}")
def update_child(
    equipment_id: str,
    kind: ChildKind,
    child_id: str,
    payload: dict = Body(...),
    store: EquipmentStore = Depends(get_store),
):
    child = _validate(CHILD_SPECS[kind][2], {**payload, "id": child_id})
    try:
        store.update_child(kind, equipment_id, child)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": f"Updated {kind.value} record", "record": dump(child), "equipment": dump(store.get(equipment_id))}


@router.delete("/{equipment_id}/{kind}/{child_id}")
def delete_child(
    equipment_id: str,
    kind: ChildKind,
    child_id: str,
    store: EquipmentStore = Depends(get_store),
):
    try:
        equipment = store.remove(kind, equipment_id, child_id)
    except EquipmentNotFound:
        raise HTTPException(status_code=404, detail="Equipment not found")
    return {"message": f"Removed {child_id} from {kind.value}", "equipment": dump(equipment)}
