# equiptrack/import_export.py
"""
Import/export of the equipment collection.

Import accepts a JSON array of Equipment objects or a spreadsheet (first
sheet, header row = camelCase field names, nested collections as JSON text
cells). Every record goes through the Equipment schema; one bad record
rejects the whole file.

Export writes one spreadsheet row per Equipment.
"""
import io
import json
import logging
import os
from typing import List

import pandas as pd
from pydantic import ValidationError

from equiptrack.errors import ImportValidationError, UnsupportedFileType
from equiptrack.models import Equipment, dump

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "equipment_export.xlsx"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

JSON_EXTENSIONS = {".json"}
SPREADSHEET_EXTENSIONS = {".xlsx", ".xls"}

BOOLEAN_COLUMNS = {"transferred", "onNetwork", "hasServiceContract"}
DATE_COLUMNS = {"purchaseDate", "warrantyEndDate", "installedDate", "lastCertificationDate"}
NESTED_COLUMNS = {"contracts", "documents", "software", "serviceLogs", "propertyTags"}

TRUE_STRINGS = {"true", "yes", "y", "1", "1.0"}
FALSE_STRINGS = {"false", "no", "n", "0", "0.0"}

# id first, then the Equipment fields in declaration order
EXPORT_COLUMNS = ["id"] + [
    field.alias or name for name, field in Equipment.model_fields.items() if name != "id"
]


def _is_blank(value) -> bool:
    if isinstance(value, (list, dict)):
        return False
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return bool(pd.isna(value))


def coerce_bool(value, column: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    text = str(value).strip().lower()
    if text in TRUE_STRINGS:
        return True
    if text in FALSE_STRINGS:
        return False
    raise ImportValidationError(f"Column '{column}' expects a true/false value, got {value!r}")


def coerce_date(value, column: str) -> str:
    try:
        return pd.Timestamp(value).date().isoformat()
    except (ValueError, TypeError) as e:
        raise ImportValidationError(f"Column '{column}' expects a date, got {value!r}") from e


def coerce_nested(value, column: str) -> list:
    if isinstance(value, list):
        return value
    try:
        parsed = json.loads(value)
    except (TypeError, ValueError) as e:
        raise ImportValidationError(f"Column '{column}' is not valid JSON: {e}") from e
    if not isinstance(parsed, list):
        raise ImportValidationError(f"Column '{column}' must hold a JSON array")
    return parsed


def normalize_row(row: dict) -> dict:
    """
    Turn one spreadsheet row into an Equipment-shaped dict. Empty cells are
    dropped so the schema decides whether the field is optional.
    """
    record = {}
    for column, value in row.items():
        column = str(column)
        if _is_blank(value):
            continue
        if column in BOOLEAN_COLUMNS:
            value = coerce_bool(value, column)
        elif column in DATE_COLUMNS:
            value = coerce_date(value, column)
        elif column in NESTED_COLUMNS:
            value = coerce_nested(value, column)
        elif column == "id" and not isinstance(value, str):
            value = str(value)
        record[column] = value
    return record


def decode_records(items) -> List[Equipment]:
    """Validate a batch of raw records. All-or-nothing."""
    if not isinstance(items, list):
        raise ImportValidationError("Expected a list of equipment records")

    records = []
    seen_ids = set()
    for index, item in enumerate(items, start=1):
        if not isinstance(item, dict):
            raise ImportValidationError(f"Record {index} is not an object")
        try:
            equipment = Equipment.model_validate(item)
        except ValidationError as e:
            raise ImportValidationError(f"Record {index} is invalid: {e}") from e
        # the store is keyed by id
        if equipment.id in seen_ids:
            raise ImportValidationError(f"Record {index} duplicates id '{equipment.id}'")
        seen_ids.add(equipment.id)
        records.append(equipment)
    return records


def read_json(content: bytes) -> List[Equipment]:
    try:
        items = json.loads(content)
    except ValueError as e:
        raise ImportValidationError(f"Not a valid JSON file: {e}") from e
    return decode_records(items)


def read_spreadsheet(content: bytes) -> List[Equipment]:
    try:
        df = pd.read_excel(io.BytesIO(content), sheet_name=0, dtype=str)
    except Exception as e:
        raise ImportValidationError(f"Could not read spreadsheet: {e}") from e
    rows = df.to_dict(orient="records")
    return decode_records([normalize_row(row) for row in rows])


def import_equipment(filename: str, content: bytes) -> List[Equipment]:
    extension = os.path.splitext(filename or "")[1].lower()
    if extension in JSON_EXTENSIONS:
        records = read_json(content)
    elif extension in SPREADSHEET_EXTENSIONS:
        records = read_spreadsheet(content)
    else:
        raise UnsupportedFileType("Please select a JSON or Excel (.xlsx, .xls) file.")
    logger.info("Decoded %d equipment records from %s", len(records), filename)
    return records


def flatten_equipment(equipment: Equipment) -> dict:
    row = dump(equipment)
    for column in NESTED_COLUMNS:
        row[column] = json.dumps(row[column])
    return row


def export_equipment(records: List[Equipment]) -> bytes:
    df = pd.DataFrame([flatten_equipment(e) for e in records], columns=EXPORT_COLUMNS)
    buffer = io.BytesIO()
    df.to_excel(buffer, index=False, engine="openpyxl")
    logger.info("Exported %d equipment records", len(records))
    return buffer.getvalue()
