import io
import json
from datetime import date

import pandas as pd
import pytest

from equiptrack.errors import ImportValidationError, UnsupportedFileType
from equiptrack.import_export import (
    EXPORT_COLUMNS,
    export_equipment,
    import_equipment,
    normalize_row,
)
from equiptrack.models import dump


def to_xlsx(rows) -> bytes:
    buffer = io.BytesIO()
    pd.DataFrame(rows).to_excel(buffer, index=False)
    return buffer.getvalue()


def test_json_import():
    payload = json.dumps([
        {"id": "a1", "name": "Incubator", "status": "Active",
         "serviceLogs": [{"id": "l1", "date": "2024-02-02", "type": "Certification", "technician": "Ana"}]},
        {"id": "a2", "name": "Freezer", "onNetwork": True, "computerAssociated": "LAB-PC-4"},
    ]).encode()

    records = import_equipment("inventory.json", payload)

    assert [r.id for r in records] == ["a1", "a2"]
    assert records[0].service_logs[0].date == date(2024, 2, 2)
    assert records[1].on_network is True


@pytest.mark.parametrize("bad_record", [
    {"id": "", "name": "Blank id"},
    {"id": "b2"},
    {"id": "b3", "name": "Unknown column", "nciNumber": "NCI-1"},
    {"id": "b4", "name": "Bad status", "status": "Broken"},
    {"id": "ok", "name": "Same id as record 1"},
    {"id": " ", "name": " "},
    {"id": "b7", "name": "   "},
])
def test_one_bad_record_rejects_the_batch(bad_record):
    payload = json.dumps([{"id": "ok", "name": "Fine"}, bad_record]).encode()
    with pytest.raises(ImportValidationError, match="Record 2"):
        import_equipment("batch.json", payload)


def test_json_must_be_an_array():
    with pytest.raises(ImportValidationError):
        import_equipment("one.json", b'{"id": "1", "name": "x"}')
    with pytest.raises(ImportValidationError):
        import_equipment("broken.json", b"[{not json")


def test_unsupported_extension():
    with pytest.raises(UnsupportedFileType):
        import_equipment("inventory.csv", b"id,name\n1,x\n")


def test_normalize_row_coerces_cells():
    row = {
        "id": 7,
        "name": "Balance",
        "transferred": "yes",
        "onNetwork": "FALSE",
        "hasServiceContract": 1,
        "purchaseDate": pd.Timestamp("2022-03-04"),
        "notes": float("nan"),
        "contracts": '[{"id": "c1", "provider": "Mettler"}]',
        "software": "[]",
    }
    normalized = normalize_row(row)

    assert normalized["id"] == "7"
    assert normalized["transferred"] is True
    assert normalized["onNetwork"] is False
    assert normalized["hasServiceContract"] is True
    assert normalized["purchaseDate"] == "2022-03-04"
    assert "notes" not in normalized
    assert normalized["contracts"] == [{"id": "c1", "provider": "Mettler"}]
    assert normalized["software"] == []


def test_normalize_row_rejects_garbage():
    with pytest.raises(ImportValidationError):
        normalize_row({"id": "1", "name": "x", "onNetwork": "maybe"})
    with pytest.raises(ImportValidationError):
        normalize_row({"id": "1", "name": "x", "serviceLogs": "[{broken"})


def test_spreadsheet_import():
    content = to_xlsx([
        {"id": 10, "name": "Microscope", "model": "Leica DM6", "onNetwork": "yes",
         "computerAssociated": "10.1.1.5", "hasServiceContract": "no",
         "propertyTags": '[{"id": "t1", "type": "NIH", "value": "NIH-55"}]'},
        {"id": 11, "name": "Shaker", "model": "", "onNetwork": "no",
         "computerAssociated": "", "hasServiceContract": "no", "propertyTags": ""},
    ])

    records = import_equipment("sheet.xlsx", content)

    assert [r.id for r in records] == ["10", "11"]
    assert records[0].on_network is True
    assert records[0].property_tags[0].value == "NIH-55"
    assert records[1].property_tags == []


def test_spreadsheet_missing_name_rejects_batch():
    content = to_xlsx([{"id": "1", "name": "Good"}, {"id": "2", "name": ""}])
    with pytest.raises(ImportValidationError, match="Record 2"):
        import_equipment("sheet.xlsx", content)


def test_spreadsheet_duplicate_id_rejects_batch():
    content = to_xlsx([{"id": "1", "name": "Good"}, {"id": "2", "name": "Other"}, {"id": "1", "name": "Copy"}])
    with pytest.raises(ImportValidationError, match="Record 3 duplicates id '1'"):
        import_equipment("sheet.xlsx", content)


def test_json_import_strips_id_and_name():
    payload = json.dumps([{"id": " a1 ", "name": "  Incubator "}]).encode()
    records = import_equipment("inventory.json", payload)
    assert records[0].id == "a1"
    assert records[0].name == "Incubator"


def test_export_then_import_keeps_records(store):
    content = export_equipment(store.snapshot())

    df = pd.read_excel(io.BytesIO(content))
    assert list(df.columns) == EXPORT_COLUMNS
    assert len(df) == 3

    records = import_equipment("equipment_export.xlsx", content)
    assert [dump(r) for r in records] == [dump(r) for r in store.snapshot()]
