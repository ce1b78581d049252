from datetime import date

from equiptrack.derived import (
    build_service_history,
    compute_last_certification_date,
    contract_status,
    sort_contracts,
    with_derived_state,
)
from equiptrack.models import ContractStatus, Equipment, ServiceContract, ServiceLog


def make_log(log_id, log_type, day, notes=""):
    return ServiceLog(id=log_id, date=day, type=log_type, technician="Tech", notes=notes)


def test_last_certification_date_picks_latest_certification():
    logs = [
        make_log("1", "Repair", date(2024, 1, 1)),
        make_log("2", "Certification", date(2023, 6, 1)),
        make_log("3", "Certification", date(2024, 3, 1)),
    ]
    assert compute_last_certification_date(logs) == date(2024, 3, 1)


def test_last_certification_date_without_certifications():
    logs = [make_log("1", "Repair", date(2025, 1, 1)), make_log("2", "Inspection", date(2025, 2, 1))]
    assert compute_last_certification_date(logs) is None
    assert compute_last_certification_date([]) is None


def test_with_derived_state_overwrites_stale_value():
    equipment = Equipment(
        id="eq-1",
        name="Centrifuge",
        last_certification_date=date(2020, 1, 1),
        service_logs=[make_log("1", "Certification", date(2022, 5, 5))],
    )
    assert with_derived_state(equipment).last_certification_date == date(2022, 5, 5)
    # the input value is left alone
    assert equipment.last_certification_date == date(2020, 1, 1)


def test_contract_status():
    today = date(2024, 6, 1)
    expired = ServiceContract(id="c1", end_date=date(2024, 5, 1))
    renews_soon = ServiceContract(id="c2", end_date=date(2025, 1, 1), renewal_date=date(2024, 6, 20))
    active = ServiceContract(id="c3", end_date=date(2025, 1, 1), renewal_date=date(2025, 1, 1))

    assert contract_status(expired, today) == ContractStatus.EXPIRED
    assert contract_status(renews_soon, today) == ContractStatus.RENEWS_SOON
    assert contract_status(active, today) == ContractStatus.ACTIVE
    assert contract_status(ServiceContract(id="c4"), today) == ContractStatus.ACTIVE


def test_overdue_renewal_is_renews_soon():
    contract = ServiceContract(id="c1", end_date=date(2025, 1, 1), renewal_date=date(2024, 5, 30))
    assert contract_status(contract, date(2024, 6, 1)) == ContractStatus.RENEWS_SOON
    # ended contracts stay Expired whatever the renewal date
    ended = ServiceContract(id="c2", end_date=date(2024, 5, 31), renewal_date=date(2024, 5, 30))
    assert contract_status(ended, date(2024, 6, 1)) == ContractStatus.EXPIRED


def test_sort_contracts_newest_first_undated_last():
    contracts = [
        ServiceContract(id="undated-a"),
        ServiceContract(id="old", start_date=date(2020, 1, 1)),
        ServiceContract(id="undated-b"),
        ServiceContract(id="new", start_date=date(2023, 1, 1)),
    ]
    assert [c.id for c in sort_contracts(contracts)] == ["new", "old", "undated-a", "undated-b"]


def test_service_history_is_newest_first_and_stable():
    logs = [
        make_log("a", "Repair", date(2023, 1, 1), "first same-day"),
        make_log("b", "Inspection", date(2024, 1, 1), "latest"),
        make_log("c", "Preventative", date(2023, 1, 1), "second same-day"),
    ]
    lines = build_service_history(logs).split("\n")
    assert lines == [
        "Date: 2024-01-01, Type: Inspection, Technician: Tech, Notes: latest",
        "Date: 2023-01-01, Type: Repair, Technician: Tech, Notes: first same-day",
        "Date: 2023-01-01, Type: Preventative, Technician: Tech, Notes: second same-day",
    ]
    assert build_service_history([]) == ""
