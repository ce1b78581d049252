# equiptrack/derived.py
"""
Fields that are computed from other stored data rather than stored directly.

Everything here is pure: callers pass records in and get new values back.
"""
from datetime import date, timedelta
from typing import Iterable, List, Optional

from equiptrack.models import (
    ContractStatus,
    Equipment,
    ServiceContract,
    ServiceLog,
    ServiceLogType,
)

RENEWAL_WINDOW_DAYS = 30


def compute_last_certification_date(logs: Iterable[ServiceLog]) -> Optional[date]:
    """Date of the most recent Certification log, or None if there is none."""
    dates = [log.date for log in logs if log.type == ServiceLogType.CERTIFICATION]
    return max(dates) if dates else None


def with_derived_state(equipment: Equipment) -> Equipment:
    return equipment.model_copy(update={
        "last_certification_date": compute_last_certification_date(equipment.service_logs),
    })


def contract_status(contract: ServiceContract, today: Optional[date] = None) -> ContractStatus:
    today = today or date.today()
    if contract.end_date and contract.end_date < today:
        return ContractStatus.EXPIRED
    if contract.renewal_date:
        days_left = (contract.renewal_date - today).days
        # a renewal date already passed still needs renewing
        if days_left <= RENEWAL_WINDOW_DAYS:
            return ContractStatus.RENEWS_SOON
    return ContractStatus.ACTIVE


def sort_contracts(contracts: Iterable[ServiceContract]) -> List[ServiceContract]:
    # Newest start first; undated contracts keep their insertion order at the end.
    contracts = list(contracts)
    dated = [c for c in contracts if c.start_date]
    undated = [c for c in contracts if not c.start_date]
    return sorted(dated, key=lambda c: c.start_date, reverse=True) + undated


def format_service_log(log: ServiceLog) -> str:
    return f"Date: {log.date.isoformat()}, Type: {log.type.value}, Technician: {log.technician}, Notes: {log.notes}"


def build_service_history(logs: Iterable[ServiceLog]) -> str:
    """
    One line per log, newest date first. Logs sharing a date keep their
    insertion order (sorted() is stable).
    """
    ordered = sorted(logs, key=lambda log: log.date, reverse=True)
    return "\n".join(format_service_log(log) for log in ordered)
