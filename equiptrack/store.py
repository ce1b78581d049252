# equiptrack/store.py
import logging
import threading
from typing import Callable, Iterable, List, Optional
from uuid import uuid4

from equiptrack.derived import with_derived_state
from equiptrack.errors import ChildNotFound, EquipmentNotFound
from equiptrack.models import CHILD_SPECS, ChildKind, Equipment, EquipmentIn

logger = logging.getLogger(__name__)

STATUS_ALL = "all"

Listener = Callable[[List[Equipment]], None]


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid4().hex[:12]}"


def _matches(equipment: Equipment, needle: str) -> bool:
    fields = [equipment.name, equipment.model, equipment.serial_number]
    fields += [tag.value for tag in equipment.property_tags]
    fields += [v for v in (equipment.node, equipment.probe, equipment.ups) if v]
    return any(needle in (f or "").lower() for f in fields)


class EquipmentStore:
    """
    In-memory owner of every Equipment record for one session.

    Records are kept newest-first. Each change swaps in a new Equipment
    value (copy-on-write at the root), so snapshots handed out earlier
    never change under the caller.
    """

    def __init__(self, records: Optional[Iterable[Equipment]] = None):
        self._lock = threading.RLock()
        self._records: List[Equipment] = [with_derived_state(r) for r in (records or [])]
        self._listeners: List[Listener] = []
        self.selected_id: Optional[str] = self._records[0].id if self._records else None

    # --- reads ---

    def snapshot(self) -> List[Equipment]:
        with self._lock:
            return list(self._records)

    def get(self, equipment_id: str) -> Optional[Equipment]:
        with self._lock:
            return next((e for e in self._records if e.id == equipment_id), None)

    def selected(self) -> Optional[Equipment]:
        return self.get(self.selected_id) if self.selected_id else None

    def select(self, equipment_id: str) -> Equipment:
        with self._lock:
            equipment = self.get(equipment_id)
            if equipment is None:
                raise EquipmentNotFound(equipment_id)
            self.selected_id = equipment_id
        return equipment

    def search(self, query: str, collection: Optional[List[Equipment]] = None) -> List[Equipment]:
        collection = self.snapshot() if collection is None else collection
        if not query:
            return list(collection)
        needle = query.lower()
        return [e for e in collection if _matches(e, needle)]

    def filter_by_status(self, status: str, collection: Optional[List[Equipment]] = None) -> List[Equipment]:
        collection = self.snapshot() if collection is None else collection
        if status == STATUS_ALL:
            return list(collection)
        return [e for e in collection if e.status.value == status]

    def find_by_property_tag_value(self, value: str, exclude_id: Optional[str] = None) -> Optional[Equipment]:
        for equipment in self.snapshot():
            if equipment.id == exclude_id:
                continue
            if any(tag.value == value for tag in equipment.property_tags):
                return equipment
        return None

    # --- equipment CRUD ---

    def add(self, data: EquipmentIn) -> Equipment:
        equipment = Equipment(id=new_id("eq"), **data.model_dump())
        with self._lock:
            self._records.insert(0, equipment)
            self.selected_id = equipment.id
        logger.info("Added equipment %s (%s)", equipment.id, equipment.name)
        self._notify()
        return equipment

    def update(self, equipment: Equipment) -> Equipment:
        equipment = with_derived_state(equipment)
        with self._lock:
            for i, current in enumerate(self._records):
                if current.id == equipment.id:
                    self._records[i] = equipment
                    break
            else:
                raise EquipmentNotFound(equipment.id)
        logger.info("Updated equipment %s", equipment.id)
        self._notify()
        return equipment

    def edit(self, equipment_id: str, data: EquipmentIn) -> Equipment:
        """Apply an edit-form payload, keeping the record's child collections."""
        with self._lock:
            current = self.get(equipment_id)
            if current is None:
                raise EquipmentNotFound(equipment_id)
            return self.update(current.model_copy(update=data.model_dump()))

    def delete(self, equipment_id: str) -> Equipment:
        with self._lock:
            removed = self.get(equipment_id)
            if removed is None:
                raise EquipmentNotFound(equipment_id)
            self._records = [e for e in self._records if e.id != equipment_id]
            if self.selected_id == equipment_id:
                self.selected_id = self._records[0].id if self._records else None
        logger.info("Deleted equipment %s", equipment_id)
        self._notify()
        return removed

    def replace_all(self, records: Iterable[Equipment]) -> List[Equipment]:
        """Bulk replacement used by import. Not a merge."""
        fresh = [with_derived_state(r) for r in records]
        with self._lock:
            self._records = fresh
            self.selected_id = fresh[0].id if fresh else None
        logger.info("Replaced store contents with %d records", len(fresh))
        self._notify()
        return list(fresh)

    # --- child collections ---

    def _parent(self, parent_id: str) -> Equipment:
        parent = self.get(parent_id)
        if parent is None:
            raise EquipmentNotFound(parent_id)
        return parent

    def add_child(self, kind: ChildKind, parent_id: str, data):
        attr, _, model, prefix = CHILD_SPECS[kind]
        with self._lock:
            parent = self._parent(parent_id)
            child = model(id=new_id(prefix), **data.model_dump())
            self.update(parent.model_copy(update={attr: getattr(parent, attr) + [child]}))
        return child

    def update_child(self, kind: ChildKind, parent_id: str, child):
        attr = CHILD_SPECS[kind][0]
        with self._lock:
            parent = self._parent(parent_id)
            children = getattr(parent, attr)
            if not any(c.id == child.id for c in children):
                raise ChildNotFound(kind.value, child.id)
            replaced = [child if c.id == child.id else c for c in children]
            self.update(parent.model_copy(update={attr: replaced}))
        return child

    def remove(self, kind: ChildKind, parent_id: str, child_id: str) -> Equipment:
        attr = CHILD_SPECS[kind][0]
        with self._lock:
            parent = self._parent(parent_id)
            kept = [c for c in getattr(parent, attr) if c.id != child_id]
            return self.update(parent.model_copy(update={attr: kept}))

    # --- change notification ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _notify(self):
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)
