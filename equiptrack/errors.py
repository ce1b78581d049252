# equiptrack/errors.py


class EquipTrackError(Exception):
    pass


class NotFoundError(EquipTrackError):
    pass


class EquipmentNotFound(NotFoundError):
    def __init__(self, equipment_id: str):
        super().__init__(f"Equipment not found: {equipment_id}")
        self.equipment_id = equipment_id


class ChildNotFound(NotFoundError):
    def __init__(self, kind: str, child_id: str):
        super().__init__(f"No {kind} record with id {child_id}")
        self.kind = kind
        self.child_id = child_id


class ImportValidationError(EquipTrackError):
    pass


class UnsupportedFileType(EquipTrackError):
    pass


class GenerationError(EquipTrackError):
    pass


class GenerationInProgress(EquipTrackError):
    pass


class EmptyServiceReports(EquipTrackError):
    pass
