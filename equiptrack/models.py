# equiptrack/models.py
from datetime import date
from enum import Enum
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator
from pydantic.alias_generators import to_camel


class EquipmentStatus(str, Enum):
    ACTIVE = "Active"
    IN_REPAIR = "In-Repair"
    OUT_OF_SERVICE = "Out-of-Service"
    DECOMMISSIONED = "Decommissioned"


class TagType(str, Enum):
    NCI = "NCI"
    NIH = "NIH"
    VPP = "VPP"


class DocumentType(str, Enum):
    MANUAL = "Manual"
    WARRANTY = "Warranty"
    INVOICE = "Invoice"
    OTHER = "Other"


class ServiceLogType(str, Enum):
    PREVENTATIVE = "Preventative"
    REPAIR = "Repair"
    INSPECTION = "Inspection"
    REQUEST = "Request"
    CERTIFICATION = "Certification"


class ServiceLogStatus(str, Enum):
    REQUESTED = "Requested"
    APPROVED = "Approved"
    IN_PROGRESS = "In-Progress"
    COMPLETED = "Completed"
    REJECTED = "Rejected"


class ContractStatus(str, Enum):
    ACTIVE = "Active"
    RENEWS_SOON = "Renews-Soon"
    EXPIRED = "Expired"


# Surrounding whitespace is dropped before the non-empty check.
RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class RecordModel(BaseModel):
    """
    Base for every stored shape: camelCase on the wire, snake_case in code,
    and unknown fields are rejected instead of silently dropped.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


# --- Child records: the *In shape is what a form submits, the full shape carries the id ---

class PropertyTagIn(RecordModel):
    type: TagType
    value: str = Field(min_length=1)


class PropertyTag(PropertyTagIn):
    id: str


class ServiceContractIn(RecordModel):
    # Nothing is required here; None means "unknown", not zero.
    provider: Optional[str] = None
    vendor_poc: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    renewal_date: Optional[date] = None
    terms: Optional[str] = None
    number_of_preventative_maintenance: Optional[int] = None
    preventative_maintenance_done_date: Optional[date] = None
    preventative_maintenance_due_date: Optional[date] = None
    po_start_date: Optional[date] = None
    po_end_date: Optional[date] = None
    po_number: Optional[str] = None
    po_line_number: Optional[str] = None
    annual_cost: Optional[float] = None
    credit_unused_coverage: Optional[bool] = None


class ServiceContract(ServiceContractIn):
    id: str


class DocumentIn(RecordModel):
    name: str = Field(min_length=1)
    type: DocumentType
    upload_date: date = Field(default_factory=date.today)
    url: str


class Document(DocumentIn):
    id: str


class SoftwareIn(RecordModel):
    name: str = Field(min_length=1)
    version: str = Field(min_length=1)
    license_key: str = Field(min_length=1)
    install_date: date
    expiration_date: Optional[date] = None


class Software(SoftwareIn):
    id: str


class ServiceLogIn(RecordModel):
    date: date
    type: ServiceLogType
    technician: str
    notes: str = ""
    status: ServiceLogStatus = ServiceLogStatus.COMPLETED


class ServiceLog(ServiceLogIn):
    id: str


# --- Equipment ---

class EquipmentFields(RecordModel):
    name: RequiredText
    model: str = ""
    serial_number: str = ""
    manufacturer: str = ""
    room: str = ""
    department: str = ""
    poc: str = ""
    notes: str = ""
    image_url: str = ""
    purchasing_ambis_po_number: str = ""
    purchase_date: Optional[date] = None
    warranty_end_date: Optional[date] = None
    installed_date: Optional[date] = None
    status: EquipmentStatus = EquipmentStatus.ACTIVE
    transferred: bool = False
    node: Optional[str] = None
    probe: Optional[str] = None
    ups: Optional[str] = None
    on_network: bool = False
    computer_associated: Optional[str] = None
    has_service_contract: bool = False
    operational_hours: Optional[float] = None
    failure_rate: Optional[float] = None


class EquipmentIn(EquipmentFields):
    """Payload of the add/edit equipment forms."""

    @model_validator(mode="after")
    def check_network_computer(self):
        if self.on_network and not (self.computer_associated or "").strip():
            raise ValueError("Computer/IP is required when On Network is checked.")
        return self


class Equipment(EquipmentFields):
    id: RequiredText
    last_certification_date: Optional[date] = None
    contracts: List[ServiceContract] = Field(default_factory=list)
    documents: List[Document] = Field(default_factory=list)
    software: List[Software] = Field(default_factory=list)
    service_logs: List[ServiceLog] = Field(default_factory=list)
    property_tags: List[PropertyTag] = Field(default_factory=list)


# Child collections that hang off an Equipment, keyed by their wire name.
class ChildKind(str, Enum):
    CONTRACTS = "contracts"
    DOCUMENTS = "documents"
    SOFTWARE = "software"
    SERVICE_LOGS = "serviceLogs"
    PROPERTY_TAGS = "propertyTags"


CHILD_SPECS = {
    # kind: (Equipment attribute, input model, stored model, id prefix)
    ChildKind.CONTRACTS: ("contracts", ServiceContractIn, ServiceContract, "c"),
    ChildKind.DOCUMENTS: ("documents", DocumentIn, Document, "d"),
    ChildKind.SOFTWARE: ("software", SoftwareIn, Software, "s"),
    ChildKind.SERVICE_LOGS: ("service_logs", ServiceLogIn, ServiceLog, "sl"),
    ChildKind.PROPERTY_TAGS: ("property_tags", PropertyTagIn, PropertyTag, "pt"),
}


def dump(record: BaseModel) -> dict:
    """JSON-ready dict with camelCase keys."""
    return record.model_dump(mode="json", by_alias=True)
