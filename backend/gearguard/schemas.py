from datetime import datetime
from typing import ClassVar, Optional, Literal, Generic, TypeVar, get_args
from pydantic import BaseModel, EmailStr, ConfigDict, Field, model_validator
from uuid import UUID


UserRole = Literal["admin", "manager", "technician", "employee"]
MemberRole = Literal["leader", "member"]
EquipmentStatus = Literal["operational", "under_maintenance", "maintenance_required", "retired"]
RequestType = Literal["corrective", "preventive"]
RequestPriority = Literal["low", "medium", "high", "critical"]
RequestStage = Literal["new", "in_progress", "repaired", "scrap"]
ReportRange = Literal["7d", "30d", "1y"]

USER_ROLES: tuple[str, ...] = get_args(UserRole)
REQUEST_STAGES: tuple[str, ...] = get_args(RequestStage)
REPORT_RANGES: tuple[str, ...] = get_args(ReportRange)

T = TypeVar("T")


class DataEnvelope(BaseModel, Generic[T]):
    """Wrapper used for every successful API body."""

    data: T


class PartialUpdate(BaseModel):
    """Base for PUT bodies: omitted fields are left alone.

    Fields listed in ``non_nullable`` back NOT NULL columns, so an explicit
    ``null`` for them is a validation error rather than a cleared value.
    """

    non_nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_nulls(self) -> "PartialUpdate":
        nulls = [
            name for name in self.non_nullable
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulls:
            raise ValueError(f"{', '.join(nulls)} may not be null")
        return self


class DepartmentCreate(BaseModel):
    name: str
    description: Optional[str] = None


class DepartmentOut(DepartmentCreate):
    id: UUID
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class DepartmentRef(BaseModel):
    id: UUID
    name: str
    model_config = ConfigDict(from_attributes=True)


class UserCreate(BaseModel):
    name: str
    email: EmailStr
    password: str = Field(min_length=6)
    role: UserRole = "employee"
    department_id: Optional[UUID] = None


class UserUpdate(PartialUpdate):
    non_nullable = ("name", "email", "role")

    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6)
    role: Optional[UserRole] = None
    department_id: Optional[UUID] = None


class UserOut(BaseModel):
    id: UUID
    name: str
    email: EmailStr
    role: UserRole
    department_id: Optional[UUID] = None
    department: Optional[DepartmentRef] = None
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class UserRef(BaseModel):
    id: UUID
    name: str
    model_config = ConfigDict(from_attributes=True)


class TeamCreate(BaseModel):
    team_name: str
    description: Optional[str] = None


class TeamMemberAdd(BaseModel):
    user_id: UUID
    role: MemberRole = "member"


class TeamMemberOut(BaseModel):
    user: UserRef
    role: MemberRole
    model_config = ConfigDict(from_attributes=True)


class TeamOut(TeamCreate):
    id: UUID
    members: list[TeamMemberOut] = []
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class TeamRef(BaseModel):
    id: UUID
    team_name: str
    model_config = ConfigDict(from_attributes=True)


class EquipmentCreate(BaseModel):
    name: str
    serial_number: str
    type: Optional[str] = None
    location: Optional[str] = None
    status: EquipmentStatus = "operational"
    department_id: UUID | None = None
    team_id: UUID | None = None


class EquipmentUpdate(PartialUpdate):
    non_nullable = ("name", "serial_number", "status")

    name: str | None = None
    serial_number: str | None = None
    type: str | None = None
    location: str | None = None
    status: EquipmentStatus | None = None
    department_id: UUID | None = None
    team_id: UUID | None = None


class EquipmentOut(EquipmentCreate):
    id: UUID
    department: Optional[DepartmentRef] = None
    team: Optional[TeamRef] = None
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class EquipmentRef(BaseModel):
    id: UUID
    name: str
    serial_number: str
    model_config = ConfigDict(from_attributes=True)


class MaintenanceRequestCreate(BaseModel):
    subject: str
    description: Optional[str] = None
    type: RequestType = "corrective"
    priority: RequestPriority = "medium"
    stage: RequestStage = "new"
    scheduled_date: Optional[datetime] = None
    scrap_reason: Optional[str] = None
    duration: Optional[float] = Field(default=None, ge=0)
    equipment_id: Optional[UUID] = None
    team_id: Optional[UUID] = None
    created_by: Optional[UUID] = None
    assigned_to: Optional[UUID] = None


class MaintenanceRequestUpdate(PartialUpdate):
    non_nullable = ("subject", "type", "priority", "stage")

    subject: Optional[str] = None
    description: Optional[str] = None
    type: Optional[RequestType] = None
    priority: Optional[RequestPriority] = None
    stage: Optional[RequestStage] = None
    scheduled_date: Optional[datetime] = None
    scrap_reason: Optional[str] = None
    duration: Optional[float] = Field(default=None, ge=0)
    equipment_id: Optional[UUID] = None
    team_id: Optional[UUID] = None
    assigned_to: Optional[UUID] = None


class StageUpdate(BaseModel):
    stage: RequestStage
    scrap_reason: Optional[str] = None
    duration: Optional[float] = Field(default=None, ge=0)


class MaintenanceRequestOut(MaintenanceRequestCreate):
    id: UUID
    equipment: Optional[EquipmentRef] = None
    team: Optional[TeamRef] = None
    creator: Optional[UserRef] = None
    assignee: Optional[UserRef] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class AdminCounts(BaseModel):
    total_users: int
    technicians: int
    active_equipment: int
    open_requests: int


class StageCount(BaseModel):
    stage: RequestStage
    count: int


class AdminCharts(BaseModel):
    status: list[StageCount]


class RecentRequest(BaseModel):
    id: UUID
    subject: str
    stage: RequestStage
    priority: RequestPriority
    equipment: Optional[EquipmentRef] = None
    assignee: Optional[UserRef] = None
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class AdminStats(BaseModel):
    counts: AdminCounts
    charts: AdminCharts
    recent_requests: list[RecentRequest]


class ReportKpi(BaseModel):
    total_requests: int
    completed_requests: int
    avg_repair_time: float
    preventive_compliance: float


class TeamRequestCount(BaseModel):
    name: str
    completed: int
    open: int


class RequestTypeCount(BaseModel):
    type: RequestType
    count: int


class ReportSummary(BaseModel):
    range: ReportRange
    since: datetime
    kpi: ReportKpi
    requests_by_team: list[TeamRequestCount]
    requests_by_type: list[RequestTypeCount]
