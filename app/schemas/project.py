#app/schemas/project.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from app.schemas.common import UTCDateTime

from app.core.status import ProjectStatus

class ProjectBase(BaseModel):
    """
    ProjectBase: descriptive fields of a project.
    """
    project_code: Optional[str] = Field(None, examples=["LTC-10807"], description="Site/job code")
    name: str = Field(..., examples=["Riverside Housing (new water main)"], description="Project name")
    responsible_person: str = Field(..., examples=["Alex Chen"], description="Person in charge")

class ProjectCreate(ProjectBase):
    """
    ProjectCreate: new project with its first current period.
    """
    planned_activity: str = Field(..., examples=["Interior piping and waterproofing"])
    planned_start: Optional[UTCDateTime] = Field(None, examples=["2024-05-01T00:00:00Z"])
    planned_end: Optional[UTCDateTime] = Field(None, examples=["2024-05-15T00:00:00Z"])

class PeriodInput(BaseModel):
    """
    PeriodInput: one period slot as entered for a rotation.
    """
    activity: Optional[str] = Field(None, examples=["Tiling and plastering"])
    start: Optional[UTCDateTime] = None
    end: Optional[UTCDateTime] = None

class RotationRequest(BaseModel):
    """
    RotationRequest: new current period (activity and end required) and an optional next period.
    """
    new_current: PeriodInput
    new_next: Optional[PeriodInput] = None

class FieldEdit(BaseModel):
    """
    FieldEdit: new value for an audited notes/remark field.
    """
    value: str = Field("", description="Full new text; an unchanged value is a no-op")

class ProjectRead(ProjectBase):
    """
    ProjectRead: full stored project record.
    """
    id: int
    is_closed: bool

    previous_activity: str = ""
    previous_start: Optional[UTCDateTime] = None
    previous_end: Optional[UTCDateTime] = None
    previous_notes: str = ""
    previous_remark: str = ""

    planned_activity: str = ""
    planned_start: Optional[UTCDateTime] = None
    planned_end: Optional[UTCDateTime] = None
    planned_notes: str = ""

    next_activity: str = ""
    next_start: Optional[UTCDateTime] = None
    next_end: Optional[UTCDateTime] = None
    next_notes: str = ""

    last_update_date: Optional[UTCDateTime] = None
    created_at: Optional[UTCDateTime] = None

    model_config = ConfigDict(from_attributes=True)

class StatusRead(BaseModel):
    """
    StatusRead: derived status, computed at request time.
    """
    status: ProjectStatus
    label: str
    color: str
    overdue_days: Optional[int] = None

class ProjectCard(ProjectRead):
    """
    ProjectCard: project plus its current status and days since last update.
    """
    status: StatusRead
    days_since_update: Optional[int] = None
