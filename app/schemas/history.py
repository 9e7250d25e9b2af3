#app/schemas/history.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Literal, Optional
from app.schemas.common import UTCDateTime

class ReportCreate(BaseModel):
    """
    ReportCreate: new site report; blank text is rejected.
    """
    report: str = Field(..., examples=["Concrete delivery delayed to Thursday."])

class ReportRead(BaseModel):
    id: int
    project_id: int
    report: str
    reporter_id: str
    reporter_name: str
    timestamp: Optional[UTCDateTime] = None

    model_config = ConfigDict(from_attributes=True)

class AuditRecordRead(BaseModel):
    id: int
    project_id: int
    record_type: str
    field: str
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    editor_id: str
    editor_name: str
    timestamp: Optional[UTCDateTime] = None

    model_config = ConfigDict(from_attributes=True)

class HistoryEntry(BaseModel):
    """
    HistoryEntry: one item of the combined report + audit timeline.
    """
    kind: Literal["REPORT", "AUDIT"]
    id: int
    project_id: int
    timestamp: Optional[UTCDateTime] = None
    seq: Optional[int] = None
    # REPORT
    report: Optional[str] = None
    reporter_id: Optional[str] = None
    reporter_name: Optional[str] = None
    # AUDIT
    record_type: Optional[str] = None
    field: Optional[str] = None
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    editor_id: Optional[str] = None
    editor_name: Optional[str] = None
