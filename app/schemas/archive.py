#app/schemas/archive.py
"""
Export shape of an archived project.

The JSON keys are camelCase and form a stable contract: a future
re-import would read exactly this layout.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import List, Optional
from app.schemas.common import UTCDateTime


class _ExportModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class ProjectExport(_ExportModel):
    id: int
    project_code: Optional[str] = None
    name: str
    responsible_person: str
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


class ReportExport(_ExportModel):
    project_id: int
    report: str
    reporter_id: str
    reporter_name: str
    timestamp: Optional[UTCDateTime] = None


class AuditRecordExport(_ExportModel):
    project_id: int
    # exported under the original key "type"
    record_type: str
    field: str
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    editor_id: str
    editor_name: str
    timestamp: Optional[UTCDateTime] = None

    def to_export(self) -> dict:
        data = self.model_dump(mode="json", by_alias=True)
        data["type"] = data.pop("recordType")
        return data


class ArchiveArtifact(_ExportModel):
    project_details: ProjectExport
    reports_history: List[ReportExport]
    notes_history: List[AuditRecordExport]

    def to_export(self) -> dict:
        return {
            "projectDetails": self.project_details.model_dump(mode="json", by_alias=True),
            "reportsHistory": [r.model_dump(mode="json", by_alias=True) for r in self.reports_history],
            "notesHistory": [n.to_export() for n in self.notes_history],
        }
