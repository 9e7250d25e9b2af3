#app/crud/archive.py
from dataclasses import dataclass
from typing import Any, Dict, List
import logging

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import ExportFailure, WriteFailure
from app.core.ordering import newest_first
from app.crud.audit import find_audit_records
from app.crud.project import get_project
from app.crud.report import find_reports
from app.models.audit import AuditRecord
from app.models.project import Project
from app.models.report import Report
from app.schemas.archive import ArchiveArtifact, AuditRecordExport, ProjectExport, ReportExport
from app.services.export_sink import ExportSink, archive_filename

logger = logging.getLogger("ProgressBoard.Archive")

@dataclass
class ArchiveResult:
    artifact: Dict[str, Any]
    filename: str
    location: str

def build_archive_artifact(project: Project, reports: List[Report], notes: List[AuditRecord]) -> Dict[str, Any]:
    """
    Export document: project snapshot plus its reports and notes history, newest first.
    """
    try:
        artifact = ArchiveArtifact(
            project_details=ProjectExport.model_validate(project),
            reports_history=[ReportExport.model_validate(r) for r in newest_first(reports)],
            notes_history=[AuditRecordExport.model_validate(n) for n in newest_first(notes)],
        )
        return artifact.to_export()
    except ValidationError as e:
        logger.error(f"Could not assemble archive for project {project.id}: {e}")
        raise ExportFailure(f"Could not assemble archive for project {project.id}.")

def archive_project(db: Session, project_id: int, sink: ExportSink) -> ArchiveResult:
    """
    Exports a project with its full history, then deletes every trace of it.

    Deletion only starts after the sink accepted the artifact. The project,
    its reports and its notes history are removed in one transaction.
    """
    project = get_project(db, project_id)
    reports = find_reports(db, project_id)
    notes = find_audit_records(db, project_id)

    artifact = build_archive_artifact(project, reports, notes)
    filename = archive_filename(project.name, project.id)
    location = sink.deliver(artifact, filename)
    logger.info(
        f"Exported project {project_id} to {location} "
        f"({len(reports)} reports, {len(notes)} notes history records)"
    )

    try:
        project.is_closed = True
        for row in reports:
            db.delete(row)
        for row in notes:
            db.delete(row)
        db.delete(project)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Archive export of project {project_id} succeeded but deletion failed: {e}")
        raise WriteFailure(
            f"Project {project_id} was exported to {filename} but could not be deleted. Please verify manually."
        )

    logger.info(f"Deleted project {project_id} and its history")
    return ArchiveResult(artifact=artifact, filename=filename, location=location)
