#app/crud/report.py
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging
from typing import List

from app.models.report import Report
from app.core.exceptions import ReportValidationError, ReadFailure, WriteFailure
from app.core.ordering import newest_first
from app.crud.project import get_project
from app.crud.sequence import next_history_seq
from app.schemas.auth import Identity

logger = logging.getLogger("ProgressBoard.Reports")

ANONYMOUS_REPORTER = "Anonymous reporter"

def append_report(db: Session, project_id: int, text: str, reporter: Identity) -> Report:
    """
    Appends a site report. Reports are never edited afterwards.
    """
    if not text or not text.strip():
        raise ReportValidationError("Report text cannot be empty.")

    get_project(db, project_id)  # may raise ProjectNotFound

    entry = Report(
        project_id=project_id,
        report=text.strip(),
        reporter_id=reporter.user_id,
        reporter_name=reporter.display_name or ANONYMOUS_REPORTER,
    )
    try:
        entry.seq = next_history_seq(db)
        db.add(entry)
        db.commit()
        db.refresh(entry)
        logger.info(f"Created report {entry.id} (project_id={entry.project_id}, reporter_id={entry.reporter_id})")
        return entry
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to create report: {e}")
        raise WriteFailure("Could not send the report.")

def find_reports(db: Session, project_id: int) -> List[Report]:
    """Unordered equality query."""
    try:
        return db.query(Report).filter(Report.project_id == project_id).all()
    except SQLAlchemyError as e:
        logger.error(f"Failed to load reports for project {project_id}: {e}")
        raise ReadFailure(f"Could not load reports for project {project_id}.")

def list_reports(db: Session, project_id: int) -> List[Report]:
    """
    Reports of a project, newest first.
    """
    return newest_first(find_reports(db, project_id))
