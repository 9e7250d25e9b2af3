#app/api/report.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from app.schemas.history import ReportCreate, ReportRead, AuditRecordRead, HistoryEntry
from app.schemas.auth import Identity
from app.crud import report as crud_report
from app.crud import audit as crud_audit
from app.crud.history import get_project_history
from app.crud.project import get_project
from app.core.events import ChangeFeed, reports_topic, history_topic
from app.dependencies import get_db, get_current_identity, get_change_feed
import logging

router = APIRouter(prefix="/projects/{project_id}", tags=["History"])
logger = logging.getLogger("ProgressBoard.ReportsAPI")

# ProjectNotFound and validation errors reach the global handlers in app.main

@router.post("/reports", response_model=ReportRead)
def create_report(
    project_id: int,
    data: ReportCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
    feed: ChangeFeed = Depends(get_change_feed),
):
    entry = crud_report.append_report(db, project_id, data.report, reporter=identity)
    feed.publish(reports_topic(project_id), history_topic(project_id))
    return entry

@router.get("/reports", response_model=List[ReportRead])
def list_project_reports(
    project_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    get_project(db, project_id)
    return crud_report.list_reports(db, project_id)

@router.get("/notes-history", response_model=List[AuditRecordRead])
def list_notes_history(
    project_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    get_project(db, project_id)
    return crud_audit.list_audit_records(db, project_id)

@router.get("/history", response_model=List[HistoryEntry])
def project_history(
    project_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    """
    Reports and notes/remark edits as one timeline, newest first.
    """
    get_project(db, project_id)
    return get_project_history(db, project_id)
