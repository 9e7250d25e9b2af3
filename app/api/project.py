#app/api/project.py
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from typing import List, Literal
from urllib.parse import quote

from app.schemas.project import (
    ProjectCreate, ProjectRead, ProjectCard, StatusRead, RotationRequest, FieldEdit
)
from app.schemas.history import AuditRecordRead
from app.schemas.auth import Identity
from app.schemas.response import SuccessResponse
from app.crud.project import (
    create_project,
    get_project,
    list_active_projects,
    rotate_project,
)
from app.crud.audit import record_field_edit
from app.crud.archive import archive_project
from app.core.events import ChangeFeed, PROJECTS_TOPIC, topics_for_project
from app.core.status import classify, days_since
from app.dependencies import get_db, get_current_identity, get_change_feed, get_export_sink
from app.initial_data import seed_demo_projects
from app.models.project import Project as ProjectModel
from app.services.export_sink import ExportSink

import logging

router = APIRouter(prefix="/projects", tags=["Projects"])
logger = logging.getLogger("ProgressBoard.ProjectsAPI")

def to_card(project: ProjectModel, now: datetime) -> ProjectCard:
    """
    Project plus its status evaluated at ``now``.
    """
    result = classify(project, now)
    return ProjectCard(
        **ProjectRead.model_validate(project).model_dump(),
        status=StatusRead(
            status=result.status,
            label=result.label,
            color=result.color,
            overdue_days=result.overdue_days,
        ),
        days_since_update=days_since(project.last_update_date, now),
    )

@router.post("/", response_model=ProjectCard)
def create_new_project(
    data: ProjectCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
    feed: ChangeFeed = Depends(get_change_feed),
):
    """
    Create a project with its first current period.
    """
    project = create_project(db, data.model_dump())
    feed.publish(PROJECTS_TOPIC)
    return to_card(project, datetime.now(timezone.utc))

@router.get("/", response_model=List[ProjectCard])
def list_projects(
    sort_by: Literal["last_update_date", "planned_end"] = Query("last_update_date"),
    order: Literal["asc", "desc"] = Query("desc"),
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    """
    Open projects with their current status.
    """
    now = datetime.now(timezone.utc)
    return [to_card(p, now) for p in list_active_projects(db, sort_by=sort_by, order=order)]

@router.post("/seed", response_model=List[ProjectCard])
def seed_projects(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
    feed: ChangeFeed = Depends(get_change_feed),
):
    """
    Insert demo data when there are no open projects. Named sessions only.
    """
    if identity.is_anonymous:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Anonymous sessions cannot seed demo data")
    created = seed_demo_projects(db, identity)
    if created:
        feed.publish(PROJECTS_TOPIC)
    now = datetime.now(timezone.utc)
    return [to_card(p, now) for p in created]

@router.get("/{project_id}", response_model=ProjectCard)
def get_one_project(
    project_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    project = get_project(db, project_id)
    return to_card(project, datetime.now(timezone.utc))

@router.post("/{project_id}/rotate", response_model=ProjectCard)
def rotate_periods(
    project_id: int,
    data: RotationRequest,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
    feed: ChangeFeed = Depends(get_change_feed),
):
    """
    Close out the current period, promote the entered one, accept a new next period.
    """
    project = rotate_project(
        db,
        project_id,
        data.new_current.model_dump(),
        data.new_next.model_dump() if data.new_next else None,
    )
    logger.info(f"Project {project_id} rotated by {identity.user_id}")
    feed.publish(*topics_for_project(project_id))
    return to_card(project, datetime.now(timezone.utc))

@router.put("/{project_id}/fields/{field_key}", response_model=SuccessResponse)
def edit_audited_field(
    project_id: int,
    field_key: str,
    data: FieldEdit,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
    feed: ChangeFeed = Depends(get_change_feed),
):
    """
    Save planned_notes, next_notes or previous_remark and record the change.
    """
    record = record_field_edit(db, project_id, field_key, data.value, identity)
    if record is None:
        return SuccessResponse(result=None, detail="No changes")
    feed.publish(*topics_for_project(project_id))
    return SuccessResponse(result=AuditRecordRead.model_validate(record), detail=f"{field_key} saved")

@router.post("/{project_id}/archive")
def archive_one_project(
    project_id: int,
    confirm: bool = Query(False, description="Must be true: archival deletes the project permanently"),
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
    feed: ChangeFeed = Depends(get_change_feed),
    sink: ExportSink = Depends(get_export_sink),
):
    """
    Export the project with all reports and notes history, then delete it.
    The export comes back as a JSON file download.
    """
    if not confirm:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Archival is permanent; repeat with confirm=true")
    result = archive_project(db, project_id, sink)
    logger.info(f"Project {project_id} archived by {identity.user_id} to {result.location}")
    feed.publish(*topics_for_project(project_id))
    return JSONResponse(
        content=result.artifact,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(result.filename)}"},
    )
