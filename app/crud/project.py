# app/crud/project.py
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import func
import logging
from typing import Optional, List, Dict, Any

from app.models.project import Project
from app.core.exceptions import (
    ProjectNotFound,
    ProjectValidationError,
    ReadFailure,
    WriteFailure,
)
from app.core.ordering import sort_records
from app.core.status import as_utc

logger = logging.getLogger("ProgressBoard.Projects")

SORTABLE_FIELDS = ("last_update_date", "planned_end")

def _text(value: Optional[str]) -> str:
    return (value or "").strip()

def create_project(db: Session, data: dict) -> Project:
    """
    Creates a project with its first current period. Previous and next slots start empty.
    """
    name = _text(data.get("name"))
    responsible = _text(data.get("responsible_person"))
    activity = _text(data.get("planned_activity"))
    if not name:
        raise ProjectValidationError("Project name is required.")
    if not responsible:
        raise ProjectValidationError("Responsible person is required.")
    if not activity:
        raise ProjectValidationError("Current period activity is required.")

    project = Project(
        project_code=_text(data.get("project_code")) or None,
        name=name,
        responsible_person=responsible,
        is_closed=False,
        previous_activity="",
        previous_start=None,
        previous_end=None,
        previous_notes="",
        previous_remark="",
        planned_activity=activity,
        planned_start=as_utc(data.get("planned_start")),
        planned_end=as_utc(data.get("planned_end")),
        planned_notes="",
        next_activity="",
        next_start=None,
        next_end=None,
        next_notes="",
        last_update_date=func.now(),
    )
    db.add(project)
    try:
        db.commit()
        db.refresh(project)
        logger.info(f"Created project '{project.name}' (ID: {project.id})")
        return project
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Exception during save: {e}")
        raise WriteFailure("Database error while creating project.")

def get_project(db: Session, project_id: int) -> Project:
    """
    Returns a project by id or raises ProjectNotFound.
    """
    try:
        project = db.query(Project).filter(Project.id == project_id).first()
    except SQLAlchemyError as e:
        logger.error(f"Failed to load project {project_id}: {e}")
        raise ReadFailure(f"Could not load project {project_id}.")
    if not project:
        raise ProjectNotFound(f"Project with id={project_id} not found.")
    return project

def list_active_projects(
    db: Session,
    sort_by: str = "last_update_date",
    order: str = "desc",
) -> List[Project]:
    """
    Returns every open project. The query is a plain equality filter; ordering
    happens afterwards so no compound index is needed.
    """
    if sort_by not in SORTABLE_FIELDS:
        raise ProjectValidationError(f"Cannot sort by '{sort_by}'. Use one of: {', '.join(SORTABLE_FIELDS)}.")
    if order not in ("asc", "desc"):
        raise ProjectValidationError("Order must be 'asc' or 'desc'.")
    try:
        projects = db.query(Project).filter(Project.is_closed == False).all()  # noqa: E712
    except SQLAlchemyError as e:
        logger.error(f"Failed to list projects: {e}")
        raise ReadFailure("Could not load projects.")
    return sort_records(projects, sort_by, descending=(order == "desc"))

def _period_value(period: Optional[Any], key: str) -> Any:
    if period is None:
        return None
    if isinstance(period, dict):
        return period.get(key)
    return getattr(period, key, None)

def validate_rotation(new_current: Any) -> None:
    if not _text(_period_value(new_current, "activity")):
        raise ProjectValidationError("New current period activity is required.")
    if _period_value(new_current, "end") is None:
        raise ProjectValidationError("New current period end date is required.")

def compute_rotation(project: Any, new_current: Any, new_next: Optional[Any] = None) -> Dict[str, Any]:
    """
    Field-set for one rotation: current moves to previous, the entered period
    becomes current, and the next slot takes the new (optional) next period.

    Notes follow the period they were written for: the current notes move to
    previous, the prepared next notes seed the new current period, and the next
    slot starts blank. previous_remark is never part of the field-set.
    """
    def current(name: str) -> Any:
        return project.get(name) if isinstance(project, dict) else getattr(project, name)

    return {
        "previous_activity": current("planned_activity") or "",
        "previous_start": current("planned_start"),
        "previous_end": current("planned_end"),
        "previous_notes": current("planned_notes") or "",

        "planned_activity": _text(_period_value(new_current, "activity")),
        "planned_start": as_utc(_period_value(new_current, "start")),
        "planned_end": as_utc(_period_value(new_current, "end")),
        "planned_notes": current("next_notes") or "",

        "next_activity": _text(_period_value(new_next, "activity")),
        "next_start": as_utc(_period_value(new_next, "start")),
        "next_end": as_utc(_period_value(new_next, "end")),
        "next_notes": "",
    }

def rotate_project(db: Session, project_id: int, new_current: Any, new_next: Optional[Any] = None) -> Project:
    """
    Applies a rotation in a single transaction and stamps last_update_date with server time.
    """
    validate_rotation(new_current)
    project = get_project(db, project_id)
    changes = compute_rotation(project, new_current, new_next)
    for field, value in changes.items():
        setattr(project, field, value)
    project.last_update_date = func.now()

    try:
        db.commit()
        db.refresh(project)
        logger.info(
            f"Rotated project {project.id}: previous='{changes['previous_activity']}', "
            f"current='{changes['planned_activity']}', next='{changes['next_activity']}'"
        )
        return project
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to rotate project {project_id}: {e}")
        raise WriteFailure("Database error while rotating project periods.")
