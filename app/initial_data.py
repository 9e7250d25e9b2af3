# app/initial_data.py

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import UserValidationError, WriteFailure
from app.core.settings import settings
from app.crud.user import create_user as crud_create_user, get_user_by_username
from app.models.project import Project
from app.schemas.auth import Identity
from app.schemas.user import UserCreate

logger = logging.getLogger("ProgressBoard.InitialData")

def demo_projects(now: datetime) -> List[dict]:
    """Demo project with all three periods filled; the current period ends tomorrow."""
    day = timedelta(days=1)
    return [
        {
            "project_code": "LTC-10807",
            "name": "Riverside Housing (new water main)",
            "responsible_person": "Alex Chen",
            "previous_activity": "Foundation structure and exterior walls",
            "previous_start": now - 30 * day,
            "previous_end": now - 15 * day,
            "previous_notes": "Soft ground during piling; extra grouting added.",
            "previous_remark": "Structure complete, inspection passed.",
            "planned_activity": "Interior piping and waterproofing",
            "planned_start": now - 14 * day,
            "planned_end": now + 1 * day,
            "planned_notes": "Plumbing materials on site, please confirm quantities.",
            "next_activity": "Interior plastering and tiling",
            "next_start": now + 2 * day,
            "next_end": now + 16 * day,
            "next_notes": "Confirm tile style with the supplier in advance.",
        },
    ]

def seed_demo_projects(db: Session, identity: Identity, now: Optional[datetime] = None) -> List[Project]:
    """
    Inserts the demo projects when there are no open projects and the
    session is a named (non-anonymous) one. Returns what was created.
    """
    if identity.is_anonymous:
        logger.warning(f"Anonymous session {identity.user_id} cannot seed demo data")
        return []
    if db.query(Project).filter(Project.is_closed == False).first() is not None:  # noqa: E712
        logger.info("Open projects exist; demo data not inserted")
        return []

    now = now or datetime.now(timezone.utc)
    projects = [
        Project(**data, is_closed=False, last_update_date=func.now())
        for data in demo_projects(now)
    ]
    db.add_all(projects)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to insert demo projects: {e}")
        raise WriteFailure("Database error while inserting demo projects.")
    for project in projects:
        db.refresh(project)
    logger.info(f"Inserted {len(projects)} demo project(s) for {identity.user_id}")
    return projects

def create_initial_admin_user(db: Session) -> None:
    logger.info("Checking if initial user needs to be created...")
    username = settings.FIRST_SUPERUSER_USERNAME
    if not username or not settings.FIRST_SUPERUSER_EMAIL or not settings.FIRST_SUPERUSER_PASSWORD:
        logger.info("FIRST_SUPERUSER_* not configured. No action taken.")
        return

    if get_user_by_username(db, username=username):
        logger.info(f"User '{username}' already exists. No action taken.")
        return

    try:
        user_in = UserCreate(
            username=username,
            email=settings.FIRST_SUPERUSER_EMAIL,
            password=settings.FIRST_SUPERUSER_PASSWORD,
            full_name="Site Administrator",
            is_active=True,
        )
        crud_create_user(db=db, data=user_in.model_dump())
        logger.info(f"User '{username}' created successfully.")
    except (ValidationError, UserValidationError, WriteFailure) as e:
        logger.error(f"Failed to create initial user: {e}")

def main() -> None:
    from app.database import SessionLocal, engine
    from app.models.base import Base
    from app import models  # noqa: F401

    logger.info("Initializing database and initial data...")
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        create_initial_admin_user(db)
        admin = get_user_by_username(db, settings.FIRST_SUPERUSER_USERNAME) if settings.FIRST_SUPERUSER_USERNAME else None
        if admin is not None:
            seed_demo_projects(db, Identity(user_id=str(admin.id), display_name=admin.full_name, is_anonymous=False))
    finally:
        db.close()
    logger.info("Finished initial data setup.")

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
