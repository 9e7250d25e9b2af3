#app/models/project.py
from datetime import datetime
from app.models.base import Base
from sqlalchemy import (
    Column, Integer, String, DateTime, Text, Boolean, Index, func
)

class Project(Base):
    """
    Project: a construction job tracked through three embedded period slots:
    previous (finished), planned (current) and next (pre-scheduled).
    """
    __tablename__ = "projects"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    project_code: str = Column(String(64), nullable=True, index=True, doc="Site/job code, not unique")
    name: str = Column(String(128), nullable=False, index=True, doc="Project name")
    responsible_person: str = Column(String(128), nullable=False, doc="Person in charge")
    is_closed: bool = Column(Boolean, default=False, nullable=False, index=True, doc="Pre-delete marker")

    # previous period
    previous_activity: str = Column(Text, nullable=False, default="")
    previous_start: datetime = Column(DateTime(timezone=True), nullable=True)
    previous_end: datetime = Column(DateTime(timezone=True), nullable=True)
    previous_notes: str = Column(Text, nullable=False, default="")
    previous_remark: str = Column(Text, nullable=False, default="", doc="Completion remark")

    # planned (current) period
    planned_activity: str = Column(Text, nullable=False, default="")
    planned_start: datetime = Column(DateTime(timezone=True), nullable=True)
    planned_end: datetime = Column(DateTime(timezone=True), nullable=True, doc="Sole status input")
    planned_notes: str = Column(Text, nullable=False, default="")

    # next period
    next_activity: str = Column(Text, nullable=False, default="")
    next_start: datetime = Column(DateTime(timezone=True), nullable=True)
    next_end: datetime = Column(DateTime(timezone=True), nullable=True)
    next_notes: str = Column(Text, nullable=False, default="")

    last_update_date: datetime = Column(DateTime(timezone=True), server_default=func.now(), nullable=True, doc="Bumped on every rotation")
    created_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("ix_projects_planned_end", "planned_end"),
    )

    def __repr__(self):
        return (
            f"<Project(id={self.id}, name='{self.name}', planned_end={self.planned_end}, is_closed={self.is_closed})>"
        )
