#app/models/audit.py
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Text, Index, func
from app.models.base import Base

class AuditRecord(Base):
    """
    AuditRecord: immutable before/after entry for one edit of a notes or remark field.

    project_id is a plain column on purpose: history is removed only by archival.
    """
    __tablename__ = "notes_history"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    project_id: int = Column(Integer, nullable=False, index=True)
    record_type: str = Column(String(16), nullable=False, doc="NOTE or REMARK")
    field: str = Column(String(64), nullable=False)
    old_value: str = Column(Text, nullable=True)
    new_value: str = Column(Text, nullable=True)
    editor_id: str = Column(String(64), nullable=False)
    editor_name: str = Column(String(128), nullable=False)
    timestamp: datetime = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    seq: int = Column(Integer, nullable=True, index=True, doc="Position in the combined history timeline")

    __table_args__ = (
        Index("ix_notes_history_timestamp", "timestamp"),
    )

    def __repr__(self):
        return (
            f"<AuditRecord(id={self.id}, project_id={self.project_id}, "
            f"type={self.record_type}, field='{self.field}')>"
        )
