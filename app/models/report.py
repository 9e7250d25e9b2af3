#app/models/report.py
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Text, func
from app.models.base import Base

class Report(Base):
    """
    Report: free-text site status report. Append-only.
    """
    __tablename__ = "project_reports"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    project_id: int = Column(Integer, nullable=False, index=True)
    report: str = Column(Text, nullable=False)
    reporter_id: str = Column(String(64), nullable=False)
    reporter_name: str = Column(String(128), nullable=False)
    timestamp: datetime = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    seq: int = Column(Integer, nullable=True, index=True, doc="Position in the combined history timeline")

    def __repr__(self):
        return f"<Report(id={self.id}, project_id={self.project_id}, reporter_id='{self.reporter_id}')>"
