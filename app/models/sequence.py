#app/models/sequence.py
from sqlalchemy import Column, Integer
from app.models.base import Base

class HistorySequence(Base):
    """
    HistorySequence: one row per report or audit record, in insertion order.

    Reports and audit records live in separate tables and server timestamps
    have one-second resolution on SQLite, so this id is the shared order of
    the combined timeline.
    """
    __tablename__ = "history_sequence"

    id: int = Column(Integer, primary_key=True, autoincrement=True)

    def __repr__(self):
        return f"<HistorySequence(id={self.id})>"
