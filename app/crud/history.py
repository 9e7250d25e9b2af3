#app/crud/history.py
from sqlalchemy.orm import Session
from typing import List

from app.core.ordering import newest_first
from app.crud.audit import find_audit_records
from app.crud.report import find_reports
from app.schemas.history import HistoryEntry

def get_project_history(db: Session, project_id: int) -> List[HistoryEntry]:
    """
    Reports and notes/remark edits of one project as a single timeline, newest first.
    """
    entries = [
        HistoryEntry(
            kind="REPORT",
            id=r.id,
            project_id=r.project_id,
            timestamp=r.timestamp,
            seq=r.seq,
            report=r.report,
            reporter_id=r.reporter_id,
            reporter_name=r.reporter_name,
        )
        for r in find_reports(db, project_id)
    ]
    entries += [
        HistoryEntry(
            kind="AUDIT",
            id=a.id,
            project_id=a.project_id,
            timestamp=a.timestamp,
            seq=a.seq,
            record_type=a.record_type,
            field=a.field,
            old_value=a.old_value,
            new_value=a.new_value,
            editor_id=a.editor_id,
            editor_name=a.editor_name,
        )
        for a in find_audit_records(db, project_id)
    ]
    # ids of the two tables are unrelated; the shared sequence orders same-second entries
    return newest_first(entries, tie_key="seq")
