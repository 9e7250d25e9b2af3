#app/crud/audit.py
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging
from typing import List, Optional

from app.models.audit import AuditRecord
from app.core.exceptions import AuditValidationError, ReadFailure, WriteFailure
from app.core.ordering import newest_first
from app.crud.project import get_project
from app.crud.sequence import next_history_seq
from app.schemas.auth import Identity

logger = logging.getLogger("ProgressBoard.Audit")

NOTE = "NOTE"
REMARK = "REMARK"

# audited project fields and the record type each one produces
AUDITED_FIELDS = {
    "planned_notes": NOTE,
    "next_notes": NOTE,
    "previous_remark": REMARK,
}

ANONYMOUS_EDITOR = {
    NOTE: "Anonymous editor",
    REMARK: "Anonymous supervisor",
}

def record_type_for(field_key: str) -> str:
    try:
        return AUDITED_FIELDS[field_key]
    except KeyError:
        raise AuditValidationError(
            f"Field '{field_key}' is not editable. Use one of: {', '.join(AUDITED_FIELDS)}."
        )

def record_field_edit(
    db: Session,
    project_id: int,
    field_key: str,
    new_value: Optional[str],
    editor: Identity,
) -> Optional[AuditRecord]:
    """
    Stores a new notes/remark value and appends its audit record.

    An unchanged value is not auditable: nothing is written and None is
    returned. Both writes share one transaction, so a failure leaves neither
    the field change nor the record behind.
    """
    record_type = record_type_for(field_key)
    new_value = new_value if new_value is not None else ""

    project = get_project(db, project_id)
    old_value = getattr(project, field_key)
    if (old_value or "") == new_value:
        logger.info(f"No change to {field_key} of project {project_id}; nothing recorded")
        return None

    setattr(project, field_key, new_value)
    record = AuditRecord(
        project_id=project.id,
        record_type=record_type,
        field=field_key,
        old_value=old_value,
        new_value=new_value,
        editor_id=editor.user_id,
        editor_name=editor.display_name or ANONYMOUS_EDITOR[record_type],
    )
    try:
        record.seq = next_history_seq(db)
        db.add(record)
        db.commit()
        db.refresh(record)
        logger.info(f"Recorded {record_type} edit of {field_key} on project {project_id} by {record.editor_id}")
        return record
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to save {field_key} edit for project {project_id}: {e}")
        raise WriteFailure(f"Could not save {field_key}; the field and its history were left unchanged.")

def find_audit_records(db: Session, project_id: int) -> List[AuditRecord]:
    """Unordered equality query."""
    try:
        return db.query(AuditRecord).filter(AuditRecord.project_id == project_id).all()
    except SQLAlchemyError as e:
        logger.error(f"Failed to load notes history for project {project_id}: {e}")
        raise ReadFailure(f"Could not load notes history for project {project_id}.")

def list_audit_records(db: Session, project_id: int) -> List[AuditRecord]:
    return newest_first(find_audit_records(db, project_id))
