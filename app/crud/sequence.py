#app/crud/sequence.py
from sqlalchemy.orm import Session

from app.models.sequence import HistorySequence

def next_history_seq(db: Session) -> int:
    """
    Allocates the next timeline position inside the caller's transaction.
    A rollback releases it together with the row that would have used it.
    """
    marker = HistorySequence()
    db.add(marker)
    db.flush()
    return marker.id
