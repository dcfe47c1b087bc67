"""
CRUD operations for the activity log
"""
from typing import List
from sqlalchemy.orm import Session

from database.models import LogEntry

# Trimming starts once the table (header row included) has this many rows
TRIM_THRESHOLD_ROWS = 5
KEEP_LAST_ROWS = 2


def append_log(db: Session, timestamp: str, message: str) -> LogEntry:
    """Append one log row"""
    entry = LogEntry(timestamp=timestamp, message=message)
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def get_logs(db: Session) -> List[LogEntry]:
    """All log rows, oldest first"""
    return db.query(LogEntry).order_by(LogEntry.id).all()


def trim_logs(db: Session) -> int:
    """
    Keep only the last two log rows.

    The header counts as the first row of the table, so nothing is deleted
    while the table holds fewer than 5 rows (4 entries).

    Returns:
        Number of rows deleted
    """
    total_rows = db.query(LogEntry).count() + 1
    if total_rows < TRIM_THRESHOLD_ROWS:
        return 0

    keep_ids = [
        entry_id for (entry_id,) in
        db.query(LogEntry.id).order_by(LogEntry.id.desc()).limit(KEEP_LAST_ROWS).all()
    ]
    deleted = (
        db.query(LogEntry)
        .filter(LogEntry.id.notin_(keep_ids))
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted
