"""
CRUD operations for report tables
Includes: ReportRow, ReportMeta
"""
from typing import Iterable, List, Optional
from sqlalchemy.orm import Session

from database.models import ReportMeta, ReportRow

# Row 1 holds the header
FIRST_DATA_ROW = 2


def clear_report(db: Session, sheet: str) -> int:
    """Delete every data row of a report table. Returns number of rows removed."""
    deleted = db.query(ReportRow).filter(ReportRow.sheet == sheet).delete(synchronize_session=False)
    db.commit()
    return deleted


def write_report_rows(db: Session, sheet: str, rows: Iterable[dict]) -> int:
    """
    Replace the data region of a report table.

    Rows are written from row 2 in the given order. Returns number of rows written.
    """
    db.query(ReportRow).filter(ReportRow.sheet == sheet).delete(synchronize_session=False)

    count = 0
    for row_number, row in enumerate(rows, start=FIRST_DATA_ROW):
        db.add(ReportRow(sheet=sheet, row_number=row_number, **row))
        count += 1

    db.commit()
    return count


def get_report_rows(db: Session, sheet: str) -> List[ReportRow]:
    """Data rows of a report table ordered by row number"""
    return (
        db.query(ReportRow)
        .filter(ReportRow.sheet == sheet)
        .order_by(ReportRow.row_number)
        .all()
    )


def set_last_updated(db: Session, sheet: str, value: str) -> ReportMeta:
    """Set the "last updated" stamp of a report table"""
    meta = db.query(ReportMeta).filter(ReportMeta.sheet == sheet).first()
    if meta:
        meta.last_updated = value
    else:
        meta = ReportMeta(sheet=sheet, last_updated=value)
        db.add(meta)

    db.commit()
    db.refresh(meta)
    return meta


def get_last_updated(db: Session, sheet: str) -> Optional[str]:
    """Get the "last updated" stamp of a report table"""
    meta = db.query(ReportMeta).filter(ReportMeta.sheet == sheet).first()
    if meta:
        return meta.last_updated
    return None
