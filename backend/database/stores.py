"""
Database-backed collaborators handed to the core components.

Each store opens a short session per call, the same way the scheduler
jobs do, so no session outlives a single operation.
"""
from typing import Any, Iterable, List, Optional

from database import crud
from utils.logging_setup import get_logger
from utils.time_utils import format_last_update

logger = get_logger(service="database")


class ConfigStore:
    """Key-value configuration (credentials, token, report parameters)"""

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def get(self, key: str, default: Any = None) -> Any:
        db = self.session_factory()
        try:
            value = crud.get_setting(db, key)
        finally:
            db.close()
        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        db = self.session_factory()
        try:
            crud.set_setting(db, key, value)
        finally:
            db.close()

    def all(self) -> dict:
        db = self.session_factory()
        try:
            return crud.get_all_settings(db)
        finally:
            db.close()


class ReportSink:
    """One report table: header in row 1, data from row 2, plus a "last updated" stamp"""

    def __init__(self, session_factory, sheet: str):
        self.session_factory = session_factory
        self.sheet = sheet

    def clear(self) -> int:
        db = self.session_factory()
        try:
            deleted = crud.clear_report(db, self.sheet)
        finally:
            db.close()
        logger.debug(f"[{self.sheet}] Cleared {deleted} rows")
        return deleted

    def write_rows(self, rows: Iterable[dict]) -> int:
        db = self.session_factory()
        try:
            written = crud.write_report_rows(db, self.sheet, rows)
        finally:
            db.close()
        logger.info(f"[{self.sheet}] Wrote {written} rows")
        return written

    def rows(self) -> List[dict]:
        db = self.session_factory()
        try:
            return [
                {
                    "row_number": r.row_number,
                    "campaign_id": r.campaign_id,
                    "title": r.title,
                    "impressions": r.impressions,
                    "rate": r.rate,
                    "spent": r.spent,
                    "conversions": r.conversions,
                    "cpa": r.cpa,
                    "status": r.status,
                    "max_cpa": r.max_cpa,
                }
                for r in crud.get_report_rows(db, self.sheet)
            ]
        finally:
            db.close()

    def set_last_updated(self, value: Optional[str] = None) -> str:
        value = value or format_last_update()
        db = self.session_factory()
        try:
            crud.set_last_updated(db, self.sheet, value)
        finally:
            db.close()
        return value

    def last_updated(self) -> Optional[str]:
        db = self.session_factory()
        try:
            return crud.get_last_updated(db, self.sheet)
        finally:
            db.close()


class LogSink:
    """Append-only activity log; every entry is mirrored to the application log"""

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def write(self, message: str) -> None:
        logger.info(f"[LOG] {message}")
        db = self.session_factory()
        try:
            crud.append_log(db, format_last_update(), message)
        finally:
            db.close()

    def entries(self) -> List[tuple]:
        db = self.session_factory()
        try:
            return [(e.timestamp, e.message) for e in crud.get_logs(db)]
        finally:
            db.close()

    def trim(self) -> int:
        db = self.session_factory()
        try:
            deleted = crud.trim_logs(db)
        finally:
            db.close()
        if deleted:
            logger.info(f"Log trimmed: {deleted} rows deleted")
        return deleted


class CampaignListSource:
    """Single-column campaign ID lists"""

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def values(self, list_name: str) -> List[Optional[str]]:
        db = self.session_factory()
        try:
            return crud.get_campaign_list(db, list_name)
        finally:
            db.close()

    def replace(self, list_name: str, values: Iterable) -> int:
        db = self.session_factory()
        try:
            return crud.replace_campaign_list(db, list_name, values)
        finally:
            db.close()
