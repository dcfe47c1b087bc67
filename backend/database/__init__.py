"""
Database package
"""
from .database import engine, SessionLocal, init_db, drop_db
from .models import (
    Base,
    Settings,
    ReportRow,
    ReportMeta,
    LogEntry,
    CampaignListItem,
)

# Allow `from database import crud`
from database import crud

__all__ = [
    # Database
    "engine",
    "SessionLocal",
    "init_db",
    "drop_db",
    # Models
    "Base",
    "Settings",
    "ReportRow",
    "ReportMeta",
    "LogEntry",
    "CampaignListItem",
    # CRUD module
    "crud",
]
