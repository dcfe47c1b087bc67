"""
Database models for Galaksion Campaign Monitor
"""
from sqlalchemy import Column, Integer, String, Float, DateTime, Text, JSON, UniqueConstraint
from sqlalchemy.orm import declarative_base
from utils.time_utils import get_local_time

Base = declarative_base()


class Settings(Base):
    """Application settings (key-value store)"""
    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(100), unique=True, nullable=False, index=True)
    value = Column(JSON, nullable=True)

    # Description
    description = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=get_local_time, nullable=False)
    updated_at = Column(DateTime, default=get_local_time, onupdate=get_local_time, nullable=False)

    def __repr__(self):
        return f"<Settings(key='{self.key}', value={self.value})>"


# ===== Report tables =====

class ReportRow(Base):
    """One campaign row of a report table; row 1 is the header so data starts at 2"""
    __tablename__ = "report_rows"

    id = Column(Integer, primary_key=True, index=True)
    sheet = Column(String(50), nullable=False, index=True)
    row_number = Column(Integer, nullable=False)

    # Columns in sheet order
    campaign_id = Column(String(50), nullable=False)
    title = Column(Text, nullable=False)
    impressions = Column(Integer, default=0)
    rate = Column(Float, default=0.0)
    spent = Column(Float, default=0.0)
    conversions = Column(Integer, default=0)
    cpa = Column(Float, default=0.0)
    status = Column(String(20), nullable=True)
    max_cpa = Column(Float, nullable=True)

    __table_args__ = (
        UniqueConstraint('sheet', 'row_number', name='uix_report_sheet_row'),
    )

    def __repr__(self):
        return f"<ReportRow(sheet='{self.sheet}', row={self.row_number}, campaign_id='{self.campaign_id}')>"


class ReportMeta(Base):
    """Per report table "last updated" stamp"""
    __tablename__ = "report_meta"

    id = Column(Integer, primary_key=True, index=True)
    sheet = Column(String(50), unique=True, nullable=False, index=True)
    last_updated = Column(String(30), nullable=True)  # MM/DD/YYYY HH:MM:SS, GMT+7

    def __repr__(self):
        return f"<ReportMeta(sheet='{self.sheet}', last_updated='{self.last_updated}')>"


# ===== Activity log =====

class LogEntry(Base):
    """Append-only activity log shown to operators"""
    __tablename__ = "log_entries"

    id = Column(Integer, primary_key=True, index=True)
    timestamp = Column(String(30), nullable=False)  # MM/DD/YYYY HH:MM:SS, GMT+7
    message = Column(Text, nullable=False)

    def __repr__(self):
        return f"<LogEntry(id={self.id}, timestamp='{self.timestamp}')>"


# ===== Campaign ID inputs =====

class CampaignListItem(Base):
    """Single-column campaign ID list (STOPCAMPAIGN, RERUNCAMPAIGN)"""
    __tablename__ = "campaign_list_items"

    id = Column(Integer, primary_key=True, index=True)
    list_name = Column(String(50), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    value = Column(String(100), nullable=True)

    __table_args__ = (
        UniqueConstraint('list_name', 'position', name='uix_campaign_list_position'),
    )

    def __repr__(self):
        return f"<CampaignListItem(list_name='{self.list_name}', position={self.position}, value='{self.value}')>"
