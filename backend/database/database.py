"""
Database connection and session management
"""
import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from .models import Base

# Database URL from environment or default
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    "sqlite:///galaksion.db"
)

# Create engine
# NullPool: one short-lived connection per session, nothing kept between runs
engine = create_engine(
    DATABASE_URL,
    poolclass=NullPool,
    echo=False,  # Set to True for SQL query logging
)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None):
    """
    Initialize database - create all tables
    Call this on application startup
    """
    Base.metadata.create_all(bind=bind or engine)


def drop_db(bind=None):
    """
    Drop all tables - DANGEROUS! Only for development
    """
    Base.metadata.drop_all(bind=bind or engine)
