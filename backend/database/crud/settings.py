"""
CRUD operations for Settings (configuration key-value store)
"""
from typing import Any, Optional
from sqlalchemy.orm import Session

from utils.time_utils import get_local_time
from database.models import Settings


def get_setting(db: Session, key: str) -> Optional[Any]:
    """Get setting value by key"""
    setting = db.query(Settings).filter(Settings.key == key).first()
    if setting:
        return setting.value
    return None


def set_setting(db: Session, key: str, value: Any, description: Optional[str] = None) -> Settings:
    """Set or update setting"""
    setting = db.query(Settings).filter(Settings.key == key).first()
    if setting:
        setting.value = value
        setting.updated_at = get_local_time()
        if description:
            setting.description = description
    else:
        setting = Settings(key=key, value=value, description=description)
        db.add(setting)

    db.commit()
    db.refresh(setting)
    return setting


def get_all_settings(db: Session) -> dict:
    """Get all settings as dict"""
    settings = db.query(Settings).all()
    return {s.key: s.value for s in settings}
