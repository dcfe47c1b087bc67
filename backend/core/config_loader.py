"""
Core config loader - Load run configuration from the config store
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from utils.logging_setup import get_logger
from utils.time_utils import get_local_time, parse_datetime

logger = get_logger(service="database", function="config")


# ===== Config store keys =====
ENABLE_AUTOMATION_KEY = "enable_automation"
EMAIL_KEY = "email"
PASSWORD_KEY = "password"
CAMPAIGN_MIN_TIME_KEY = "campaign_min_time"
CAMPAIGN_MAX_TIME_KEY = "campaign_max_time"
TOTAL_PAGES_KEY = "total_pages"
MAX_CPA_KEY = "max_cpa"
AUTOENABLE_CAMPAIGN_KEY = "autoenable_campaign"

DEFAULT_TOTAL_PAGES = 1
DEFAULT_MAX_CPA = 0.0


@dataclass
class AppConfig:
    """
    Configuration for one run, read once from the config store.

    The token and its expiry are read by TokenManager directly.
    """
    enable_automation: str = "n"
    email: str = ""
    password: str = ""
    campaign_min_time: Optional[datetime] = None
    campaign_max_time: Optional[datetime] = None
    total_pages: int = DEFAULT_TOTAL_PAGES
    max_cpa: float = DEFAULT_MAX_CPA
    autoenable_campaign: Optional[datetime] = None

    @property
    def automation_enabled(self) -> bool:
        return self.enable_automation == "y"

    def report_max_time(self) -> datetime:
        """End of the default window; falls back to now when unset"""
        return self.campaign_max_time or get_local_time()

    def report_min_time(self) -> datetime:
        """Start of the default window; falls back to the end when unset"""
        return self.campaign_min_time or self.report_max_time()


def _as_int(key: str, value, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError):
        logger.warning(f"Config '{key}' is not a number: {value!r}, using {default}")
        return default


def _as_float(key: str, value, default: float) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning(f"Config '{key}' is not a number: {value!r}, using {default}")
        return default


def _as_datetime(key: str, value) -> Optional[datetime]:
    try:
        return parse_datetime(value)
    except (TypeError, ValueError):
        logger.warning(f"Config '{key}' is not a date: {value!r}")
        return None


def load_config(config_store) -> AppConfig:
    """
    Load complete run configuration.

    Args:
        config_store: store with a `get(key)` method

    Returns:
        AppConfig with typed values
    """
    get = config_store.get

    return AppConfig(
        enable_automation=str(get(ENABLE_AUTOMATION_KEY) or "n").strip().lower(),
        email=get(EMAIL_KEY) or "",
        password=get(PASSWORD_KEY) or "",
        campaign_min_time=_as_datetime(CAMPAIGN_MIN_TIME_KEY, get(CAMPAIGN_MIN_TIME_KEY)),
        campaign_max_time=_as_datetime(CAMPAIGN_MAX_TIME_KEY, get(CAMPAIGN_MAX_TIME_KEY)),
        total_pages=_as_int(TOTAL_PAGES_KEY, get(TOTAL_PAGES_KEY), DEFAULT_TOTAL_PAGES),
        max_cpa=_as_float(MAX_CPA_KEY, get(MAX_CPA_KEY), DEFAULT_MAX_CPA),
        autoenable_campaign=_as_datetime(AUTOENABLE_CAMPAIGN_KEY, get(AUTOENABLE_CAMPAIGN_KEY)),
    )
