"""
CRUD operations - modular structure
Re-exports all functions so callers can use `from database import crud`
"""

# Settings (configuration store)
from database.crud.settings import (
    get_setting,
    set_setting,
    get_all_settings,
)

# Report tables
from database.crud.reports import (
    FIRST_DATA_ROW,
    clear_report,
    write_report_rows,
    get_report_rows,
    set_last_updated,
    get_last_updated,
)

# Activity log
from database.crud.logs import (
    append_log,
    get_logs,
    trim_logs,
)

# Campaign ID lists
from database.crud.campaign_lists import (
    get_campaign_list,
    replace_campaign_list,
)
