"""
Galaksion Monitor Scheduler Package

Job entry points and report windows; triggered from the command line.
"""
from scheduler.windows import REPORT_WINDOWS, build_date_range
from scheduler.jobs import (
    Services,
    build_services,
    generate_token_job,
    refresh_token_job,
    run_report,
    run_all_reports,
    stop_campaigns,
    rerun_campaigns,
    check_and_update_automation,
    clear_log_rows,
    get_campaign_zones,
    exclude_campaign_zones,
)

__all__ = [
    # Windows
    "REPORT_WINDOWS",
    "build_date_range",
    # Wiring
    "Services",
    "build_services",
    # Jobs
    "generate_token_job",
    "refresh_token_job",
    "run_report",
    "run_all_reports",
    "stop_campaigns",
    "rerun_campaigns",
    "check_and_update_automation",
    "clear_log_rows",
    "get_campaign_zones",
    "exclude_campaign_zones",
]
