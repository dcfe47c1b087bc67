"""
Scheduler jobs - One entry point per scheduled task

Every job loads a fresh AppConfig, does its work through the core components
and reports the outcome to the activity log. Failures are logged and turned
into a falsy return value; nothing propagates to the caller.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

import requests

from utils.logging_setup import get_logger
from utils.time_utils import get_local_time
from utils.galaksion_api import (
    GalaksionClient,
    GalaksionError,
    TokenManager,
    ZoneRecord,
    exclude_zones,
    get_zones,
)
from database import SessionLocal
from database.stores import CampaignListSource, ConfigStore, LogSink, ReportSink
from core.config_loader import ENABLE_AUTOMATION_KEY, load_config
from core.statistics import FetchResult, StatisticsPipeline
from core.campaign_control import CampaignController, parse_campaign_ids, partition_results
from scheduler.windows import REPORT_WINDOWS, build_date_range

logger = get_logger(service="scheduler", function="jobs")

STOP_LIST = "STOPCAMPAIGN"
RERUN_LIST = "RERUNCAMPAIGN"


@dataclass
class Services:
    """Collaborators shared by the jobs of one process"""
    session_factory: object
    config_store: ConfigStore
    log_sink: LogSink
    list_source: CampaignListSource
    token_manager: TokenManager
    client: GalaksionClient

    def report_sink(self, window: str) -> ReportSink:
        return ReportSink(self.session_factory, window)


def build_services(session_factory=None, http_session=None) -> Services:
    """
    Wire stores, token manager and API client around one session factory.

    The client reads the token from the config store on every request, so a
    refresh done by the token manager is picked up immediately.
    """
    session_factory = session_factory or SessionLocal
    http_session = http_session or requests.Session()

    config_store = ConfigStore(session_factory)
    log_sink = LogSink(session_factory)
    token_manager = TokenManager(config_store, session=http_session, log_sink=log_sink)
    client = GalaksionClient(token_getter=token_manager.get_token, session=http_session)

    return Services(
        session_factory=session_factory,
        config_store=config_store,
        log_sink=log_sink,
        list_source=CampaignListSource(session_factory),
        token_manager=token_manager,
        client=client,
    )


# ===== Token =====

def generate_token_job(services: Services) -> bool:
    """Log in with the stored credentials and persist the new token"""
    config = load_config(services.config_store)
    result = services.token_manager.generate_token(config.email, config.password)
    if not result.ok:
        return False

    expires_at = services.token_manager.store_token(result.token)
    logger.info(f"[OK] New token stored, valid until {expires_at.isoformat()}")
    return True


def refresh_token_job(services: Services) -> bool:
    return services.token_manager.refresh_token().ok


def _ensure_token(services: Services, config):
    """Refresh or regenerate an expired token before a job talks to the API"""
    result = services.token_manager.ensure_token(config.email, config.password)
    if not result.ok:
        logger.error(f"[ERROR] No usable token: {result.error}")
    return result


# ===== Reports =====

def run_report(services: Services, window: str, today=None) -> FetchResult:
    """
    Refresh one report table.

    The "last updated" stamp is written to the window's own table before the
    fetch starts, matching the moment the run was triggered.
    """
    window = window.upper()
    log = get_logger(service="scheduler", function=f"report_{window.lower()}")

    try:
        config = load_config(services.config_store)
        date_range = build_date_range(window, config, today=today)
    except ValueError as e:
        log.error(f"[ERROR] {e}")
        return FetchResult(error=GalaksionError(str(e)))

    auth = _ensure_token(services, config)
    if not auth.ok:
        return FetchResult(error=auth.error)

    sink = services.report_sink(window)
    stamp = sink.set_last_updated()
    log.info(f"[ACTION] {window}: {date_range.start_string} - {date_range.end_string} (updated {stamp})")

    pipeline = StatisticsPipeline(services.client, services.token_manager, sink, services.log_sink)
    try:
        return pipeline.fetch_and_replace(date_range, config.total_pages, config.max_cpa)
    except Exception as e:
        log.exception(f"[ERROR] {window}: unexpected failure: {e}")
        services.log_sink.write(f"⚠️ Error updating {window}: {e}")
        return FetchResult(error=GalaksionError(str(e)))


def run_all_reports(services: Services, windows: Iterable[str] = REPORT_WINDOWS, today=None) -> Dict[str, FetchResult]:
    """Refresh every window in turn; one failing window does not stop the rest"""
    results = {}
    for window in windows:
        results[window] = run_report(services, window, today=today)

    failed = [window for window, result in results.items() if not result.ok]
    if failed:
        logger.warning(f"[WARN] Reports failed: {', '.join(failed)}")
    else:
        logger.info(f"[OK] All {len(results)} reports refreshed")
    return results


# ===== Campaign control =====

def _report_outcome(services: Services, results, verb: str) -> None:
    successes, failures = partition_results(results)

    if successes:
        services.log_sink.write(
            f"{verb.capitalize()} campaigns : {', '.join(r.campaign_id for r in successes)}"
        )

    if failures:
        failed_ids = ", ".join(r.campaign_id for r in failures)
        errors = ", ".join(str(r.error) for r in failures)
        services.log_sink.write(f"Cant {verb} campaigns : {failed_ids} | Reason: {errors}")


def stop_campaigns(services: Services) -> Optional[list]:
    """Pause every campaign on the STOPCAMPAIGN list"""
    campaign_ids = parse_campaign_ids(services.list_source.values(STOP_LIST))
    if not campaign_ids:
        logger.info("[INFO] Stop list is empty")
        return []

    if not _ensure_token(services, load_config(services.config_store)).ok:
        return None

    try:
        results = CampaignController(services.client, services.log_sink).pause_all(campaign_ids)
    except Exception as e:
        logger.exception(f"[ERROR] Stopping campaigns failed: {e}")
        services.log_sink.write(f"⚠️ Error stopping campaigns: {e}")
        return None

    _report_outcome(services, results, "stop")
    return results


def rerun_campaigns(services: Services):
    """
    Resume every campaign on the RERUNCAMPAIGN list.

    Returns False without touching the API while automation is disabled.
    """
    config = load_config(services.config_store)
    if not config.automation_enabled:
        services.log_sink.write("Rerun disabled")
        return False

    campaign_ids = parse_campaign_ids(services.list_source.values(RERUN_LIST))
    if not campaign_ids:
        logger.info("[INFO] Rerun list is empty")
        return []

    if not _ensure_token(services, config).ok:
        return None

    try:
        results = CampaignController(services.client, services.log_sink).resume_all(campaign_ids)
    except Exception as e:
        logger.exception(f"[ERROR] Starting campaigns failed: {e}")
        services.log_sink.write(f"⚠️ Error starting campaigns: {e}")
        return None

    _report_outcome(services, results, "start")
    return results


def check_and_update_automation(services: Services, now: datetime = None) -> bool:
    """
    Switch automation on once the configured auto-enable moment has passed.

    Returns:
        True when the flag was changed by this call
    """
    config = load_config(services.config_store)
    enable_at = config.autoenable_campaign
    if config.automation_enabled or enable_at is None:
        return False

    if enable_at.tzinfo is not None:
        current = now or datetime.now(timezone.utc)
        if current.tzinfo is None:
            current = current.replace(tzinfo=timezone.utc)
    else:
        current = now or get_local_time()
        if current.tzinfo is not None:
            current = current.replace(tzinfo=None)

    if current <= enable_at:
        return False

    services.config_store.set(ENABLE_AUTOMATION_KEY, "y")
    services.log_sink.write(f"Automation enabled: {ENABLE_AUTOMATION_KEY} set to 'y'")
    return True


# ===== Housekeeping =====

def clear_log_rows(services: Services) -> int:
    return services.log_sink.trim()


# ===== Zones =====

def get_campaign_zones(services: Services, campaign_id, date_from: str, date_till: str) -> List[ZoneRecord]:
    """Zone statistics for one campaign; empty list on failure"""
    try:
        zones = get_zones(services.client, campaign_id, date_from, date_till)
    except GalaksionError as e:
        logger.error(f"[ERROR] Zones for campaign {campaign_id}: {e}")
        return []

    for zone in zones:
        logger.info(
            f"   Zone {zone.id}: spent={zone.spent:.2f}, impressions={zone.impressions}, "
            f"conversions={zone.conversions}, cpa={zone.cpa:.2f}"
        )
    return zones


def exclude_campaign_zones(services: Services, campaign_id, zone_ids: Iterable) -> bool:
    zone_ids = [z for z in zone_ids if str(z).strip()]
    if not zone_ids:
        return False

    try:
        exclude_zones(services.client, campaign_id, zone_ids)
    except GalaksionError as e:
        logger.error(f"[ERROR] Excluding zones for campaign {campaign_id}: {e}")
        services.log_sink.write(f"⚠️ Cant exclude zones for campaign {campaign_id}: {e}")
        return False

    services.log_sink.write(f"Excluded zones for campaign {campaign_id} : {', '.join(map(str, zone_ids))}")
    return True
