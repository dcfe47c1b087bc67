"""
Core campaign control - pause and resume campaigns by ID
"""
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple

from utils.logging_setup import get_logger
from utils.galaksion_api import CampaignStatus, GalaksionError, update_campaign_status

logger = get_logger(service="galaksion_api", function="campaigns")

# Sheet formula error seen in an empty lookup column
NOT_AVAILABLE = "#N/A"


@dataclass
class CampaignOpResult:
    """Result of one status change"""
    campaign_id: str
    success: bool
    result: Any = None
    error: Optional[str] = None


def parse_campaign_ids(values: Optional[Iterable]) -> List[str]:
    """
    Campaign IDs from a single-column list.

    An empty list, an empty first cell or a "#N/A" first cell means
    "nothing to do". Otherwise values are stripped and blanks dropped.
    """
    values = list(values or [])
    if not values:
        return []

    first = values[0]
    if first is None or str(first).strip() in ("", NOT_AVAILABLE):
        return []

    ids = []
    for value in values:
        if value is None:
            continue
        value = str(value).strip()
        if value:
            ids.append(value)
    return ids


def partition_results(results: List[CampaignOpResult]) -> Tuple[List[CampaignOpResult], List[CampaignOpResult]]:
    """Split results into (successes, failures)"""
    successes = [r for r in results if r.success]
    failures = [r for r in results if not r.success]
    return successes, failures


class CampaignController:
    """Sequential status changes; one failing ID never stops the rest"""

    def __init__(self, client, log_sink=None):
        self.client = client
        self.log_sink = log_sink

    def _write_log(self, message: str):
        if self.log_sink is not None:
            self.log_sink.write(message)

    def set_status(self, campaign_id, status) -> CampaignOpResult:
        """
        Change one campaign's status; errors are captured in the result.

        Raises:
            ValueError: status is not a CampaignStatus code
        """
        status = CampaignStatus(status)
        campaign_id = str(campaign_id)
        self._write_log(f"Updating campaign {campaign_id} status to {status.label}")

        try:
            response = update_campaign_status(self.client, campaign_id, status)
        except GalaksionError as e:
            logger.error(f"[ERROR] Campaign {campaign_id} -> {status.label}: {e}")
            self._write_log(f"⚠️ Error updating campaign {campaign_id} status: {e}")
            return CampaignOpResult(campaign_id=campaign_id, success=False, error=str(e))

        logger.info(f"[OK] Campaign {campaign_id} -> {status.label}")
        self._write_log(f"✅ Campaign {campaign_id} status updated to {status.label}")
        return CampaignOpResult(campaign_id=campaign_id, success=True, result=response)

    def pause(self, campaign_id) -> CampaignOpResult:
        return self.set_status(campaign_id, CampaignStatus.STOPPED)

    def resume(self, campaign_id) -> CampaignOpResult:
        return self.set_status(campaign_id, CampaignStatus.WORKING)

    def _apply_all(self, campaign_ids: Iterable, status: CampaignStatus) -> List[CampaignOpResult]:
        campaign_ids = list(campaign_ids or [])
        if not campaign_ids:
            return []

        logger.info(f"[ACTION] Setting {len(campaign_ids)} campaigns to {status.label}")
        results = [self.set_status(campaign_id, status) for campaign_id in campaign_ids]

        successes, failures = partition_results(results)
        logger.info(f"[INFO] {status.label}: {len(successes)} ok, {len(failures)} failed")
        return results

    def pause_all(self, campaign_ids: Iterable) -> List[CampaignOpResult]:
        return self._apply_all(campaign_ids, CampaignStatus.STOPPED)

    def resume_all(self, campaign_ids: Iterable) -> List[CampaignOpResult]:
        return self._apply_all(campaign_ids, CampaignStatus.WORKING)
