"""
Galaksion API - Campaign operations
"""
from enum import IntEnum
from typing import Optional

from utils.logging_setup import get_logger
from utils.galaksion_api.exceptions import ApiError

logger = get_logger(service="galaksion_api", function="campaign_control")


class CampaignStatus(IntEnum):
    """Campaign status codes used by the API"""
    WORKING = 0
    STOPPED = 100

    @property
    def label(self) -> str:
        return self.name.lower()


def status_label(code) -> Optional[str]:
    """Human-readable status for a numeric code ("working"/"stopped"), None if unknown"""
    try:
        return CampaignStatus(int(code)).label
    except (TypeError, ValueError):
        return None


def update_campaign_status(client, campaign_id, status: CampaignStatus):
    """
    Change campaign status

    Args:
        client: GalaksionClient
        campaign_id: Campaign ID
        status: CampaignStatus.WORKING or CampaignStatus.STOPPED

    Returns:
        Decoded API response

    Raises:
        ApiError: the response reports `success: false` (or is null)
        TransportError: network failure or non-JSON body
    """
    status = CampaignStatus(status)
    logger.info(f"[ACTION] Updating campaign {campaign_id} status to {status.label}")

    response = client.patch(f"a/campaigns/status/{campaign_id}", {"status": int(status)})

    if response is None or (isinstance(response, dict) and response.get("success") is False):
        message = response.get("message") if isinstance(response, dict) else None
        raise ApiError(message or "Failed to update campaign status", response)

    logger.info(f"[OK] Campaign {campaign_id} status updated to {status.label}")
    return response
