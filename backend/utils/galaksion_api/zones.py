"""
Galaksion API - Zone statistics and exclusion
"""
from dataclasses import dataclass
from typing import List

from utils.logging_setup import get_logger
from utils.galaksion_api.core import response_error
from utils.galaksion_api.exceptions import ValidationError

logger = get_logger(service="galaksion_api", function="zones")


@dataclass
class ZoneRecord:
    id: str
    spent: float
    impressions: int
    conversions: int
    cpa: float


def zone_cpa(spent: float, conversions: int) -> float:
    """Spend per conversion; total spend when there are no conversions"""
    if conversions > 0:
        return spent / conversions
    return spent


def get_zones(client, campaign_id, date_from: str, date_till: str, per_page: int = 100) -> List[ZoneRecord]:
    """
    Zone performance for one campaign.

    Args:
        client: GalaksionClient
        campaign_id: Campaign ID
        date_from: Start date (YYYY-MM-DD)
        date_till: End date (YYYY-MM-DD)
        per_page: Zones per request (first page only)

    Returns:
        list: ZoneRecord per zone, ordered by impressions descending
    """
    response = client.get("client/stats", {
        "dateFrom": date_from,
        "dateTill": date_till,
        "groupBy": "zone_id",
        "orderBy": "impressions",
        "orderDest": "desc",
        "page": 1,
        "perPage": per_page,
        "campaign_id": [campaign_id],
    })

    error = response_error(response)
    if error:
        raise error

    try:
        items = response["result"]["items"]
    except (KeyError, TypeError) as e:
        raise ValidationError(f"Unexpected zone statistics response for campaign {campaign_id}") from e

    zones = []
    for item in items:
        spent = float(item.get("spent") or 0)
        conversions = int(item.get("conversions") or 0)
        zones.append(ZoneRecord(
            id=str(item.get("zoneId")),
            spent=spent,
            impressions=int(item.get("impressions") or 0),
            conversions=conversions,
            cpa=zone_cpa(spent, conversions),
        ))

    logger.info(f"[INFO] Campaign {campaign_id}: {len(zones)} zones for {date_from} - {date_till}")
    return zones


def exclude_zones(client, campaign_id, zone_ids: List) -> dict:
    """Stop a campaign from serving on the given zones"""
    response = client.post(f"client/campaigns/{campaign_id}/excludeZones/", {"zoneIds": list(zone_ids)})

    error = response_error(response)
    if error:
        raise error

    logger.info(f"[OK] Campaign {campaign_id}: excluded {len(zone_ids)} zones")
    return response
