"""
Galaksion API - Statistics requests
"""
import json
from typing import Any, Dict, List

from utils.logging_setup import get_logger
from utils.time_utils import DateRange
from utils.galaksion_api.core import STATISTICS_PATH

logger = get_logger(service="galaksion_api", function="report")

PAGE_SIZE = 50

STATISTICS_ORDER = [
    {
        "field": "campaign",
        "direction": "DESC",
    },
]


def build_statistics_filters(date_range: DateRange) -> Dict[str, Any]:
    """Filter payload for a campaign-grouped statistics query over whole local days"""
    return {
        "groups": [
            {
                "label": "Campaign",
                "value": "campaign",
            },
        ],
        "dateFrom": date_range.start_string,
        "dateTo": date_range.end_string,
        "geo": [],
        "cities": [],
        "platforms": "",
        "os": [],
        "formats": [],
        "browsers": [],
        "connections": "",
        "campaigns": [],
        "zones": "",
        "isp": "",
        "cpaTests": "",
        "trafficQualityPresets": [],
    }


def get_statistics_page(
    client,
    filters: Dict[str, Any],
    page: int,
    order: List[Dict[str, str]] = None,
    limit: int = PAGE_SIZE,
):
    """
    Request one page of statistics.

    Returns the decoded body as-is; callers inspect it for rows, errors and
    the expiry code.
    """
    params = {
        "filters": json.dumps(filters),
        "order": json.dumps(order or STATISTICS_ORDER),
        "limit": limit,
        "offset": page * limit,
        "delta": None,
    }
    logger.debug(f"Statistics page {page} (offset {page * limit}), {filters['dateFrom']} - {filters['dateTo']}")
    return client.get(STATISTICS_PATH, params)
