"""
Galaksion Monitor Core Package

Statistics reporting and campaign control built on the Galaksion API client.
"""
from core.config_loader import AppConfig, load_config
from core.statistics import (
    CampaignRecord,
    FetchResult,
    StatisticsPipeline,
    compute_cpa,
    normalize_row,
)
from core.campaign_control import (
    CampaignOpResult,
    CampaignController,
    parse_campaign_ids,
    partition_results,
)

__all__ = [
    # Config
    "AppConfig",
    "load_config",
    # Statistics
    "CampaignRecord",
    "FetchResult",
    "StatisticsPipeline",
    "compute_cpa",
    "normalize_row",
    # Campaign control
    "CampaignOpResult",
    "CampaignController",
    "parse_campaign_ids",
    "partition_results",
]
