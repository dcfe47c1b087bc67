"""
Galaksion API - client package

This package provides the transport, token lifecycle and per-resource
operations for the Galaksion / Clickadu advertiser API.
"""

# Errors
from utils.galaksion_api.exceptions import (
    GalaksionError,
    AuthError,
    TransportError,
    ApiError,
    ExpiryError,
    ValidationError,
)

# Core transport and constants
from utils.galaksion_api.core import (
    REPORTING_BASE_URL,
    MANAGEMENT_BASE_URL,
    AUTH_URL,
    REFRESH_URL,
    EXPIRY_CODE,
    GalaksionClient,
    build_query_string,
    generate_analytics_session,
    response_error,
)

# Token lifecycle
from utils.galaksion_api.auth import (
    TOKEN_LIFETIME,
    AuthResult,
    TokenManager,
)

# Statistics
from utils.galaksion_api.stats import (
    PAGE_SIZE,
    STATISTICS_ORDER,
    build_statistics_filters,
    get_statistics_page,
)

# Campaign operations
from utils.galaksion_api.campaigns import (
    CampaignStatus,
    status_label,
    update_campaign_status,
)

# Zones
from utils.galaksion_api.zones import (
    ZoneRecord,
    zone_cpa,
    get_zones,
    exclude_zones,
)


__all__ = [
    # Errors
    "GalaksionError",
    "AuthError",
    "TransportError",
    "ApiError",
    "ExpiryError",
    "ValidationError",
    # Core
    "REPORTING_BASE_URL",
    "MANAGEMENT_BASE_URL",
    "AUTH_URL",
    "REFRESH_URL",
    "EXPIRY_CODE",
    "GalaksionClient",
    "build_query_string",
    "generate_analytics_session",
    "response_error",
    # Token
    "TOKEN_LIFETIME",
    "AuthResult",
    "TokenManager",
    # Statistics
    "PAGE_SIZE",
    "STATISTICS_ORDER",
    "build_statistics_filters",
    "get_statistics_page",
    # Campaigns
    "CampaignStatus",
    "status_label",
    "update_campaign_status",
    # Zones
    "ZoneRecord",
    "zone_cpa",
    "get_zones",
    "exclude_zones",
]
