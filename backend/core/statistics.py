"""
Core statistics pipeline - fetch campaign statistics and replace a report table
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from utils.logging_setup import get_logger
from utils.time_utils import DateRange
from utils.campaign_names import extract_parameter, resolve_id, strip_id_prefix
from utils.galaksion_api import (
    EXPIRY_CODE,
    ApiError,
    ExpiryError,
    GalaksionError,
    ValidationError,
    build_statistics_filters,
    get_statistics_page,
    status_label,
)

logger = get_logger(service="galaksion_api", function="report")

# Titles carrying these markers are left out of reports
EXCLUDED_TITLE_MARKERS = ("STOP", "REST")
MAX_CPA_TAG = "MAX"


@dataclass
class CampaignRecord:
    """One normalized report row"""
    id: str
    title: str
    impressions: int
    rate: float
    spent: float
    conversions: int
    cpa: float
    status: Optional[str]
    max_cpa: float

    def to_row(self) -> Dict[str, Any]:
        """Column mapping for the report table"""
        return {
            "campaign_id": self.id,
            "title": self.title,
            "impressions": self.impressions,
            "rate": self.rate,
            "spent": self.spent,
            "conversions": self.conversions,
            "cpa": self.cpa,
            "status": self.status,
            "max_cpa": self.max_cpa,
        }


@dataclass
class FetchResult:
    """Outcome of one fetch-and-replace run"""
    written: int = 0
    error: Optional[GalaksionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def compute_cpa(spent: float, conversions: int) -> float:
    """
    Cost per action.

    With no conversions but some spend the whole spend is reported as the cpa.
    Suspect: this mixes "cost per action" with "total spend".
    """
    if spent > 0 and conversions > 0:
        return spent / conversions
    if conversions == 0 and spent > 0:
        return spent
    return 0.0


def _first_present(raw: Dict[str, Any], *keys, default=None):
    """First key whose value is neither missing, None nor empty"""
    for key in keys:
        value = raw.get(key)
        if value is not None and value != "":
            return value
    return default


def _number(value, cast, default=0):
    try:
        return cast(float(value))
    except (TypeError, ValueError):
        return default


def normalize_row(raw: Dict[str, Any], default_cap: float) -> Optional[CampaignRecord]:
    """
    Turn one statistics row into a CampaignRecord.

    Field precedence (first present wins):
        label:       campaign, name
        fallback id: campaignId, id
        impressions: impressions, impression, 0
        rate (CPM):  cpm, currentCpm, 0
        spent:       money, spent, 0
        conversions: conversions, conversion, 0

    Returns None for rows whose title carries a STOP or REST marker.

    Raises:
        ValidationError: the row is not an object, or neither the label nor
            the row yields a campaign id
    """
    if not isinstance(raw, dict):
        raise ValidationError(f"Statistics row is not an object: {raw!r}")

    label = str(_first_present(raw, "campaign", "name", default=""))
    campaign_id = resolve_id(label, _first_present(raw, "campaignId", "id"))
    if campaign_id is None:
        raise ValidationError(f"Cannot determine campaign id for row {label!r}")

    title = strip_id_prefix(label)
    if any(marker in title for marker in EXCLUDED_TITLE_MARKERS):
        return None

    cap = extract_parameter(title, MAX_CPA_TAG)
    max_cpa = float(cap) if cap is not None else default_cap

    conversions = _number(_first_present(raw, "conversions", "conversion", default=0), int)
    spent = _number(_first_present(raw, "money", "spent", default=0), float, 0.0)

    return CampaignRecord(
        id=campaign_id,
        title=title,
        impressions=_number(_first_present(raw, "impressions", "impression", default=0), int),
        rate=_number(_first_present(raw, "cpm", "currentCpm", default=0), float, 0.0),
        spent=spent,
        conversions=conversions,
        cpa=compute_cpa(spent, conversions),
        status=status_label(raw.get("status")),
        max_cpa=max_cpa,
    )


class StatisticsPipeline:
    """
    Paginated statistics fetch into one report table.

    Args:
        client: GalaksionClient (anything with `get(path, params)`)
        token_manager: TokenManager used when the server signals an expired token
        sink: ReportSink for the target table
        log_sink: LogSink for operator-facing messages
    """

    def __init__(self, client, token_manager, sink, log_sink):
        self.client = client
        self.token_manager = token_manager
        self.sink = sink
        self.log_sink = log_sink

    def _abort(self, error: GalaksionError) -> FetchResult:
        logger.error(f"[ERROR] [{self.sink.sheet}] Fetch aborted: {error}")
        self.log_sink.write(str(error))
        return FetchResult(written=0, error=error)

    def fetch_and_replace(self, date_range: DateRange, max_pages: int, default_cap: float) -> FetchResult:
        """
        Replace the report table with campaign statistics for a window.

        The table is cleared first. Records are collected over up to
        `max_pages` pages of 50 and written in one batch at the end, so an
        aborted fetch leaves the table empty rather than half-written.
        """
        self.sink.clear()

        filters = build_statistics_filters(date_range)
        records: List[CampaignRecord] = []
        rows_seen = 0

        logger.info(
            f"[INFO] [{self.sink.sheet}] Fetching statistics {filters['dateFrom']} - {filters['dateTo']}, "
            f"up to {max_pages} pages"
        )

        page = 0
        retried_page = None
        while page < max_pages:
            try:
                response = get_statistics_page(self.client, filters, page)
            except GalaksionError as e:
                return self._abort(e)

            if not isinstance(response, dict):
                response = {}

            if response.get("error"):
                error = response["error"]
                message = error.get("message") if isinstance(error, dict) else str(error)
                return self._abort(ApiError(message or "API Error occurred", response))

            if response.get("errors"):
                logger.error(f"[ERROR] API errors: {response['errors']}")
                return self._abort(ApiError("API returned errors", response))

            rows = response.get("rows")
            if not rows:
                if str(response.get("code", "")) == EXPIRY_CODE:
                    if retried_page == page:
                        return self._abort(ExpiryError("Token expired again after refresh", response))

                    logger.warning(f"[WARN] Token expired on page {page}, refreshing")
                    refreshed = self.token_manager.refresh_token()
                    if not refreshed.ok:
                        return self._abort(ExpiryError("Token expired. Failed to refresh token", response))

                    retried_page = page
                    continue

                self.log_sink.write(f"No campaign data found in response. Sheet:{self.sink.sheet}")
                if page == 0:
                    self.log_sink.write("No data at all for the specified date range")
                break

            for raw in rows:
                rows_seen += 1
                try:
                    record = normalize_row(raw, default_cap)
                except ValidationError as e:
                    logger.warning(f"[WARN] Skipping row: {e}")
                    continue

                if record is None:
                    continue

                records.append(record)
                logger.debug(
                    f"   Campaign {record.id}: spent={record.spent:.2f}, conversions={record.conversions}, "
                    f"cpa={record.cpa:.2f}, status={record.status}"
                )

            page += 1

        if records:
            written = self.sink.write_rows(record.to_row() for record in records)
        else:
            written = 0
            logger.info(f"[INFO] [{self.sink.sheet}] No campaigns to write")
            if rows_seen:
                self.log_sink.write("No campaigns found to write to sheet")

        logger.info(f"[OK] [{self.sink.sheet}] Rows received: {rows_seen}, campaigns written: {written}")
        return FetchResult(written=written)
