"""
Zone statistics tests.
"""
import pytest

from utils.galaksion_api import ValidationError, get_zones, zone_cpa
from conftest import FakeClient


def test_get_zones_request_and_records():
    client = FakeClient(get=[{"result": {"items": [
        {"zoneId": 501, "spent": "4.5", "impressions": 900, "conversions": 3},
        {"zoneId": 502, "spent": 2, "impressions": 100, "conversions": 0},
    ]}}])

    zones = get_zones(client, "3410554", "2025-06-01", "2025-06-04")

    verb, path, params = client.calls[0]
    assert path == "client/stats"
    assert params == {
        "dateFrom": "2025-06-01",
        "dateTill": "2025-06-04",
        "groupBy": "zone_id",
        "orderBy": "impressions",
        "orderDest": "desc",
        "page": 1,
        "perPage": 100,
        "campaign_id": ["3410554"],
    }
    assert [(z.id, z.spent, z.impressions, z.conversions) for z in zones] == [
        ("501", 4.5, 900, 3),
        ("502", 2.0, 100, 0),
    ]
    assert zones[0].cpa == 1.5
    assert zones[1].cpa == 2.0


def test_get_zones_malformed_response():
    client = FakeClient(get=[{"result": {}}])
    with pytest.raises(ValidationError):
        get_zones(client, "1", "2025-06-01", "2025-06-02")


def test_zone_cpa():
    assert zone_cpa(10.0, 4) == 2.5
    assert zone_cpa(10.0, 0) == 10.0
