"""
API client tests - query serialization, hosts and headers.
"""
import pytest
import requests

from utils.galaksion_api import (
    ApiError,
    AuthError,
    ExpiryError,
    GalaksionClient,
    TransportError,
    build_query_string,
    generate_analytics_session,
    response_error,
)
from conftest import FakeResponse


def test_query_string_encodes_scalars_and_lists():
    query = build_query_string({"a": "x y", "ids": [1, 2], "flag": True, "skip": None})
    assert query == "a=x%20y&ids[]=1&ids[]=2&flag=true"


def test_query_string_keeps_uri_component_safe_chars():
    assert build_query_string({"q": "a-b_c.d!e~f*g'h(i)"}) == "q=a-b_c.d!e~f*g'h(i)"
    assert build_query_string({"q": "a/b&c"}) == "q=a%2Fb%26c"


def test_query_string_empty():
    assert build_query_string({}) == ""
    assert build_query_string(None) == ""


def test_analytics_session_is_32_hex_chars():
    session_id = generate_analytics_session()
    assert len(session_id) == 32
    assert set(session_id) <= set("0123456789abcdef")


def test_statistics_get_goes_to_reporting_host(real_client, fake_session):
    fake_session.responses.append({"rows": []})

    real_client.get("statistics", {"limit": 50, "offset": 0})

    call = fake_session.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "https://ssp2-api.galaksion.com/statistics?limit=50&offset=0"
    assert call["headers"]["Authorization"] == "Bearer tok-123"
    assert len(call["headers"]["x-analytics-session"]) == 32
    assert call["headers"]["x-analytics-timestamp"].isdigit()
    assert call["timeout"] == 30
    assert call["json"] is None


def test_other_get_goes_to_management_host(real_client, fake_session):
    fake_session.responses.append({"result": {"items": []}})

    real_client.get("client/stats", {"page": 1})

    assert fake_session.calls[0]["url"] == "https://adv.clickadu.com/api/v1.0/client/stats?page=1"


def test_patch_sends_json_body_to_reporting_host(real_client, fake_session):
    fake_session.responses.append({"success": True})

    real_client.patch("a/campaigns/status/77", {"status": 100})

    call = fake_session.calls[0]
    assert call["method"] == "PATCH"
    assert call["url"] == "https://ssp2-api.galaksion.com/a/campaigns/status/77"
    assert call["json"] == {"status": 100}
    assert "x-analytics-session" in call["headers"]


def test_post_uses_bearer_and_json(real_client, fake_session):
    fake_session.responses.append({"ok": True})

    real_client.post("client/campaigns/5/excludeZones/", {"zoneIds": [1]})

    call = fake_session.calls[0]
    assert call["url"] == "https://adv.clickadu.com/api/v1.0/client/campaigns/5/excludeZones/"
    assert call["headers"] == {"Authorization": "Bearer tok-123", "Content-Type": "application/json"}


def test_token_is_read_on_every_request(config_store, fake_session):
    client = GalaksionClient(token_getter=lambda: config_store.get("token"), session=fake_session)
    fake_session.responses.extend([{}, {}])

    config_store.set("token", "first")
    client.get("statistics", {})
    config_store.set("token", "second")
    client.get("statistics", {})

    assert fake_session.calls[0]["headers"]["Authorization"] == "Bearer first"
    assert fake_session.calls[1]["headers"]["Authorization"] == "Bearer second"


def test_missing_token_raises_auth_error(fake_session):
    client = GalaksionClient(token_getter=lambda: "", session=fake_session)
    with pytest.raises(AuthError):
        client.get("statistics", {})
    assert fake_session.calls == []


def test_network_error_becomes_transport_error(real_client, fake_session):
    fake_session.responses.append(requests.ConnectionError("boom"))
    with pytest.raises(TransportError):
        real_client.get("statistics", {})


def test_non_json_body_becomes_transport_error(real_client, fake_session):
    fake_session.responses.append(FakeResponse(ValueError("no json"), status_code=502, text="<html>"))
    with pytest.raises(TransportError):
        real_client.get("statistics", {})


def test_http_error_status_with_json_body_is_returned(real_client, fake_session):
    fake_session.responses.append(FakeResponse({"code": "406"}, status_code=401))
    assert real_client.get("statistics", {}) == {"code": "406"}


@pytest.mark.parametrize("body, error_type, message", [
    ({"code": "406"}, ExpiryError, "Token expired"),
    ({"code": 406}, ExpiryError, "Token expired"),
    ({"error": {"message": "bad filter"}}, ApiError, "bad filter"),
    ({"error": {}}, None, None),
    ({"error": "denied"}, ApiError, "denied"),
    ({"errors": ["x"]}, ApiError, "API returned errors"),
    ({"success": False}, ApiError, "API request failed"),
    ({"success": False, "message": "nope"}, ApiError, "nope"),
    ({"rows": []}, None, None),
    (None, None, None),
])
def test_response_error_classification(body, error_type, message):
    error = response_error(body)
    if error_type is None:
        assert error is None
    else:
        assert type(error) is error_type
        assert str(error) == message


def test_put_adds_referer(real_client, fake_session):
    fake_session.responses.append({"success": True})

    real_client.put("campaigns/5", {"name": "x"})

    call = fake_session.calls[0]
    assert call["url"] == "https://adv.clickadu.com/api/v1.0/campaigns/5"
    assert call["headers"]["Referer"] == "https://adv.clickadu.com/campaigns"
    assert call["json"] == {"name": "x"}
