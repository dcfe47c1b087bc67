"""
Pytest configuration and fixtures.
"""
import os

import pytest

# In-memory database unless one is given explicitly
if not os.getenv("DATABASE_URL"):
    os.environ["DATABASE_URL"] = "sqlite://"

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import init_db, drop_db
from database.stores import CampaignListSource, ConfigStore, LogSink, ReportSink
from utils.galaksion_api import GalaksionClient, TokenManager
from scheduler.jobs import Services


class FakeResponse:
    """Minimal stand-in for requests.Response"""

    def __init__(self, payload=None, status_code=200, text=None):
        self.payload = payload
        self.status_code = status_code
        self.text = text if text is not None else ""

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeSession:
    """Records requests and answers them from a script of responses (or exceptions)"""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    def request(self, method, url, headers=None, json=None, timeout=None):
        self.calls.append({
            "method": method,
            "url": url,
            "headers": headers or {},
            "json": json,
            "timeout": timeout,
        })
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, FakeResponse):
            return response
        return FakeResponse(response)


class FakeClient:
    """API client double: scripted bodies per HTTP verb, calls recorded"""

    def __init__(self, get=None, patch=None, post=None):
        self.scripted = {
            "get": list(get or []),
            "patch": list(patch or []),
            "post": list(post or []),
        }
        self.calls = []

    def _answer(self, verb, path, payload):
        self.calls.append((verb, path, payload))
        script = self.scripted[verb]
        if not script:
            raise AssertionError(f"Unexpected {verb.upper()} {path}")
        response = script.pop(0)
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(path, payload)
        return response

    def get(self, path, params=None):
        return self._answer("get", path, params)

    def patch(self, path, body=None):
        return self._answer("patch", path, body)

    def post(self, path, body=None):
        return self._answer("post", path, body)


class FakeTokenManager:
    """Token manager double for the statistics pipeline"""

    def __init__(self, refresh_ok=True):
        self.refresh_ok = refresh_ok
        self.refresh_calls = 0

    def refresh_token(self):
        self.refresh_calls += 1
        return type("Result", (), {"ok": self.refresh_ok})()


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=test_engine)
    yield test_engine
    drop_db(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def config_store(session_factory):
    return ConfigStore(session_factory)


@pytest.fixture
def log_sink(session_factory):
    return LogSink(session_factory)


@pytest.fixture
def list_source(session_factory):
    return CampaignListSource(session_factory)


@pytest.fixture
def report_sink(session_factory):
    return ReportSink(session_factory, "TODAY")


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def token_manager(config_store, fake_session, log_sink):
    return TokenManager(config_store, session=fake_session, log_sink=log_sink)


def make_services(session_factory, config_store, log_sink, list_source, client, token_manager=None):
    token_manager = token_manager or TokenManager(config_store, session=FakeSession(), log_sink=log_sink)
    return Services(
        session_factory=session_factory,
        config_store=config_store,
        log_sink=log_sink,
        list_source=list_source,
        token_manager=token_manager,
        client=client,
    )


@pytest.fixture
def services_factory(session_factory, config_store, log_sink, list_source):
    """Build Services around a given client (and optionally a token manager)"""
    def factory(client, token_manager=None):
        return make_services(session_factory, config_store, log_sink, list_source, client, token_manager)
    return factory


@pytest.fixture
def real_client(config_store, fake_session):
    """GalaksionClient over the scripted session, token read from the config store"""
    config_store.set("token", "tok-123")
    return GalaksionClient(token_getter=lambda: config_store.get("token"), session=fake_session)
