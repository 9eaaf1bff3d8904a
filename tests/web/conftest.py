from types import SimpleNamespace

import pytest

from src.ops_dashboards.ops_dashboards.main import create_app


class StubService:
    """Returns canned values per method name; an Exception value is raised instead."""

    def __init__(self, **responses):
        self._responses = responses
        self.calls = []

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)

        def method(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            value = self._responses[name]
            if isinstance(value, Exception):
                raise value
            return value

        return method


@pytest.fixture
def stub():
    return StubService


@pytest.fixture
def services():
    return SimpleNamespace(
        conn=None,
        attendance_dashboard_service=StubService(),
        extra_cleaning_service=StubService(),
        production_service=StubService(),
        theft_service=StubService(),
        security_schedule_service=StubService(),
        thirdparty_schedule_service=StubService(),
        feedback_service=StubService(),
    )


@pytest.fixture
def app(monkeypatch, services):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=services)


@pytest.fixture
def client(app):
    c = app.test_client()
    with c.session_transaction() as s:
        s["user_id"] = 7
        s["name"] = "Reviewer"
    return c
