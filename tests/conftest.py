import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


def pytest_configure(config):
    # Add custom markers for test organization
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


@pytest.fixture(autouse=True)
def mock_env_vars(monkeypatch):
    """Set environment variables for tests.

    Keeps Settings deterministic regardless of the developer's
    environment or a local .env file.
    """
    monkeypatch.setenv("RESPONDER_DEFAULT_STATUS_CODE", "200")
    monkeypatch.setenv("RESPONDER_DEFAULT_ACCEPT", "*/*")
    monkeypatch.setenv("RESPONDER_FORMAT_PARAM", "format")
    monkeypatch.setenv("RESPONDER_EXTRA_CONTENT_TYPES", "{}")

    yield


class FakeFormatter:
    """Formatter collaborator recording its calls."""

    def __init__(self):
        self.calls = []

    def __call__(self, fmt, content, context, options, on_formatted):
        self.calls.append((fmt, content, dict(options)))
        on_formatted(f"{fmt}:{content!r}")


class FakeWriter:
    """Response writer collaborator recording written responses."""

    def __init__(self):
        self.responses = []

    def __call__(self, status_code, headers, body, callback=None):
        self.responses.append((status_code, headers, body))
        if callback:
            callback(body)


@pytest.fixture
def formatter():
    return FakeFormatter()


@pytest.fixture
def writer():
    return FakeWriter()


@pytest.fixture
def make_context(writer):
    """Build a RequestContext with recording collaborators."""
    from content_negotiation.responder import RequestContext

    def _make(responds_with=None, accept=None, params=None, **kwargs):
        headers = {"Accept": accept} if accept is not None else {}
        kwargs.setdefault("flash", lambda message, kind: None)
        kwargs.setdefault("redirect", lambda *args, **kw: None)
        return RequestContext(
            params=params or {},
            headers=headers,
            responds_with=responds_with if responds_with is not None else ["html", "json"],
            write_response=writer,
            **kwargs,
        )

    return _make
