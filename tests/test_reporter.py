import json
from io import BytesIO
from urllib.error import HTTPError, URLError

import pytest

from agent.tracking.snapshot_cache import SnapshotCache
from agent.transport import http_transport
from agent.transport.http_transport import Reporter


class FakeResponse:
    def __init__(self, status=200):
        self.status = status

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class Calls(list):
    pass


@pytest.fixture
def capture(monkeypatch):
    calls = Calls()
    calls.status = 200

    def fake_urlopen(req, timeout=None):
        calls.append((req, timeout))
        return FakeResponse(calls.status)

    monkeypatch.setattr(http_transport, "urlopen", fake_urlopen)
    return calls


def test_empty_cache_skips_cycle(agent_config, capture):
    reporter = Reporter(SnapshotCache(agent_config), agent_config, hostname="h1")

    assert reporter.report_once() is False
    assert capture == []
    assert reporter.failed_count == 0


def test_posts_envelope_to_collector(agent_config, capture):
    cache = SnapshotCache(agent_config)
    cache.refresh()
    reporter = Reporter(cache, agent_config, hostname="h1")

    assert reporter.report_once() is True
    assert reporter.sent_count == 1

    [(req, timeout)] = capture
    assert req.full_url == "http://127.0.0.1:8080/api/agent/data"
    assert req.get_method() == "POST"
    assert req.get_header("Content-type") == "application/json"
    assert timeout == agent_config.request_timeout

    body = json.loads(req.data)
    assert body["agent_id"] == "h1"
    assert body["hostname"] == "h1"
    assert body["timestamp"].endswith("+00:00")
    assert set(body["data"]) == {"processes", "network", "system"}
    assert body["data"]["network"][0] == {
        "protocol": "tcp",
        "local_addr": "127.0.0.1",
        "local_port": 8080,
        "remote_addr": "0.0.0.0",
        "remote_port": 0,
        "state": "LISTEN",
        "pid": 0,
    }
    assert body["data"]["system"]["uptime"] == "1h2m3s"


def test_non_200_counts_as_failure(agent_config, capture):
    capture.status = 202
    cache = SnapshotCache(agent_config)
    cache.refresh()
    reporter = Reporter(cache, agent_config, hostname="h1")

    assert reporter.report_once() is False
    assert reporter.failed_count == 1


@pytest.mark.parametrize(
    "error",
    [
        URLError("connection refused"),
        HTTPError("http://x", 500, "boom", {}, BytesIO(b"")),
        TimeoutError("timed out"),
    ],
)
def test_transport_errors_abandon_cycle(agent_config, monkeypatch, error):
    calls = []

    def failing_urlopen(req, timeout=None):
        calls.append(req)
        raise error

    monkeypatch.setattr(http_transport, "urlopen", failing_urlopen)
    cache = SnapshotCache(agent_config)
    cache.refresh()
    reporter = Reporter(cache, agent_config, hostname="h1")

    assert reporter.report_once() is False
    assert reporter.report_once() is False
    # no retries inside a cycle
    assert len(calls) == 2
    assert reporter.failed_count == 2
