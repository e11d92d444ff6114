"""Tests for the DevTools target locator and status requester."""

from __future__ import annotations

import json

import httpx
import pytest

from packages.core.horn.errors import TransportFailure
from packages.core.horn.scheduler import PollScheduler
from packages.core.horn.types import TransportError
from packages.core.target.devtools import (
    HORN_ALERT_EXPRESSION,
    HUNT_TIMER_EXPRESSION,
    READY_STATE_EXPRESSION,
    DevToolsClient,
    DevToolsStatusRequester,
    DevToolsTargetLocator,
    DevToolsVisualAlert,
    matches,
)
from packages.shared.config import MOUSEHUNT_URL_PATTERNS, AppConfig

TABS = [
    {"id": "a", "type": "page", "url": "https://example.com/", "webSocketDebuggerUrl": "ws://h/a"},
    {"id": "sw", "type": "service_worker", "url": "https://www.mousehuntgame.com/sw.js",
     "webSocketDebuggerUrl": "ws://h/sw"},
    {"id": "mh", "type": "page", "url": "https://www.mousehuntgame.com/camp.php", "title": "MouseHunt",
     "webSocketDebuggerUrl": "ws://h/mh"},
]


class FakeSocket:
    """Answers Runtime.evaluate with canned values keyed by expression."""

    def __init__(self, values: dict, calls: list) -> None:
        self._values = values
        self._calls = calls
        self._pending = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def send(self, message: str) -> None:
        request = json.loads(message)
        expression = request["params"]["expression"]
        self._calls.append(expression)
        value = self._values[expression]
        if isinstance(value, Exception):
            raise value
        # An unrelated event arrives before the reply
        self._pending.append({"method": "Runtime.consoleAPICalled"})
        self._pending.append({"id": request["id"], "result": {"result": {"type": "string", "value": value}}})

    def recv(self, timeout=None) -> str:
        return json.dumps(self._pending.pop(0))


def make_client(values: dict, calls: list, tabs=TABS, activated=None) -> DevToolsClient:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/json/list":
            return httpx.Response(200, json=tabs, request=request)
        if request.url.path.startswith("/json/activate/"):
            if activated is not None:
                activated.append(request.url.path.rsplit("/", 1)[1])
            return httpx.Response(200, text="Target activated", request=request)
        return httpx.Response(404, request=request)

    http = httpx.Client(base_url="http://devtools.test", transport=httpx.MockTransport(handler))
    return DevToolsClient(http=http, ws_connect=lambda url, **kw: FakeSocket(values, calls))


def test_patterns_match_both_game_hosts() -> None:
    assert matches("https://www.mousehuntgame.com/camp.php", MOUSEHUNT_URL_PATTERNS)
    assert matches("https://apps.facebook.com/mousehunt/", MOUSEHUNT_URL_PATTERNS)
    assert not matches("https://www.mousehuntgame.org/", MOUSEHUNT_URL_PATTERNS)


def test_locator_picks_first_matching_page() -> None:
    calls: list = []
    client = make_client({READY_STATE_EXPRESSION: "complete"}, calls)
    target = DevToolsTargetLocator(client, process_check=lambda: True).find(MOUSEHUNT_URL_PATTERNS)
    assert target is not None
    assert (target.id, target.websocket_url, target.complete) == ("mh", "ws://h/mh", True)
    assert calls == [READY_STATE_EXPRESSION]


def test_locator_marks_loading_tab() -> None:
    client = make_client({READY_STATE_EXPRESSION: "interactive"}, [])
    target = DevToolsTargetLocator(client, process_check=lambda: True).find(MOUSEHUNT_URL_PATTERNS)
    assert target is not None and target.complete is False


def test_locator_without_browser_skips_devtools() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    http = httpx.Client(base_url="http://devtools.test", transport=httpx.MockTransport(handler))
    client = DevToolsClient(http=http)
    assert DevToolsTargetLocator(client, process_check=lambda: False).find(MOUSEHUNT_URL_PATTERNS) is None


def test_locator_treats_unreachable_endpoint_as_absent() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    http = httpx.Client(base_url="http://devtools.test", transport=httpx.MockTransport(handler))
    client = DevToolsClient(http=http)
    assert DevToolsTargetLocator(client, process_check=lambda: True).find(MOUSEHUNT_URL_PATTERNS) is None


def test_locator_returns_none_without_match() -> None:
    client = make_client({}, [], tabs=TABS[:1])
    assert DevToolsTargetLocator(client, process_check=lambda: True).find(MOUSEHUNT_URL_PATTERNS) is None


def test_requester_returns_timer_text() -> None:
    calls: list = []
    client = make_client({READY_STATE_EXPRESSION: "complete", HUNT_TIMER_EXPRESSION: "12:34"}, calls)
    target = DevToolsTargetLocator(client, process_check=lambda: True).find(MOUSEHUNT_URL_PATTERNS)
    assert DevToolsStatusRequester(client).request_status(target) == "12:34"


def test_requester_wraps_socket_errors() -> None:
    client = make_client({READY_STATE_EXPRESSION: "complete", HUNT_TIMER_EXPRESSION: OSError("closed")}, [])
    target = DevToolsTargetLocator(client, process_check=lambda: True).find(MOUSEHUNT_URL_PATTERNS)
    with pytest.raises(TransportFailure):
        DevToolsStatusRequester(client).request_status(target)


def test_visual_alert_activates_tab_then_alerts() -> None:
    calls: list = []
    activated: list = []
    client = make_client({READY_STATE_EXPRESSION: "complete", HORN_ALERT_EXPRESSION: 1}, calls, activated=activated)
    target = DevToolsTargetLocator(client, process_check=lambda: True).find(MOUSEHUNT_URL_PATTERNS)
    DevToolsVisualAlert(client).show(target, bring_to_foreground=True)
    assert activated == ["mh"]
    assert calls[-1] == HORN_ALERT_EXPRESSION


def test_silent_tab_is_reported_as_transport_error() -> None:
    calls: list = []
    client = make_client({READY_STATE_EXPRESSION: OSError("closed"), HUNT_TIMER_EXPRESSION: OSError("closed")}, calls)
    locator = DevToolsTargetLocator(client, process_check=lambda: True)
    target = locator.find(MOUSEHUNT_URL_PATTERNS)
    assert target is not None and target.complete is True

    sched = PollScheduler(
        config_provider=AppConfig,
        locator=locator,
        requester=DevToolsStatusRequester(client),
    )
    assert sched.run_cycle().state == TransportError()
    assert calls[-1] == HUNT_TIMER_EXPRESSION
