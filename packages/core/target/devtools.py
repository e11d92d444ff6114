"""
Chrome DevTools Protocol collaborators.

The browser must be started with --remote-debugging-port (9222 by default).
Tabs are listed over HTTP; page JavaScript is evaluated over each tab's
DevTools websocket with Runtime.evaluate.
"""

from __future__ import annotations

import itertools
import json
import logging
from fnmatch import fnmatchcase
from typing import Any, Callable, List, Optional, Sequence

import httpx
from websockets.exceptions import WebSocketException
from websockets.sync.client import connect

from packages.core.horn.errors import TransportFailure

from .process_detector import browser_running
from .types import StatusRequester, Target, TargetLocator

log = logging.getLogger(__name__)

# Same replies the page's own timer widget uses
HUNT_TIMER_EXPRESSION = """
(() => {
    const u = window.user;
    if (!u || !u.user_id) { return "Logged out"; }
    if (u.has_puzzle) { return "King's Reward"; }
    const timer = document.getElementById("huntTimer");
    return timer ? timer.textContent.trim() : null;
})()
"""

READY_STATE_EXPRESSION = "document.readyState"

HORN_ALERT_EXPRESSION = "setTimeout(() => alert('MouseHunt Horn is ready!!!'), 0)"


class DevToolsClient:
    def __init__(
        self,
        base_url: str = "http://127.0.0.1:9222",
        http: Optional[httpx.Client] = None,
        timeout: float = 5.0,
        ws_connect: Callable[..., Any] = connect,
    ) -> None:
        self._http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self._timeout = timeout
        self._ws_connect = ws_connect
        self._ids = itertools.count(1)

    def close(self) -> None:
        self._http.close()

    def list_tabs(self) -> List[dict]:
        try:
            resp = self._http.get("/json/list")
            resp.raise_for_status()
            return list(resp.json())
        except (httpx.HTTPError, ValueError) as e:
            raise TransportFailure(f"DevTools tab list failed: {e}") from e

    def activate(self, tab_id: str) -> None:
        try:
            self._http.get(f"/json/activate/{tab_id}").raise_for_status()
        except httpx.HTTPError as e:
            raise TransportFailure(f"Could not activate tab {tab_id}: {e}") from e

    def evaluate(self, websocket_url: str, expression: str) -> Any:
        """Evaluate an expression in the tab and return its JSON value."""
        msg_id = next(self._ids)
        request = {
            "id": msg_id,
            "method": "Runtime.evaluate",
            "params": {"expression": expression, "returnByValue": True},
        }
        try:
            with self._ws_connect(websocket_url, open_timeout=self._timeout) as ws:
                ws.send(json.dumps(request))
                while True:
                    reply = json.loads(ws.recv(timeout=self._timeout))
                    if reply.get("id") == msg_id:
                        break
        except (WebSocketException, OSError, TimeoutError, ValueError) as e:
            raise TransportFailure(f"Runtime.evaluate failed: {e}") from e

        if "error" in reply:
            raise TransportFailure(f"Runtime.evaluate error: {reply['error']}")
        result = reply.get("result", {})
        if "exceptionDetails" in result:
            raise TransportFailure(f"Page script raised: {result['exceptionDetails'].get('text')}")
        return result.get("result", {}).get("value")


def matches(url: str, patterns: Sequence[str]) -> bool:
    return any(fnmatchcase(url, p) for p in patterns)


class DevToolsTargetLocator(TargetLocator):
    def __init__(self, client: DevToolsClient, process_check: Callable[[], bool] = browser_running) -> None:
        self._client = client
        self._process_check = process_check

    def find(self, patterns: Sequence[str]) -> Optional[Target]:
        if not self._process_check():
            return None
        try:
            tabs = self._client.list_tabs()
        except TransportFailure as e:
            log.debug("No DevTools endpoint: %s", e)
            return None

        for tab in tabs:
            ws_url = tab.get("webSocketDebuggerUrl")
            if tab.get("type") != "page" or not ws_url or not matches(tab.get("url", ""), patterns):
                continue
            try:
                complete = self._client.evaluate(ws_url, READY_STATE_EXPRESSION) == "complete"
            except TransportFailure as e:
                # Found but not talking: let the status request report the failure
                log.debug("Tab %s not answering readyState: %s", tab.get("id"), e)
                complete = True
            return Target(
                id=tab["id"],
                url=tab["url"],
                websocket_url=ws_url,
                title=tab.get("title", ""),
                complete=complete,
            )
        return None


class DevToolsStatusRequester(StatusRequester):
    def __init__(self, client: DevToolsClient, expression: str = HUNT_TIMER_EXPRESSION) -> None:
        self._client = client
        self._expression = expression

    def request_status(self, target: Target) -> Optional[str]:
        value = self._client.evaluate(target.websocket_url, self._expression)
        return None if value is None else str(value)


class DevToolsVisualAlert:
    """Brings the game tab forward and shows an alert inside the page."""

    def __init__(self, client: DevToolsClient) -> None:
        self._client = client

    def show(self, target: Target, bring_to_foreground: bool = True) -> None:
        if bring_to_foreground:
            self._client.activate(target.id)
        self._client.evaluate(target.websocket_url, HORN_ALERT_EXPRESSION)
