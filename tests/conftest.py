from __future__ import annotations

import json
from typing import Any

import pytest
import requests

from jobber_nodes.jobber_client_module import JobberClient


class FakeResp:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text or json.dumps(payload)

    def json(self) -> Any:
        if self._payload is None and self.text:
            return json.loads(self.text)
        return self._payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error", response=self)  # type: ignore[arg-type]


class FakeSession:
    """Replays queued responses and records every POST."""

    def __init__(self, responses: list[Any] | None = None, responder: Any = None) -> None:
        self.responses: list[Any] = list(responses or [])
        self.responder = responder
        self.calls: list[dict[str, Any]] = []

    def queue(self, *responses: Any) -> None:
        self.responses.extend(responses)

    def post(self, url, headers=None, json=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        if self.responder is not None:
            return FakeResp(200, self.responder(json))
        if not self.responses:
            raise AssertionError("No fake response queued")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        if isinstance(item, FakeResp):
            return item
        return FakeResp(200, item)

    @property
    def variables(self) -> list[dict[str, Any]]:
        return [call["json"]["variables"] for call in self.calls]


def connection_page(key: str, nodes: list[dict[str, Any]], has_next: bool, cursor: str | None) -> dict[str, Any]:
    return {
        "data": {
            key: {
                "edges": [{"node": n} for n in nodes],
                "pageInfo": {"hasNextPage": has_next, "endCursor": cursor},
            }
        }
    }


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(session: FakeSession) -> JobberClient:
    return JobberClient(token_resolver=lambda: "test-token", session=session)  # type: ignore[arg-type]
