"""Shared fixtures: an in-memory session and a fake HTTP transport."""

import json
from dataclasses import dataclass, field
from typing import Any

import pytest

from lana.api import ApiClient
from lana.session import MemoryTokenStorage, SessionStore

BASE_URL = "http://api.test"


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int = 200, payload: Any = None, text: str | None = None) -> None:
        self.status_code = status_code
        if text is None:
            text = "" if payload is None else json.dumps(payload)
        self.text = text

    def json(self) -> Any:
        return json.loads(self.text)


@dataclass
class RecordedCall:
    method: str
    url: str
    kwargs: dict[str, Any]

    @property
    def headers(self) -> dict[str, str]:
        return self.kwargs.get("headers", {})

    @property
    def params(self) -> dict[str, Any]:
        return self.kwargs.get("params", {})

    @property
    def body(self) -> Any:
        return self.kwargs.get("json")


@dataclass
class FakeHttp:
    """Records requests and replays queued responses (or raises)."""

    responses: list[Any] = field(default_factory=list)
    calls: list[RecordedCall] = field(default_factory=list)

    def queue(self, *responses: Any) -> None:
        self.responses.extend(responses)

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append(RecordedCall(method, url, kwargs))
        response = self.responses.pop(0) if self.responses else FakeResponse(200, None)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def last(self) -> RecordedCall:
        return self.calls[-1]


@pytest.fixture
def http() -> FakeHttp:
    return FakeHttp()


@pytest.fixture
def session() -> SessionStore:
    return SessionStore(MemoryTokenStorage())


@pytest.fixture
def client(http: FakeHttp, session: SessionStore) -> ApiClient:
    return ApiClient(BASE_URL, session, http=http)  # type: ignore[arg-type]
