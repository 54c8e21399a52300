from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest


@dataclass
class FakeResponse:
    status: int = 200
    read_calls: int = 0

    async def read(self) -> bytes:
        self.read_calls += 1
        return b"GIF89a"

    async def __aenter__(self) -> FakeResponse:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None


@dataclass
class FakeHttpSession:
    """Stands in for ``aiohttp.ClientSession``."""

    status: int = 200
    fail_with: BaseException | None = None
    requests: list[dict[str, Any]] = field(default_factory=list)
    responses: list[FakeResponse] = field(default_factory=list)
    closed: bool = False

    def post(self, url: str, *, data: str, headers: Mapping[str, str]) -> FakeResponse:
        self.requests.append({"url": url, "data": data, "headers": dict(headers)})
        if self.fail_with is not None:
            raise self.fail_with
        response = FakeResponse(status=self.status)
        self.responses.append(response)
        return response

    async def close(self) -> None:
        self.closed = True


@dataclass
class FakeBrowserHost:
    local_storage: dict[str, str] = field(default_factory=dict)
    screen_width: int = 1920
    screen_height: int = 1080
    pixel_depth: int = 24
    viewport_width: int = 800
    viewport_height: int = 600
    language: str | None = "en-US"
    requests: list[dict[str, Any]] = field(default_factory=list)

    async def request(self, url: str, *, method: str, send_data: str) -> None:
        self.requests.append({"url": url, "method": method, "data": send_data})


@dataclass
class RecordingPostHandler:
    sent: list[tuple[str, dict[str, Any]]] = field(default_factory=list)
    closed: bool = False

    async def send_post(self, url: str, parameters: Mapping[str, Any]) -> None:
        self.sent.append((url, dict(parameters)))

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def http_session() -> FakeHttpSession:
    return FakeHttpSession()


@pytest.fixture
def browser_host() -> FakeBrowserHost:
    return FakeBrowserHost()


@pytest.fixture
def post_handler() -> RecordingPostHandler:
    return RecordingPostHandler()
