from __future__ import annotations

import asyncio

import aiohttp
import pytest
from conftest import FakeBrowserHost, FakeHttpSession

from pyusage._transport import BrowserPostHandler, HttpPostHandler
from pyusage.environment import StaticEnvironment

URL = "https://collector.example/collect"


@pytest.mark.asyncio
async def test_http_post_handler_posts_encoded_body(http_session: FakeHttpSession) -> None:
    env = StaticEnvironment(environ={"LANG": "en_US.UTF-8"}, operating_system="linux")
    handler = HttpPostHandler(session=http_session, environment=env)  # type: ignore[arg-type]

    await handler.send_post(URL, {"t": "event", "ec": "cat", "ea": "act one"})

    assert len(http_session.requests) == 1
    request = http_session.requests[0]
    assert request["url"] == URL
    assert request["data"] == "t=event&ec=cat&ea=act%20one"
    assert request["headers"]["user-agent"] == "Mozilla/5.0 (Linux; Linux; Linux; en-us)"
    assert request["headers"]["content-type"] == "application/x-www-form-urlencoded"
    assert http_session.responses[0].read_calls == 1


@pytest.mark.asyncio
async def test_http_post_handler_ignores_error_status() -> None:
    session = FakeHttpSession(status=500)
    handler = HttpPostHandler(session=session, user_agent="test-agent")  # type: ignore[arg-type]

    await handler.send_post(URL, {"t": "pageview"})

    assert session.requests[0]["headers"]["user-agent"] == "test-agent"
    assert session.responses[0].read_calls == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "failure",
    [
        aiohttp.ClientConnectionError("connection refused"),
        asyncio.TimeoutError(),
        OSError("network unreachable"),
    ],
)
async def test_http_post_handler_swallows_transport_failures(failure: BaseException) -> None:
    session = FakeHttpSession(fail_with=failure)
    handler = HttpPostHandler(session=session, user_agent="test-agent")  # type: ignore[arg-type]

    await handler.send_post(URL, {"t": "event"})

    assert len(session.requests) == 1


@pytest.mark.asyncio
async def test_http_post_handler_leaves_external_session_open(http_session: FakeHttpSession) -> None:
    handler = HttpPostHandler(session=http_session, user_agent="test-agent")  # type: ignore[arg-type]
    await handler.close()
    assert http_session.closed is False


@pytest.mark.asyncio
async def test_http_post_handler_close_without_session_is_noop() -> None:
    handler = HttpPostHandler(user_agent="test-agent")
    await handler.close()


@pytest.mark.asyncio
async def test_browser_post_handler_adds_viewport(browser_host: FakeBrowserHost) -> None:
    handler = BrowserPostHandler(browser_host)  # type: ignore[arg-type]
    parameters = {"t": "screenview", "cd": "home"}

    await handler.send_post(URL, parameters)

    assert browser_host.requests == [{"url": URL, "method": "POST", "data": "t=screenview&cd=home&vp=800x600"}]
    assert "vp" not in parameters


@pytest.mark.asyncio
async def test_browser_post_handler_uses_mock_requestor(browser_host: FakeBrowserHost) -> None:
    calls: list[tuple[str, str, str]] = []

    async def requestor(url: str, *, method: str, send_data: str) -> None:
        calls.append((url, method, send_data))

    handler = BrowserPostHandler(browser_host, requestor=requestor)  # type: ignore[arg-type]
    await handler.send_post(URL, {"t": "event"})

    assert calls == [(URL, "POST", "t=event&vp=800x600")]
    assert browser_host.requests == []


@pytest.mark.asyncio
async def test_browser_post_handler_swallows_request_errors(browser_host: FakeBrowserHost) -> None:
    async def offline(url: str, *, method: str, send_data: str) -> None:
        raise RuntimeError("net::ERR_INTERNET_DISCONNECTED")

    handler = BrowserPostHandler(browser_host, requestor=offline)  # type: ignore[arg-type]
    await handler.send_post(URL, {"t": "event"})


@pytest.mark.asyncio
async def test_http_post_handler_swallows_unexpected_session_errors() -> None:
    session = FakeHttpSession(fail_with=RuntimeError("Session is closed"))
    handler = HttpPostHandler(session=session, user_agent="test-agent")  # type: ignore[arg-type]

    await handler.send_post(URL, {"t": "event"})

    assert len(session.requests) == 1


@pytest.mark.asyncio
async def test_http_post_handler_with_closed_aiohttp_session() -> None:
    session = aiohttp.ClientSession()
    await session.close()
    handler = HttpPostHandler(session=session, user_agent="test-agent")

    await handler.send_post(URL, {"t": "event"})


@pytest.mark.asyncio
async def test_http_post_handler_keeps_external_session_after_close(http_session: FakeHttpSession) -> None:
    handler = HttpPostHandler(session=http_session, user_agent="test-agent")  # type: ignore[arg-type]

    await handler.close()
    await handler.send_post(URL, {"t": "event"})
    await handler.close()

    assert len(http_session.requests) == 1
    assert http_session.closed is False


class _BrokenViewportHost(FakeBrowserHost):
    @property
    def viewport_width(self) -> int:  # type: ignore[override]
        raise RuntimeError("document is not attached")

    @viewport_width.setter
    def viewport_width(self, value: int) -> None:
        pass


@pytest.mark.asyncio
async def test_browser_post_handler_swallows_host_errors() -> None:
    host = _BrokenViewportHost()
    handler = BrowserPostHandler(host)  # type: ignore[arg-type]

    await handler.send_post(URL, {"t": "event"})

    assert host.requests == []
