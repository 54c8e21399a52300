"""Best-effort delivery of encoded hits to the collection endpoint."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Protocol

import aiohttp

from pyusage._constants import CONTENT_TYPE
from pyusage._encoding import post_encode
from pyusage.browser import BrowserHost
from pyusage.environment import EnvironmentProbe, create_user_agent
from pyusage.exceptions import UsageTransportError

_logger = logging.getLogger(__name__)

Requestor = Callable[..., Awaitable[Any]]


class PostHandler(Protocol):
    """Structural interface used by :class:`~pyusage.analytics.Analytics`.

    ``send_post`` must never raise: delivery is fire-and-forget.
    """

    async def send_post(self, url: str, parameters: Mapping[str, Any]) -> None:
        data = post_encode(parameters)
        try:
            await self._post(url, data)
        except UsageTransportError:
            _logger.debug("Dropping hit", exc_info=True)

    async def _post(self, url: str, data: str) -> None:
        headers: dict[str, str] = {
            "content-type": CONTENT_TYPE,
            "user-agent": self.user_agent,
        }

        _logger.debug("POST %s", url)

        try:
            if self._http is None:
                self._http = aiohttp.ClientSession()
            async with self._http.post(url, data=data, headers=headers) as resp:
                # Status is not inspected; the body is only drained.
                await resp.read()
        except Exception as exc:  # noqa: BLE001 - a closed session raises RuntimeError
            raise UsageTransportError(f"POST to {url} failed: {exc}", url=url) from exc

    async def close(self) -> None:
        """Release the session this handler created.

        An injected session is left open and stays in use for later sends.
        """
        if self._external_session or self._http is None:
            return
        await self._http.close()
        self._http = None


class BrowserPostHandler:
    """POST hits through the browser host, adding the viewport size.

    *requestor* replaces ``host.request`` in tests; it is called as
    ``requestor(url, method="POST", send_data=data)``.
    """

    def __init__(self, host: BrowserHost, *, requestor: Requestor | None = None) -> None:
        self._host = host
        self._requestor = requestor

    async def send_post(self, url: str, parameters: Mapping[str, Any]) -> None:
        try:
            payload = dict(parameters)
            payload["vp"] = f"{self._host.viewport_width}x{self._host.viewport_height}"

            data = post_encode(payload)
            request = self._requestor if self._requestor is not None else self._host.request
            await request(url, method="POST", send_data=data)
        except Exception:  # noqa: BLE001 - offline and CORS failures are host specific
            _logger.debug("Dropping hit", exc_info=True)

    async def close(self) -> None:
        return None
