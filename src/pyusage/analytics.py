"""Analytics session: identity, opt-in state and hit dispatch."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import Any

from pyusage._constants import ANALYTICS_URL, CLIENT_ID_KEY, ENABLED_KEY, FIRST_RUN_KEY, PROTOCOL_VERSION
from pyusage._redact import redact_for_log
from pyusage._transport import PostHandler
from pyusage.models import EventHit, ExceptionHit, HitBase, ScreenViewHit, SocialHit, TimingHit
from pyusage.properties import PersistentProperties

_logger = logging.getLogger(__name__)


class Analytics:
    """Send usage hits for one application.

    Usage::

        analytics = Analytics("UA-0", properties, post_handler, application_name="app")
        await analytics.send_event("files", "open", label="recent")

    Durable settings (client id, opt-in flag) live in *properties*; every
    hit is delivered through *post_handler*. Sending never raises.
    """

    def __init__(
        self,
        tracking_id: str,
        properties: PersistentProperties,
        post_handler: PostHandler,
        *,
        application_name: str | None = None,
        application_version: str | None = None,
        analytics_url: str | None = None,
    ) -> None:
        self.tracking_id = tracking_id
        self.properties = properties
        self.post_handler = post_handler
        self.analytics_url = analytics_url or ANALYTICS_URL
        self._variables: dict[str, str] = {}

        self.first_run = properties.get(FIRST_RUN_KEY) is None
        if self.first_run:
            properties.set(FIRST_RUN_KEY, False)

        if application_name:
            self.set_session_value("an", application_name)
        if application_version:
            self.set_session_value("av", application_version)

    # ------------------------------------------------------------------
    # Identity and opt-in
    # ------------------------------------------------------------------

    @property
    def client_id(self) -> str:
        """Anonymous id, generated once and kept in the property store."""
        cid = self.properties.get(CLIENT_ID_KEY)
        if not cid:
            cid = str(uuid.uuid4())
            self.properties.set(CLIENT_ID_KEY, cid)
        return str(cid)

    @property
    def enabled(self) -> bool:
        """Whether hits are sent. Defaults to ``True`` until opted out."""
        value = self.properties.get(ENABLED_KEY)
        return True if value is None else bool(value)

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self.properties.set(ENABLED_KEY, bool(value))

    # ------------------------------------------------------------------
    # Session values
    # ------------------------------------------------------------------

    def set_session_value(self, key: str, value: Any) -> None:
        """Attach ``key=value`` to every following hit; ``None`` removes it."""
        if value is None:
            self._variables.pop(key, None)
        else:
            self._variables[key] = str(value)

    def get_session_value(self, key: str) -> str | None:
        return self._variables.get(key)

    # ------------------------------------------------------------------
    # Hits
    # ------------------------------------------------------------------

    async def send_screen_view(self, screen_name: str, *, parameters: Mapping[str, Any] | None = None) -> None:
        await self.send_hit(ScreenViewHit(screen_name=screen_name), parameters=parameters)

    async def send_event(
        self,
        category: str,
        action: str,
        *,
        label: str | None = None,
        value: int | None = None,
        parameters: Mapping[str, Any] | None = None,
    ) -> None:
        hit = EventHit(category=category, action=action, label=label, value=value)
        await self.send_hit(hit, parameters=parameters)

    async def send_social(
        self,
        network: str,
        action: str,
        target: str,
        *,
        parameters: Mapping[str, Any] | None = None,
    ) -> None:
        await self.send_hit(SocialHit(network=network, action=action, target=target), parameters=parameters)

    async def send_timing(
        self,
        variable_name: str,
        time_ms: int,
        *,
        category: str | None = None,
        label: str | None = None,
        parameters: Mapping[str, Any] | None = None,
    ) -> None:
        hit = TimingHit(variable_name=variable_name, time=time_ms, category=category, label=label)
        await self.send_hit(hit, parameters=parameters)

    async def send_exception(
        self,
        description: str | None,
        *,
        fatal: bool = False,
        parameters: Mapping[str, Any] | None = None,
    ) -> None:
        await self.send_hit(ExceptionHit(description=description, fatal=fatal), parameters=parameters)

    async def send_hit(self, hit: HitBase, *, parameters: Mapping[str, Any] | None = None) -> None:
        """Send an arbitrary hit, merging optional custom parameters last."""
        if not self.enabled:
            return

        payload = self.build_payload(hit, parameters)
        _logger.debug("Sending %s hit: %s", hit.hit_type, redact_for_log(payload))
        await self.post_handler.send_post(self.analytics_url, payload)

    def build_payload(self, hit: HitBase, parameters: Mapping[str, Any] | None = None) -> dict[str, str]:
        """Assemble ``v``, ``tid``, ``cid``, session values, hit fields, extras."""
        payload: dict[str, str] = {
            "v": PROTOCOL_VERSION,
            "tid": self.tracking_id,
            "cid": self.client_id,
        }
        payload.update(self._variables)
        payload.update(hit.to_parameters())
        if parameters:
            payload.update({key: str(value) for key, value in parameters.items()})
        return payload

    async def close(self) -> None:
        """Release resources held by the post handler."""
        await self.post_handler.close()
