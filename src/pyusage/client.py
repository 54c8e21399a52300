"""Ready-made analytics sessions for a process host and a browser host."""

from __future__ import annotations

from typing import Any

import aiohttp

from pyusage._transport import BrowserPostHandler, HttpPostHandler, Requestor
from pyusage.analytics import Analytics
from pyusage.browser import BrowserHost
from pyusage.config import UsageConfig
from pyusage.environment import EnvironmentProbe, HostEnvironment, get_platform_locale
from pyusage.properties import FileProperties, StorageProperties


class AnalyticsIO(Analytics):
    """Analytics for command-line and server applications.

    Settings are stored in ``.<application name>`` inside
    ``config.document_dir`` (the user's home directory by default).

    Usage::

        async with AnalyticsIO(UsageConfig("UA-0", "my app", "1.0")) as analytics:
            await analytics.send_screen_view("main")
    """

    def __init__(
        self,
        config: UsageConfig,
        *,
        http_session: aiohttp.ClientSession | None = None,
        environment: EnvironmentProbe | None = None,
    ) -> None:
        env = environment or HostEnvironment()
        super().__init__(
            config.tracking_id,
            FileProperties(config.application_name, document_dir=config.document_dir, environment=env),
            HttpPostHandler(session=http_session, environment=env),
            application_name=config.application_name,
            application_version=config.application_version,
            analytics_url=config.analytics_url,
        )
        locale = get_platform_locale(env.environ)
        if locale is not None:
            self.set_session_value("ul", locale)

    async def __aenter__(self) -> AnalyticsIO:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()


class AnalyticsBrowser(Analytics):
    """Analytics for applications running in a web page.

    Settings live in the page's local storage under the application
    name; screen geometry and language come from *host*.
    """

    def __init__(
        self,
        config: UsageConfig,
        host: BrowserHost,
        *,
        requestor: Requestor | None = None,
    ) -> None:
        super().__init__(
            config.tracking_id,
            StorageProperties(config.application_name, host.local_storage),
            BrowserPostHandler(host, requestor=requestor),
            application_name=config.application_name,
            application_version=config.application_version,
            analytics_url=config.analytics_url,
        )
        self.set_session_value("sr", f"{host.screen_width}x{host.screen_height}")
        self.set_session_value("sd", f"{host.pixel_depth}-bits")
        self.set_session_value("ul", host.language)

    async def __aenter__(self) -> AnalyticsBrowser:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()
