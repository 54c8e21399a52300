"""Host environment probing: locale, home directory and user agent.

Every read of ambient host state (environment variables, OS identity,
interpreter version) goes through an :class:`EnvironmentProbe` so tests
can substitute fixed values.
"""

from __future__ import annotations

import dataclasses
import os
import sys
from collections.abc import Mapping
from typing import Protocol

_PLATFORM_NAMES: dict[str, str] = {
    "android": "android",
    "ios": "ios",
    "darwin": "macos",
    "win32": "windows",
    "cygwin": "windows",
    "linux": "linux",
}


class EnvironmentProbe(Protocol):
    """Read-only view of the host the library runs on."""

    @property
    def environ(self) -> Mapping[str, str]: ...

    @property
    def operating_system(self) -> str: ...

    @property
    def runtime_version(self) -> str: ...


class HostEnvironment:
    """The real process environment."""

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ

    @property
    def operating_system(self) -> str:
        return _PLATFORM_NAMES.get(sys.platform, sys.platform)

    @property
    def runtime_version(self) -> str:
        return runtime_version(sys.version)


@dataclasses.dataclass(frozen=True)
class StaticEnvironment:
    """Fixed environment values, mostly useful in tests."""

    environ: Mapping[str, str] = dataclasses.field(default_factory=dict)
    operating_system: str = "linux"
    runtime_version: str = "3.12.0"


def runtime_version(raw: str | None = None) -> str:
    """Return the interpreter version, cut at the first space.

    ``sys.version`` looks like ``"3.12.1 (main, ...) [GCC ...]"``.
    """
    ver = sys.version if raw is None else raw
    index = ver.find(" ")
    if index != -1:
        ver = ver[:index]
    return ver


def get_platform_locale(environ: Mapping[str, str] | None = None) -> str | None:
    """Return the platform locale (``en_US.UTF-8`` -> ``en-us``).

    Returns ``None`` when ``LANG`` is not set.
    """
    env = os.environ if environ is None else environ
    locale = env.get("LANG")
    if locale is None:
        return None

    index = locale.find(".")
    if index != -1:
        locale = locale[:index]
    return locale.replace("_", "-").lower()


def user_home_dir(environment: EnvironmentProbe | None = None) -> str:
    """Directory for the property file: ``APPDATA`` on Windows, else ``HOME``."""
    env = environment or HostEnvironment()
    key = "APPDATA" if env.operating_system == "windows" else "HOME"
    value = env.environ.get(key)
    return "." if value is None else value


def create_user_agent(environment: EnvironmentProbe | None = None) -> str:
    """Build a descriptive User-Agent for the process-based post handler.

    An unknown locale leaves an empty segment rather than dropping it.
    """
    env = environment or HostEnvironment()
    locale = get_platform_locale(env.environ) or ""
    os_name = env.operating_system

    if os_name == "android":
        return f"Mozilla/5.0 (Android; Mobile; {locale})"
    if os_name == "ios":
        return f"Mozilla/5.0 (iPhone; U; CPU iPhone OS like Mac OS X; {locale})"
    if os_name == "macos":
        return f"Mozilla/5.0 (Macintosh; Intel Mac OS X; Macintosh; {locale})"
    if os_name == "windows":
        return f"Mozilla/5.0 (Windows; Windows; Windows; {locale})"
    if os_name == "linux":
        return f"Mozilla/5.0 (Linux; Linux; Linux; {locale})"
    # Python/3.12.1 (freebsd14; freebsd14; freebsd14; en-us)
    return f"Python/{env.runtime_version} ({os_name}; {os_name}; {os_name}; {locale})"
