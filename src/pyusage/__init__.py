"""pyusage - Async Python client for usage analytics collection."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyusage")
except PackageNotFoundError:
    __version__ = "0+local"
from pyusage._encoding import post_encode
from pyusage._transport import BrowserPostHandler, HttpPostHandler, PostHandler
from pyusage.analytics import Analytics
from pyusage.browser import BrowserHost, PyodideHost
from pyusage.client import AnalyticsBrowser, AnalyticsIO
from pyusage.config import UsageConfig
from pyusage.environment import (
    EnvironmentProbe,
    HostEnvironment,
    StaticEnvironment,
    create_user_agent,
    get_platform_locale,
    user_home_dir,
)
from pyusage.exceptions import UsageConfigError, UsageError, UsageStorageError, UsageTransportError
from pyusage.models import EventHit, ExceptionHit, HitBase, ScreenViewHit, SocialHit, TimingHit
from pyusage.properties import FileProperties, MemoryProperties, PersistentProperties, StorageProperties

__all__ = [
    "__version__",
    "Analytics",
    "AnalyticsBrowser",
    "AnalyticsIO",
    "BrowserHost",
    "BrowserPostHandler",
    "EnvironmentProbe",
    "EventHit",
    "ExceptionHit",
    "FileProperties",
    "HitBase",
    "HostEnvironment",
    "HttpPostHandler",
    "MemoryProperties",
    "PersistentProperties",
    "PostHandler",
    "PyodideHost",
    "ScreenViewHit",
    "SocialHit",
    "StaticEnvironment",
    "StorageProperties",
    "TimingHit",
    "UsageConfig",
    "UsageConfigError",
    "UsageError",
    "UsageStorageError",
    "UsageTransportError",
    "create_user_agent",
    "get_platform_locale",
    "post_encode",
    "user_home_dir",
]
