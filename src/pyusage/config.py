"""Client configuration for pyusage."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from pyusage._constants import ANALYTICS_URL
from pyusage.exceptions import UsageConfigError


@dataclasses.dataclass(frozen=True)
class UsageConfig:
    """Analytics configuration.

    Parameters
    ----------
    tracking_id : str
        Property identifier of the collection endpoint (e.g. ``"UA-0"``).
    application_name : str
        Name of the instrumented application. Also names the property
        store (``.<name>`` file, or storage entry in a browser).
    application_version : str
        Version string sent with every hit.
    analytics_url : str
        Collection endpoint. Defaults to the Google Analytics collector.
    document_dir : Path or None
        Directory holding the property file. Defaults to the user's
        home directory.
    """

    tracking_id: str
    application_name: str
    application_version: str = ""
    analytics_url: str = ANALYTICS_URL
    document_dir: Path | None = None

    def __post_init__(self) -> None:
        if not self.tracking_id or not self.tracking_id.strip():
            raise UsageConfigError("tracking_id must be non-empty")
        if not self.application_name or not self.application_name.strip():
            raise UsageConfigError("application_name must be non-empty")
        if not self.analytics_url:
            object.__setattr__(self, "analytics_url", ANALYTICS_URL)
        if self.document_dir is not None and not isinstance(self.document_dir, Path):
            object.__setattr__(self, "document_dir", Path(self.document_dir))

    @classmethod
    def from_env(cls, **overrides: Any) -> UsageConfig:
        """Create configuration from ``USAGE_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        UsageConfigError
            If the tracking id or application name is missing.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "USAGE_TRACKING_ID": "tracking_id",
            "USAGE_APPLICATION_NAME": "application_name",
            "USAGE_APPLICATION_VERSION": "application_version",
            "USAGE_ANALYTICS_URL": "analytics_url",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        dir_env = env.get("USAGE_DOCUMENT_DIR")
        if dir_env:
            config_kwargs["document_dir"] = Path(dir_env)

        config_kwargs.update(overrides)

        for required in ("tracking_id", "application_name"):
            if required not in config_kwargs:
                raise UsageConfigError(f"Missing {required} (set USAGE_{required.upper()})")

        return cls(**config_kwargs)
