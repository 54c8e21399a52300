"""Measurement Protocol hit models.

Each hit maps snake_case fields onto the short parameter codes the
collection endpoint expects (``category`` -> ``ec`` and so on) through
field aliases. :meth:`HitBase.to_parameters` yields the ordered, string
valued mapping that is form-encoded on the wire.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pyusage._constants import MAX_EXCEPTION_LENGTH


class HitBase(BaseModel):
    """Common behaviour for all hit types."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )

    hit_type: ClassVar[str]

    def to_parameters(self) -> dict[str, str]:
        """Return ``{"t": <hit type>, <code>: <value>, ...}`` without unset fields."""
        params: dict[str, str] = {"t": self.hit_type}
        for key, value in self.model_dump(by_alias=True, exclude_none=True).items():
            params[key] = str(value)
        return params


class ScreenViewHit(HitBase):
    hit_type: ClassVar[str] = "screenview"

    screen_name: str = Field(alias="cd")


class EventHit(HitBase):
    """A user interaction: category and action, optional label and value."""

    hit_type: ClassVar[str] = "event"

    category: str = Field(alias="ec")
    action: str = Field(alias="ea")
    label: str | None = Field(default=None, alias="el")
    value: int | None = Field(default=None, alias="ev", ge=0)


class SocialHit(HitBase):
    hit_type: ClassVar[str] = "social"

    network: str = Field(alias="sn")
    action: str = Field(alias="sa")
    target: str = Field(alias="st")


class TimingHit(HitBase):
    """A measured duration, in milliseconds."""

    hit_type: ClassVar[str] = "timing"

    variable_name: str = Field(alias="utv")
    time: int = Field(alias="utt", ge=0)
    category: str | None = Field(default=None, alias="utc")
    label: str | None = Field(default=None, alias="utl")


class ExceptionHit(HitBase):
    """An error report; ``fatal`` is sent as ``exf=1`` and omitted otherwise."""

    hit_type: ClassVar[str] = "exception"

    description: str | None = Field(default=None, alias="exd")
    fatal: bool = Field(default=False, exclude=True)

    @field_validator("description")
    @classmethod
    def _truncate(cls, value: str | None) -> str | None:
        if value is not None and len(value) > MAX_EXCEPTION_LENGTH:
            return value[:MAX_EXCEPTION_LENGTH]
        return value

    def to_parameters(self) -> dict[str, str]:
        params = super().to_parameters()
        if self.fatal:
            params["exf"] = "1"
        return params
