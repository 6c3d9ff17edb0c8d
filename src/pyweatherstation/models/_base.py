"""Base model for station payloads.

Every station response model inherits from :class:`StationBaseModel`
which provides:

* ``alias_generator=to_camel`` plus ``populate_by_name`` so both the
  snake_case keys of the weather endpoints and the camelCase keys of
  ``/status`` map onto snake_case fields.
* A ``model_validator(mode="before")`` that strips sentinel values
  (``null``, ``""``, ``"--"``, NaN) so the field default is used.
* A ``raw`` dict that captures the original payload.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from pyweatherstation._normalize import is_sentinel


class StationBaseModel(BaseModel):
    """Base for station response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original payload dict."""

    @model_validator(mode="before")
    @classmethod
    def _clean_station_values(cls, values: Any) -> Any:
        """Strip sentinel values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        cleaned = {key: value for key, value in values.items() if not is_sentinel(value)}
        # Keep an explicit raw= from kwargs construction.
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned
