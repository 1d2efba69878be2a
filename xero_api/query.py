"""
Typed search filters for Xero "find" calls.

Callers may still hand in a plain ``QueryMap`` (parameter name -> value);
it is converted into a ``Query`` up front so an unknown or malformed key
fails before any request is paced or sent.
"""
from __future__ import annotations
from datetime import datetime
from typing import Any, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import XeroValidationError

QueryMap = dict[str, str]

# Upstream parameter names (lower-cased) -> Query field
_MAP_KEYS = {
    "page": "page",
    "ids": "ids",
    "where": "where",
    "order": "order",
    "unitdp": "unit_dp",
    "includearchived": "include_archived",
    "modifiedafter": "modified_after",
    "if-modified-since": "modified_after",
}

MODIFIED_SINCE_FORMAT = "%Y-%m-%dT%H:%M:%S"


class Query(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    page: Optional[int] = Field(default=None, ge=1)
    ids: tuple[str, ...] = ()
    where: Optional[str] = None
    order: Optional[str] = None
    unit_dp: Optional[int] = None
    include_archived: Optional[bool] = None
    modified_after: Optional[datetime] = None

    @field_validator("ids", mode="before")
    @classmethod
    def _split_ids(cls, value: Any) -> Any:
        if isinstance(value, str):
            return tuple(part.strip() for part in value.split(",") if part.strip())
        return value

    @field_validator("unit_dp")
    @classmethod
    def _check_unit_dp(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value not in (2, 4):
            raise ValueError("unitdp must be 2 or 4")
        return value

    @classmethod
    def from_map(cls, qm: QueryMap) -> "Query":
        """Build a Query from upstream parameter names, rejecting unknown keys."""
        values: dict[str, Any] = {}
        for key, value in qm.items():
            name = _MAP_KEYS.get(key.strip().lower())
            if name is None:
                raise XeroValidationError(f"unknown query parameter: {key}")
            values[name] = value
        try:
            return cls(**values)
        except ValidationError as e:
            raise XeroValidationError(f"invalid query: {e}") from e

    @classmethod
    def coerce(cls, value: Union["Query", QueryMap, None]) -> "Query":
        if value is None:
            return cls()
        if isinstance(value, Query):
            return value
        return cls.from_map(value)

    def with_defaults(self, **defaults: Any) -> "Query":
        """Fill only the fields the caller left unset."""
        update = {
            name: value
            for name, value in defaults.items()
            if value is not None and getattr(self, name) in (None, ())
        }
        return self._replace(update)

    def with_overrides(self, **values: Any) -> "Query":
        """Replace fields regardless of what the caller set."""
        update = {name: value for name, value in values.items() if value is not None}
        return self._replace(update)

    def _replace(self, update: dict[str, Any]) -> "Query":
        # Rebuilt, not model_copy'd: page and unitdp are re-validated
        if not update:
            return self
        try:
            return type(self).model_validate({**self.model_dump(), **update})
        except ValidationError as e:
            raise XeroValidationError(f"invalid query: {e}") from e

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.page is not None:
            params["page"] = str(self.page)
        if self.ids:
            params["IDs"] = ",".join(self.ids)
        if self.where:
            params["where"] = self.where
        if self.order:
            params["order"] = self.order
        if self.unit_dp is not None:
            params["unitdp"] = str(self.unit_dp)
        if self.include_archived is not None:
            params["includeArchived"] = "true" if self.include_archived else "false"
        return params

    def headers(self) -> dict[str, str]:
        if self.modified_after is None:
            return {}
        return {"If-Modified-Since": self.modified_after.strftime(MODIFIED_SINCE_FORMAT)}
