"""Core data models exchanged with the permission store.

These are Pydantic models used at the session boundary.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .permissions.selection import normalize_grants


class Role(BaseModel):
    """A role as returned by the store.

    ``permissions`` is kept raw (strings or ``{"name": ...}`` objects);
    use :attr:`grants` for normalized paths.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = Field(default=None, validation_alias=AliasChoices("id", "_id"))
    name: str = ""
    permissions: list[Any] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v: Any) -> Any:
        return None if v is None else str(v)

    @field_validator("permissions", mode="before")
    @classmethod
    def _none_is_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def grants(self) -> list[str]:
        """Normalized, deduplicated permission paths."""
        return normalize_grants(self.permissions)


__all__ = [
    "Role",
]
