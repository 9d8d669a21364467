"""Shared configuration contract for LuxeCore.

This module provides Pydantic-validated configuration models for the
permission engine and the logging around it.

Applications embedding LuxeCore build a SharedConfig once (usually via
load_shared_config_from_env) and pass it, or its ``permissions`` section,
into the editor and catalog loaders. Direct os.environ/os.getenv usage
outside load_shared_config_from_env is not allowed.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .exceptions import ConfigurationError


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class PermissionsConfig(BaseModel):
    """Settings for catalog loading and role-editing sessions.

    Environment variables:
        PERMISSIONS_MAX_DEPTH          — deepest catalog level accepted
        PERMISSIONS_CHILD_KEYS         — comma-separated child field names
        PERMISSIONS_DROP_STALE_GRANTS  — drop grants missing from the catalog
        PERMISSIONS_SUPERADMIN_ROLE    — role name that holds every permission
    """

    model_config = {"extra": "ignore"}

    max_depth: int = Field(
        default=16,
        ge=1,
        description="Maximum catalog depth. Deeper catalogs are rejected as malformed.",
    )
    child_keys: list[str] = Field(
        default_factory=lambda: ["sub_permissions", "children"],
        description="Payload keys holding a node's children, checked in order.",
    )
    drop_stale_grants: bool = Field(
        default=False,
        description=(
            "Drop seeded grants that are not in the catalog. "
            "Kept by default so saving never revokes what the editor cannot show."
        ),
    )
    superadmin_role: str = Field(
        default="superadmin",
        description="Role name that implicitly holds every catalog permission",
    )

    @field_validator("child_keys")
    @classmethod
    def validate_child_keys(cls, v: list[str]) -> list[str]:
        """Strip blanks and require at least one key."""
        keys = [k.strip() for k in v if k and k.strip()]
        if not keys:
            raise ValueError("child_keys must contain at least one field name")
        return keys


class SharedConfig(BaseModel):
    """Top-level configuration for LuxeCore.

    RULE: All settings MUST come through this config chain.
    """

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )

    # Service identification
    service_name: Optional[str] = Field(
        default=None,
        description="Name of the embedding application, used as a logger name",
    )

    permissions: PermissionsConfig = Field(
        default_factory=PermissionsConfig,
        description="Catalog and editor settings",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    model_config = {
        "use_enum_values": True,
        "extra": "forbid",
    }


def load_shared_config_from_env() -> SharedConfig:
    """Load shared configuration from environment variables.

    This is the ONLY place where os.getenv is allowed.

    Environment variables:
    - LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - LOG_JSON: Use JSON log format (true/false, default: false)
    - SERVICE_NAME: Embedding application name
    - PERMISSIONS_MAX_DEPTH: Maximum catalog depth (default: 16)
    - PERMISSIONS_CHILD_KEYS: Comma-separated child keys (default: sub_permissions,children)
    - PERMISSIONS_DROP_STALE_GRANTS: Drop grants missing from the catalog (true/false)
    - PERMISSIONS_SUPERADMIN_ROLE: Role name holding every permission

    Returns:
        SharedConfig instance with values from environment or defaults.

    Raises:
        ConfigurationError: If a variable holds a value the config rejects.
    """
    import os

    truthy = ("true", "1", "yes", "on")

    try:
        permissions_kwargs: dict = {
            "max_depth": int(os.getenv("PERMISSIONS_MAX_DEPTH", "16")),
            "drop_stale_grants": os.getenv("PERMISSIONS_DROP_STALE_GRANTS", "false").lower() in truthy,
            "superadmin_role": os.getenv("PERMISSIONS_SUPERADMIN_ROLE", "superadmin"),
        }
        child_keys_raw = os.getenv("PERMISSIONS_CHILD_KEYS")
        if child_keys_raw:
            permissions_kwargs["child_keys"] = [k.strip() for k in child_keys_raw.split(",") if k.strip()]

        return SharedConfig(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_json=os.getenv("LOG_JSON", "false").lower() in truthy,
            service_name=os.getenv("SERVICE_NAME"),
            permissions=PermissionsConfig(**permissions_kwargs),
        )
    except ValueError as e:
        # pydantic.ValidationError is a ValueError too.
        raise ConfigurationError(f"Invalid configuration from environment: {e}") from e


__all__ = [
    "LogLevel",
    "PermissionsConfig",
    "SharedConfig",
    "load_shared_config_from_env",
]
