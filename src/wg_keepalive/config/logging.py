"""
Logging configuration module.

Contains logging-related Pydantic config models:
- LoggingSettings: log level and whether records carry timestamps
"""

from typing import Literal

from pydantic import BaseModel, Field

__all__ = ["LoggingSettings"]


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="info",
        description="Log level",
    )
    timestamps: bool = Field(
        default=True,
        description="Prefix log records with a timestamp (disable under journald)",
    )
