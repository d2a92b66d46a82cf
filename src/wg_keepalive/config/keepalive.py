"""
Keepalive monitor configuration module.

Contains the per-interface settings that drive the stall monitor: how often
the receive counter is sampled, how long it may stay unchanged, and which
commands make up the recovery sequence.
"""

import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

__all__ = ["DEFAULT_RESTART_COMMAND", "MonitorConfig"]

logger = logging.getLogger(__name__)

DEFAULT_RESTART_COMMAND = "systemctl restart wg-quick@$WG_INTERFACE"


class MonitorConfig(BaseModel):
    """Configuration for monitoring a single WireGuard interface."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    interface: str = Field(
        min_length=1,
        description="WireGuard interface to monitor",
    )
    interval: int = Field(
        default=60,
        ge=1,
        description="Seconds between counter samples",
    )
    timeout: int = Field(
        default=300,
        ge=1,
        description="Seconds without received traffic before restarting",
    )
    pre_restart_command: str | None = Field(
        default=None,
        description="Shell command run before the restart command",
    )
    restart_command: str = Field(
        default=DEFAULT_RESTART_COMMAND,
        min_length=1,
        description="Shell command that restarts the interface",
    )
    post_restart_command: str | None = Field(
        default=None,
        description="Shell command run after the restart command",
    )
    wg_command: str = Field(
        default="wg",
        min_length=1,
        description="Name or path of the WireGuard command-line tool",
    )

    @field_validator("pre_restart_command", "post_restart_command")
    @classmethod
    def empty_hook_is_none(cls, v: str | None) -> str | None:
        """Treat a blank hook command as not configured."""
        if v is not None and not v.strip():
            return None
        return v

    @field_validator("restart_command")
    @classmethod
    def validate_restart_command(cls, v: str) -> str:
        """Validate the restart command is not blank."""
        if not v.strip():
            raise ValueError("restart_command must not be blank")
        return v

    @model_validator(mode="after")
    def warn_timeout_not_above_interval(self) -> "MonitorConfig":
        if self.timeout <= self.interval:
            logger.warning(
                f"timeout ({self.timeout}s) does not exceed interval ({self.interval}s); "
                "a stall will be reported on the first unchanged sample"
            )
        return self
