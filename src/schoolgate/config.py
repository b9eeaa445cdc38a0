"""
Schoolgate Configuration

Process-wide settings, read once at startup and immutable afterwards.

PolicyConfig holds the two safety switches that drive the policy engine
and the confirmation gate. Defaults are the safe ones: destructive and
critical operations disabled, confirmation required.

Environment:
    ALLOW_DESTRUCTIVE        "true" enables destructive/critical operations
    REQUIRE_CONFIRMATION     "false" disables the confirmation requirement
    SCHOOLGATE_LOG_LEVEL     log level (default INFO)
    SCHOOLGATE_LOG_JSON      "true" for JSON log lines
    SCHOOLGATE_REMOTE_TIMEOUT  seconds before a remote call is abandoned
    SCHOOLGATE_TOOL_PREFIX   prefix of advertised tool names (default "smartschool-")
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from schoolgate.exceptions import ConfigurationError

ALLOW_DESTRUCTIVE_ENV = "ALLOW_DESTRUCTIVE"
REQUIRE_CONFIRMATION_ENV = "REQUIRE_CONFIRMATION"
DEFAULT_TOOL_PREFIX = "smartschool-"


class PolicyConfig(BaseModel):
    """The two safety switches, fixed for the process lifetime."""
    model_config = ConfigDict(frozen=True)

    allow_destructive: bool = False
    require_confirmation: bool = True

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> PolicyConfig:
        """Build the policy from the environment.

        Only the exact string "true" enables destructive operations and only
        the exact string "false" disables confirmation, so a typo always
        lands on the safe side.
        """
        env = os.environ if environ is None else environ
        return cls(
            allow_destructive=env.get(ALLOW_DESTRUCTIVE_ENV) == "true",
            require_confirmation=env.get(REQUIRE_CONFIRMATION_ENV) != "false",
        )

    def describe(self) -> list[str]:
        """Human-readable summary lines for startup output."""
        return [
            f"Destructive operations: {'ENABLED' if self.allow_destructive else 'DISABLED'}",
            f"Confirmation required: {'YES' if self.require_confirmation else 'NO'}",
            f"Set {ALLOW_DESTRUCTIVE_ENV}=true to enable destructive operations",
            f"Set {REQUIRE_CONFIRMATION_ENV}=false to disable confirmation prompts",
        ]


class ServerSettings(BaseModel):
    """Host-level settings around the dispatch core."""
    model_config = ConfigDict(frozen=True)

    policy: PolicyConfig = Field(default_factory=PolicyConfig)
    log_level: str = "INFO"
    log_json: bool = False
    remote_timeout: float | None = None
    tool_prefix: str = DEFAULT_TOOL_PREFIX

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServerSettings:
        env = os.environ if environ is None else environ

        timeout: float | None = None
        raw_timeout = env.get("SCHOOLGATE_REMOTE_TIMEOUT")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ConfigurationError(
                    "SCHOOLGATE_REMOTE_TIMEOUT", f"not a number: {raw_timeout!r}"
                ) from None
            if timeout <= 0:
                raise ConfigurationError(
                    "SCHOOLGATE_REMOTE_TIMEOUT", "must be greater than zero"
                )

        return cls(
            policy=PolicyConfig.from_env(env),
            log_level=env.get("SCHOOLGATE_LOG_LEVEL", "INFO"),
            log_json=env.get("SCHOOLGATE_LOG_JSON", "").lower() == "true",
            remote_timeout=timeout,
            tool_prefix=env.get("SCHOOLGATE_TOOL_PREFIX", DEFAULT_TOOL_PREFIX),
        )
