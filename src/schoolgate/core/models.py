"""
Schoolgate Core Data Models

Shared types used across the tool layer. This module is the foundation
every other component imports from; it has no internal dependencies
beyond pydantic.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ─── Enums ───────────────────────────────────────────────────

class RiskTier(str, Enum):
    """Ordered risk classification of a remote operation.

    Ordered by impact: SAFE < MODERATE < DESTRUCTIVE < CRITICAL.
    Compare tiers with the comparison operators, never by value.
    """
    SAFE = "safe"
    MODERATE = "moderate"
    DESTRUCTIVE = "destructive"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _TIER_RANK[self]

    @property
    def is_gated(self) -> bool:
        """True for tiers behind the allow-destructive switch."""
        return self.rank >= _TIER_RANK[RiskTier.DESTRUCTIVE]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, RiskTier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, RiskTier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, RiskTier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, RiskTier):
            return NotImplemented
        return self.rank >= other.rank


_TIER_RANK: dict[RiskTier, int] = {
    RiskTier.SAFE: 0,
    RiskTier.MODERATE: 1,
    RiskTier.DESTRUCTIVE: 2,
    RiskTier.CRITICAL: 3,
}


class OutcomeKind(str, Enum):
    """Discriminator of an InvocationOutcome."""
    SUCCESS = "success"
    POLICY_DENIED = "policy_denied"
    CONFIRMATION_MISSING = "confirmation_missing"
    REMOTE_FAILURE = "remote_failure"


class DispatchState(str, Enum):
    """Lifecycle of a single dispatch.

    Received → AllowanceChecked → (Denied | ConfirmationChecked)
    → (ConfirmationFailed | Invoking) → (Succeeded | Failed)
    """
    RECEIVED = "RECEIVED"
    ALLOWANCE_CHECKED = "ALLOWANCE_CHECKED"
    DENIED = "DENIED"
    CONFIRMATION_CHECKED = "CONFIRMATION_CHECKED"
    CONFIRMATION_FAILED = "CONFIRMATION_FAILED"
    INVOKING = "INVOKING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


# ─── Policy ──────────────────────────────────────────────────

class PolicyDecision(BaseModel):
    """Result of PolicyEngine.evaluate() for one operation."""
    model_config = ConfigDict(frozen=True)

    operation: str
    tier: RiskTier
    allowed: bool
    reason: str | None = None


class ConfirmationCheck(BaseModel):
    """Result of the confirmation gate for one invocation."""
    model_config = ConfigDict(frozen=True)

    ok: bool
    required: bool = False
    message: str | None = None


# ─── Invocation ──────────────────────────────────────────────

class InvocationRequest(BaseModel):
    """An operation name plus caller-supplied parameters, for one dispatch."""
    operation: str
    params: dict[str, Any] = Field(default_factory=dict)


class InvocationOutcome(BaseModel):
    """Tagged result of a dispatch.

    Either the remote call happened and produced exactly one outcome
    (SUCCESS or REMOTE_FAILURE), or it was blocked before the call
    (POLICY_DENIED or CONFIRMATION_MISSING) and no remote call occurred.
    """
    operation: str
    kind: OutcomeKind
    state: DispatchState
    content: str
    tier: RiskTier = RiskTier.MODERATE
    payload: Any = None
    retryable: bool = False

    @property
    def is_error(self) -> bool:
        return self.kind != OutcomeKind.SUCCESS

    @property
    def remote_called(self) -> bool:
        return self.kind in (OutcomeKind.SUCCESS, OutcomeKind.REMOTE_FAILURE)
