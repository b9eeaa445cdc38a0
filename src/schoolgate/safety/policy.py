"""
Schoolgate Policy Engine

Decides whether an operation may run at all under the current
PolicyConfig, and whether it needs an explicit confirmation marker.

Decision matrix:
  SAFE        + any                    -> allowed
  MODERATE    + any                    -> allowed
  DESTRUCTIVE + allow_destructive=False -> denied
  DESTRUCTIVE + allow_destructive=True  -> allowed
  CRITICAL    + allow_destructive=False -> denied
  CRITICAL    + allow_destructive=True  -> allowed

Confirmation is required for DESTRUCTIVE and CRITICAL operations unless
require_confirmation is switched off globally.

The same engine serves the startup catalog filter and the per-call
check, so an operation hidden from the catalog is also refused at call
time and vice versa.
"""

from __future__ import annotations

from schoolgate.config import ALLOW_DESTRUCTIVE_ENV, PolicyConfig
from schoolgate.core.models import PolicyDecision, RiskTier
from schoolgate.safety.registry import RiskRegistry, default_registry


class PolicyEngine:
    """Composes risk registry lookups with the two configuration switches."""

    def __init__(self, registry: RiskRegistry | None = None):
        self._registry = registry or default_registry

    @property
    def registry(self) -> RiskRegistry:
        return self._registry

    def tier_of(self, name: str) -> RiskTier:
        return self._registry.tier_of(name)

    def evaluate(self, name: str, config: PolicyConfig) -> PolicyDecision:
        """Allow or deny an operation for the given configuration."""
        tier = self._registry.tier_of(name)

        # Separate branches so the operator sees which tier was refused
        if tier == RiskTier.CRITICAL and not config.allow_destructive:
            return PolicyDecision(
                operation=name,
                tier=tier,
                allowed=False,
                reason=(
                    f"CRITICAL operations are disabled. "
                    f"Set {ALLOW_DESTRUCTIVE_ENV}=true to enable."
                ),
            )

        if tier == RiskTier.DESTRUCTIVE and not config.allow_destructive:
            return PolicyDecision(
                operation=name,
                tier=tier,
                allowed=False,
                reason=(
                    f"DESTRUCTIVE operations are disabled. "
                    f"Set {ALLOW_DESTRUCTIVE_ENV}=true to enable."
                ),
            )

        return PolicyDecision(operation=name, tier=tier, allowed=True)

    def requires_confirmation(self, name: str, config: PolicyConfig) -> bool:
        """Whether a call to this operation must carry the confirmation marker."""
        if not config.require_confirmation:
            return False
        return self._registry.tier_of(name) in (RiskTier.DESTRUCTIVE, RiskTier.CRITICAL)
