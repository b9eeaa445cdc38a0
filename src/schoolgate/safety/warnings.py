"""
Schoolgate Warning Composer

Builds the human-readable risk message shown in tool descriptions and
in confirmation failures: one fixed sentence per tier, followed by the
operation-specific warning on its own line when one exists.

The two parts are concatenated as-is. A specific warning that repeats
the generic wording is shown twice.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from schoolgate.core.models import RiskTier
from schoolgate.safety.registry import RiskRegistry, default_registry

TIER_WARNINGS: Mapping[RiskTier, str] = MappingProxyType({
    RiskTier.SAFE: "",
    RiskTier.MODERATE: "MODERATE RISK: This operation will modify data in Smartschool.",
    RiskTier.DESTRUCTIVE: (
        "HIGH RISK: This operation will create, modify, or remove important data. "
        "Changes may be difficult to reverse."
    ),
    RiskTier.CRITICAL: (
        "CRITICAL RISK: This operation can permanently delete data or affect "
        "system functionality. Use with extreme caution!"
    ),
})


def compose_warning(
    name: str,
    tier: RiskTier,
    registry: RiskRegistry | None = None,
) -> str:
    """Tier sentence plus the operation-specific warning, if any.

    Returns an empty string for a SAFE operation without a specific warning.
    """
    generic = TIER_WARNINGS[tier]
    specific = (registry or default_registry).specific_warning(name)
    if not specific:
        return generic
    if not generic:
        return specific
    return f"{generic}\n{specific}"
