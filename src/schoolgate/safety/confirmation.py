"""
Schoolgate Confirmation Gate

Checks that a gated call carries the confirmation marker set to the
literal boolean True. Loosely-typed look-alikes (1, "true", "1", 1.0)
do not count.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from schoolgate.config import PolicyConfig
from schoolgate.core.models import ConfirmationCheck
from schoolgate.safety.policy import PolicyEngine
from schoolgate.safety.warnings import compose_warning

CONFIRMATION_FIELD = "confirmDestructiveAction"


def is_confirmed(params: Mapping[str, Any]) -> bool:
    """True only when the marker is present and is the bool True itself."""
    return params.get(CONFIRMATION_FIELD) is True


def confirmation_instruction() -> str:
    return (
        f"To proceed, call this operation again with "
        f"{CONFIRMATION_FIELD} set to true (boolean)."
    )


class ConfirmationGate:
    """Rejects gated invocations that lack the confirmation marker."""

    def __init__(self, policy: PolicyEngine | None = None):
        self._policy = policy or PolicyEngine()

    def check(
        self,
        name: str,
        params: Mapping[str, Any],
        config: PolicyConfig,
    ) -> ConfirmationCheck:
        if not self._policy.requires_confirmation(name, config):
            return ConfirmationCheck(ok=True, required=False)

        if is_confirmed(params):
            return ConfirmationCheck(ok=True, required=True)

        warning = compose_warning(name, self._policy.tier_of(name), self._policy.registry)
        lines = [f"Confirmation required for {name}."]
        if warning:
            lines.append(warning)
        lines.append(confirmation_instruction())
        return ConfirmationCheck(ok=False, required=True, message="\n".join(lines))


def check_confirmation(
    name: str,
    params: Mapping[str, Any],
    config: PolicyConfig,
    policy: PolicyEngine | None = None,
) -> ConfirmationCheck:
    """Functional form of ConfirmationGate.check()."""
    return ConfirmationGate(policy).check(name, params, config)
