"""
Schoolgate Operation Catalog

Central registry of every remote operation the agent may be offered.
Entries are declared once at startup (no runtime introspection of the
remote client) and queried per process configuration.

The catalog only advertises operations the PolicyEngine allows for the
current PolicyConfig; the Dispatcher enforces the same decision at call
time with the same engine.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable

from schoolgate.config import DEFAULT_TOOL_PREFIX, PolicyConfig
from schoolgate.core.models import RiskTier
from schoolgate.domain.conventions import DOMAIN_KNOWLEDGE
from schoolgate.exceptions import CatalogError
from schoolgate.logging import get_logger
from schoolgate.safety.confirmation import CONFIRMATION_FIELD
from schoolgate.safety.policy import PolicyEngine
from schoolgate.safety.warnings import compose_warning
from schoolgate.tools.models import OperationSpec, ToolDescriptor

logger = get_logger("schoolgate.catalog")

_CONFIRM_DESTRUCTIVE = "REQUIRED: Set to true to confirm this destructive operation"
_CONFIRM_CRITICAL = (
    "REQUIRED: Set to true to confirm this CRITICAL operation that may permanently delete data"
)


class OperationCatalog:
    """Statically declared operations with policy-aware advertising.

    Operations are registered once at startup and never created or
    destroyed afterwards.
    """

    def __init__(
        self,
        specs: Iterable[OperationSpec] = (),
        policy: PolicyEngine | None = None,
        tool_prefix: str = DEFAULT_TOOL_PREFIX,
    ) -> None:
        self._specs: dict[str, OperationSpec] = {}
        self._policy = policy or PolicyEngine()
        self._tool_prefix = tool_prefix
        for spec in specs:
            self.register(spec)

    @property
    def policy(self) -> PolicyEngine:
        return self._policy

    @property
    def tool_prefix(self) -> str:
        return self._tool_prefix

    def register(self, spec: OperationSpec) -> None:
        """Add an operation.

        Raises CatalogError on duplicate names or when the schema declares
        the reserved confirmation field.
        """
        if spec.name in self._specs:
            raise CatalogError(spec.name, "already registered")
        properties = spec.input_schema.get("properties", {})
        if CONFIRMATION_FIELD in properties:
            raise CatalogError(
                spec.name,
                f"parameter '{CONFIRMATION_FIELD}' is reserved for the confirmation gate",
            )
        self._specs[spec.name] = spec

    def get(self, name: str) -> OperationSpec | None:
        """Look up an operation by bare name or advertised tool name."""
        return self._specs.get(self.operation_name(name))

    def operation_name(self, name: str) -> str:
        """Strip the tool prefix from an advertised tool name."""
        if self._tool_prefix and name.startswith(self._tool_prefix):
            return name[len(self._tool_prefix):]
        return name

    def tool_name(self, operation: str) -> str:
        return f"{self._tool_prefix}{operation}"

    def get_all(self) -> list[OperationSpec]:
        return list(self._specs.values())

    def advertised(self, config: PolicyConfig) -> list[OperationSpec]:
        """Operations the policy allows under this configuration.

        Denied operations are logged and left out entirely.
        """
        result: list[OperationSpec] = []
        for spec in self._specs.values():
            decision = self._policy.evaluate(spec.name, config)
            if not decision.allowed:
                logger.warning(
                    "Skipping %s", spec.name,
                    extra={"operation": spec.name, "risk_tier": decision.tier.value,
                           "reason": decision.reason},
                )
                continue
            result.append(spec)
        return result

    def is_advertised(self, name: str, config: PolicyConfig) -> bool:
        spec = self.get(name)
        return spec is not None and self._policy.evaluate(spec.name, config).allowed

    def describe(self, spec: OperationSpec) -> str:
        """Agent-facing description: context, risk warning and domain knowledge."""
        context = spec.resolved_context()
        tier = self._policy.tier_of(spec.name)
        warning = compose_warning(spec.name, tier, self._policy.registry)

        parts = [
            context.description,
            "",
            f"Use Case: {context.use_case}",
            f"Category: {context.category}",
        ]
        if context.examples:
            parts.append(f"Examples: {', '.join(context.examples)}")
        if context.domain_context:
            parts.extend(["", f"Smartschool Context: {context.domain_context}"])
        if warning:
            parts.extend(["", warning])
        parts.extend(["", DOMAIN_KNOWLEDGE])
        return "\n".join(parts).strip()

    def input_schema(self, spec: OperationSpec, config: PolicyConfig) -> dict:
        """Parameter schema, with the confirmation marker added when required."""
        schema = copy.deepcopy(spec.input_schema)
        if not self._policy.requires_confirmation(spec.name, config):
            return schema

        tier = self._policy.tier_of(spec.name)
        schema.setdefault("properties", {})[CONFIRMATION_FIELD] = {
            "type": "boolean",
            "const": True,
            "description": _CONFIRM_CRITICAL if tier == RiskTier.CRITICAL else _CONFIRM_DESTRUCTIVE,
        }
        required = schema.setdefault("required", [])
        if CONFIRMATION_FIELD not in required:
            required.append(CONFIRMATION_FIELD)
        return schema

    def descriptors(self, config: PolicyConfig) -> list[ToolDescriptor]:
        """Tool descriptors for every advertised operation."""
        return [
            ToolDescriptor(
                name=self.tool_name(spec.name),
                operation=spec.name,
                description=self.describe(spec),
                input_schema=self.input_schema(spec, config),
                tier=self._policy.tier_of(spec.name),
                requires_confirmation=self._policy.requires_confirmation(spec.name, config),
            )
            for spec in self.advertised(config)
        ]

    def __len__(self) -> int:
        return len(self._specs)

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None


def smartschool_catalog(
    policy: PolicyEngine | None = None,
    tool_prefix: str = DEFAULT_TOOL_PREFIX,
) -> OperationCatalog:
    """Catalog preloaded with every Smartschool operation."""
    from schoolgate.domain.operations import smartschool_operations

    return OperationCatalog(smartschool_operations(), policy=policy, tool_prefix=tool_prefix)
