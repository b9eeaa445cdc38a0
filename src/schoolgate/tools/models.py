"""
Schoolgate Tool Models

Types for the statically declared operation catalog. Each remote
operation is declared once at startup with an explicit parameter
schema, its agent-facing context and any result enrichers. Risk tiers
live in the RiskRegistry, not here, so classification has a single
source of truth.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field

from schoolgate.core.models import RiskTier

# (payload, serialized payload) -> annotation text or None
ResultEnricher = Callable[[Any, str], "str | None"]


class OperationContext(BaseModel):
    """Agent-facing explanation of what an operation is for."""
    description: str
    use_case: str = "API method execution"
    category: str = "General"
    examples: list[str] = Field(default_factory=list)
    domain_context: str = ""


@dataclass(frozen=True)
class OperationSpec:
    """A catalog entry for one remote operation."""
    name: str
    input_schema: dict = field(default_factory=lambda: {"type": "object", "properties": {}})
    context: OperationContext | None = None
    identifier_field: str | None = None
    enrichers: tuple[ResultEnricher, ...] = ()
    handler_name: str | None = None

    @property
    def remote_name(self) -> str:
        return self.handler_name or self.name

    def resolved_context(self) -> OperationContext:
        if self.context is not None:
            return self.context
        return OperationContext(description=f"Execute {self.name} on Smartschool API")


class ToolDescriptor(BaseModel):
    """An advertised tool: what the host registers with the agent."""
    name: str
    operation: str
    description: str
    input_schema: dict
    tier: RiskTier
    requires_confirmation: bool = False
