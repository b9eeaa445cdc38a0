"""
Schoolgate Safety-Gated Tool Layer

Every tool call from an AI agent is routed through the policy engine
and the confirmation gate before it reaches the remote API:

    Agent → host (tool call) → Dispatcher → PolicyEngine / ConfirmationGate → remote client

Components:
- OperationCatalog: statically declared operations, filtered by policy at startup
- Dispatcher: policy check, confirmation check, remote call, result shaping
- OperationSpec: one catalog entry (schema, context, identifier field, enrichers)
- ToolDescriptor: an advertised tool as the host registers it
"""

from schoolgate.tools.catalog import OperationCatalog, smartschool_catalog
from schoolgate.tools.dispatcher import Dispatcher, shape_result
from schoolgate.tools.models import OperationContext, OperationSpec, ToolDescriptor

__all__ = [
    "Dispatcher",
    "OperationCatalog",
    "OperationContext",
    "OperationSpec",
    "ToolDescriptor",
    "shape_result",
    "smartschool_catalog",
]
