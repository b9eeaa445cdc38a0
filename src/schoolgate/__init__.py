"""
Schoolgate — Safety-Gated Smartschool Tools for AI Agents

Usage:
    from schoolgate import Dispatcher, OperationTable, PolicyConfig, smartschool_catalog

    catalog = smartschool_catalog()
    dispatcher = Dispatcher(
        catalog,
        OperationTable.from_client(client, [spec.remote_name for spec in catalog.get_all()]),
        PolicyConfig.from_env(),
    )
    outcome = await dispatcher.dispatch("smartschool-getUserDetails", {"userIdentifier": "John Doe"})
"""

from schoolgate.config import PolicyConfig, ServerSettings
from schoolgate.core.models import (
    DispatchState,
    InvocationOutcome,
    InvocationRequest,
    OutcomeKind,
    PolicyDecision,
    RiskTier,
)
from schoolgate.remote.client import OperationTable, RemoteClient
from schoolgate.safety.confirmation import CONFIRMATION_FIELD, ConfirmationGate, check_confirmation
from schoolgate.safety.policy import PolicyEngine
from schoolgate.safety.registry import DEFAULT_TIER, RiskRegistry, tier_of
from schoolgate.safety.warnings import compose_warning
from schoolgate.tools import Dispatcher, OperationCatalog, OperationSpec, smartschool_catalog

__version__ = "1.0.0"

__all__ = [
    "CONFIRMATION_FIELD",
    "DEFAULT_TIER",
    "ConfirmationGate",
    "DispatchState",
    "Dispatcher",
    "InvocationOutcome",
    "InvocationRequest",
    "OperationCatalog",
    "OperationSpec",
    "OperationTable",
    "OutcomeKind",
    "PolicyConfig",
    "PolicyDecision",
    "PolicyEngine",
    "RemoteClient",
    "RiskRegistry",
    "RiskTier",
    "ServerSettings",
    "__version__",
    "check_confirmation",
    "compose_warning",
    "smartschool_catalog",
    "tier_of",
]
