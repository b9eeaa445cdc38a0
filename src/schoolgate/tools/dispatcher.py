"""
Schoolgate Dispatcher

The safety component between an agent's tool call and the remote
school-management API. Every invocation goes through:

1. Allowance check    → PolicyEngine.evaluate(), denied tiers stop here
2. Identifier normalization → 'John Doe' becomes 'john.doe' (best effort)
3. Confirmation check → gated tiers need confirmDestructiveAction=true
4. Remote invocation  → exactly one call, optionally under a timeout
5. Result shaping     → text for the agent, payload data left untouched
6. Failure containment → any remote error becomes a failure outcome

A remote call never happens unless step 1 allowed it and, when
required, step 3 found the marker set to the boolean True. Nothing
raised below dispatch() escapes it except cancellation of the caller.
"""

from __future__ import annotations

import asyncio
import json
import time
from collections.abc import Mapping
from functools import partial
from typing import Any

from pydantic import BaseModel

from schoolgate.config import PolicyConfig
from schoolgate.core.models import (
    DispatchState,
    InvocationOutcome,
    InvocationRequest,
    OutcomeKind,
    RiskTier,
)
from schoolgate.domain.conventions import normalize_identifier
from schoolgate.exceptions import (
    ConfigurationError,
    ConfirmationMissingError,
    PolicyDeniedError,
    RemoteCallError,
    RemoteTimeoutError,
)
from schoolgate.logging import get_logger
from schoolgate.remote.client import RemoteClient
from schoolgate.safety.confirmation import CONFIRMATION_FIELD, ConfirmationGate
from schoolgate.safety.policy import PolicyEngine
from schoolgate.tools.catalog import OperationCatalog
from schoolgate.tools.models import OperationSpec

logger = get_logger("schoolgate.dispatch")


class Dispatcher:
    """Runs tool invocations through policy, confirmation and the remote call.

    Holds no mutable state between calls; concurrent dispatches are
    independent. The policy engine is always the catalog's own.
    """

    def __init__(
        self,
        catalog: OperationCatalog,
        remote: RemoteClient,
        config: PolicyConfig | None = None,
        policy: PolicyEngine | None = None,
        timeout: float | None = None,
    ):
        if policy is not None and policy is not catalog.policy:
            raise ConfigurationError(
                "policy", "the dispatcher must use the policy engine of its catalog"
            )
        self._catalog = catalog
        self._remote = remote
        self._config = config or PolicyConfig()
        self._policy = catalog.policy
        self._gate = ConfirmationGate(self._policy)
        self._timeout = timeout

    @property
    def config(self) -> PolicyConfig:
        return self._config

    @property
    def catalog(self) -> OperationCatalog:
        return self._catalog

    @property
    def policy(self) -> PolicyEngine:
        return self._policy

    @property
    def timeout(self) -> float | None:
        return self._timeout

    async def dispatch(self, name: str, params: Mapping[str, Any] | None = None) -> InvocationOutcome:
        """Handle one invocation and return its outcome."""
        operation = self._catalog.operation_name(name)
        spec = self._catalog.get(operation)
        request = InvocationRequest(
            operation=operation,
            params={str(k): v for k, v in (params or {}).items()},
        )
        tier = self._policy.tier_of(operation)
        param_keys = sorted(request.params)

        logger.debug(
            "Dispatch received",
            extra={"operation": operation, "state": DispatchState.RECEIVED.value,
                   "param_keys": param_keys},
        )

        # 1. Allowance
        try:
            self._check_allowed(operation)
        except PolicyDeniedError as e:
            return self._blocked(request, tier, OutcomeKind.POLICY_DENIED,
                                 DispatchState.DENIED, e.reason, retryable=e.retryable)

        # 2. Identifier normalization
        params_out = self._normalize(spec, request.params)

        # 3. Confirmation
        try:
            self._check_confirmed(operation, request.params)
        except ConfirmationMissingError as e:
            return self._blocked(request, tier, OutcomeKind.CONFIRMATION_MISSING,
                                 DispatchState.CONFIRMATION_FAILED, str(e), retryable=e.retryable)

        params_out.pop(CONFIRMATION_FIELD, None)
        remote_name = spec.remote_name if spec is not None else operation

        # 4. Remote invocation
        logger.info(
            "Executing %s", operation,
            extra={"operation": operation, "risk_tier": tier.value,
                   "state": DispatchState.INVOKING.value, "param_keys": sorted(params_out)},
        )
        start = time.monotonic()
        try:
            result = await self._invoke(operation, remote_name, params_out)
        except Exception as e:
            # 6. Failure containment
            duration_ms = (time.monotonic() - start) * 1000
            error = e if isinstance(e, RemoteCallError) else RemoteCallError(operation, _error_text(e))
            logger.error(
                "Remote call failed: %s", error,
                extra={"operation": operation, "outcome": OutcomeKind.REMOTE_FAILURE.value,
                       "state": DispatchState.FAILED.value, "duration_ms": round(duration_ms, 2)},
            )
            return InvocationOutcome(
                operation=operation,
                kind=OutcomeKind.REMOTE_FAILURE,
                state=DispatchState.FAILED,
                content=str(error),
                tier=tier,
                retryable=error.retryable,
            )

        duration_ms = (time.monotonic() - start) * 1000

        # 5. Result shaping
        content = shape_result(operation, result, spec)
        logger.info(
            "%s completed", operation,
            extra={"operation": operation, "outcome": OutcomeKind.SUCCESS.value,
                   "state": DispatchState.SUCCEEDED.value, "duration_ms": round(duration_ms, 2)},
        )
        return InvocationOutcome(
            operation=operation,
            kind=OutcomeKind.SUCCESS,
            state=DispatchState.SUCCEEDED,
            content=content,
            tier=tier,
            payload=result,
        )

    async def run(self, request: InvocationRequest) -> InvocationOutcome:
        return await self.dispatch(request.operation, request.params)

    def _check_allowed(self, operation: str) -> None:
        decision = self._policy.evaluate(operation, self._config)
        if not decision.allowed:
            raise PolicyDeniedError(operation, decision.reason or "Operation is disabled")

    def _check_confirmed(self, operation: str, params: Mapping[str, Any]) -> None:
        check = self._gate.check(operation, params, self._config)
        if not check.ok:
            raise ConfirmationMissingError(operation, check.message or "Confirmation required")

    def _normalize(self, spec: OperationSpec | None, params: dict[str, Any]) -> dict[str, Any]:
        """Copy of params with the person identifier normalized, if any."""
        out = dict(params)
        if spec is None or spec.identifier_field is None:
            return out
        field = spec.identifier_field
        if field not in out:
            return out
        original = out[field]
        try:
            normalized = normalize_identifier(original)
        except Exception:
            logger.debug("Identifier normalization skipped", exc_info=True,
                         extra={"operation": spec.name})
            return out
        if normalized != original:
            logger.info(
                "Normalized %s to username format", field,
                extra={"operation": spec.name},
            )
            out[field] = normalized
        return out

    async def _invoke(self, operation: str, remote_name: str, params: dict[str, Any]) -> Any:
        call = self._remote.call(remote_name, params)
        if self._timeout is not None:
            call = asyncio.wait_for(call, timeout=self._timeout)
        # Shielded: a caller-side cancellation does not abort a call in flight
        task = asyncio.ensure_future(call)
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            task.add_done_callback(partial(_report_orphaned, operation))
            raise
        except asyncio.TimeoutError:
            if self._timeout is None:
                raise
            raise RemoteTimeoutError(operation, self._timeout) from None

    def _blocked(
        self,
        request: InvocationRequest,
        tier: RiskTier,
        kind: OutcomeKind,
        state: DispatchState,
        message: str,
        retryable: bool,
    ) -> InvocationOutcome:
        logger.warning(
            "Blocked %s: %s", request.operation, message.splitlines()[0] if message else "",
            extra={"operation": request.operation, "risk_tier": tier.value,
                   "outcome": kind.value, "state": state.value},
        )
        return InvocationOutcome(
            operation=request.operation,
            kind=kind,
            state=state,
            content=message,
            tier=tier,
            retryable=retryable,
        )


# ─── Result shaping ──────────────────────────────────────────

def shape_result(operation: str, result: Any, spec: OperationSpec | None = None) -> str:
    """Render a remote result as text for the agent.

    True becomes a success message, structured values are serialized as
    JSON (with enrichment annotations appended after the data) and
    anything else is stringified.
    """
    if result is True:
        return f"{operation} completed successfully"

    if isinstance(result, (Mapping, list, tuple, BaseModel)):
        try:
            serialized = _serialize(result)
        except (TypeError, ValueError):
            logger.debug("Unexpected result shape", extra={"operation": operation})
            return f"{operation} returned: {result}"

        text = f"{operation} result:\n{serialized}"
        for enrich in (spec.enrichers if spec is not None else ()):
            try:
                note = enrich(result, serialized)
            except Exception:
                logger.debug("Result enricher failed", exc_info=True,
                             extra={"operation": operation})
                continue
            if note:
                text += f"\n\n{note}"
        return text

    return f"{operation} returned: {result}"


def _serialize(result: Any) -> str:
    if isinstance(result, BaseModel):
        result = result.model_dump(mode="json")
    return json.dumps(result, indent=2, ensure_ascii=False, default=str)


def _error_text(error: BaseException) -> str:
    text = str(error)
    return text if text else f"An unexpected error occurred ({type(error).__name__})"


def _report_orphaned(operation: str, task: asyncio.Future) -> None:
    """Retrieve and log the result of a call whose caller was cancelled."""
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.error(
            "Remote call for %s failed after the caller was cancelled: %s",
            operation, _error_text(error),
            extra={"operation": operation, "outcome": OutcomeKind.REMOTE_FAILURE.value,
                   "state": DispatchState.FAILED.value},
        )
