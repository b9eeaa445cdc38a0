"""
Schoolgate Custom Exceptions

Structured exception hierarchy for the Schoolgate tool layer.
All Schoolgate-specific exceptions inherit from SchoolgateError.

Exception hierarchy:
    SchoolgateError
    +-- ConfigurationError            (invalid process settings)
    +-- CatalogError                  (operation catalog misconfiguration)
    +-- PolicyDeniedError             (tier disabled by configuration, non-retryable)
    +-- ConfirmationMissingError      (confirmation marker absent, retryable)
    +-- RemoteCallError               (remote collaborator failed)
        +-- RemoteOperationNotFoundError  (remote has no such operation)
        +-- RemoteTimeoutError            (remote call exceeded the timeout)

The dispatcher converts every one of these into an InvocationOutcome;
none of them escape Dispatcher.dispatch().
"""

from __future__ import annotations


class SchoolgateError(Exception):
    """Base exception for all Schoolgate errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(SchoolgateError):
    """Raised when process settings cannot be parsed."""

    def __init__(self, setting: str, message: str, details: dict | None = None):
        super().__init__(
            f"Invalid setting {setting}: {message}",
            details={"setting": setting, **(details or {})},
        )
        self.setting = setting


class CatalogError(SchoolgateError):
    """Raised when an operation cannot be registered in the catalog."""

    def __init__(self, operation: str, message: str, details: dict | None = None):
        super().__init__(
            f"Operation '{operation}': {message}",
            details={"operation": operation, **(details or {})},
        )
        self.operation = operation


class PolicyDeniedError(SchoolgateError):
    """Raised when the policy engine refuses an operation for the current config.

    Not retryable: the caller cannot fix this, only the operator can by
    changing the process configuration.
    """

    retryable = False

    def __init__(self, operation: str, reason: str, details: dict | None = None):
        super().__init__(reason, details={"operation": operation, **(details or {})})
        self.operation = operation
        self.reason = reason


class ConfirmationMissingError(SchoolgateError):
    """Raised when a gated operation arrives without the confirmation marker.

    Retryable: the same caller may re-issue the call with the marker set.
    """

    retryable = True

    def __init__(self, operation: str, message: str, details: dict | None = None):
        super().__init__(message, details={"operation": operation, **(details or {})})
        self.operation = operation


class RemoteCallError(SchoolgateError):
    """Raised when the remote collaborator fails an operation.

    The message always names the operation for traceability.
    """

    retryable = False

    def __init__(self, operation: str, message: str, details: dict | None = None):
        super().__init__(
            f"Error in {operation}: {message}",
            details={"operation": operation, **(details or {})},
        )
        self.operation = operation


class RemoteOperationNotFoundError(RemoteCallError):
    """Raised when the remote collaborator does not expose an operation."""

    def __init__(self, operation: str):
        super().__init__(operation, "operation is not available on the remote client")


class RemoteTimeoutError(RemoteCallError):
    """Raised when a remote call does not finish within the configured timeout."""

    def __init__(self, operation: str, timeout: float):
        super().__init__(
            operation,
            f"remote call timed out after {timeout:g}s",
            details={"timeout": timeout},
        )
        self.timeout = timeout
