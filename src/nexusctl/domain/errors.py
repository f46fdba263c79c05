"""Failure taxonomy for the transaction pipeline.

Every error is terminal for the current invocation. Each carries a stable
``code`` and a ``detail`` dict with enough context (object id, expected
type signature, network tier) to diagnose without verbose logging. The
service layer converts them into a failed ServiceResult.
"""

from __future__ import annotations

from typing import Any


class NexusError(Exception):
    """Base class for all pipeline failures."""

    code = "NEXUS_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail: dict[str, Any] = detail


class InsufficientFunds(NexusError):
    code = "INSUFFICIENT_FUNDS"


class ObjectNotFound(NexusError):
    code = "OBJECT_NOT_FOUND"


class DuplicateFundingObject(NexusError):
    code = "DUPLICATE_FUNDING_OBJECT"


class TransactionBuildFailed(NexusError):
    code = "TRANSACTION_BUILD_FAILED"


class SubmissionFailed(NexusError):
    code = "SUBMISSION_FAILED"


class ArtifactNotFound(NexusError):
    code = "ARTIFACT_NOT_FOUND"


class ConfigurationMissing(NexusError):
    code = "CONFIGURATION_MISSING"


class NoActiveAddress(ConfigurationMissing):
    code = "NO_ACTIVE_ADDRESS"


class RpcError(NexusError):
    """A read against the ledger or a tool endpoint failed."""

    code = "RPC_FAILED"


class TopUpFailed(NexusError):
    """The faucet refused or could not be reached."""

    code = "TOP_UP_FAILED"
