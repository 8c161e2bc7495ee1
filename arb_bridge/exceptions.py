"""Custom exceptions for the Arbitrum bridge helpers."""


class ArbSdkError(Exception):
    """Base exception for bridge operations."""


class MissingEnvironmentVariableError(ArbSdkError):
    """Raised when a required environment variable is not set."""


class NetworkConfigurationError(ArbSdkError):
    """Raised when network configuration is missing or invalid."""


class TransactionReceiptError(ArbSdkError):
    """Raised when transaction receipt cannot be decoded or processed."""


class TransactionFailedError(ArbSdkError):
    """Raised when a mined transaction reports a failed status."""


class MessageTimeoutError(ArbSdkError):
    """Raised when a cross-chain message does not settle in time."""


class ArtifactNotFoundError(ArbSdkError):
    """Raised when a compiled contract artifact cannot be located."""


class BalanceCheckError(ArbSdkError):
    """Raised when a balance does not match the expected value after bridging."""
