"""
Exception definitions for Token Toolkit
"""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """
    Unified error codes for token toolkit operations

    1xxx - Amount errors
    2xxx - Address errors
    3xxx - Settings/storage errors
    4xxx - Chain query errors
    5xxx - Signer errors
    9xxx - Configuration errors
    """
    # Amount errors
    AMOUNT_INVALID_FORMAT = "1001"
    AMOUNT_TOO_LARGE = "1002"

    # Address errors
    ADDRESS_INVALID = "2001"
    ADDRESS_OFF_CURVE = "2002"

    # Settings/storage errors
    SETTINGS_INVALID = "3001"
    STORAGE_FAILED = "3002"

    # Chain query errors (recoverable)
    CHAIN_QUERY_FAILED = "4001"
    RPC_CONNECTION_FAILED = "4002"
    RPC_TIMEOUT = "4003"
    RPC_RATE_LIMITED = "4004"
    RPC_INVALID_RESPONSE = "4005"

    # Signer errors
    SIGNER_NOT_CONNECTED = "5001"
    SIGNER_FAILED = "5002"

    # Configuration errors
    CONFIG_INVALID = "9001"
    CONFIG_MISSING = "9002"


class TokenToolkitError(Exception):
    """
    Base exception for all token toolkit errors

    Attributes:
        message: Human-readable error message (used as the detail line)
        code: Error code for programmatic handling
        recoverable: Whether the error might succeed on retry
        original_error: The underlying exception if any
        details: Additional error context
        title: Short user-facing title
    """

    title = "Operation failed"

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        recoverable: bool = False,
        original_error: Optional[Exception] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.recoverable = recoverable
        self.original_error = original_error
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"

    @property
    def should_retry(self) -> bool:
        """Indicate if the operation should be retried"""
        return self.recoverable


class InvalidNumberFormat(TokenToolkitError):
    """
    Amount input does not parse as an unsigned decimal

    Raised when:
    - Input contains anything but digits and one decimal point
    - Input is negative, NaN or infinite
    - Precision (decimals) is not a non-negative integer
    """

    title = "Invalid amount"

    def __init__(self, message: str, value: Optional[object] = None):
        super().__init__(
            message,
            ErrorCode.AMOUNT_INVALID_FORMAT,
            recoverable=False,
            details={"value": repr(value)},
        )
        self.value = value

    @classmethod
    def bad_amount(cls, value: object) -> "InvalidNumberFormat":
        return cls(f"Invalid number: {value!r}", value=value)

    @classmethod
    def bad_decimals(cls, decimals: object) -> "InvalidNumberFormat":
        return cls(f"Decimals must be a non-negative integer, got {decimals!r}", value=decimals)


class AmountTooLarge(TokenToolkitError):
    """
    Base-unit amount exceeds the u64 amount domain
    """

    title = "Amount too large"

    def __init__(self, message: str, amount: Optional[int] = None, limit: Optional[int] = None):
        super().__init__(
            message,
            ErrorCode.AMOUNT_TOO_LARGE,
            recoverable=False,
            details={"amount": str(amount) if amount is not None else None, "limit": limit},
        )
        self.amount = amount
        self.limit = limit

    @classmethod
    def exceeds(cls, amount: int, limit: int) -> "AmountTooLarge":
        return cls(
            f"Amount {amount} base units exceeds maximum {limit}",
            amount=amount,
            limit=limit,
        )


class InvalidAddress(TokenToolkitError):
    """
    Address is not a base58 32-byte public key

    Raised when:
    - Address does not decode as base58
    - Decoded length is not 32 bytes
    - Owner is off-curve where an on-curve owner is required
    """

    title = "Invalid address"

    def __init__(
        self,
        message: str,
        address: Optional[str] = None,
        field: str = "address",
        code: ErrorCode = ErrorCode.ADDRESS_INVALID,
    ):
        super().__init__(
            message,
            code,
            recoverable=False,
            details={"address": address, "field": field},
        )
        self.address = address
        self.field = field

    @classmethod
    def for_field(cls, field: str, address: object) -> "InvalidAddress":
        return cls(
            f"Invalid {field}: {address!r}",
            address=address if isinstance(address, str) else repr(address),
            field=field,
        )

    @classmethod
    def off_curve(cls, owner: str) -> "InvalidAddress":
        return cls(
            f"Owner {owner} is off the ed25519 curve; pass allow_owner_off_curve=True for PDA owners",
            address=owner,
            field="owner",
            code=ErrorCode.ADDRESS_OFF_CURVE,
        )


class ValidationError(TokenToolkitError):
    """
    Token settings rejected on save

    The live record is left untouched when this is raised.
    """

    title = "Save failed"

    def __init__(self, message: str, field: str, value: Optional[object] = None):
        super().__init__(
            message,
            ErrorCode.SETTINGS_INVALID,
            recoverable=False,
            details={"field": field, "value": repr(value)},
        )
        self.field = field
        self.value = value

    @classmethod
    def invalid_field(cls, field: str, value: object, reason: str) -> "ValidationError":
        return cls(f"{field} invalid: {reason}", field=field, value=value)


class StorageError(TokenToolkitError):
    """
    Durable key-value storage could not be read or written
    """

    title = "Storage unavailable"

    def __init__(self, message: str, key: Optional[str] = None, original_error: Optional[Exception] = None):
        super().__init__(
            message,
            ErrorCode.STORAGE_FAILED,
            recoverable=False,
            original_error=original_error,
            details={"key": key},
        )
        self.key = key

    @classmethod
    def read_failed(cls, key: str, error: Exception) -> "StorageError":
        return cls(f"Failed to read '{key}': {error}", key=key, original_error=error)

    @classmethod
    def write_failed(cls, key: str, error: Exception) -> "StorageError":
        return cls(f"Failed to write '{key}': {error}", key=key, original_error=error)


class RpcError(TokenToolkitError):
    """
    RPC-related errors - typically recoverable

    Raised when:
    - Connection to RPC endpoint fails
    - Request times out
    - Rate limit is hit
    - Invalid response received
    """

    title = "RPC error"

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.RPC_CONNECTION_FAILED,
        original_error: Optional[Exception] = None,
        endpoint: Optional[str] = None,
    ):
        super().__init__(
            message,
            code,
            recoverable=True,
            original_error=original_error,
            details={"endpoint": endpoint} if endpoint else None,
        )
        self.endpoint = endpoint

    @classmethod
    def connection_failed(cls, endpoint: str, error: Exception = None) -> "RpcError":
        return cls(
            f"Failed to connect to RPC endpoint: {endpoint}",
            ErrorCode.RPC_CONNECTION_FAILED,
            original_error=error,
            endpoint=endpoint,
        )

    @classmethod
    def timeout(cls, endpoint: str, timeout_seconds: float) -> "RpcError":
        return cls(
            f"RPC request timed out after {timeout_seconds}s",
            ErrorCode.RPC_TIMEOUT,
            endpoint=endpoint,
        )

    @classmethod
    def rate_limited(cls, endpoint: str) -> "RpcError":
        return cls(
            "RPC rate limit exceeded",
            ErrorCode.RPC_RATE_LIMITED,
            endpoint=endpoint,
        )

    @classmethod
    def invalid_response(cls, endpoint: str, reason: str) -> "RpcError":
        return cls(
            f"Invalid RPC response: {reason}",
            ErrorCode.RPC_INVALID_RESPONSE,
            endpoint=endpoint,
        )


class ChainQueryFailed(TokenToolkitError):
    """
    Chain-query collaborator failed while inspecting a mint

    Wraps whatever the collaborator raised (network error, account not
    found, deserialization error). Never retried here.
    """

    title = "Detect failed"

    def __init__(self, message: str, mint: Optional[str] = None, original_error: Optional[Exception] = None):
        super().__init__(
            message,
            ErrorCode.CHAIN_QUERY_FAILED,
            recoverable=True,
            original_error=original_error,
            details={"mint": mint},
        )
        self.mint = mint

    @classmethod
    def wrap(cls, mint: str, error: Exception) -> "ChainQueryFailed":
        reason = getattr(error, "message", None) or str(error) or error.__class__.__name__
        return cls(reason, mint=mint, original_error=error)

    @classmethod
    def not_found(cls, mint: str) -> "ChainQueryFailed":
        return cls(f"Mint account not found: {mint}", mint=mint)


class NotConnected(TokenToolkitError):
    """
    Wallet is absent or cannot sign

    Raised when:
    - No wallet handle is present
    - Wallet exposes no public key
    - Wallet has no signing capability
    """

    title = "Connect wallet"

    def __init__(self, message: str = "Connect wallet", missing: Optional[str] = None):
        super().__init__(
            message,
            ErrorCode.SIGNER_NOT_CONNECTED,
            recoverable=False,
            details={"missing": missing},
        )
        self.missing = missing

    @classmethod
    def missing_wallet(cls) -> "NotConnected":
        return cls("No wallet connected", missing="wallet")

    @classmethod
    def missing_public_key(cls) -> "NotConnected":
        return cls("Wallet has no public key", missing="public_key")

    @classmethod
    def missing_signer(cls) -> "NotConnected":
        return cls("Wallet cannot sign transactions", missing="sign_transaction")


class SignerError(TokenToolkitError):
    """
    Signing operation failed after the gate was passed
    """

    title = "Signing failed"

    def __init__(self, message: str, code: ErrorCode = ErrorCode.SIGNER_FAILED):
        super().__init__(message, code, recoverable=False)

    @classmethod
    def failed(cls, reason: str) -> "SignerError":
        return cls(f"Signing failed: {reason}")


class ConfigurationError(TokenToolkitError):
    """
    Configuration-related errors

    Raised when:
    - Required configuration is missing
    - Configuration values are invalid
    """

    title = "Configuration error"

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
    ):
        super().__init__(message, code, recoverable=False)

    @classmethod
    def missing(cls, param: str) -> "ConfigurationError":
        return cls(f"Missing required configuration: {param}", ErrorCode.CONFIG_MISSING)

    @classmethod
    def invalid(cls, param: str, reason: str) -> "ConfigurationError":
        return cls(f"Invalid configuration '{param}': {reason}", ErrorCode.CONFIG_INVALID)
