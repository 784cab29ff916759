"""
Error definitions for Token Toolkit
"""

from .exceptions import (
    ErrorCode,
    TokenToolkitError,
    InvalidNumberFormat,
    AmountTooLarge,
    InvalidAddress,
    ValidationError,
    StorageError,
    RpcError,
    ChainQueryFailed,
    NotConnected,
    SignerError,
    ConfigurationError,
)

__all__ = [
    "ErrorCode",
    "TokenToolkitError",
    "InvalidNumberFormat",
    "AmountTooLarge",
    "InvalidAddress",
    "ValidationError",
    "StorageError",
    "RpcError",
    "ChainQueryFailed",
    "NotConnected",
    "SignerError",
    "ConfigurationError",
]
