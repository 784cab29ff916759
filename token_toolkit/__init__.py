"""
Token Toolkit - Solana token settings and amount handling

Provides:
- Token settings record with durable load/save
- Decimal-safe display/base-unit amount conversion
- Address validation
- Mint decimals detection over RPC
- Associated token account derivation and create instructions
- Signer gate for wallet-authorized operations
"""

from .client import TokenToolkit
from .types import (
    TokenConfig,
    OpResult,
    OpStatus,
    to_base_units,
    from_base_units,
    lamports_to_sol,
    is_valid_address,
    parse_address,
)
from .errors import (
    ErrorCode,
    TokenToolkitError,
    InvalidNumberFormat,
    AmountTooLarge,
    InvalidAddress,
    ValidationError,
    ChainQueryFailed,
    NotConnected,
)
from .modules import TokenConfigStore, MintInspector, AssociatedAccountDeriver
from .infra import RpcClient, LocalSigner, MemoryStorage, JsonFileStorage, require_signer

__all__ = [
    # Client
    "TokenToolkit",
    # Types
    "TokenConfig",
    "OpResult",
    "OpStatus",
    "to_base_units",
    "from_base_units",
    "lamports_to_sol",
    "is_valid_address",
    "parse_address",
    # Errors
    "ErrorCode",
    "TokenToolkitError",
    "InvalidNumberFormat",
    "AmountTooLarge",
    "InvalidAddress",
    "ValidationError",
    "ChainQueryFailed",
    "NotConnected",
    # Modules
    "TokenConfigStore",
    "MintInspector",
    "AssociatedAccountDeriver",
    # Infra
    "RpcClient",
    "LocalSigner",
    "MemoryStorage",
    "JsonFileStorage",
    "require_signer",
]
