"""
Infrastructure layer for Token Toolkit

Provides:
- RpcClient: Async JSON-RPC wrapper with mint decoding
- Storage: Durable key-value media for settings
- Signer: Wallet protocol, local keypair wallet and signer gate
"""

from .rpc import RpcClient, RpcClientConfig, ChainQuery, MintInfo, parse_mint_account
from .storage import KeyValueStorage, MemoryStorage, JsonFileStorage, create_storage
from .signer import (
    Wallet,
    SignerHandle,
    LocalSigner,
    require_signer,
    create_signer,
)

__all__ = [
    # RPC
    "RpcClient",
    "RpcClientConfig",
    "ChainQuery",
    "MintInfo",
    "parse_mint_account",
    # Storage
    "KeyValueStorage",
    "MemoryStorage",
    "JsonFileStorage",
    "create_storage",
    # Signer
    "Wallet",
    "SignerHandle",
    "LocalSigner",
    "require_signer",
    "create_signer",
]
