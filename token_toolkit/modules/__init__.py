"""
Functional modules for TokenToolkit

Provides:
- TokenConfigStore: Live token settings with load/save lifecycle
- MintInspector: Mint decimals lookup
- AssociatedAccountDeriver: ATA derivation and create instructions
"""

from .settings import TokenConfigStore, TOKEN_CONFIG_KEY, sanitize, create_store
from .mint import MintInspector
from .accounts import (
    AssociatedAccountDeriver,
    derive_address,
    build_create_instruction,
    build_create_idempotent_instruction,
)

__all__ = [
    "TokenConfigStore",
    "TOKEN_CONFIG_KEY",
    "sanitize",
    "create_store",
    "MintInspector",
    "AssociatedAccountDeriver",
    "derive_address",
    "build_create_instruction",
    "build_create_idempotent_instruction",
]
