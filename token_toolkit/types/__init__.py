"""
Type definitions for Token Toolkit
"""

from .amount import (
    U64_MAX,
    MAX_DECIMALS,
    SOL_DECIMALS,
    to_base_units,
    from_base_units,
    lamports_to_sol,
)
from .address import PUBKEY_LENGTH, is_valid_address, parse_address
from .token_config import TokenConfig, DEFAULT_TOKEN_CONFIG, DEFAULT_SYMBOL, DEFAULT_DECIMALS
from .result import OpResult, OpStatus

__all__ = [
    # Amounts
    "U64_MAX",
    "MAX_DECIMALS",
    "SOL_DECIMALS",
    "to_base_units",
    "from_base_units",
    "lamports_to_sol",
    # Addresses
    "PUBKEY_LENGTH",
    "is_valid_address",
    "parse_address",
    # Settings
    "TokenConfig",
    "DEFAULT_TOKEN_CONFIG",
    "DEFAULT_SYMBOL",
    "DEFAULT_DECIMALS",
    # Results
    "OpResult",
    "OpStatus",
]
