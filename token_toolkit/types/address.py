"""
Solana address validation
"""

from typing import Union

import base58
from solders.pubkey import Pubkey

from ..errors import InvalidAddress


PUBKEY_LENGTH = 32


def is_valid_address(value: object) -> bool:
    """
    Check that a string is a base58-encoded 32-byte public key

    Never raises; anything that is not a decodable string is invalid.
    """
    if not isinstance(value, str) or not value:
        return False
    # b58decode strips trailing whitespace; a padded string is not an address
    if value != value.strip():
        return False
    try:
        return len(base58.b58decode(value)) == PUBKEY_LENGTH
    except ValueError:
        return False


def parse_address(value: Union[str, Pubkey], field: str = "address") -> Pubkey:
    """
    Parse a base58 address into a Pubkey

    Args:
        value: Base58 string or Pubkey (returned unchanged)
        field: Field name reported in the error

    Raises:
        InvalidAddress: If the value is not a valid address
    """
    if isinstance(value, Pubkey):
        return value
    if not is_valid_address(value):
        raise InvalidAddress.for_field(field, value)
    try:
        return Pubkey.from_string(value)
    except ValueError as e:
        raise InvalidAddress.for_field(field, value) from e
