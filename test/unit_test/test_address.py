"""
Address Validation Unit Tests
"""

import sys
from pathlib import Path

import base58
import pytest
from solders.pubkey import Pubkey

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from token_toolkit.types.address import is_valid_address, parse_address
from token_toolkit.errors import InvalidAddress

USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


class TestIsValidAddress:
    """Tests for is_valid_address"""

    def test_empty(self):
        assert is_valid_address("") is False

    def test_32_byte_key(self):
        assert is_valid_address(USDC_MINT) is True
        assert is_valid_address("11111111111111111111111111111111") is True

    def test_31_byte_key(self):
        short = base58.b58encode(bytes(range(1, 32))).decode()
        assert is_valid_address(short) is False

    def test_33_byte_key(self):
        long = base58.b58encode(bytes(range(1, 34))).decode()
        assert is_valid_address(long) is False

    def test_invalid_characters(self):
        """0, O, I and l are not in the base58 alphabet"""
        assert is_valid_address("0" * 44) is False
        assert is_valid_address("not-an-address") is False

    def test_non_string(self):
        assert is_valid_address(None) is False
        assert is_valid_address(12345) is False
        assert is_valid_address(b"bytes") is False

    def test_non_ascii(self):
        assert is_valid_address("ñ" * 44) is False

    def test_whitespace_padding(self):
        """Trailing whitespace is ignored by the decoder but is not part of an address"""
        assert is_valid_address(USDC_MINT + " ") is False
        assert is_valid_address(USDC_MINT + "\n") is False
        assert is_valid_address(" " + USDC_MINT) is False


class TestParseAddress:
    """Tests for parse_address"""

    def test_returns_pubkey(self):
        pubkey = parse_address(USDC_MINT)
        assert isinstance(pubkey, Pubkey)
        assert str(pubkey) == USDC_MINT

    def test_pubkey_passthrough(self):
        pubkey = Pubkey.from_string(USDC_MINT)
        assert parse_address(pubkey) is pubkey

    def test_invalid_names_field(self):
        with pytest.raises(InvalidAddress) as exc_info:
            parse_address("nope", field="mint")
        assert exc_info.value.field == "mint"
        assert "mint" in exc_info.value.message

    def test_padded_address_raises_invalid_address(self):
        for padded in (USDC_MINT + " ", USDC_MINT + "\n"):
            with pytest.raises(InvalidAddress) as exc_info:
                parse_address(padded, field="mint")
            assert exc_info.value.field == "mint"
