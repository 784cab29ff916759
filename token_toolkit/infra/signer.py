"""
Wallet and signer abstractions

Provides the wallet protocol the toolkit consumes, a local keypair
wallet, and the signer gate every authorization-requiring operation
passes through.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol, runtime_checkable

import base58
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import Transaction, VersionedTransaction

from ..errors import ConfigurationError, NotConnected, SignerError
from ..config import config as global_config

logger = logging.getLogger(__name__)


@runtime_checkable
class Wallet(Protocol):
    """
    Protocol for wallet handles

    A connected wallet exposes its public key and a way to sign
    transactions. Either may be None while disconnected.
    """

    public_key: Optional[Pubkey]

    def sign_transaction(self, tx: Any) -> Any:
        """Return the signed transaction"""
        ...


@dataclass(frozen=True)
class SignerHandle:
    """Public key and signing capability of a connected wallet"""
    public_key: Pubkey
    sign_transaction: Callable[[Any], Any]

    def __str__(self) -> str:
        return str(self.public_key)


def require_signer(wallet: Optional[Any]) -> SignerHandle:
    """
    Check that a wallet is connected and able to sign

    Connection state is re-read on every call.

    Raises:
        NotConnected: If the wallet, its public key or its signer is missing
    """
    if wallet is None:
        raise NotConnected.missing_wallet()

    public_key = getattr(wallet, "public_key", None)
    if not public_key:
        raise NotConnected.missing_public_key()

    sign = getattr(wallet, "sign_transaction", None)
    if sign is None or not callable(sign):
        raise NotConnected.missing_signer()

    return SignerHandle(public_key=public_key, sign_transaction=sign)


class LocalSigner:
    """
    Wallet backed by a local Solana keypair

    Usage:
        from solders.keypair import Keypair

        wallet = LocalSigner(Keypair())
        signed = wallet.sign_transaction(tx)
    """

    def __init__(self, keypair: Keypair):
        self._keypair = keypair

    @property
    def public_key(self) -> Pubkey:
        return self._keypair.pubkey()

    @property
    def pubkey(self) -> str:
        """Public key as base58 string"""
        return str(self._keypair.pubkey())

    def sign(self, message: bytes) -> bytes:
        """Sign message bytes"""
        return bytes(self._keypair.sign_message(message))

    def sign_transaction(self, tx: Any) -> Any:
        """
        Sign a legacy or versioned transaction

        Legacy transactions are partially signed in place and returned.
        Versioned transactions are rebuilt with our signature in the
        matching signer slot.

        Raises:
            SignerError: If this key is not a required signer
        """
        if isinstance(tx, Transaction):
            tx.partial_sign([self._keypair], tx.message.recent_blockhash)
            return tx

        if isinstance(tx, VersionedTransaction):
            return self._sign_versioned(tx)

        raise SignerError.failed(f"unsupported transaction type {type(tx).__name__}")

    def _sign_versioned(self, tx: VersionedTransaction) -> VersionedTransaction:
        from solders.message import MessageV0, to_bytes_versioned

        message = tx.message
        num_required = message.header.num_required_signatures
        account_keys = message.account_keys
        our_pubkey = self._keypair.pubkey()

        signer_index = None
        for i in range(min(num_required, len(account_keys))):
            if account_keys[i] == our_pubkey:
                signer_index = i
                break

        if signer_index is None:
            raise SignerError.failed(f"wallet {our_pubkey} is not in the required signers list")

        if isinstance(message, MessageV0):
            message_bytes = to_bytes_versioned(message)
        else:
            message_bytes = bytes(message)
        signature = self._keypair.sign_message(message_bytes)

        signatures = list(tx.signatures) or [Signature.default()] * num_required
        signatures[signer_index] = signature
        return VersionedTransaction.populate(message, signatures)

    @classmethod
    def from_bytes(cls, secret_key: bytes) -> "LocalSigner":
        """Create signer from secret key bytes (64 bytes)"""
        return cls(Keypair.from_bytes(secret_key))

    @classmethod
    def from_base58(cls, secret_key: str) -> "LocalSigner":
        """Create signer from base58 secret key"""
        return cls.from_bytes(base58.b58decode(secret_key))

    @classmethod
    def from_file(cls, path: str) -> "LocalSigner":
        """
        Create signer from keypair file

        Supports:
        - JSON array format (Solana CLI): [1,2,3,...]
        - Raw bytes file (64 bytes)
        """
        with open(path, "rb") as f:
            content = f.read()

        try:
            data = json.loads(content.decode("utf-8"))
            if isinstance(data, list):
                return cls.from_bytes(bytes(data))
        except (json.JSONDecodeError, UnicodeDecodeError):
            pass

        if len(content) == 64:
            return cls.from_bytes(content)

        raise ConfigurationError.invalid("keypair_file", f"Cannot parse keypair file: {path}")

    def __repr__(self) -> str:
        return f"LocalSigner(pubkey={self.pubkey[:8]}...)"


def create_signer(
    keypair: Optional[Keypair] = None,
    keypair_path: Optional[str] = None,
) -> Optional[LocalSigner]:
    """
    Create a local wallet based on configuration

    Priority:
    1. keypair: Use provided keypair
    2. keypair_path: Load keypair from file
    3. Environment: SOLANA_KEYPAIR_PATH

    Returns:
        LocalSigner, or None when nothing is configured (wallet not connected)
    """
    if keypair is not None:
        return LocalSigner(keypair)

    if keypair_path is not None:
        return LocalSigner.from_file(keypair_path)

    if global_config.signer.keypair_path and os.path.isfile(global_config.signer.keypair_path):
        return LocalSigner.from_file(global_config.signer.keypair_path)

    logger.debug("No keypair configured; running without a wallet")
    return None
