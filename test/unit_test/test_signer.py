"""
Test Signer Module

Tests for the signer gate and the local keypair wallet.
"""

import sys
import json
from pathlib import Path
from types import SimpleNamespace

import pytest
from solders.hash import Hash
from solders.keypair import Keypair
from solders.message import Message, MessageV0, to_bytes_versioned
from solders.signature import Signature
from solders.transaction import Transaction, VersionedTransaction

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from token_toolkit.errors import NotConnected, SignerError, ConfigurationError, ErrorCode
from token_toolkit.infra.signer import require_signer, LocalSigner, SignerHandle, create_signer


def _noop_sign(tx):
    return tx


def test_require_signer_no_wallet():
    """Missing wallet handle"""
    print("Testing require_signer without wallet...")

    with pytest.raises(NotConnected) as exc_info:
        require_signer(None)
    assert exc_info.value.missing == "wallet"
    assert exc_info.value.code == ErrorCode.SIGNER_NOT_CONNECTED
    assert exc_info.value.title == "Connect wallet"

    print("  require_signer no wallet: PASSED")


def test_require_signer_no_public_key():
    """Wallet present but not connected"""
    print("Testing require_signer without public key...")

    wallet = SimpleNamespace(public_key=None, sign_transaction=_noop_sign)
    with pytest.raises(NotConnected) as exc_info:
        require_signer(wallet)
    assert exc_info.value.missing == "public_key"

    print("  require_signer no public key: PASSED")


def test_require_signer_no_sign_capability():
    """Wallet with a key but nothing to sign with"""
    print("Testing require_signer without sign_transaction...")

    pubkey = Keypair().pubkey()

    with pytest.raises(NotConnected) as exc_info:
        require_signer(SimpleNamespace(public_key=pubkey))
    assert exc_info.value.missing == "sign_transaction"

    with pytest.raises(NotConnected):
        require_signer(SimpleNamespace(public_key=pubkey, sign_transaction=None))

    with pytest.raises(NotConnected):
        require_signer(SimpleNamespace(public_key=pubkey, sign_transaction="not callable"))

    print("  require_signer no signer: PASSED")


def test_require_signer_connected():
    """Connected wallet yields a handle"""
    print("Testing require_signer with connected wallet...")

    pubkey = Keypair().pubkey()
    handle = require_signer(SimpleNamespace(public_key=pubkey, sign_transaction=_noop_sign))

    assert isinstance(handle, SignerHandle)
    assert handle.public_key == pubkey
    assert handle.sign_transaction("tx") == "tx"
    assert str(handle) == str(pubkey)

    print("  require_signer connected: PASSED")


def test_require_signer_rereads_state():
    """Disconnecting after a successful check is observed on the next call"""
    print("Testing require_signer re-reads wallet state...")

    wallet = SimpleNamespace(public_key=Keypair().pubkey(), sign_transaction=_noop_sign)
    require_signer(wallet)

    wallet.public_key = None
    with pytest.raises(NotConnected):
        require_signer(wallet)

    print("  require_signer re-read: PASSED")


def test_local_signer_passes_gate():
    """LocalSigner satisfies the wallet protocol"""
    print("Testing LocalSigner through the gate...")

    keypair = Keypair()
    signer = LocalSigner(keypair)
    handle = require_signer(signer)

    assert handle.public_key == keypair.pubkey()
    assert signer.pubkey == str(keypair.pubkey())

    print("  LocalSigner gate: PASSED")


def test_local_signer_sign():
    """Test LocalSigner sign method"""
    print("Testing LocalSigner sign...")

    signer = LocalSigner(Keypair())
    signature = signer.sign(b"test message to sign")

    # Ed25519 signature is 64 bytes
    assert len(signature) == 64

    print("  LocalSigner sign: PASSED")


def test_local_signer_sign_versioned_transaction():
    """Signature lands in the payer slot and verifies"""
    print("Testing LocalSigner sign_transaction (versioned)...")

    keypair = Keypair()
    signer = LocalSigner(keypair)

    message = MessageV0.try_compile(keypair.pubkey(), [], [], Hash.default())
    tx = VersionedTransaction.populate(message, [Signature.default()])

    signed = signer.sign_transaction(tx)

    assert isinstance(signed, VersionedTransaction)
    assert signed.signatures[0] != Signature.default()
    assert signed.signatures[0].verify(keypair.pubkey(), to_bytes_versioned(message))

    print("  LocalSigner sign_transaction (versioned): PASSED")


def test_local_signer_sign_legacy_transaction():
    """Legacy transactions are partially signed"""
    print("Testing LocalSigner sign_transaction (legacy)...")

    keypair = Keypair()
    signer = LocalSigner(keypair)

    message = Message.new_with_blockhash([], keypair.pubkey(), Hash.default())
    tx = Transaction.new_unsigned(message)

    signed = signer.sign_transaction(tx)

    assert signed.signatures[0] != Signature.default()

    print("  LocalSigner sign_transaction (legacy): PASSED")


def test_local_signer_not_required_signer():
    """Signing a transaction paid by someone else fails"""
    print("Testing LocalSigner with foreign transaction...")

    other = Keypair()
    message = MessageV0.try_compile(other.pubkey(), [], [], Hash.default())
    tx = VersionedTransaction.populate(message, [Signature.default()])

    with pytest.raises(SignerError):
        LocalSigner(Keypair()).sign_transaction(tx)

    with pytest.raises(SignerError):
        LocalSigner(Keypair()).sign_transaction(b"raw bytes")

    print("  LocalSigner foreign transaction: PASSED")


def test_local_signer_from_base58():
    """Test LocalSigner creation from base58 private key"""
    print("Testing LocalSigner from base58...")

    import base58

    keypair = Keypair()
    signer = LocalSigner.from_base58(base58.b58encode(bytes(keypair)).decode())
    assert signer.public_key == keypair.pubkey()

    print("  LocalSigner from base58: PASSED")


def test_keypair_loading(tmp_path):
    """Test keypair loading from JSON array and raw bytes files"""
    print("Testing keypair loading...")

    keypair = Keypair()

    json_path = tmp_path / "id.json"
    json_path.write_text(json.dumps(list(bytes(keypair))))
    assert LocalSigner.from_file(str(json_path)).public_key == keypair.pubkey()

    raw_path = tmp_path / "id.bin"
    raw_path.write_bytes(bytes(keypair))
    assert LocalSigner.from_file(str(raw_path)).public_key == keypair.pubkey()

    bad_path = tmp_path / "bad.json"
    bad_path.write_text('{"not": "a keypair"}')
    with pytest.raises(ConfigurationError):
        LocalSigner.from_file(str(bad_path))

    print("  Keypair loading: PASSED")


def test_signer_factory(tmp_path):
    """Test signer factory functions"""
    print("Testing signer factory...")

    keypair = Keypair()
    signer = create_signer(keypair=keypair)
    assert isinstance(signer, LocalSigner)
    assert signer.public_key == keypair.pubkey()

    path = tmp_path / "id.json"
    path.write_text(json.dumps(list(bytes(keypair))))
    assert create_signer(keypair_path=str(path)).public_key == keypair.pubkey()

    print("  Signer factory: PASSED")
