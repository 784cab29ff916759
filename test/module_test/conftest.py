"""
Shared configuration and fixtures for module integration tests.

These tests talk to a live Solana RPC endpoint. They only read chain
state; nothing is signed or submitted.

Environment Variables:
    SOLANA_RPC_URL: RPC endpoint URL (required, mainnet-beta)
"""

import os
import sys
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


def get_rpc_url() -> str:
    """Get Solana RPC URL from environment"""
    value = os.getenv("SOLANA_RPC_URL")
    if not value:
        raise EnvironmentError(
            "Missing required environment variable: SOLANA_RPC_URL\n"
            "Please set SOLANA_RPC_URL in your .env file or environment."
        )
    return value


def skip_if_no_config():
    """Return a skip message if the live endpoint is not configured"""
    try:
        get_rpc_url()
        return None
    except EnvironmentError as e:
        return str(e)


@pytest.fixture(scope="module")
def rpc_url():
    skip_msg = skip_if_no_config()
    if skip_msg:
        pytest.skip(skip_msg)
    return get_rpc_url()
