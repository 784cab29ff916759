"""
Async RPC Client for Solana

Provides the read-only chain queries the toolkit needs:
- Raw JSON-RPC calls with retry on transient failures
- Account info lookup
- SPL mint decoding (decimals, supply, authorities)
"""

from __future__ import annotations

import asyncio
import base64
import logging
import struct
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

import httpx
from solders.pubkey import Pubkey

from ..constants import (
    TOKEN_PROGRAM_ID,
    TOKEN_2022_PROGRAM_ID,
    MINT_ACCOUNT_SIZE,
    MINT_DECIMALS_OFFSET,
)
from ..errors import RpcError, ConfigurationError
from ..config import config as global_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MintInfo:
    """
    Decoded SPL mint account

    Attributes:
        address: Mint address (base58)
        decimals: Token precision
        supply: Total supply in base units
        mint_authority: Mint authority (None if revoked)
        freeze_authority: Freeze authority (None if revoked)
        is_initialized: Mint initialized flag
        program_id: Owning token program
    """
    address: str
    decimals: int
    supply: int
    mint_authority: Optional[str] = None
    freeze_authority: Optional[str] = None
    is_initialized: bool = True
    program_id: str = TOKEN_PROGRAM_ID

    @property
    def is_token_2022(self) -> bool:
        return self.program_id == TOKEN_2022_PROGRAM_ID


def parse_mint_account(address: str, data: bytes, program_id: str = TOKEN_PROGRAM_ID) -> MintInfo:
    """
    Decode the base SPL mint layout

    Token-2022 mints may carry extensions after byte 82; they are ignored.

    Raises:
        ValueError: If data is too short to be a mint
    """
    if len(data) < MINT_ACCOUNT_SIZE:
        raise ValueError(f"Account data is {len(data)} bytes, expected at least {MINT_ACCOUNT_SIZE}")

    mint_auth_tag = struct.unpack_from("<I", data, 0)[0]
    mint_authority = str(Pubkey.from_bytes(data[4:36])) if mint_auth_tag == 1 else None
    supply = struct.unpack_from("<Q", data, 36)[0]
    decimals = data[MINT_DECIMALS_OFFSET]
    is_initialized = data[45] != 0
    freeze_auth_tag = struct.unpack_from("<I", data, 46)[0]
    freeze_authority = str(Pubkey.from_bytes(data[50:82])) if freeze_auth_tag == 1 else None

    return MintInfo(
        address=address,
        decimals=decimals,
        supply=supply,
        mint_authority=mint_authority,
        freeze_authority=freeze_authority,
        is_initialized=is_initialized,
        program_id=program_id,
    )


@runtime_checkable
class ChainQuery(Protocol):
    """
    Read-only chain query capability

    Implementations return None when the mint account does not exist and
    raise on any other failure.
    """

    async def get_mint_info(self, address: str) -> Optional[MintInfo]:
        ...


@dataclass
class RpcClientConfig:
    """
    RPC client runtime configuration

    Unset values are pulled from the global config (token_toolkit.config.RpcConfig).
    """
    timeout_seconds: float = None
    max_retries: int = None
    retry_delay_seconds: float = None
    commitment: str = None

    def __post_init__(self):
        """Apply defaults from global config for any unset values"""
        if self.timeout_seconds is None:
            self.timeout_seconds = global_config.rpc.timeout_seconds
        if self.max_retries is None:
            self.max_retries = global_config.rpc.max_retries
        if self.retry_delay_seconds is None:
            self.retry_delay_seconds = global_config.rpc.retry_delay_seconds
        if self.commitment is None:
            self.commitment = global_config.rpc.commitment


class RpcClient:
    """
    Async Solana JSON-RPC client bound to one endpoint

    Usage:
        async with RpcClient("https://api.devnet.solana.com") as rpc:
            info = await rpc.get_mint_info("So11111111111111111111111111111111111111112")
            print(info.decimals)
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        config: Optional[RpcClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize RPC client

        Args:
            endpoint: RPC endpoint URL (defaults to configured endpoint)
            config: RPC configuration options
            transport: Optional httpx transport (used by tests)
        """
        endpoint = endpoint if endpoint is not None else global_config.rpc.endpoint
        if not endpoint:
            raise ConfigurationError.missing("RPC endpoint")

        self._endpoint = endpoint
        self._config = config or RpcClientConfig()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._request_id = 0

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def commitment(self) -> str:
        """Default commitment level"""
        return self._config.commitment

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._config.timeout_seconds,
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def call(self, method: str, params: List[Any]) -> Any:
        """
        Make JSON-RPC call

        Transport errors, timeouts and HTTP 429 are retried up to
        max_retries times. JSON-RPC errors are raised immediately.

        Raises:
            RpcError: On RPC failure
        """
        client = self._get_client()
        self._request_id += 1
        body = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params,
        }

        attempts = max(1, self._config.max_retries)
        last_error: Optional[RpcError] = None

        for attempt in range(attempts):
            try:
                response = await client.post(self._endpoint, json=body)

                if response.status_code == 429:
                    logger.warning(f"Rate limited by {self._endpoint}")
                    last_error = RpcError.rate_limited(self._endpoint)
                else:
                    response.raise_for_status()
                    result = response.json()

                    if "error" in result:
                        error = result["error"]
                        rpc_error = RpcError(
                            f"RPC error: {error.get('message', error)}",
                            endpoint=self._endpoint,
                        )
                        rpc_error.details["rpc_error_code"] = error.get("code")
                        rpc_error.details["rpc_error_data"] = error.get("data")
                        raise rpc_error

                    return result.get("result")

            except httpx.TimeoutException:
                last_error = RpcError.timeout(self._endpoint, self._config.timeout_seconds)
                logger.warning(f"RPC timeout (attempt {attempt + 1}): {self._endpoint}")

            except httpx.HTTPStatusError as e:
                raise RpcError(
                    f"HTTP error {e.response.status_code}",
                    endpoint=self._endpoint,
                    original_error=e,
                ) from e

            except httpx.RequestError as e:
                last_error = RpcError.connection_failed(self._endpoint, e)
                logger.warning(f"RPC connection error (attempt {attempt + 1}): {e}")

            except ValueError as e:
                raise RpcError.invalid_response(self._endpoint, str(e)) from e

            if attempt < attempts - 1:
                await asyncio.sleep(self._config.retry_delay_seconds * (attempt + 1))

        raise last_error or RpcError("RPC call failed", endpoint=self._endpoint)

    async def get_account_info(
        self,
        address: str,
        encoding: str = "base64",
        commitment: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Get account information

        Returns:
            Account info or None if not found
        """
        params = [
            address,
            {
                "encoding": encoding,
                "commitment": commitment or self.commitment,
            },
        ]
        result = await self.call("getAccountInfo", params)
        return result.get("value") if result else None

    async def get_mint_info(self, address: str) -> Optional[MintInfo]:
        """
        Fetch and decode a mint account

        Returns:
            MintInfo, or None if the account does not exist

        Raises:
            RpcError: On RPC failure or if the account is not an SPL mint
        """
        account = await self.get_account_info(address, encoding="base64")
        if account is None:
            return None

        owner = account.get("owner")
        if owner not in (TOKEN_PROGRAM_ID, TOKEN_2022_PROGRAM_ID):
            raise RpcError.invalid_response(
                self._endpoint, f"account {address} is owned by {owner}, not a token program"
            )

        try:
            encoded = account["data"][0]
            data = base64.b64decode(encoded)
            return parse_mint_account(address, data, program_id=owner)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise RpcError.invalid_response(self._endpoint, f"cannot decode mint {address}: {e}") from e

    async def close(self):
        """Close HTTP client"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def __repr__(self) -> str:
        return f"RpcClient(endpoint={self._endpoint})"
