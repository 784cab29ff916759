"""
Mint Module

Reads a mint's authoritative precision from chain.
"""

import logging
from typing import Union

from solders.pubkey import Pubkey

from ..errors import ChainQueryFailed
from ..infra.rpc import ChainQuery, MintInfo
from ..types.address import parse_address

logger = logging.getLogger(__name__)


class MintInspector:
    """
    Mint metadata lookups over a chain-query collaborator

    No retries and no timeouts are applied here; both belong to the
    collaborator. A caller issuing overlapping lookups must discard
    stale responses itself.

    Usage:
        async with RpcClient(endpoint) as rpc:
            inspector = MintInspector(rpc)
            decimals = await inspector.detect_decimals(mint)
    """

    def __init__(self, chain_query: ChainQuery):
        self._chain_query = chain_query

    async def mint_info(self, mint: Union[str, Pubkey]) -> MintInfo:
        """
        Fetch decoded mint metadata

        Raises:
            InvalidAddress: If mint is not a valid address (no query is made)
            ChainQueryFailed: If the collaborator fails or the mint does not exist
        """
        address = str(parse_address(mint, field="mint"))

        try:
            info = await self._chain_query.get_mint_info(address)
        except Exception as e:
            logger.warning(f"Mint lookup failed for {address}: {e}")
            raise ChainQueryFailed.wrap(address, e) from e

        if info is None:
            raise ChainQueryFailed.not_found(address)
        return info

    async def detect_decimals(self, mint: Union[str, Pubkey]) -> int:
        """
        Fetch a mint's decimal precision

        Raises:
            InvalidAddress: If mint is not a valid address (no query is made)
            ChainQueryFailed: If the collaborator fails or the mint does not exist
        """
        info = await self.mint_info(mint)
        logger.info(f"Detected decimals for {info.address}: {info.decimals}")
        return info.decimals
