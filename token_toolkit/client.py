"""
TokenToolkit - Unified entry point for token settings operations

Wires the settings store, mint inspector, ATA deriver and signer gate
together. Every user-facing operation returns an OpResult with a short
title and a detail line instead of raising.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from solders.pubkey import Pubkey

from .errors import ChainQueryFailed, InvalidAddress, TokenToolkitError
from .infra.rpc import ChainQuery
from .infra.signer import require_signer, SignerHandle
from .modules.accounts import AssociatedAccountDeriver
from .modules.mint import MintInspector
from .modules.settings import TokenConfigStore
from .types.amount import to_base_units, from_base_units, DisplayAmount
from .types.result import OpResult
from .types.token_config import TokenConfig

logger = logging.getLogger(__name__)


class TokenToolkit:
    """
    Token settings tool

    Usage:
        store = TokenConfigStore(JsonFileStorage("settings.json"))
        async with RpcClient(endpoint) as rpc:
            toolkit = TokenToolkit(store, chain_query=rpc, wallet=LocalSigner(keypair))

            result = await toolkit.detect_decimals("So111...112")
            print(result.title, result.detail)   # Detected / decimals: 9

            result = toolkit.save_settings(mint="So111...112", decimals=result.value, symbol="SOL")
            print(result)                         # Saved / SOL • So111...112
    """

    def __init__(
        self,
        store: TokenConfigStore,
        chain_query: Optional[ChainQuery] = None,
        wallet: Optional[Any] = None,
        deriver: Optional[AssociatedAccountDeriver] = None,
    ):
        """
        Initialize TokenToolkit

        Args:
            store: Settings store (loaded lazily if not yet loaded)
            chain_query: Read-only chain collaborator for mint lookups
            wallet: Wallet handle; may be None or disconnected
            deriver: ATA deriver (defaults to the SPL Token program)
        """
        self._store = store
        self._inspector = MintInspector(chain_query) if chain_query is not None else None
        self.wallet = wallet
        self._deriver = deriver or AssociatedAccountDeriver()

    @property
    def store(self) -> TokenConfigStore:
        return self._store

    @property
    def settings(self) -> TokenConfig:
        """Live token settings"""
        return self._store.current()

    @property
    def inspector(self) -> Optional[MintInspector]:
        return self._inspector

    @property
    def deriver(self) -> AssociatedAccountDeriver:
        return self._deriver

    def signer(self) -> SignerHandle:
        """
        Gate for operations that need authorization

        Raises:
            NotConnected: If the wallet cannot sign right now
        """
        return require_signer(self.wallet)

    # =========================================================================
    # Settings
    # =========================================================================

    def save_settings(
        self,
        mint: str = "",
        decimals: Any = 0,
        symbol: str = "",
        keep_authorities: bool = True,
    ) -> OpResult:
        """
        Validate and save token settings

        Returns:
            OpResult with the saved TokenConfig as value
        """
        try:
            record = self._store.save({
                "mint": mint,
                "decimals": decimals,
                "symbol": symbol,
                "keep_authorities": keep_authorities,
            })
        except TokenToolkitError as e:
            logger.info(f"Save rejected: {e}")
            return OpResult.failed(e, title="Save failed")

        detail = str(record)
        if self._store.last_persist_error is not None:
            detail += " (not persisted: storage unavailable, kept for this session)"
        return OpResult.success("Saved", value=record, detail=detail)

    async def detect_decimals(self, mint: Optional[Union[str, Pubkey]] = None) -> OpResult:
        """
        Look up a mint's decimals on chain

        Args:
            mint: Mint to inspect (defaults to the saved mint)

        Returns:
            OpResult with decimals as value
        """
        if mint is None:
            mint = self.settings.mint

        if self._inspector is None:
            error = ChainQueryFailed("No chain query configured", mint=str(mint))
            return OpResult.failed(error, title="Detect failed")

        try:
            decimals = await self._inspector.detect_decimals(mint)
        except InvalidAddress as e:
            return OpResult.failed(e, title="Enter a valid mint")
        except TokenToolkitError as e:
            return OpResult.failed(e, title="Detect failed")

        return OpResult.success("Detected", value=decimals, detail=f"decimals: {decimals}")

    # =========================================================================
    # Amounts
    # =========================================================================

    def to_base_units(self, amount: DisplayAmount) -> OpResult:
        """Convert a display amount using the saved decimals"""
        decimals = self.settings.decimals
        try:
            value = to_base_units(amount, decimals)
        except TokenToolkitError as e:
            return OpResult.failed(e)
        return OpResult.success("Amount", value=value, detail=f"{value} base units")

    def from_base_units(self, amount: int) -> OpResult:
        """Format base units using the saved decimals and symbol"""
        record = self.settings
        try:
            value = from_base_units(amount, record.decimals)
        except TokenToolkitError as e:
            return OpResult.failed(e)
        return OpResult.success("Amount", value=value, detail=f"{value} {record.symbol}")

    # =========================================================================
    # Associated accounts
    # =========================================================================

    def _resolve_owner(self, owner: Optional[Union[str, Pubkey]]) -> Union[str, Pubkey]:
        if owner is not None:
            return owner
        return self.signer().public_key

    def associated_account(
        self,
        owner: Optional[Union[str, Pubkey]] = None,
        allow_owner_off_curve: bool = False,
    ) -> OpResult:
        """
        Derive the ATA of the saved mint

        Args:
            owner: Account owner (defaults to the connected wallet)

        Returns:
            OpResult with the ATA Pubkey as value
        """
        try:
            resolved = self._resolve_owner(owner)
            ata = self._deriver.derive_address(self.settings.mint, resolved, allow_owner_off_curve)
        except TokenToolkitError as e:
            return OpResult.failed(e)
        return OpResult.success("Token account", value=ata, detail=str(ata))

    def create_account_instruction(
        self,
        owner: Optional[Union[str, Pubkey]] = None,
        allow_owner_off_curve: bool = False,
        idempotent: bool = False,
    ) -> OpResult:
        """
        Build the instruction creating the saved mint's ATA

        The connected wallet pays, so a signer is required even when
        another owner is given.

        Returns:
            OpResult with the Instruction as value
        """
        try:
            payer = self.signer().public_key
            resolved = owner if owner is not None else payer
            mint = self.settings.mint
            ata = self._deriver.derive_address(mint, resolved, allow_owner_off_curve)
            if idempotent:
                ix = self._deriver.build_create_idempotent_instruction(ata, payer, resolved, mint)
            else:
                ix = self._deriver.build_create_instruction(ata, payer, resolved, mint)
        except TokenToolkitError as e:
            return OpResult.failed(e)
        return OpResult.success("Create token account", value=ix, detail=str(ata))

    def __repr__(self) -> str:
        return f"TokenToolkit(settings={self.settings})"
