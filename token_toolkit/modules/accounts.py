"""
Associated token account derivation

Derives an owner's associated token account (ATA) for a mint and builds
the instruction that creates it. Nothing here touches the network;
whether the account already exists is for the caller to check.
"""

from typing import Union

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from ..constants import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
    ATA_CREATE_DATA,
    ATA_CREATE_IDEMPOTENT_DATA,
)
from ..errors import InvalidAddress
from ..types.address import parse_address

AddressLike = Union[str, Pubkey]


def derive_address(
    mint: AddressLike,
    owner: AddressLike,
    allow_owner_off_curve: bool = False,
    token_program: AddressLike = TOKEN_PROGRAM_ID,
) -> Pubkey:
    """
    Get associated token account address.

    Args:
        mint: Token mint
        owner: Wallet owner
        allow_owner_off_curve: Permit PDA owners (off the ed25519 curve)
        token_program: Token program (defaults to Tokenkeg)

    Returns:
        ATA address

    Raises:
        InvalidAddress: If an input is malformed, or the owner is off-curve
            and allow_owner_off_curve is False
    """
    mint_pubkey = parse_address(mint, field="mint")
    owner_pubkey = parse_address(owner, field="owner")
    program = parse_address(token_program, field="token_program")

    if not allow_owner_off_curve and not owner_pubkey.is_on_curve():
        raise InvalidAddress.off_curve(str(owner_pubkey))

    seeds = [
        bytes(owner_pubkey),
        bytes(program),
        bytes(mint_pubkey),
    ]
    address, _ = Pubkey.find_program_address(seeds, Pubkey.from_string(ASSOCIATED_TOKEN_PROGRAM_ID))
    return address


def _create_accounts(
    ata: Pubkey,
    payer: Pubkey,
    owner: Pubkey,
    mint: Pubkey,
    token_program: Pubkey,
):
    return [
        AccountMeta(payer, is_signer=True, is_writable=True),
        AccountMeta(ata, is_signer=False, is_writable=True),
        AccountMeta(owner, is_signer=False, is_writable=False),
        AccountMeta(mint, is_signer=False, is_writable=False),
        AccountMeta(Pubkey.from_string(SYSTEM_PROGRAM_ID), is_signer=False, is_writable=False),
        AccountMeta(token_program, is_signer=False, is_writable=False),
    ]


def build_create_instruction(
    ata: AddressLike,
    payer: AddressLike,
    owner: AddressLike,
    mint: AddressLike,
    token_program: AddressLike = TOKEN_PROGRAM_ID,
) -> Instruction:
    """
    Build create_associated_token_account instruction.

    Fails on chain if the account already exists; use
    build_create_idempotent_instruction when that is possible.

    Returns:
        Unsubmitted instruction
    """
    accounts = _create_accounts(
        parse_address(ata, field="ata"),
        parse_address(payer, field="payer"),
        parse_address(owner, field="owner"),
        parse_address(mint, field="mint"),
        parse_address(token_program, field="token_program"),
    )
    return Instruction(Pubkey.from_string(ASSOCIATED_TOKEN_PROGRAM_ID), ATA_CREATE_DATA, accounts)


def build_create_idempotent_instruction(
    ata: AddressLike,
    payer: AddressLike,
    owner: AddressLike,
    mint: AddressLike,
    token_program: AddressLike = TOKEN_PROGRAM_ID,
) -> Instruction:
    """
    Build create_associated_token_account_idempotent instruction.

    Creates the ATA if it doesn't exist, or does nothing if it does.
    """
    accounts = _create_accounts(
        parse_address(ata, field="ata"),
        parse_address(payer, field="payer"),
        parse_address(owner, field="owner"),
        parse_address(mint, field="mint"),
        parse_address(token_program, field="token_program"),
    )
    return Instruction(Pubkey.from_string(ASSOCIATED_TOKEN_PROGRAM_ID), ATA_CREATE_IDEMPOTENT_DATA, accounts)


class AssociatedAccountDeriver:
    """
    ATA helper bound to one token program

    Usage:
        deriver = AssociatedAccountDeriver()
        ata = deriver.derive_address(mint, owner)
        ix = deriver.build_create_instruction(ata, payer, owner, mint)
    """

    def __init__(self, token_program: AddressLike = TOKEN_PROGRAM_ID):
        self._token_program = parse_address(token_program, field="token_program")

    @property
    def token_program(self) -> Pubkey:
        return self._token_program

    def derive_address(
        self,
        mint: AddressLike,
        owner: AddressLike,
        allow_owner_off_curve: bool = False,
    ) -> Pubkey:
        return derive_address(mint, owner, allow_owner_off_curve, self._token_program)

    def build_create_instruction(
        self,
        ata: AddressLike,
        payer: AddressLike,
        owner: AddressLike,
        mint: AddressLike,
    ) -> Instruction:
        return build_create_instruction(ata, payer, owner, mint, self._token_program)

    def build_create_idempotent_instruction(
        self,
        ata: AddressLike,
        payer: AddressLike,
        owner: AddressLike,
        mint: AddressLike,
    ) -> Instruction:
        return build_create_idempotent_instruction(ata, payer, owner, mint, self._token_program)
