"""Program-level instructions: initialization and airdrops."""

from __future__ import annotations

from enum import IntEnum

from tapedrive.consts import (
    ARCHIVE_ADDRESS,
    ASSOCIATED_TOKEN_PROGRAM_ID,
    BLOCK_ADDRESS,
    EPOCH_ADDRESS,
    MINT_ADDRESS,
    PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    SYSVAR_RENT_ID,
    SYSVAR_SLOT_HASHES_ID,
    TOKEN_METADATA_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
    TREASURY_ADDRESS,
    TREASURY_ATA,
)
from tapedrive.instruction import AccountMeta, Instruction, encode_instruction_data
from tapedrive.keys import Pubkey
from tapedrive.pda import (
    archive_pda,
    block_pda,
    epoch_pda,
    metadata_pda,
    mint_pda,
    tape_pda,
    treasury_ata,
    treasury_pda,
    writer_pda,
)
from tapedrive.utils import to_name


class ProgramInstruction(IntEnum):
    """Discriminators of the program-level instructions."""

    UNKNOWN = 0
    INITIALIZE = 1
    AIRDROP = 2


def build_initialize_ix(signer: Pubkey) -> Instruction:
    """Initialize the program accounts and the genesis tape."""
    archive, _ = archive_pda()
    epoch, _ = epoch_pda()
    block, _ = block_pda()
    mint, _ = mint_pda()
    treasury, _ = treasury_pda()
    ata, _ = treasury_ata()
    metadata, _ = metadata_pda(mint)

    tape, _ = tape_pda(signer, to_name("genesis"))
    writer, _ = writer_pda(tape)

    expected = (
        (archive, ARCHIVE_ADDRESS),
        (epoch, EPOCH_ADDRESS),
        (block, BLOCK_ADDRESS),
        (mint, MINT_ADDRESS),
        (treasury, TREASURY_ADDRESS),
        (ata, TREASURY_ATA),
    )
    for derived, constant in expected:
        if derived != constant:
            raise RuntimeError(f"derived address {derived} does not match {constant}")

    return Instruction(
        PROGRAM_ID,
        [
            AccountMeta.writable(signer, True),
            AccountMeta.writable(archive, False),
            AccountMeta.writable(epoch, False),
            AccountMeta.writable(block, False),
            AccountMeta.writable(metadata, False),
            AccountMeta.writable(mint, False),
            AccountMeta.writable(treasury, False),
            AccountMeta.writable(ata, False),
            AccountMeta.writable(tape, False),
            AccountMeta.writable(writer, False),
            AccountMeta.readonly(PROGRAM_ID, False),
            AccountMeta.readonly(SYSTEM_PROGRAM_ID, False),
            AccountMeta.readonly(TOKEN_PROGRAM_ID, False),
            AccountMeta.readonly(ASSOCIATED_TOKEN_PROGRAM_ID, False),
            AccountMeta.readonly(TOKEN_METADATA_PROGRAM_ID, False),
            AccountMeta.readonly(SYSVAR_RENT_ID, False),
            AccountMeta.readonly(SYSVAR_SLOT_HASHES_ID, False),
        ],
        encode_instruction_data(ProgramInstruction.INITIALIZE),
    )


def build_airdrop_ix(signer: Pubkey, beneficiary: Pubkey, amount: int) -> Instruction:
    """Mint tokens to a beneficiary token account (test networks only)."""
    mint, _ = mint_pda()
    treasury, _ = treasury_pda()
    return Instruction(
        PROGRAM_ID,
        [
            AccountMeta.writable(signer, True),
            AccountMeta.writable(beneficiary, False),
            AccountMeta.writable(mint, False),
            AccountMeta.writable(treasury, False),
            AccountMeta.readonly(TOKEN_PROGRAM_ID, False),
        ],
        encode_instruction_data(
            ProgramInstruction.AIRDROP, int(amount).to_bytes(8, "little")
        ),
    )