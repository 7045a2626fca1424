"""Miner instructions: register, unregister, mine and claim."""

from __future__ import annotations

from enum import IntEnum

from tapedrive.consts import (
    ARCHIVE_ADDRESS,
    BLOCK_ADDRESS,
    EPOCH_ADDRESS,
    PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    SYSVAR_RENT_ID,
    SYSVAR_SLOT_HASHES_ID,
    TOKEN_PROGRAM_ID,
    TREASURY_ADDRESS,
    TREASURY_ATA,
)
from tapedrive.instruction import AccountMeta, Instruction, encode_instruction_data
from tapedrive.keys import Pubkey
from tapedrive.pda import miner_pda
from tapedrive.proofs import PoA, PoW
from tapedrive.utils import to_name


class MinerInstruction(IntEnum):
    """Discriminators of the miner instructions."""

    REGISTER = 0x20
    UNREGISTER = 0x21
    MINE = 0x22
    CLAIM = 0x23


def build_register_ix(signer: Pubkey, name: str) -> Instruction:
    """Register a miner under (signer, name)."""
    raw_name = to_name(name)
    miner, _ = miner_pda(signer, raw_name)
    return Instruction(
        PROGRAM_ID,
        [
            AccountMeta.writable(signer, True),
            AccountMeta.writable(miner, False),
            AccountMeta.readonly(SYSTEM_PROGRAM_ID, False),
            AccountMeta.readonly(SYSVAR_RENT_ID, False),
            AccountMeta.readonly(SYSVAR_SLOT_HASHES_ID, False),
        ],
        encode_instruction_data(MinerInstruction.REGISTER, raw_name),
    )


def build_mine_ix(
    signer: Pubkey, miner: Pubkey, tape: Pubkey, pow: PoW, poa: PoA
) -> Instruction:
    """Submit a proof of work and a proof of access for the current block."""
    return Instruction(
        PROGRAM_ID,
        [
            AccountMeta.writable(signer, True),
            AccountMeta.writable(EPOCH_ADDRESS, False),
            AccountMeta.writable(BLOCK_ADDRESS, False),
            AccountMeta.writable(miner, False),
            AccountMeta.writable(tape, False),
            AccountMeta.readonly(ARCHIVE_ADDRESS, False),
            AccountMeta.readonly(SYSVAR_SLOT_HASHES_ID, False),
        ],
        encode_instruction_data(MinerInstruction.MINE, pow.to_bytes() + poa.to_bytes()),
    )


def build_claim_ix(
    signer: Pubkey, miner: Pubkey, beneficiary: Pubkey, amount: int
) -> Instruction:
    """Claim earned rewards into a beneficiary token account."""
    return Instruction(
        PROGRAM_ID,
        [
            AccountMeta.writable(signer, True),
            AccountMeta.writable(beneficiary, False),
            AccountMeta.writable(miner, False),
            AccountMeta.readonly(TREASURY_ADDRESS, False),
            AccountMeta.writable(TREASURY_ATA, False),
            AccountMeta.readonly(TOKEN_PROGRAM_ID, False),
        ],
        encode_instruction_data(
            MinerInstruction.CLAIM, int(amount).to_bytes(8, "little")
        ),
    )


def build_close_ix(signer: Pubkey, miner: Pubkey) -> Instruction:
    """Unregister a miner, returning its balance."""
    return Instruction(
        PROGRAM_ID,
        [
            AccountMeta.writable(signer, True),
            AccountMeta.writable(miner, False),
            AccountMeta.readonly(SYSTEM_PROGRAM_ID, False),
        ],
        encode_instruction_data(MinerInstruction.UNREGISTER),
    )