"""Spool instructions: create, destroy, pack, unpack and commit."""

from __future__ import annotations

from enum import IntEnum
from typing import Sequence

from tapedrive.consts import (
    PROGRAM_ID,
    SEGMENT_PROOF_LEN,
    SYSTEM_PROGRAM_ID,
    SYSVAR_RENT_ID,
    SYSVAR_SLOT_HASHES_ID,
    TAPE_PROOF_LEN,
)
from tapedrive.instruction import AccountMeta, Instruction, encode_instruction_data
from tapedrive.keys import Pubkey
from tapedrive.pda import spool_pda


class SpoolInstruction(IntEnum):
    """Discriminators of the spool instructions."""

    CREATE = 0x40
    DESTROY = 0x41
    PACK = 0x42
    UNPACK = 0x43
    COMMIT = 0x44


def _hash32(name: str, value: bytes) -> bytes:
    value = bytes(value)
    if len(value) != 32:
        raise ValueError(f"{name} must be 32 bytes, got {len(value)}")
    return value


def _proof_bytes(proof: Sequence[bytes], length: int) -> bytes:
    nodes = [_hash32("proof node", node) for node in proof]
    if len(nodes) != length:
        raise ValueError(f"proof must hold {length} hashes, got {len(nodes)}")
    return b"".join(nodes)


def _u64(value: int) -> bytes:
    return int(value).to_bytes(8, "little")


def build_create_ix(signer: Pubkey, miner_address: Pubkey, number: int) -> Instruction:
    """Create spool number `number` for a miner."""
    spool, _ = spool_pda(miner_address, number)
    return Instruction(
        PROGRAM_ID,
        [
            AccountMeta.writable(signer, True),
            AccountMeta.writable(miner_address, False),
            AccountMeta.writable(spool, False),
            AccountMeta.readonly(SYSTEM_PROGRAM_ID, False),
            AccountMeta.readonly(SYSVAR_RENT_ID, False),
            AccountMeta.readonly(SYSVAR_SLOT_HASHES_ID, False),
        ],
        encode_instruction_data(SpoolInstruction.CREATE, _u64(number)),
    )


def build_destroy_ix(signer: Pubkey, miner_address: Pubkey, number: int) -> Instruction:
    """Destroy a spool, returning its rent to the miner."""
    spool, _ = spool_pda(miner_address, number)
    return Instruction(
        PROGRAM_ID,
        [
            AccountMeta.writable(signer, True),
            AccountMeta.writable(miner_address, False),
            AccountMeta.writable(spool, False),
            AccountMeta.readonly(SYSTEM_PROGRAM_ID, False),
        ],
        encode_instruction_data(SpoolInstruction.DESTROY, _u64(number)),
    )


def build_pack_ix(
    signer: Pubkey, spool_address: Pubkey, tape_address: Pubkey, value: bytes
) -> Instruction:
    """Pack a tape into the spool."""
    return Instruction(
        PROGRAM_ID,
        [
            AccountMeta.writable(signer, True),
            AccountMeta.writable(spool_address, False),
            AccountMeta.readonly(tape_address, False),
        ],
        encode_instruction_data(SpoolInstruction.PACK, _hash32("value", value)),
    )


def build_unpack_ix(
    signer: Pubkey,
    spool_address: Pubkey,
    index: int,
    proof: Sequence[bytes],
    value: bytes,
) -> Instruction:
    """Unpack the value at `index` from the spool, proven by a tape-tree proof."""
    payload = _u64(index) + _proof_bytes(proof, TAPE_PROOF_LEN) + _hash32("value", value)
    return Instruction(
        PROGRAM_ID,
        [
            AccountMeta.writable(signer, True),
            AccountMeta.writable(spool_address, False),
        ],
        encode_instruction_data(SpoolInstruction.UNPACK, payload),
    )


def build_commit_ix(
    signer: Pubkey,
    miner_address: Pubkey,
    spool_address: Pubkey,
    index: int,
    proof: Sequence[bytes],
    value: bytes,
) -> Instruction:
    """Commit a solution for mining, proven by a segment-tree proof."""
    payload = (
        _u64(index) + _proof_bytes(proof, SEGMENT_PROOF_LEN) + _hash32("value", value)
    )
    return Instruction(
        PROGRAM_ID,
        [
            AccountMeta.writable(signer, True),
            AccountMeta.writable(miner_address, False),
            AccountMeta.readonly(spool_address, False),
        ],
        encode_instruction_data(SpoolInstruction.COMMIT, payload),
    )