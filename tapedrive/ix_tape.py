"""Tape instructions: create, write, update, finalize, header and subsidy."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence

from tapedrive.consts import (
    ARCHIVE_ADDRESS,
    HEADER_SIZE,
    PROGRAM_ID,
    SEGMENT_PROOF_LEN,
    SEGMENT_SIZE,
    SYSTEM_PROGRAM_ID,
    SYSVAR_RENT_ID,
    SYSVAR_SLOT_HASHES_ID,
    TOKEN_PROGRAM_ID,
    TREASURY_ATA,
)
from tapedrive.instruction import AccountMeta, Instruction, encode_instruction_data
from tapedrive.keys import Pubkey
from tapedrive.pda import tape_pda, writer_pda
from tapedrive.utils import to_name


class TapeInstruction(IntEnum):
    """Discriminators of the tape instructions."""

    CREATE = 0x10
    WRITE = 0x11
    UPDATE = 0x12
    FINALIZE = 0x13
    SET_HEADER = 0x14
    SUBSIDIZE = 0x15


def _sized(name: str, value: bytes, size: int) -> bytes:
    value = bytes(value)
    if len(value) != size:
        raise ValueError(f"{name} must be {size} bytes, got {len(value)}")
    return value


def _proof_bytes(proof: Sequence[bytes]) -> bytes:
    nodes = [_sized("proof node", node, 32) for node in proof]
    if len(nodes) != SEGMENT_PROOF_LEN:
        raise ValueError(f"proof must hold {SEGMENT_PROOF_LEN} hashes, got {len(nodes)}")
    return b"".join(nodes)


_UPDATE_SIZE = 8 + 2 * SEGMENT_SIZE + 32 * SEGMENT_PROOF_LEN


@dataclass(frozen=True)
class UpdateData:
    """Payload of an update instruction."""

    segment_number: int
    old_data: bytes
    new_data: bytes
    proof: tuple[bytes, ...]

    @classmethod
    def try_from_bytes(cls, data: bytes) -> "UpdateData":
        """Decode an update payload (without its discriminator)."""
        data = bytes(data)
        if len(data) != _UPDATE_SIZE:
            raise ValueError(
                f"update payload must be {_UPDATE_SIZE} bytes, got {len(data)}"
            )
        segment_number = int.from_bytes(data[:8], "little")
        old_end = 8 + SEGMENT_SIZE
        new_end = old_end + SEGMENT_SIZE
        proof = tuple(
            data[start : start + 32] for start in range(new_end, _UPDATE_SIZE, 32)
        )
        return cls(segment_number, data[8:old_end], data[old_end:new_end], proof)


def build_create_ix(signer: Pubkey, name: str) -> Instruction:
    """Create a tape named `name` and its writer."""
    raw_name = to_name(name)
    tape, _ = tape_pda(signer, raw_name)
    writer, _ = writer_pda(tape)
    return Instruction(
        PROGRAM_ID,
        [
            AccountMeta.writable(signer, True),
            AccountMeta.writable(tape, False),
            AccountMeta.writable(writer, False),
            AccountMeta.readonly(SYSTEM_PROGRAM_ID, False),
            AccountMeta.readonly(SYSVAR_RENT_ID, False),
            AccountMeta.readonly(SYSVAR_SLOT_HASHES_ID, False),
        ],
        encode_instruction_data(TapeInstruction.CREATE, raw_name),
    )


def build_set_header_ix(signer: Pubkey, tape: Pubkey, header: bytes) -> Instruction:
    """Set the opaque header of a tape."""
    return Instruction(
        PROGRAM_ID,
        [
            AccountMeta.writable(signer, True),
            AccountMeta.writable(tape, False),
        ],
        encode_instruction_data(
            TapeInstruction.SET_HEADER, _sized("header", header, HEADER_SIZE)
        ),
    )


def build_write_ix(signer: Pubkey, tape: Pubkey, writer: Pubkey, data: bytes) -> Instruction:
    """Append raw data to a tape."""
    return Instruction(
        PROGRAM_ID,
        [
            AccountMeta.writable(signer, True),
            AccountMeta.writable(tape, False),
            AccountMeta.writable(writer, False),
        ],
        encode_instruction_data(TapeInstruction.WRITE, data),
    )


def build_update_ix(
    signer: Pubkey,
    tape: Pubkey,
    writer: Pubkey,
    segment_number: int,
    old_data: bytes,
    new_data: bytes,
    proof: Sequence[bytes],
) -> Instruction:
    """Replace one segment of a tape, proven by its Merkle path."""
    payload = (
        int(segment_number).to_bytes(8, "little")
        + _sized("old_data", old_data, SEGMENT_SIZE)
        + _sized("new_data", new_data, SEGMENT_SIZE)
        + _proof_bytes(proof)
    )
    return Instruction(
        PROGRAM_ID,
        [
            AccountMeta.writable(signer, True),
            AccountMeta.writable(tape, False),
            AccountMeta.writable(writer, False),
        ],
        encode_instruction_data(TapeInstruction.UPDATE, payload),
    )


def build_finalize_ix(signer: Pubkey, tape: Pubkey, writer: Pubkey) -> Instruction:
    """Finalize a tape, making it immutable."""
    return Instruction(
        PROGRAM_ID,
        [
            AccountMeta.writable(signer, True),
            AccountMeta.writable(tape, False),
            AccountMeta.writable(writer, False),
            AccountMeta.writable(ARCHIVE_ADDRESS, False),
            AccountMeta.readonly(SYSTEM_PROGRAM_ID, False),
            AccountMeta.readonly(SYSVAR_RENT_ID, False),
        ],
        encode_instruction_data(TapeInstruction.FINALIZE),
    )


def build_subsidize_ix(signer: Pubkey, ata: Pubkey, tape: Pubkey, amount: int) -> Instruction:
    """Move tokens from a token account into a tape's rent balance."""
    return Instruction(
        PROGRAM_ID,
        [
            AccountMeta.writable(signer, True),
            AccountMeta.writable(ata, False),
            AccountMeta.writable(tape, False),
            AccountMeta.writable(TREASURY_ATA, False),
            AccountMeta.readonly(TOKEN_PROGRAM_ID, False),
        ],
        encode_instruction_data(
            TapeInstruction.SUBSIDIZE, int(amount).to_bytes(8, "little")
        ),
    )