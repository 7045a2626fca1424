"""Program-derived addresses used by the tape program."""

from __future__ import annotations

from tapedrive.consts import (
    ARCHIVE,
    ASSOCIATED_TOKEN_PROGRAM_ID,
    BLOCK,
    EPOCH,
    METADATA,
    MINER,
    MINT,
    MINT_SEED,
    NAME_LEN,
    PROGRAM_ID,
    SPOOL,
    TAPE,
    TOKEN_METADATA_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
    TREASURY,
    WRITER,
)
from tapedrive.keys import Pubkey, find_program_address


def _check_name(name: bytes) -> bytes:
    name = bytes(name)
    if len(name) != NAME_LEN:
        raise ValueError(f"name must be {NAME_LEN} bytes, got {len(name)}")
    return name


def archive_pda() -> tuple[Pubkey, int]:
    return find_program_address([ARCHIVE], PROGRAM_ID)


def epoch_pda() -> tuple[Pubkey, int]:
    return find_program_address([EPOCH], PROGRAM_ID)


def block_pda() -> tuple[Pubkey, int]:
    return find_program_address([BLOCK], PROGRAM_ID)


def treasury_pda() -> tuple[Pubkey, int]:
    return find_program_address([TREASURY], PROGRAM_ID)


def mint_pda() -> tuple[Pubkey, int]:
    return find_program_address([MINT, MINT_SEED], PROGRAM_ID)


def treasury_ata() -> tuple[Pubkey, int]:
    treasury, _ = treasury_pda()
    mint, _ = mint_pda()
    return find_program_address(
        [bytes(treasury), bytes(TOKEN_PROGRAM_ID), bytes(mint)],
        ASSOCIATED_TOKEN_PROGRAM_ID,
    )


def metadata_pda(mint: Pubkey) -> tuple[Pubkey, int]:
    return find_program_address(
        [METADATA, bytes(TOKEN_METADATA_PROGRAM_ID), bytes(mint)],
        TOKEN_METADATA_PROGRAM_ID,
    )


def tape_pda(authority: Pubkey, name: bytes) -> tuple[Pubkey, int]:
    return find_program_address([TAPE, bytes(authority), _check_name(name)], PROGRAM_ID)


def writer_pda(tape: Pubkey) -> tuple[Pubkey, int]:
    return find_program_address([WRITER, bytes(tape)], PROGRAM_ID)


def miner_pda(authority: Pubkey, name: bytes) -> tuple[Pubkey, int]:
    return find_program_address([MINER, bytes(authority), _check_name(name)], PROGRAM_ID)


def spool_pda(miner: Pubkey, number: int) -> tuple[Pubkey, int]:
    return find_program_address(
        [SPOOL, bytes(miner), number.to_bytes(8, "little")], PROGRAM_ID
    )