"""Name handling, challenge hashing and recall selection."""

from __future__ import annotations

from typing import Union

from Crypto.Hash import keccak

from tapedrive.consts import NAME_LEN
from tapedrive.errors import TapeError, TapeProgramError

SLOT_HASH_SIZE = 40


def _keccak(*parts: bytes) -> bytes:
    hasher = keccak.new(digest_bits=256)
    for part in parts:
        hasher.update(bytes(part))
    return hasher.digest()


def check_condition(condition: bool, err: Union[TapeError, int, Exception]) -> None:
    """Raise err, or a TapeProgramError for an error code, when condition is false."""
    if condition:
        return
    if isinstance(err, Exception):
        raise err
    raise TapeProgramError(err)


def padded_array(data: bytes, size: int) -> bytes:
    """Truncate or zero-pad data to exactly size bytes."""
    return bytes(data)[:size].ljust(size, b"\0")


def to_name(val: Union[str, bytes]) -> bytes:
    """Convert a name to its fixed-size, zero-padded form."""
    raw = val.encode("utf-8") if isinstance(val, str) else bytes(val)
    if len(raw) > NAME_LEN:
        raise ValueError(f"name too long ({len(raw)} > {NAME_LEN})")
    return padded_array(raw, NAME_LEN)


def from_name(val: bytes) -> str:
    """Convert a fixed-size name back to a string, dropping zero bytes."""
    return bytes(b for b in bytes(val) if b != 0).decode("utf-8")


def compute_next_challenge(current_challenge: bytes, slot_hash_data: bytes) -> bytes:
    """Hash the current challenge with the most recent slot hash entry."""
    slot_hash_data = bytes(slot_hash_data)
    if len(slot_hash_data) < SLOT_HASH_SIZE:
        raise ValueError(
            f"slot hash data must hold at least {SLOT_HASH_SIZE} bytes"
        )
    return _keccak(current_challenge, slot_hash_data[:SLOT_HASH_SIZE])


def compute_challenge(block_challenge: bytes, miner_challenge: bytes) -> bytes:
    """Combine the block challenge with a miner's own challenge."""
    return _keccak(block_challenge, miner_challenge)


def compute_recall_tape(challenge: bytes, total_tapes: int) -> int:
    """Tape number to recall; tape numbers start at 1."""
    if total_tapes == 0:
        return 1
    return int.from_bytes(bytes(challenge)[0:8], "little") % total_tapes + 1


def compute_recall_segment(challenge: bytes, total_segments: int) -> int:
    """Segment number to recall within a tape."""
    if total_segments == 0:
        return 0
    return int.from_bytes(bytes(challenge)[8:16], "little") % total_segments