"""Rent model for tapes, with unsigned 64-bit saturating arithmetic."""

from tapedrive.consts import BLOCK_DURATION_SECONDS, RENT_PER_SEGMENT, U64_MAX

BLOCKS_PER_YEAR = 60 * 60 * 24 * 365 // BLOCK_DURATION_SECONDS


def rent_per_block(total_segments: int) -> int:
    """Rent a tape of this many segments pays each block."""
    return min(total_segments * RENT_PER_SEGMENT, U64_MAX)


def min_finalization_rent(total_segments: int) -> int:
    """Minimum balance a tape needs to be finalized."""
    return min(rent_per_block(total_segments) * BLOCKS_PER_YEAR, U64_MAX)


def rent_owed(total_segments: int, last_block: int, current_block: int) -> int:
    """Rent owed from last_block (exclusive) up to current_block (inclusive)."""
    blocks = max(current_block - last_block, 0)
    return (rent_per_block(total_segments) * blocks) & U64_MAX