"""Reading a tape back by walking its write history from the tail slot."""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from tapedrive.block import process_block
from tapedrive.consts import SEGMENT_SIZE
from tapedrive.keys import Pubkey
from tapedrive.utils import padded_array

_log = logging.getLogger(__name__)

BlockFetcher = Callable[[int], Mapping[str, Any]]


class ReadError(ValueError):
    """Raised when a tape's write history is inconsistent."""


@dataclass
class ReadState:
    """Segments found so far, slots already visited and slots still to visit."""

    segments: dict[int, bytes] = field(default_factory=dict)
    visited: set[int] = field(default_factory=set)
    # Max-heap of pending slots, stored negated for heapq.
    queue: list[int] = field(default_factory=list)

    def segments_len(self) -> int:
        """Number of distinct segments found."""
        return len(self.segments)

    def _push(self, slot: int) -> None:
        heapq.heappush(self.queue, -slot)

    def _pop(self) -> int:
        return -heapq.heappop(self.queue)


def init_read(start_slot: int) -> ReadState:
    """Start a read at the tape's tail slot."""
    state = ReadState()
    state._push(start_slot)
    return state


def process_next_block(
    fetch_block: BlockFetcher, tape_address: Pubkey, state: ReadState
) -> bool:
    """Process the latest pending slot; return whether slots remain."""
    if not state.queue:
        return False

    current_slot = state._pop()
    if current_slot in state.visited:
        return bool(state.queue)
    state.visited.add(current_slot)

    _log.debug("Processing slot: %d", current_slot)
    processed = process_block(fetch_block(current_slot), current_slot)

    parents: set[int] = set()
    for key, data in processed.segment_writes.items():
        if key.address != tape_address:
            continue
        state.segments.setdefault(key.segment_number, data)
        if key.prev_slot != 0:
            if key.prev_slot > current_slot:
                raise ReadError("Parent slot must be earlier than current")
            parents.add(key.prev_slot)

    for parent in parents:
        state._push(parent)
    return bool(state.queue)


def finalize_read(state: ReadState) -> bytes:
    """Concatenate the segments in order, each padded to the segment size."""
    return b"".join(
        padded_array(state.segments[number], SEGMENT_SIZE)
        for number in sorted(state.segments)
    )


def read_tape_segments(fetch_block: BlockFetcher, tape_address: Pubkey, slot: int) -> bytes:
    """Read every segment of a tape whose history ends at `slot`."""
    state = init_read(slot)
    while process_next_block(fetch_block, tape_address, state):
        pass
    return finalize_read(state)