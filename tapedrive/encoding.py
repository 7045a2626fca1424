"""Encoding and decoding of tape payloads: compression and segment prefixes."""

from __future__ import annotations

import gzip
import logging
import zlib

from tapedrive.consts import SEGMENT_SIZE
from tapedrive.header import CompressionAlgo, TapeFlags, TapeHeader

MAX_RETRIES = 1000
VERIFY_EVERY = 500
WAIT_TIME = 32  # seconds
LAMPORTS_PER_TX = 5000

PREFIX_SIZE = 8

_log = logging.getLogger(__name__)


class EncodingError(ValueError):
    """Raised when tape data cannot be encoded or decoded."""


def compress(data: bytes) -> bytes:
    """Gzip-compress data."""
    return gzip.compress(bytes(data), compresslevel=6, mtime=0)


def decompress(data: bytes) -> bytes:
    """Gzip-decompress data."""
    try:
        return gzip.decompress(bytes(data))
    except (OSError, EOFError, zlib.error) as exc:
        raise EncodingError(f"decompression failed: {exc}") from exc


def estimate_chunks(data_len: int) -> int:
    """Number of segments needed to hold data_len bytes."""
    return -(-data_len // SEGMENT_SIZE)


def _compression(header: TapeHeader) -> CompressionAlgo:
    try:
        return CompressionAlgo(header.compression)
    except ValueError:
        raise EncodingError("Invalid compression algorithm") from None


def encode_tape(data: bytes, header: TapeHeader) -> bytes:
    """Encode data for a tape, recording the processed length in the header."""
    if _compression(header) is CompressionAlgo.GZIP:
        processed = compress(data)
    else:
        processed = bytes(data)
    header.data_len = len(processed)
    if header.flags & TapeFlags.PREFIXED:
        return prefix_segments(processed)
    return processed


def decode_tape(data: bytes, header: TapeHeader) -> bytes:
    """Decode tape data back to the original payload."""
    if header.flags & TapeFlags.PREFIXED:
        processed = unprefix_segments(data, header.data_len)
    else:
        processed = bytes(data)
    if _compression(header) is CompressionAlgo.GZIP:
        return decompress(processed)
    return processed


def prefix_segments(data: bytes) -> bytes:
    """Split data into segments, each prefixed by its big-endian u64 index."""
    data = bytes(data)
    body = SEGMENT_SIZE - PREFIX_SIZE
    return b"".join(
        (start // body).to_bytes(PREFIX_SIZE, "big") + data[start:start + body]
        for start in range(0, len(data), body)
    )


def unprefix_segments(data: bytes, data_length: int) -> bytes:
    """Reassemble prefixed segments, requiring indices 0, 1, 2... without gaps."""
    data = bytes(data)
    segments: dict[int, bytes] = {}
    for start in range(0, len(data), SEGMENT_SIZE):
        chunk = data[start:start + SEGMENT_SIZE]
        if len(chunk) < PREFIX_SIZE:
            raise EncodingError("Invalid segment size: too small")
        number = int.from_bytes(chunk[:PREFIX_SIZE], "big")
        # Duplicates are assumed identical; the first one wins.
        segments.setdefault(number, chunk[PREFIX_SIZE:])

    numbers = sorted(segments)
    if numbers:
        if numbers[0] != 0:
            raise EncodingError("Segments do not start from 0")
        for current, following in zip(numbers, numbers[1:]):
            if following != current + 1:
                _log.debug(
                    "Segment %d is not consecutive with segment %d", current, following
                )
                raise EncodingError("Non-consecutive segments detected")

    output = b"".join(segments[number] for number in numbers)
    return output[:data_length]