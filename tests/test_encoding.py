import pytest

from tapedrive.consts import SEGMENT_SIZE
from tapedrive.encoding import (
    EncodingError,
    compress,
    decode_tape,
    decompress,
    encode_tape,
    estimate_chunks,
    prefix_segments,
    unprefix_segments,
)
from tapedrive.header import (
    CompressionAlgo,
    EncryptionAlgo,
    MimeType,
    TapeFlags,
    TapeHeader,
)

PAYLOAD = bytes(range(256)) * 5


def _header(compression, flags):
    return TapeHeader.new(MimeType.TEXT_PLAIN, compression, EncryptionAlgo.NONE, flags)


def test_compress_round_trip():
    assert decompress(compress(PAYLOAD)) == PAYLOAD


def test_compress_produces_gzip_magic():
    assert compress(b"hello")[:2] == b"\x1f\x8b"


def test_decompress_rejects_garbage():
    with pytest.raises(EncodingError):
        decompress(b"not gzip data")


@pytest.mark.parametrize("n", [0, 1, 127, 128, 129, 1000, 4096])
def test_estimate_chunks_covers_data(n):
    chunks = estimate_chunks(n)
    assert chunks * SEGMENT_SIZE >= n
    assert max(chunks - 1, 0) * SEGMENT_SIZE < n or chunks == 0


def test_prefix_layout():
    data = b"a" * 130
    out = prefix_segments(data)
    assert len(out) == 130 + 2 * 8
    assert out[:8] == (0).to_bytes(8, "big")
    assert out[SEGMENT_SIZE:SEGMENT_SIZE + 8] == (1).to_bytes(8, "big")
    assert out[8:SEGMENT_SIZE] == b"a" * (SEGMENT_SIZE - 8)


def test_prefix_unprefix_round_trip():
    prefixed = prefix_segments(PAYLOAD)
    assert unprefix_segments(prefixed, len(PAYLOAD)) == PAYLOAD


def test_unprefix_out_of_order_and_duplicates():
    prefixed = prefix_segments(PAYLOAD)
    segments = [prefixed[i:i + SEGMENT_SIZE] for i in range(0, len(prefixed), SEGMENT_SIZE)]
    # Pad the final short segment so reordering keeps segment boundaries.
    segments[-1] = segments[-1].ljust(SEGMENT_SIZE, b"\0")
    shuffled = list(reversed(segments)) + [segments[0]]
    assert unprefix_segments(b"".join(shuffled), len(PAYLOAD)) == PAYLOAD


def test_unprefix_truncates_to_length():
    prefixed = prefix_segments(PAYLOAD)
    assert unprefix_segments(prefixed, 10) == PAYLOAD[:10]


def test_unprefix_must_start_at_zero():
    seg = (1).to_bytes(8, "big") + b"x" * 120
    with pytest.raises(EncodingError, match="start from 0"):
        unprefix_segments(seg, 120)


def test_unprefix_gap_detected():
    seg0 = (0).to_bytes(8, "big") + b"x" * 120
    seg2 = (2).to_bytes(8, "big") + b"y" * 120
    with pytest.raises(EncodingError, match="Non-consecutive"):
        unprefix_segments(seg0 + seg2, 240)


def test_unprefix_short_segment():
    seg0 = (0).to_bytes(8, "big") + b"x" * 120
    with pytest.raises(EncodingError, match="too small"):
        unprefix_segments(seg0 + b"abc", 240)


def test_unprefix_empty():
    assert unprefix_segments(b"", 0) == b""


@pytest.mark.parametrize(
    "compression,flags",
    [
        (CompressionAlgo.NONE, TapeFlags.NONE),
        (CompressionAlgo.NONE, TapeFlags.PREFIXED),
        (CompressionAlgo.GZIP, TapeFlags.NONE),
        (CompressionAlgo.GZIP, TapeFlags.PREFIXED),
    ],
)
def test_encode_decode_round_trip(compression, flags):
    header = _header(compression, flags)
    encoded = encode_tape(PAYLOAD, header)
    assert decode_tape(encoded, header) == PAYLOAD


def test_encode_sets_data_len_to_processed_length():
    header = _header(CompressionAlgo.GZIP, TapeFlags.PREFIXED)
    encoded = encode_tape(PAYLOAD, header)
    processed = unprefix_segments(encoded, header.data_len)
    assert len(processed) == header.data_len
    assert decompress(processed) == PAYLOAD


def test_encode_plain_is_identity():
    header = _header(CompressionAlgo.NONE, TapeFlags.NONE)
    assert encode_tape(PAYLOAD, header) == PAYLOAD
    assert header.data_len == len(PAYLOAD)


def test_invalid_compression():
    header = _header(CompressionAlgo.NONE, TapeFlags.NONE)
    header.compression = 9
    with pytest.raises(EncodingError, match="Invalid compression algorithm"):
        encode_tape(b"data", header)
    with pytest.raises(EncodingError, match="Invalid compression algorithm"):
        decode_tape(b"data", header)