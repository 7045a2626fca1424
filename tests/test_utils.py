import pytest

from tapedrive.consts import NAME_LEN
from tapedrive.errors import TapeError, TapeProgramError
from tapedrive.utils import (
    check_condition,
    compute_challenge,
    compute_next_challenge,
    compute_recall_segment,
    compute_recall_tape,
    from_name,
    padded_array,
    to_name,
)


def test_check_condition_passes():
    assert check_condition(True, TapeError.WRITE_FAILED) is None


def test_check_condition_raises_code():
    with pytest.raises(TapeProgramError) as info:
        check_condition(False, TapeError.WRITE_FAILED)
    assert info.value.error == TapeError.WRITE_FAILED


def test_check_condition_raises_exception():
    with pytest.raises(KeyError):
        check_condition(False, KeyError("missing"))


def test_padded_array():
    assert padded_array(b"abc", 5) == b"abc\0\0"
    assert padded_array(b"abcdef", 3) == b"abc"
    assert padded_array(b"", 2) == b"\0\0"


def test_name_round_trip():
    name = to_name("genesis")
    assert len(name) == NAME_LEN
    assert name.startswith(b"genesis")
    assert from_name(name) == "genesis"


def test_to_name_accepts_bytes_and_full_length():
    assert to_name(b"x" * NAME_LEN) == b"x" * NAME_LEN


def test_to_name_too_long():
    with pytest.raises(ValueError, match="name too long"):
        to_name("x" * (NAME_LEN + 1))


def test_from_name_invalid_utf8():
    with pytest.raises(UnicodeDecodeError):
        from_name(b"\xff".ljust(NAME_LEN, b"\0"))


def test_compute_challenge_properties():
    a, b = b"\x01" * 32, b"\x02" * 32
    result = compute_challenge(a, b)
    assert len(result) == 32
    assert result == compute_challenge(a, b)
    assert result != compute_challenge(b, a)


def test_next_challenge_uses_first_slot_hash_only():
    current = b"\x05" * 32
    slot_data = b"\x06" * 40
    result = compute_next_challenge(current, slot_data)
    assert len(result) == 32
    assert result == compute_next_challenge(current, slot_data + b"\x07" * 40)
    assert result != compute_next_challenge(current, b"\x08" * 40)


def test_next_challenge_short_data():
    with pytest.raises(ValueError):
        compute_next_challenge(bytes(32), bytes(39))


def test_recall_tape_zero_total():
    assert compute_recall_tape(b"\xff" * 32, 0) == 1


def test_recall_segment_zero_total():
    assert compute_recall_segment(b"\xff" * 32, 0) == 0


def test_recall_values():
    challenge = (3).to_bytes(8, "little") + (3).to_bytes(8, "little") + bytes(16)
    assert compute_recall_tape(challenge, 10) == 4
    assert compute_recall_segment(challenge, 10) == 3


@pytest.mark.parametrize("total", [1, 2, 7, 1000])
def test_recall_ranges(total):
    for seed in range(20):
        challenge = bytes((seed * 31 + i) % 256 for i in range(32))
        assert 1 <= compute_recall_tape(challenge, total) <= total
        assert 0 <= compute_recall_segment(challenge, total) < total