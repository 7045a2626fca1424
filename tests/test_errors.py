import pytest

from tapedrive.errors import TapeError, TapeProgramError


def test_codes_match_source():
    assert TapeProgramError(0x11).error is TapeError.WRITE_FAILED
    assert TapeProgramError(0x22).error is TapeError.SOLUTION_TOO_EASY
    assert TapeProgramError(0x33).error is TapeError.SPOOL_COMMIT_FAILED


def test_messages():
    assert TapeError.WRITE_FAILED.message() == "The tape write failed"
    assert TapeError.UNKNOWN_ERROR.message() == "Unknown error"


def test_every_code_has_a_distinct_message():
    messages = [str(TapeProgramError(error)) for error in TapeError]
    assert all(messages)
    assert len(set(messages)) == len(messages)


def test_exception_carries_code_and_message():
    err = TapeProgramError(TapeError.INSUFFICIENT_RENT)
    assert err.code == 0x13
    assert str(err) == "The tape does not have enough rent"
    with pytest.raises(TapeProgramError, match="does not have enough rent"):
        raise err


def test_exception_from_integer_code():
    err = TapeProgramError(0x24)
    assert err.error is TapeError.CLAIM_TOO_LARGE


def test_unknown_integer_code_rejected():
    with pytest.raises(ValueError):
        TapeProgramError(0x99)