"""Error codes reported by the tape program."""

from __future__ import annotations

from enum import IntEnum


class TapeError(IntEnum):
    """Custom program error codes."""

    UNKNOWN_ERROR = 0

    UNEXPECTED_STATE = 0x10
    WRITE_FAILED = 0x11
    TAPE_TOO_LONG = 0x12
    INSUFFICIENT_RENT = 0x13

    SOLUTION_INVALID = 0x20
    UNEXPECTED_TAPE = 0x21
    SOLUTION_TOO_EASY = 0x22
    SOLUTION_TOO_EARLY = 0x23
    CLAIM_TOO_LARGE = 0x24
    COMMITMENT_MISMATCH = 0x25

    SPOOL_PACK_FAILED = 0x30
    SPOOL_UNPACK_FAILED = 0x31
    SPOOL_TOO_MANY_TAPES = 0x32
    SPOOL_COMMIT_FAILED = 0x33

    def message(self) -> str:
        """Human-readable description of the error."""
        return _MESSAGES[self]


_MESSAGES = {
    TapeError.UNKNOWN_ERROR: "Unknown error",
    TapeError.UNEXPECTED_STATE: "The provided tape is in an unexpected state",
    TapeError.WRITE_FAILED: "The tape write failed",
    TapeError.TAPE_TOO_LONG: "The tape is too long",
    TapeError.INSUFFICIENT_RENT: "The tape does not have enough rent",
    TapeError.SOLUTION_INVALID: "The provided hash is invalid",
    TapeError.UNEXPECTED_TAPE: "The provided tape doesn't match the expected tape",
    TapeError.SOLUTION_TOO_EASY: "The provided hash did not satisfy the minimum required difficulty",
    TapeError.SOLUTION_TOO_EARLY: "The provided solution is too early",
    TapeError.CLAIM_TOO_LARGE: "The provided claim is too large",
    TapeError.COMMITMENT_MISMATCH: "Computed commitment does not match the miner commitment",
    TapeError.SPOOL_PACK_FAILED: "Faild to pack the tape into the spool",
    TapeError.SPOOL_UNPACK_FAILED: "Failed to unpack the tape from the spool",
    TapeError.SPOOL_TOO_MANY_TAPES: "Too many tapes in the spool",
    TapeError.SPOOL_COMMIT_FAILED: "Spool commit failed",
}


class TapeProgramError(Exception):
    """Exception carrying a TapeError code."""

    def __init__(self, error: TapeError | int) -> None:
        self.error = TapeError(error)
        super().__init__(self.error.message())

    @property
    def code(self) -> int:
        return int(self.error)