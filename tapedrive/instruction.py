"""Instructions sent to the tape program and the accounts they touch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from tapedrive.keys import Pubkey


@dataclass(frozen=True)
class AccountMeta:
    """An account passed to an instruction, with its signer and write flags."""

    pubkey: Pubkey
    is_signer: bool
    is_writable: bool

    @classmethod
    def writable(cls, pubkey: Pubkey, is_signer: bool) -> "AccountMeta":
        """An account the instruction may modify."""
        return cls(pubkey, is_signer, True)

    @classmethod
    def readonly(cls, pubkey: Pubkey, is_signer: bool) -> "AccountMeta":
        """An account the instruction only reads."""
        return cls(pubkey, is_signer, False)


@dataclass(frozen=True)
class Instruction:
    """A program call: the program, its accounts in order, and its data."""

    program_id: Pubkey
    accounts: tuple[AccountMeta, ...]
    data: bytes

    def __init__(
        self, program_id: Pubkey, accounts: Iterable[AccountMeta], data: bytes
    ) -> None:
        object.__setattr__(self, "program_id", program_id)
        object.__setattr__(self, "accounts", tuple(accounts))
        object.__setattr__(self, "data", bytes(data))


def encode_instruction_data(discriminator: int, payload: bytes = b"") -> bytes:
    """Instruction data: a one-byte discriminator followed by the payload."""
    discriminator = int(discriminator)
    if not 0 <= discriminator <= 0xFF:
        raise ValueError(f"discriminator must fit in one byte, got {discriminator}")
    return bytes([discriminator]) + bytes(payload)