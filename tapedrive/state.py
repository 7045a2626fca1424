"""On-chain account layouts of the tape program."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from functools import lru_cache
from typing import ClassVar, TypeVar

from tapedrive.consts import HEADER_SIZE, NAME_LEN
from tapedrive.keys import Pubkey
from tapedrive.rent import min_finalization_rent, rent_owed, rent_per_block

DISCRIMINATOR_SIZE = 8

_ZERO_KEY = Pubkey(bytes(32))
_PUBKEY = "pubkey"

T = TypeVar("T", bound="AccountState")


class AccountType(IntEnum):
    """Discriminator stored in the first byte of every account."""

    UNKNOWN = 0
    ARCHIVE = 1
    SPOOL = 2
    WRITER = 3
    TAPE = 4
    MINER = 5
    EPOCH = 6
    BLOCK = 7
    TREASURY = 8


class TapeState(IntEnum):
    """Lifecycle of a tape."""

    UNKNOWN = 0
    CREATED = 1
    WRITING = 2
    FINALIZED = 3


class AccountDataError(ValueError):
    """Raised when account data cannot be packed or unpacked."""


@lru_cache(maxsize=None)
def _compile(layout: tuple[tuple[str, str], ...]) -> struct.Struct:
    codes = ("32s" if code == _PUBKEY else code for _, code in layout)
    return struct.Struct("<" + "".join(codes))


class AccountState:
    """Fixed-size account: an 8-byte discriminator followed by the fields."""

    _ACCOUNT_TYPE: ClassVar[AccountType]
    _LAYOUT: ClassVar[tuple[tuple[str, str], ...]] = ()

    @classmethod
    def get_size(cls) -> int:
        """Size of the account data in bytes, discriminator included."""
        return DISCRIMINATOR_SIZE + _compile(cls._LAYOUT).size

    @classmethod
    def unpack(cls: type[T], data: bytes) -> T:
        """Read the account from the start of a raw data slice."""
        data = bytes(data)
        size = cls.get_size()
        if len(data) < size:
            raise AccountDataError(
                f"{cls.__name__} needs {size} bytes, got {len(data)}"
            )
        if data[0] != cls._ACCOUNT_TYPE:
            raise AccountDataError(
                f"invalid discriminator for {cls.__name__}: "
                f"expected {int(cls._ACCOUNT_TYPE)}, got {data[0]}"
            )
        values = _compile(cls._LAYOUT).unpack_from(data, DISCRIMINATOR_SIZE)
        kwargs = {
            name: Pubkey(value) if code == _PUBKEY else value
            for (name, code), value in zip(cls._LAYOUT, values)
        }
        return cls(**kwargs)

    def to_bytes(self) -> bytes:
        """Serialize the account, discriminator first."""
        values = []
        for name, code in self._LAYOUT:
            value = getattr(self, name)
            if code == _PUBKEY:
                value, code = bytes(value), "32s"
            if code.endswith("s"):
                value = bytes(value)
                expected = int(code[:-1])
                if len(value) != expected:
                    raise AccountDataError(
                        f"field {name} must be {expected} bytes, got {len(value)}"
                    )
            values.append(value)
        try:
            body = _compile(self._LAYOUT).pack(*values)
        except struct.error as exc:
            raise AccountDataError(str(exc)) from exc
        return bytes([self._ACCOUNT_TYPE]) + bytes(DISCRIMINATOR_SIZE - 1) + body


@dataclass
class Archive(AccountState):
    """Global totals of stored tapes and segments."""

    _ACCOUNT_TYPE = AccountType.ARCHIVE
    _LAYOUT = (("tapes_stored", "Q"), ("segments_stored", "Q"))

    tapes_stored: int = 0
    segments_stored: int = 0

    def block_reward(self) -> int:
        """Global reward to miners for the current block."""
        return rent_per_block(self.segments_stored)


@dataclass
class Block(AccountState):
    """Current mining block."""

    _ACCOUNT_TYPE = AccountType.BLOCK
    _LAYOUT = (
        ("number", "Q"),
        ("progress", "Q"),
        ("challenge", "32s"),
        ("challenge_set", "Q"),
        ("last_proof_at", "q"),
        ("last_block_at", "q"),
    )

    number: int = 0
    progress: int = 0
    challenge: bytes = bytes(32)
    challenge_set: int = 0
    last_proof_at: int = 0
    last_block_at: int = 0


@dataclass
class Epoch(AccountState):
    """Current epoch and its difficulty settings."""

    _ACCOUNT_TYPE = AccountType.EPOCH
    _LAYOUT = (
        ("number", "Q"),
        ("progress", "Q"),
        ("mining_difficulty", "Q"),
        ("packing_difficulty", "Q"),
        ("target_participation", "Q"),
        ("reward_rate", "Q"),
        ("duplicates", "Q"),
        ("last_epoch_at", "q"),
    )

    number: int = 0
    progress: int = 0
    mining_difficulty: int = 0
    packing_difficulty: int = 0
    target_participation: int = 0
    reward_rate: int = 0
    duplicates: int = 0
    last_epoch_at: int = 0


@dataclass
class Miner(AccountState):
    """A registered miner."""

    _ACCOUNT_TYPE = AccountType.MINER
    _LAYOUT = (
        ("authority", _PUBKEY),
        ("name", f"{NAME_LEN}s"),
        ("unclaimed_rewards", "Q"),
        ("challenge", "32s"),
        ("commitment", "32s"),
        ("multiplier", "Q"),
        ("last_proof_block", "Q"),
        ("last_proof_at", "q"),
        ("total_proofs", "Q"),
        ("total_rewards", "Q"),
    )

    authority: Pubkey = _ZERO_KEY
    name: bytes = bytes(NAME_LEN)
    unclaimed_rewards: int = 0
    challenge: bytes = bytes(32)
    commitment: bytes = bytes(32)
    multiplier: int = 0
    last_proof_block: int = 0
    last_proof_at: int = 0
    total_proofs: int = 0
    total_rewards: int = 0


@dataclass
class Tape(AccountState):
    """A tape and its rent balance."""

    _ACCOUNT_TYPE = AccountType.TAPE
    _LAYOUT = (
        ("number", "Q"),
        ("state", "Q"),
        ("authority", _PUBKEY),
        ("name", f"{NAME_LEN}s"),
        ("merkle_seed", "32s"),
        ("merkle_root", "32s"),
        ("header", f"{HEADER_SIZE}s"),
        ("first_slot", "Q"),
        ("tail_slot", "Q"),
        ("balance", "Q"),
        ("last_rent_block", "Q"),
        ("total_segments", "Q"),
    )

    number: int = 0
    state: int = TapeState.UNKNOWN
    authority: Pubkey = _ZERO_KEY
    name: bytes = bytes(NAME_LEN)
    merkle_seed: bytes = bytes(32)
    merkle_root: bytes = bytes(32)
    header: bytes = bytes(HEADER_SIZE)
    first_slot: int = 0
    tail_slot: int = 0
    balance: int = 0
    last_rent_block: int = 0
    total_segments: int = 0

    def has_minimum_rent(self) -> bool:
        """Whether the balance covers at least one block of rent."""
        return self.balance >= self.rent_per_block()

    def can_finalize(self) -> bool:
        """Whether the balance covers the rent needed to finalize."""
        return self.balance >= min_finalization_rent(self.total_segments)

    def rent_per_block(self) -> int:
        """Rent this tape owes per block."""
        return rent_per_block(self.total_segments)

    def rent_owed(self, current_block: int) -> int:
        """Rent owed since the last rent block."""
        return rent_owed(self.total_segments, self.last_rent_block, current_block)


@dataclass
class Treasury(AccountState):
    """The program treasury; it holds no fields."""

    _ACCOUNT_TYPE = AccountType.TREASURY
    _LAYOUT = ()