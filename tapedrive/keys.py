"""Public keys, their base58 text form and program-derived addresses."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Iterable

PUBKEY_BYTES = 32
MAX_BASE58_LEN = 44
MAX_SEEDS = 16
MAX_SEED_LEN = 32

_PDA_MARKER = b"ProgramDerivedAddress"
_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {char: value for value, char in enumerate(_ALPHABET)}

# Edwards25519 field prime and curve constant d = -121665/121666.
_P = 2**255 - 19
_D = (-121665 * pow(121666, -1, _P)) % _P


class PubkeyError(ValueError):
    """Raised when a key or an address derivation is invalid."""


class SeedLengthError(PubkeyError):
    """Raised when there are too many seeds or a seed is too long."""


class InvalidSeedsError(PubkeyError):
    """Raised when the seeds hash to a point on the curve."""


def b58encode(data: bytes) -> str:
    """Encode bytes in base58 with the Bitcoin alphabet."""
    data = bytes(data)
    number = int.from_bytes(data, "big")
    chars = []
    while number:
        number, rest = divmod(number, 58)
        chars.append(_ALPHABET[rest])
    leading = len(data) - len(data.lstrip(b"\0"))
    return "1" * leading + "".join(reversed(chars))


def b58decode(text: str) -> bytes:
    """Decode base58 text with the Bitcoin alphabet."""
    number = 0
    for char in text:
        try:
            number = number * 58 + _INDEX[char]
        except KeyError:
            raise PubkeyError(f"invalid base58 character {char!r}") from None
    leading = len(text) - len(text.lstrip("1"))
    body = number.to_bytes((number.bit_length() + 7) // 8, "big") if number else b""
    return b"\0" * leading + body


def is_on_curve(data: bytes) -> bool:
    """Tell whether 32 bytes decompress to a point on the ed25519 curve."""
    data = bytes(data)
    if len(data) != PUBKEY_BYTES:
        return False
    y = (int.from_bytes(data, "little") & ((1 << 255) - 1)) % _P
    y2 = y * y % _P
    u = (y2 - 1) % _P
    v = (_D * y2 + 1) % _P
    x2 = u * pow(v, -1, _P) % _P
    return x2 == 0 or pow(x2, (_P - 1) // 2, _P) == 1


@dataclass(frozen=True)
class Pubkey:
    """A 32-byte account address."""

    raw: bytes

    def __post_init__(self) -> None:
        raw = bytes(self.raw)
        if len(raw) != PUBKEY_BYTES:
            raise PubkeyError(f"public key must be {PUBKEY_BYTES} bytes, got {len(raw)}")
        object.__setattr__(self, "raw", raw)

    @classmethod
    def from_string(cls, text: str) -> "Pubkey":
        """Parse a base58 address."""
        if len(text) > MAX_BASE58_LEN:
            raise PubkeyError("base58 address is too long")
        return cls(b58decode(text))

    def __bytes__(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        return b58encode(self.raw)


def _check_seeds(seeds: list[bytes]) -> None:
    if len(seeds) > MAX_SEEDS:
        raise SeedLengthError(f"at most {MAX_SEEDS} seeds are allowed")
    for seed in seeds:
        if len(seed) > MAX_SEED_LEN:
            raise SeedLengthError(f"seed longer than {MAX_SEED_LEN} bytes")


def create_program_address(seeds: Iterable[bytes], program_id: Pubkey) -> Pubkey:
    """Derive the off-curve address for the given seeds and program."""
    seed_list = [bytes(seed) for seed in seeds]
    _check_seeds(seed_list)
    hasher = hashlib.sha256()
    for seed in seed_list:
        hasher.update(seed)
    hasher.update(bytes(program_id))
    hasher.update(_PDA_MARKER)
    digest = hasher.digest()
    if is_on_curve(digest):
        raise InvalidSeedsError("provided seeds do not result in a valid address")
    return Pubkey(digest)


def find_program_address(seeds: Iterable[bytes], program_id: Pubkey) -> tuple[Pubkey, int]:
    """Find the first valid address, trying bump seeds from 255 downwards."""
    seed_list = [bytes(seed) for seed in seeds]
    _check_seeds(seed_list + [b"\0"])
    for bump in range(255, 0, -1):
        try:
            return create_program_address(seed_list + [bytes([bump])], program_id), bump
        except InvalidSeedsError:
            continue
    raise PubkeyError("unable to find a viable program address bump seed")