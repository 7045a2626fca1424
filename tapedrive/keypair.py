"""Ed25519 keypairs stored as JSON byte arrays."""

from __future__ import annotations

import json
from os import PathLike
from pathlib import Path
from typing import Union

from nacl.exceptions import CryptoError
from nacl.signing import SigningKey

from tapedrive.keys import Pubkey

KEYPAIR_LENGTH = 64
SEED_LENGTH = 32

PathType = Union[str, "PathLike[str]"]


class KeypairError(ValueError):
    """Raised when a keypair cannot be built, read or written."""


class Keypair:
    """An ed25519 keypair: 32-byte secret seed followed by the 32-byte public key."""

    def __init__(self, signing_key: SigningKey) -> None:
        self._signing_key = signing_key

    @classmethod
    def generate(cls) -> "Keypair":
        """A new random keypair."""
        return cls(SigningKey.generate())

    @classmethod
    def from_bytes(cls, data: bytes) -> "Keypair":
        """Build a keypair from its 64-byte form, checking the public half."""
        data = bytes(data)
        if len(data) != KEYPAIR_LENGTH:
            raise KeypairError(
                f"keypair must be {KEYPAIR_LENGTH} bytes, got {len(data)}"
            )
        try:
            signing_key = SigningKey(data[:SEED_LENGTH])
        except (CryptoError, ValueError, TypeError) as exc:
            raise KeypairError(f"invalid secret key: {exc}") from exc
        if bytes(signing_key.verify_key) != data[SEED_LENGTH:]:
            raise KeypairError(
                "keypair bytes do not specify same pubkey as derived from their secret key"
            )
        return cls(signing_key)

    def to_bytes(self) -> bytes:
        """The 64-byte form: seed then public key."""
        return bytes(self._signing_key) + bytes(self._signing_key.verify_key)

    @property
    def pubkey(self) -> Pubkey:
        """The public key."""
        return Pubkey(bytes(self._signing_key.verify_key))

    def sign(self, message: bytes) -> bytes:
        """The 64-byte signature of a message."""
        return self._signing_key.sign(bytes(message)).signature

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Keypair):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash(self.to_bytes())

    def __repr__(self) -> str:
        return f"Keypair(pubkey={self.pubkey})"


def create_keypair(path: PathType) -> Keypair:
    """Generate a keypair and write it to `path` as a JSON array of bytes."""
    keypair = Keypair.generate()
    text = json.dumps(list(keypair.to_bytes()), separators=(",", ":"))
    try:
        Path(path).write_text(text)
    except OSError as exc:
        raise KeypairError(f"Failed to write keypair file {path}: {exc}") from exc
    return keypair


def load_keypair(path: PathType) -> Keypair:
    """Read a keypair written as a JSON array of bytes."""
    try:
        text = Path(path).read_text()
    except OSError as exc:
        raise KeypairError(f"Failed to read keypair file {path}: {exc}") from exc
    try:
        values = json.loads(text)
    except json.JSONDecodeError as exc:
        raise KeypairError(f"Failed to parse keypair JSON: {exc}") from exc
    if not isinstance(values, list) or not all(
        isinstance(v, int) and not isinstance(v, bool) and 0 <= v <= 0xFF
        for v in values
    ):
        raise KeypairError("Failed to parse keypair JSON: expected an array of bytes")
    try:
        return Keypair.from_bytes(bytes(values))
    except KeypairError as exc:
        raise KeypairError(f"Failed to create keypair from bytes: {exc}") from exc


def get_keypair_path(keypair_path: PathType | None = None) -> Path:
    """The given path, or the default keypair location under the home directory."""
    if keypair_path is not None:
        return Path(keypair_path)
    return Path.home() / ".config" / "solana" / "id.json"


def get_payer(keypair_path: PathType) -> Keypair:
    """Load the keypair at `keypair_path`, creating one there if it cannot be loaded."""
    try:
        return load_keypair(keypair_path)
    except KeypairError:
        return create_keypair(keypair_path)