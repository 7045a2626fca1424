"""Proof-of-work and proof-of-access solutions submitted when mining."""

from __future__ import annotations

from dataclasses import dataclass

from tapedrive.consts import EMPTY_PROOF, SEGMENT_PROOF_LEN


def _check(name: str, value: bytes, size: int) -> bytes:
    value = bytes(value)
    if len(value) != size:
        raise ValueError(f"{name} must be {size} bytes, got {len(value)}")
    return value


@dataclass(frozen=True)
class PoW:
    """Proof-of-work solution: a 16-byte digest and an 8-byte nonce."""

    digest: bytes = bytes(16)
    nonce: bytes = bytes(8)

    def __post_init__(self) -> None:
        object.__setattr__(self, "digest", _check("digest", self.digest, 16))
        object.__setattr__(self, "nonce", _check("nonce", self.nonce, 8))

    def to_bytes(self) -> bytes:
        """Raw layout: digest then nonce."""
        return self.digest + self.nonce


@dataclass(frozen=True)
class PoA:
    """Proof-of-access solution for a tape segment with its Merkle path."""

    bump: bytes = bytes(8)
    seed: bytes = bytes(16)
    nonce: bytes = bytes(128)
    path: tuple[bytes, ...] = EMPTY_PROOF

    def __post_init__(self) -> None:
        object.__setattr__(self, "bump", _check("bump", self.bump, 8))
        object.__setattr__(self, "seed", _check("seed", self.seed, 16))
        object.__setattr__(self, "nonce", _check("nonce", self.nonce, 128))
        path = tuple(_check("path node", node, 32) for node in self.path)
        if len(path) != SEGMENT_PROOF_LEN:
            raise ValueError(
                f"path must hold {SEGMENT_PROOF_LEN} hashes, got {len(path)}"
            )
        object.__setattr__(self, "path", path)

    def to_bytes(self) -> bytes:
        """Raw layout: bump, seed, nonce, then the path hashes."""
        return self.bump + self.seed + self.nonce + b"".join(self.path)