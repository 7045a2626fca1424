"""Choice of network cluster and its RPC endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ClusterKind(Enum):
    """Known clusters, plus a custom RPC endpoint."""

    LOCALNET = "l"
    MAINNET = "m"
    DEVNET = "d"
    TESTNET = "t"
    CUSTOM = "custom"


_URLS = {
    ClusterKind.LOCALNET: "http://127.0.0.1:8899",
    ClusterKind.MAINNET: "https://api.mainnet-beta.solana.com",
    ClusterKind.DEVNET: "https://api.devnet.solana.com",
    ClusterKind.TESTNET: "https://api.testnet.solana.com",
}


@dataclass(frozen=True)
class Cluster:
    """A cluster to connect to."""

    kind: ClusterKind
    custom_url: str = ""

    @classmethod
    def parse(cls, text: str) -> "Cluster":
        """Parse l, m, d, t or an http(s) URL."""
        if text in ("l", "m", "d", "t"):
            return cls(ClusterKind(text))
        if text.startswith("http://") or text.startswith("https://"):
            return cls(ClusterKind.CUSTOM, text)
        raise ValueError(
            f"Invalid cluster value: '{text}'. Use l, m, d, t, or a valid RPC URL "
            "(http:// or https://)"
        )

    def rpc_url(self) -> str:
        """The RPC endpoint of the cluster."""
        if self.kind is ClusterKind.CUSTOM:
            return self.custom_url
        return _URLS[self.kind]