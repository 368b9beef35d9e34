"""Cardano wallet capabilities consumed by the swap pipeline.

The wallet context (a Lucid-style object) is supplied by the host
application. It exposes UTXO queries, loading a CBOR transaction built by
the backend, signing, witness assembly and submission. Transaction encoding
and key handling stay inside the wallet.
"""

from dataclasses import dataclass, field
from typing import Optional, Protocol

from mynthswap.chains import map_assets_to_request_format


@dataclass
class Utxo:
    """An unspent transaction output held by the wallet."""

    tx_hash: str
    output_index: int
    address: str
    assets: dict[str, int] = field(default_factory=dict)  # unit -> quantity ("lovelace" for ADA)
    datum_hash: Optional[str] = None
    datum: Optional[str] = None
    script_ref: Optional[dict] = None

    def to_request(self) -> dict:
        """Convert to the build API's UTXO shape."""
        return {
            "txHash": self.tx_hash,
            "outputIndex": self.output_index,
            "address": self.address,
            "assets": map_assets_to_request_format(self.assets),
            "datumHash": self.datum_hash,
            "datum": self.datum,
            "scriptRef": self.script_ref,
        }


class SignedTx(Protocol):
    """A fully witnessed transaction ready for submission."""

    async def submit(self) -> str:
        """Submit to the network and return the transaction id."""
        ...


class TxSigner(Protocol):
    """A backend-built transaction loaded into the wallet context."""

    def sign(self) -> "TxSigner":
        """Queue the wallet's own signature."""
        ...

    def assemble(self, witnesses: list[str]) -> "TxSigner":
        """Add externally produced witnesses (counter-signatures)."""
        ...

    async def complete(self) -> SignedTx:
        """Collect all signatures and finalize the transaction."""
        ...


class CardanoWallet(Protocol):
    """Wallet transaction context."""

    async def get_utxos(self) -> Optional[list[Utxo]]:
        """Spendable UTXOs of the connected account."""
        ...

    def from_tx(self, tx: str) -> TxSigner:
        """Load a CBOR-hex transaction for signing."""
        ...


@dataclass
class CardanoSession:
    """Current Cardano connection state, owned by the host application."""

    wallet: Optional[CardanoWallet] = None
    address: Optional[str] = None

    @property
    def is_connected(self) -> bool:
        return self.wallet is not None and bool(self.address)
