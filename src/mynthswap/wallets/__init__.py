"""Wallet capabilities consumed by the swap pipelines.

- Cardano: Lucid-style wallet context (UTXOs, load/sign/assemble/submit)
- Tron: TronWeb-style provider (balance, contract call, sign/broadcast)
- Dry-run: simulated implementations of both
"""

from mynthswap.wallets.cardano import CardanoSession, CardanoWallet, SignedTx, TxSigner, Utxo
from mynthswap.wallets.dryrun import SimulatedCardanoWallet, SimulatedTronProvider
from mynthswap.wallets.tron import (
    TronAddress,
    TronProvider,
    TronResult,
    TronSession,
    TronTransactionBuilder,
    TronTrx,
)

__all__ = [
    # Cardano
    "CardanoSession",
    "CardanoWallet",
    "SignedTx",
    "TxSigner",
    "Utxo",
    # Tron
    "TronAddress",
    "TronProvider",
    "TronResult",
    "TronSession",
    "TronTransactionBuilder",
    "TronTrx",
    # Dry-run
    "SimulatedCardanoWallet",
    "SimulatedTronProvider",
]
