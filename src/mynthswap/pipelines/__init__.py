"""Chain-specific swap pipelines.

- Cardano: UTXO collection, backend build, (co-)signing, submission
- Tron: TRX balance check, TRC20 contract call, signing and broadcast
"""

from mynthswap.pipelines.base import SwapPipeline
from mynthswap.pipelines.cardano import CardanoSwapPipeline
from mynthswap.pipelines.tron import TronSwapPipeline

__all__ = [
    "SwapPipeline",
    "CardanoSwapPipeline",
    "TronSwapPipeline",
]
