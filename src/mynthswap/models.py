"""Swap request contracts.

A swap request is immutable once built; unsupported blockchains are
rejected here, before any pipeline is selected.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from mynthswap.chains import Blockchain


class SwapSender(BaseModel):
    """Asset the user sends."""

    model_config = ConfigDict(frozen=True)

    amount: str = Field(..., description="Amount to send as a decimal string")
    ticker: str = Field(..., description="Asset ticker (ADA, MyUSD, IAG, USDT, USDC)")
    blockchain: Blockchain = Field(..., description="Chain the asset is sent from")


class SwapReceiver(BaseModel):
    """Asset the user receives and where."""

    model_config = ConfigDict(frozen=True)

    address: str = Field(..., description="Destination address on the receiving chain")
    amount: str = Field(default="0", description="Expected amount as a decimal string")
    ticker: str = Field(..., description="Asset ticker to receive")
    blockchain: Blockchain = Field(..., description="Chain the asset is received on")


class SwapRequest(BaseModel):
    """A cross-chain swap request."""

    model_config = ConfigDict(frozen=True)

    sender: SwapSender
    receiver: SwapReceiver


class ValidationMessages(BaseModel):
    """Localized user-facing messages for precondition failures."""

    wallet_unconnected: Optional[str] = Field(None, description="Wallet is not connected")
    insufficient_utxos: Optional[str] = Field(None, description="Wallet has no spendable UTXOs")

    def get(self, key: str, default: str = "Error") -> str:
        """Get a message by field name, falling back to a default."""
        return getattr(self, key, None) or default
