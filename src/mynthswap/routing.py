"""Cardano-origin swap routes.

A route is selected purely from (sender ticker, receiver ticker) and fixes
the build endpoint, the payload shape and whether the backend co-signs.

| sender        | receiver      | endpoint             | co-signed |
|---------------|---------------|----------------------|-----------|
| ADA           | MyUSD         | swap-ada/build       | no        |
| MyUSD         | ADA           | swap-myusd-ada/build | no        |
| MyUSD or IAG  | USDT or USDC  | swap/build           | yes       |
"""

from dataclasses import dataclass
from typing import Optional

from mynthswap.models import SwapRequest


@dataclass(frozen=True)
class CardanoRoute:
    """A supported Cardano-origin swap route."""

    name: str
    from_tickers: tuple[str, ...]
    to_tickers: tuple[str, ...]
    endpoint: str
    requires_signature: bool
    amount_field: str

    def supports_pair(self, from_ticker: str, to_ticker: str) -> bool:
        """Check if this route serves the ticker pair (exact, case-sensitive)."""
        return from_ticker in self.from_tickers and to_ticker in self.to_tickers

    def build_payload(
        self,
        address: str,
        utxos: list[dict],
        amount: int,
        request: SwapRequest,
    ) -> dict:
        """Build the request body for this route's build endpoint.

        Args:
            address: Sender wallet address
            utxos: UTXOs in request format
            amount: Amount in smallest units
            request: Original swap request
        """
        payload = {
            "address": address,
            "utxos": utxos,
            self.amount_field: amount,
        }
        if self.requires_signature:
            payload.update(
                {
                    "destinationAddress": request.receiver.address,
                    "tokenToSwap": request.sender.ticker,
                    "tokenToReceive": request.receiver.ticker,
                }
            )
        return payload


ADA_TO_MYUSD = CardanoRoute(
    name="ada-myusd",
    from_tickers=("ADA",),
    to_tickers=("MyUSD",),
    endpoint="swap-ada/build",
    requires_signature=False,
    amount_field="adaAmount",
)

MYUSD_TO_ADA = CardanoRoute(
    name="myusd-ada",
    from_tickers=("MyUSD",),
    to_tickers=("ADA",),
    endpoint="swap-myusd-ada/build",
    requires_signature=False,
    amount_field="amount",
)

CARDANO_TO_TRON = CardanoRoute(
    name="cardano-tron-stable",
    from_tickers=("MyUSD", "IAG"),
    to_tickers=("USDT", "USDC"),
    endpoint="swap/build",
    requires_signature=True,
    amount_field="amountToSwap",
)

CARDANO_ROUTES: tuple[CardanoRoute, ...] = (ADA_TO_MYUSD, MYUSD_TO_ADA, CARDANO_TO_TRON)


def resolve_route(from_ticker: str, to_ticker: str) -> Optional[CardanoRoute]:
    """Find the route for a ticker pair, or None if the swap is unavailable."""
    for route in CARDANO_ROUTES:
        if route.supports_pair(from_ticker, to_ticker):
            return route
    return None


def unavailable_swap_message(from_ticker: str, to_ticker: str) -> str:
    return f"Swap of {from_ticker} to {to_ticker} is not available at this time, try again later"
