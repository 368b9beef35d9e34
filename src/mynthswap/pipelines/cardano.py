"""Cardano-origin swap pipeline.

idle -> generating -> building -> signing -> submitting -> success | failed

The backend builds the transaction from the wallet's UTXOs. For the
MyUSD/IAG -> USDT/USDC route it also returns a counter-signature that the
wallet assembles with its own witness before submission.
"""

import logging

from mynthswap.chains import get_decimals, to_base_units
from mynthswap.config import Settings
from mynthswap.errors import (
    MESSAGE_CANNOT_ASSEMBLE,
    MESSAGE_CONNECT_WALLET,
    MESSAGE_INSUFFICIENT_UTXOS,
    MESSAGE_UNAVAILABLE_SWAP,
    BuildApiError,
    ErrorKind,
    SwapError,
)
from mynthswap.models import SwapRequest, ValidationMessages
from mynthswap.pipelines.base import SwapPipeline
from mynthswap.routing import CardanoRoute, resolve_route, unavailable_swap_message
from mynthswap.services.build_client import SwapBuildClient
from mynthswap.status import StatusReporter, SwapProcessStatus
from mynthswap.wallets.cardano import CardanoSession, CardanoWallet, SignedTx

logger = logging.getLogger(__name__)


class CardanoSwapPipeline(SwapPipeline):
    """Swap pipeline for assets sent from a Cardano wallet."""

    def __init__(
        self,
        settings: Settings,
        reporter: StatusReporter,
        messages: ValidationMessages,
        session: CardanoSession,
        build_client: SwapBuildClient,
    ):
        super().__init__(settings, reporter, messages)
        self.session = session
        self.build_client = build_client

    @property
    def name(self) -> str:
        return "cardano"

    async def run(self, request: SwapRequest) -> None:
        wallet = self.session.wallet
        address = self.session.address

        if wallet is None or not address:
            self.fail(MESSAGE_CONNECT_WALLET, self.messages.get("wallet_unconnected"))
            return

        try:
            await self._swap(request, wallet, address)
        except Exception as e:
            self.errors.report(e)

    async def _swap(self, request: SwapRequest, wallet: CardanoWallet, address: str) -> None:
        self.show(SwapProcessStatus.GENERATING)

        utxos = await wallet.get_utxos()
        if not utxos:
            self.fail(MESSAGE_INSUFFICIENT_UTXOS, self.messages.get("insufficient_utxos"))
            return

        self.show(SwapProcessStatus.BUILDING)

        from_ticker = request.sender.ticker
        to_ticker = request.receiver.ticker
        route = resolve_route(from_ticker, to_ticker)
        if route is None:
            logger.info(f"No Cardano route for {from_ticker} -> {to_ticker}")
            self.fail(MESSAGE_UNAVAILABLE_SWAP, unavailable_swap_message(from_ticker, to_ticker))
            return

        amount = to_base_units(request.sender.amount, get_decimals(from_ticker))
        payload = route.build_payload(
            address=address,
            utxos=[utxo.to_request() for utxo in utxos],
            amount=amount,
            request=request,
        )

        try:
            built = await self.build_client.build(route.endpoint, payload)
        except BuildApiError as e:
            self.errors.report(e, MESSAGE_CANNOT_ASSEMBLE)
            return

        tx = built.get("tx") if isinstance(built, dict) else None
        if not tx:
            logger.warning(f"Build API returned no transaction for route {route.name}")
            return

        self.show(SwapProcessStatus.SIGNING)

        signature = built.get("signature")
        if route.requires_signature and not signature:
            logger.warning(f"Build API returned no counter-signature for route {route.name}")
            return

        try:
            signed = await self._sign(wallet, route, tx, signature)
        except Exception as e:
            self.errors.report(
                SwapError(ErrorKind.SIGN_OR_ASSEMBLE_FAILED, info=str(e) or type(e).__name__),
                MESSAGE_CANNOT_ASSEMBLE,
            )
            return

        self.show(SwapProcessStatus.SUBMITTING)

        try:
            tx_id = await signed.submit()
        except Exception as e:
            raise SwapError(ErrorKind.SUBMIT_FAILED, info=str(e) or type(e).__name__) from e

        self.succeed(request, tx_id)

    @staticmethod
    async def _sign(
        wallet: CardanoWallet, route: CardanoRoute, tx: str, signature: str
    ) -> SignedTx:
        """Load the built transaction and add the wallet (and backend) witnesses."""
        signer = wallet.from_tx(tx).sign()
        if route.requires_signature:
            signer = signer.assemble([signature])
        return await signer.complete()
