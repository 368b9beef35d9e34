"""Tron-origin swap pipeline.

idle -> building -> signing -> success | failed

USDT/USDC are sent as a TRC20 transfer to the bridge destination address
configured for the ticker. The sender must hold enough TRX to pay for the
contract call energy; the balance check happens while `building`.
"""

import logging

from mynthswap.chains import get_decimals, to_base_units
from mynthswap.config import Settings
from mynthswap.errors import (
    MESSAGE_CONNECT_WALLET,
    MESSAGE_MUST_CONNECT_TRON,
    ErrorKind,
    SwapError,
    normalize_error,
)
from mynthswap.models import SwapRequest, ValidationMessages
from mynthswap.pipelines.base import SwapPipeline
from mynthswap.status import StatusReporter, SwapProcessStatus
from mynthswap.wallets import tron
from mynthswap.wallets.tron import TronProvider, TronSession

logger = logging.getLogger(__name__)


class TronSwapPipeline(SwapPipeline):
    """Swap pipeline for stablecoins sent from a Tron wallet."""

    def __init__(
        self,
        settings: Settings,
        reporter: StatusReporter,
        messages: ValidationMessages,
        session: TronSession,
    ):
        super().__init__(settings, reporter, messages)
        self.session = session

    @property
    def name(self) -> str:
        return "tron"

    async def run(self, request: SwapRequest) -> None:
        self.show(SwapProcessStatus.BUILDING)

        if not self.session.address:
            self.fail(MESSAGE_CONNECT_WALLET, self.messages.get("wallet_unconnected"))
            return

        try:
            await self._swap(request)
        except Exception as e:
            self.errors.report(e)

    async def _swap(self, request: SwapRequest) -> None:
        ticker = request.sender.ticker
        contract_address, destination = self.settings.tron_contract_for(ticker)
        amount = to_base_units(request.sender.amount, get_decimals(ticker))

        provider = self.session.provider
        if provider is None or not provider.default_address:
            raise SwapError(ErrorKind.WALLET_NOT_CONNECTED, info=MESSAGE_MUST_CONNECT_TRON)

        if not await self._has_minimum_balance(provider):
            return

        try:
            built = await tron.build(
                provider.default_address,
                provider.transaction_builder,
                contract_address,
                amount,
                destination,
                request.receiver.address,
                fee_limit=self.settings.tron_fee_limit,
            )
        except Exception as e:
            self.errors.report(normalize_error(e, ErrorKind.BUILD_FAILED))
            return

        if not built.ok:
            self.errors.report(SwapError.from_body(ErrorKind.BUILD_FAILED, built.error))
            return

        if not built.data:
            logger.warning("Tron builder returned no transaction to sign")
            return

        self.show(SwapProcessStatus.SIGNING)

        try:
            signed = await tron.sign(provider.trx, built.data)
        except Exception as e:
            self.errors.report(normalize_error(e, ErrorKind.SIGN_OR_ASSEMBLE_FAILED))
            return

        if not signed.ok:
            self.errors.report(SwapError.from_body(ErrorKind.SIGN_OR_ASSEMBLE_FAILED, signed.error))
            return

        self.succeed(request, signed.data)

    async def _has_minimum_balance(self, provider: TronProvider) -> bool:
        """Check the sender holds the minimum TRX balance; report when it does not.

        Returns False whenever the pipeline must stop. A failed balance query
        is reported here, once.
        """
        try:
            user_balance = await tron.balance(provider.default_address, provider.trx)
        except Exception as e:
            self.errors.report(e)
            return False

        if user_balance is None:
            logger.warning("Tron provider returned no balance")
            return False

        minimum = self.settings.tron_minimum_balance
        if user_balance < self.settings.tron_minimum_balance_sun:
            logger.info(f"Tron balance {user_balance} SUN below minimum {minimum} TRX")
            self.errors.report(
                SwapError(
                    ErrorKind.INSUFFICIENT_FUNDS,
                    info=f"Minimum Required balance is {minimum} TRX",
                )
            )
            return False

        return True
