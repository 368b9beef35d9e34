"""Swap orchestrator - single entry point for user-initiated swaps.

Selects the pipeline by sender chain, guarantees at most one swap in flight
per orchestrator (one per user session), and exposes the busy flag and the
current progress state to presentation layers.
"""

import logging
from typing import Optional, Union

from mynthswap.chains import Blockchain
from mynthswap.config import Settings, get_settings
from mynthswap.errors import ErrorReporter
from mynthswap.models import SwapRequest, ValidationMessages
from mynthswap.pipelines import CardanoSwapPipeline, SwapPipeline, TronSwapPipeline
from mynthswap.services.build_client import SwapBuildClient
from mynthswap.status import StatusReporter, SwapProcessState
from mynthswap.wallets.cardano import CardanoSession
from mynthswap.wallets.tron import TronSession

logger = logging.getLogger(__name__)


class SwapOrchestrator:
    """Runs swaps through the pipeline matching the sender chain.

    Example:
        orchestrator = SwapOrchestrator(cardano_session, tron_session, settings=settings)
        await orchestrator.handle_swap(request)
        print(orchestrator.swap_process_status)
    """

    def __init__(
        self,
        cardano: CardanoSession,
        tron: TronSession,
        settings: Optional[Settings] = None,
        reporter: Optional[StatusReporter] = None,
        messages: Optional[ValidationMessages] = None,
        build_client: Optional[SwapBuildClient] = None,
    ):
        """Initialize the orchestrator.

        Args:
            cardano: Cardano connection state (wallet context and address)
            tron: Tron connection state (address and provider)
            settings: Settings (defaults to the environment-loaded settings)
            reporter: Status reporter observed by the UI
            messages: Localized precondition messages
            build_client: Build API client (created from settings if omitted)
        """
        self.settings = settings or get_settings()
        self.reporter = reporter or StatusReporter()
        self.messages = messages or ValidationMessages()
        self.build_client = build_client or SwapBuildClient(self.settings)

        self.cardano = CardanoSwapPipeline(
            self.settings, self.reporter, self.messages, cardano, self.build_client
        )
        self.tron = TronSwapPipeline(self.settings, self.reporter, self.messages, tron)

        # Busy lease: generation number of the swap holding it, None when idle
        self._generation = 0
        self._lease: Optional[int] = None

    @property
    def is_swap_loading(self) -> bool:
        """Whether a swap is in flight."""
        return self._lease is not None

    @property
    def swap_process_status(self) -> SwapProcessState:
        """Current progress state."""
        return self.reporter.state

    def _acquire(self) -> Optional[int]:
        """Take the busy lease; returns its token, or None if already held.

        Must not await between the check and the set.
        """
        if self._lease is not None:
            return None
        self._generation += 1
        self._lease = self._generation
        return self._lease

    def _release(self, token: int) -> None:
        if self._lease == token:
            self._lease = None

    def pipeline_for(self, blockchain: Union[Blockchain, str]) -> SwapPipeline:
        """Select the pipeline for a sender chain.

        Only Cardano and Tron exist; every non-Cardano sender goes to Tron.
        """
        if Blockchain(blockchain) == Blockchain.CARDANO:
            return self.cardano
        return self.tron

    async def handle_swap(self, request: Union[SwapRequest, dict]) -> None:
        """Run one swap; a call made while another swap is in flight is ignored.

        Args:
            request: Swap request (or its dict form, validated here)

        Raises:
            pydantic.ValidationError: if a dict request is malformed or names
                an unsupported blockchain
        """
        if not isinstance(request, SwapRequest):
            request = SwapRequest.model_validate(request)

        token = self._acquire()
        if token is None:
            logger.debug("Swap already in progress - ignoring request")
            return

        pipeline = self.pipeline_for(request.sender.blockchain)
        logger.info(
            f"Swap #{token} via {pipeline.name}: {request.sender.amount} "
            f"{request.sender.ticker} -> {request.receiver.ticker}"
        )

        try:
            await pipeline.run(request)
        except Exception as e:
            ErrorReporter(self.reporter).report(e)
        finally:
            self._release(token)
            logger.debug(f"Swap #{token} finished with status {self.reporter.status.value}")

    async def close(self) -> None:
        """Release the build API client."""
        await self.build_client.close()
