"""Base interface for chain-specific swap pipelines.

Pipeline flow:
1. Check the wallet precondition (report and stop if missing)
2. Build the transaction through the backend or the wallet
3. Sign through the connected wallet
4. Submit and report success with explorer links

A pipeline never raises out of `run()` for an expected failure: it reports
`failed` through the ErrorReporter and returns. The orchestrator owns the
busy lease and releases it after `run()` returns or raises.
"""

import logging
from abc import ABC, abstractmethod

from mynthswap.chains import get_address_url, get_transaction_url
from mynthswap.config import Settings
from mynthswap.errors import ErrorReporter
from mynthswap.models import SwapRequest, ValidationMessages
from mynthswap.status import StatusReporter, SwapProcessStatus

logger = logging.getLogger(__name__)


class SwapPipeline(ABC):
    """Abstract base class for swap pipelines.

    Each sender chain has its own implementation.
    """

    def __init__(
        self,
        settings: Settings,
        reporter: StatusReporter,
        messages: ValidationMessages,
    ):
        self.settings = settings
        self.reporter = reporter
        self.errors = ErrorReporter(reporter)
        self.messages = messages

    @property
    @abstractmethod
    def name(self) -> str:
        """Pipeline name identifier."""
        pass

    @abstractmethod
    async def run(self, request: SwapRequest) -> None:
        """Drive a swap to a terminal state (or a silent stop).

        Args:
            request: The swap to perform
        """
        pass

    def show(self, status: SwapProcessStatus) -> None:
        self.reporter.show_process(status)

    def fail(self, title: str, detail: str) -> None:
        self.reporter.show_failed(title, detail)

    def succeed(self, request: SwapRequest, tx_id: str) -> None:
        """Report success with the sender tx link and the receiver address link."""
        logger.info(f"[{self.name}] swap {request.sender.ticker}->{request.receiver.ticker} tx {tx_id}")
        self.reporter.show_success(
            get_transaction_url(request.sender.blockchain, tx_id, self.settings),
            get_address_url(request.receiver.blockchain, request.receiver.address, self.settings),
        )
