"""Swap progress reporting.

The reporter holds the current SwapProcessState and notifies listeners on
every transition. Presentation layers read `state` or subscribe.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class SwapProcessStatus(str, Enum):
    """Progress of a swap attempt."""

    IDLE = "idle"
    GENERATING = "generating"
    BUILDING = "building"
    SIGNING = "signing"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (SwapProcessStatus.SUCCESS, SwapProcessStatus.FAILED)


@dataclass(frozen=True)
class SwapProcessState:
    """Snapshot of swap progress.

    Attributes:
        status: Current step
        title: Short failure title (failed only)
        detail: Longer failure description (failed only)
        link1: Sender-chain transaction explorer link (success only)
        link2: Receiver-chain address explorer link (success only)
    """

    status: SwapProcessStatus = SwapProcessStatus.IDLE
    title: Optional[str] = None
    detail: Optional[str] = None
    link1: Optional[str] = None
    link2: Optional[str] = None


StatusListener = Callable[[SwapProcessState], None]


class StatusReporter:
    """State-change emitter for swap progress."""

    def __init__(self):
        self._state = SwapProcessState()
        self._listeners: list[StatusListener] = []

    @property
    def state(self) -> SwapProcessState:
        return self._state

    @property
    def status(self) -> SwapProcessStatus:
        return self._state.status

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def show_process(
        self,
        status: SwapProcessStatus,
        title: Optional[str] = None,
        detail: Optional[str] = None,
    ) -> None:
        """Move to an in-progress step, or to `failed` with a title and detail."""
        if status == SwapProcessStatus.SUCCESS:
            raise ValueError("Use show_success() to report a successful swap")

        if status == SwapProcessStatus.FAILED:
            logger.warning(f"Swap failed: {title} - {detail}")
        else:
            logger.info(f"Swap status: {status.value}")

        self._emit(SwapProcessState(status=status, title=title, detail=detail))

    def show_failed(self, title: str, detail: Optional[str] = None) -> None:
        self.show_process(SwapProcessStatus.FAILED, title, detail)

    def show_success(self, link1: str, link2: str) -> None:
        """Report a successful swap with explorer links."""
        logger.info(f"Swap succeeded: {link1}")
        self._emit(SwapProcessState(status=SwapProcessStatus.SUCCESS, link1=link1, link2=link2))

    def _emit(self, state: SwapProcessState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                logger.error(f"Status listener {listener!r} failed: {e}")
