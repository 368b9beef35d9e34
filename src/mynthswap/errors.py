"""Swap error kinds and the error normalizer.

Every failure site raises (or builds) a SwapError tagged with its kind.
Foreign exceptions that reach a pipeline boundary are wrapped once by
`normalize_error`, and `ErrorReporter` forwards the result to the
StatusReporter as a `failed` state.
"""

import logging
from enum import Enum
from typing import Any, Optional

import httpx

from mynthswap.status import StatusReporter

logger = logging.getLogger(__name__)

MESSAGE_CONNECT_WALLET = "Connect your Wallet"
MESSAGE_INSUFFICIENT_UTXOS = "Insufficient UTXOs"
MESSAGE_INSUFFICIENT_BALANCE = "Insufficient balance"
MESSAGE_UNAVAILABLE_SWAP = "Unavailable swap"
MESSAGE_CANNOT_ASSEMBLE = "Cannot assemble transaction"
MESSAGE_CANNOT_SUBMIT = "Cannot submit transaction"
MESSAGE_MUST_CONNECT_TRON = "Tron wallet must be connected"
MESSAGE_UNKNOWN = "Something went wrong"


class ErrorKind(str, Enum):
    """Closed set of swap failure kinds."""

    WALLET_NOT_CONNECTED = "wallet_not_connected"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    UNSUPPORTED_ROUTE = "unsupported_route"
    BUILD_FAILED = "build_failed"
    SIGN_OR_ASSEMBLE_FAILED = "sign_or_assemble_failed"
    SUBMIT_FAILED = "submit_failed"
    UNKNOWN = "unknown"


DEFAULT_TITLES = {
    ErrorKind.WALLET_NOT_CONNECTED: MESSAGE_CONNECT_WALLET,
    ErrorKind.INSUFFICIENT_FUNDS: MESSAGE_INSUFFICIENT_BALANCE,
    ErrorKind.UNSUPPORTED_ROUTE: MESSAGE_UNAVAILABLE_SWAP,
    ErrorKind.BUILD_FAILED: MESSAGE_CANNOT_ASSEMBLE,
    ErrorKind.SIGN_OR_ASSEMBLE_FAILED: MESSAGE_CANNOT_ASSEMBLE,
    ErrorKind.SUBMIT_FAILED: MESSAGE_CANNOT_SUBMIT,
    ErrorKind.UNKNOWN: MESSAGE_UNKNOWN,
}

# Keys an API error body may carry its human-readable message under
_BODY_MESSAGE_KEYS = ("info", "message", "error", "detail")


class SwapError(Exception):
    """A normalized swap failure.

    Attributes:
        kind: Failure kind
        title: Short title shown to the user
        info: Longer description shown to the user
        body: Structured error body from the failing layer, if any
    """

    def __init__(
        self,
        kind: ErrorKind,
        info: str,
        title: Optional[str] = None,
        body: Optional[Any] = None,
    ):
        super().__init__(info)
        self.kind = kind
        self.info = info
        self.title = title or DEFAULT_TITLES[kind]
        self.body = body

    def __repr__(self) -> str:
        return f"SwapError(kind={self.kind.value!r}, title={self.title!r}, info={self.info!r})"

    @classmethod
    def from_body(
        cls, kind: ErrorKind, body: Any, title: Optional[str] = None
    ) -> "SwapError":
        """Build an error from an API error body (string or JSON object)."""
        return cls(kind, info=describe_body(body), title=title, body=body)


class BuildApiError(Exception):
    """Raised when the remote build service rejects a request or is unreachable."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def describe_body(body: Any) -> str:
    """Extract a human-readable message from an API error body."""
    if body is None:
        return "Unknown error"
    if isinstance(body, str):
        return body or "Unknown error"
    if isinstance(body, dict):
        for key in _BODY_MESSAGE_KEYS:
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
            if isinstance(value, dict):
                return describe_body(value)
    return str(body)


def normalize_error(error: BaseException, kind: ErrorKind = ErrorKind.UNKNOWN) -> SwapError:
    """Wrap a foreign exception as a SwapError; SwapErrors pass through unchanged."""
    if isinstance(error, SwapError):
        return error
    if isinstance(error, BuildApiError):
        body = error.body if error.body is not None else str(error)
        return SwapError.from_body(ErrorKind.BUILD_FAILED, body)
    if isinstance(error, httpx.HTTPError):
        return SwapError(ErrorKind.BUILD_FAILED, info=f"{type(error).__name__}: {error}")
    return SwapError(kind, info=str(error) or type(error).__name__)


class ErrorReporter:
    """Single reporting path from any failure to the `failed` state."""

    def __init__(self, reporter: StatusReporter):
        self.reporter = reporter

    def report(self, error: BaseException, title: Optional[str] = None) -> SwapError:
        """Normalize an error and report it as `failed`.

        Args:
            error: Error raised at the failure site
            title: Overrides the kind's default title

        Returns:
            The normalized error
        """
        normalized = normalize_error(error)
        shown_title = title or normalized.title
        logger.error(f"{shown_title}: {normalized!r}")
        self.reporter.show_failed(shown_title, normalized.info)
        return normalized
