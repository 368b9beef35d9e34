"""Pytest configuration and fixtures."""

import os
from unittest.mock import AsyncMock

import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "true"

from mynthswap.config import Settings
from mynthswap.models import SwapRequest, ValidationMessages
from mynthswap.services.build_client import SwapBuildClient
from mynthswap.status import StatusReporter, SwapProcessState
from mynthswap.wallets import (
    CardanoSession,
    SimulatedCardanoWallet,
    SimulatedTronProvider,
    TronSession,
)

CARDANO_ADDRESS = "addr_test1qsender"
TRON_ADDRESS = "TSender1111111111111111111111111111"


class RecordingReporter(StatusReporter):
    """StatusReporter that keeps every emitted state."""

    def __init__(self):
        super().__init__()
        self.history: list[SwapProcessState] = []
        self.subscribe(self.history.append)

    @property
    def statuses(self) -> list[str]:
        return [state.status.value for state in self.history]


def make_request(
    sender_ticker: str = "ADA",
    receiver_ticker: str = "MyUSD",
    sender_chain: str = "cardano",
    receiver_chain: str = "cardano",
    amount: str = "100",
    receiver_address: str = "addr1",
) -> SwapRequest:
    return SwapRequest(
        sender={"amount": amount, "ticker": sender_ticker, "blockchain": sender_chain},
        receiver={
            "address": receiver_address,
            "amount": amount,
            "ticker": receiver_ticker,
            "blockchain": receiver_chain,
        },
    )


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the local environment."""
    return Settings(
        _env_file=None,
        backend_uri="http://backend.test/api",
        tron_usdt_contract_address="TUsdtContract",
        tron_usdc_contract_address="TUsdcContract",
        tron_usdt_destination="TUsdtBridge",
        tron_usdc_destination="TUsdcBridge",
        tron_minimum_balance=10,
        cardano_explorer_url="https://cardanoscan.test",
        tron_explorer_url="https://tronscan.test/#",
    )


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def messages() -> ValidationMessages:
    return ValidationMessages()


@pytest.fixture
def build_client() -> AsyncMock:
    """Build API client returning a transaction without counter-signature."""
    client = AsyncMock(spec=SwapBuildClient)
    client.build.return_value = {"tx": "84a400"}
    return client


@pytest.fixture
def cardano_wallet() -> SimulatedCardanoWallet:
    return SimulatedCardanoWallet(CARDANO_ADDRESS)


@pytest.fixture
def cardano_session(cardano_wallet) -> CardanoSession:
    return CardanoSession(wallet=cardano_wallet, address=CARDANO_ADDRESS)


@pytest.fixture
def tron_provider() -> SimulatedTronProvider:
    return SimulatedTronProvider(TRON_ADDRESS, balance_sun=50_000_000)


@pytest.fixture
def tron_session(tron_provider) -> TronSession:
    return TronSession(address=TRON_ADDRESS, provider=tron_provider)


@pytest.fixture
def swap_request():
    """Factory building swap requests (ADA -> MyUSD on Cardano by default)."""
    return make_request
