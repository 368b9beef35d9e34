"""Command-line swap runner using the dry-run wallets.

Usage:
    mynthswap --from ADA:100:cardano --to MyUSD:cardano:addr1... [--show-config]

The build request goes to the configured backend (BACKEND_URI); signing,
submission and Tron broadcast are simulated.
"""

import argparse
import asyncio
import json
import logging
import sys

from dotenv import load_dotenv
from pydantic import ValidationError

from mynthswap.chains import Blockchain
from mynthswap.config import get_settings
from mynthswap.models import SwapRequest
from mynthswap.orchestrator import SwapOrchestrator
from mynthswap.status import SwapProcessState, SwapProcessStatus
from mynthswap.wallets import (
    CardanoSession,
    SimulatedCardanoWallet,
    SimulatedTronProvider,
    TronSession,
)

logger = logging.getLogger(__name__)

DRY_RUN_CARDANO_ADDRESS = "addr1_dry_run"
DRY_RUN_TRON_ADDRESS = "TDryRun111111111111111111111111111"


def parse_sender(value: str) -> dict:
    """Parse TICKER:AMOUNT:CHAIN."""
    try:
        ticker, amount, blockchain = value.split(":", 2)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected TICKER:AMOUNT:CHAIN, got {value!r}")
    return {"ticker": ticker, "amount": amount, "blockchain": blockchain}


def parse_receiver(value: str) -> dict:
    """Parse TICKER:CHAIN:ADDRESS."""
    try:
        ticker, blockchain, address = value.split(":", 2)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected TICKER:CHAIN:ADDRESS, got {value!r}")
    return {"ticker": ticker, "blockchain": blockchain, "address": address}


def print_state(state: SwapProcessState) -> None:
    line = f"  -> {state.status.value}"
    if state.status == SwapProcessStatus.FAILED:
        line += f": {state.title} ({state.detail})"
    elif state.status == SwapProcessStatus.SUCCESS:
        line += f": {state.link1} | {state.link2}"
    print(line)


async def run_swap(request: SwapRequest) -> SwapProcessState:
    """Run one swap with simulated wallets and return the final state."""
    settings = get_settings()
    cardano = CardanoSession(
        wallet=SimulatedCardanoWallet(DRY_RUN_CARDANO_ADDRESS),
        address=DRY_RUN_CARDANO_ADDRESS,
    )
    tron = TronSession(
        address=DRY_RUN_TRON_ADDRESS,
        provider=SimulatedTronProvider(DRY_RUN_TRON_ADDRESS),
    )

    orchestrator = SwapOrchestrator(cardano, tron, settings=settings)
    orchestrator.reporter.subscribe(print_state)
    try:
        await orchestrator.handle_swap(request)
    finally:
        await orchestrator.close()
    return orchestrator.swap_process_status


def main() -> None:
    load_dotenv()

    parser = argparse.ArgumentParser(description="Dry-run cross-chain swap")
    parser.add_argument("--from", dest="sender", type=parse_sender,
                        help="Sent asset as TICKER:AMOUNT:CHAIN (e.g. ADA:100:cardano)")
    parser.add_argument("--to", dest="receiver", type=parse_receiver,
                        help="Received asset as TICKER:CHAIN:ADDRESS")
    parser.add_argument("--show-config", action="store_true",
                        help="Print the effective configuration and exit")

    args = parser.parse_args()
    settings = get_settings()

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.show_config:
        print(json.dumps(settings.get_safe_dict(), indent=2))
        return

    if not args.sender or not args.receiver:
        parser.error("--from and --to are required")

    try:
        request = SwapRequest(sender=args.sender, receiver=args.receiver)
    except ValidationError as e:
        chains = ", ".join(b.value for b in Blockchain)
        print(f"Invalid swap request (supported chains: {chains}):\n{e}")
        sys.exit(2)

    print(f"Swapping {request.sender.amount} {request.sender.ticker} -> {request.receiver.ticker}")
    state = asyncio.run(run_swap(request))
    sys.exit(0 if state.status == SwapProcessStatus.SUCCESS else 1)


if __name__ == "__main__":
    main()
