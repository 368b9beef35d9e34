"""Tests for the Cardano swap pipeline."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from mynthswap.errors import BuildApiError
from mynthswap.pipelines.cardano import CardanoSwapPipeline
from mynthswap.status import SwapProcessStatus
from mynthswap.wallets import CardanoSession, Utxo

from conftest import CARDANO_ADDRESS


@pytest.fixture
def pipeline(settings, reporter, messages, cardano_session, build_client):
    return CardanoSwapPipeline(settings, reporter, messages, cardano_session, build_client)


class TestCardanoHappyPath:
    """ADA -> MyUSD and co-signed MyUSD -> USDT swaps."""

    @pytest.mark.asyncio
    async def test_ada_to_myusd_transitions(self, pipeline, reporter, build_client, swap_request):
        """Test the full generating -> success sequence on swap-ada/build."""
        await pipeline.run(swap_request("ADA", "MyUSD"))

        assert reporter.statuses == ["generating", "building", "signing", "submitting", "success"]
        endpoint, payload = build_client.build.await_args.args
        assert endpoint == "swap-ada/build"
        assert payload["address"] == CARDANO_ADDRESS
        assert payload["adaAmount"] == 100_000_000
        assert "destinationAddress" not in payload

    @pytest.mark.asyncio
    async def test_success_links(self, pipeline, reporter, swap_request):
        """Test success carries the tx link and the receiver address link."""
        await pipeline.run(swap_request("ADA", "MyUSD", receiver_address="addr1receiver"))

        final = reporter.state
        assert final.status == SwapProcessStatus.SUCCESS
        assert final.link1.startswith("https://cardanoscan.test/transaction/")
        assert final.link2 == "https://cardanoscan.test/address/addr1receiver"

    @pytest.mark.asyncio
    async def test_utxos_sent_in_request_format(self, pipeline, build_client, cardano_wallet, swap_request):
        """Test UTXO asset quantities are sent as strings."""
        cardano_wallet.utxos = [
            Utxo(
                tx_hash="ab" * 32,
                output_index=1,
                address=CARDANO_ADDRESS,
                assets={"lovelace": 5_000_000, "policy.MyUSD": 12},
            )
        ]

        await pipeline.run(swap_request("MyUSD", "ADA", amount="1.5"))

        endpoint, payload = build_client.build.await_args.args
        assert endpoint == "swap-myusd-ada/build"
        assert payload["amount"] == 1_500_000
        assert payload["utxos"][0]["txHash"] == "ab" * 32
        assert payload["utxos"][0]["assets"] == {"lovelace": "5000000", "policy.MyUSD": "12"}

    @pytest.mark.asyncio
    async def test_cosigned_route_assembles_signature(
        self, pipeline, reporter, build_client, cardano_wallet, swap_request
    ):
        """Test the backend counter-signature is assembled before completion."""
        build_client.build.return_value = {"tx": "84a400", "signature": "a100"}

        await pipeline.run(
            swap_request("IAG", "USDC", receiver_chain="tron", receiver_address="TReceiver")
        )

        endpoint, payload = build_client.build.await_args.args
        assert endpoint == "swap/build"
        assert payload["amountToSwap"] == 100_000_000
        assert payload["destinationAddress"] == "TReceiver"
        assert payload["tokenToSwap"] == "IAG"
        assert payload["tokenToReceive"] == "USDC"

        signer = cardano_wallet.loaded[0]
        assert signer.signed is True
        assert signer.witnesses == ["a100"]
        assert reporter.state.link2 == "https://tronscan.test/#/address/TReceiver"

    @pytest.mark.asyncio
    async def test_unsigned_route_does_not_assemble(self, pipeline, cardano_wallet, swap_request):
        """Test routes without co-signature skip assembly."""
        await pipeline.run(swap_request("ADA", "MyUSD"))

        signer = cardano_wallet.loaded[0]
        assert signer.signed is True
        assert signer.witnesses == []


class TestCardanoPreconditions:
    """Wallet and UTXO preconditions."""

    @pytest.mark.asyncio
    async def test_wallet_not_connected(self, settings, reporter, messages, build_client, swap_request):
        """Test a missing wallet fails before any network call."""
        pipeline = CardanoSwapPipeline(
            settings, reporter, messages, CardanoSession(), build_client
        )

        await pipeline.run(swap_request())

        assert reporter.statuses == ["failed"]
        assert reporter.state.title == "Connect your Wallet"
        assert reporter.state.detail == "Error"
        build_client.build.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_address_uses_localized_message(
        self, settings, reporter, build_client, cardano_wallet, swap_request
    ):
        """Test the validation message replaces the generic detail."""
        from mynthswap.models import ValidationMessages

        pipeline = CardanoSwapPipeline(
            settings,
            reporter,
            ValidationMessages(wallet_unconnected="Please connect a Cardano wallet"),
            CardanoSession(wallet=cardano_wallet, address=None),
            build_client,
        )

        await pipeline.run(swap_request())

        assert reporter.state.detail == "Please connect a Cardano wallet"

    @pytest.mark.asyncio
    async def test_empty_utxos(self, pipeline, reporter, build_client, cardano_wallet, swap_request):
        """Test an empty UTXO set fails with Insufficient UTXOs and no POST."""
        cardano_wallet.utxos = []

        await pipeline.run(swap_request())

        assert reporter.statuses == ["generating", "failed"]
        assert reporter.state.title == "Insufficient UTXOs"
        build_client.build.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "sender,receiver",
        [("ADA", "USDT"), ("IAG", "ADA"), ("USDT", "MyUSD"), ("ada", "MyUSD")],
    )
    async def test_unavailable_route(self, pipeline, reporter, build_client, swap_request, sender, receiver):
        """Test unsupported pairs fail without a network call."""
        await pipeline.run(swap_request(sender, receiver))

        assert reporter.state.status == SwapProcessStatus.FAILED
        assert reporter.state.title == "Unavailable swap"
        assert f"Swap of {sender} to {receiver}" in reporter.state.detail
        build_client.build.assert_not_awaited()


class TestCardanoFailures:
    """Build, sign and submit failures."""

    @pytest.mark.asyncio
    async def test_build_api_rejects(self, pipeline, reporter, build_client, swap_request):
        """Test an API error body is reported as Cannot assemble transaction."""
        build_client.build.side_effect = BuildApiError(
            "Build API returned 400", status_code=400, body={"message": "Not enough ADA"}
        )

        await pipeline.run(swap_request())

        assert reporter.statuses == ["generating", "building", "failed"]
        assert reporter.state.title == "Cannot assemble transaction"
        assert reporter.state.detail == "Not enough ADA"

    @pytest.mark.asyncio
    async def test_build_unreachable(self, pipeline, reporter, build_client, swap_request):
        """Test an unexpected httpx error is still reported."""
        build_client.build.side_effect = httpx.ConnectError("connection refused")

        await pipeline.run(swap_request())

        assert reporter.state.status == SwapProcessStatus.FAILED
        assert "connection refused" in reporter.state.detail

    @pytest.mark.asyncio
    async def test_response_without_tx_stops_silently(self, pipeline, reporter, build_client, swap_request):
        """Test a response with no transaction ends without a terminal state."""
        build_client.build.return_value = {}

        await pipeline.run(swap_request())

        assert reporter.statuses == ["generating", "building"]

    @pytest.mark.asyncio
    async def test_missing_counter_signature_stops_silently(
        self, pipeline, reporter, build_client, cardano_wallet, swap_request
    ):
        """Test a co-signed route without signature stops after signing."""
        build_client.build.return_value = {"tx": "84a400"}

        await pipeline.run(
            swap_request("MyUSD", "USDT", receiver_chain="tron", receiver_address="TReceiver")
        )

        assert reporter.statuses == ["generating", "building", "signing"]
        assert cardano_wallet.loaded == []

    @pytest.mark.asyncio
    async def test_sign_failure(self, settings, reporter, messages, build_client, swap_request):
        """Test a wallet signing error is reported as Cannot assemble transaction."""
        wallet = MagicMock()
        wallet.get_utxos = AsyncMock(
            return_value=[Utxo(tx_hash="cd" * 32, output_index=0, address=CARDANO_ADDRESS)]
        )
        wallet.from_tx.side_effect = RuntimeError("user declined")
        pipeline = CardanoSwapPipeline(
            settings,
            reporter,
            messages,
            CardanoSession(wallet=wallet, address=CARDANO_ADDRESS),
            build_client,
        )

        await pipeline.run(swap_request())

        assert reporter.statuses == ["generating", "building", "signing", "failed"]
        assert reporter.state.title == "Cannot assemble transaction"
        assert reporter.state.detail == "user declined"

    @pytest.mark.asyncio
    async def test_submit_failure(self, settings, reporter, messages, build_client, swap_request):
        """Test a submission error ends in failed after submitting."""
        signed = MagicMock()
        signed.submit = AsyncMock(side_effect=RuntimeError("node rejected tx"))
        signer = MagicMock()
        signer.sign.return_value = signer
        signer.complete = AsyncMock(return_value=signed)
        wallet = MagicMock()
        wallet.get_utxos = AsyncMock(
            return_value=[Utxo(tx_hash="ef" * 32, output_index=0, address=CARDANO_ADDRESS)]
        )
        wallet.from_tx.return_value = signer
        pipeline = CardanoSwapPipeline(
            settings,
            reporter,
            messages,
            CardanoSession(wallet=wallet, address=CARDANO_ADDRESS),
            build_client,
        )

        await pipeline.run(swap_request())

        assert reporter.statuses == ["generating", "building", "signing", "submitting", "failed"]
        assert reporter.state.title == "Cannot submit transaction"
        assert reporter.state.detail == "node rejected tx"

    @pytest.mark.asyncio
    async def test_utxo_query_failure(self, settings, reporter, messages, build_client, swap_request):
        """Test an exception from the wallet is caught at the pipeline boundary."""
        wallet = MagicMock()
        wallet.get_utxos = AsyncMock(side_effect=RuntimeError("wallet locked"))
        pipeline = CardanoSwapPipeline(
            settings,
            reporter,
            messages,
            CardanoSession(wallet=wallet, address=CARDANO_ADDRESS),
            build_client,
        )

        await pipeline.run(swap_request())

        assert reporter.statuses == ["generating", "failed"]
        assert reporter.state.detail == "wallet locked"
