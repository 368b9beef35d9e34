"""Simulated wallets for dry-run swaps (no keys, no network).

They satisfy the CardanoWallet and TronProvider capabilities, record what
the pipelines asked of them, and return fake transaction ids.
"""

import logging
import secrets
from typing import Optional

from mynthswap.wallets.cardano import Utxo
from mynthswap.wallets.tron import TronAddress

logger = logging.getLogger(__name__)

SIMULATED_LOVELACE = 50_000_000  # 50 ADA
SIMULATED_SUN = 100_000_000  # 100 TRX


class SimulatedSignedTx:
    """Signed transaction produced by SimulatedCardanoWallet."""

    def __init__(self, tx: str, witnesses: list[str], signed: bool):
        self.tx = tx
        self.witnesses = witnesses
        self.signed = signed
        self.tx_id: Optional[str] = None

    async def submit(self) -> str:
        self.tx_id = secrets.token_hex(32)
        logger.info(f"[SIMULATED] Submitted Cardano tx {self.tx_id}")
        return self.tx_id


class SimulatedTxSigner:
    """Transaction loaded into SimulatedCardanoWallet."""

    def __init__(self, tx: str):
        self.tx = tx
        self.signed = False
        self.witnesses: list[str] = []

    def sign(self) -> "SimulatedTxSigner":
        self.signed = True
        return self

    def assemble(self, witnesses: list[str]) -> "SimulatedTxSigner":
        self.witnesses.extend(witnesses)
        return self

    async def complete(self) -> SimulatedSignedTx:
        return SimulatedSignedTx(self.tx, list(self.witnesses), self.signed)


class SimulatedCardanoWallet:
    """Cardano wallet context holding a fixed set of UTXOs."""

    def __init__(self, address: str, utxos: Optional[list[Utxo]] = None):
        self.address = address
        if utxos is None:
            utxos = [
                Utxo(
                    tx_hash=secrets.token_hex(32),
                    output_index=0,
                    address=address,
                    assets={"lovelace": SIMULATED_LOVELACE},
                )
            ]
        self.utxos = utxos
        self.loaded: list[SimulatedTxSigner] = []

    async def get_utxos(self) -> list[Utxo]:
        return list(self.utxos)

    def from_tx(self, tx: str) -> SimulatedTxSigner:
        signer = SimulatedTxSigner(tx)
        self.loaded.append(signer)
        return signer


class SimulatedTronTransactionBuilder:
    """Transaction builder returning placeholder contract calls."""

    async def trigger_smart_contract(
        self,
        contract_address: str,
        function_selector: str,
        options: dict,
        parameters: list[dict],
        issuer_address: str,
    ) -> dict:
        transaction = {
            "txID": secrets.token_hex(32),
            "raw_data": {
                "contract": [
                    {
                        "contract_address": contract_address,
                        "function_selector": function_selector,
                        "parameters": parameters,
                        "owner_address": issuer_address,
                    }
                ],
                "fee_limit": options.get("feeLimit"),
            },
        }
        return {"result": {"result": True}, "transaction": transaction}

    async def add_update_data(self, transaction: dict, data: str, encoding: str = "utf8") -> dict:
        updated = dict(transaction)
        updated["raw_data"] = dict(transaction.get("raw_data", {}), data=data)
        return updated


class SimulatedTronTrx:
    """Account API with a fixed balance; signing always succeeds."""

    def __init__(self, balance_sun: int = SIMULATED_SUN):
        self.balance_sun = balance_sun
        self.broadcast: list[dict] = []

    async def get_balance(self, address: str) -> int:
        return self.balance_sun

    async def sign(self, transaction: dict) -> dict:
        return dict(transaction, signature=[secrets.token_hex(65)])

    async def send_raw_transaction(self, signed_transaction: dict) -> dict:
        self.broadcast.append(signed_transaction)
        logger.info(f"[SIMULATED] Broadcast Tron tx {signed_transaction.get('txID')}")
        return {"result": True, "txid": signed_transaction.get("txID")}


class SimulatedTronProvider:
    """Tron provider bound to one simulated account."""

    def __init__(self, address: str, balance_sun: int = SIMULATED_SUN):
        self.default_address: Optional[TronAddress] = TronAddress(base58=address, name="dry-run")
        self.transaction_builder = SimulatedTronTransactionBuilder()
        self.trx = SimulatedTronTrx(balance_sun)
