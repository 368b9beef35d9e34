"""Tron wallet capabilities and TRC20 transaction helpers.

The Tron provider (a TronWeb-style object injected by the wallet extension)
is passed in as a capability instead of being looked up globally. The
helpers below drive it for the swap:

1. balance()  - TRX balance of the sender, in SUN
2. build()    - TRC20 transfer(address,uint256) call to the bridge destination,
                tagged with the receiving Cardano address as memo
3. sign()     - sign through the wallet and broadcast, returning the txid

Each helper returns a TronResult instead of raising on an expected failure.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)

TRC20_TRANSFER = "transfer(address,uint256)"


@dataclass(frozen=True)
class TronAddress:
    """Address of the connected Tron account in both encodings."""

    base58: Optional[str] = None
    hex: Optional[str] = None
    name: str = ""

    def __bool__(self) -> bool:
        return bool(self.base58 or self.hex)


@dataclass
class TronResult:
    """Outcome of a Tron wallet call."""

    ok: bool
    data: Any = None
    error: Any = None


class TronTransactionBuilder(Protocol):
    """Transaction builder exposed by the provider."""

    async def trigger_smart_contract(
        self,
        contract_address: str,
        function_selector: str,
        options: dict,
        parameters: list[dict],
        issuer_address: str,
    ) -> dict:
        """Build an unsigned contract-call transaction."""
        ...

    async def add_update_data(self, transaction: dict, data: str, encoding: str = "utf8") -> dict:
        """Attach a memo to an unsigned transaction."""
        ...


class TronTrx(Protocol):
    """Account and broadcast API exposed by the provider."""

    async def get_balance(self, address: str) -> int:
        """TRX balance in SUN."""
        ...

    async def sign(self, transaction: dict) -> dict:
        """Ask the wallet to sign a transaction."""
        ...

    async def send_raw_transaction(self, signed_transaction: dict) -> dict:
        """Broadcast a signed transaction."""
        ...


class TronProvider(Protocol):
    """Injected Tron wallet provider."""

    default_address: Optional[TronAddress]
    transaction_builder: TronTransactionBuilder
    trx: TronTrx


@dataclass
class TronSession:
    """Current Tron connection state, owned by the host application."""

    address: Optional[str] = None
    provider: Optional[TronProvider] = None


async def balance(address: TronAddress, trx: TronTrx) -> Optional[int]:
    """Get the TRX balance (in SUN) of an address.

    Raises whatever the provider raises; the caller reports it.
    """
    owner = address.base58 or address.hex
    if not owner:
        return None
    result = await trx.get_balance(owner)
    logger.debug(f"Tron balance of {owner}: {result} SUN")
    return None if result is None else int(result)


async def build(
    default_address: TronAddress,
    transaction_builder: TronTransactionBuilder,
    contract_address: str,
    amount: int,
    destination: str,
    receiver_address: str,
    fee_limit: int = 30_000_000,
) -> TronResult:
    """Build an unsigned TRC20 transfer to the bridge destination.

    Args:
        default_address: Connected sender account
        transaction_builder: Provider transaction builder
        contract_address: TRC20 token contract
        amount: Token amount in smallest units
        destination: Bridge address receiving the tokens
        receiver_address: Address receiving the swapped asset, stored as memo
        fee_limit: Maximum energy fee in SUN

    Returns:
        TronResult with the unsigned transaction as data
    """
    issuer = default_address.base58 or default_address.hex
    if not issuer:
        return TronResult(ok=False, error="Tron wallet has no default address")

    response = await transaction_builder.trigger_smart_contract(
        contract_address,
        TRC20_TRANSFER,
        {"feeLimit": fee_limit, "callValue": 0},
        [
            {"type": "address", "value": destination},
            {"type": "uint256", "value": amount},
        ],
        issuer,
    )

    if not response or not response.get("result", {}).get("result"):
        error = (response or {}).get("result", {}).get("message") or "Contract call rejected"
        logger.warning(f"TRC20 transfer build failed for {contract_address}: {error}")
        return TronResult(ok=False, error=error)

    transaction = response.get("transaction")
    if not transaction:
        return TronResult(ok=False, error="Contract call returned no transaction")

    transaction = await transaction_builder.add_update_data(transaction, receiver_address, "utf8")
    return TronResult(ok=True, data=transaction)


async def sign(trx: TronTrx, transaction: dict) -> TronResult:
    """Sign a transaction with the wallet and broadcast it.

    Returns:
        TronResult with the transaction id as data
    """
    signed = await trx.sign(transaction)
    if not signed:
        return TronResult(ok=False, error="Transaction was not signed")

    result = await trx.send_raw_transaction(signed)
    if not result or not result.get("result"):
        error = (result or {}).get("message") or (result or {}).get("code") or "Broadcast rejected"
        logger.warning(f"Tron broadcast failed: {error}")
        return TronResult(ok=False, error=error)

    txid = result.get("txid") or signed.get("txID")
    logger.info(f"Tron transaction broadcast: {txid}")
    return TronResult(ok=True, data=txid)
