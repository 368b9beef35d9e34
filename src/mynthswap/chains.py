"""Chain metadata, explorer links and unit conversion.

Supports the two chains a swap can originate from:
- Cardano (ADA, MyUSD, IAG native tokens), eUTxO model
- Tron (USDT, USDC TRC20 tokens), account model
"""

from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal, DecimalException, InvalidOperation, localcontext
from enum import Enum
from typing import Union

from mynthswap.config import Settings

# Enough digits for any 256-bit token amount in base units
AMOUNT_PRECISION = 80


class Blockchain(str, Enum):
    """Blockchains a swap can be sent from or received on."""

    CARDANO = "cardano"
    TRON = "tron"


@dataclass(frozen=True)
class ChainConfig:
    """Explorer layout of a blockchain, keyed by network."""

    explorers: dict[str, str]
    tx_path: str
    address_path: str


CHAINS: dict[Blockchain, ChainConfig] = {
    Blockchain.CARDANO: ChainConfig(
        explorers={
            "mainnet": "https://cardanoscan.io",
            "preprod": "https://preprod.cardanoscan.io",
            "preview": "https://preview.cardanoscan.io",
        },
        tx_path="transaction",
        address_path="address",
    ),
    Blockchain.TRON: ChainConfig(
        explorers={
            "mainnet": "https://tronscan.org/#",
            "shasta": "https://shasta.tronscan.org/#",
            "nile": "https://nile.tronscan.org/#",
        },
        tx_path="transaction",
        address_path="address",
    ),
}


# Cardano native tokens and Tron stablecoins all use 6 decimals
TOKEN_DECIMALS = {
    "ADA": 6,
    "MYUSD": 6,
    "IAG": 6,
    "USDT": 6,
    "USDC": 6,
    "TRX": 6,
}


def get_chain(blockchain: Union[Blockchain, str]) -> ChainConfig:
    """Get chain config, accepting either the enum or its value."""
    return CHAINS[Blockchain(blockchain)]


def _explorer_base(blockchain: Blockchain, settings: Settings) -> str:
    if blockchain == Blockchain.CARDANO:
        override, network = settings.cardano_explorer_url, settings.cardano_network
    else:
        override, network = settings.tron_explorer_url, settings.tron_network
    return (override or get_chain(blockchain).explorers[network]).rstrip("/")


def get_transaction_url(
    blockchain: Union[Blockchain, str], tx_id: str, settings: Settings
) -> str:
    """Build the block explorer URL of a transaction."""
    chain = Blockchain(blockchain)
    return f"{_explorer_base(chain, settings)}/{get_chain(chain).tx_path}/{tx_id}"


def get_address_url(
    blockchain: Union[Blockchain, str], address: str, settings: Settings
) -> str:
    """Build the block explorer URL of an address."""
    chain = Blockchain(blockchain)
    return f"{_explorer_base(chain, settings)}/{get_chain(chain).address_path}/{address}"


def to_base_units(amount: Union[str, Decimal], decimals: int = 6) -> int:
    """Convert a human-readable amount into the chain's smallest integer unit.

    Fractions below the smallest unit are truncated.

    Raises:
        ValueError: if the amount is not a finite, non-negative decimal, or is
            too large to represent in base units.
    """
    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {amount!r}")

    if not value.is_finite() or value < 0:
        raise ValueError(f"Invalid amount: {amount!r}")

    with localcontext() as ctx:
        ctx.prec = AMOUNT_PRECISION
        try:
            truncated = value.quantize(Decimal(10) ** -decimals, rounding=ROUND_DOWN)
            scaled = truncated.scaleb(decimals)
        except DecimalException:
            raise ValueError(f"Invalid amount: {amount!r}")
    return int(scaled)


def get_decimals(ticker: str, default: int = 6) -> int:
    """Get token decimals by ticker."""
    return TOKEN_DECIMALS.get(ticker.upper(), default)


def map_assets_to_request_format(assets: dict) -> dict[str, str]:
    """Convert a UTXO asset map ({unit: quantity}) into its JSON request shape.

    Quantities are arbitrary-precision integers, sent as strings.
    """
    return {unit: str(int(quantity)) for unit, quantity in assets.items()}
