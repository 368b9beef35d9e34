"""Application configuration using pydantic-settings.

Values are read from environment variables (or a local .env file) and the
resulting Settings object is passed explicitly into the swap orchestrator.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# 1 TRX = 1,000,000 SUN
SUN_PER_TRX = 1_000_000


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug logging")
    cardano_network: Literal["mainnet", "preprod", "preview"] = Field(
        default="mainnet", description="Cardano network the wallets are connected to"
    )
    tron_network: Literal["mainnet", "shasta", "nile"] = Field(
        default="mainnet", description="Tron network the wallets are connected to"
    )

    # ======================
    # Swap build backend
    # ======================
    backend_uri: str = Field(
        default="http://localhost:3000", description="Base URL of the transaction build API"
    )
    http_timeout: float = Field(default=30.0, description="Build API request timeout (seconds)")

    # ======================
    # Tron
    # ======================
    tron_usdt_contract_address: str = Field(
        default="TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t", description="USDT TRC20 contract"
    )
    tron_usdc_contract_address: str = Field(
        default="TEkxiTehnzSmSe2XqrBj4w32RUN966rdz8", description="USDC TRC20 contract"
    )
    tron_usdt_destination: str = Field(default="", description="Bridge address receiving USDT")
    tron_usdc_destination: str = Field(default="", description="Bridge address receiving USDC")
    tron_minimum_balance: int = Field(
        default=30, description="Minimum TRX balance required to pay contract energy"
    )
    tron_fee_limit: int = Field(default=30_000_000, description="Contract call fee limit in SUN")

    # ======================
    # Block explorers (empty = derived from the network)
    # ======================
    cardano_explorer_url: str = Field(default="", description="Cardano block explorer override")
    tron_explorer_url: str = Field(default="", description="Tron block explorer override")

    @property
    def tron_minimum_balance_sun(self) -> int:
        """Minimum TRX balance expressed in SUN."""
        return self.tron_minimum_balance * SUN_PER_TRX

    def build_url(self, endpoint: str) -> str:
        """Join the backend base URL and a build endpoint path."""
        return f"{self.backend_uri.rstrip('/')}/{endpoint.lstrip('/')}"

    def tron_contract_for(self, ticker: str) -> tuple[str, str]:
        """Get (contract address, destination address) for a Tron stablecoin.

        USDT maps to the USDT pair; every other ticker uses the USDC pair.
        """
        if ticker == "USDT":
            return self.tron_usdt_contract_address, self.tron_usdt_destination
        return self.tron_usdc_contract_address, self.tron_usdc_destination

    def get_safe_dict(self) -> dict:
        """Return settings dict for diagnostics."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "network": {"cardano": self.cardano_network, "tron": self.tron_network},
            "backend_uri": self.backend_uri,
            "http_timeout": self.http_timeout,
            "tron": {
                "usdt": {
                    "contract": self.tron_usdt_contract_address,
                    "destination": self.tron_usdt_destination or "(not set)",
                },
                "usdc": {
                    "contract": self.tron_usdc_contract_address,
                    "destination": self.tron_usdc_destination or "(not set)",
                },
                "minimum_balance_trx": self.tron_minimum_balance,
            },
            "explorers": {
                "cardano": self.cardano_explorer_url or "(network default)",
                "tron": self.tron_explorer_url or "(network default)",
            },
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
