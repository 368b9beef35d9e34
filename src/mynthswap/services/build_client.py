"""HTTP client for the remote swap transaction build service.

Endpoints (POST, JSON):
- swap-ada/build         ADA -> MyUSD
- swap-myusd-ada/build   MyUSD -> ADA
- swap/build             MyUSD/IAG -> USDT/USDC (co-signed)

The service returns `{"tx": "<cbor hex>", "signature": "<witness hex>"?}`.
"""

import logging
from typing import Any, Optional

import httpx

from mynthswap.config import Settings
from mynthswap.errors import BuildApiError

logger = logging.getLogger(__name__)


class SwapBuildClient:
    """Async client for the swap build API."""

    def __init__(self, settings: Settings, http_client: Optional[httpx.AsyncClient] = None):
        """Initialize the client.

        Args:
            settings: Settings providing the base URL and timeout
            http_client: Optional pre-built client (e.g. with a mock transport)
        """
        self.settings = settings
        self._http_client = http_client
        self._owns_client = http_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.settings.http_timeout,
                headers={"Accept": "application/json"},
            )
        return self._http_client

    async def build(self, endpoint: str, payload: dict) -> Any:
        """POST a build request and return the decoded JSON response.

        Args:
            endpoint: Endpoint path relative to the backend base URL
            payload: JSON request body

        Returns:
            Decoded response body

        Raises:
            BuildApiError: on a transport failure or a non-2xx response
        """
        url = self.settings.build_url(endpoint)
        client = await self._get_client()

        logger.debug(f"POST {url}")
        try:
            response = await client.post(url, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Build API unreachable ({url}): {e}")
            raise BuildApiError(f"{type(e).__name__}: {e}") from e

        if response.is_error:
            body = self._decode(response)
            logger.warning(f"Build API error {response.status_code} from {url}: {body}")
            raise BuildApiError(
                f"Build API returned {response.status_code}",
                status_code=response.status_code,
                body=body,
            )

        return self._decode(response)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None
