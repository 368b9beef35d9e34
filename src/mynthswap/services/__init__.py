"""Remote services consumed by the swap pipelines."""

from mynthswap.services.build_client import SwapBuildClient

__all__ = ["SwapBuildClient"]
