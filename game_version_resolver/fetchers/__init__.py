from .base import BaseFetcher
from .mojang import MojangFetcher
from .async_base import AsyncBaseFetcher
from .async_mojang import AsyncMojangFetcher

__all__ = [
    "BaseFetcher",
    "MojangFetcher",
    "AsyncBaseFetcher",
    "AsyncMojangFetcher",
]
