"""
Node Client - web3 üzerinden eth_syncing sorgusu.
"""

from typing import Optional
from urllib.parse import urlparse

from web3 import AsyncWeb3

from syncwatch.monitoring.sync_state import SyncProgress
from syncwatch.utils import logger


class NodeClientError(Exception):
    """Node client oluşturulamadı."""


class NodeClient:
    """Geth (veya herhangi bir EVM node) için ince async JSON-RPC client."""

    SUPPORTED_SCHEMES = ("http", "https")

    def __init__(self, w3: AsyncWeb3, url: str = ""):
        self.w3 = w3
        self.url = url

    @classmethod
    def dial(cls, url: str) -> "NodeClient":
        """URL'i doğrula ve HTTP provider ile client kur."""
        parsed = urlparse(url or "")
        if parsed.scheme not in cls.SUPPORTED_SCHEMES or not parsed.netloc:
            raise NodeClientError(f"unsupported node url {url!r}: expected http(s)://host[:port]")

        try:
            w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(url))
        except Exception as e:
            raise NodeClientError(f"error creating node client: {e}") from e

        logger.info(f"🔌 Node client hazır: {parsed.scheme}://{parsed.netloc}")
        return cls(w3, url)

    async def sync_progress(self) -> Optional[SyncProgress]:
        """
        eth_syncing çağrısı.

        Returns:
            None if the node considers itself caught up, otherwise its progress
        """
        status = await self.w3.eth.syncing
        if not status:
            return None
        return SyncProgress(
            current_block=int(status["currentBlock"]),
            highest_block=int(status["highestBlock"]),
            starting_block=int(status["startingBlock"]) if "startingBlock" in status else None,
        )

    async def close(self):
        """Provider session'ını kapat (destekleniyorsa)."""
        disconnect = getattr(self.w3.provider, "disconnect", None)
        if disconnect is not None:
            await disconnect()
