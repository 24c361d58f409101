"""Node client testleri - eth_syncing cevabının eşlenmesi."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from syncwatch.monitoring import SyncProgress
from syncwatch.node import NodeClient, NodeClientError


class _FakeEth:
    """AsyncWeb3.eth.syncing gibi: property her erişimde awaitable döner."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error

    @property
    def syncing(self):
        return self._syncing()

    async def _syncing(self):
        if self.error:
            raise self.error
        return self.result


def _client(result=None, error=None, provider=None):
    w3 = SimpleNamespace(eth=_FakeEth(result, error), provider=provider or SimpleNamespace())
    return NodeClient(w3, "http://localhost:8545")


@pytest.mark.asyncio
async def test_not_syncing_means_fully_synced():
    assert await _client(False).sync_progress() is None


@pytest.mark.asyncio
async def test_progress_object_is_mapped():
    progress = await _client({
        "startingBlock": 50,
        "currentBlock": 100,
        "highestBlock": 200,
    }).sync_progress()
    assert progress == SyncProgress(current_block=100, highest_block=200, starting_block=50)


@pytest.mark.asyncio
async def test_progress_without_starting_block():
    progress = await _client({"currentBlock": 1, "highestBlock": 2}).sync_progress()
    assert progress.starting_block is None


@pytest.mark.asyncio
async def test_rpc_error_propagates():
    with pytest.raises(ConnectionError):
        await _client(error=ConnectionError("refused")).sync_progress()


@pytest.mark.parametrize("url", ["", "localhost:8545", "ws://localhost:8546", "http://"])
def test_dial_rejects_bad_urls(url):
    with pytest.raises(NodeClientError):
        NodeClient.dial(url)


def test_dial_http_url():
    client = NodeClient.dial("http://localhost:8545")
    assert client.url == "http://localhost:8545"
    assert client.w3 is not None


@pytest.mark.asyncio
async def test_close_disconnects_provider():
    provider = SimpleNamespace(disconnect=AsyncMock())
    await _client(False, provider=provider).close()
    provider.disconnect.assert_awaited_once()


@pytest.mark.asyncio
async def test_close_without_disconnect_support():
    await _client(False).close()
