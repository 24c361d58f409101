"""Ethereum node RPC erişimi."""

from .client import NodeClient, NodeClientError

__all__ = ["NodeClient", "NodeClientError"]
