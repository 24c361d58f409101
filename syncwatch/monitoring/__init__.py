"""Monitoring package for node sync sampling and alerting."""

from .sync_monitor import Reporter, Sampler, SyncMonitor, in_sync_message, out_of_sync_message
from .sync_state import SyncProgress, SyncSnapshot, SyncState

__all__ = [
    "Reporter",
    "Sampler",
    "SyncMonitor",
    "SyncProgress",
    "SyncSnapshot",
    "SyncState",
    "in_sync_message",
    "out_of_sync_message",
]
