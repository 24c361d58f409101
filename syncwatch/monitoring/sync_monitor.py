"""
Sync Monitor - node senkronizasyon örnekleme + debounce'lu uyarı.

Two periodic tasks share one SyncState:
1. Sampler (check interval): asks the node for sync progress, counts
   fully-synced observations, keeps the last known block figures.
2. Reporter (report interval): drains the counter once per window and
   flips the alert state, notifying only when it changes.

One synced sample anywhere in a window is enough to recover; an outage
needs a whole window without a single synced sample.
"""

import asyncio
from datetime import timedelta
from typing import Awaitable, Callable, Optional, Protocol

from syncwatch.monitoring.sync_state import SyncProgress, SyncSnapshot, SyncState
from syncwatch.utils import logger
from syncwatch.utils.duration import format_duration

UNKNOWN_BLOCK = "unknown"


class NodeStatusSource(Protocol):
    async def sync_progress(self) -> Optional[SyncProgress]: ...


class MessageSender(Protocol):
    async def send_message(self, chat_id: int, text: str) -> bool: ...


# ---- Mesaj Şablonları ----

def in_sync_message() -> str:
    return "🟢 your node is back in sync"


def out_of_sync_message(snapshot: Optional[SyncSnapshot], report_interval: timedelta) -> str:
    """Outage text. The interval is the configured report interval, not the outage age."""
    current, highest = _block_figures(snapshot)
    return (
        f"🔴 your node is out of sync since {format_duration(report_interval)}\n"
        f"Current block: {current}\n"
        f"Highest block: {highest}\n"
    )


def _block_figures(snapshot: Optional[SyncSnapshot]) -> tuple[str, str]:
    if snapshot is None or snapshot.current_block is None or snapshot.highest_block is None:
        return UNKNOWN_BLOCK, UNKNOWN_BLOCK
    return str(snapshot.current_block), str(snapshot.highest_block)


class Sampler:
    """Samples node sync status once per check interval."""

    def __init__(self, node: NodeStatusSource, state: SyncState):
        self.node = node
        self.state = state

    async def tick(self) -> None:
        try:
            progress = await self.node.sync_progress()
        except Exception as e:
            # Unknown this tick: neither synced nor syncing.
            logger.error(f"❌ error while checking sync status: {e}")
            return

        if progress is None:
            self.state.record_synced()
            logger.debug("✅ node reports fully synced")
        else:
            self.state.record_syncing(progress)
            logger.debug(
                f"⏳ node syncing: current block {progress.current_block}, "
                f"highest block {progress.highest_block}"
            )


class Reporter:
    """Once per reporting window, decides InSync/OutOfSync and notifies on change."""

    def __init__(
        self,
        state: SyncState,
        notifier: MessageSender,
        chat_id: int,
        report_interval: timedelta,
    ):
        self.state = state
        self.notifier = notifier
        self.chat_id = chat_id
        self.report_interval = report_interval
        self.out_of_sync = False

    async def tick(self) -> bool:
        """
        Process one reporting window.

        Returns:
            True if the alert state changed on this tick
        """
        synced, snapshot = self.state.drain()
        logger.debug(f"📊 report window closed: {synced} synced sample(s)")

        if synced > 0 and self.out_of_sync:
            logger.info("🟢 node is back in sync")
            self.out_of_sync = False
            await self._notify(in_sync_message())
            return True

        if synced == 0 and not self.out_of_sync:
            current, highest = _block_figures(snapshot)
            logger.warning(f"🔴 node is out of sync: current block {current}, highest block {highest}")
            self.out_of_sync = True
            await self._notify(out_of_sync_message(snapshot, self.report_interval))
            return True

        return False

    async def _notify(self, text: str) -> None:
        # The state change above stands even if delivery fails.
        try:
            sent = await self.notifier.send_message(self.chat_id, text)
        except Exception as e:
            logger.error(f"❌ error sending message: {e}")
            return
        if not sent:
            logger.error("❌ error sending message: notifier reported failure")


async def run_every(interval: timedelta, tick: Callable[[], Awaitable[object]]) -> None:
    """
    Call `tick` every `interval`, first call one interval from now.

    Deadlines are fixed relative to start; ticks missed while a slow tick was
    running are skipped rather than fired back to back.
    """
    period = interval.total_seconds()
    loop = asyncio.get_running_loop()
    deadline = loop.time()

    while True:
        deadline += period
        await asyncio.sleep(max(0.0, deadline - loop.time()))
        await tick()

        behind = loop.time() - deadline
        if behind >= period:
            deadline += (behind // period) * period


class SyncMonitor:
    """Wires sampler and reporter around one SyncState and runs both loops."""

    def __init__(
        self,
        node: NodeStatusSource,
        notifier: MessageSender,
        chat_id: int,
        check_interval: timedelta,
        report_interval: timedelta,
    ):
        if report_interval <= check_interval:
            raise ValueError("report interval must be greater than check interval")

        self.check_interval = check_interval
        self.report_interval = report_interval
        self.state = SyncState()
        self.sampler = Sampler(node, self.state)
        self.reporter = Reporter(self.state, notifier, chat_id, report_interval)
        self._tasks: list[asyncio.Task] = []
        self._stopped = False

    async def run(self) -> None:
        """Run until cancelled or stopped; returns at once if stop() came first."""
        if self._stopped:
            logger.info("🛑 Sync monitor başlamadan durduruldu")
            return
        logger.info(
            f"🔄 Sync monitor başlıyor | check: {format_duration(self.check_interval)} | "
            f"report: {format_duration(self.report_interval)}"
        )
        self._tasks = [
            asyncio.create_task(run_every(self.check_interval, self.sampler.tick), name="sampler"),
            asyncio.create_task(run_every(self.report_interval, self.reporter.tick), name="reporter"),
        ]
        try:
            await asyncio.gather(*self._tasks)
        finally:
            self.stop()

    def stop(self) -> None:
        self._stopped = True
        for task in self._tasks:
            if not task.done():
                task.cancel()

    def status(self) -> dict:
        snapshot = self.state.snapshot
        return {
            "out_of_sync": self.reporter.out_of_sync,
            "synced_samples_in_window": self.state.synced_count,
            "current_block": snapshot.current_block if snapshot else None,
            "highest_block": snapshot.highest_block if snapshot else None,
        }
