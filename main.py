"""
syncwatch - Ana Giriş Noktası
Node senkronizasyon izleme: örnekleme → pencere sonu değerlendirme → Telegram uyarısı
"""

import asyncio
import json
import signal
import sys
from typing import Optional

from syncwatch.config import ConfigError, Settings, load_settings
from syncwatch.monitoring import SyncMonitor
from syncwatch.node import NodeClient, NodeClientError
from syncwatch.notifications.telegram import NotifierError, TelegramNotifier
from syncwatch.utils import logger, set_level
from syncwatch.utils.duration import format_duration


# ---- Health Check HTTP Server ----
def make_health_handler(monitor: SyncMonitor):
    """Basit liveness endpoint; izleyicinin son durumunu JSON olarak döner."""

    async def health_check_handler(reader, writer):
        await reader.read(1024)
        body = json.dumps(
            {"status": "ok", "service": "syncwatch", "out_of_sync": monitor.reporter.out_of_sync}
        )
        response = (
            "HTTP/1.1 200 OK\r\n"
            "Content-Type: application/json\r\n"
            f"Content-Length: {len(body)}\r\n"
            "Connection: close\r\n\r\n"
            f"{body}"
        )
        writer.write(response.encode())
        await writer.drain()
        writer.close()

    return health_check_handler


async def start_health_server(monitor: SyncMonitor, port: int) -> Optional[asyncio.AbstractServer]:
    """Health check server başlat."""
    try:
        server = await asyncio.start_server(make_health_handler(monitor), "0.0.0.0", port)
        logger.info(f"🌐 Health check server: http://0.0.0.0:{port}")
        return server
    except (OSError, OverflowError) as e:
        logger.warning(f"⚠️ Health check server başlatılamadı: {e}")
        return None


SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def install_signal_handlers(monitor: SyncMonitor) -> None:
    """SIGINT/SIGTERM gelince izleyiciyi event loop içinden durdur."""
    loop = asyncio.get_running_loop()

    def handle_signal(signum):
        logger.info(f"📡 Sinyal alındı: {signum}")
        monitor.stop()

    for sig in SHUTDOWN_SIGNALS:
        loop.add_signal_handler(sig, handle_signal, sig)


def remove_signal_handlers() -> None:
    loop = asyncio.get_running_loop()
    for sig in SHUTDOWN_SIGNALS:
        loop.remove_signal_handler(sig)


async def serve(settings: Settings) -> int:
    """Client'ları kur ve izleme döngüsünü çalıştır. Çıkış kodu döner."""
    try:
        node = NodeClient.dial(settings.geth_url)
    except NodeClientError as e:
        logger.error(f"❌ {e}")
        return 1

    notifier = TelegramNotifier(settings.bot_token)
    try:
        await notifier.connect()
    except NotifierError as e:
        logger.error(f"❌ {e}")
        await notifier.close()
        await node.close()
        return 1

    monitor = SyncMonitor(
        node,
        notifier,
        settings.alert_group,
        settings.check_interval,
        settings.report_interval,
    )

    # Graceful shutdown
    install_signal_handlers(monitor)

    health_server = None
    try:
        if settings.has_health_server:
            health_server = await start_health_server(monitor, settings.health_port)
        await monitor.run()
    except asyncio.CancelledError:
        pass
    finally:
        remove_signal_handlers()
        if health_server:
            health_server.close()
            await health_server.wait_closed()
        await notifier.close()
        await node.close()
        logger.info("✅ syncwatch kapatıldı")

    return 0


def run():
    """Console script giriş noktası."""
    try:
        settings = load_settings()
    except ConfigError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    set_level(settings.log_level)
    logger.info("=" * 60)
    logger.info("🛰  SYNCWATCH - NODE SYNC MONITOR")
    logger.info("=" * 60)
    logger.info(
        f"⏱ Check: {format_duration(settings.check_interval)} | "
        f"Report: {format_duration(settings.report_interval)} | "
        f"Alert group: {settings.alert_group}"
    )

    sys.exit(asyncio.run(serve(settings)))


if __name__ == "__main__":
    run()
