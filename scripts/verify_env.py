"""
Tek seferlik ortam kontrolü: konfigürasyonu doğrular ve node'a bir kez eth_syncing sorar.
Kullanım: python scripts/verify_env.py
"""

import asyncio
import os
import sys

from dotenv import load_dotenv

sys.path.append(os.getcwd())
load_dotenv()

from syncwatch.config import ConfigError, load_settings  # noqa: E402
from syncwatch.node import NodeClient, NodeClientError  # noqa: E402
from syncwatch.utils.duration import format_duration  # noqa: E402


async def check_node(url: str) -> int:
    try:
        node = NodeClient.dial(url)
    except NodeClientError as e:
        print(f"[X] {e}")
        return 1

    try:
        progress = await node.sync_progress()
    except Exception as e:
        print(f"[X] eth_syncing hatası: {e}")
        return 1
    finally:
        await node.close()

    if progress is None:
        print("[OK] Node senkron (eth_syncing = false)")
    else:
        print(
            f"[..] Node senkronize oluyor: current={progress.current_block} "
            f"highest={progress.highest_block}"
        )
    return 0


def main() -> int:
    print("=" * 40)
    print("SYNCWATCH ORTAM KONTROLU")
    print("=" * 40)
    print(f".env Dosyasi: {'MEVCUT' if os.path.exists('.env') else 'YOK (Sadece ortam degiskenleri)'}")

    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"[X] {e}")
        return 1

    print(f"Node URL:       {settings.geth_url}")
    print(f"Check interval: {format_duration(settings.check_interval)}")
    print(f"Report interval:{format_duration(settings.report_interval)}")
    print(f"Alert group:    {settings.alert_group}")
    print("=" * 40)

    return asyncio.run(check_node(settings.geth_url))


if __name__ == "__main__":
    sys.exit(main())
