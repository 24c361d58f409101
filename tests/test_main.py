"""Giriş noktası testleri - başlatma hataları ve health endpoint."""

import asyncio
import json
import os
import signal
from datetime import timedelta
from types import SimpleNamespace

import pytest

import main
from syncwatch.config import load_settings
from syncwatch.monitoring import SyncMonitor
from syncwatch.notifications.telegram import NotifierError, TelegramNotifier


def _settings(**changes):
    values = {
        "geth_url": "http://localhost:8545",
        "bot_token": "1234:ABC",
        "alert_group": 1,
        "check_interval": "1s",
        "report_interval": "5s",
        "_env_file": None,
        **changes,
    }
    return load_settings(**values)


@pytest.mark.asyncio
async def test_serve_fails_on_bad_node_url():
    assert await main.serve(_settings(geth_url="ws://localhost:8546")) == 1


@pytest.mark.asyncio
async def test_serve_fails_when_bot_cannot_connect(monkeypatch):
    async def reject(self):
        raise NotifierError("error creating telegram bot [401]: Unauthorized")

    monkeypatch.setattr(TelegramNotifier, "connect", reject)
    assert await main.serve(_settings()) == 1


def test_run_exits_on_config_error(monkeypatch):
    monkeypatch.setattr(main, "load_settings", lambda: _settings(check_interval="5s", report_interval="3s"))

    with pytest.raises(SystemExit) as exc:
        main.run()
    assert exc.value.code == 1


class _FakeReader:
    async def read(self, n):
        return b"GET /health HTTP/1.1\r\n\r\n"


class _FakeWriter:
    def __init__(self):
        self.data = b""
        self.closed = False

    def write(self, data):
        self.data += data

    async def drain(self):
        pass

    def close(self):
        self.closed = True


@pytest.mark.asyncio
async def test_health_handler_reports_alert_state():
    monitor = SimpleNamespace(reporter=SimpleNamespace(out_of_sync=True))
    writer = _FakeWriter()

    await main.make_health_handler(monitor)(_FakeReader(), writer)

    head, body = writer.data.decode().split("\r\n\r\n", 1)
    assert head.startswith("HTTP/1.1 200 OK")
    assert json.loads(body) == {"status": "ok", "service": "syncwatch", "out_of_sync": True}
    assert writer.closed is True


@pytest.mark.asyncio
async def test_health_server_bad_port_returns_none():
    monitor = SimpleNamespace(reporter=SimpleNamespace(out_of_sync=False))
    assert await main.start_health_server(monitor, 70000) is None


class _IdleNode:
    async def sync_progress(self):
        return None


class _SilentNotifier:
    async def send_message(self, chat_id, text):
        return True


@pytest.mark.asyncio
async def test_sigterm_stops_monitor_without_waiting_for_next_tick():
    """SIGTERM, check interval dolmadan döngüyü durdurmalı."""
    monitor = SyncMonitor(_IdleNode(), _SilentNotifier(), 1, timedelta(seconds=30), timedelta(seconds=60))
    main.install_signal_handlers(monitor)
    loop = asyncio.get_running_loop()
    try:
        loop.call_later(0.05, os.kill, os.getpid(), signal.SIGTERM)
        with pytest.raises(asyncio.CancelledError):
            await asyncio.wait_for(monitor.run(), timeout=2)
    finally:
        main.remove_signal_handlers()


@pytest.mark.asyncio
async def test_sigterm_before_run_is_not_lost():
    monitor = SyncMonitor(_IdleNode(), _SilentNotifier(), 1, timedelta(seconds=30), timedelta(seconds=60))
    main.install_signal_handlers(monitor)
    try:
        os.kill(os.getpid(), signal.SIGTERM)
        await asyncio.sleep(0.05)
        await asyncio.wait_for(monitor.run(), timeout=2)
    finally:
        main.remove_signal_handlers()
