"""
Telegram Notifier - senkronizasyon uyarılarını bot üzerinden gönderir.
"""

import asyncio
from typing import Optional

import aiohttp

from syncwatch.utils import logger


class NotifierError(Exception):
    """Telegram bot başlatılamadı (geçersiz token, erişim yok)."""


class TelegramNotifier:
    """Telegram bildirim sistemi."""

    BASE_URL = "https://api.telegram.org/bot{token}"

    def __init__(self, token: str, timeout: float = 10):
        self.token = token
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.bot_username: Optional[str] = None
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if not self._session or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    def _url(self, method: str) -> str:
        return f"{self.BASE_URL.format(token=self.token)}/{method}"

    async def connect(self) -> None:
        """getMe ile token'ı doğrula."""
        try:
            session = await self._get_session()
            async with session.get(self._url("getMe"), timeout=self.timeout) as resp:
                body = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise NotifierError(f"error creating telegram bot: {e}") from e

        if not isinstance(body, dict):
            raise NotifierError(f"error creating telegram bot [{resp.status}]: unexpected response {body!r}")

        if resp.status != 200 or not body.get("ok"):
            raise NotifierError(
                f"error creating telegram bot [{resp.status}]: {body.get('description', 'unknown error')}"
            )

        result = body.get("result")
        self.bot_username = result.get("username") if isinstance(result, dict) else None
        logger.info(f"✅ Telegram bot hazır: @{self.bot_username}")

    async def send_message(self, chat_id: int, text: str, parse_mode: Optional[str] = None) -> bool:
        """Telegram mesajı gönder."""
        payload = {
            "chat_id": chat_id,
            "text": text,
            "disable_web_page_preview": True,
        }
        if parse_mode:
            payload["parse_mode"] = parse_mode

        try:
            session = await self._get_session()
            async with session.post(self._url("sendMessage"), json=payload, timeout=self.timeout) as resp:
                if resp.status == 200:
                    return True
                body = await resp.text()
                logger.error(f"❌ Telegram API hatası [{resp.status}]: {body}")
                return False
        except Exception as e:
            logger.error(f"❌ Telegram mesaj gönderme hatası: {e}")
            return False

    async def close(self):
        """Session'ı kapat."""
        if self._session and not self._session.closed:
            await self._session.close()
