"""
syncwatch - Konfigürasyon
Tüm ayarlar ortam değişkenlerinden (veya .env dosyasından) yüklenir.
"""

from datetime import timedelta
from typing import Optional

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings

from syncwatch.utils.duration import format_duration, parse_duration


class ConfigError(Exception):
    """Geçersiz veya eksik konfigürasyon. İzleme döngüsü başlamadan fırlatılır."""


class Settings(BaseSettings):
    """İzleyici konfigürasyonu - ortamdan otomatik yüklenir."""

    # ---- Node ----
    geth_url: str = Field(min_length=1)

    # ---- Telegram ----
    bot_token: str = Field(min_length=1)
    alert_group: int

    # ---- Zamanlama ----
    check_interval: timedelta      # Go formatı: "30s", "1m"
    report_interval: timedelta     # check_interval'dan büyük olmalı

    # ---- Çalışma ----
    log_level: str = "INFO"
    health_port: Optional[int] = Field(default=None, ge=1, le=65535)   # Verilirse liveness endpoint açılır

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @field_validator("check_interval", "report_interval", mode="before")
    @classmethod
    def _parse_go_duration(cls, value):
        if isinstance(value, str):
            return parse_duration(value)
        return value

    @field_validator("check_interval", "report_interval")
    @classmethod
    def _positive(cls, value: timedelta) -> timedelta:
        if value <= timedelta(0):
            raise ValueError("interval must be positive")
        return value

    @model_validator(mode="after")
    def _report_after_check(self) -> "Settings":
        if self.report_interval <= self.check_interval:
            raise ValueError(
                f"report interval ({format_duration(self.report_interval)}) must be greater "
                f"than check interval ({format_duration(self.check_interval)})"
            )
        return self

    @property
    def has_health_server(self) -> bool:
        return self.health_port is not None


def load_settings(**overrides) -> Settings:
    """
    Ayarları yükle ve doğrula.

    Raises:
        ConfigError: herhangi bir alan eksik/bozuksa veya interval'lar tutarsızsa
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'settings'}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigError(f"invalid configuration: {problems}") from e
