"""syncwatch - Ethereum node senkronizasyon izleyicisi."""

__version__ = "0.1.0"
