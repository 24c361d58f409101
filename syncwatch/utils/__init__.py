"""
Loglama sistemi - Rich ile renkli console çıktısı + dosya logu.
"""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

console = Console()


def setup_logger(name: str = "syncwatch", level: str = "INFO", log_dir: str = "logs") -> logging.Logger:
    """Rich handler ile logger oluştur."""
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Rich console handler
    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    rich_handler.setLevel(logging.DEBUG)
    rich_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(rich_handler)

    # File handler
    try:
        path = Path(log_dir)
        path.mkdir(exist_ok=True)
        file_handler = logging.FileHandler(path / "syncwatch.log", encoding="utf-8")
    except OSError as e:
        logger.warning(f"⚠️ Log dosyası açılamadı, sadece console kullanılacak: {e}")
    else:
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    return logger


def set_level(level: str) -> None:
    """Çalışma anında log seviyesini değiştir."""
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))


# Global logger
logger = setup_logger()
