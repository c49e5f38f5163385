"""Простая конфигурация логирования для CRM клиники."""

import logging
import re
from pathlib import Path
from logging.handlers import RotatingFileHandler

from config import Settings, get_settings


_STATUS_RE = re.compile(r'"HTTP/[\d.]+ (\d{3})')


class HttpxFilter(logging.Filter):
    """Скрывает строки httpx об успешных запросах."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401 - short doc
        """True, если запись не является отчётом об ответе 2xx."""
        match = _STATUS_RE.search(record.getMessage())
        return not (match and match.group(1).startswith("2"))


def setup_logging(settings: Settings | None = None) -> None:
    """Настраивает вывод логов в консоль и файл ``crm.log``."""
    settings = settings or get_settings()
    logs_dir = Path(settings.log_dir).expanduser()
    logs_dir.mkdir(parents=True, exist_ok=True)

    level_name = settings.log_level
    level = getattr(logging, level_name, logging.INFO)
    if settings.detailed_logging:
        level = logging.DEBUG

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s │ %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_h = RotatingFileHandler(
        logs_dir / "crm.log",
        maxBytes=2_000_000,  # 2 MB
        backupCount=3,
        encoding="utf-8",
    )
    file_h.setFormatter(fmt)
    file_h.setLevel(level)

    console_h = logging.StreamHandler()
    console_h.setFormatter(fmt)
    console_h.setLevel(level)

    logging.basicConfig(
        level=level,
        handlers=[file_h, console_h],
        force=True,  # перезаписываем базовую конфигурацию
    )

    logging.getLogger().setLevel(level)

    # httpx пишет каждый запрос на INFO
    httpx_logger = logging.getLogger("httpx")
    if not settings.detailed_logging:
        httpx_logger.addFilter(HttpxFilter())
    logging.getLogger("httpcore").setLevel(max(level, logging.INFO))
