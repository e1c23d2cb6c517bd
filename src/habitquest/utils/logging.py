"""Utilitaires pour la configuration du logging, avec un format lisible et une réduction du bruit des logs Discord et HTTP."""

from __future__ import annotations

import logging
import sys

_NOISY_LOGGERS = ("discord", "discord.client", "discord.gateway", "httpx", "httpcore")


def parse_log_level(value: str | int | None, default: int = logging.INFO) -> int:
    """Convertit un niveau ("debug", "INFO", 20) en constante logging, `default` si inconnu."""
    if value is None:
        return default
    if isinstance(value, int):
        return value
    text = value.strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else default


def setup_logging(level: int = logging.INFO) -> None:
    """Configure le logging sur stdout avec un format lisible, et réduit le bruit des logs Discord et httpx."""
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    # Réduction du bruit Discord / HTTP
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("discord.gateway").propagate = False

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)-10s  %(levelname)-10s  %(name)-30s - %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root.addHandler(handler)
