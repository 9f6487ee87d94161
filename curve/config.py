"""
Configuration - Environment-driven settings for the engine host.

Everything here is read once from the environment at import time.
The rules engine itself takes no configuration: board size, health,
mana and hand limits are fixed game constants in engine_core.state.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import os


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logging.getLogger(__name__).warning(
            "Ignoring non-numeric %s=%r, using %s", name, raw, default
        )
        return default


@dataclass
class Config:
    """Configuration for the Curve engine host (API, CLI, sessions)."""

    ENV: str = os.getenv("CURVE_ENV", "development")
    LOG_LEVEL: str = os.getenv("CURVE_LOG_LEVEL", "INFO")

    # Server
    HOST: str = os.getenv("CURVE_HOST", "127.0.0.1")
    PORT: int = int(_env_float("CURVE_PORT", 8000))
    ALLOWED_ORIGINS: list[str] = field(
        default_factory=lambda: os.getenv("ALLOWED_ORIGINS", "*").split(",")
    )

    # Seconds between AI dispatches, to pace visible output in a UI.
    # Zero keeps the AI turn synchronous and instant.
    AI_DELAY: float = _env_float("CURVE_AI_DELAY", 0.0)

    # Sessions older than this (seconds) are reaped by cleanup_stale_sessions
    SESSION_TTL: int = int(_env_float("CURVE_SESSION_TTL", 3600))

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"


config = Config()


_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the CLI or the API process."""
    logging.basicConfig(
        level=getattr(logging, (level or config.LOG_LEVEL).upper(), logging.INFO),
        format=_LOG_FORMAT,
    )
