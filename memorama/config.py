"""
Configuration - read from the environment.

    MEMORAMA_ENV                  environment name (development)
    MEMORAMA_MISMATCH_DELAY_MS    delay before hiding a mismatched pair (1000)
    MEMORAMA_TICK_SECONDS         timer interval (1.0)
    MEMORAMA_ASSET_KIND           glyph or image (glyph)
    MEMORAMA_IMAGE_BASE_URL       base URL for card images (/static/cards)
    MEMORAMA_TABLE_IDLE_SECONDS   idle tables are reaped after this (3600)
    MEMORAMA_LOG_LEVEL            logging level (INFO)
    ALLOWED_ORIGINS               CORS origins, comma-separated (*)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import os
from typing import Mapping

from .games.memorama.rendering import AssetKind


def _parse_float(env: Mapping[str, str], name: str, default: float, minimum: float = 0.0) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")
    return value


@dataclass(frozen=True)
class GameConfig:
    env: str = "development"
    mismatch_delay_seconds: float = 1.0
    tick_seconds: float = 1.0
    asset_kind: AssetKind = AssetKind.GLYPH
    image_base_url: str = "/static/cards"
    table_idle_seconds: float = 3600.0
    log_level: str = "INFO"
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> GameConfig:
        """Build a config from environment variables. Bad values raise ValueError."""
        env = os.environ if env is None else env

        asset_raw = env.get("MEMORAMA_ASSET_KIND", AssetKind.GLYPH.value).strip().lower()
        try:
            asset_kind = AssetKind(asset_raw)
        except ValueError:
            choices = ", ".join(k.value for k in AssetKind)
            raise ValueError(f"MEMORAMA_ASSET_KIND must be one of {choices}, got {asset_raw!r}") from None

        log_level = env.get("MEMORAMA_LOG_LEVEL", "INFO").strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"MEMORAMA_LOG_LEVEL is not a logging level: {log_level!r}")

        tick_seconds = _parse_float(env, "MEMORAMA_TICK_SECONDS", 1.0)
        if tick_seconds == 0:
            raise ValueError("MEMORAMA_TICK_SECONDS must be greater than 0")

        origins = [o.strip() for o in env.get("ALLOWED_ORIGINS", "*").split(",") if o.strip()]

        return cls(
            env=env.get("MEMORAMA_ENV", "development"),
            mismatch_delay_seconds=_parse_float(env, "MEMORAMA_MISMATCH_DELAY_MS", 1000.0) / 1000.0,
            tick_seconds=tick_seconds,
            asset_kind=asset_kind,
            image_base_url=env.get("MEMORAMA_IMAGE_BASE_URL", "/static/cards"),
            table_idle_seconds=_parse_float(env, "MEMORAMA_TABLE_IDLE_SECONDS", 3600.0),
            log_level=log_level,
            allowed_origins=origins or ["*"],
        )


def configure_logging(config: GameConfig) -> None:
    """Configure root logging for a process entry point."""
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
