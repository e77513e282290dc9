"""Runtime settings read from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"
    term_years: int = 5
    max_rows: int = 120
    secret_key: str = "dev-secret-key"


def _int_from_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r; using %d", name, raw, default)
        return default


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build ``Settings`` from ``env`` (defaults to ``os.environ``)."""
    if env is None:
        env = os.environ
    return Settings(
        log_level=env.get("MORTGAGE_CALC_LOG_LEVEL", "WARNING").upper(),
        term_years=_int_from_env(env, "MORTGAGE_CALC_TERM_YEARS", 5),
        max_rows=_int_from_env(env, "MORTGAGE_CALC_MAX_ROWS", 120),
        secret_key=env.get("FLASK_SECRET_KEY", "dev-secret-key"),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
