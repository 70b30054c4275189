from __future__ import annotations

import logging
from typing import Mapping

from commit_reveal import MIN_SECRET_BYTES

DEFAULT_LOG_LEVEL = "WARNING"


def load_log_level(env: Mapping[str, str]) -> str:
    log_level = env.get("RPS_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"RPS_LOG_LEVEL must be a logging level name, got {log_level!r}")
    return log_level


def load_secret_bytes(env: Mapping[str, str]) -> int:
    raw_bytes = env.get("RPS_SECRET_BYTES", str(MIN_SECRET_BYTES))
    try:
        secret_bytes = int(raw_bytes)
    except ValueError:
        raise ValueError(f"RPS_SECRET_BYTES must be an integer, got {raw_bytes!r}") from None
    if secret_bytes < MIN_SECRET_BYTES:
        raise ValueError(f"RPS_SECRET_BYTES must be at least {MIN_SECRET_BYTES}, got {secret_bytes}")
    return secret_bytes
