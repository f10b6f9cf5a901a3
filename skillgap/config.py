"""Settings read from environment variables."""

from __future__ import annotations

import os
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]


def _optional_int(name: str) -> int | None:
    value = os.getenv(name)
    if not value:
        return None
    number = int(value)
    if number < 0:
        raise ValueError(f"{name} must be zero or positive, got {number}")
    return number


class Settings:
    LOG_LEVEL: str = os.getenv("SKILLGAP_LOG_LEVEL", "INFO")
    CATALOG_PATH: Path = Path(os.getenv("SKILLGAP_CATALOG_PATH", str(ROOT_DIR / "data" / "role_benchmarks.json")))

    # Unset means every generated step is kept.
    ROADMAP_MAX_STEPS: int | None = _optional_int("SKILLGAP_ROADMAP_MAX_STEPS")
    TOP_ROLES: int = int(os.getenv("SKILLGAP_TOP_ROLES", "3"))


settings = Settings()
