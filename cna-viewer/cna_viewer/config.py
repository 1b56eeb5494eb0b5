"""Runtime defaults, overridable through environment variables."""
from __future__ import annotations

import logging
import os
import sys


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    return float(raw) if raw else default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    return int(raw) if raw else default


def _env_int_list(name: str, default: list[int]) -> list[int]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return list(default)
    return [int(x) for x in raw.split(",") if x.strip()]


# Model defaults (same values the parameter form starts with)
DEFAULT_PURITY = _env_float("CNA_DEFAULT_PURITY", 1.0)
DEFAULT_PLOIDY = _env_float("CNA_DEFAULT_PLOIDY", 2.0)
DEFAULT_COPY_NUMBERS = _env_int_list("CNA_DEFAULT_COPY_NUMBERS", [2, 3, 4])
DEFAULT_NORMAL_PLOIDY = _env_int("CNA_DEFAULT_NORMAL_PLOIDY", 2)

# Decimal places kept for segment statistics
STAT_DECIMALS = 3

SUPPORTED_EXTENSIONS = {".csv", ".tsv", ".txt", ".xlsx", ".xls"}

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str | int | None = None) -> None:
    """Configure root logging once for a host process.

    Level falls back to CNA_LOG_LEVEL, then WARNING.
    """
    if level is None:
        level = os.environ.get("CNA_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
