"""
Environment loading helpers.

This module centralizes logic to load the PDF_DIFF_* settings from:
- Existing environment variables
- .env.local or .env files (if present)

Values from the environment only provide defaults; command-line flags win.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "PDF_DIFF_"

_loaded = False


def load_env_files(root: Optional[Path] = None) -> None:
    """Load .env.local then .env from ``root`` (cwd by default) without overriding."""
    global _loaded
    root = root or Path.cwd()
    for fname in (".env.local", ".env"):
        fpath = root / fname
        if fpath.exists():
            load_dotenv(dotenv_path=str(fpath), override=False)
    _loaded = True


def _get(name: str) -> Optional[str]:
    if not _loaded:
        load_env_files()
    value = os.getenv(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def env_int(name: str, default: Optional[int] = None) -> Optional[int]:
    """Return ``PDF_DIFF_<name>`` as an int, or ``default`` when unset.

    Raises ValueError when the variable is set but not an integer.
    """
    value = _get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {value!r}") from None


def env_float(name: str, default: Optional[float] = None) -> Optional[float]:
    """Return ``PDF_DIFF_<name>`` as a float, or ``default`` when unset."""
    value = _get(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number, got {value!r}") from None


def log_level(default: str = "INFO") -> int:
    """Resolve PDF_DIFF_LOG_LEVEL to a logging level constant."""
    name = (_get("LOG_LEVEL") or default).upper()
    return getattr(logging, name, logging.INFO)


def configure_logging(default: str = "INFO") -> None:
    logging.basicConfig(level=log_level(default), format="[%(levelname)s] %(message)s")
