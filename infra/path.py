# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_NAME = "EvmAnalytics"
COMPANY_NAME = "TECHASH"
DATA_DIR_ENV = "EVM_DATA_DIR"


def _platform_base() -> Path:
    if sys.platform.startswith("win"):
        return Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share"))


def user_data_dir() -> Path:
    """
    Per-user folder for logs and exported reports.

    EVM_DATA_DIR wins when set; otherwise
        Windows: %APPDATA%/TECHASH/EvmAnalytics
        macOS:   ~/Library/Application Support/TECHASH/EvmAnalytics
        Linux:   $XDG_DATA_HOME (or ~/.local/share)/TECHASH/EvmAnalytics
    """
    override = (os.getenv(DATA_DIR_ENV) or "").strip()
    path = Path(override).expanduser() if override else _platform_base() / COMPANY_NAME / APP_NAME
    try:
        path.mkdir(parents=True, exist_ok=True)
        return path
    except OSError:
        # read-only profile: fall back to a dot folder in home
        fallback = Path.home() / f".{APP_NAME}"
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback


__all__ = ["user_data_dir", "APP_NAME", "COMPANY_NAME"]
