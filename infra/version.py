from __future__ import annotations

import os
from importlib import metadata
from pathlib import Path


DISTRIBUTION_NAME = "evm-analytics-core"
_DEFAULT_APP_VERSION = "1.0.0"
_VERSION_FILE = Path(__file__).with_name("app_version.txt")


def _from_env() -> str | None:
    return (os.getenv("EVM_APP_VERSION") or "").strip() or None


def _from_file(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8").strip() or None
    except OSError:
        return None


def _from_distribution() -> str | None:
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return None


def get_app_version() -> str:
    """Env override, then a bundled app_version.txt, then installed package metadata."""
    for candidate in (_from_env(), _from_file(_VERSION_FILE), _from_distribution()):
        if candidate:
            return candidate
    return _DEFAULT_APP_VERSION


__all__ = ["get_app_version"]
