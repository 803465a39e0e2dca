from __future__ import annotations

from uuid import uuid4


def generate_id(prefix: str = "") -> str:
    """Opaque id for entities built in-process; store ids are passed through unchanged."""
    token = uuid4().hex
    return f"{prefix}-{token}" if prefix else token


__all__ = ["generate_id"]
