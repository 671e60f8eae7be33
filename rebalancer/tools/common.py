"""Shared tool-layer helpers."""

from __future__ import annotations

from typing import TypeVar

from rebalancer.services.base import ErrorEnvelope

T = TypeVar("T")


def ensure_data(data: T | None, error: ErrorEnvelope | None, default_message: str = "No data returned.") -> T:
    if data is not None:
        return data
    if error:
        raise ValueError(f"[{error.code}] {error.message}")
    raise ValueError(default_message)
