"""Shared result envelopes and input validators."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Generic, TypeVar

SYMBOL_PATTERN = re.compile(r"^[A-Z][A-Z0-9.\-]{0,9}$")
T = TypeVar("T")

NOT_A_PORTFOLIO = "NOT_A_PORTFOLIO"
EMPTY_ALLOCATION = "EMPTY_ALLOCATION"
ALLOCATION_NOT_COMPLETE = "ALLOCATION_NOT_COMPLETE"
PRICE_NOT_FOUND = "PRICE_NOT_FOUND"
INVALID_SYMBOL = "INVALID_SYMBOL"


@dataclass
class ErrorEnvelope:
    code: str
    message: str
    retriable: bool = False


@dataclass
class ServiceResult(Generic[T]):
    data: T | None
    error: ErrorEnvelope | None = None
    source: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def failure(code: str, message: str) -> ServiceResult[T]:
    return ServiceResult(data=None, error=ErrorEnvelope(code=code, message=message))


def validate_symbol(symbol: str) -> str:
    clean = symbol.strip().upper()
    if not clean or len(clean) > 10 or not SYMBOL_PATTERN.match(clean):
        raise ValueError("Symbol must be 1-10 chars: A-Z, 0-9, dot, hyphen.")
    return clean
