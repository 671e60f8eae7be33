"""Typed portfolio models."""

from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class Stock:
    name: str
    code: str
    price_cents: int


@dataclass
class WishEntry:
    """Target share of the portfolio value for one code, as a whole percentage."""

    code: str
    percentage: int
    stock: Stock | None = None


@dataclass(frozen=True)
class Instruction:
    code: str
    units: int


@dataclass
class Portfolio:
    """Holdings plus the wished allocation, and the rebalance outputs once computed.

    Each entry of ``holdings`` is one owned unit of that code.
    """

    name: str = ""
    holdings: list[str] = field(default_factory=list)
    wish_list: list[WishEntry] = field(default_factory=list)
    balance_cents: int = 0
    sell_instructions: list[Instruction] = field(default_factory=list)
    buy_instructions: list[Instruction] = field(default_factory=list)

    def unit_counts(self) -> Counter[str]:
        return Counter(self.holdings)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
