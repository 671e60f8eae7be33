"""Portfolio valuation in cents."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from rebalancer.portfolio.catalog import PriceCatalog, PriceNotFoundError, snapshot
from rebalancer.portfolio.models import Stock


def balance_from_prices(unit_counts: Counter[str], prices: dict[str, Stock]) -> int:
    total = 0
    for code, units in unit_counts.items():
        stock = prices.get(code)
        if stock is None:
            raise PriceNotFoundError(code)
        total += units * stock.price_cents
    return total


def compute_balance(holdings: Iterable[str], catalog: PriceCatalog) -> int:
    """Total value of ``holdings`` (one entry per owned unit) at catalog prices."""
    return balance_from_prices(Counter(holdings), snapshot(catalog))
