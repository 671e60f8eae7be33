"""Request payload parsing into portfolio models."""

from __future__ import annotations

from typing import Any

from rebalancer.portfolio.models import Portfolio, WishEntry
from rebalancer.portfolio.validation import FULL_ALLOCATION
from rebalancer.services.base import validate_symbol

MAX_HOLDING_UNITS = 100_000


def _parse_holdings(raw: Any) -> list[str]:
    # {"AAPL": 5} is shorthand for five "AAPL" units
    if isinstance(raw, dict):
        total = 0
        for code, units in raw.items():
            if isinstance(units, bool) or not isinstance(units, int) or units < 0:
                raise ValueError(f"Unit count for {code} must be a non-negative integer.")
            total += units
        if total > MAX_HOLDING_UNITS:
            raise ValueError(f"Holdings may contain at most {MAX_HOLDING_UNITS} units, received {total}.")
        holdings: list[str] = []
        for code, units in raw.items():
            holdings.extend([validate_symbol(str(code))] * units)
        return holdings

    if not isinstance(raw, list):
        raise ValueError("holdings must be a list of stock codes or a mapping of code to units.")
    if len(raw) > MAX_HOLDING_UNITS:
        raise ValueError(f"Holdings may contain at most {MAX_HOLDING_UNITS} units, received {len(raw)}.")
    holdings = []
    for item in raw:
        if isinstance(item, dict):
            item = item.get("code")
        if not isinstance(item, str):
            raise ValueError("Each holding must be a stock code.")
        holdings.append(validate_symbol(item))
    return holdings


def _parse_wish_entry(raw: Any) -> WishEntry:
    if not isinstance(raw, dict):
        raise ValueError("Each wish_list item must be an object with code and percentage.")
    code = raw.get("code")
    percentage = raw.get("percentage")
    if not isinstance(code, str):
        raise ValueError("Wish entry code must be a string.")
    if isinstance(percentage, bool) or not isinstance(percentage, int):
        raise ValueError(f"Percentage for {code} must be an integer.")
    if not 0 <= percentage <= FULL_ALLOCATION:
        raise ValueError(f"Percentage for {code} must be between 0 and 100.")
    return WishEntry(code=validate_symbol(code), percentage=percentage)


def parse_wish_list(raw: Any) -> list[WishEntry]:
    if not isinstance(raw, list):
        raise ValueError("wish_list must be a list.")
    return [_parse_wish_entry(item) for item in raw]


def portfolio_from_payload(payload: Any) -> Portfolio:
    if not isinstance(payload, dict):
        raise ValueError("Portfolio payload must be an object.")
    if "holdings" not in payload:
        raise ValueError("Portfolio payload is missing holdings.")
    return Portfolio(
        name=str(payload.get("name") or ""),
        holdings=_parse_holdings(payload["holdings"]),
        wish_list=parse_wish_list(payload.get("wish_list", [])),
    )
