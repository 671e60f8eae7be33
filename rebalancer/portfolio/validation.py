"""Allocation and portfolio shape checks."""

from __future__ import annotations

from typing import Any

from rebalancer.portfolio.models import Portfolio, WishEntry
from rebalancer.services.base import (
    ALLOCATION_NOT_COMPLETE,
    EMPTY_ALLOCATION,
    NOT_A_PORTFOLIO,
    ErrorEnvelope,
)

FULL_ALLOCATION = 100


def validate_allocation(wish_list: list[WishEntry]) -> bool:
    """Return True when the wished percentages add up to exactly 100.

    Percentages are whole numbers, so no tolerance is applied. An empty
    list sums to 0 and is rejected.
    """
    return sum(entry.percentage for entry in wish_list) == FULL_ALLOCATION


def check_portfolio(candidate: Any) -> ErrorEnvelope | None:
    if not isinstance(candidate, Portfolio):
        return ErrorEnvelope(code=NOT_A_PORTFOLIO, message="Input is not a portfolio.")
    if not isinstance(candidate.holdings, (list, tuple)):
        return ErrorEnvelope(code=NOT_A_PORTFOLIO, message="Portfolio holdings must be a list of stock codes.")
    if not all(isinstance(code, str) for code in candidate.holdings):
        return ErrorEnvelope(code=NOT_A_PORTFOLIO, message="Every holding must be a stock code.")
    if not isinstance(candidate.wish_list, (list, tuple)):
        return ErrorEnvelope(code=NOT_A_PORTFOLIO, message="Portfolio wish_list must be a list of wish entries.")
    for entry in candidate.wish_list:
        if not isinstance(entry, WishEntry):
            return ErrorEnvelope(code=NOT_A_PORTFOLIO, message="Every wish_list item must be a wish entry.")
        if isinstance(entry.percentage, bool) or not isinstance(entry.percentage, int):
            return ErrorEnvelope(code=NOT_A_PORTFOLIO, message=f"Percentage for {entry.code} must be an integer.")
        if not 0 <= entry.percentage <= FULL_ALLOCATION:
            return ErrorEnvelope(
                code=NOT_A_PORTFOLIO,
                message=f"Percentage for {entry.code} must be between 0 and 100.",
            )
    return None


def check_allocation(wish_list: list[WishEntry]) -> ErrorEnvelope | None:
    if not wish_list:
        return ErrorEnvelope(code=EMPTY_ALLOCATION, message="Wish list is empty.")
    if not validate_allocation(wish_list):
        total = sum(entry.percentage for entry in wish_list)
        return ErrorEnvelope(
            code=ALLOCATION_NOT_COMPLETE,
            message=f"Wish list percentages must sum to 100, received {total}.",
        )
    return None
