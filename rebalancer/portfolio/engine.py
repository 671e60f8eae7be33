"""Rebalance engine: turns holdings and a wished allocation into buy/sell instructions."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import replace

from rebalancer.portfolio.balance import balance_from_prices
from rebalancer.portfolio.catalog import PriceCatalog, PriceNotFoundError, default_catalog, snapshot
from rebalancer.portfolio.models import Instruction, Portfolio, Stock, WishEntry
from rebalancer.portfolio.validation import check_allocation, check_portfolio
from rebalancer.services.base import PRICE_NOT_FOUND, ServiceResult, failure

LOGGER = logging.getLogger(__name__)

RebalanceResult = ServiceResult[Portfolio]


def enrich_wish_list(wish_list: list[WishEntry], prices: dict[str, Stock]) -> list[WishEntry]:
    """Attach each entry's stock and order by price, most expensive first.

    ``sorted`` is stable, so equally priced entries keep their input order.
    """
    enriched: list[WishEntry] = []
    for entry in wish_list:
        stock = prices.get(entry.code)
        if stock is None:
            raise PriceNotFoundError(entry.code)
        enriched.append(replace(entry, stock=stock))
    return sorted(enriched, key=lambda entry: entry.stock.price_cents, reverse=True)


def target_units(percentage: int, balance_cents: int, price_cents: int) -> tuple[int, int]:
    """Return ``(units, money)`` for a percentage of the balance, truncating at both steps."""
    target_money = percentage * balance_cents // 100
    if price_cents <= 0:
        return 0, target_money
    return target_money // price_cents, target_money


def distribute(
    wish_list: list[WishEntry],
    unit_counts: Counter[str],
    balance_cents: int,
) -> tuple[list[Instruction], list[Instruction]]:
    sells: list[Instruction] = []
    buys: list[Instruction] = []
    for entry in wish_list:
        units, money = target_units(entry.percentage, balance_cents, entry.stock.price_cents)
        LOGGER.info("distribute: code=%s target_units=%s target_money=%s", entry.code, units, money)
        current = unit_counts.get(entry.code, 0)
        # newest instruction goes first in each list
        if current > units:
            sells.insert(0, Instruction(code=entry.code, units=current - units))
        elif current < units:
            buys.insert(0, Instruction(code=entry.code, units=units - current))
    return sells, buys


class RebalanceEngine:
    def __init__(self, catalog: PriceCatalog) -> None:
        self.catalog = catalog

    def rebalance(self, portfolio: Portfolio) -> RebalanceResult:
        shape_error = check_portfolio(portfolio)
        if shape_error is not None:
            return ServiceResult(data=None, error=shape_error)
        allocation_error = check_allocation(portfolio.wish_list)
        if allocation_error is not None:
            return ServiceResult(data=None, error=allocation_error)

        prices = snapshot(self.catalog)
        unit_counts = portfolio.unit_counts()
        try:
            wish_list = enrich_wish_list(list(portfolio.wish_list), prices)
            balance_cents = balance_from_prices(unit_counts, prices)
        except PriceNotFoundError as error:
            LOGGER.warning("rebalance aborted: portfolio=%s missing_price=%s", portfolio.name, error.code)
            return failure(PRICE_NOT_FOUND, str(error))

        sells, buys = distribute(wish_list, unit_counts, balance_cents)
        LOGGER.info(
            "rebalance complete: portfolio=%s balance_cents=%s sells=%s buys=%s",
            portfolio.name,
            balance_cents,
            len(sells),
            len(buys),
        )
        return ServiceResult(
            data=replace(
                portfolio,
                holdings=list(portfolio.holdings),
                wish_list=wish_list,
                balance_cents=balance_cents,
                sell_instructions=sells,
                buy_instructions=buys,
            )
        )


def rebalance(portfolio: Portfolio, catalog: PriceCatalog | None = None) -> RebalanceResult:
    return RebalanceEngine(catalog if catalog is not None else default_catalog()).rebalance(portfolio)
