"""Portfolio rebalancing orchestration service."""

from __future__ import annotations

import logging
from typing import Any

from rebalancer.portfolio.catalog import PriceCatalog, snapshot
from rebalancer.portfolio.data_loader import parse_wish_list, portfolio_from_payload
from rebalancer.portfolio.engine import RebalanceEngine, RebalanceResult
from rebalancer.portfolio.models import Stock
from rebalancer.portfolio.validation import check_allocation
from rebalancer.services.base import INVALID_SYMBOL, NOT_A_PORTFOLIO, PRICE_NOT_FOUND, ServiceResult, failure, validate_symbol

LOGGER = logging.getLogger(__name__)


class PortfolioService:
    def __init__(self, catalog: PriceCatalog, catalog_source: str = "reference") -> None:
        self.catalog = catalog
        self.catalog_source = catalog_source
        self._engine = RebalanceEngine(catalog)

    def rebalance(self, payload: Any) -> RebalanceResult:
        try:
            portfolio = portfolio_from_payload(payload)
        except ValueError as error:
            LOGGER.info("rebalance rejected: reason=%s", error)
            return failure(NOT_A_PORTFOLIO, str(error))
        result = self._engine.rebalance(portfolio)
        if result.ok:
            result.source = self.catalog_source
        return result

    def validate_allocation(self, wish_list: Any) -> ServiceResult[dict[str, Any]]:
        try:
            entries = parse_wish_list(wish_list)
        except ValueError as error:
            return failure(NOT_A_PORTFOLIO, str(error))
        error = check_allocation(entries)
        if error is not None:
            return ServiceResult(data=None, error=error)
        return ServiceResult(data={"valid": True, "total_percentage": sum(entry.percentage for entry in entries)})

    def list_stocks(self) -> ServiceResult[list[Stock]]:
        stocks = sorted(snapshot(self.catalog).values(), key=lambda stock: stock.code)
        return ServiceResult(data=stocks, source=self.catalog_source)

    def get_stock(self, code: str) -> ServiceResult[Stock]:
        try:
            clean = validate_symbol(code)
        except ValueError as error:
            return failure(INVALID_SYMBOL, str(error))
        stock = self.catalog.lookup(clean)
        if stock is None:
            return failure(PRICE_NOT_FOUND, f"No price available for {clean}.")
        return ServiceResult(data=stock, source=self.catalog_source)
