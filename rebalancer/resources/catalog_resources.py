"""Price catalog resource definitions."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import TYPE_CHECKING

from mcp.server.fastmcp import FastMCP

if TYPE_CHECKING:
    from rebalancer.tools.registry import ToolServices

CATALOG_URI = "stocks://catalog"
CATALOG_STOCK_TEMPLATE_URI = "stocks://catalog/{code}"


def register_catalog_resources(mcp: FastMCP, services: "ToolServices") -> None:
    @mcp.resource(
        CATALOG_URI,
        name="price-catalog",
        title="Price Catalog",
        description="Every stock the rebalancer can price, with prices in cents.",
        mime_type="application/json",
    )
    def price_catalog_resource() -> str:
        result = services.portfolio.list_stocks()
        stocks = [asdict(stock) for stock in result.data or []]
        return json.dumps({"source": result.source, "stocks": stocks}, ensure_ascii=True)

    @mcp.resource(
        CATALOG_STOCK_TEMPLATE_URI,
        name="price-catalog-stock",
        title="Price Catalog Entry",
        description="Catalog entry for a single stock code.",
        mime_type="application/json",
    )
    def price_catalog_stock(code: str) -> str:
        result = services.portfolio.get_stock(code)
        if result.data is None:
            raise ValueError(f"Stock not found in price catalog: {code}")
        return json.dumps(asdict(result.data), ensure_ascii=True)
