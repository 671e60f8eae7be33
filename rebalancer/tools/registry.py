"""Domain tool registry entrypoint."""

from __future__ import annotations

from dataclasses import dataclass

from mcp.server.fastmcp import FastMCP

from rebalancer.portfolio.catalog import PriceCatalog
from rebalancer.portfolio.portfolio_service import PortfolioService
from rebalancer.tools.portfolio_tools import register_portfolio_tools
from rebalancer.tools.stocks_tools import register_stocks_tools


@dataclass
class ToolServices:
    portfolio: PortfolioService


def build_tool_services(catalog: PriceCatalog, catalog_source: str = "reference") -> ToolServices:
    return ToolServices(portfolio=PortfolioService(catalog, catalog_source=catalog_source))


def register_all_tools(mcp: FastMCP, services: ToolServices) -> None:
    register_stocks_tools(mcp, services)
    register_portfolio_tools(mcp, services)
