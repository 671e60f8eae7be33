"""Portfolio-domain MCP tools."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp import FastMCP

from rebalancer.lib.formatters import format_rebalance_plan
from rebalancer.runtime.response import result_response
from rebalancer.tools.common import ensure_data

if TYPE_CHECKING:
    from rebalancer.tools.registry import ToolServices


def register_portfolio_tools(mcp: FastMCP, services: ToolServices) -> None:
    @mcp.tool(description="Compute buy/sell unit instructions that move holdings toward a percentage allocation.")
    def rebalance_portfolio(portfolio: dict[str, Any]) -> str:
        return result_response(services.portfolio.rebalance(portfolio))

    @mcp.tool(description="Return a human-readable rebalance plan for a portfolio.")
    def rebalance_summary(portfolio: dict[str, Any]) -> str:
        result = services.portfolio.rebalance(portfolio)
        plan = ensure_data(result.data, result.error)
        return format_rebalance_plan(plan, source=result.source)

    @mcp.tool(description="Check that wish-list percentages are whole numbers summing to exactly 100.")
    def validate_allocation(wish_list: list[dict[str, Any]]) -> str:
        return result_response(services.portfolio.validate_allocation(wish_list))
