"""Price catalog MCP tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mcp.server.fastmcp import FastMCP

from rebalancer.runtime.response import result_response

if TYPE_CHECKING:
    from rebalancer.tools.registry import ToolServices


def register_stocks_tools(mcp: FastMCP, services: ToolServices) -> None:
    @mcp.tool(description="List every stock in the price catalog with its price in cents.")
    def list_stocks() -> str:
        return result_response(services.portfolio.list_stocks())

    @mcp.tool(description="Look up one stock's catalog price in cents by code.")
    def get_stock(code: str) -> str:
        return result_response(services.portfolio.get_stock(code))
