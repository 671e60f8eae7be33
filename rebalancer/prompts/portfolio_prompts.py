"""Portfolio prompt definitions."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP


def _build_rebalance_review_prompt(portfolio: str) -> str:
    portfolio_name = portfolio.strip()
    if not portfolio_name:
        raise ValueError("Missing required argument: portfolio.")
    return (
        "You are reviewing a whole-share rebalance plan.\n"
        f"For the portfolio named '{portfolio_name}':\n"
        "1) Call list_stocks to confirm every code has a catalog price\n"
        "2) Call validate_allocation on the wish list (percentages must sum to 100)\n"
        "3) Call rebalance_portfolio and explain each sell and buy instruction\n"
        "4) Point out holdings that are not in the wish list, since they are left untouched."
    )


def register_portfolio_prompts(mcp: FastMCP) -> None:
    @mcp.prompt(
        name="rebalance_review",
        title="Rebalance Review Prompt",
        description="Walk through validating and rebalancing a named portfolio.",
    )
    def rebalance_review(portfolio: str) -> str:
        return _build_rebalance_review_prompt(portfolio)
