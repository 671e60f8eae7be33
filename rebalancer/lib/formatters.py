"""Response formatting helpers."""

from __future__ import annotations

from rebalancer.portfolio.models import Instruction, Portfolio

FINANCIAL_DISCLAIMER = "Informational use only. This is not financial advice."


def format_cents(value: int | None) -> str:
    if value is None:
        return "n/a"
    sign = "-" if value < 0 else ""
    dollars, cents = divmod(abs(value), 100)
    return f"{sign}${dollars:,}.{cents:02d}"


def format_response(
    title: str,
    lines: list[str],
    source: str | None = None,
    include_disclaimer: bool = True,
) -> str:
    chunks: list[str] = [title]
    if source:
        chunks.append(f"Source: {source}")
    chunks.extend(lines)
    if include_disclaimer:
        chunks.extend(["---", FINANCIAL_DISCLAIMER])
    return "\n".join(chunks)


def line_money(label: str, value_cents: int | None) -> str:
    return f"{label}: {format_cents(value_cents)}"


def line_instruction(action: str, instruction: Instruction) -> str:
    noun = "unit" if instruction.units == 1 else "units"
    return f"{action} {instruction.units} {noun} of {instruction.code}"


def format_rebalance_plan(portfolio: Portfolio, source: str | None = None) -> str:
    lines = [line_money("Balance", portfolio.balance_cents)]
    for entry in portfolio.wish_list:
        price = entry.stock.price_cents if entry.stock else None
        lines.append(f"Target {entry.code}: {entry.percentage}% at {format_cents(price)}")
    actions = [line_instruction("Sell", item) for item in portfolio.sell_instructions]
    actions.extend(line_instruction("Buy", item) for item in portfolio.buy_instructions)
    lines.extend(actions or ["No trades needed."])
    title = f"Rebalance plan: {portfolio.name}" if portfolio.name else "Rebalance plan"
    return format_response(title, lines, source=source)
