from rebalancer.portfolio.catalog import StaticPriceCatalog, default_catalog
from rebalancer.portfolio.engine import RebalanceEngine, enrich_wish_list, rebalance, target_units
from rebalancer.portfolio.models import Instruction, Portfolio, Stock, WishEntry
from rebalancer.services.base import (
    ALLOCATION_NOT_COMPLETE,
    EMPTY_ALLOCATION,
    NOT_A_PORTFOLIO,
    PRICE_NOT_FOUND,
)


def _wish_list() -> list[WishEntry]:
    return [
        WishEntry(code="AAPL", percentage=20),
        WishEntry(code="META", percentage=30),
        WishEntry(code="NFLX", percentage=50),
    ]


def _portfolio() -> Portfolio:
    return Portfolio(
        name="Juan wallet",
        holdings=["AAPL", "AAPL", "AAPL", "AAPL", "AAPL", "META"],
        wish_list=_wish_list(),
    )


class _CountingCatalog:
    def __init__(self, stocks: list[Stock]) -> None:
        self._inner = StaticPriceCatalog(stocks)
        self.all_calls = 0
        self.lookup_calls = 0

    def lookup(self, code: str) -> Stock | None:
        self.lookup_calls += 1
        return self._inner.lookup(code)

    def all(self) -> list[Stock]:
        self.all_calls += 1
        return self._inner.all()


def test_rebalance_returns_buy_and_sell_instructions() -> None:
    result = rebalance(_portfolio())
    assert result.ok
    assert result.data.balance_cents == 179_991
    assert result.data.sell_instructions == [Instruction("AAPL", 4), Instruction("META", 1)]
    assert result.data.buy_instructions == [Instruction("NFLX", 10)]


def test_rebalance_enriches_wish_list_most_expensive_first() -> None:
    result = rebalance(_portfolio())
    assert [entry.code for entry in result.data.wish_list] == ["META", "AAPL", "NFLX"]
    assert result.data.wish_list[0].stock == Stock("Meta Platforms, Inc.", "META", 65_306)


def test_rebalance_does_not_mutate_input() -> None:
    portfolio = _portfolio()
    rebalance(portfolio)
    assert portfolio.balance_cents == 0
    assert portfolio.sell_instructions == []
    assert portfolio.buy_instructions == []
    assert [entry.code for entry in portfolio.wish_list] == ["AAPL", "META", "NFLX"]
    assert all(entry.stock is None for entry in portfolio.wish_list)


def test_rebalance_rejects_non_portfolio_input() -> None:
    result = rebalance({})
    assert result.data is None
    assert result.error.code == NOT_A_PORTFOLIO


def test_rebalance_rejects_holdings_that_are_not_a_list() -> None:
    result = rebalance(Portfolio(holdings=None, wish_list=[]))
    assert result.error.code == NOT_A_PORTFOLIO

    result = rebalance(Portfolio(holdings="AAPL", wish_list=_wish_list()))
    assert result.error.code == NOT_A_PORTFOLIO


def test_rebalance_rejects_empty_wish_list() -> None:
    result = rebalance(Portfolio(holdings=[], wish_list=[]))
    assert result.error.code == EMPTY_ALLOCATION


def test_rebalance_rejects_incomplete_allocation() -> None:
    portfolio = Portfolio(
        holdings=[],
        wish_list=[
            WishEntry(code="AAPL", percentage=2),
            WishEntry(code="META", percentage=3),
            WishEntry(code="NFLX", percentage=5),
        ],
    )
    result = rebalance(portfolio)
    assert result.error.code == ALLOCATION_NOT_COMPLETE
    assert "10" in result.error.message
    assert result.error.retriable is False


def test_rebalance_reports_missing_wished_price() -> None:
    portfolio = Portfolio(holdings=["AAPL"], wish_list=[WishEntry(code="GOOG", percentage=100)])
    result = rebalance(portfolio)
    assert result.data is None
    assert result.error.code == PRICE_NOT_FOUND
    assert "GOOG" in result.error.message


def test_rebalance_reports_missing_held_price() -> None:
    portfolio = Portfolio(holdings=["GOOG"], wish_list=[WishEntry(code="AAPL", percentage=100)])
    result = rebalance(portfolio)
    assert result.error.code == PRICE_NOT_FOUND


def test_rebalance_emits_nothing_when_already_on_target() -> None:
    portfolio = Portfolio(holdings=["NFLX"] * 10, wish_list=[WishEntry(code="NFLX", percentage=100)])
    result = rebalance(portfolio)
    assert result.data.balance_cents == 89_440
    assert result.data.sell_instructions == []
    assert result.data.buy_instructions == []


def test_rebalance_leaves_unwished_holdings_alone() -> None:
    portfolio = Portfolio(holdings=["T"] * 3, wish_list=[WishEntry(code="AAPL", percentage=100)])
    result = rebalance(portfolio)
    assert result.data.balance_cents == 7_122
    assert result.data.sell_instructions == []
    assert result.data.buy_instructions == []


def test_rebalance_buy_list_follows_accumulation_order() -> None:
    portfolio = Portfolio(
        holdings=["T"] * 100,
        wish_list=[WishEntry(code="META", percentage=50), WishEntry(code="AAPL", percentage=50)],
    )
    result = rebalance(portfolio)
    assert result.data.balance_cents == 237_400
    assert result.data.buy_instructions == [Instruction("AAPL", 5), Instruction("META", 1)]
    assert result.data.sell_instructions == []


def test_rebalance_with_no_holdings_has_nothing_to_do() -> None:
    result = rebalance(Portfolio(holdings=[], wish_list=_wish_list()))
    assert result.data.balance_cents == 0
    assert result.data.sell_instructions == []
    assert result.data.buy_instructions == []


def test_rebalance_reads_catalog_once() -> None:
    catalog = _CountingCatalog(list(default_catalog().all()))
    result = RebalanceEngine(catalog).rebalance(_portfolio())
    assert result.ok
    assert catalog.all_calls == 1
    assert catalog.lookup_calls == 0


def test_target_units_truncates_money_then_units() -> None:
    assert target_units(20, 180_991, 22_937) == (1, 36_198)
    # 501.5 cents truncates to 501, which buys nothing at 502
    assert target_units(50, 1_003, 502) == (0, 501)


def test_target_units_zero_price_cannot_be_sized() -> None:
    assert target_units(100, 5_000, 0) == (0, 5_000)


def test_enrich_wish_list_keeps_input_order_for_equal_prices() -> None:
    prices = {
        "AAA": Stock("A Corp", "AAA", 1_000),
        "BBB": Stock("B Corp", "BBB", 1_000),
        "CCC": Stock("C Corp", "CCC", 5_000),
    }
    wish_list = [
        WishEntry(code="BBB", percentage=30),
        WishEntry(code="AAA", percentage=30),
        WishEntry(code="CCC", percentage=40),
    ]
    enriched = enrich_wish_list(wish_list, prices)
    assert [entry.code for entry in enriched] == ["CCC", "BBB", "AAA"]


def test_rebalance_accepts_injected_catalog() -> None:
    catalog = StaticPriceCatalog([Stock("Alpha", "ALP", 1_000), Stock("Beta", "BET", 500)])
    portfolio = Portfolio(
        holdings=["ALP"] * 4,
        wish_list=[WishEntry(code="ALP", percentage=50), WishEntry(code="BET", percentage=50)],
    )
    result = rebalance(portfolio, catalog)
    assert result.data.balance_cents == 4_000
    assert result.data.sell_instructions == [Instruction("ALP", 2)]
    assert result.data.buy_instructions == [Instruction("BET", 4)]
