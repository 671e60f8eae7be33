"""Price catalog: the lookup the rebalancer reads stock prices from."""

from __future__ import annotations

import logging
import os
from typing import Protocol

import pandas as pd

from rebalancer.portfolio.models import Stock
from rebalancer.services.base import validate_symbol

LOGGER = logging.getLogger(__name__)
REQUIRED_COLUMNS = ["Name", "Code", "Price_Cents"]
SUPPORTED_EXTENSIONS = {".csv", ".xlsx", ".xls"}

REFERENCE_STOCKS = (
    Stock(name="Apple Inc.", code="AAPL", price_cents=22_937),
    Stock(name="Meta Platforms, Inc.", code="META", price_cents=65_306),
    Stock(name="Netflix, Inc.", code="NFLX", price_cents=8_944),
    Stock(name="AT&T Inc.", code="T", price_cents=2_374),
    Stock(name="Bitcoin USD Price", code="BTC-USD", price_cents=9_429_700),
)


class PriceNotFoundError(LookupError):
    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"No price available for {code}.")


class PriceCatalog(Protocol):
    def lookup(self, code: str) -> Stock | None: ...

    def all(self) -> list[Stock]: ...


class StaticPriceCatalog:
    """Read-only in-memory catalog keyed by stock code."""

    def __init__(self, stocks: list[Stock] | tuple[Stock, ...]) -> None:
        self._stocks: dict[str, Stock] = {}
        for stock in stocks:
            if stock.code in self._stocks:
                raise ValueError(f"Duplicate stock code in catalog: {stock.code}")
            self._stocks[stock.code] = stock

    def lookup(self, code: str) -> Stock | None:
        return self._stocks.get(code)

    def all(self) -> list[Stock]:
        return list(self._stocks.values())

    def __len__(self) -> int:
        return len(self._stocks)


def default_catalog() -> StaticPriceCatalog:
    return StaticPriceCatalog(REFERENCE_STOCKS)


def snapshot(catalog: PriceCatalog) -> dict[str, Stock]:
    """Read every price once so a single rebalance sees one consistent price moment."""
    return {stock.code: stock for stock in catalog.all()}


def _read_table(absolute_path: str) -> pd.DataFrame:
    ext = os.path.splitext(absolute_path)[1].lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise ValueError("Price catalog must be a CSV or Excel file (.csv, .xlsx, .xls).")
    if ext == ".csv":
        return pd.read_csv(absolute_path)
    return pd.read_excel(absolute_path, sheet_name=0)


def stocks_from_frame(frame: pd.DataFrame) -> list[Stock]:
    missing = [col for col in REQUIRED_COLUMNS if col not in frame.columns]
    if missing:
        raise ValueError(f"Price catalog is missing required columns: {', '.join(missing)}")
    if frame[REQUIRED_COLUMNS].isnull().any().any():
        raise ValueError("Price catalog contains empty cells.")

    stocks: list[Stock] = []
    for idx, row in frame.iterrows():
        row_num = int(idx) + 2
        price = row["Price_Cents"]
        if isinstance(price, bool) or not pd.api.types.is_number(price) or not float(price).is_integer():
            raise ValueError(f"Row {row_num}: Price_Cents must be a whole number of cents.")
        if price < 0:
            raise ValueError(f"Row {row_num}: Price_Cents must not be negative.")
        try:
            code = validate_symbol(str(row["Code"]))
        except ValueError as error:
            raise ValueError(f"Row {row_num}: {error}") from error
        stocks.append(Stock(name=str(row["Name"]).strip(), code=code, price_cents=int(price)))
    return stocks


def load_price_catalog(file_path: str) -> StaticPriceCatalog:
    absolute_path = file_path if os.path.isabs(file_path) else os.path.abspath(file_path)
    stocks = stocks_from_frame(_read_table(absolute_path))
    catalog = StaticPriceCatalog(stocks)
    LOGGER.info("price catalog loaded: path=%s stocks=%s", absolute_path, len(catalog))
    return catalog
