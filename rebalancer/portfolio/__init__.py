"""Portfolio rebalancing domain package."""

from rebalancer.portfolio.catalog import PriceCatalog, StaticPriceCatalog, default_catalog
from rebalancer.portfolio.engine import RebalanceEngine, RebalanceResult, rebalance
from rebalancer.portfolio.models import Instruction, Portfolio, Stock, WishEntry
from rebalancer.portfolio.portfolio_service import PortfolioService
from rebalancer.portfolio.validation import validate_allocation

__all__ = [
    "Instruction",
    "Portfolio",
    "PortfolioService",
    "PriceCatalog",
    "RebalanceEngine",
    "RebalanceResult",
    "StaticPriceCatalog",
    "Stock",
    "WishEntry",
    "default_catalog",
    "rebalance",
    "validate_allocation",
]
