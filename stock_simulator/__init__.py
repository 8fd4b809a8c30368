"""
Stock Simulator - a console stock-trading simulator.

This package provides:
- A simulated market whose prices follow a daily random walk
- Portfolio bookkeeping with weighted average cost
- Flat-file CSV persistence of holdings, transactions and value history
- Performance reporting over the recorded value history
"""

__version__ = "1.0.0"
__author__ = "Stock Simulator Team"

from typing import Optional

from .core.types import TransactionSide
from .core.models import Instrument, Transaction, ValuePoint
from .market.price_model import Market, GaussianNoise, default_instruments
from .portfolio.holding import Holding
from .portfolio.portfolio import Portfolio
from .storage.csv_store import PortfolioStore
from .config.simulator_config import SimulatorConfig


def create_simulator(config: Optional[SimulatorConfig] = None):
    """Create a market, store and loaded portfolio from a configuration"""
    if config is None:
        config = SimulatorConfig()

    market = config.build_market()
    store = config.build_store()
    portfolio = store.load_or_new(config.initial_cash)
    return market, portfolio, store


__all__ = [
    # Core types and models
    'TransactionSide', 'Instrument', 'Transaction', 'ValuePoint',
    # Main components
    'Market', 'GaussianNoise', 'default_instruments',
    'Holding', 'Portfolio', 'PortfolioStore', 'SimulatorConfig',
    # Convenience functions
    'create_simulator'
]
