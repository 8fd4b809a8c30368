"""
Pytest configuration and shared fixtures.
"""

import pytest
from datetime import date
from stock_simulator.core.models import Instrument
from stock_simulator.market.price_model import Market
from stock_simulator.portfolio.portfolio import Portfolio
from stock_simulator.storage.csv_store import PortfolioStore


class FixedNoise:
    """Deterministic stand-in for the Gaussian random source"""

    def __init__(self, *draws):
        self.draws = list(draws) or [0.0]
        self.calls = 0

    def next_gaussian(self) -> float:
        draw = self.draws[self.calls % len(self.draws)]
        self.calls += 1
        return draw


@pytest.fixture
def trade_day():
    return date(2024, 3, 15)


@pytest.fixture
def sample_market():
    """Market with two instruments and a flat price walk"""
    return Market(
        [Instrument('ACME', 'Acme Corp.', 100.0), Instrument('GLOBX', 'Globex Inc.', 50.0)],
        noise=FixedNoise(0.0)
    )


@pytest.fixture
def sample_portfolio(trade_day):
    """Create a sample portfolio for testing"""
    return Portfolio(initial_cash=10000.0, clock=lambda: trade_day)


@pytest.fixture
def sample_store(tmp_path, trade_day):
    """Store writing into a per-test directory"""
    return PortfolioStore(tmp_path, clock=lambda: trade_day)
