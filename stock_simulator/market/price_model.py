"""
Simulated market whose prices follow a daily multiplicative random walk.
"""

import logging
from typing import Dict, Iterable, List, Optional

import numpy as np

from ..core.models import Instrument

logger = logging.getLogger(__name__)

DEFAULT_VOLATILITY = 0.02
DEFAULT_MIN_PRICE = 0.5


class GaussianNoise:
    """Standard normal draws backed by a numpy Generator"""

    def __init__(self, seed: Optional[int] = None):
        self.rng = np.random.default_rng(seed)

    def next_gaussian(self) -> float:
        return float(self.rng.standard_normal())


def default_instruments() -> List[Instrument]:
    """The instruments a new market is seeded with"""
    return [
        Instrument("AAPL", "Apple Inc.", 180.00),
        Instrument("GOOG", "Alphabet Inc.", 135.00),
        Instrument("AMZN", "Amazon.com Inc.", 150.00),
        Instrument("TSLA", "Tesla Inc.", 220.00),
        Instrument("NFLX", "Netflix Inc.", 480.00),
    ]


class Market:
    """Holds the current price of every instrument and advances them one day at a time"""

    def __init__(self, instruments: Optional[Iterable[Instrument]] = None, noise=None,
                 volatility: float = DEFAULT_VOLATILITY, min_price: float = DEFAULT_MIN_PRICE):
        """
        Args:
            instruments: Instruments to list on the market
            noise: Random source exposing ``next_gaussian()``; a seeded
                GaussianNoise makes a run reproducible
            volatility: Standard deviation of the daily return
            min_price: Absolute floor no price may fall below
        """
        if volatility < 0:
            raise ValueError("Volatility cannot be negative")
        if min_price <= 0:
            raise ValueError("Minimum price must be positive")

        self.noise = noise if noise is not None else GaussianNoise()
        self.volatility = volatility
        self.min_price = min_price
        self.instruments: Dict[str, Instrument] = {}

        for instrument in instruments or []:
            self.add(instrument)

    def add(self, instrument: Instrument) -> None:
        """List an instrument, replacing any with the same ticker"""
        self.instruments[instrument.ticker] = instrument

    def get(self, ticker: str) -> Optional[Instrument]:
        """Look up an instrument by ticker, ignoring case"""
        return self.instruments.get(ticker.strip().upper())

    def all(self) -> List[Instrument]:
        return list(self.instruments.values())

    def get_price(self, ticker: str) -> Optional[float]:
        instrument = self.get(ticker)
        return instrument.price if instrument else None

    def current_prices(self) -> Dict[str, float]:
        """Snapshot of ticker -> price"""
        return {ticker: instrument.price for ticker, instrument in self.instruments.items()}

    def tick(self) -> None:
        """Advance every price by one simulated day"""
        for instrument in self.instruments.values():
            shock = self.volatility * self.noise.next_gaussian()
            instrument.price = max(self.min_price, instrument.price * (1 + shock))
        logger.debug(f"Market advanced one day: {self.current_prices()}")

    def __str__(self) -> str:
        return f"Market(Instruments: {len(self.instruments)})"

    def __repr__(self) -> str:
        return self.__str__()
