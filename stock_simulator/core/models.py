"""
Core data models for the stock simulator.
"""

from dataclasses import dataclass
from datetime import date

from .types import TransactionSide


@dataclass
class Instrument:
    """A tradable stock with its current simulated price"""
    ticker: str
    name: str
    price: float

    def __post_init__(self):
        self.ticker = self.ticker.strip().upper()
        if not self.ticker:
            raise ValueError("Ticker cannot be empty")
        if self.price <= 0:
            raise ValueError(f"Price of {self.ticker} must be positive")

    def __str__(self) -> str:
        return f"{self.ticker} - {self.name} : {self.price:,.2f}"


@dataclass(frozen=True)
class Transaction:
    """An executed buy or sell"""
    date: date
    side: TransactionSide
    ticker: str
    quantity: int
    price: float

    @property
    def total(self) -> float:
        """Cash value of the transaction"""
        return self.price * self.quantity


@dataclass(frozen=True)
class ValuePoint:
    """Total portfolio value on a given day"""
    date: date
    value: float
