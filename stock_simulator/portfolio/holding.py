"""
Holding of a single instrument.
"""

from dataclasses import dataclass


@dataclass
class Holding:
    """Quantity owned of one ticker and its weighted average cost"""
    ticker: str
    quantity: int = 0
    avg_cost: float = 0.0

    @property
    def cost_basis(self) -> float:
        return self.quantity * self.avg_cost

    def current_market_value(self, current_price: float) -> float:
        """Market value at current price"""
        return self.quantity * current_price

    def unrealized_pnl(self, current_price: float) -> float:
        """Unrealized profit/loss at current price"""
        return (current_price - self.avg_cost) * self.quantity

    def add_shares(self, quantity: int, price: float) -> None:
        """Add shares bought at price, re-weighting the average cost"""
        if quantity <= 0:
            raise ValueError("Quantity must be positive")

        total_cost = self.cost_basis + quantity * price
        self.quantity += quantity
        self.avg_cost = total_cost / self.quantity

    def remove_shares(self, quantity: int) -> None:
        """Remove sold shares; the average cost is left as it was"""
        if quantity <= 0:
            raise ValueError("Quantity must be positive")
        if quantity > self.quantity:
            raise ValueError(f"Cannot remove {quantity} shares of {self.ticker}, only {self.quantity} held")

        self.quantity -= quantity

    def can_sell(self, quantity: int) -> bool:
        """Check if we can sell the requested quantity"""
        return 0 < quantity <= self.quantity

    def __str__(self) -> str:
        return f"Holding({self.ticker}: {self.quantity} @ ${self.avg_cost:.2f})"

    def __repr__(self) -> str:
        return self.__str__()
