"""
Portfolio bookkeeping for cash, holdings, transactions and value history.
"""

import logging
from datetime import date
from typing import Callable, Dict, List, Mapping, Optional

from .holding import Holding
from ..core.models import Transaction, ValuePoint
from ..core.types import TransactionSide
from ..core.exceptions import (
    StockSimulatorError, InsufficientFundsError, InsufficientSharesError,
    InvalidOrderError, UnknownInstrumentError
)

logger = logging.getLogger(__name__)


class Portfolio:
    """Manages cash balance, holdings and the trading history"""

    def __init__(self, initial_cash: float, clock: Callable[[], date] = date.today):
        if initial_cash < 0:
            raise ValueError("Initial cash cannot be negative")

        self.cash = initial_cash
        self.clock = clock
        self.holdings: Dict[str, Holding] = {}
        self.transactions: List[Transaction] = []
        self.value_history: List[ValuePoint] = []

    def get_holding(self, ticker: str) -> Optional[Holding]:
        return self.holdings.get(ticker.strip().upper())

    @staticmethod
    def _validate_quantity(quantity: int) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidOrderError(f"Quantity must be a positive integer, got {quantity!r}")

    @staticmethod
    def _lookup_price(ticker: str, prices: Mapping[str, float]) -> float:
        price = prices.get(ticker)
        if price is None or price <= 0:
            raise UnknownInstrumentError(ticker)
        return price

    def execute_buy(self, ticker: str, quantity: int, prices: Mapping[str, float]) -> Transaction:
        """Buy at the current price, raising before any change if the order is invalid"""
        ticker = ticker.strip().upper()
        self._validate_quantity(quantity)
        price = self._lookup_price(ticker, prices)

        cost = price * quantity
        if cost > self.cash:
            raise InsufficientFundsError(cost, self.cash)

        self.cash -= cost
        holding = self.holdings.setdefault(ticker, Holding(ticker=ticker))
        holding.add_shares(quantity, price)

        transaction = Transaction(self.clock(), TransactionSide.BUY, ticker, quantity, price)
        self.transactions.append(transaction)
        return transaction

    def execute_sell(self, ticker: str, quantity: int, prices: Mapping[str, float]) -> Transaction:
        """Sell at the current price, raising before any change if the order is invalid"""
        ticker = ticker.strip().upper()
        self._validate_quantity(quantity)

        holding = self.holdings.get(ticker)
        if holding is None or not holding.can_sell(quantity):
            raise InsufficientSharesError(ticker, quantity, holding.quantity if holding else 0)
        price = self._lookup_price(ticker, prices)

        self.cash += price * quantity
        holding.remove_shares(quantity)
        if holding.quantity == 0:
            del self.holdings[ticker]

        transaction = Transaction(self.clock(), TransactionSide.SELL, ticker, quantity, price)
        self.transactions.append(transaction)
        return transaction

    def buy(self, ticker: str, quantity: int, prices: Mapping[str, float]) -> bool:
        """Buy shares; returns False and leaves the portfolio untouched on rejection"""
        try:
            transaction = self.execute_buy(ticker, quantity, prices)
        except StockSimulatorError as e:
            logger.info(f"Buy rejected: {e}")
            return False
        logger.info(f"Bought {transaction.quantity} {transaction.ticker} @ ${transaction.price:.2f}")
        return True

    def sell(self, ticker: str, quantity: int, prices: Mapping[str, float]) -> bool:
        """Sell shares; returns False and leaves the portfolio untouched on rejection"""
        try:
            transaction = self.execute_sell(ticker, quantity, prices)
        except StockSimulatorError as e:
            logger.info(f"Sell rejected: {e}")
            return False
        logger.info(f"Sold {transaction.quantity} {transaction.ticker} @ ${transaction.price:.2f}")
        return True

    def market_value(self, prices: Mapping[str, float]) -> float:
        """Cash plus every holding marked at its current price"""
        total_value = self.cash
        for ticker, holding in self.holdings.items():
            # Use current market price if available, otherwise use average cost
            current_price = prices.get(ticker, holding.avg_cost)
            total_value += holding.current_market_value(current_price)
        return total_value

    def record_value(self, day: date, prices: Mapping[str, float]) -> ValuePoint:
        """Append today's market value to the value history"""
        point = ValuePoint(day, self.market_value(prices))
        self.value_history.append(point)
        return point

    def unrealized_pnl(self, prices: Mapping[str, float]) -> float:
        """Unrealized P&L across all holdings"""
        return sum(
            holding.unrealized_pnl(prices.get(ticker, holding.avg_cost))
            for ticker, holding in self.holdings.items()
        )

    def realized_pnl(self) -> float:
        """Realized P&L replayed from the transaction log at weighted average cost"""
        cost_basis: Dict[str, Holding] = {}
        realized = 0.0

        for transaction in self.transactions:
            basis = cost_basis.setdefault(transaction.ticker, Holding(transaction.ticker))
            if transaction.side is TransactionSide.BUY:
                basis.add_shares(transaction.quantity, transaction.price)
            elif basis.can_sell(transaction.quantity):
                realized += (transaction.price - basis.avg_cost) * transaction.quantity
                basis.remove_shares(transaction.quantity)
                if basis.quantity == 0:
                    del cost_basis[transaction.ticker]

        return realized

    def holdings_summary(self, prices: Mapping[str, float]) -> Dict[str, Dict]:
        """Per-ticker position details at current prices"""
        summary = {}
        for ticker, holding in self.holdings.items():
            current_price = prices.get(ticker, holding.avg_cost)
            summary[ticker] = {
                'quantity': holding.quantity,
                'avg_cost': holding.avg_cost,
                'current_price': current_price,
                'market_value': holding.current_market_value(current_price),
                'cost_basis': holding.cost_basis,
                'unrealized_pnl': holding.unrealized_pnl(current_price),
            }
        return summary

    def __str__(self) -> str:
        return (f"Portfolio(Cash: ${self.cash:.2f}, Holdings: {len(self.holdings)}, "
                f"Transactions: {len(self.transactions)})")

    def __repr__(self) -> str:
        return self.__str__()
