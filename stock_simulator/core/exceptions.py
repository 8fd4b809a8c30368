"""
Custom exceptions for the stock simulator.
"""


class StockSimulatorError(Exception):
    """Base exception for stock simulator"""
    pass


class InsufficientFundsError(StockSimulatorError):
    """Raised when attempting to buy with insufficient cash"""
    def __init__(self, required: float, available: float):
        self.required = required
        self.available = available
        super().__init__(f"Insufficient funds: need ${required:.2f}, have ${available:.2f}")


class InsufficientSharesError(StockSimulatorError):
    """Raised when attempting to sell more shares than held"""
    def __init__(self, ticker: str, requested: int, available: int):
        self.ticker = ticker
        self.requested = requested
        self.available = available
        super().__init__(f"Insufficient shares of {ticker}: need {requested}, have {available}")


class InvalidOrderError(StockSimulatorError):
    """Raised for invalid order parameters"""
    pass


class UnknownInstrumentError(StockSimulatorError):
    """Raised when a ticker has no known price"""
    def __init__(self, ticker: str):
        self.ticker = ticker
        super().__init__(f"Unknown instrument: {ticker}")


class PersistenceError(StockSimulatorError):
    """Raised when a persisted record cannot be parsed"""
    pass
