"""Core components of the stock simulator."""

from .types import TransactionSide
from .models import Instrument, Transaction, ValuePoint
from .exceptions import (
    StockSimulatorError, InsufficientFundsError, InsufficientSharesError,
    InvalidOrderError, UnknownInstrumentError, PersistenceError
)

__all__ = [
    'TransactionSide',
    'Instrument', 'Transaction', 'ValuePoint',
    'StockSimulatorError', 'InsufficientFundsError', 'InsufficientSharesError',
    'InvalidOrderError', 'UnknownInstrumentError', 'PersistenceError'
]
