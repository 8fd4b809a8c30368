"""
Core type definitions for the stock simulator.
"""

from enum import Enum


class TransactionSide(Enum):
    """Side of a transaction - buy or sell"""
    BUY = "BUY"
    SELL = "SELL"
