"""Console front end."""

from .console import TradingConsole, main

__all__ = ['TradingConsole', 'main']
