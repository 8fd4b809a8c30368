"""Portfolio bookkeeping components."""

from .holding import Holding
from .portfolio import Portfolio

__all__ = ['Holding', 'Portfolio']
