"""Flat-file persistence."""

from .csv_store import PortfolioStore

__all__ = ['PortfolioStore']
