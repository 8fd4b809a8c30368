"""Simulated market and price model."""

from .price_model import Market, GaussianNoise, default_instruments

__all__ = ['Market', 'GaussianNoise', 'default_instruments']
