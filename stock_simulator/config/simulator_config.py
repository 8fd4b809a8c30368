"""
Configuration settings for the stock simulator.
"""

from dataclasses import dataclass, asdict, replace
from typing import Any, Dict, Optional
import os
import json

from ..market.price_model import (
    Market, GaussianNoise, default_instruments, DEFAULT_VOLATILITY, DEFAULT_MIN_PRICE
)
from ..storage.csv_store import PortfolioStore


@dataclass
class SimulatorConfig:
    """Settings for the market, the starting portfolio and where it is saved"""
    # Persistence
    data_dir: str = "."
    portfolio_file: str = "portfolio.csv"
    transactions_file: str = "transactions.csv"
    performance_file: str = "performance.csv"

    # Portfolio
    initial_cash: float = 10000.0

    # Price model
    volatility: float = DEFAULT_VOLATILITY
    min_price: float = DEFAULT_MIN_PRICE
    seed: Optional[int] = None

    def __post_init__(self):
        for name in ('data_dir', 'portfolio_file', 'transactions_file', 'performance_file'):
            if not isinstance(getattr(self, name), str) or not getattr(self, name):
                raise ValueError(f"{name} must be a non-empty string")
        for name in ('initial_cash', 'volatility', 'min_price'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be a number, got {value!r}")
        if self.initial_cash < 0:
            raise ValueError("initial_cash cannot be negative")
        if self.volatility < 0:
            raise ValueError("volatility cannot be negative")
        if self.min_price <= 0:
            raise ValueError("min_price must be positive")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int) or self.seed < 0):
            raise ValueError(f"seed must be a non-negative integer, got {self.seed!r}")

    def build_market(self) -> Market:
        """Create a market listing the default instruments"""
        return Market(
            default_instruments(),
            noise=GaussianNoise(self.seed),
            volatility=self.volatility,
            min_price=self.min_price
        )

    def build_store(self) -> PortfolioStore:
        return PortfolioStore(
            data_dir=self.data_dir,
            portfolio_file=self.portfolio_file,
            transactions_file=self.transactions_file,
            performance_file=self.performance_file
        )

    @classmethod
    def from_file(cls, config_path: str, base: Optional['SimulatorConfig'] = None) -> 'SimulatorConfig':
        """
        Load configuration from JSON file

        Args:
            config_path: JSON object of setting names to values
            base: Settings the file is layered over; keys absent from the
                file keep their value from base (defaults when omitted)
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data: Dict[str, Any] = json.load(f)
            if not isinstance(data, dict):
                raise TypeError("top level must be a JSON object")
            return replace(base, **data) if base is not None else cls(**data)
        except (OSError, ValueError, TypeError) as e:
            raise ValueError(f"Failed to load simulator config from {config_path}: {e}")

    def save_to_file(self, config_path: str):
        """Save configuration to JSON file"""
        config_dict = {k: v for k, v in asdict(self).items() if v is not None}

        with open(config_path, 'w', encoding='utf-8') as f:
            json.dump(config_dict, f, indent=2)

    @classmethod
    def from_env(cls) -> 'SimulatorConfig':
        """Create configuration from environment variables"""
        seed = os.getenv('STOCK_SIM_SEED')

        return cls(
            data_dir=os.getenv('STOCK_SIM_DATA_DIR', '.'),
            initial_cash=float(os.getenv('STOCK_SIM_INITIAL_CASH', '10000')),
            volatility=float(os.getenv('STOCK_SIM_VOLATILITY', str(DEFAULT_VOLATILITY))),
            min_price=float(os.getenv('STOCK_SIM_MIN_PRICE', str(DEFAULT_MIN_PRICE))),
            seed=int(seed) if seed else None
        )
