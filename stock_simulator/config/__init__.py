"""Simulator configuration."""

from .simulator_config import SimulatorConfig

__all__ = ['SimulatorConfig']
