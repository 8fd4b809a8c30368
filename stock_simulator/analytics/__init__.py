"""Performance reporting over portfolio history."""

from .performance import value_history_frame, transactions_frame, performance_summary

__all__ = ['value_history_frame', 'transactions_frame', 'performance_summary']
