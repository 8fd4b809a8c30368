"""
Performance reporting built on pandas.
"""

from typing import Dict, List

import pandas as pd

from ..core.models import Transaction, ValuePoint

TRANSACTION_COLUMNS = ['date', 'type', 'ticker', 'qty', 'price', 'total']


def value_history_frame(points: List[ValuePoint]) -> pd.DataFrame:
    """
    Value history as a DataFrame indexed by date.

    Columns:
        value: total portfolio value
        daily_return: fractional change from the previous point (NaN for the first)
    """
    frame = pd.DataFrame(
        {'value': [p.value for p in points]},
        index=pd.DatetimeIndex([pd.Timestamp(p.date) for p in points], name='date'),
        dtype=float,
    )
    frame['daily_return'] = frame['value'].pct_change()
    return frame


def transactions_frame(transactions: List[Transaction]) -> pd.DataFrame:
    """Transaction log as a DataFrame, one row per transaction"""
    rows = [
        {
            'date': t.date,
            'type': t.side.value,
            'ticker': t.ticker,
            'qty': t.quantity,
            'price': t.price,
            'total': t.total,
        }
        for t in transactions
    ]
    return pd.DataFrame(rows, columns=TRANSACTION_COLUMNS)


def performance_summary(points: List[ValuePoint]) -> Dict[str, float]:
    """Start/end value, total return and maximum drawdown of the value history"""
    if not points:
        return {}

    values = value_history_frame(points)['value']
    start_value = float(values.iloc[0])
    end_value = float(values.iloc[-1])

    running_peak = values.cummax()
    drawdowns = (values - running_peak) / running_peak.where(running_peak > 0)

    return {
        'start_value': start_value,
        'end_value': end_value,
        'total_return': (end_value / start_value - 1) if start_value > 0 else 0.0,
        'max_drawdown': float(drawdowns.min()) if drawdowns.notna().any() else 0.0,
        'observations': len(values),
    }
