"""
Flat-file persistence of a portfolio.

Three comma-delimited UTF-8 files are kept side by side:

- holdings file: ``CASH,<amount>`` then one ``<TICKER>,<qty>,<avgCost>`` per holding
- transactions file: header ``date,type,ticker,qty,price,total`` then one row per transaction
- performance file: header ``date,value`` then one row per value point

Each file is written and read on its own. A failure on one is logged and
does not stop the others, and a malformed line only loses that line.
"""

import logging
import math
from datetime import date
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Union

from ..core.exceptions import PersistenceError
from ..core.models import Transaction, ValuePoint
from ..core.types import TransactionSide
from ..portfolio.holding import Holding
from ..portfolio.portfolio import Portfolio

logger = logging.getLogger(__name__)

CASH_SENTINEL = "CASH"
TRANSACTIONS_HEADER = "date,type,ticker,qty,price,total"
PERFORMANCE_HEADER = "date,value"


def _format_number(value: float) -> str:
    return repr(float(value))


def parse_holding(fields: List[str]) -> Holding:
    """Build a Holding from ``ticker,qty,avgCost`` fields"""
    try:
        ticker = fields[0].strip().upper()
        quantity = int(fields[1])
        avg_cost = float(fields[2])
    except (IndexError, ValueError) as e:
        raise PersistenceError(f"Bad holding record {fields}: {e}")

    if not ticker:
        raise PersistenceError(f"Bad holding record {fields}: empty ticker")
    if quantity <= 0 or avg_cost < 0 or not math.isfinite(avg_cost):
        raise PersistenceError(f"Bad holding record {fields}: quantity and cost out of range")
    return Holding(ticker, quantity, avg_cost)


def parse_transaction(fields: List[str]) -> Transaction:
    """Build a Transaction from ``date,type,ticker,qty,price,total`` fields"""
    if len(fields) < 6:
        raise PersistenceError(f"Bad transaction record {fields}: expected 6 fields")
    try:
        transaction = Transaction(
            date=date.fromisoformat(fields[0].strip()),
            side=TransactionSide(fields[1].strip().upper()),
            ticker=fields[2].strip().upper(),
            quantity=int(fields[3]),
            price=float(fields[4]),
        )
    except ValueError as e:
        raise PersistenceError(f"Bad transaction record {fields}: {e}")

    if not transaction.ticker or transaction.quantity <= 0 or not 0 < transaction.price < math.inf:
        raise PersistenceError(f"Bad transaction record {fields}: values out of range")
    return transaction


def parse_value_point(fields: List[str]) -> ValuePoint:
    """Build a ValuePoint from ``date,value`` fields"""
    if len(fields) < 2:
        raise PersistenceError(f"Bad value record {fields}: expected 2 fields")
    try:
        point = ValuePoint(date.fromisoformat(fields[0].strip()), float(fields[1]))
    except ValueError as e:
        raise PersistenceError(f"Bad value record {fields}: {e}")

    if not math.isfinite(point.value):
        raise PersistenceError(f"Bad value record {fields}: value out of range")
    return point


class PortfolioStore:
    """Saves and loads a Portfolio as three independent CSV files"""

    def __init__(self, data_dir: Union[str, Path] = ".",
                 portfolio_file: str = "portfolio.csv",
                 transactions_file: str = "transactions.csv",
                 performance_file: str = "performance.csv",
                 clock: Callable[[], date] = date.today):
        self.data_dir = Path(data_dir)
        self.portfolio_path = self.data_dir / portfolio_file
        self.transactions_path = self.data_dir / transactions_file
        self.performance_path = self.data_dir / performance_file
        self.clock = clock

    def exists(self) -> bool:
        """Whether a saved holdings file is present"""
        return self.portfolio_path.exists()

    # ----- saving -----

    def save(self, portfolio: Portfolio) -> Dict[str, bool]:
        """
        Write all three files, overwriting existing ones.

        Returns:
            Mapping of file name to whether it was written. I/O errors are
            logged rather than raised.
        """
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Could not create data directory {self.data_dir}: {e}")

        holdings_lines = [f"{CASH_SENTINEL},{_format_number(portfolio.cash)}"]
        holdings_lines.extend(
            f"{h.ticker},{h.quantity},{_format_number(h.avg_cost)}"
            for h in portfolio.holdings.values()
        )

        transaction_lines = [TRANSACTIONS_HEADER]
        transaction_lines.extend(
            f"{t.date.isoformat()},{t.side.value},{t.ticker},{t.quantity},"
            f"{_format_number(t.price)},{_format_number(t.total)}"
            for t in portfolio.transactions
        )

        performance_lines = [PERFORMANCE_HEADER]
        performance_lines.extend(
            f"{p.date.isoformat()},{_format_number(p.value)}"
            for p in portfolio.value_history
        )

        return {
            self.portfolio_path.name: self._write_lines(self.portfolio_path, holdings_lines),
            self.transactions_path.name: self._write_lines(self.transactions_path, transaction_lines),
            self.performance_path.name: self._write_lines(self.performance_path, performance_lines),
        }

    def _write_lines(self, path: Path, lines: List[str]) -> bool:
        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                for line in lines:
                    f.write(line + "\n")
        except OSError as e:
            logger.error(f"Failed to save {path}: {e}")
            return False
        logger.debug(f"Saved {len(lines)} lines to {path}")
        return True

    # ----- loading -----

    def load_or_new(self, default_cash: float) -> Portfolio:
        """Load the saved portfolio, or start a fresh one with default_cash"""
        portfolio = Portfolio(default_cash, clock=self.clock)

        if not self.portfolio_path.exists():
            logger.info(f"No saved portfolio at {self.portfolio_path}, starting with ${default_cash:,.2f}")
        else:
            self._load_holdings(portfolio)

        portfolio.transactions.extend(
            self._load_records(self.transactions_path, parse_transaction)
        )
        portfolio.value_history.extend(
            self._load_records(self.performance_path, parse_value_point)
        )

        logger.info(f"Loaded {portfolio}")
        return portfolio

    def _read_rows(self, path: Path, skip_header: bool) -> Iterator[List[str]]:
        with open(path, "r", encoding="utf-8") as f:
            if skip_header:
                next(f, None)
            for line in f:
                line = line.strip()
                if line:
                    yield line.split(",")

    def _load_holdings(self, portfolio: Portfolio) -> None:
        try:
            for fields in self._read_rows(self.portfolio_path, skip_header=False):
                try:
                    if fields[0].strip().upper() == CASH_SENTINEL and len(fields) >= 2:
                        cash = float(fields[1])
                        if cash < 0 or not math.isfinite(cash):
                            raise PersistenceError(f"Bad cash record {fields}: cash out of range")
                        portfolio.cash = cash
                    elif len(fields) >= 3:
                        holding = parse_holding(fields)
                        portfolio.holdings[holding.ticker] = holding
                    else:
                        raise PersistenceError(f"Bad holding record {fields}: too few fields")
                except (PersistenceError, ValueError) as e:
                    logger.warning(f"Skipping line in {self.portfolio_path}: {e}")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to load {self.portfolio_path}: {e}")

    def _load_records(self, path: Path, parse: Callable[[List[str]], object]) -> List:
        records = []
        if not path.exists():
            return records

        try:
            for fields in self._read_rows(path, skip_header=True):
                try:
                    records.append(parse(fields))
                except PersistenceError as e:
                    logger.warning(f"Skipping line in {path}: {e}")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to load {path}: {e}")
        return records

    def __str__(self) -> str:
        return f"PortfolioStore({self.data_dir})"

    def __repr__(self) -> str:
        return self.__str__()
