"""
Menu-driven console front end for the stock simulator.
"""

import argparse
import logging
import sys
from dataclasses import replace
from datetime import date
from typing import Callable, Optional, TextIO

from ..analytics.performance import performance_summary, transactions_frame
from ..config.simulator_config import SimulatorConfig
from ..market.price_model import Market
from ..portfolio.portfolio import Portfolio
from ..storage.csv_store import PortfolioStore

logger = logging.getLogger(__name__)

MENU = """
=== STOCK TRADING PLATFORM ===
Cash Balance : ${cash}
1) View Market
2) View Portfolio
3) Buy Stock
4) Sell Stock
5) Advance 1 Day (simulate prices)
6) View Transactions
7) View Performance History
8) Save & Exit"""

SAVE_AND_EXIT = 8


def fmt(value: float) -> str:
    return f"{value:,.2f}"


class TradingConsole:
    """Reads menu selections and drives the market, portfolio and store"""

    def __init__(self, market: Market, portfolio: Portfolio, store: PortfolioStore,
                 stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
                 clock: Callable[[], date] = date.today):
        self.market = market
        self.portfolio = portfolio
        self.store = store
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.clock = clock

    def say(self, text: str = "") -> None:
        print(text, file=self.stdout)

    def prompt(self, text: str) -> Optional[str]:
        """Print a prompt and read one line, or None at end of input"""
        self.stdout.write(text)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            return None
        return line.strip()

    def read_int(self, text: str, retry_text: str) -> Optional[int]:
        """Prompt until an integer is entered"""
        answer = self.prompt(text)
        while answer is not None:
            try:
                return int(answer)
            except ValueError:
                answer = self.prompt(retry_text)
        return None

    def run(self) -> None:
        """Run the menu loop until Save & Exit or end of input"""
        if not self.portfolio.value_history:
            self.portfolio.record_value(self.clock(), self.market.current_prices())

        handlers = {
            1: self.show_market,
            2: self.show_portfolio,
            3: self.do_buy,
            4: self.do_sell,
            5: self.advance_day,
            6: self.show_transactions,
            7: self.show_performance,
        }

        while True:
            self.say(MENU.format(cash=fmt(self.portfolio.cash)))
            choice = self.read_int("Enter choice: ", "Enter choice: ")
            if choice is None or choice == SAVE_AND_EXIT:
                self.save_and_exit()
                return

            handler = handlers.get(choice)
            if handler is None:
                self.say("Invalid option.")
            else:
                handler()

    def show_market(self) -> None:
        self.say("\n--- MARKET ---")
        self.say(f"{'Ticker':<8} {'Name':<24} {'Price ($)':>12}")
        for instrument in self.market.all():
            self.say(f"{instrument.ticker:<8} {instrument.name:<24} {fmt(instrument.price):>12}")

    def show_portfolio(self) -> None:
        prices = self.market.current_prices()
        self.say("\n--- PORTFOLIO ---")
        self.say(f"Cash: ${fmt(self.portfolio.cash)}")

        summary = self.portfolio.holdings_summary(prices)
        if not summary:
            self.say("(No holdings)")
        else:
            self.say(f"{'Ticker':<8} {'Qty':>8} {'Avg Cost':>12} {'Last Price':>12} "
                     f"{'Position($)':>12} {'Unreal. P&L':>12}")
            for ticker, row in summary.items():
                self.say(f"{ticker:<8} {row['quantity']:>8} {fmt(row['avg_cost']):>12} "
                         f"{fmt(row['current_price']):>12} {fmt(row['market_value']):>12} "
                         f"{fmt(row['unrealized_pnl']):>12}")

        self.say(f"Realized P&L: ${fmt(self.portfolio.realized_pnl())}")
        self.say(f"Total Portfolio Value: ${fmt(self.portfolio.market_value(prices))}")

    def _read_order(self, side: str):
        ticker = self.prompt(f"Enter ticker to {side}: ")
        if ticker is None:
            return None, None
        instrument = self.market.get(ticker)
        if instrument is None:
            self.say("Unknown ticker.")
            return None, None

        quantity = self.read_int("Enter quantity: ", "Enter a valid number: ")
        if quantity is None:
            return None, None
        if quantity <= 0:
            self.say("Invalid quantity.")
            return None, None
        return instrument, quantity

    def do_buy(self) -> None:
        instrument, quantity = self._read_order("BUY")
        if instrument is None:
            return

        if self.portfolio.buy(instrument.ticker, quantity, self.market.current_prices()):
            self.say(f"✅ Bought {quantity} {instrument.ticker} @ ${fmt(instrument.price)}")
        else:
            self.say("❌ Purchase failed (insufficient cash or invalid qty).")

    def do_sell(self) -> None:
        instrument, quantity = self._read_order("SELL")
        if instrument is None:
            return

        if self.portfolio.sell(instrument.ticker, quantity, self.market.current_prices()):
            self.say(f"✅ Sold {quantity} {instrument.ticker} @ ${fmt(instrument.price)}")
        else:
            self.say("❌ Sell failed (not enough shares or invalid qty).")

    def advance_day(self) -> None:
        self.market.tick()
        today = self.clock()
        self.portfolio.record_value(today, self.market.current_prices())
        self.say(f"✅ Advanced one day. Prices updated. Date: {today.isoformat()}")

    def show_transactions(self) -> None:
        self.say("\n--- TRANSACTIONS ---")
        if not self.portfolio.transactions:
            self.say("(No transactions)")
            return

        self.say(f"{'Date':<12} {'Type':<6} {'Ticker':<8} {'Qty':>8} {'Price':>12} {'Total':>12}")
        for t in self.portfolio.transactions:
            self.say(f"{t.date.isoformat():<12} {t.side.value:<6} {t.ticker:<8} {t.quantity:>8} "
                     f"{fmt(t.price):>12} {fmt(t.total):>12}")

        totals = transactions_frame(self.portfolio.transactions).groupby('type')['total'].sum()
        self.say(f"Total bought: ${fmt(totals.get('BUY', 0.0))}  "
                 f"Total sold: ${fmt(totals.get('SELL', 0.0))}")

    def show_performance(self) -> None:
        self.say("\n--- PERFORMANCE (Portfolio Value Over Time) ---")
        if not self.portfolio.value_history:
            self.say("(No data)")
            return

        self.say(f"{'Date':<12} {'Value ($)':>14}")
        for point in self.portfolio.value_history:
            self.say(f"{point.date.isoformat():<12} {fmt(point.value):>14}")

        summary = performance_summary(self.portfolio.value_history)
        self.say(f"Total return: {summary['total_return']:+.2%}")
        self.say(f"Max drawdown: {summary['max_drawdown']:.2%}")
        self.say(f"(Tip: performance also saved to {self.store.performance_path.name})")

    def save_and_exit(self) -> None:
        results = self.store.save(self.portfolio)
        failed = [name for name, ok in results.items() if not ok]
        if failed:
            self.say(f"⚠️ Could not save: {', '.join(failed)}")
        else:
            self.say("💾 Data saved. Goodbye!")


def build_config(args: argparse.Namespace) -> SimulatorConfig:
    """Environment first, then a config file, then command line overrides"""
    config = SimulatorConfig.from_env()
    if args.config:
        config = SimulatorConfig.from_file(args.config, base=config)

    overrides = {
        'data_dir': args.data_dir,
        'initial_cash': args.cash,
        'seed': args.seed,
    }
    return replace(config, **{k: v for k, v in overrides.items() if v is not None})


def main(argv=None) -> int:
    """Console entry point"""
    parser = argparse.ArgumentParser(
        description="Simulated stock trading with a persistent portfolio",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  stock-simulator
  stock-simulator --data-dir ~/.stock-sim --cash 25000
  stock-simulator --seed 42 --verbose
        """
    )
    parser.add_argument('--data-dir', '-d', help='Directory holding the CSV files (default: current directory)')
    parser.add_argument('--cash', '-c', type=float, help='Starting cash for a new portfolio (default: 10,000)')
    parser.add_argument('--seed', type=int, help='Seed for the price random walk')
    parser.add_argument('--config', help='JSON configuration file')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable detailed logging')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = build_config(args)
        market = config.build_market()
        store = config.build_store()
        portfolio = store.load_or_new(config.initial_cash)
    except (ValueError, TypeError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    TradingConsole(market, portfolio, store).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
