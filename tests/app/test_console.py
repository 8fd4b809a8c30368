"""
Tests for the console front end.
"""

import io
import pytest
from stock_simulator.app.console import TradingConsole, main


def run_console(market, portfolio, store, keys, trade_day):
    stdout = io.StringIO()
    console = TradingConsole(market, portfolio, store, stdin=io.StringIO(keys),
                             stdout=stdout, clock=lambda: trade_day)
    console.run()
    return stdout.getvalue()


class TestTradingConsole:
    def test_buy_and_save(self, sample_market, sample_portfolio, sample_store, trade_day):
        """Test buying through the menu then saving on exit"""
        output = run_console(sample_market, sample_portfolio, sample_store, "3\nacme\n10\n8\n", trade_day)

        assert "✅ Bought 10 ACME @ $100.00" in output
        assert "💾 Data saved. Goodbye!" in output
        assert sample_portfolio.cash == 9000.0
        assert sample_store.load_or_new(0.0).cash == 9000.0

    def test_records_opening_value_once(self, sample_market, sample_portfolio, sample_store, trade_day):
        run_console(sample_market, sample_portfolio, sample_store, "8\n", trade_day)
        assert len(sample_portfolio.value_history) == 1

        run_console(sample_market, sample_portfolio, sample_store, "8\n", trade_day)
        assert len(sample_portfolio.value_history) == 1

    def test_advance_day_records_value(self, sample_market, sample_portfolio, sample_store, trade_day):
        output = run_console(sample_market, sample_portfolio, sample_store, "5\n5\n8\n", trade_day)

        assert "Advanced one day. Prices updated. Date: 2024-03-15" in output
        assert len(sample_portfolio.value_history) == 3

    def test_rejections(self, sample_market, sample_portfolio, sample_store, trade_day):
        """Test bad tickers, quantities and menu choices are reported"""
        keys = "3\nNOPE\n3\nACME\n0\n3\nACME\n1000\n4\nACME\n1\n9\n8\n"
        output = run_console(sample_market, sample_portfolio, sample_store, keys, trade_day)

        assert "Unknown ticker." in output
        assert "Invalid quantity." in output
        assert "❌ Purchase failed" in output
        assert "❌ Sell failed" in output
        assert "Invalid option." in output
        assert sample_portfolio.cash == 10000.0

    def test_non_numeric_input_reprompts(self, sample_market, sample_portfolio, sample_store, trade_day):
        output = run_console(sample_market, sample_portfolio, sample_store, "abc\n3\nACME\nten\n2\n8\n", trade_day)

        assert "Enter a valid number: " in output
        assert sample_portfolio.get_holding('ACME').quantity == 2

    def test_end_of_input_saves(self, sample_market, sample_portfolio, sample_store, trade_day):
        output = run_console(sample_market, sample_portfolio, sample_store, "", trade_day)

        assert "Data saved" in output
        assert sample_store.exists()

    def test_reports(self, sample_market, sample_portfolio, sample_store, trade_day):
        """Test the market, portfolio, transaction and performance views"""
        keys = "6\n2\n3\nACME\n10\n4\nGLOBX\n1\n1\n2\n6\n7\n8\n"
        output = run_console(sample_market, sample_portfolio, sample_store, keys, trade_day)

        assert "(No transactions)" in output
        assert "(No holdings)" in output
        assert "Acme Corp." in output
        assert "Total Portfolio Value: $10,000.00" in output
        assert "2024-03-15   BUY    ACME" in output
        assert "Total bought: $1,000.00" in output
        assert "Total return: +0.00%" in output

    def test_save_failure_reported(self, sample_market, sample_portfolio, sample_store, trade_day, tmp_path):
        (tmp_path / 'performance.csv').mkdir()
        output = run_console(sample_market, sample_portfolio, sample_store, "8\n", trade_day)
        assert "Could not save: performance.csv" in output


class TestMain:
    def test_main_runs_and_saves(self, tmp_path, monkeypatch, capsys):
        """Test the entry point starts a fresh portfolio and saves it"""
        monkeypatch.setattr('sys.stdin', io.StringIO("3\nAAPL\n2\n8\n"))

        assert main(['--data-dir', str(tmp_path), '--cash', '1000', '--seed', '1']) == 0

        assert "Bought 2 AAPL @ $180.00" in capsys.readouterr().out
        assert (tmp_path / 'portfolio.csv').read_text(encoding='utf-8').startswith("CASH,640.0\n")

    def test_main_bad_config(self, tmp_path):
        assert main(['--config', str(tmp_path / 'missing.json')]) == 2

    def test_negative_cash_is_a_configuration_error(self, tmp_path):
        """Test a negative starting cash is reported rather than raised"""
        assert main(['--data-dir', str(tmp_path), '--cash', '-5']) == 2
        assert not (tmp_path / 'portfolio.csv').exists()

    @pytest.mark.parametrize('settings', [
        '{"volatility": -1}',
        '{"min_price": 0}',
        '{"seed": -3}',
        '{"initial_cash": "lots"}',
        '[1, 2]',
    ])
    def test_bad_config_file_values(self, tmp_path, settings):
        path = tmp_path / 'settings.json'
        path.write_text(settings, encoding='utf-8')

        assert main(['--data-dir', str(tmp_path), '--config', str(path)]) == 2

    def test_bad_environment_value(self, tmp_path, monkeypatch):
        monkeypatch.setenv('STOCK_SIM_INITIAL_CASH', '-100')
        assert main(['--data-dir', str(tmp_path)]) == 2

    def test_config_file_layers_over_environment(self, tmp_path, monkeypatch):
        """Test settings missing from the config file keep their environment values"""
        env_dir = tmp_path / 'envdir'
        monkeypatch.setenv('STOCK_SIM_DATA_DIR', str(env_dir))
        monkeypatch.setenv('STOCK_SIM_INITIAL_CASH', '1500')
        monkeypatch.setattr('sys.stdin', io.StringIO("8\n"))
        path = tmp_path / 'settings.json'
        path.write_text('{"seed": 3}', encoding='utf-8')

        assert main(['--config', str(path)]) == 0

        assert (env_dir / 'portfolio.csv').read_text(encoding='utf-8') == "CASH,1500.0\n"

    def test_flags_override_config_file(self, tmp_path, monkeypatch):
        monkeypatch.setattr('sys.stdin', io.StringIO("8\n"))
        path = tmp_path / 'settings.json'
        path.write_text(f'{{"data_dir": "{tmp_path / "unused"}", "initial_cash": 500.0}}', encoding='utf-8')

        assert main(['--config', str(path), '--data-dir', str(tmp_path), '--cash', '250']) == 0

        assert (tmp_path / 'portfolio.csv').read_text(encoding='utf-8') == "CASH,250.0\n"
        assert not (tmp_path / 'unused').exists()
