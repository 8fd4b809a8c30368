"""
Tests for simulator configuration.
"""

import pytest
from stock_simulator.config.simulator_config import SimulatorConfig


class TestSimulatorConfig:
    def test_defaults(self):
        config = SimulatorConfig()
        assert config.initial_cash == 10000.0
        assert config.volatility == 0.02
        assert config.min_price == 0.5
        assert config.seed is None

    def test_from_env(self, monkeypatch, tmp_path):
        """Test configuration read from environment variables"""
        monkeypatch.setenv('STOCK_SIM_DATA_DIR', str(tmp_path))
        monkeypatch.setenv('STOCK_SIM_INITIAL_CASH', '2500')
        monkeypatch.setenv('STOCK_SIM_VOLATILITY', '0.05')
        monkeypatch.setenv('STOCK_SIM_MIN_PRICE', '1.0')
        monkeypatch.setenv('STOCK_SIM_SEED', '11')

        config = SimulatorConfig.from_env()

        assert config.data_dir == str(tmp_path)
        assert config.initial_cash == 2500.0
        assert config.volatility == 0.05
        assert config.min_price == 1.0
        assert config.seed == 11

    def test_from_env_defaults(self, monkeypatch):
        for name in ('STOCK_SIM_DATA_DIR', 'STOCK_SIM_INITIAL_CASH', 'STOCK_SIM_VOLATILITY',
                     'STOCK_SIM_MIN_PRICE', 'STOCK_SIM_SEED'):
            monkeypatch.delenv(name, raising=False)
        assert SimulatorConfig.from_env() == SimulatorConfig()

    def test_file_round_trip(self, tmp_path):
        path = tmp_path / 'settings.json'
        config = SimulatorConfig(data_dir='data', initial_cash=5000.0, seed=3)

        config.save_to_file(str(path))

        assert SimulatorConfig.from_file(str(path)) == config

    def test_bad_file(self, tmp_path):
        path = tmp_path / 'settings.json'
        path.write_text('{"unknown_setting": 1}', encoding='utf-8')

        with pytest.raises(ValueError, match='settings.json'):
            SimulatorConfig.from_file(str(path))
        with pytest.raises(ValueError):
            SimulatorConfig.from_file(str(tmp_path / 'missing.json'))

    def test_build_market(self):
        """Test seeded markets walk identically"""
        first = SimulatorConfig(seed=5).build_market()
        second = SimulatorConfig(seed=5).build_market()

        first.tick()
        second.tick()

        assert len(first.all()) == 5
        assert first.current_prices() == second.current_prices()

    def test_build_store(self, tmp_path):
        store = SimulatorConfig(data_dir=str(tmp_path), portfolio_file='p.csv').build_store()
        assert store.portfolio_path == tmp_path / 'p.csv'


class TestCreateSimulator:
    def test_create_simulator(self, tmp_path):
        """Test the package factory wires a market, a fresh portfolio and a store"""
        from stock_simulator import create_simulator

        market, portfolio, store = create_simulator(SimulatorConfig(data_dir=str(tmp_path), initial_cash=750.0))

        assert market.get_price('AAPL') == 180.0
        assert portfolio.cash == 750.0
        assert store.data_dir == tmp_path


class TestValidation:
    @pytest.mark.parametrize('settings', [
        {'initial_cash': -1.0},
        {'initial_cash': 'lots'},
        {'volatility': -0.01},
        {'min_price': 0.0},
        {'seed': -1},
        {'seed': 1.5},
        {'data_dir': ''},
    ])
    def test_invalid_values_rejected(self, settings):
        """Test out-of-range settings are refused when the config is built"""
        with pytest.raises(ValueError):
            SimulatorConfig(**settings)

    def test_invalid_environment_value(self, monkeypatch):
        monkeypatch.setenv('STOCK_SIM_VOLATILITY', '-0.5')
        with pytest.raises(ValueError):
            SimulatorConfig.from_env()

    def test_file_layered_over_base(self, tmp_path):
        """Test keys absent from the file keep the base value"""
        path = tmp_path / 'settings.json'
        path.write_text('{"seed": 9}', encoding='utf-8')
        base = SimulatorConfig(data_dir='from-env', initial_cash=123.0)

        config = SimulatorConfig.from_file(str(path), base=base)

        assert config.data_dir == 'from-env'
        assert config.initial_cash == 123.0
        assert config.seed == 9

    def test_invalid_file_value_names_path(self, tmp_path):
        path = tmp_path / 'settings.json'
        path.write_text('{"min_price": -2}', encoding='utf-8')

        with pytest.raises(ValueError, match='settings.json'):
            SimulatorConfig.from_file(str(path), base=SimulatorConfig())

    def test_create_simulator_defaults(self, tmp_path, monkeypatch):
        from stock_simulator import create_simulator

        monkeypatch.chdir(tmp_path)
        market, portfolio, store = create_simulator()

        assert portfolio.cash == 10000.0
        assert len(market.all()) == 5
