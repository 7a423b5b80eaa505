"""Shared fixtures for bot_planner tests."""

import pytest


@pytest.fixture(autouse=True)
def _isolate_config_path_env_var(monkeypatch):
    """Prevent BOT_PLANNER_CONFIG_PATH from leaking into tests.

    load_config() falls back to this env var when no path is given. Without
    isolation, tests would pick up a developer's real config file.
    """
    monkeypatch.delenv("BOT_PLANNER_CONFIG_PATH", raising=False)


@pytest.fixture
def raw_draft():
    """A valid create-bot draft with camelCase keys, as the form sends it."""
    return {
        "name": "BTC range bot",
        "tradingPair": "BTCUSDT",
        "investmentAmount": 100,
        "apiKeyId": 1,
        "gridType": "arithmetic",
        "upperPrice": 200,
        "lowerPrice": 100,
        "gridLines": 5,
        "profitPerGrid": 0.53,
        "isActive": True,
    }
