import smartfill.core.config as config_module  # type: ignore[import]

from tests.helpers.smartfill_imports import EngineConfig, load_configuration

ENV_KEYS = [
    "SMARTFILL_MAX_RETRIES",
    "SMARTFILL_RETRY_DELAY",
    "SMARTFILL_INTERACTION_DELAY",
    "SMARTFILL_FRAMEWORK_WAIT",
    "SMARTFILL_FRAMEWORK_POLL",
    "SMARTFILL_POSITION_TOLERANCE",
    "SMARTFILL_KEY_MATCH_RATIO",
    "SMARTFILL_HEADLESS",
]


def _clear_environment(monkeypatch):
    monkeypatch.setattr(config_module, "load_dotenv", lambda *_args, **_kwargs: False)
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_load_configuration_defaults(monkeypatch):
    _clear_environment(monkeypatch)

    config = load_configuration()

    assert config == EngineConfig()
    assert config.max_retries == 3
    assert config.position_tolerance == 10.0
    assert config.key_match_ratio == 0.5
    assert config.headless is True


def test_load_configuration_uses_environment(monkeypatch):
    _clear_environment(monkeypatch)
    monkeypatch.setenv("SMARTFILL_MAX_RETRIES", "5")
    monkeypatch.setenv("SMARTFILL_RETRY_DELAY", "0.25")
    monkeypatch.setenv("SMARTFILL_FRAMEWORK_WAIT", "0")
    monkeypatch.setenv("SMARTFILL_POSITION_TOLERANCE", "4")
    monkeypatch.setenv("SMARTFILL_HEADLESS", "false")

    config = load_configuration()

    assert config.max_retries == 5
    assert config.retry_delay == 0.25
    assert config.framework_wait_timeout == 0.0
    assert config.position_tolerance == 4.0
    assert config.headless is False


def test_malformed_values_fall_back_to_defaults(monkeypatch):
    _clear_environment(monkeypatch)
    monkeypatch.setenv("SMARTFILL_MAX_RETRIES", "many")
    monkeypatch.setenv("SMARTFILL_RETRY_DELAY", "soon")

    config = load_configuration()

    assert config.max_retries == 3
    assert config.retry_delay == 0.5


def test_retry_budget_is_at_least_one(monkeypatch):
    _clear_environment(monkeypatch)
    monkeypatch.setenv("SMARTFILL_MAX_RETRIES", "0")

    assert load_configuration().max_retries == 1


def test_keyword_overrides_win_over_environment(monkeypatch):
    _clear_environment(monkeypatch)
    monkeypatch.setenv("SMARTFILL_MAX_RETRIES", "5")
    monkeypatch.setenv("SMARTFILL_HEADLESS", "true")

    config = load_configuration(max_retries=2, headless=False, interaction_delay=0)

    assert config.max_retries == 2
    assert config.headless is False
    assert config.interaction_delay == 0
