"""Tests for environment configuration."""

from engine import config


def test_load_defaults_when_unset() -> None:
    assert config.load_config({}) == config.EngineConfig()


def test_load_reads_prefixed_variables() -> None:
    loaded = config.load_config({
        "STEPWISE_DEFAULT_SPEED_MS": "150",
        "STEPWISE_MIN_SPEED_MS": "20",
        "STEPWISE_HOST": "0.0.0.0",
        "STEPWISE_PORT": "8080",
        "STEPWISE_DEBUG": "yes",
        "STEPWISE_LOG_LEVEL": "debug",
        "STEPWISE_SECRET_KEY": "s3cret",
    })
    assert loaded == config.EngineConfig(
        default_speed_ms=150,
        min_speed_ms=20,
        host="0.0.0.0",
        port=8080,
        debug=True,
        log_level="DEBUG",
        secret_key="s3cret",
    )


def test_bad_values_fall_back_to_defaults(caplog) -> None:
    loaded = config.load_config({
        "STEPWISE_DEFAULT_SPEED_MS": "fast",
        "STEPWISE_DEBUG": "maybe",
        "STEPWISE_HOST": "",
    })
    assert loaded.default_speed_ms == 400
    assert loaded.debug is False
    assert loaded.host == "127.0.0.1"
    assert "STEPWISE_DEFAULT_SPEED_MS" in caplog.text


def test_values_are_clamped() -> None:
    loaded = config.load_config({
        "STEPWISE_MIN_SPEED_MS": "0",
        "STEPWISE_PORT": "70000",
    })
    assert loaded.min_speed_ms == 1
    assert loaded.port == 65535

    slower = config.load_config({
        "STEPWISE_MIN_SPEED_MS": "100",
        "STEPWISE_DEFAULT_SPEED_MS": "10",
    })
    assert slower.default_speed_ms == 100


def test_reads_os_environ_by_default(monkeypatch) -> None:
    monkeypatch.setenv("STEPWISE_PORT", "6001")
    assert config.load_config().port == 6001
