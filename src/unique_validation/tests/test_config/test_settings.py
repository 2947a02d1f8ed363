from pathlib import Path

from unique_validation.config import Settings, UniqueValidationOptions, get_settings


def test_defaults(monkeypatch):
    for name in ("ENV", "LOG_LEVEL", "LOG_FORMAT", "LOG_TO_STDOUT", "LOG_DIR", "ENABLE_DRIVER_LOGGING"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.ENV == "development"
    assert settings.LOG_LEVEL == "INFO"
    assert settings.LOG_FORMAT == "json"
    assert settings.LOG_DIR == Path("logs")
    assert settings.ENABLE_DRIVER_LOGGING is False


def test_environment_values_are_normalized(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT", "TEXT")
    monkeypatch.setenv("ENABLE_DRIVER_LOGGING", "true")

    settings = Settings(_env_file=None)

    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.LOG_FORMAT == "text"
    assert settings.ENABLE_DRIVER_LOGGING is True


def test_get_settings_is_cached():
    get_settings.cache_clear()
    assert get_settings() is get_settings()
    get_settings.cache_clear()


def test_options_ignore_unknown_keys():
    options = UniqueValidationOptions.model_validate({"defaultMessage": "x {PATH}", "somethingElse": 1})
    assert options.default_message == "x {PATH}"
