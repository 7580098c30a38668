import pytest
from pydantic import ValidationError

from http_handler.core.config import HandlerConfig
from http_handler.core.settings import HandlerSettings


def test_defaults():
    config = HandlerConfig()
    assert config.request_timeout == 60.0
    assert config.bypass_cache is True
    assert config.success_status_codes == frozenset({200, 201, 202, 203, 204})
    assert config.strict_status_code == 200


def test_config_is_frozen_and_strict():
    config = HandlerConfig()
    with pytest.raises(ValidationError):
        config.request_timeout = 1.0
    with pytest.raises(ValidationError):
        HandlerConfig(unknown=True)
    with pytest.raises(ValidationError):
        HandlerConfig(success_status_codes=frozenset())


def test_from_app_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("HTTP_HANDLER_BASE_URL", "http://api.example.test/")
    monkeypatch.setenv("HTTP_HANDLER_REQUEST_TIMEOUT", "12.5")
    monkeypatch.setenv("HTTP_HANDLER_BYPASS_CACHE", "false")
    monkeypatch.setenv("HTTP_HANDLER_SUCCESS_STATUS_CODES", "[200, 201]")

    settings = HandlerSettings(_env_file=None)
    config = HandlerConfig.from_app_settings(settings)

    assert settings.HTTP_HANDLER_BASE_URL == "http://api.example.test"
    assert config.request_timeout == 12.5
    assert config.bypass_cache is False
    assert config.success_status_codes == frozenset({200, 201})
