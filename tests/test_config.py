import pytest

from core.config import DEFAULT_BASE_URL, ConfigurationError, load_settings


def test_missing_api_key_is_fatal():
    with pytest.raises(ConfigurationError, match="PERPLEXITY_API_KEY"):
        load_settings({})


def test_blank_api_key_is_fatal():
    with pytest.raises(ConfigurationError):
        load_settings({"PERPLEXITY_API_KEY": "   "})


def test_defaults():
    settings = load_settings({"PERPLEXITY_API_KEY": "pplx-abc"})
    assert settings.api_key == "pplx-abc"
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.timeout_seconds == 60.0
    assert settings.log_level == "INFO"


def test_overrides():
    settings = load_settings(
        {
            "PERPLEXITY_API_KEY": "pplx-abc",
            "PERPLEXITY_BASE_URL": "http://localhost:8080/",
            "PERPLEXITY_TIMEOUT": "12.5",
            "LOG_LEVEL": "debug",
        }
    )
    assert settings.base_url == "http://localhost:8080"
    assert settings.timeout_seconds == 12.5
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("timeout", ["soon", "0", "-3"])
def test_bad_timeout_is_fatal(timeout):
    with pytest.raises(ConfigurationError, match="PERPLEXITY_TIMEOUT"):
        load_settings({"PERPLEXITY_API_KEY": "k", "PERPLEXITY_TIMEOUT": timeout})


def test_settings_are_immutable_and_hide_the_key():
    settings = load_settings({"PERPLEXITY_API_KEY": "pplx-secret"})
    with pytest.raises(AttributeError):
        settings.api_key = "other"
    assert "pplx-secret" not in repr(settings)

