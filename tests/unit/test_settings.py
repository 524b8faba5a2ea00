import pytest
from unittest.mock import patch
from pydantic import ValidationError

from ss_activewear.config.settings import CA_BASE_URL, US_BASE_URL, Settings, get_settings


def test_defaults(settings_factory):
    settings = settings_factory()
    assert settings.region == "US"
    assert settings.base_url == US_BASE_URL
    assert settings.request_timeout_seconds == 30.0
    assert settings.default_search_limit == 20
    assert settings.user_agent == "SS-Activewear-MCP/1.0"
    assert settings.has_credentials

def test_canadian_region_accepts_lowercase(settings_factory):
    settings = settings_factory(SS_REGION="ca")
    assert settings.region == "CA"
    assert settings.base_url == CA_BASE_URL

def test_unknown_region_rejected(settings_factory):
    with pytest.raises(ValidationError):
        settings_factory(SS_REGION="EU")

def test_blank_credentials_count_as_missing(settings_factory):
    settings = settings_factory(SS_ACCOUNT_NUMBER="  ", SS_API_KEY="")
    assert settings.account_number is None
    assert settings.missing_credentials() == ["SS_ACCOUNT_NUMBER", "SS_API_KEY"]
    assert not settings.has_credentials

def test_only_api_key_missing(settings_factory):
    settings = settings_factory(SS_API_KEY="")
    assert settings.missing_credentials() == ["SS_API_KEY"]

def test_secrets_not_exposed(settings_factory):
    settings = settings_factory()
    assert "test-api-key" not in repr(settings)
    assert settings.api_key.get_secret_value() == "test-api-key"

def test_preferred_warehouse_codes(settings_factory):
    settings = settings_factory(SS_PREFERRED_WAREHOUSES=" il, ks ,,NV")
    assert settings.preferred_warehouse_codes == ("IL", "KS", "NV")
    assert settings_factory().preferred_warehouse_codes == ()

def test_real_settings_with_env():
    """Settings read from environment variables."""
    with patch.dict("os.environ", {
        "SS_ACCOUNT_NUMBER": "98765",
        "SS_API_KEY": "env-key",
        "SS_REGION": "CA",
        "DEBUG": "true",
        "REQUEST_TIMEOUT_SECONDS": "5",
    }, clear=True):
        settings = Settings(_env_file=None)
        assert settings.account_number.get_secret_value() == "98765"
        assert settings.region == "CA"
        assert settings.debug is True
        assert settings.request_timeout_seconds == 5.0

def test_get_settings_is_cached():
    get_settings.cache_clear()
    with patch.dict("os.environ", {}, clear=True):
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
