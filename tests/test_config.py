import pytest
from pydantic import ValidationError

from restaurant_menu.core.config import DEFAULT_SECRET_KEY, EnvironmentMode, Settings


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.env_mode == EnvironmentMode.DEVELOPMENT
    assert settings.is_development
    assert settings.settings_cache_ttl == 300
    assert settings.categories_cache_ttl == 180
    assert settings.items_cache_ttl == 120
    assert settings.validate_production_config() == []


def test_env_mode_is_case_insensitive():
    assert Settings(_env_file=None, env_mode="PRODUCTION").is_production


def test_unknown_env_mode_is_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, env_mode="qa")


def test_production_flags_unsafe_values():
    settings = Settings(_env_file=None, env_mode="production", secret_key=DEFAULT_SECRET_KEY)

    assert settings.validate_production_config() == ["SECRET_KEY", "DATABASE_URL"]


def test_production_with_real_values_passes():
    settings = Settings(
        _env_file=None,
        env_mode="staging",
        secret_key="a-real-secret-value",
        database_url="postgresql+psycopg://menu:menu@db/menu",
    )

    assert settings.validate_production_config() == []


def test_cors_origins_list():
    settings = Settings(_env_file=None, cors_origins="http://a.test, http://b.test,")

    assert settings.cors_origins_list == ["http://a.test", "http://b.test"]
