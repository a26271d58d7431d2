from __future__ import annotations

import pytest
from pydantic import ValidationError

from contactbook.shared.config import AppConfig, SecurityConfig


def test_defaults_are_development_friendly(monkeypatch: pytest.MonkeyPatch) -> None:
    names = ("APP_ENV", "SECRET_KEY", "TOKEN_TTL_SECONDS", "DATABASE_URL", "TRUSTED_PROXIES")
    for name in names:
        monkeypatch.delenv(name, raising=False)

    config = AppConfig(_env_file=None)

    assert config.is_production() is False
    assert config.token_ttl_seconds == 3600
    assert config.database.is_sqlite()
    assert config.security.login_max_attempts == 5
    assert config.security.trusted_proxies == 0


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SECRET_KEY", "from-env")
    monkeypatch.setenv("TOKEN_TTL_SECONDS", "120")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///elsewhere.db")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("ENABLE_RATE_LIMIT", "false")
    monkeypatch.setenv("TRUSTED_PROXIES", "2")

    config = AppConfig(_env_file=None)

    assert config.secret_key == "from-env"
    assert config.token_ttl_seconds == 120
    assert config.database.url == "sqlite:///elsewhere.db"
    assert config.security.allowed_origins == ["https://a.example", "https://b.example"]
    assert config.security.enable_rate_limit is False
    assert config.security.trusted_proxies == 2


@pytest.mark.parametrize("secret", ["", "   "])
def test_empty_secret_is_rejected(secret: str) -> None:
    with pytest.raises(ValidationError):
        AppConfig(secret_key=secret, _env_file=None)


@pytest.mark.parametrize("ttl", [0, -1])
def test_non_positive_ttl_is_rejected(ttl: int) -> None:
    with pytest.raises(ValidationError):
        AppConfig(token_ttl_seconds=ttl, _env_file=None)


@pytest.mark.parametrize("secret", ["dev", "too-short-for-production"])
def test_production_refuses_weak_secret(secret: str) -> None:
    with pytest.raises(SystemExit):
        AppConfig(app_env="production", secret_key=secret, _env_file=None)


def test_production_accepts_strong_secret() -> None:
    config = AppConfig(
        app_env="production",
        secret_key="x" * 48,
        security=SecurityConfig(
            allowed_origins=["https://app.example"], enable_hsts=True, _env_file=None
        ),
        _env_file=None,
    )

    assert config.is_production()
