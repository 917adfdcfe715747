"""
Unit tests for Settings.

The signing secret has no default; loading settings without it must fail.
"""

import pydantic
import pytest

from src.config.settings import Settings, get_settings


class TestSettings:
    def test_missing_secret_is_fatal(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("REGISTRATION_SECRET", raising=False)
        with pytest.raises(pydantic.ValidationError):
            Settings(_env_file=None)

    def test_secret_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REGISTRATION_SECRET", "from-env-secret")
        settings = Settings(_env_file=None)
        assert settings.registration_secret.get_secret_value() == "from-env-secret"

    def test_secret_not_in_repr(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REGISTRATION_SECRET", "from-env-secret")
        assert "from-env-secret" not in repr(Settings(_env_file=None))

    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)
        assert settings.otp_ttl_seconds == 600
        assert settings.link_ttl_seconds == 900
        assert settings.bcrypt_cost == 10
        assert settings.mail_domain == "nitkkr.ac.in"
        assert settings.keystore_backend == "redis"

    def test_backend_choice_validated(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KEYSTORE_BACKEND", "memcached")
        with pytest.raises(pydantic.ValidationError):
            Settings(_env_file=None)

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()
