"""Unit tests – ElasticSettings and the env loader."""
from __future__ import annotations

import dataclasses

import pytest

from esfilter.config import (
    ConfigError,
    ElasticSettings,
    EnvSettingsLoader,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    Settings,
)


class TestSettingsFields:
    def test_prefix_is_class_level(self) -> None:
        assert dataclasses.fields(Settings) == ()
        assert "_prefix" not in {f.name for f in dataclasses.fields(ElasticSettings)}
        assert ElasticSettings._prefix == "ELASTIC"

    def test_field_order(self) -> None:
        assert [f.name for f in dataclasses.fields(ElasticSettings)] == [
            "urls",
            "username",
            "password",
            "verify_certs",
            "ca_certs",
            "request_timeout",
            "retry_backoff_ms",
        ]


class TestEnvLoading:
    def test_loads_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ELASTIC_URLS", "http://es1:9200, https://es2:9200")
        monkeypatch.setenv("ELASTIC_USERNAME", "elastic")
        monkeypatch.setenv("ELASTIC_PASSWORD", "secret")
        monkeypatch.setenv("ELASTIC_VERIFY_CERTS", "false")
        monkeypatch.setenv("ELASTIC_REQUEST_TIMEOUT", "2.5")
        monkeypatch.setenv("ELASTIC_RETRY_BACKOFF_MS", "5,50,500")

        settings = EnvSettingsLoader().load(ElasticSettings)

        assert settings.urls == ["http://es1:9200", "https://es2:9200"]
        assert settings.username == "elastic"
        assert settings.password == "secret"
        assert settings.verify_certs is False
        assert settings.request_timeout == 2.5
        assert settings.retry_backoff_ms == [5, 50, 500]

    def test_defaults(self) -> None:
        settings = EnvSettingsLoader({"ELASTIC_URLS": "http://es:9200"}).load(ElasticSettings)
        assert settings.verify_certs is True
        assert settings.request_timeout == 10.0
        assert settings.retry_backoff_ms == [10, 100]
        assert settings.username is None

    def test_missing_urls(self) -> None:
        with pytest.raises(MissingRequiredSettingError) as exc_info:
            EnvSettingsLoader({}).load(ElasticSettings)
        assert exc_info.value.setting_name == "ELASTIC_URLS"

    def test_unparseable_number(self) -> None:
        with pytest.raises(ConfigError):
            EnvSettingsLoader(
                {"ELASTIC_URLS": "http://es:9200", "ELASTIC_REQUEST_TIMEOUT": "soon"}
            ).load(ElasticSettings)

    def test_validation_error_not_wrapped(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            EnvSettingsLoader({"ELASTIC_URLS": "es:9200"}).load(ElasticSettings)


class TestValidation:
    def test_empty_urls(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            ElasticSettings(urls=[])

    def test_url_scheme(self) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            ElasticSettings(urls=["ftp://es"])
        assert exc_info.value.setting_name == "urls"

    def test_credentials_together(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            ElasticSettings(urls=["http://es"], username="elastic")

    def test_negative_timeout(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            ElasticSettings(urls=["http://es"], request_timeout=-1)

    def test_negative_tick(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            ElasticSettings(urls=["http://es"], retry_backoff_ms=[10, -1])

    def test_error_code(self) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            ElasticSettings(urls=[])
        assert exc_info.value.code == "invalid_setting_value"


class TestLogDict:
    def test_password_masked(self) -> None:
        settings = ElasticSettings(urls=["http://es"], username="elastic", password="secret")
        logged = settings.as_log_dict()
        assert logged["password"] == "***"
        assert logged["username"] == "elastic"
        assert logged["urls"] == ["http://es"]

    def test_absent_password_left_as_none(self) -> None:
        assert ElasticSettings(urls=["http://es"]).as_log_dict()["password"] is None
