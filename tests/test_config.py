import importlib

import pytest

from livetiming_mirror.config import load_settings
from livetiming_mirror.errors import ConfigurationError
from livetiming_mirror.main import create_app


def test_defaults():
    settings = load_settings({"AUTH_KEY_SECRET": "secret"})

    assert settings.auth_key_secret == "secret"
    assert settings.max_cache_age == 3600
    assert settings.storage_driver == "local"


def test_environment_values():
    settings = load_settings(
        {
            "AUTH_KEY_SECRET": "secret",
            "MAX_CACHE_AGE": "120",
            "STORAGE_DRIVER": "S3",
            "LIVETIMING_BUCKET": "timing",
            "S3_ENDPOINT_URL": "https://account.r2.cloudflarestorage.com",
            "MINIO_SECURE": "true",
        }
    )

    assert settings.max_cache_age == 120
    assert settings.storage_driver == "s3"
    assert settings.bucket_name == "timing"
    assert settings.s3_endpoint_url == "https://account.r2.cloudflarestorage.com"
    assert settings.minio_secure is True
    assert settings.aws_region is None


@pytest.mark.parametrize("env", [{}, {"AUTH_KEY_SECRET": ""}])
def test_missing_secret_fails(env):
    with pytest.raises(ConfigurationError):
        load_settings(env)


@pytest.mark.parametrize("value", ["soon", "-1", "1.5"])
def test_invalid_cache_age_fails(value):
    with pytest.raises(ConfigurationError):
        load_settings({"AUTH_KEY_SECRET": "secret", "MAX_CACHE_AGE": value})


def test_unknown_storage_driver_fails():
    with pytest.raises(ConfigurationError):
        load_settings({"AUTH_KEY_SECRET": "secret", "STORAGE_DRIVER": "ftp"})


def test_create_app_refuses_to_start_without_secret(monkeypatch):
    monkeypatch.delenv("AUTH_KEY_SECRET", raising=False)

    with pytest.raises(ConfigurationError):
        create_app()


def test_create_app_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("AUTH_KEY_SECRET", "secret")
    monkeypatch.setenv("STORAGE_DRIVER", "local")
    monkeypatch.setenv("LOCAL_STORAGE_PATH", str(tmp_path))

    app = create_app()

    assert app.state.settings.local_storage_path == str(tmp_path)
    assert app.state.storage.root == str(tmp_path)


def test_config_import_ignores_bad_port(monkeypatch):
    from livetiming_mirror import config

    monkeypatch.setenv("PORT", "not-a-port")

    reloaded = importlib.reload(config)

    assert reloaded.load_settings({"AUTH_KEY_SECRET": "secret"}).auth_key_secret == "secret"
