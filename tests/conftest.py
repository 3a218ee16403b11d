import pytest
from fastapi.testclient import TestClient

from livetiming_mirror.config import PRESHARED_AUTH_HEADER_KEY
from livetiming_mirror.main import create_app
from livetiming_mirror.models import Settings
from livetiming_mirror.storage.local import LocalStorage

SECRET = "s3cr3t-mirror-key"


@pytest.fixture
def settings(tmp_path):
    return Settings(auth_key_secret=SECRET, local_storage_path=str(tmp_path))


@pytest.fixture
def storage(settings):
    return LocalStorage(settings.local_storage_path)


@pytest.fixture
def client(settings, storage):
    return TestClient(create_app(settings, storage))


@pytest.fixture
def auth_headers():
    return {PRESHARED_AUTH_HEADER_KEY: SECRET}
