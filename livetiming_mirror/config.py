import os
from typing import Mapping, Optional

from pydantic import ValidationError

from livetiming_mirror.errors import ConfigurationError
from livetiming_mirror.models import Settings

PRESHARED_AUTH_HEADER_KEY = "X-FASTF1-LIVETIMING-MIRROR-AUTH"
STATIC_PREFIX = "/static/"
DEFAULT_CACHE_MAX_AGE = 3600

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
HOST = os.getenv("HOST", "0.0.0.0")


def _optional(env: Mapping[str, str], name: str) -> Optional[str]:
    value = env.get(name, "").strip()
    return value or None


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build validated settings from environment variables.

    Raises ``ConfigurationError`` when the shared secret is missing or any
    value fails validation, so the service refuses to start instead of
    serving unauthenticated writes.
    """
    env = os.environ if environ is None else environ

    secret = env.get("AUTH_KEY_SECRET")
    if not secret:
        raise ConfigurationError("AUTH_KEY_SECRET must be set to a non-empty value")

    raw_max_age = env.get("MAX_CACHE_AGE", "").strip()
    try:
        max_cache_age = int(raw_max_age) if raw_max_age else DEFAULT_CACHE_MAX_AGE
    except ValueError as e:
        raise ConfigurationError(f"MAX_CACHE_AGE must be an integer, got {raw_max_age!r}") from e

    try:
        return Settings(
            auth_key_secret=secret,
            max_cache_age=max_cache_age,
            storage_driver=env.get("STORAGE_DRIVER", "local"),
            local_storage_path=env.get("LOCAL_STORAGE_PATH", "/tmp/livetiming-mirror"),
            bucket_name=env.get("LIVETIMING_BUCKET", "livetiming"),
            aws_region=_optional(env, "AWS_REGION"),
            aws_access_key_id=_optional(env, "AWS_ACCESS_KEY_ID"),
            aws_secret_access_key=_optional(env, "AWS_SECRET_ACCESS_KEY"),
            s3_endpoint_url=_optional(env, "S3_ENDPOINT_URL"),
            minio_endpoint=_optional(env, "MINIO_ENDPOINT"),
            minio_port=_optional(env, "MINIO_PORT"),
            minio_access_key=_optional(env, "MINIO_ACCESS_KEY"),
            minio_secret_key=_optional(env, "MINIO_SECRET_KEY"),
            minio_secure=env.get("MINIO_SECURE", "false").lower() == "true",
        )
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e
