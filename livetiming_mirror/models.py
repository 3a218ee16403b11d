from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class Method(str, Enum):
    GET = "GET"
    PUT = "PUT"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, value: str) -> Optional["Method"]:
        """Return the matching method, or ``None`` for anything unsupported."""
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def requires_auth(self) -> bool:
        return self in (Method.PUT, Method.DELETE)


SUPPORTED_METHODS = [Method.GET, Method.PUT, Method.DELETE]


class Settings(BaseModel):
    auth_key_secret: str = Field(min_length=1)
    max_cache_age: int = Field(default=3600, ge=0)
    storage_driver: str = "local"
    local_storage_path: str = "/tmp/livetiming-mirror"
    bucket_name: str = "livetiming"

    # S3 / Cloudflare R2
    aws_region: Optional[str] = None
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    s3_endpoint_url: Optional[str] = None

    # MinIO
    minio_endpoint: Optional[str] = None
    minio_port: Optional[str] = None
    minio_access_key: Optional[str] = None
    minio_secret_key: Optional[str] = None
    minio_secure: bool = False

    model_config = {"frozen": True}

    @field_validator("storage_driver")
    @classmethod
    def _known_driver(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in ("local", "s3", "minio"):
            raise ValueError(f"unknown storage driver {value!r}")
        return value
