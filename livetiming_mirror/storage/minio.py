from io import BytesIO
from typing import Optional

from minio import Minio
from minio.error import MinioException, S3Error

from livetiming_mirror.errors import StorageError
from livetiming_mirror.models import Settings
from livetiming_mirror.storage.base import HttpMetadata, StorageDriver, StoredObject, normalize_etag


class MinIOStorage(StorageDriver):
    def __init__(self, settings: Settings, client=None):
        if client is None:
            # Combine endpoint and port if port is specified
            endpoint = settings.minio_endpoint or "localhost"
            if settings.minio_port:
                endpoint = f"{endpoint}:{settings.minio_port}"
            client = Minio(
                endpoint=endpoint,
                access_key=settings.minio_access_key,
                secret_key=settings.minio_secret_key,
                secure=settings.minio_secure,
            )
        self.client = client
        self.bucket_name = settings.bucket_name

    def get(self, key: str) -> Optional[StoredObject]:
        response = None
        try:
            response = self.client.get_object(bucket_name=self.bucket_name, object_name=key)
            body = response.read()
            headers = response.headers
        except S3Error as e:
            if e.code in ("NoSuchKey", "NoSuchObject"):
                return None
            raise StorageError("get", key, e.code) from e
        except MinioException as e:
            raise StorageError("get", key, str(e)) from e
        finally:
            if response is not None:
                response.close()
                response.release_conn()
        return StoredObject(
            key=key,
            body=body,
            etag=normalize_etag(headers.get("ETag") or ""),
            http_metadata=HttpMetadata(
                content_type=headers.get("Content-Type"),
                content_language=headers.get("Content-Language"),
                content_disposition=headers.get("Content-Disposition"),
                content_encoding=headers.get("Content-Encoding"),
                cache_control=headers.get("Cache-Control"),
            ),
        )

    def put(self, key: str, data: bytes, metadata: HttpMetadata) -> str:
        try:
            result = self.client.put_object(
                bucket_name=self.bucket_name,
                object_name=key,
                data=BytesIO(data),
                length=len(data),
                content_type=metadata.content_type or "application/octet-stream",
            )
        except MinioException as e:
            raise StorageError("put", key, str(e)) from e
        return normalize_etag(result.etag or "")

    def delete(self, key: str) -> None:
        try:
            self.client.remove_object(bucket_name=self.bucket_name, object_name=key)
        except MinioException as e:
            raise StorageError("delete", key, str(e)) from e
