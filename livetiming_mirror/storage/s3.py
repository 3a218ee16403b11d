import logging
from contextlib import closing
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from livetiming_mirror.errors import StorageError
from livetiming_mirror.models import Settings
from livetiming_mirror.storage.base import HttpMetadata, StorageDriver, StoredObject, normalize_etag

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


class S3Storage(StorageDriver):
    """S3-compatible bucket, also used for Cloudflare R2 via ``S3_ENDPOINT_URL``."""

    def __init__(self, settings: Settings, client=None):
        if client is None:
            client_args = {
                "region_name": settings.aws_region,
                "aws_access_key_id": settings.aws_access_key_id,
                "aws_secret_access_key": settings.aws_secret_access_key,
                "endpoint_url": settings.s3_endpoint_url,
            }
            client = boto3.client("s3", **{k: v for k, v in client_args.items() if v})
        self.client = client
        self.bucket_name = settings.bucket_name

    def get(self, key: str) -> Optional[StoredObject]:
        try:
            obj = self.client.get_object(Bucket=self.bucket_name, Key=key)
            with closing(obj["Body"]) as stream:
                body = stream.read()
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code in _NOT_FOUND_CODES:
                return None
            raise StorageError("get", key, code) from e
        except BotoCoreError as e:
            raise StorageError("get", key, str(e)) from e
        return StoredObject(
            key=key,
            body=body,
            etag=normalize_etag(obj.get("ETag", "")),
            http_metadata=HttpMetadata(
                content_type=obj.get("ContentType"),
                content_language=obj.get("ContentLanguage"),
                content_disposition=obj.get("ContentDisposition"),
                content_encoding=obj.get("ContentEncoding"),
                cache_control=obj.get("CacheControl"),
            ),
        )

    def put(self, key: str, data: bytes, metadata: HttpMetadata) -> str:
        params = {"Bucket": self.bucket_name, "Key": key, "Body": data}
        if metadata.content_type:
            params["ContentType"] = metadata.content_type
        try:
            response = self.client.put_object(**params)
        except (BotoCoreError, ClientError) as e:
            raise StorageError("put", key, str(e)) from e
        logger.debug("Stored s3://%s/%s (%d bytes)", self.bucket_name, key, len(data))
        return normalize_etag(response.get("ETag", ""))

    def delete(self, key: str) -> None:
        try:
            self.client.delete_object(Bucket=self.bucket_name, Key=key)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code in _NOT_FOUND_CODES:
                return
            raise StorageError("delete", key, code) from e
        except BotoCoreError as e:
            raise StorageError("delete", key, str(e)) from e
