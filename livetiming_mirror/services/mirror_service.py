import asyncio
import logging
from urllib.parse import quote

from fastapi import Request, Response
from fastapi.responses import PlainTextResponse

from livetiming_mirror.auth import is_authenticated
from livetiming_mirror.config import PRESHARED_AUTH_HEADER_KEY, STATIC_PREFIX
from livetiming_mirror.models import SUPPORTED_METHODS, Method, Settings
from livetiming_mirror.storage.base import HttpMetadata, StorageDriver
from livetiming_mirror.storage.local import LocalStorage
from livetiming_mirror.storage.minio import MinIOStorage
from livetiming_mirror.storage.s3 import S3Storage

logger = logging.getLogger(__name__)


def get_storage(settings: Settings) -> StorageDriver:
    logger.info("Using %s storage", settings.storage_driver)
    if settings.storage_driver == "minio":
        return MinIOStorage(settings)
    if settings.storage_driver == "s3":
        return S3Storage(settings)
    return LocalStorage(settings.local_storage_path)


def content_type_for_key(key: str) -> str:
    if key.endswith(".jsonStream"):
        return "application/octet-stream"
    if key.endswith(".json"):
        return "application/json"
    return ""


def method_not_allowed() -> Response:
    return PlainTextResponse(
        "Method Not Allowed",
        status_code=405,
        headers={"Allow": ", ".join(m.value for m in SUPPORTED_METHODS)},
    )


def request_path(request: Request) -> str:
    """Return the path still percent-encoded, so ``%3F`` or ``%2F`` stay part of the key."""
    raw_path = request.scope.get("raw_path")
    if raw_path:
        return raw_path.decode("latin-1")
    return quote(request.scope["path"])


async def handle_request(request: Request, settings: Settings, storage: StorageDriver) -> Response:
    path = request_path(request)
    if not path.startswith(STATIC_PREFIX):
        return PlainTextResponse("Bad Request", status_code=400)

    key = path[len(STATIC_PREFIX):]

    method = Method.parse(request.method)
    if method is None:
        return method_not_allowed()

    if method.requires_auth:
        token = request.headers.get(PRESHARED_AUTH_HEADER_KEY, "")
        if not is_authenticated(token, settings.auth_key_secret):
            logger.warning("Rejected unauthenticated %s for %r", method.value, key)
            return PlainTextResponse("Unauthorized", status_code=401)

    if method is Method.PUT:
        return await _put(request, key, storage)
    if method is Method.GET:
        return await _get(key, settings, storage)
    if method is Method.DELETE:
        await asyncio.to_thread(storage.delete, key)
        logger.info("Deleted %r", key)
        return PlainTextResponse("Deleted!")
    return method_not_allowed()


async def _put(request: Request, key: str, storage: StorageDriver) -> Response:
    # ensure correct content type explicitly
    metadata = HttpMetadata(content_type=content_type_for_key(key) or None)
    body = await request.body()
    etag = await asyncio.to_thread(storage.put, key, body, metadata)
    logger.info("Put %r (%d bytes, etag %s)", key, len(body), etag)
    return PlainTextResponse(f"Put {key} successfully!")


async def _get(key: str, settings: Settings, storage: StorageDriver) -> Response:
    if key == "":
        return PlainTextResponse("Status OK")

    obj = await asyncio.to_thread(storage.get, key)
    if obj is None:
        return PlainTextResponse("Object Not Found", status_code=404)

    headers = {}
    obj.http_metadata.write_headers(headers)
    headers["etag"] = obj.http_etag
    headers["Cache-Control"] = f"public, max-age={settings.max_cache_age}"
    return Response(content=obj.body, headers=headers)
