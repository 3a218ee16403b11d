import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from livetiming_mirror.api import router
from livetiming_mirror.config import load_settings
from livetiming_mirror.errors import StorageError
from livetiming_mirror.models import Settings
from livetiming_mirror.services.mirror_service import get_storage
from livetiming_mirror.storage.base import StorageDriver

logger = logging.getLogger(__name__)


async def storage_error_handler(request: Request, exc: StorageError) -> PlainTextResponse:
    logger.error("%s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    return PlainTextResponse("Internal Server Error", status_code=500)


def create_app(settings: Optional[Settings] = None, storage: Optional[StorageDriver] = None) -> FastAPI:
    """Build the mirror application.

    Settings are loaded from the environment unless given, so a missing
    ``AUTH_KEY_SECRET`` stops the process here, before any request is served.
    """
    if settings is None:
        settings = load_settings()
    if storage is None:
        storage = get_storage(settings)

    app = FastAPI(
        title="FastF1 Live Timing Mirror",
        description="Authenticated GET/PUT/DELETE proxy in front of a blob store.",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.storage = storage
    app.add_exception_handler(StorageError, storage_error_handler)
    app.include_router(router)
    return app
