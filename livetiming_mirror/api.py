from fastapi import APIRouter
from starlette.endpoints import HTTPEndpoint
from starlette.requests import Request

from livetiming_mirror.services.mirror_service import handle_request

router = APIRouter()


class MirrorEndpoint(HTTPEndpoint):
    """Sends every method to ``handle_request``, which owns the 405 reply."""

    async def dispatch(self) -> None:
        request = Request(self.scope, receive=self.receive)
        state = request.app.state
        response = await handle_request(request, state.settings, state.storage)
        await response(self.scope, self.receive, self.send)


# Class endpoints are routed as ASGI apps with no method filter.
router.add_route("/{path:path}", MirrorEndpoint, include_in_schema=False)
