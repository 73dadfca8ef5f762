"""GitHub webhook router with signature verification."""

from fastapi import APIRouter, Depends, Request, Response

from pr_reactor.config import get_settings
from pr_reactor.dependencies import get_tracking_store
from pr_reactor.github.handlers import handle_github_event
from pr_reactor.github.verification import verify_github_request
from pr_reactor.tracking.base import TrackingStore

router = APIRouter(prefix="", tags=["github"])


@router.post("/github/events")
async def github_events(
    request: Request,
    body: bytes = Depends(verify_github_request),
    store: TrackingStore = Depends(get_tracking_store),
) -> Response:
    """Receive GitHub webhook deliveries.

    Any authenticated, parseable delivery gets an empty 200, including event
    types we do not track and deliveries whose reactions failed downstream.
    """
    await handle_github_event(
        request.headers.get("X-GitHub-Event"),
        body,
        store,
        get_settings(),
    )
    return Response(status_code=200)
