"""Exception types surfaced by the webhook endpoints and the tracking store."""

from fastapi import Request
from fastapi.responses import JSONResponse


class ApiError(Exception):
    """A client-facing failure rendered as ``{"message", "status_code"}``."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def to_dict(self) -> dict:
        return {"message": self.message, "status_code": self.status_code}


class TrackingStoreError(Exception):
    """A tracking store mutation failed and was rolled back."""


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Render an ApiError as a JSON response with its status code."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
