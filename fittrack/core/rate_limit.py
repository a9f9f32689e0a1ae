"""Rate limiting using SlowAPI."""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from fittrack.config import get_settings


def get_request_identifier(request: Request) -> str:
    """Key requests by subject when the path names one, otherwise by client address."""
    subject_id = request.path_params.get("subject_id")
    if subject_id is not None:
        return f"subject:{subject_id}"
    return get_remote_address(request)


limiter = Limiter(
    key_func=get_request_identifier,
    default_limits=[get_settings().rate_limit_default],
)


async def rate_limit_exceeded_handler(
    request: Request,
    exc: RateLimitExceeded,
) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={
            "error": {
                "code": "RATE_LIMIT_ERROR",
                "message": f"Rate limit exceeded: {exc.detail}",
                "details": {"retry_after": getattr(exc, "retry_after", None)},
            }
        },
    )
