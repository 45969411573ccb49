"""
Rate limiting configuration using slowapi.

Only court mutations (add / delete / update) are limited, at 30/min.
Reads are not limited.

The limiter keys on client IP by default.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from court_admin.models import ErrorResponse

limiter = Limiter(key_func=get_remote_address)

# Named rate string for use in @limiter.limit() decorators
WRITE = "30/minute"


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    body = ErrorResponse(code=-1, msg=f"rate limit exceeded: {exc.detail}")
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content=body.model_dump(exclude_none=True),
    )
