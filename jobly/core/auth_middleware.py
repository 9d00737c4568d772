"""Starlette middleware that turns an ``Authorization`` header into a
request-scoped identity.

A missing, malformed or badly signed token is not an error here: the request
carries on anonymously and the route guards in ``jobly.core.deps`` decide
whether that is acceptable.
"""
import logging
import re
from typing import Optional

from jose import JWTError
from pydantic import ValidationError
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from jobly.core.security import decode_token
from jobly.schemas.user import Identity

logger = logging.getLogger(__name__)

_BEARER_PREFIX = re.compile(r"^bearer ", re.IGNORECASE)


class AuthMiddleware(BaseHTTPMiddleware):
    """Verify the bearer token, if any, and store the identity on ``request.state.user``."""

    def __init__(self, app, secret_key: str, algorithm: str = "HS256") -> None:  # type: ignore[override]
        super().__init__(app)
        self.secret_key = secret_key
        self.algorithm = algorithm

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:  # type: ignore[override]
        request.state.user = self.authenticate(request.headers.get("Authorization"))
        return await call_next(request)

    def authenticate(self, auth_header: Optional[str]) -> Optional[Identity]:
        if not auth_header:
            return None

        token = _BEARER_PREFIX.sub("", auth_header).strip()
        try:
            payload = decode_token(token, self.secret_key, self.algorithm)
            return Identity.model_validate(payload)
        except (JWTError, ValidationError) as e:
            logger.info(f"Ignoring invalid bearer token: {e.__class__.__name__}")
            return None
