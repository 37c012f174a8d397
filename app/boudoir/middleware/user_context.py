from jose import JWTError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from app.boudoir.core.security import decode_token


class UserContextMiddleware(BaseHTTPMiddleware):
    """Attaches the bearer token's user and role to the request for logging.

    Authorization is still enforced by the route dependencies; an invalid
    token only leaves the context anonymous here.
    """

    async def dispatch(self, request: Request, call_next):
        request.state.user_id = None
        request.state.role = None

        auth_header = request.headers.get("Authorization")
        if auth_header and auth_header.lower().startswith("bearer "):
            token = auth_header.split(" ", 1)[1]
            try:
                payload = decode_token(token)
                request.state.user_id = payload.get("sub")
                request.state.role = payload.get("role")
            except JWTError:
                pass

        return await call_next(request)
