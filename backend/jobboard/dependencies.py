from fastapi import Header

from jobboard.errors import AuthenticationFailed
from jobboard.services.admin_service import admin_service


async def require_admin(authorization: str | None = Header(None)):
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationFailed("Missing bearer token")
    token = authorization[7:]
    if not admin_service.validate_token(token):
        raise AuthenticationFailed("Admin session is invalid or expired")
    admin_service.touch(token)
    return token
