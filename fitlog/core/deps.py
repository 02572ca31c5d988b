from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from loguru import logger

from fitlog.core.errors import UnauthorizedError
from fitlog.core.security import decode_token

bearer = HTTPBearer(auto_error=False)

async def get_current_user_id(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> str:
    """Resolve the caller's user id from the bearer token's ``sub`` claim."""
    if creds is None or not creds.credentials:
        raise UnauthorizedError()

    try:
        data = decode_token(creds.credentials)
    except ValueError:
        logger.info("Rejected request with invalid bearer token")
        raise UnauthorizedError("Invalid token.")

    if data.get("type", "access") != "access":
        raise UnauthorizedError("Invalid token type.")

    user_id = data.get("sub")
    if not user_id or not isinstance(user_id, str):
        raise UnauthorizedError("Token has no subject.")

    return user_id
