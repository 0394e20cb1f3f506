import secrets

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

basic = HTTPBasic(realm="strings")


async def require_basic_auth(request: Request, credentials: HTTPBasicCredentials = Depends(basic)):
    """Require the configured Basic auth username/password."""

    settings = request.app.state.settings
    user_ok = secrets.compare_digest(credentials.username.encode(), settings.auth_username.encode())
    pass_ok = secrets.compare_digest(credentials.password.encode(), settings.auth_password.encode())

    if user_ok and pass_ok:
        return credentials.username

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid credentials",
        headers={"WWW-Authenticate": 'Basic realm="strings"'},
    )
