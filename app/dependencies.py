from typing import Generator
from fastapi import Depends, HTTPException, status, Request, Header
from jose import JWTError
from app.core.config import settings
from app.core.security import verify_token
from app.schemas.user import UserAccount
from app.services.auth import AuthGateway
from app.stores import ComplianceStore, StoreBackend, get_backend


def get_store(backend: StoreBackend = Depends(get_backend)) -> Generator[ComplianceStore, None, None]:
    """Request-scoped store from whichever backend was selected at startup."""
    with backend.open() as store:
        yield store


def get_auth_gateway(
    backend: StoreBackend = Depends(get_backend),
    store: ComplianceStore = Depends(get_store)
) -> AuthGateway:
    return backend.auth_gateway(store)


def get_current_user(
    request: Request,
    gateway: AuthGateway = Depends(get_auth_gateway)
) -> UserAccount:
    """
    Extract and validate the JWT from the Authorization Bearer header and
    return the authenticated user.

    Raises:
        HTTPException 401: If the token is missing, invalid, or its session is gone
        HTTPException 403: If the user is inactive
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    authorization = request.headers.get("Authorization")
    if not authorization or not authorization.startswith("Bearer "):
        raise credentials_exception

    try:
        payload = verify_token(authorization.replace("Bearer ", "", 1))
        user_id = int(payload.get("id"))
    except (JWTError, TypeError, ValueError):
        raise credentials_exception

    user = gateway.resolve(user_id)
    if user is None:
        raise credentials_exception

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user"
        )

    return user


def verify_admin_key(api_key_header: str = Header(...)):
    """Verify the admin API key from the request header."""
    if api_key_header != settings.ADMIN_API_KEY:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid admin API key"
        )
