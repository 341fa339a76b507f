from fastapi import APIRouter, Depends, status
from app.dependencies import get_auth_gateway, get_current_user
from app.schemas.auth import SignUpRequest, SignInRequest, AuthResponse
from app.schemas.user import UserAccount, UserRead
from app.services.auth import AuthGateway
from app.core.logging_config import logger

router = APIRouter()


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def sign_up(
    data: SignUpRequest,
    gateway: AuthGateway = Depends(get_auth_gateway)
):
    """
    Create an account and its profile, and return an access token.

    Raises:
        HTTPException 400: If the email is already registered
    """
    logger.info(f"Sign up requested for {data.email}")
    return gateway.sign_up(data.email, data.password, data.full_name)


@router.post("/login", response_model=AuthResponse)
def sign_in(
    credentials: SignInRequest,
    gateway: AuthGateway = Depends(get_auth_gateway)
):
    """
    Exchange email and password for an access token.

    Raises:
        HTTPException 401: If the credentials are invalid
    """
    try:
        return gateway.sign_in(credentials.email, credentials.password)
    except Exception as e:
        logger.error(f"Login failed for {credentials.email}: {type(e).__name__}")
        raise


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def sign_out(
    current_user: UserAccount = Depends(get_current_user),
    gateway: AuthGateway = Depends(get_auth_gateway)
):
    gateway.sign_out(current_user)
    return None


@router.get("/session", response_model=UserRead)
def get_session(
    current_user: UserAccount = Depends(get_current_user),
    gateway: AuthGateway = Depends(get_auth_gateway)
):
    """
    Current user with profile. A missing profile is created on the fly.
    """
    return gateway.get_session(current_user)
