from fastapi import APIRouter, Depends, HTTPException, status
from app.dependencies import get_store, get_current_user, get_auth_gateway
from app.schemas.user import UserAccount, UserRead, ProfileUpdate
from app.services.auth import AuthGateway
from app.stores import ComplianceStore
from app.core.logging_config import logger

router = APIRouter()


@router.get("", response_model=UserRead)
def get_profile(
    current_user: UserAccount = Depends(get_current_user),
    gateway: AuthGateway = Depends(get_auth_gateway)
):
    return gateway.get_session(current_user)


@router.patch("", response_model=UserRead)
def update_profile(
    data: ProfileUpdate,
    store: ComplianceStore = Depends(get_store),
    current_user: UserAccount = Depends(get_current_user),
    gateway: AuthGateway = Depends(get_auth_gateway)
):
    """
    Update display name and company.

    Raises:
        HTTPException 404: If the user has no profile
    """
    # Make sure the profile exists before updating it
    gateway.get_session(current_user)
    updated = store.update_profile(current_user.id, **data.model_dump(exclude_unset=True))
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    logger.info(f"Profile updated for user {current_user.id}")
    return gateway.get_session(current_user)
