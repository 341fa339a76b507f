from abc import ABC, abstractmethod
from typing import Optional
from fastapi import HTTPException, status
from app.core.local_storage import LocalStorage
from app.core.logging_config import logger
from app.core.security import create_access_token, get_password_hash, verify_password
from app.schemas.auth import AuthResponse
from app.schemas.user import UserAccount, UserRead
from app.stores.base import ComplianceStore
from app.stores.local import USER_KEY

DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "password"
DEMO_FULL_NAME = "Demo User"
DEMO_COMPANY = "Demo Company"


def default_full_name(email: str) -> str:
    return email.split("@")[0] or "User"


class AuthGateway(ABC):
    """
    Identity operations shared by both backends.

    Subclasses decide how credentials are checked and how a token's
    identity is resolved back to a user.
    """

    def __init__(self, store: ComplianceStore):
        self.store = store

    def sign_up(self, email: str, password: str, full_name: str) -> AuthResponse:
        """
        Create identity and profile, then sign the new user in.

        Raises:
            HTTPException 400: If the email is already registered
        """
        if self.store.get_user_by_email(email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User with this email already exists"
            )
        try:
            user = self.store.create_user(
                email=email,
                hashed_password=get_password_hash(password),
                full_name=full_name,
            )
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
        logger.info(f"Created account {user.id} for {email}")
        return self._issue(user)

    @abstractmethod
    def sign_in(self, email: str, password: str) -> AuthResponse:
        """Check credentials and issue a token."""

    def sign_out(self, user: UserAccount) -> None:
        logger.info(f"User {user.id} signed out")

    def resolve(self, user_id: int) -> Optional[UserAccount]:
        """Map a token's identity to a live user, or None if the session is gone."""
        return self.store.get_user(user_id)

    def get_session(self, user: UserAccount) -> UserRead:
        """
        Current user with profile. Creates the profile if it's missing.
        """
        profile = self.store.get_profile(user.id)
        if profile is None:
            profile = self.store.create_profile(user.id, default_full_name(user.email))
            logger.info(f"Created missing profile for user {user.id}")
        return UserRead(
            id=user.id,
            email=user.email,
            full_name=profile.full_name,
            company=profile.company,
            industry=profile.industry,
        )

    def _issue(self, user: UserAccount) -> AuthResponse:
        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Inactive user"
            )
        return AuthResponse(
            user=self.get_session(user),
            access_token=create_access_token(user.id, user.email),
        )


class PasswordAuthGateway(AuthGateway):
    """Email and bcrypt password against the users table."""

    def sign_in(self, email: str, password: str) -> AuthResponse:
        """
        Raises:
            HTTPException 401: If the credentials don't match
            HTTPException 403: If the account is inactive
        """
        user = self.store.get_user_by_email(email)
        if not user or not verify_password(password, user.hashed_password):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect email or password",
            )
        return self._issue(user)


class DemoAuthGateway(AuthGateway):
    """
    Stand-in gateway for local mode.

    Only the demo credential signs in. The signed-in user object is kept
    under the "user" storage key; signing out removes it, which also
    invalidates any token issued for it.
    """

    def __init__(self, store: ComplianceStore, storage: LocalStorage):
        super().__init__(store)
        self.storage = storage

    def sign_up(self, email: str, password: str, full_name: str) -> AuthResponse:
        result = super().sign_up(email, password, full_name)
        self._remember(result.user)
        return result

    def sign_in(self, email: str, password: str) -> AuthResponse:
        if email.lower() != DEMO_EMAIL or password != DEMO_PASSWORD:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
            )
        user = self.store.get_user_by_email(DEMO_EMAIL)
        if user is None:
            user = self.store.create_user(
                email=DEMO_EMAIL,
                hashed_password=get_password_hash(DEMO_PASSWORD),
                full_name=DEMO_FULL_NAME,
                company=DEMO_COMPANY,
            )
        result = self._issue(user)
        self._remember(result.user)
        return result

    def sign_out(self, user: UserAccount) -> None:
        self.storage.remove(USER_KEY)
        super().sign_out(user)

    def resolve(self, user_id: int) -> Optional[UserAccount]:
        stored = self.storage.get(USER_KEY)
        if not isinstance(stored, dict) or stored.get("id") != user_id:
            return None
        return self.store.get_user(user_id)

    def _remember(self, user: UserRead) -> None:
        self.storage.set(USER_KEY, user.model_dump(mode="json"))
