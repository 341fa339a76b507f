from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, func
from app.models.user import User
from app.models.profile import Profile


class CRUDUser:
    """
    CRUD operations for User and its Profile.

    Users are looked up globally (login, token resolution), so this class
    does not inherit the user-scoped CRUDBase.
    """

    def __init__(self):
        self.model = User

    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        # Same rule as the local store: emails match case-insensitively
        stmt = select(User).where(func.lower(User.email) == email.lower())
        result = db.execute(stmt)
        return result.scalar_one_or_none()

    def get(self, db: Session, user_id: int) -> Optional[User]:
        stmt = select(User).where(User.id == user_id)
        result = db.execute(stmt)
        return result.scalar_one_or_none()

    def create_with_profile(
        self,
        db: Session,
        *,
        email: str,
        hashed_password: str,
        full_name: str,
        company: Optional[str] = None
    ) -> User:
        """
        Create an identity and its profile atomically.

        Raises:
            ValueError: If a user with this email already exists
        """
        try:
            db_user = User(email=email, hashed_password=hashed_password, is_active=True)
            db.add(db_user)
            db.flush()  # Get user.id without committing

            db.add(Profile(id=db_user.id, full_name=full_name, company=company))

            # Commit identity and profile together
            db.commit()
            db.refresh(db_user)
            return db_user
        except IntegrityError as e:
            db.rollback()
            if "unique" in str(e).lower():
                raise ValueError(f"User with email {email} already exists")
            raise e

    def get_profile(self, db: Session, user_id: int) -> Optional[Profile]:
        result = db.execute(select(Profile).where(Profile.id == user_id))
        return result.scalar_one_or_none()

    def create_profile(self, db: Session, *, user_id: int, full_name: str) -> Profile:
        profile = Profile(id=user_id, full_name=full_name)
        db.add(profile)
        db.commit()
        db.refresh(profile)
        return profile

    def update_profile(self, db: Session, *, profile: Profile, **fields) -> Profile:
        for field, value in fields.items():
            setattr(profile, field, value)
        db.commit()
        db.refresh(profile)
        return profile


# Create singleton instance
user = CRUDUser()
