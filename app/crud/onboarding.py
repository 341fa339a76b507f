from sqlalchemy.orm import Session
from sqlalchemy import select, delete
from app.crud.base import dialect_insert
from app.models.onboarding import OnboardingSession


# Step constants
STEP_INDUSTRY = 1
STEP_GENERAL = 2
STEP_INDUSTRY_SPECIFIC = 3
STEP_COMPLETE = 4


class CRUDOnboarding:
    """CRUD operations for OnboardingSession model."""

    def get_or_create(self, db: Session, user_id: int) -> OnboardingSession:
        """
        Get the session for a user, creating one at step 1 if it doesn't exist.
        Uses INSERT...ON CONFLICT DO NOTHING to avoid race conditions.
        """
        stmt = dialect_insert(db, OnboardingSession).values(
            user_id=user_id,
            current_step=STEP_INDUSTRY
        ).on_conflict_do_nothing(index_elements=['user_id'])

        db.execute(stmt)
        db.commit()

        result = db.execute(
            select(OnboardingSession).where(OnboardingSession.user_id == user_id)
        )
        return result.scalar_one()

    def update(self, db: Session, user_id: int, **fields) -> OnboardingSession:
        session = self.get_or_create(db, user_id)
        for field, value in fields.items():
            setattr(session, field, value)
        db.commit()
        db.refresh(session)
        return session

    def delete(self, db: Session, user_id: int) -> None:
        """Delete the session. Does NOT commit."""
        db.execute(delete(OnboardingSession).where(OnboardingSession.user_id == user_id))


# Create singleton instance
onboarding = CRUDOnboarding()
