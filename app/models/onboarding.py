from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from app.database import Base, TimestampMixin


class OnboardingSession(Base, TimestampMixin):
    """
    Tracks wizard progress for each user.
    Uses user_id as primary key (1:1 relationship with users).
    """
    __tablename__ = "onboarding_sessions"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    current_step = Column(Integer, default=1, nullable=False)  # 1=industry, 2=general, 3=industry-specific, 4=complete
    industry = Column(String, nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
