from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base, TimestampMixin


class Profile(Base, TimestampMixin):
    """
    Display data for a user. Shares its primary key with the identity
    (1:1 with users).
    """
    __tablename__ = "profiles"

    id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    full_name = Column(String, nullable=False)
    company = Column(String, nullable=True)
    industry = Column(String, nullable=True)

    user = relationship("User", back_populates="profile")
