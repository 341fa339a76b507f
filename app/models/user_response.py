import enum
from sqlalchemy import Column, Integer, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from app.database import Base, TimestampMixin

class ResponseValue(str, enum.Enum):
    Yes = "Yes"
    No = "No"
    NotApplicable = "NotApplicable"

class UserResponse(Base, TimestampMixin):
    __tablename__ = "user_responses"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    question_id = Column(Integer, ForeignKey("compliance_questions.id", ondelete="CASCADE"), nullable=False)
    response = Column(Enum(ResponseValue), nullable=False)

    question = relationship("ComplianceQuestion")

    __table_args__ = (
        UniqueConstraint('user_id', 'question_id', name='uix_user_response_question'),
    )
