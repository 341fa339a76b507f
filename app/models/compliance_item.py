import enum
from sqlalchemy import Column, Integer, String, Text, ForeignKey, Enum, UniqueConstraint
from app.database import Base, TimestampMixin

class ComplianceType(str, enum.Enum):
    Required = "Required"
    Recommended = "Recommended"
    Optional = "Optional"

class ItemStatus(str, enum.Enum):
    Completed = "Completed"
    Pending = "Pending"

class ComplianceItem(Base, TimestampMixin):
    __tablename__ = "compliance_items"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    question_id = Column(Integer, ForeignKey("compliance_questions.id", ondelete="SET NULL"), nullable=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    type = Column(Enum(ComplianceType), nullable=False, default=ComplianceType.Required)
    status = Column(Enum(ItemStatus), nullable=False, default=ItemStatus.Pending)
    industry = Column(String, nullable=True)
    document_url = Column(String, nullable=True)
    official_site_url = Column(String, nullable=True)

    __table_args__ = (
        UniqueConstraint('user_id', 'question_id', name='uix_user_item_question'),
    )
