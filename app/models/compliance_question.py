from sqlalchemy import Column, Integer, String, Text
from app.database import Base, TimestampMixin


class ComplianceQuestion(Base, TimestampMixin):
    """
    Reference question from the question bank.
    A null industry means the question applies to every industry.
    """
    __tablename__ = "compliance_questions"

    id = Column(Integer, primary_key=True, index=True)
    question_key = Column(String, unique=True, index=True, nullable=False)
    question = Column(Text, nullable=False)
    industry = Column(String, nullable=True, index=True)
    compliance_requirement = Column(String, nullable=False)
    implementation_steps = Column(Text, nullable=False)
    documentation_required = Column(Text, nullable=False)
    submission_details = Column(Text, nullable=False)
    deadlines_renewals = Column(Text, nullable=False)
    law_requirement = Column(String, nullable=False)
