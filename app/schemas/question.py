from pydantic import BaseModel
from typing import Optional


class QuestionBase(BaseModel):
    question_key: str
    question: str
    industry: Optional[str] = None
    compliance_requirement: str
    implementation_steps: str
    documentation_required: str
    submission_details: str
    deadlines_renewals: str
    law_requirement: str


class QuestionCreate(QuestionBase):
    pass


class Question(QuestionBase):
    id: int

    class Config:
        from_attributes = True


class SeedQuestionsResponse(BaseModel):
    seeded: int
