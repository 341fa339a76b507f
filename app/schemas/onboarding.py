from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from enum import Enum
from app.models.user_response import ResponseValue


class Industry(str, Enum):
    TECHNOLOGY = "Technology"
    FINANCIAL_SERVICES = "Financial Services"
    HEALTHCARE = "Healthcare"
    EDUCATION = "Education"
    MANUFACTURING = "Manufacturing"
    AGRICULTURE = "Agriculture"
    TRANSPORT_LOGISTICS = "Transport & Logistics"
    CONSTRUCTION = "Construction"
    HOSPITALITY_TOURISM = "Hospitality & Tourism"
    MINING = "Mining"
    PROFESSIONAL_SERVICES = "Professional Services"


class IndustryOption(BaseModel):
    value: Industry
    label: str


class OnboardingSessionRecord(BaseModel):
    """Stored wizard state for one user"""
    user_id: int
    current_step: int = 1
    industry: Optional[str] = None
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AnswerIn(BaseModel):
    """A single answer submitted from a questionnaire step"""
    question_key: str = Field(..., min_length=1)
    response: ResponseValue


class AnswerRecord(BaseModel):
    """A stored answer joined with the scope of its question"""
    question_id: int
    question_key: str
    industry: Optional[str] = None
    response: ResponseValue


class SetIndustryRequest(BaseModel):
    """Request schema for step 1"""
    industry: Industry


class RecordResponsesRequest(BaseModel):
    """Request schema for saving answers for step 2 or 3"""
    step: int = Field(..., ge=2, le=3)
    responses: List[AnswerIn]


class OnboardingResponse(BaseModel):
    """Response schema for onboarding status"""
    current_step: int
    industry: Optional[str] = None
    completed_at: Optional[datetime] = None
    is_completed: bool
    view: str
    general_responses: List[AnswerIn] = []
    industry_responses: List[AnswerIn] = []
