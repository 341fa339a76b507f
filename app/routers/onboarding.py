from typing import List
from fastapi import APIRouter, Depends, Query
from app.dependencies import get_store, get_current_user
from app.schemas.onboarding import (
    OnboardingResponse,
    SetIndustryRequest,
    RecordResponsesRequest,
)
from app.schemas.question import Question
from app.schemas.user import UserAccount
from app.services.onboarding import onboarding_service
from app.stores import ComplianceStore
from app.core.logging_config import logger

router = APIRouter()


@router.get("", response_model=OnboardingResponse)
def get_onboarding_status(
    store: ComplianceStore = Depends(get_store),
    current_user: UserAccount = Depends(get_current_user)
):
    """
    Get current onboarding status for the user.
    Creates a new onboarding session if one doesn't exist.
    """
    return onboarding_service.get_state(store, current_user.id)


@router.put("/industry", response_model=OnboardingResponse)
def set_industry(
    data: SetIndustryRequest,
    store: ComplianceStore = Depends(get_store),
    current_user: UserAccount = Depends(get_current_user)
):
    """
    Step 1: save the selected industry on the session and profile.
    """
    return onboarding_service.set_industry(store, current_user.id, data.industry)


@router.get("/questions", response_model=List[Question])
def get_questions(
    step: int = Query(..., ge=2, le=3),
    store: ComplianceStore = Depends(get_store),
    current_user: UserAccount = Depends(get_current_user)
):
    """
    Questions for step 2 (general) or step 3 (industry-specific).
    """
    return onboarding_service.list_questions(store, current_user.id, step)


@router.post("/responses", response_model=OnboardingResponse)
def record_responses(
    data: RecordResponsesRequest,
    store: ComplianceStore = Depends(get_store),
    current_user: UserAccount = Depends(get_current_user)
):
    """
    Save answers for step 2 or 3. Answers to the same question overwrite earlier ones.
    """
    return onboarding_service.record_responses(store, current_user.id, data.step, data.responses)


@router.post("/advance", response_model=OnboardingResponse)
def advance_step(
    store: ComplianceStore = Depends(get_store),
    current_user: UserAccount = Depends(get_current_user)
):
    """
    Advance to the next step. Leaving step 3 completes onboarding and
    generates compliance items.
    """
    logger.info(f"Advancing onboarding for user {current_user.id}")
    return onboarding_service.advance(store, current_user.id)


@router.post("/retreat", response_model=OnboardingResponse)
def retreat_step(
    store: ComplianceStore = Depends(get_store),
    current_user: UserAccount = Depends(get_current_user)
):
    return onboarding_service.retreat(store, current_user.id)


@router.delete("", response_model=OnboardingResponse)
def reset_onboarding(
    store: ComplianceStore = Depends(get_store),
    current_user: UserAccount = Depends(get_current_user)
):
    """
    Delete the session, all answers and all generated items, and start over.
    """
    logger.info(f"Resetting onboarding for user {current_user.id}")
    return onboarding_service.reset(store, current_user.id)
