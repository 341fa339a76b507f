from typing import List
from fastapi import APIRouter
from app.schemas.onboarding import IndustryOption
from app.services.question_bank import list_industries

router = APIRouter()


@router.get("", response_model=List[IndustryOption])
def get_industries():
    """The 11 industries offered on step 1."""
    return list_industries()
