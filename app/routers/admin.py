from fastapi import APIRouter, Depends
from app.dependencies import get_store, verify_admin_key
from app.schemas.question import SeedQuestionsResponse
from app.services.question_bank import seed_default_questions
from app.stores import ComplianceStore

router = APIRouter()


@router.post("/questions/seed", response_model=SeedQuestionsResponse)
def seed_questions(
    store: ComplianceStore = Depends(get_store),
    _: None = Depends(verify_admin_key)
):
    """
    Load the default question bank, refreshing existing questions by key.

    Protected by the api-key-header header.
    """
    return SeedQuestionsResponse(seeded=seed_default_questions(store))
