from typing import List
from app.core.logging_config import logger
from app.data.questions import default_questions
from app.schemas.onboarding import Industry, IndustryOption
from app.stores.base import ComplianceStore


def list_industries() -> List[IndustryOption]:
    return [IndustryOption(value=industry, label=industry.value) for industry in Industry]


def seed_default_questions(store: ComplianceStore) -> int:
    """Upsert the default bank keyed by question_key. Safe to run repeatedly."""
    seeded = store.upsert_questions(default_questions())
    logger.info(f"Seeded {seeded} compliance questions")
    return seeded
