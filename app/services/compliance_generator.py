"""
Turns "No" answers into compliance items.

Each question a user answered "No" to becomes one Required, Pending task.
Items are upserted on (user, question), so running generation again
refreshes the existing rows instead of adding new ones.
"""
from typing import List, Optional

from app.core.logging_config import logger
from app.models.compliance_item import ComplianceType, ItemStatus
from app.models.user_response import ResponseValue
from app.schemas.compliance_item import ComplianceItemCreate, ComplianceItemResponse
from app.schemas.question import Question
from app.stores.base import ComplianceStore

INFORMATION_REGULATOR_URL = "https://www.justice.gov.za/inforeg/"
SARS_URL = "https://www.sars.gov.za"
FSCA_URL = "https://www.fsca.co.za"


def official_site_url(law_requirement: Optional[str]) -> Optional[str]:
    """
    Map a question's governing law to the regulator's site.

    Checks run in order and are case-sensitive: POPIA first, then
    SARS/Tax, then FSCA/FAIS.
    """
    if not law_requirement:
        return None
    if "POPIA" in law_requirement:
        return INFORMATION_REGULATOR_URL
    if "SARS" in law_requirement or "Tax" in law_requirement:
        return SARS_URL
    if "FSCA" in law_requirement or "FAIS" in law_requirement:
        return FSCA_URL
    return None


def build_item(question: Question) -> ComplianceItemCreate:
    return ComplianceItemCreate(
        title=question.compliance_requirement,
        description=question.implementation_steps,
        type=ComplianceType.Required,
        status=ItemStatus.Pending,
        industry=question.industry,
        question_id=question.id,
        official_site_url=official_site_url(question.law_requirement),
    )


def generate_compliance_items(store: ComplianceStore, user_id: int) -> List[ComplianceItemResponse]:
    """
    Create or refresh one item per "No" answer and return all of the user's items.

    Items whose answer has since changed away from "No" are left alone.
    """
    questions = store.list_questions_answered(user_id, ResponseValue.No)
    items = [build_item(q) for q in questions]
    if items:
        store.upsert_items(user_id, items)
    logger.info(f"Generated {len(items)} compliance items for user {user_id}")
    return store.list_items(user_id)
