from typing import List, Iterable
from sqlalchemy.orm import Session
from sqlalchemy import select
from app.crud.base import upsert_many
from app.models.compliance_question import ComplianceQuestion
from app.schemas.question import QuestionCreate

_UPDATABLE_FIELDS = [
    "question",
    "industry",
    "compliance_requirement",
    "implementation_steps",
    "documentation_required",
    "submission_details",
    "deadlines_renewals",
    "law_requirement",
]


class CRUDComplianceQuestion:
    """Read access to the question bank plus bulk seeding."""

    def get_general(self, db: Session) -> List[ComplianceQuestion]:
        stmt = select(ComplianceQuestion).where(
            ComplianceQuestion.industry.is_(None)
        ).order_by(ComplianceQuestion.question_key)
        return list(db.execute(stmt).scalars().all())

    def get_by_industry(self, db: Session, industry: str) -> List[ComplianceQuestion]:
        stmt = select(ComplianceQuestion).where(
            ComplianceQuestion.industry == industry
        ).order_by(ComplianceQuestion.question_key)
        return list(db.execute(stmt).scalars().all())

    def get_by_keys(self, db: Session, keys: Iterable[str]) -> List[ComplianceQuestion]:
        keys = list(keys)
        if not keys:
            return []
        stmt = select(ComplianceQuestion).where(ComplianceQuestion.question_key.in_(keys))
        return list(db.execute(stmt).scalars().all())

    def upsert(self, db: Session, questions: List[QuestionCreate]) -> int:
        """Insert or refresh questions keyed by question_key."""
        upsert_many(
            db,
            ComplianceQuestion,
            [q.model_dump() for q in questions],
            index_elements=["question_key"],
            update_fields=_UPDATABLE_FIELDS,
        )
        db.commit()
        return len(questions)


compliance_question = CRUDComplianceQuestion()
