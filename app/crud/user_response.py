from typing import List, Tuple
from sqlalchemy.orm import Session
from sqlalchemy import select
from app.crud.base import CRUDBase, upsert_many
from app.models.user_response import UserResponse, ResponseValue
from app.models.compliance_question import ComplianceQuestion


class CRUDUserResponse(CRUDBase[UserResponse]):
    """
    CRUD operations for UserResponse model.

    At most one response exists per (user, question); saving again
    overwrites the previous answer.
    """

    def upsert(
        self,
        db: Session,
        *,
        user_id: int,
        answers: List[Tuple[int, ResponseValue]]
    ) -> None:
        rows = [
            {"user_id": user_id, "question_id": question_id, "response": response}
            for question_id, response in answers
        ]
        upsert_many(
            db,
            UserResponse,
            rows,
            index_elements=["user_id", "question_id"],
            update_fields=["response"],
        )
        db.commit()

    def get_with_questions(self, db: Session, *, user_id: int) -> List[Tuple[UserResponse, ComplianceQuestion]]:
        stmt = select(UserResponse, ComplianceQuestion).join(
            ComplianceQuestion, UserResponse.question_id == ComplianceQuestion.id
        ).where(
            UserResponse.user_id == user_id
        ).order_by(ComplianceQuestion.question_key)
        return [(row[0], row[1]) for row in db.execute(stmt).all()]

    def get_questions_answered(
        self,
        db: Session,
        *,
        user_id: int,
        response: ResponseValue
    ) -> List[ComplianceQuestion]:
        """Questions the user gave a particular answer to."""
        stmt = select(ComplianceQuestion).join(
            UserResponse, UserResponse.question_id == ComplianceQuestion.id
        ).where(
            UserResponse.user_id == user_id,
            UserResponse.response == response
        ).order_by(ComplianceQuestion.question_key)
        return list(db.execute(stmt).scalars().all())


user_response = CRUDUserResponse(UserResponse)
