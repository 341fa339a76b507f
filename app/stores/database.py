from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple, Iterable

from sqlalchemy.orm import Session, sessionmaker

from app import crud
from app.models.compliance_item import ItemStatus
from app.models.user_response import ResponseValue
from app.schemas.compliance_item import ComplianceItemCreate, ComplianceItemResponse
from app.schemas.onboarding import AnswerRecord, OnboardingSessionRecord
from app.schemas.question import Question, QuestionCreate
from app.schemas.user import UserAccount, UserProfile
from app.stores.base import ComplianceStore, StoreBackend


class SqlComplianceStore(ComplianceStore):
    """ComplianceStore over one SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> Optional[UserAccount]:
        user = crud.user.get(self.db, user_id)
        return UserAccount.model_validate(user) if user else None

    def get_user_by_email(self, email: str) -> Optional[UserAccount]:
        user = crud.user.get_by_email(self.db, email)
        return UserAccount.model_validate(user) if user else None

    def create_user(self, *, email, hashed_password, full_name, company=None) -> UserAccount:
        user = crud.user.create_with_profile(
            self.db,
            email=email,
            hashed_password=hashed_password,
            full_name=full_name,
            company=company,
        )
        return UserAccount.model_validate(user)

    def get_profile(self, user_id: int) -> Optional[UserProfile]:
        profile = crud.user.get_profile(self.db, user_id)
        return UserProfile.model_validate(profile) if profile else None

    def create_profile(self, user_id: int, full_name: str) -> UserProfile:
        profile = crud.user.create_profile(self.db, user_id=user_id, full_name=full_name)
        return UserProfile.model_validate(profile)

    def update_profile(self, user_id: int, **fields) -> Optional[UserProfile]:
        profile = crud.user.get_profile(self.db, user_id)
        if profile is None:
            return None
        profile = crud.user.update_profile(self.db, profile=profile, **fields)
        return UserProfile.model_validate(profile)

    def list_general_questions(self) -> List[Question]:
        return [Question.model_validate(q) for q in crud.compliance_question.get_general(self.db)]

    def list_industry_questions(self, industry: str) -> List[Question]:
        return [Question.model_validate(q) for q in crud.compliance_question.get_by_industry(self.db, industry)]

    def get_questions_by_keys(self, keys: Iterable[str]) -> List[Question]:
        return [Question.model_validate(q) for q in crud.compliance_question.get_by_keys(self.db, keys)]

    def upsert_questions(self, questions: List[QuestionCreate]) -> int:
        return crud.compliance_question.upsert(self.db, questions)

    def get_or_create_session(self, user_id: int) -> OnboardingSessionRecord:
        return OnboardingSessionRecord.model_validate(crud.onboarding.get_or_create(self.db, user_id))

    def update_session(self, user_id: int, **fields) -> OnboardingSessionRecord:
        return OnboardingSessionRecord.model_validate(crud.onboarding.update(self.db, user_id, **fields))

    def delete_session(self, user_id: int) -> None:
        crud.onboarding.delete(self.db, user_id)
        self.db.commit()

    def upsert_responses(self, user_id: int, answers: List[Tuple[int, ResponseValue]]) -> None:
        crud.user_response.upsert(self.db, user_id=user_id, answers=answers)

    def list_responses(self, user_id: int) -> List[AnswerRecord]:
        return [
            AnswerRecord(
                question_id=question.id,
                question_key=question.question_key,
                industry=question.industry,
                response=response.response,
            )
            for response, question in crud.user_response.get_with_questions(self.db, user_id=user_id)
        ]

    def list_questions_answered(self, user_id: int, response: ResponseValue) -> List[Question]:
        questions = crud.user_response.get_questions_answered(self.db, user_id=user_id, response=response)
        return [Question.model_validate(q) for q in questions]

    def delete_responses(self, user_id: int) -> None:
        crud.user_response.delete_for_user(self.db, user_id=user_id)
        self.db.commit()

    def upsert_items(self, user_id: int, items: List[ComplianceItemCreate]) -> None:
        crud.compliance_item.upsert(self.db, user_id=user_id, items=items)

    def list_items(self, user_id: int) -> List[ComplianceItemResponse]:
        return [ComplianceItemResponse.model_validate(i) for i in crud.compliance_item.get_multi(self.db, user_id=user_id)]

    def get_item(self, user_id: int, item_id: int) -> Optional[ComplianceItemResponse]:
        item = crud.compliance_item.get(self.db, id=item_id, user_id=user_id)
        return ComplianceItemResponse.model_validate(item) if item else None

    def set_item_status(self, user_id: int, item_id: int, status: ItemStatus) -> Optional[ComplianceItemResponse]:
        item = crud.compliance_item.set_status(self.db, id=item_id, user_id=user_id, status=status)
        return ComplianceItemResponse.model_validate(item) if item else None

    def delete_items(self, user_id: int) -> None:
        crud.compliance_item.delete_for_user(self.db, user_id=user_id)
        self.db.commit()


class DatabaseBackend(StoreBackend):
    """Backend used when DATABASE_URL is configured."""

    name = "database"

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @contextmanager
    def open(self) -> Iterator[ComplianceStore]:
        db = self.session_factory()
        try:
            yield SqlComplianceStore(db)
        finally:
            db.close()

    def auth_gateway(self, store: ComplianceStore):
        from app.services.auth import PasswordAuthGateway
        return PasswordAuthGateway(store)
