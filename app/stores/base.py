from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple, Iterable

from app.models.compliance_item import ItemStatus
from app.models.user_response import ResponseValue
from app.schemas.compliance_item import ComplianceItemCreate, ComplianceItemResponse
from app.schemas.onboarding import AnswerRecord, OnboardingSessionRecord
from app.schemas.question import Question, QuestionCreate
from app.schemas.user import UserAccount, UserProfile


class ComplianceStore(ABC):
    """
    Persistence interface used by the services.

    Two implementations exist: one backed by the relational database and
    one backed by a local JSON file. Every method returns schema objects so
    services never see which one they are talking to. Uniqueness per
    (user, question) for responses and items is enforced by both.
    """

    # Identities and profiles

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[UserAccount]: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[UserAccount]: ...

    @abstractmethod
    def create_user(
        self,
        *,
        email: str,
        hashed_password: str,
        full_name: str,
        company: Optional[str] = None
    ) -> UserAccount:
        """Create identity and profile together. Raises ValueError on duplicate email."""

    @abstractmethod
    def get_profile(self, user_id: int) -> Optional[UserProfile]: ...

    @abstractmethod
    def create_profile(self, user_id: int, full_name: str) -> UserProfile: ...

    @abstractmethod
    def update_profile(self, user_id: int, **fields) -> Optional[UserProfile]: ...

    # Question bank

    @abstractmethod
    def list_general_questions(self) -> List[Question]: ...

    @abstractmethod
    def list_industry_questions(self, industry: str) -> List[Question]: ...

    @abstractmethod
    def get_questions_by_keys(self, keys: Iterable[str]) -> List[Question]: ...

    @abstractmethod
    def upsert_questions(self, questions: List[QuestionCreate]) -> int: ...

    # Onboarding sessions

    @abstractmethod
    def get_or_create_session(self, user_id: int) -> OnboardingSessionRecord: ...

    @abstractmethod
    def update_session(self, user_id: int, **fields) -> OnboardingSessionRecord: ...

    @abstractmethod
    def delete_session(self, user_id: int) -> None: ...

    # Responses

    @abstractmethod
    def upsert_responses(self, user_id: int, answers: List[Tuple[int, ResponseValue]]) -> None: ...

    @abstractmethod
    def list_responses(self, user_id: int) -> List[AnswerRecord]: ...

    @abstractmethod
    def list_questions_answered(self, user_id: int, response: ResponseValue) -> List[Question]: ...

    @abstractmethod
    def delete_responses(self, user_id: int) -> None: ...

    # Compliance items

    @abstractmethod
    def upsert_items(self, user_id: int, items: List[ComplianceItemCreate]) -> None: ...

    @abstractmethod
    def list_items(self, user_id: int) -> List[ComplianceItemResponse]: ...

    @abstractmethod
    def get_item(self, user_id: int, item_id: int) -> Optional[ComplianceItemResponse]: ...

    @abstractmethod
    def set_item_status(self, user_id: int, item_id: int, status: ItemStatus) -> Optional[ComplianceItemResponse]: ...

    @abstractmethod
    def delete_items(self, user_id: int) -> None: ...


class StoreBackend(ABC):
    """A source of stores plus the auth gateway that goes with them."""

    name: str = "abstract"

    @abstractmethod
    @contextmanager
    def open(self) -> Iterator[ComplianceStore]:
        """Yield a store scoped to one request."""

    @abstractmethod
    def auth_gateway(self, store: ComplianceStore):
        """Build the auth gateway matching this backend."""
