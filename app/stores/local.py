from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple, Iterable

from app.core.local_storage import LocalStorage
from app.core.logging_config import logger
from app.crud.onboarding import STEP_INDUSTRY
from app.data.questions import default_questions
from app.models.compliance_item import ItemStatus
from app.models.user_response import ResponseValue
from app.schemas.compliance_item import ComplianceItemCreate, ComplianceItemResponse
from app.schemas.onboarding import AnswerRecord, OnboardingSessionRecord
from app.schemas.question import Question, QuestionCreate
from app.schemas.user import UserAccount, UserProfile
from app.stores.base import ComplianceStore, StoreBackend

# Fixed storage keys
USER_KEY = "user"
ONBOARDING_KEY = "onboarding"
USERS_KEY = "users"
PROFILES_KEY = "profiles"
QUESTIONS_KEY = "questions"
RESPONSES_KEY = "responses"
ITEMS_KEY = "compliance_items"


def _next_id(records: Iterable[Dict[str, Any]]) -> int:
    return max((r["id"] for r in records), default=0) + 1


class LocalComplianceStore(ComplianceStore):
    """
    ComplianceStore over a LocalStorage file.

    Collections are JSON objects keyed by string ids so that (user, question)
    uniqueness falls out of the key: responses are keyed "<user>:<question>"
    and items likewise. Sessions live under the fixed "onboarding" key,
    keyed by user id.
    """

    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def _collection(self, key: str) -> Dict[str, Any]:
        data = self.storage.get(key, {})
        return data if isinstance(data, dict) else {}

    # Identities and profiles

    def get_user(self, user_id: int) -> Optional[UserAccount]:
        record = self._collection(USERS_KEY).get(str(user_id))
        return UserAccount(**record) if record else None

    def get_user_by_email(self, email: str) -> Optional[UserAccount]:
        for record in self._collection(USERS_KEY).values():
            if record["email"].lower() == email.lower():
                return UserAccount(**record)
        return None

    def create_user(self, *, email, hashed_password, full_name, company=None) -> UserAccount:
        with self.storage.lock:
            if self.get_user_by_email(email):
                raise ValueError(f"User with email {email} already exists")
            users = self._collection(USERS_KEY)
            user = UserAccount(
                id=_next_id(users.values()),
                email=email,
                hashed_password=hashed_password,
                is_active=True,
            )
            users[str(user.id)] = user.model_dump()
            self.storage.set(USERS_KEY, users)

            profiles = self._collection(PROFILES_KEY)
            profiles[str(user.id)] = UserProfile(id=user.id, full_name=full_name, company=company).model_dump()
            self.storage.set(PROFILES_KEY, profiles)
        return user

    def get_profile(self, user_id: int) -> Optional[UserProfile]:
        record = self._collection(PROFILES_KEY).get(str(user_id))
        return UserProfile(**record) if record else None

    def create_profile(self, user_id: int, full_name: str) -> UserProfile:
        with self.storage.lock:
            profiles = self._collection(PROFILES_KEY)
            profile = UserProfile(id=user_id, full_name=full_name)
            profiles[str(user_id)] = profile.model_dump()
            self.storage.set(PROFILES_KEY, profiles)
        return profile

    def update_profile(self, user_id: int, **fields) -> Optional[UserProfile]:
        with self.storage.lock:
            profiles = self._collection(PROFILES_KEY)
            record = profiles.get(str(user_id))
            if record is None:
                return None
            # Validate before writing so a bad value never reaches the file
            profile = UserProfile(**{**record, **fields})
            profiles[str(user_id)] = profile.model_dump()
            self.storage.set(PROFILES_KEY, profiles)
        return profile

    # Question bank

    def _questions(self) -> List[Question]:
        questions = [Question(**q) for q in self._collection(QUESTIONS_KEY).values()]
        return sorted(questions, key=lambda q: q.question_key)

    def list_general_questions(self) -> List[Question]:
        return [q for q in self._questions() if q.industry is None]

    def list_industry_questions(self, industry: str) -> List[Question]:
        return [q for q in self._questions() if q.industry == industry]

    def get_questions_by_keys(self, keys: Iterable[str]) -> List[Question]:
        wanted = set(keys)
        return [q for q in self._questions() if q.question_key in wanted]

    def upsert_questions(self, questions: List[QuestionCreate]) -> int:
        with self.storage.lock:
            bank = self._collection(QUESTIONS_KEY)
            next_id = _next_id(bank.values())
            for question in questions:
                existing = bank.get(question.question_key)
                if existing:
                    question_id = existing["id"]
                else:
                    question_id = next_id
                    next_id += 1
                bank[question.question_key] = {"id": question_id, **question.model_dump()}
            self.storage.set(QUESTIONS_KEY, bank)
        return len(questions)

    # Onboarding sessions

    def get_or_create_session(self, user_id: int) -> OnboardingSessionRecord:
        with self.storage.lock:
            sessions = self._collection(ONBOARDING_KEY)
            record = sessions.get(str(user_id))
            if record is None:
                record = OnboardingSessionRecord(user_id=user_id, current_step=STEP_INDUSTRY).model_dump(mode="json")
                sessions[str(user_id)] = record
                self.storage.set(ONBOARDING_KEY, sessions)
        return OnboardingSessionRecord(**record)

    def update_session(self, user_id: int, **fields) -> OnboardingSessionRecord:
        with self.storage.lock:
            current = self.get_or_create_session(user_id)
            updated = current.model_copy(update=fields)
            sessions = self._collection(ONBOARDING_KEY)
            sessions[str(user_id)] = updated.model_dump(mode="json")
            self.storage.set(ONBOARDING_KEY, sessions)
        return updated

    def delete_session(self, user_id: int) -> None:
        with self.storage.lock:
            sessions = self._collection(ONBOARDING_KEY)
            if sessions.pop(str(user_id), None) is not None:
                self.storage.set(ONBOARDING_KEY, sessions)

    # Responses

    def upsert_responses(self, user_id: int, answers: List[Tuple[int, ResponseValue]]) -> None:
        with self.storage.lock:
            responses = self._collection(RESPONSES_KEY)
            for question_id, response in answers:
                responses[f"{user_id}:{question_id}"] = {
                    "user_id": user_id,
                    "question_id": question_id,
                    "response": ResponseValue(response).value,
                }
            self.storage.set(RESPONSES_KEY, responses)

    def _user_responses(self, user_id: int) -> List[Dict[str, Any]]:
        return [r for r in self._collection(RESPONSES_KEY).values() if r["user_id"] == user_id]

    def list_responses(self, user_id: int) -> List[AnswerRecord]:
        by_id = {q.id: q for q in self._questions()}
        records = []
        for response in self._user_responses(user_id):
            question = by_id.get(response["question_id"])
            if question is None:
                logger.warning(f"Dropping response to unknown question {response['question_id']} for user {user_id}")
                continue
            records.append(AnswerRecord(
                question_id=question.id,
                question_key=question.question_key,
                industry=question.industry,
                response=response["response"],
            ))
        return sorted(records, key=lambda r: r.question_key)

    def list_questions_answered(self, user_id: int, response: ResponseValue) -> List[Question]:
        matching = {
            r["question_id"] for r in self._user_responses(user_id)
            if r["response"] == ResponseValue(response).value
        }
        return [q for q in self._questions() if q.id in matching]

    def delete_responses(self, user_id: int) -> None:
        with self.storage.lock:
            responses = self._collection(RESPONSES_KEY)
            kept = {k: r for k, r in responses.items() if r["user_id"] != user_id}
            self.storage.set(RESPONSES_KEY, kept)

    # Compliance items

    def upsert_items(self, user_id: int, items: List[ComplianceItemCreate]) -> None:
        with self.storage.lock:
            stored = self._collection(ITEMS_KEY)
            next_id = _next_id(stored.values())
            for item in items:
                key = f"{user_id}:{item.question_id}"
                existing = stored.get(key)
                record = item.model_dump(mode="json")
                if existing:
                    # Keep the user's status and type, refresh the rest
                    record.update(id=existing["id"], status=existing["status"], type=existing["type"])
                else:
                    record["id"] = next_id
                    next_id += 1
                record["user_id"] = user_id
                stored[key] = record
            self.storage.set(ITEMS_KEY, stored)

    def list_items(self, user_id: int) -> List[ComplianceItemResponse]:
        items = [
            ComplianceItemResponse(**r) for r in self._collection(ITEMS_KEY).values()
            if r["user_id"] == user_id
        ]
        return sorted(items, key=lambda i: i.id)

    def get_item(self, user_id: int, item_id: int) -> Optional[ComplianceItemResponse]:
        for item in self.list_items(user_id):
            if item.id == item_id:
                return item
        return None

    def set_item_status(self, user_id: int, item_id: int, status: ItemStatus) -> Optional[ComplianceItemResponse]:
        with self.storage.lock:
            stored = self._collection(ITEMS_KEY)
            for record in stored.values():
                if record["id"] == item_id and record["user_id"] == user_id:
                    record["status"] = ItemStatus(status).value
                    self.storage.set(ITEMS_KEY, stored)
                    return ComplianceItemResponse(**record)
        return None

    def delete_items(self, user_id: int) -> None:
        with self.storage.lock:
            stored = self._collection(ITEMS_KEY)
            kept = {k: r for k, r in stored.items() if r["user_id"] != user_id}
            self.storage.set(ITEMS_KEY, kept)


class LocalBackend(StoreBackend):
    """
    Backend used when no database is configured.

    The default question bank is written to the file on first start, and
    again whenever it goes missing (for example after an unreadable file
    was set aside), so the wizard always has questions to show.
    """

    name = "local"

    def __init__(self, storage: LocalStorage):
        self.storage = storage
        self._ensure_question_bank()

    def _ensure_question_bank(self) -> None:
        with self.storage.lock:
            if self.storage.get(QUESTIONS_KEY):
                return
            seeded = LocalComplianceStore(self.storage).upsert_questions(default_questions())
        logger.info(f"Seeded local question bank with {seeded} questions")

    @contextmanager
    def open(self) -> Iterator[ComplianceStore]:
        self._ensure_question_bank()
        yield LocalComplianceStore(self.storage)

    def auth_gateway(self, store: ComplianceStore):
        from app.services.auth import DemoAuthGateway
        return DemoAuthGateway(store, self.storage)
