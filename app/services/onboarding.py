from datetime import datetime, timezone
from typing import List, Optional
from fastapi import HTTPException, status
from app.core.logging_config import logger
from app.crud.onboarding import (
    STEP_INDUSTRY,
    STEP_GENERAL,
    STEP_INDUSTRY_SPECIFIC,
    STEP_COMPLETE,
)
from app.schemas.onboarding import (
    AnswerIn,
    Industry,
    OnboardingResponse,
    OnboardingSessionRecord,
)
from app.schemas.question import Question
from app.services.compliance_generator import generate_compliance_items
from app.stores.base import ComplianceStore

STEP_VIEWS = {
    STEP_INDUSTRY: "/onboarding/step1",
    STEP_GENERAL: "/onboarding/step2",
    STEP_INDUSTRY_SPECIFIC: "/onboarding/step3",
    STEP_COMPLETE: "/dashboard",
}


def view_for_step(step: int) -> str:
    return STEP_VIEWS.get(step, STEP_VIEWS[STEP_INDUSTRY])


class OnboardingService:
    """
    Drives the onboarding wizard.

    Step 1 picks the industry, step 2 answers the general questions, step 3
    answers the industry questions. Advancing past step 3 completes
    onboarding and generates compliance items. Every call reads the stored
    session, so the step counter lives in the store, not in memory.

    Writes are not transactional across calls: if generation fails after
    the session was marked complete, the session stays complete.
    """

    def get_state(self, store: ComplianceStore, user_id: int) -> OnboardingResponse:
        """
        Current wizard state. Creates the session at step 1 on first visit.
        """
        session = store.get_or_create_session(user_id)
        return self._to_response(store, session)

    def set_industry(self, store: ComplianceStore, user_id: int, industry: Optional[str]) -> OnboardingResponse:
        """
        Save the industry on the session and the profile. Idempotent.

        Raises:
            HTTPException 400: If the industry is empty or not one of the 11 supported
        """
        value = self._validate_industry(industry)
        session = store.update_session(user_id, industry=value)
        store.update_profile(user_id, industry=value)
        logger.info(f"User {user_id} selected industry {value}")
        return self._to_response(store, session)

    def list_questions(self, store: ComplianceStore, user_id: int, step: int) -> List[Question]:
        """
        Questions shown on a questionnaire step: general for step 2,
        the session industry's for step 3. An empty list is valid.

        Raises:
            HTTPException 400: If step is not 2 or 3, or no industry is selected yet for step 3
        """
        session = store.get_or_create_session(user_id)
        return self._questions_for_step(store, session, step)

    def record_responses(
        self,
        store: ComplianceStore,
        user_id: int,
        step: int,
        responses: List[AnswerIn]
    ) -> OnboardingResponse:
        """
        Upsert answers for one step. Later answers to the same question
        overwrite earlier ones. Nothing is written if any key is unknown.

        Raises:
            HTTPException 400: If a question key is not part of the step's questions
        """
        session = store.get_or_create_session(user_id)
        questions = {q.question_key: q for q in self._questions_for_step(store, session, step)}

        unknown = sorted({r.question_key for r in responses if r.question_key not in questions})
        if unknown:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown question keys for step {step}: {', '.join(unknown)}"
            )

        # Last answer wins for duplicate keys within one submission
        latest = {r.question_key: r.response for r in responses}
        answers = [(questions[key].id, value) for key, value in latest.items()]
        if answers:
            store.upsert_responses(user_id, answers)
        logger.info(f"Saved {len(answers)} step {step} responses for user {user_id}")
        return self._to_response(store, session)

    def advance(self, store: ComplianceStore, user_id: int) -> OnboardingResponse:
        """
        Move to the next step once the current one is done. Leaving step 3
        completes onboarding. The step never goes past STEP_COMPLETE:
        advancing a completed session just re-runs completion.

        Raises:
            HTTPException 400: If the current step's answers are incomplete
        """
        session = store.get_or_create_session(user_id)
        if session.current_step >= STEP_COMPLETE:
            return self._complete(store, user_id)

        self._require_step_done(store, session)

        next_step = session.current_step + 1
        if next_step == STEP_COMPLETE:
            return self._complete(store, user_id)

        session = store.update_session(user_id, current_step=next_step)
        logger.info(f"User {user_id} advanced to step {next_step}")
        return self._to_response(store, session)

    def retreat(self, store: ComplianceStore, user_id: int) -> OnboardingResponse:
        """
        Go back one step, never below step 1. Answers already saved are kept.
        """
        session = store.get_or_create_session(user_id)
        previous_step = max(STEP_INDUSTRY, session.current_step - 1)
        if previous_step != session.current_step:
            session = store.update_session(user_id, current_step=previous_step)
        logger.info(f"User {user_id} went back to step {previous_step}")
        return self._to_response(store, session)

    def reset(self, store: ComplianceStore, user_id: int) -> OnboardingResponse:
        """
        Delete the session, every response and every generated item, then
        start again at step 1.
        """
        store.delete_items(user_id)
        store.delete_responses(user_id)
        store.delete_session(user_id)
        logger.info(f"Reset onboarding for user {user_id}")
        return self.get_state(store, user_id)

    def _complete(self, store: ComplianceStore, user_id: int) -> OnboardingResponse:
        session = store.update_session(
            user_id,
            current_step=STEP_COMPLETE,
            completed_at=datetime.now(timezone.utc),
        )
        items = generate_compliance_items(store, user_id)
        logger.info(f"User {user_id} completed onboarding with {len(items)} compliance items")
        return self._to_response(store, session)

    def _validate_industry(self, industry: Optional[str]) -> str:
        if isinstance(industry, Industry):
            return industry.value
        if not industry or not industry.strip():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Please select an industry"
            )
        try:
            return Industry(industry).value
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unsupported industry: {industry}"
            )

    def _questions_for_step(
        self,
        store: ComplianceStore,
        session: OnboardingSessionRecord,
        step: int
    ) -> List[Question]:
        if step == STEP_GENERAL:
            return store.list_general_questions()
        if step == STEP_INDUSTRY_SPECIFIC:
            if not session.industry:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Please select an industry first"
                )
            return store.list_industry_questions(session.industry)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Step {step} has no questions. Must be {STEP_GENERAL} or {STEP_INDUSTRY_SPECIFIC}"
        )

    def _require_step_done(self, store: ComplianceStore, session: OnboardingSessionRecord) -> None:
        if session.current_step == STEP_INDUSTRY:
            if not session.industry:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Please select an industry"
                )
            return

        questions = self._questions_for_step(store, session, session.current_step)
        answered = {r.question_id for r in store.list_responses(session.user_id)}
        missing = [q.question_key for q in questions if q.id not in answered]
        if missing:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Please answer all questions before continuing ({len(missing)} unanswered)"
            )

    def _to_response(self, store: ComplianceStore, session: OnboardingSessionRecord) -> OnboardingResponse:
        general, specific = [], []
        for record in store.list_responses(session.user_id):
            answer = AnswerIn(question_key=record.question_key, response=record.response)
            if record.industry is None:
                general.append(answer)
            else:
                specific.append(answer)
        return OnboardingResponse(
            current_step=session.current_step,
            industry=session.industry,
            completed_at=session.completed_at,
            is_completed=session.completed_at is not None,
            view=view_for_step(session.current_step),
            general_responses=general,
            industry_responses=specific,
        )


# Create a singleton instance
onboarding_service = OnboardingService()
