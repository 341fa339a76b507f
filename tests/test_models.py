"""Model-level checks against an in-memory database."""

import pytest
from sqlalchemy.exc import IntegrityError

from app.models.compliance_item import ComplianceItem, ComplianceType, ItemStatus
from app.models.compliance_question import ComplianceQuestion
from app.models.onboarding import OnboardingSession
from app.models.profile import Profile
from app.models.user import User
from app.models.user_response import ResponseValue, UserResponse


@pytest.fixture
def db(store):
    return store.db


@pytest.fixture
def account(db):
    user = User(email="models@example.com", hashed_password="hash")
    db.add(user)
    db.flush()
    db.add(Profile(id=user.id, full_name="Model Tester"))
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def question(db):
    return db.query(ComplianceQuestion).filter_by(question_key="gen-1").one()


@pytest.mark.unit
class TestModels:

    def test_user_profile_share_primary_key(self, account):
        assert account.profile.id == account.id
        assert account.is_active is True
        assert account.created_at is not None

    def test_onboarding_session_defaults_to_step_one(self, db, account):
        session = OnboardingSession(user_id=account.id)
        db.add(session)
        db.commit()
        db.refresh(session)

        assert session.current_step == 1
        assert session.industry is None
        assert session.completed_at is None

    def test_one_response_per_user_and_question(self, db, account, question):
        db.add(UserResponse(user_id=account.id, question_id=question.id, response=ResponseValue.No))
        db.commit()

        db.add(UserResponse(user_id=account.id, question_id=question.id, response=ResponseValue.Yes))
        with pytest.raises(IntegrityError):
            db.commit()
        db.rollback()

    def test_one_item_per_user_and_question(self, db, account, question):
        def make_item():
            return ComplianceItem(
                user_id=account.id,
                question_id=question.id,
                title=question.compliance_requirement,
                description=question.implementation_steps,
            )

        db.add(make_item())
        db.commit()

        db.add(make_item())
        with pytest.raises(IntegrityError):
            db.commit()
        db.rollback()

    def test_item_defaults(self, db, account, question):
        item = ComplianceItem(
            user_id=account.id,
            question_id=question.id,
            title="Privacy Policy",
            description="Develop a comprehensive privacy policy",
        )
        db.add(item)
        db.commit()
        db.refresh(item)

        assert item.type == ComplianceType.Required
        assert item.status == ItemStatus.Pending
        assert item.document_url is None

    def test_question_keys_are_unique(self, db):
        db.add(ComplianceQuestion(
            question_key="gen-1",
            question="Duplicate?",
            compliance_requirement="Duplicate",
            implementation_steps="None",
            documentation_required="None",
            submission_details="None",
            deadlines_renewals="None",
            law_requirement="None",
        ))
        with pytest.raises(IntegrityError):
            db.commit()
        db.rollback()
