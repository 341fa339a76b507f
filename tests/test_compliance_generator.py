"""Tests for turning "No" answers into compliance items."""

import pytest

from app.models.compliance_item import ComplianceType, ItemStatus
from app.models.user_response import ResponseValue
from app.schemas.question import Question
from app.services.compliance_generator import (
    FSCA_URL,
    INFORMATION_REGULATOR_URL,
    SARS_URL,
    build_item,
    generate_compliance_items,
    official_site_url,
)


def answer(store, user_id, answers):
    """answers: {question_key: ResponseValue}"""
    by_key = {q.question_key: q for q in store.get_questions_by_keys(answers)}
    store.upsert_responses(user_id, [(by_key[k].id, v) for k, v in answers.items()])


@pytest.mark.unit
class TestOfficialSiteUrl:

    @pytest.mark.parametrize("law, expected", [
        ("POPIA Section 55", INFORMATION_REGULATOR_URL),
        ("POPIA", INFORMATION_REGULATOR_URL),
        ("Income Tax Act, VAT Act", SARS_URL),
        ("SARS eFiling rules", SARS_URL),
        ("Financial Advisory and Intermediary Services Act (FAIS)", FSCA_URL),
        ("FSCA Conduct Standard", FSCA_URL),
        ("Companies Act", None),
        ("Financial Intelligence Centre Act (FICA)", None),
        ("", None),
        (None, None),
    ])
    def test_mapping(self, law, expected):
        assert official_site_url(law) == expected

    def test_popia_checked_before_tax(self):
        assert official_site_url("POPIA and Tax Administration Act") == INFORMATION_REGULATOR_URL

    def test_tax_checked_before_fais(self):
        assert official_site_url("FAIS levy under the Tax Act") == SARS_URL

    def test_matching_is_case_sensitive(self):
        assert official_site_url("popia") is None
        assert official_site_url("tax") is None


@pytest.mark.unit
class TestBuildItem:

    def test_copies_question_fields(self):
        question = Question(
            id=7,
            question_key="tech-3",
            question="Do you have a data breach notification procedure?",
            industry="Technology",
            compliance_requirement="Data Breach Notification",
            implementation_steps="Create data breach response plan",
            documentation_required="Data Breach Policy",
            submission_details="Notify Information Regulator within 72 hours of breach",
            deadlines_renewals="Review annually",
            law_requirement="POPIA Section 22",
        )

        item = build_item(question)

        assert item.title == "Data Breach Notification"
        assert item.description == "Create data breach response plan"
        assert item.type == ComplianceType.Required
        assert item.status == ItemStatus.Pending
        assert item.industry == "Technology"
        assert item.question_id == 7
        assert item.official_site_url == INFORMATION_REGULATOR_URL
        assert item.document_url is None


class TestGenerateComplianceItems:

    def test_only_no_answers_become_items(self, store, user):
        answer(store, user.id, {
            "gen-1": ResponseValue.No,
            "gen-3": ResponseValue.Yes,
            "gen-4": ResponseValue.NotApplicable,
            "gen-5": ResponseValue.No,
        })

        items = generate_compliance_items(store, user.id)

        assert sorted(i.title for i in items) == ["Information Officer Appointment", "Tax Registration"]
        assert all(i.user_id == user.id for i in items)
        by_title = {i.title: i for i in items}
        assert by_title["Tax Registration"].official_site_url == SARS_URL
        assert by_title["Information Officer Appointment"].industry is None

    def test_no_answers_no_items(self, store, user):
        answer(store, user.id, {"gen-1": ResponseValue.Yes})
        assert generate_compliance_items(store, user.id) == []

    def test_running_twice_does_not_duplicate(self, store, user):
        answer(store, user.id, {"gen-1": ResponseValue.No, "gen-2": ResponseValue.No})

        first = generate_compliance_items(store, user.id)
        second = generate_compliance_items(store, user.id)

        assert len(first) == len(second) == 2
        assert [i.id for i in first] == [i.id for i in second]

    def test_regeneration_keeps_completed_status(self, store, user):
        answer(store, user.id, {"gen-1": ResponseValue.No})
        item = generate_compliance_items(store, user.id)[0]
        store.set_item_status(user.id, item.id, ItemStatus.Completed)

        items = generate_compliance_items(store, user.id)

        assert len(items) == 1
        assert items[0].status == ItemStatus.Completed

    def test_items_are_per_user(self, store, user):
        other = store.create_user(email="other@example.com", hashed_password="x", full_name="Other")
        answer(store, user.id, {"gen-1": ResponseValue.No})
        answer(store, other.id, {"gen-2": ResponseValue.No})

        mine = generate_compliance_items(store, user.id)
        theirs = generate_compliance_items(store, other.id)

        assert [i.title for i in mine] == ["Information Officer Appointment"]
        assert [i.title for i in theirs] == ["Personal Information Impact Assessment"]

    def test_local_store_generates_the_same_items(self, local_store):
        user = local_store.create_user(email="local@example.com", hashed_password="x", full_name="Local")
        answer(local_store, user.id, {"gen-1": ResponseValue.No, "gen-5": ResponseValue.No})

        generate_compliance_items(local_store, user.id)
        items = generate_compliance_items(local_store, user.id)

        assert sorted(i.title for i in items) == ["Information Officer Appointment", "Tax Registration"]
        assert len({i.id for i in items}) == 2
