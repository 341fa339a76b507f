"""LocalStorage file handling."""

import json

import pytest

from app.core.local_storage import LocalStorage
from app.data.questions import default_questions
from app.stores.local import QUESTIONS_KEY, LocalBackend


@pytest.mark.unit
class TestLocalStorage:

    def test_missing_file_returns_default(self, tmp_path):
        storage = LocalStorage(str(tmp_path / "absent.json"))
        assert storage.get("user") is None
        assert storage.get("onboarding", {}) == {}

    def test_set_then_get(self, local_storage):
        assert local_storage.set("user", {"id": 1, "email": "a@example.com"}) is True
        assert local_storage.get("user") == {"id": 1, "email": "a@example.com"}

    def test_values_survive_a_new_instance(self, tmp_path):
        path = str(tmp_path / "storage.json")
        LocalStorage(path).set("onboarding", {"1": {"current_step": 2}})
        assert LocalStorage(path).get("onboarding") == {"1": {"current_step": 2}}

    def test_remove(self, local_storage):
        local_storage.set("user", {"id": 1})
        assert local_storage.remove("user") is True
        assert local_storage.get("user") is None
        assert local_storage.remove("user") is True

    def test_corrupt_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text("{not json", encoding="utf-8")

        storage = LocalStorage(str(path))

        assert storage.get("user", "fallback") == "fallback"

    def test_corrupt_file_is_set_aside_before_writing(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text("{not json", encoding="utf-8")
        storage = LocalStorage(str(path))

        assert storage.set("user", {"id": 1}) is True

        assert (tmp_path / "storage.json.corrupt").read_text(encoding="utf-8") == "{not json"
        assert json.loads(path.read_text(encoding="utf-8")) == {"user": {"id": 1}}

    def test_non_object_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
        assert LocalStorage(str(path)).get("user") is None

    def test_unwritable_location_reports_failure(self, tmp_path):
        storage = LocalStorage(str(tmp_path / "missing-dir" / "storage.json"))

        assert storage.set("user", {"id": 1}) is False
        assert storage.get("user") is None

    def test_other_keys_untouched(self, local_storage):
        local_storage.set("user", {"id": 1})
        local_storage.set("onboarding", {"1": {}})
        local_storage.remove("user")
        assert local_storage.get("onboarding") == {"1": {}}


class TestLocalBackend:

    def test_seeds_question_bank_once(self, local_storage):
        LocalBackend(local_storage)
        bank = local_storage.get(QUESTIONS_KEY)
        assert len(bank) == 5 + 11 * 3

        bank["gen-1"]["question"] = "Edited"
        local_storage.set(QUESTIONS_KEY, bank)
        LocalBackend(local_storage)

        assert local_storage.get(QUESTIONS_KEY)["gen-1"]["question"] == "Edited"

    def test_question_ids_are_stable(self, local_store):
        before = {q.question_key: q.id for q in local_store.list_general_questions()}
        local_store.upsert_questions(default_questions())
        after = {q.question_key: q.id for q in local_store.list_general_questions()}
        assert before == after

    def test_question_bank_reseeded_after_corruption(self, tmp_path):
        path = tmp_path / "storage.json"
        backend = LocalBackend(LocalStorage(str(path)))
        path.write_text("{not json", encoding="utf-8")

        with backend.open() as store:
            keys = [q.question_key for q in store.list_general_questions()]

        assert keys == ["gen-1", "gen-2", "gen-3", "gen-4", "gen-5"]
        assert (tmp_path / "storage.json.corrupt").exists()
