import pytest
from sqlalchemy.exc import IntegrityError
from resume_builder.core.exceptions import InternalError, NotFoundError, ValidationError
from resume_builder.models.resume import Resume
from resume_builder.stores.resume_store import ResumeStore
from tests.helpers import sample_resume


@pytest.fixture
def user_id(credential_store):
    user = credential_store.create_user(
        full_name="Jane Smith",
        password_hash="x",
        language="en",
        email="jane@example.com",
    )
    return user.id


def dump(resume):
    return resume.model_dump(by_alias=True, exclude_none=True)


def test_get_without_resume(resume_service, user_id):
    with pytest.raises(NotFoundError):
        resume_service.get(user_id)


def test_save_returns_stored_resume(resume_service, user_id):
    saved = resume_service.save(user_id, sample_resume())

    assert saved.user_id == user_id
    assert saved.created_at is not None
    assert saved.updated_at is not None
    assert dump(resume_service.get(user_id)) == dump(saved)


def test_nested_sections_round_trip(resume_service, user_id):
    data = sample_resume()
    resume_service.save(user_id, data)
    body = dump(resume_service.get(user_id))

    assert body["personalInfo"] == data["personalInfo"]
    assert body["summary"] == data["summary"]
    assert body["education"] == data["education"]
    assert body["experience"] == data["experience"]
    assert body["skills"] == data["skills"]
    assert [entry["institution"] for entry in body["education"]] == ["State University", "Tech Institute"]


def test_second_save_replaces_wholesale(resume_service, resume_store, user_id):
    first = resume_service.save(user_id, sample_resume())
    second = resume_service.save(user_id, {
        "personalInfo": {"fullName": "Jane S."},
        "summary": "Rewritten.",
    })

    assert resume_store.count_for_user(user_id) == 1
    assert second.id == first.id
    stored = resume_service.get(user_id)
    assert stored.summary == "Rewritten."
    assert stored.personal_info.full_name == "Jane S."
    assert stored.personal_info.phone == ""
    assert stored.education == []
    assert stored.experience == []
    assert stored.skills == []


def test_numeric_years_are_kept_as_text(resume_service, user_id):
    data = sample_resume()
    data["education"][0]["startYear"] = 2014
    saved = resume_service.save(user_id, data)
    assert saved.education[0].start_year == "2014"


def test_client_only_fields_are_dropped(resume_service, user_id):
    data = sample_resume()
    data["userId"] = 999
    data["_id"] = "abc"
    saved = resume_service.save(user_id, data)
    assert saved.user_id == user_id


@pytest.mark.parametrize("missing", ["personalInfo", "summary"])
def test_required_sections(resume_service, resume_store, user_id, missing):
    data = sample_resume()
    del data[missing]
    with pytest.raises(ValidationError, match="Personal info and summary are required"):
        resume_service.save(user_id, data)
    assert resume_store.count_for_user(user_id) == 0


def test_blank_summary_is_missing(resume_service, user_id):
    data = sample_resume()
    data["summary"] = "  "
    with pytest.raises(ValidationError):
        resume_service.save(user_id, data)


def test_malformed_sections(resume_service, user_id):
    data = sample_resume()
    data["education"] = [{"degree": "BSc"}]
    with pytest.raises(ValidationError, match="education"):
        resume_service.save(user_id, data)

    data = sample_resume()
    data["skills"] = "Python"
    with pytest.raises(ValidationError, match="skills"):
        resume_service.save(user_id, data)


def test_non_object_payload(resume_service, user_id):
    with pytest.raises(ValidationError):
        resume_service.save(user_id, ["not", "an", "object"])


def test_delete(resume_service, credential_store, user_id):
    resume_service.save(user_id, sample_resume())
    resume_service.delete(user_id)

    with pytest.raises(NotFoundError):
        resume_service.get(user_id)
    assert credential_store.get_by_id(user_id) is not None


def test_delete_without_resume(resume_service, user_id):
    with pytest.raises(NotFoundError):
        resume_service.delete(user_id)


def test_deleting_user_cascades_to_resume(resume_service, resume_store, credential_store, user_id):
    resume_service.save(user_id, sample_resume())
    assert credential_store.delete_user(user_id)
    assert resume_store.count_for_user(user_id) == 0


def test_resumes_are_isolated_per_user(resume_service, credential_store, user_id):
    other = credential_store.create_user(
        full_name="John Doe", password_hash="x", language="en", mobile="+1999",
    )
    resume_service.save(user_id, sample_resume())

    with pytest.raises(NotFoundError):
        resume_service.get(other.id)


def test_corrupt_stored_sections_are_reported(resume_service, database, user_id):
    resume_service.save(user_id, sample_resume())
    with database.session() as db:
        db.query(Resume).filter(Resume.user_id == user_id).update({"education": '[{"degree": 1}]'})

    with pytest.raises(InternalError):
        resume_service.get(user_id)


def test_insert_race_is_retried_as_update(resume_service, resume_store, user_id, monkeypatch):
    resume_service.save(user_id, sample_resume())
    original_write = ResumeStore._write
    calls = []

    def flaky_write(self, uid, values):
        calls.append(uid)
        if len(calls) == 1:
            raise IntegrityError("INSERT INTO resumes", {}, Exception("UNIQUE constraint failed"))
        return original_write(self, uid, values)

    monkeypatch.setattr(ResumeStore, "_write", flaky_write)
    data = sample_resume()
    data["summary"] = "After the race."
    saved = resume_service.save(user_id, data)

    assert len(calls) == 2
    assert saved.summary == "After the race."
    assert resume_store.count_for_user(user_id) == 1
