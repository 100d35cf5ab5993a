import pytest

from skillbridge.db import models, schemas
from skillbridge.db.errors import ConstraintViolation
from skillbridge.db.repositories import users as user_repo


def _freelancer(user_factory, email, **extra):
    return user_factory(models.UserType.FREELANCER, email=email, **extra)


class TestUserCrud:

    def test_create_get_update_delete(self, db_session, user_factory):
        user = user_factory(models.UserType.CLIENT, email="owner@example.com", company="Acme")
        fetched = user_repo.get_user(db_session, user.id)
        assert fetched.company == "Acme"

        updated = user_repo.update_user(
            db_session, user.id, schemas.UserUpdate(location="Berlin", skills=["Hiring"])
        )
        assert updated.location == "Berlin"
        assert list(updated.skills) == ["Hiring"]
        assert updated.company == "Acme"

        assert user_repo.delete_user(db_session, user.id) is True
        assert user_repo.get_user(db_session, user.id) is None
        assert user_repo.delete_user(db_session, user.id) is False

    def test_missing_rows_are_absent_not_placeholders(self, db_session):
        assert user_repo.get_user(db_session, 404) is None
        assert user_repo.update_user(db_session, 404, schemas.UserUpdate(bio="x")) is None

    def test_get_users_in_insertion_order(self, db_session, user_factory):
        a = user_factory()
        b = user_factory()
        assert [u.id for u in user_repo.get_users(db_session)] == [a.id, b.id]

    def test_duplicate_email_rejected_and_original_kept(self, db_session, user_factory):
        first = user_factory(email="dup@example.com", name="First")
        with pytest.raises(ConstraintViolation):
            user_factory(email="dup@example.com", name="Second")

        found = user_repo.find_by_email(db_session, "dup@example.com")
        assert found.id == first.id
        assert found.name == "First"
        assert db_session.query(models.User).count() == 1

    def test_invalid_update_leaves_row_unchanged(self, db_session, user_factory):
        user = user_factory(name="Original")
        bad = schemas.UserUpdate.model_construct(name="X", bio="changed")
        with pytest.raises(ConstraintViolation):
            user_repo.update_user(db_session, user.id, bad)
        reloaded = user_repo.get_user(db_session, user.id)
        assert reloaded.name == "Original"
        assert reloaded.bio is None


class TestUserLookups:

    def test_find_by_email_is_exact(self, db_session, user_factory):
        user = user_factory(email="carol@example.com")
        assert user_repo.find_by_email(db_session, "carol@example.com").id == user.id
        assert user_repo.find_by_email(db_session, "CAROL@example.com") is None
        assert user_repo.find_by_email(db_session, "nobody@example.com") is None

    def test_find_by_email_and_user_type(self, db_session, user_factory):
        user = user_factory(models.UserType.FREELANCER, email="dev@example.com")
        assert user_repo.find_by_email_and_user_type(
            db_session, "dev@example.com", models.UserType.FREELANCER
        ).id == user.id
        assert user_repo.find_by_email_and_user_type(
            db_session, "dev@example.com", models.UserType.CLIENT
        ) is None

    def test_exists_by_email(self, db_session, user_factory):
        assert user_repo.exists_by_email(db_session, "eve@example.com") is False
        user_factory(email="eve@example.com")
        assert user_repo.exists_by_email(db_session, "eve@example.com") is True
        assert user_repo.exists_by_email(db_session, "Eve@example.com") is False


class TestFreelancerSearch:

    @pytest.fixture
    def population(self, user_factory):
        return {
            "berlin_cheap": _freelancer(user_factory, "f1@example.com", location="Berlin, DE", hourly_rate=20.0),
            "berlin_pricey": _freelancer(
                user_factory, "f2@example.com", location="berlin", hourly_rate=80.0, availability="busy"
            ),
            "paris": _freelancer(user_factory, "f3@example.com", location="Paris", hourly_rate=50.0),
            "client": user_factory(models.UserType.CLIENT, email="c1@example.com", location="Berlin"),
        }

    def test_no_filters_returns_every_freelancer(self, db_session, population):
        page = user_repo.find_freelancers(db_session)
        assert [u.email for u in page.items] == ["f1@example.com", "f2@example.com", "f3@example.com"]
        assert page.total_items == 3

    def test_location_is_case_insensitive_substring(self, db_session, population):
        page = user_repo.find_freelancers(db_session, location="BERLIN")
        assert {u.email for u in page.items} == {"f1@example.com", "f2@example.com"}

    def test_rate_bounds_are_inclusive(self, db_session, population):
        page = user_repo.find_freelancers(db_session, min_rate=20.0, max_rate=50.0)
        assert {u.email for u in page.items} == {"f1@example.com", "f3@example.com"}

    def test_availability_exact(self, db_session, population):
        page = user_repo.find_freelancers(db_session, availability="busy")
        assert [u.email for u in page.items] == ["f2@example.com"]
        assert user_repo.find_freelancers(db_session, availability="Busy").total_items == 0

    def test_filters_combine(self, db_session, population):
        page = user_repo.find_freelancers(db_session, location="berlin", max_rate=30)
        assert [u.email for u in page.items] == ["f1@example.com"]

    def test_paging(self, db_session, population):
        first = user_repo.find_freelancers(db_session, skip=0, limit=2)
        second = user_repo.find_freelancers(db_session, skip=2, limit=2)
        assert len(first.items) == 2 and first.has_next
        assert len(second.items) == 1 and not second.has_next
        assert first.total_pages == 2

    def test_location_wildcards_are_literal(self, db_session, user_factory):
        _freelancer(user_factory, "pct@example.com", location="100% remote")
        _freelancer(user_factory, "other@example.com", location="Office")
        page = user_repo.find_freelancers(db_session, location="%")
        assert [u.email for u in page.items] == ["pct@example.com"]


class TestFreelancersBySkills:

    def test_matches_any_skill_ignoring_case(self, db_session, user_factory):
        py = _freelancer(user_factory, "py@example.com", skills=["Python", "Django"])
        go = _freelancer(user_factory, "go@example.com", skills=["GO"])
        _freelancer(user_factory, "js@example.com", skills=["JavaScript"])
        user_factory(models.UserType.CLIENT, email="client@example.com", skills=["python"])

        page = user_repo.find_freelancers_by_skills(db_session, ["python", "go"])
        assert [u.id for u in page.items] == [py.id, go.id]
        assert page.total_items == 2

    def test_user_with_several_matches_listed_once(self, db_session, user_factory):
        both = _freelancer(user_factory, "both@example.com", skills=["Python", "Go"])
        page = user_repo.find_freelancers_by_skills(db_session, ["PYTHON", "go"])
        assert [u.id for u in page.items] == [both.id]
        assert page.total_items == 1

    def test_empty_skill_list_matches_nothing(self, db_session, user_factory):
        _freelancer(user_factory, "py@example.com", skills=["Python"])
        assert user_repo.find_freelancers_by_skills(db_session, []).items == []


class TestEmailKeptVerbatim:

    def test_mixed_case_domain_found_exactly(self, db_session, user_factory):
        user = user_factory(email="Ann@Example.COM")
        assert user.email == "Ann@Example.COM"
        assert user_repo.exists_by_email(db_session, "Ann@Example.COM") is True
        assert user_repo.find_by_email(db_session, "Ann@Example.COM").id == user.id
        assert user_repo.exists_by_email(db_session, "Ann@example.com") is False

    def test_emails_differing_in_domain_case_are_distinct(self, db_session, user_factory):
        upper = user_factory(email="bob@Example.com")
        lower = user_factory(email="bob@example.com")
        assert upper.id != lower.id
        assert user_repo.find_by_email(db_session, "bob@Example.com").id == upper.id

    def test_update_keeps_email_as_given(self, db_session, user_factory):
        user = user_factory()
        updated = user_repo.update_user(db_session, user.id, schemas.UserUpdate(email="New.Mail@Example.ORG"))
        assert updated.email == "New.Mail@Example.ORG"


def test_clearing_availability_restores_default(db_session, user_factory):
    user = user_factory(models.UserType.FREELANCER, availability="busy")
    updated = user_repo.update_user(db_session, user.id, schemas.UserUpdate(availability=None))
    assert updated.availability == models.DEFAULT_AVAILABILITY


def test_owned_collections_cascade_deletes_without_refresh():
    for rel in (models.User.projects, models.User.proposals, models.Project.proposals):
        cascade = rel.property.cascade
        assert cascade.delete and cascade.save_update
        assert not cascade.refresh_expire


def test_refreshing_a_user_keeps_pending_project_edits(db_session, client_user, project_factory):
    project = project_factory(client_user, title="Before")
    assert client_user.projects == [project]
    project.title = "Edited"
    db_session.refresh(client_user)
    assert project.title == "Edited"
