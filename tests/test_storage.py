"""Both storage backends must behave identically."""
from datetime import timedelta

import pytest

from db.memory_storage import MemStorage
from db.seed import ensure_admin, seed_storage
from db.sql_storage import SqlStorage
from models.schemas import (
    InsertBlogPost,
    InsertContactMessage,
    InsertProfile,
    InsertProject,
    InsertTimelineEntry,
    InsertUser,
    utcnow,
)
from tests.payloads import BLOG_POST, CONTACT, PROFILE, PROJECT, TIMELINE_ENTRY
from utils.errors import ConflictError, NotFoundError


@pytest.fixture(params=["memory", "sql"])
def store(request, tmp_path):
    if request.param == "memory":
        return MemStorage()
    return SqlStorage(f"sqlite:///{tmp_path / 'portfolio.db'}")


def project(**overrides):
    return InsertProject.model_validate(dict(PROJECT, **overrides))


def timeline(order, title="Developer"):
    return InsertTimelineEntry.model_validate(dict(TIMELINE_ENTRY, order=order, title=title))


def test_create_assigns_increasing_ids_and_timestamp(store):
    before = utcnow()
    first = store.create_project(project(title="One"))
    second = store.create_project(project(title="Two"))

    assert first.id == 1
    assert second.id > first.id
    assert before <= first.created_at <= utcnow()
    assert first.title == "One"
    assert first.tech_stack == ["Flask", "React"]
    assert first.live_url == "https://example.com"


def test_get_missing_returns_none(store):
    assert store.get_project(404) is None
    assert store.get_blog_post(404) is None
    assert store.get_timeline_entry(404) is None
    assert store.get_contact_message(404) is None
    assert store.get_user(404) is None
    assert store.get_profile() is None


def test_update_replaces_fields_keeps_id_and_created_at(store):
    created = store.create_project(project())
    updated = store.update_project(created.id, project(title="Renamed", techStack=["Go"], featured=False))

    assert updated.id == created.id
    assert updated.created_at == created.created_at
    assert updated.title == "Renamed"
    assert updated.tech_stack == ["Go"]
    assert store.get_project(created.id).title == "Renamed"


@pytest.mark.parametrize("method,payload", [
    ("update_project", lambda: project()),
    ("update_blog_post", lambda: InsertBlogPost.model_validate(BLOG_POST)),
    ("update_timeline_entry", lambda: timeline(1)),
])
def test_update_missing_raises_not_found(store, method, payload):
    with pytest.raises(NotFoundError):
        getattr(store, method)(999, payload())


def test_delete_is_idempotent(store):
    created = store.create_project(project())
    other = store.create_project(project(title="Other"))

    assert store.delete_project(created.id) is True
    assert store.delete_project(created.id) is False
    assert [p.id for p in store.get_all_projects()] == [other.id]


def test_ids_not_reused_after_delete(store):
    first = store.create_blog_post(InsertBlogPost.model_validate(BLOG_POST))
    store.delete_blog_post(first.id)
    second = store.create_blog_post(InsertBlogPost.model_validate(BLOG_POST))
    assert second.id > first.id
    assert second.published_at >= first.published_at


def test_timeline_sorted_by_order_then_insertion(store):
    store.create_timeline_entry(timeline(3, "c"))
    store.create_timeline_entry(timeline(1, "a"))
    store.create_timeline_entry(timeline(2, "b1"))
    store.create_timeline_entry(timeline(2, "b2"))

    entries = store.get_all_timeline_entries()
    assert [e.title for e in entries] == ["a", "b1", "b2", "c"]


def test_timeline_insert_between_leaves_existing_orders(store):
    low = store.create_timeline_entry(timeline(1, "low"))
    high = store.create_timeline_entry(timeline(10, "high"))
    store.create_timeline_entry(timeline(5, "middle"))

    entries = store.get_all_timeline_entries()
    assert [e.title for e in entries] == ["low", "middle", "high"]
    assert store.get_timeline_entry(low.id).order == 1
    assert store.get_timeline_entry(high.id).order == 10


def test_projects_listed_newest_first(store):
    older = store.create_project(project(title="Older"))
    newer = store.create_project(project(title="Newer"))
    assert [p.id for p in store.get_all_projects()] == [newer.id, older.id]


def test_contact_message_starts_unread_and_mark_read_is_monotonic(store):
    message = store.create_contact_message(InsertContactMessage.model_validate(CONTACT))
    assert message.is_read is False

    read = store.mark_contact_message_as_read(message.id)
    assert read.is_read is True
    assert read.created_at == message.created_at
    # marking again keeps it read
    assert store.mark_contact_message_as_read(message.id).is_read is True
    assert store.get_contact_message(message.id).is_read is True


def test_mark_missing_message_raises_not_found(store):
    with pytest.raises(NotFoundError):
        store.mark_contact_message_as_read(1)


def test_profile_is_singleton(store):
    first = store.upsert_profile(InsertProfile.model_validate(PROFILE))
    second = store.upsert_profile(InsertProfile.model_validate(dict(PROFILE, name="Alexandra")))

    assert second.id == first.id
    assert store.get_profile().name == "Alexandra"
    assert store.get_profile().skills == {"Python": 90, "React": 80}


def test_users_unique_username_and_roles(store):
    payload = InsertUser(username="sam", password="hash", name="Sam", email="sam@example.com")
    user = store.create_user(payload)
    assert user.role == "user"
    assert store.get_user_by_username("sam").id == user.id

    with pytest.raises(ConflictError):
        store.create_user(payload)

    promoted = store.update_user_role(user.id, "admin")
    assert promoted.role == "admin"
    with pytest.raises(NotFoundError):
        store.update_user_role(999, "admin")

    assert store.delete_user(user.id) is True
    assert store.get_all_users() == []


def test_session_store_roundtrip_and_expiry(store):
    sessions = store.session_store
    sessions.set("abc", {"user_id": 1}, utcnow() + timedelta(days=7))
    assert sessions.get("abc") == {"user_id": 1}

    sessions.set("old", {"user_id": 2}, utcnow() - timedelta(seconds=1))
    assert sessions.get("old") is None

    sessions.set("stale", {"user_id": 3}, utcnow() - timedelta(seconds=1))
    assert sessions.prune() == 1

    sessions.destroy("abc")
    assert sessions.get("abc") is None


def test_seed_fills_empty_collections_once(store):
    seed_storage(store)
    counts = (len(store.get_all_projects()), len(store.get_all_blog_posts()), len(store.get_all_timeline_entries()))
    assert all(counts)
    assert store.get_profile() is not None

    seed_storage(store)
    assert (len(store.get_all_projects()), len(store.get_all_blog_posts()),
            len(store.get_all_timeline_entries())) == counts


def test_ensure_admin_creates_once(store):
    admin = ensure_admin(store, "root", "secret")
    assert admin.role == "admin"
    assert ensure_admin(store, "root", "other").id == admin.id
    assert ensure_admin(store, None, None) is None
    assert len(store.get_all_users()) == 1


def test_sql_counters_resume_after_restart(tmp_path):
    url = f"sqlite:///{tmp_path / 'restart.db'}"
    first = SqlStorage(url)
    created = first.create_project(project())
    first.create_contact_message(InsertContactMessage.model_validate(CONTACT))

    reopened = SqlStorage(url)
    assert reopened.get_project(created.id).title == PROJECT["title"]
    assert reopened.create_project(project(title="Next")).id == created.id + 1
    assert reopened.ping() is True


def test_returned_records_are_detached_from_store(store):
    created = store.create_project(project())
    created.tech_stack.append("Leaked")
    store.get_project(created.id).tech_stack.append("Leaked")
    store.get_all_projects()[0].tech_stack.append("Leaked")
    assert store.get_project(created.id).tech_stack == ["Flask", "React"]

    store.upsert_profile(InsertProfile.model_validate(PROFILE))
    store.get_profile().skills["Python"] = 1
    assert store.get_profile().skills == {"Python": 90, "React": 80}
