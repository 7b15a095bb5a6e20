# db/memory_storage.py
"""Volatile, dict-backed storage used for development and tests."""
import itertools
from datetime import datetime
from typing import Callable, Dict, Optional

from db.storage import SessionStore, Storage
from models.schemas import (
    BlogPost,
    ContactMessage,
    Profile,
    Project,
    TimelineEntry,
    User,
    utcnow,
)
from utils.errors import ConflictError, NotFoundError


class MemorySessionStore(SessionStore):
    def __init__(self):
        self._sessions: Dict[str, tuple] = {}

    def get(self, sid):
        entry = self._sessions.get(sid)
        if entry is None:
            return None
        data, expires_at = entry
        if expires_at <= utcnow():
            self._sessions.pop(sid, None)
            return None
        return dict(data)

    def set(self, sid, data, expires_at: datetime):
        self._sessions[sid] = (dict(data), expires_at)

    def destroy(self, sid):
        self._sessions.pop(sid, None)

    def prune(self):
        now = utcnow()
        expired = [sid for sid, (_, exp) in self._sessions.items() if exp <= now]
        for sid in expired:
            del self._sessions[sid]
        return len(expired)


def _detached(record):
    # callers get copies; mutating a result never reaches the store
    return None if record is None else record.model_copy(deep=True)


class _Collection:
    """Records of one entity type, keyed by id."""

    def __init__(self, model, label: str, sort_key: Callable, reverse: bool = False):
        self.model = model
        self.label = label
        self.sort_key = sort_key
        self.reverse = reverse
        self.records: Dict[int, object] = {}
        self._ids = itertools.count(1)

    def all(self):
        ordered = sorted(self.records.values(), key=self.sort_key, reverse=self.reverse)
        return [_detached(record) for record in ordered]

    def get(self, record_id):
        return _detached(self.records.get(record_id))

    def find(self, predicate):
        return _detached(next((r for r in self.records.values() if predicate(r)), None))

    def insert(self, payload, **server_fields):
        record = self.model(id=next(self._ids), **payload.model_dump(), **server_fields)
        self.records[record.id] = record
        return _detached(record)

    def replace(self, record_id, **fields):
        existing = self.records.get(record_id)
        if existing is None:
            raise NotFoundError(self.label, record_id)
        updated = existing.model_copy(update=fields)
        self.records[record_id] = updated
        return _detached(updated)

    def remove(self, record_id):
        return self.records.pop(record_id, None) is not None


class MemStorage(Storage):
    def __init__(self):
        self._session_store = MemorySessionStore()
        self._users = _Collection(User, "User", lambda u: u.id)
        self._projects = _Collection(Project, "Project", lambda p: (p.created_at, p.id), reverse=True)
        self._blog_posts = _Collection(BlogPost, "Blog post", lambda p: (p.published_at, p.id), reverse=True)
        self._timeline = _Collection(TimelineEntry, "Timeline entry", lambda e: (e.order, e.id))
        self._messages = _Collection(ContactMessage, "Contact message", lambda m: (m.created_at, m.id), reverse=True)
        self._profile: Optional[Profile] = None
        self._profile_ids = itertools.count(1)

    @property
    def session_store(self):
        return self._session_store

    # ---- Users ----
    def get_user(self, user_id):
        return self._users.get(user_id)

    def get_user_by_username(self, username):
        return self._users.find(lambda u: u.username == username)

    def get_all_users(self):
        return self._users.all()

    def create_user(self, payload):
        if self.get_user_by_username(payload.username) is not None:
            raise ConflictError(f"Username {payload.username!r} already exists")
        return self._users.insert(payload)

    def update_user_role(self, user_id, role):
        return self._users.replace(user_id, role=role)

    def delete_user(self, user_id):
        return self._users.remove(user_id)

    # ---- Projects ----
    def get_all_projects(self):
        return self._projects.all()

    def get_project(self, project_id):
        return self._projects.get(project_id)

    def create_project(self, payload):
        return self._projects.insert(payload, created_at=utcnow())

    def update_project(self, project_id, payload):
        return self._projects.replace(project_id, **payload.model_dump())

    def delete_project(self, project_id):
        return self._projects.remove(project_id)

    # ---- Blog posts ----
    def get_all_blog_posts(self):
        return self._blog_posts.all()

    def get_blog_post(self, post_id):
        return self._blog_posts.get(post_id)

    def create_blog_post(self, payload):
        return self._blog_posts.insert(payload, published_at=utcnow())

    def update_blog_post(self, post_id, payload):
        return self._blog_posts.replace(post_id, **payload.model_dump())

    def delete_blog_post(self, post_id):
        return self._blog_posts.remove(post_id)

    # ---- Timeline entries ----
    def get_all_timeline_entries(self):
        return self._timeline.all()

    def get_timeline_entry(self, entry_id):
        return self._timeline.get(entry_id)

    def create_timeline_entry(self, payload):
        return self._timeline.insert(payload)

    def update_timeline_entry(self, entry_id, payload):
        return self._timeline.replace(entry_id, **payload.model_dump())

    def delete_timeline_entry(self, entry_id):
        return self._timeline.remove(entry_id)

    # ---- Contact messages ----
    def get_all_contact_messages(self):
        return self._messages.all()

    def get_contact_message(self, message_id):
        return self._messages.get(message_id)

    def create_contact_message(self, payload):
        return self._messages.insert(payload, is_read=False, created_at=utcnow())

    def mark_contact_message_as_read(self, message_id):
        return self._messages.replace(message_id, is_read=True)

    def delete_contact_message(self, message_id):
        return self._messages.remove(message_id)

    # ---- Profile ----
    def get_profile(self):
        return _detached(self._profile)

    def upsert_profile(self, payload):
        if self._profile is None:
            self._profile = Profile(id=next(self._profile_ids), **payload.model_dump())
        else:
            self._profile = self._profile.model_copy(update=payload.model_dump())
        return _detached(self._profile)
