# db/storage.py
"""
Storage contract shared by the in-memory and SQL backends.

Route handlers only ever talk to a ``Storage``; which implementation backs
it is decided once in ``create_app``.

Conventions for every entity:
  * ``get_<entity>(id)`` returns ``None`` when the record does not exist.
  * ``create_<entity>(payload)`` assigns the next id (and the creation
    timestamp where the entity has one) and returns the stored record.
  * ``update_<entity>(id, payload)`` raises ``NotFoundError`` for an unknown
    id, otherwise replaces every mutable field. Ids and creation timestamps
    never change.
  * ``delete_<entity>(id)`` is idempotent. It returns True when a record was
    removed and False when there was nothing to remove.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from models.schemas import (
    BlogPost,
    ContactMessage,
    Profile,
    Project,
    TimelineEntry,
    User,
)


class SessionStore(ABC):
    """Server-side session data keyed by the id carried in the cookie."""

    @abstractmethod
    def get(self, sid: str) -> Optional[dict]:
        """Return the session data, or None if unknown or expired."""

    @abstractmethod
    def set(self, sid: str, data: dict, expires_at: datetime) -> None:
        ...

    @abstractmethod
    def destroy(self, sid: str) -> None:
        ...

    @abstractmethod
    def prune(self) -> int:
        """Drop expired sessions and return how many were removed."""


class Storage(ABC):

    @property
    @abstractmethod
    def session_store(self) -> SessionStore:
        ...

    def ping(self) -> bool:
        """Health check. Raises if the backing store is unreachable."""
        return True

    # ---- Users ----
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        ...

    @abstractmethod
    def get_all_users(self) -> List[User]:
        ...

    @abstractmethod
    def create_user(self, payload) -> User:
        """Raises ConflictError when the username is taken."""

    @abstractmethod
    def update_user_role(self, user_id: int, role: str) -> User:
        ...

    @abstractmethod
    def delete_user(self, user_id: int) -> bool:
        ...

    # ---- Projects ----
    @abstractmethod
    def get_all_projects(self) -> List[Project]:
        ...

    @abstractmethod
    def get_project(self, project_id: int) -> Optional[Project]:
        ...

    @abstractmethod
    def create_project(self, payload) -> Project:
        ...

    @abstractmethod
    def update_project(self, project_id: int, payload) -> Project:
        ...

    @abstractmethod
    def delete_project(self, project_id: int) -> bool:
        ...

    # ---- Blog posts ----
    @abstractmethod
    def get_all_blog_posts(self) -> List[BlogPost]:
        ...

    @abstractmethod
    def get_blog_post(self, post_id: int) -> Optional[BlogPost]:
        ...

    @abstractmethod
    def create_blog_post(self, payload) -> BlogPost:
        ...

    @abstractmethod
    def update_blog_post(self, post_id: int, payload) -> BlogPost:
        ...

    @abstractmethod
    def delete_blog_post(self, post_id: int) -> bool:
        ...

    # ---- Timeline entries ----
    @abstractmethod
    def get_all_timeline_entries(self) -> List[TimelineEntry]:
        """Entries sorted by ``order``, ties kept in insertion order."""

    @abstractmethod
    def get_timeline_entry(self, entry_id: int) -> Optional[TimelineEntry]:
        ...

    @abstractmethod
    def create_timeline_entry(self, payload) -> TimelineEntry:
        ...

    @abstractmethod
    def update_timeline_entry(self, entry_id: int, payload) -> TimelineEntry:
        ...

    @abstractmethod
    def delete_timeline_entry(self, entry_id: int) -> bool:
        ...

    # ---- Contact messages ----
    @abstractmethod
    def get_all_contact_messages(self) -> List[ContactMessage]:
        ...

    @abstractmethod
    def get_contact_message(self, message_id: int) -> Optional[ContactMessage]:
        ...

    @abstractmethod
    def create_contact_message(self, payload) -> ContactMessage:
        """New messages always start unread."""

    @abstractmethod
    def mark_contact_message_as_read(self, message_id: int) -> ContactMessage:
        ...

    @abstractmethod
    def delete_contact_message(self, message_id: int) -> bool:
        ...

    # ---- Profile (singleton) ----
    @abstractmethod
    def get_profile(self) -> Optional[Profile]:
        ...

    @abstractmethod
    def upsert_profile(self, payload) -> Profile:
        """Create the profile if none exists, otherwise update it in place."""
