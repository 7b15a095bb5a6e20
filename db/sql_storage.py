# db/sql_storage.py
"""
SQLAlchemy-backed storage, durable across restarts.

Ids are handed out by process-local counters that start one past the
largest id found in each table at startup. Two processes writing to the
same database can therefore race on ``create``; run a single writer.
"""
import itertools
import json
import logging
from contextlib import contextmanager

from sqlalchemy import func, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from db.database import auto_migrate, init_db, make_engine, make_session_factory
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
from models.tables import (
    BlogPostRow,
    ContactMessageRow,
    ProfileRow,
    ProjectRow,
    SessionRow,
    TimelineEntryRow,
    UserRow,
)
from utils.errors import ConflictError, NotFoundError, StorageError

logger = logging.getLogger(__name__)


def _to_model(model, row):
    return model.model_validate({c.key: getattr(row, c.key) for c in row.__table__.columns})


@contextmanager
def _transaction(session_factory):
    session = session_factory()
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("Database operation failed")
        raise StorageError("Database operation failed") from e
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


class SqlSessionStore(SessionStore):
    def __init__(self, session_factory):
        self._Session = session_factory

    def get(self, sid):
        with _transaction(self._Session) as session:
            row = session.get(SessionRow, sid)
            if row is None:
                return None
            if row.expires_at <= utcnow():
                session.delete(row)
                return None
            return json.loads(row.data)

    def set(self, sid, data, expires_at):
        with _transaction(self._Session) as session:
            session.merge(SessionRow(sid=sid, data=json.dumps(data), expires_at=expires_at))

    def destroy(self, sid):
        with _transaction(self._Session) as session:
            session.query(SessionRow).filter(SessionRow.sid == sid).delete()

    def prune(self):
        with _transaction(self._Session) as session:
            return session.query(SessionRow).filter(SessionRow.expires_at <= utcnow()).delete()


class SqlStorage(Storage):
    def __init__(self, database_url: str, echo: bool = False, migrate: bool = True):
        self.engine = make_engine(database_url, echo=echo)
        if migrate:
            auto_migrate(self.engine)
        else:
            init_db(self.engine)
        self._Session = make_session_factory(self.engine)
        self._session_store = SqlSessionStore(self._Session)
        self._ids = {}
        self._reconcile_ids()

    def _reconcile_ids(self):
        """Start every id counter one past the current maximum id."""
        with _transaction(self._Session) as session:
            for row_cls in (UserRow, ProjectRow, BlogPostRow, TimelineEntryRow, ContactMessageRow, ProfileRow):
                max_id = session.query(func.max(row_cls.id)).scalar() or 0
                self._ids[row_cls] = itertools.count(max_id + 1)
                logger.debug("%s: next id %d", row_cls.__tablename__, max_id + 1)

    @property
    def session_store(self):
        return self._session_store

    def ping(self):
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    # ---- generic helpers ----
    def _all(self, row_cls, model, *order_by):
        with _transaction(self._Session) as session:
            rows = session.query(row_cls).order_by(*order_by).all()
            return [_to_model(model, row) for row in rows]

    def _get(self, row_cls, model, record_id):
        with _transaction(self._Session) as session:
            row = session.get(row_cls, record_id)
            return _to_model(model, row) if row is not None else None

    def _insert(self, row_cls, model, payload, **server_fields):
        with _transaction(self._Session) as session:
            row = row_cls(id=next(self._ids[row_cls]), **payload.model_dump(), **server_fields)
            session.add(row)
            session.flush()
            return _to_model(model, row)

    def _replace(self, row_cls, model, label, record_id, **fields):
        with _transaction(self._Session) as session:
            row = session.get(row_cls, record_id)
            if row is None:
                raise NotFoundError(label, record_id)
            for key, value in fields.items():
                setattr(row, key, value)
            session.flush()
            return _to_model(model, row)

    def _remove(self, row_cls, record_id):
        with _transaction(self._Session) as session:
            return session.query(row_cls).filter(row_cls.id == record_id).delete() > 0

    # ---- Users ----
    def get_user(self, user_id):
        return self._get(UserRow, User, user_id)

    def get_user_by_username(self, username):
        with _transaction(self._Session) as session:
            row = session.query(UserRow).filter(UserRow.username == username).first()
            return _to_model(User, row) if row is not None else None

    def get_all_users(self):
        return self._all(UserRow, User, UserRow.id)

    def create_user(self, payload):
        if self.get_user_by_username(payload.username) is not None:
            raise ConflictError(f"Username {payload.username!r} already exists")
        try:
            return self._insert(UserRow, User, payload)
        except StorageError as e:
            if isinstance(e.__cause__, IntegrityError):
                raise ConflictError(f"Username {payload.username!r} already exists") from e
            raise

    def update_user_role(self, user_id, role):
        return self._replace(UserRow, User, "User", user_id, role=role)

    def delete_user(self, user_id):
        return self._remove(UserRow, user_id)

    # ---- Projects ----
    def get_all_projects(self):
        return self._all(ProjectRow, Project, ProjectRow.created_at.desc(), ProjectRow.id.desc())

    def get_project(self, project_id):
        return self._get(ProjectRow, Project, project_id)

    def create_project(self, payload):
        return self._insert(ProjectRow, Project, payload, created_at=utcnow())

    def update_project(self, project_id, payload):
        return self._replace(ProjectRow, Project, "Project", project_id, **payload.model_dump())

    def delete_project(self, project_id):
        return self._remove(ProjectRow, project_id)

    # ---- Blog posts ----
    def get_all_blog_posts(self):
        return self._all(BlogPostRow, BlogPost, BlogPostRow.published_at.desc(), BlogPostRow.id.desc())

    def get_blog_post(self, post_id):
        return self._get(BlogPostRow, BlogPost, post_id)

    def create_blog_post(self, payload):
        return self._insert(BlogPostRow, BlogPost, payload, published_at=utcnow())

    def update_blog_post(self, post_id, payload):
        return self._replace(BlogPostRow, BlogPost, "Blog post", post_id, **payload.model_dump())

    def delete_blog_post(self, post_id):
        return self._remove(BlogPostRow, post_id)

    # ---- Timeline entries ----
    def get_all_timeline_entries(self):
        return self._all(TimelineEntryRow, TimelineEntry, TimelineEntryRow.order, TimelineEntryRow.id)

    def get_timeline_entry(self, entry_id):
        return self._get(TimelineEntryRow, TimelineEntry, entry_id)

    def create_timeline_entry(self, payload):
        return self._insert(TimelineEntryRow, TimelineEntry, payload)

    def update_timeline_entry(self, entry_id, payload):
        return self._replace(TimelineEntryRow, TimelineEntry, "Timeline entry", entry_id, **payload.model_dump())

    def delete_timeline_entry(self, entry_id):
        return self._remove(TimelineEntryRow, entry_id)

    # ---- Contact messages ----
    def get_all_contact_messages(self):
        return self._all(
            ContactMessageRow, ContactMessage, ContactMessageRow.created_at.desc(), ContactMessageRow.id.desc()
        )

    def get_contact_message(self, message_id):
        return self._get(ContactMessageRow, ContactMessage, message_id)

    def create_contact_message(self, payload):
        return self._insert(ContactMessageRow, ContactMessage, payload, is_read=False, created_at=utcnow())

    def mark_contact_message_as_read(self, message_id):
        return self._replace(ContactMessageRow, ContactMessage, "Contact message", message_id, is_read=True)

    def delete_contact_message(self, message_id):
        return self._remove(ContactMessageRow, message_id)

    # ---- Profile ----
    def get_profile(self):
        with _transaction(self._Session) as session:
            row = session.query(ProfileRow).order_by(ProfileRow.id).first()
            return _to_model(Profile, row) if row is not None else None

    def upsert_profile(self, payload):
        with _transaction(self._Session) as session:
            row = session.query(ProfileRow).order_by(ProfileRow.id).first()
            if row is None:
                row = ProfileRow(id=next(self._ids[ProfileRow]), **payload.model_dump())
                session.add(row)
            else:
                for key, value in payload.model_dump().items():
                    setattr(row, key, value)
            session.flush()
            return _to_model(Profile, row)
