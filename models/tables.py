# models/tables.py
from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base

from models.schemas import utcnow

Base = declarative_base()


class UserRow(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=False)
    username = Column(String(80), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="user")


class ProjectRow(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, autoincrement=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    thumbnail = Column(String(1024), nullable=False)
    live_url = Column(String(1024), nullable=True)
    github_url = Column(String(1024), nullable=True)
    category = Column(String(100), nullable=False)
    tech_stack = Column(JSON, nullable=False, default=list)
    featured = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)


class BlogPostRow(Base):
    __tablename__ = "blog_posts"

    id = Column(Integer, primary_key=True, autoincrement=False)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    thumbnail = Column(String(1024), nullable=False)
    excerpt = Column(Text, nullable=False)
    category = Column(String(100), nullable=False)
    published_at = Column(DateTime, nullable=False, default=utcnow)


class TimelineEntryRow(Base):
    __tablename__ = "timeline_entries"

    id = Column(Integer, primary_key=True, autoincrement=False)
    title = Column(String(255), nullable=False)
    company = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    date_range = Column(String(100), nullable=False)
    skills = Column(JSON, nullable=False, default=list)
    order = Column(Integer, nullable=False, index=True)


class ContactMessageRow(Base):
    __tablename__ = "contact_messages"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)


class ProfileRow(Base):
    __tablename__ = "profile"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(200), nullable=False)
    title = Column(String(200), nullable=False)
    bio = Column(Text, nullable=False)
    avatar = Column(String(1024), nullable=False)
    email = Column(String(255), nullable=False)
    location = Column(String(200), nullable=False)
    resume_url = Column(String(1024), nullable=False)
    social_links = Column(JSON, nullable=False, default=dict)
    skills = Column(JSON, nullable=False, default=dict)


class SessionRow(Base):
    __tablename__ = "sessions"

    sid = Column(String(128), primary_key=True)
    # JSON-encoded session payload
    data = Column(Text, nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)
