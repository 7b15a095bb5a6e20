# models/schemas.py
"""
Entity schemas for the portfolio API.

Every entity is a pydantic model. JSON uses camelCase keys (``liveUrl``,
``createdAt``) while Python code uses the snake_case field names; both are
accepted on input.

Insert variants (the payloads clients send on create/update) are derived
from the full models by dropping the server-assigned fields, so the read
and write shapes cannot drift apart.
"""
from datetime import datetime, timezone
from typing import Annotated, Dict, List, Literal, Optional, Type

from pydantic import BaseModel, ConfigDict, EmailStr, Field, create_model
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every backend stores and returns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Entity(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        strict=True,
        extra="ignore",
    )

    id: int


Role = Literal["admin", "user"]
Percentage = Annotated[int, Field(ge=0, le=100)]


class User(Entity):
    username: str = Field(..., min_length=1, max_length=80)
    # hashed credential, never serialized to clients
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    role: Role = "user"


class Project(Entity):
    title: str
    description: str
    thumbnail: str
    live_url: Optional[str] = None
    github_url: Optional[str] = None
    category: str
    tech_stack: List[str]
    featured: bool = False
    created_at: datetime


class BlogPost(Entity):
    title: str
    content: str
    thumbnail: str
    excerpt: str
    category: str
    published_at: datetime


class TimelineEntry(Entity):
    title: str
    company: str
    description: str
    date_range: str
    skills: List[str]
    order: int


class ContactMessage(Entity):
    name: str = Field(..., min_length=1)
    email: EmailStr
    subject: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    is_read: bool = False
    created_at: datetime


class Profile(Entity):
    name: str
    title: str
    bio: str
    avatar: str
    email: EmailStr
    location: str
    resume_url: str
    # platform name -> URL (github, linkedin, twitter, dev, ...)
    social_links: Dict[str, str]
    # skill name -> proficiency percentage
    skills: Dict[str, Percentage]


def insert_schema(model: Type[Entity], *omit: str, name: Optional[str] = None) -> Type[BaseModel]:
    """Build the create/update payload model for ``model``.

    ``id`` is always dropped; ``omit`` names the other server-assigned
    fields. Field types, defaults and constraints are carried over as-is.
    """
    dropped = {"id", *omit}
    fields = {
        field_name: (info.annotation, info)
        for field_name, info in model.model_fields.items()
        if field_name not in dropped
    }
    return create_model(
        name or f"Insert{model.__name__}",
        __config__=model.model_config,
        **fields,
    )


InsertUser = insert_schema(User)
InsertProject = insert_schema(Project, "created_at")
InsertBlogPost = insert_schema(BlogPost, "published_at")
InsertTimelineEntry = insert_schema(TimelineEntry)
InsertContactMessage = insert_schema(ContactMessage, "created_at", "is_read")
InsertProfile = insert_schema(Profile)

# Self-registration never lets the client pick a role.
RegisterSchema = insert_schema(User, "role", name="RegisterSchema")


class LoginSchema(BaseModel):
    model_config = ConfigDict(strict=True)

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RoleUpdateSchema(BaseModel):
    model_config = ConfigDict(strict=True)

    role: Role
