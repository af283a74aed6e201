"""SQLAlchemy ORM models."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text, func

from inkwell.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Account(Base):
    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    username = Column(String(20), nullable=False)
    email = Column(String(254), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    profile_picture = Column(String(500))
    role = Column(String(10), nullable=False, default="user")
    auth_provider = Column(String(10), nullable=False, default="local")
    # NULL for local accounts; unique only among accounts that have one.
    provider_subject_id = Column(String(255), unique=True, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)


Index("uq_accounts_username_lower", func.lower(Account.username), unique=True)


class Post(Base):
    __tablename__ = "posts"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), nullable=False, index=True)
    author_name = Column(String(20))
    title = Column(String(255), unique=True, nullable=False)
    content = Column(Text, nullable=False)
    category = Column(String(20), nullable=False, index=True)
    image = Column(String(500), nullable=False)
    slug = Column(String(255), unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)


class Comment(Base):
    __tablename__ = "comments"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    content = Column(Text, nullable=False)
    post_id = Column(String(36), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), nullable=False, index=True)
    number_of_likes = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)


class CommentLike(Base):
    __tablename__ = "comment_likes"

    # No foreign key: a like for a missing comment is rolled back by the caller.
    comment_id = Column(String(36), primary_key=True)
    account_id = Column(String(36), primary_key=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)


class Download(Base):
    __tablename__ = "downloads"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False)
    filename = Column(String(255), nullable=False)
    mime_type = Column(String(127))
    size_bytes = Column(Integer, nullable=False, default=0)
    file_url = Column(String(1000), nullable=False)
    object_id = Column(String(255), nullable=False, unique=True)
    image_path = Column(String(1000), nullable=False)
    uploaded_by = Column(String(36), nullable=True, index=True)
    is_published = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)
