# -*- coding: utf-8 -*-
"""Location: ./execgateway/db.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

ORM models for the user and file persistence endpoints.

The schema is created by the connection manager the first time the backing
store is reached, mirroring ``Base.metadata.create_all`` bootstrapping.
"""

# Standard
from datetime import datetime, timezone
from typing import List, Optional
import uuid

# Third-Party
from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def utc_now() -> datetime:
    """Current time in UTC.

    Returns:
        datetime: Timezone-aware timestamp.
    """
    return datetime.now(timezone.utc)


def new_id() -> str:
    """Generate a primary key.

    Returns:
        str: Hex UUID4.

    Examples:
        >>> len(new_id())
        32
    """
    return uuid.uuid4().hex


class Base(DeclarativeBase):
    """Declarative base for gateway models."""


class User(Base):
    """A registered user."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    full_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)

    files: Mapped[List["File"]] = relationship(back_populates="owner", cascade="all, delete-orphan")


class File(Base):
    """A source file saved from the editor."""

    __tablename__ = "files"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    language: Mapped[str] = mapped_column(String(64), nullable=False)
    content: Mapped[str] = mapped_column(Text, default="", nullable=False)
    owner_id: Mapped[Optional[str]] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    owner: Mapped[Optional[User]] = relationship(back_populates="files")
