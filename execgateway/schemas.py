# -*- coding: utf-8 -*-
"""Location: ./execgateway/schemas.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Pydantic schemas for the gateway's HTTP surface.

Execution requests have no schema here: the body goes to the engine as
submitted and the engine decides what it accepts.
"""

# Standard
from datetime import datetime
from typing import Optional

# Third-Party
from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Health check payload."""

    status: str = "ok"
    environment: Optional[str] = None


class UserCreate(BaseModel):
    """Fields accepted when creating a user."""

    username: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    full_name: Optional[str] = Field(None, max_length=255)


class UserRead(BaseModel):
    """User as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str
    full_name: Optional[str] = None
    created_at: datetime


class FileCreate(BaseModel):
    """Fields accepted when saving a file."""

    name: str = Field(..., min_length=1, max_length=255)
    language: str = Field(..., min_length=1, max_length=64)
    content: str = ""
    owner_id: Optional[str] = None


class FileUpdate(BaseModel):
    """Partial file update; omitted fields are left unchanged."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    language: Optional[str] = Field(None, min_length=1, max_length=64)
    content: Optional[str] = None


class FileRead(BaseModel):
    """File as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    language: str
    content: str
    owner_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime
