# -*- coding: utf-8 -*-
"""Location: ./execgateway/routers/user_router.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

User persistence endpoints mounted under ``/api/v1/user``.
"""

# Standard
from typing import List

# Third-Party
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

# First-Party
from execgateway.db import User
from execgateway.schemas import UserCreate, UserRead
from execgateway.services.connection_manager import get_db
from execgateway.services.logging_service import LoggingService

logging_service = LoggingService()
logger = logging_service.get_logger(__name__)

router = APIRouter(prefix="/api/v1/user", tags=["users"])


async def _get_user_or_404(db: AsyncSession, user_id: str) -> User:
    user = await db.get(User, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"User not found: {user_id}")
    return user


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(user_in: UserCreate, db: AsyncSession = Depends(get_db)) -> User:
    """Register a user.

    Raises:
        HTTPException: 409 when the username or email is taken.
    """
    user = User(**user_in.model_dump())
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username or email already registered")
    await db.refresh(user)
    logger.info(f"Created user {user.id}")
    return user


@router.get("/", response_model=List[UserRead])
async def list_users(db: AsyncSession = Depends(get_db)) -> List[User]:
    result = await db.execute(select(User).order_by(User.created_at))
    return list(result.scalars().all())


@router.get("/{user_id}", response_model=UserRead)
async def get_user(user_id: str, db: AsyncSession = Depends(get_db)) -> User:
    return await _get_user_or_404(db, user_id)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: str, db: AsyncSession = Depends(get_db)) -> Response:
    """Delete a user together with their files."""
    user = await _get_user_or_404(db, user_id)
    await db.delete(user)
    await db.commit()
    logger.info(f"Deleted user {user_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
