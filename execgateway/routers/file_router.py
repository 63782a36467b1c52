# -*- coding: utf-8 -*-
"""Location: ./execgateway/routers/file_router.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Source file persistence endpoints mounted under ``/api/v1/file``.
"""

# Standard
from typing import List, Optional

# Third-Party
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

# First-Party
from execgateway.db import File, User
from execgateway.schemas import FileCreate, FileRead, FileUpdate
from execgateway.services.connection_manager import get_db
from execgateway.services.logging_service import LoggingService

logging_service = LoggingService()
logger = logging_service.get_logger(__name__)

router = APIRouter(prefix="/api/v1/file", tags=["files"])


async def _get_file_or_404(db: AsyncSession, file_id: str) -> File:
    file = await db.get(File, file_id)
    if file is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"File not found: {file_id}")
    return file


@router.post("/", response_model=FileRead, status_code=status.HTTP_201_CREATED)
async def create_file(file_in: FileCreate, db: AsyncSession = Depends(get_db)) -> File:
    """Save a new file.

    Raises:
        HTTPException: 404 when ``owner_id`` names an unknown user.
    """
    if file_in.owner_id is not None and await db.get(User, file_in.owner_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"User not found: {file_in.owner_id}")
    file = File(**file_in.model_dump())
    db.add(file)
    await db.commit()
    await db.refresh(file)
    logger.info(f"Created file {file.id} ({file.name})")
    return file


@router.get("/", response_model=List[FileRead])
async def list_files(owner_id: Optional[str] = None, db: AsyncSession = Depends(get_db)) -> List[File]:
    """List files, optionally only those of one owner."""
    query = select(File).order_by(File.created_at)
    if owner_id is not None:
        query = query.where(File.owner_id == owner_id)
    result = await db.execute(query)
    return list(result.scalars().all())


@router.get("/{file_id}", response_model=FileRead)
async def get_file(file_id: str, db: AsyncSession = Depends(get_db)) -> File:
    return await _get_file_or_404(db, file_id)


@router.put("/{file_id}", response_model=FileRead)
async def update_file(file_id: str, file_in: FileUpdate, db: AsyncSession = Depends(get_db)) -> File:
    """Apply a partial update; omitted fields keep their value."""
    file = await _get_file_or_404(db, file_id)
    for field, value in file_in.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(file, field, value)
    await db.commit()
    await db.refresh(file)
    return file


@router.delete("/{file_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_file(file_id: str, db: AsyncSession = Depends(get_db)) -> Response:
    file = await _get_file_or_404(db, file_id)
    await db.delete(file)
    await db.commit()
    logger.info(f"Deleted file {file_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
