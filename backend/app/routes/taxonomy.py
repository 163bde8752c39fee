"""
Noteful Backend — Folder and Tag Route Handlers
================================================

What:  List and create the caller's folders and tags.
Why:   Notes can only reference folders and tags their owner created.

Endpoints (all require a bearer token):
    GET  /folders   200 [Folder]
    POST /folders   201 Folder + Location | 400
    GET  /tags      200 [Tag]
    POST /tags      201 Tag + Location | 400
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import get_current_user
from app.schemas.auth import AuthUser
from app.schemas.common import ErrorResponse
from app.schemas.note import FolderCreate, FolderResponse, TagCreate, TagResponse
from app.services.taxonomy_service import folder_service, tag_service

_protected = {
    "dependencies": [Depends(get_current_user)],
    "responses": {
        401: {"description": "Missing, invalid or expired token", "model": ErrorResponse},
    },
}

folders_router = APIRouter(prefix="/folders", tags=["Folders"], **_protected)
tags_router = APIRouter(prefix="/tags", tags=["Tags"], **_protected)


@folders_router.get("", response_model=List[FolderResponse], summary="List the caller's folders")
async def list_folders(
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[FolderResponse]:
    return await folder_service.list_for_user(db, current_user.id)


@folders_router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=FolderResponse,
    responses={400: {"description": "Missing or duplicate name", "model": ErrorResponse}},
    summary="Create a folder",
)
async def create_folder(
    payload: FolderCreate,
    request: Request,
    response: Response,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> FolderResponse:
    folder = await folder_service.create(db, payload.name, current_user.id)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{folder.id}"
    return folder


@tags_router.get("", response_model=List[TagResponse], summary="List the caller's tags")
async def list_tags(
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[TagResponse]:
    return await tag_service.list_for_user(db, current_user.id)


@tags_router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=TagResponse,
    responses={400: {"description": "Missing or duplicate name", "model": ErrorResponse}},
    summary="Create a tag",
)
async def create_tag(
    payload: TagCreate,
    request: Request,
    response: Response,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> TagResponse:
    tag = await tag_service.create(db, payload.name, current_user.id)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{tag.id}"
    return tag
