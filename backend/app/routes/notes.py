"""
Noteful Backend — Notes Route Handlers
=======================================

What:  CRUD endpoints for the caller's notes.
Why:   The main surface of the API.
How:   The router-level dependency verifies the bearer token before any
       handler runs; handlers pass the caller's id to NoteService and shape
       the HTTP response (status code, Location header).

Endpoints:
    GET    /notes?searchTerm&folderId&tagId   200 [Note]
    GET    /notes/{id}                        200 Note | 400 | 404
    POST   /notes                             201 Note + Location | 400
    PUT    /notes/{id}                        200 Note | 400 | 404
    DELETE /notes/{id}                        204 | 400 | 404

Path ids are plain strings here on purpose: NoteService decides what a
valid id looks like and answers 400 with a readable message, instead of
FastAPI's generic path-parameter validation error.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import get_current_user
from app.schemas.auth import AuthUser
from app.schemas.common import ErrorResponse
from app.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from app.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/notes",
    tags=["Notes"],
    dependencies=[Depends(get_current_user)],
    responses={
        401: {"description": "Missing, invalid or expired token", "model": ErrorResponse},
    },
)


@router.get(
    "",
    response_model=List[NoteResponse],
    summary="List the caller's notes",
    description=(
        "Returns every note owned by the caller, most recently updated first. "
        "`searchTerm` matches title or content case-insensitively; `folderId` "
        "and `tagId` narrow the result further."
    ),
)
async def list_notes(
    search_term: Optional[str] = Query(default=None, alias="searchTerm"),
    folder_id: Optional[str] = Query(default=None, alias="folderId"),
    tag_id: Optional[str] = Query(default=None, alias="tagId"),
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    return await note_service.list_notes(
        db=db,
        user_id=current_user.id,
        search_term=search_term,
        folder_id=folder_id,
        tag_id=tag_id,
    )


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "No such note owned by the caller", "model": ErrorResponse},
    },
    summary="Get a single note",
)
async def get_note(
    note_id: str,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.get_note(db=db, note_id=note_id, user_id=current_user.id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=NoteResponse,
    responses={
        400: {"description": "Missing title or invalid folder/tag reference", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: NoteCreate,
    request: Request,
    response: Response,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    note = await note_service.create_note(db=db, payload=payload, user_id=current_user.id)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{note.id}"
    return note


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Malformed id or invalid field", "model": ErrorResponse},
        404: {"description": "No such note owned by the caller", "model": ErrorResponse},
    },
    summary="Update some fields of a note",
)
async def update_note(
    note_id: str,
    payload: NoteUpdate,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.update_note(
        db=db, note_id=note_id, payload=payload, user_id=current_user.id
    )


@router.delete(
    "/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "No such note owned by the caller", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_service.delete_note(db=db, note_id=note_id, user_id=current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
