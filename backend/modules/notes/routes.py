"""
Note API endpoints.

Every route requires a valid session token; the owner is always the
authenticated user.
"""

from fastapi import APIRouter, Depends

from api.middleware.auth import get_current_user
from api.dependencies import get_note_service
from api.models.errors import ErrorResponse
from shared.models import AuthenticatedUser

from .interfaces import INoteService
from .models import CreateNoteRequest, DeleteNoteResponse, Note

router = APIRouter(
    responses={401: {"description": "Missing, invalid or expired session token"}},
)


@router.get("", response_model=list[Note])
async def list_notes(
    user: AuthenticatedUser = Depends(get_current_user),
    service: INoteService = Depends(get_note_service),
) -> list[Note]:
    """List the current user's notes, most recent first."""
    return await service.list_notes(user.id)


@router.post("", response_model=Note, status_code=201)
async def create_note(
    request: CreateNoteRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: INoteService = Depends(get_note_service),
) -> Note:
    """Create a note."""
    return await service.create_note(user.id, request.title, request.content)


@router.delete(
    "/{note_id}",
    response_model=DeleteNoteResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_note(
    note_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: INoteService = Depends(get_note_service),
) -> DeleteNoteResponse:
    """Delete one of the current user's notes."""
    await service.delete_note(user.id, note_id)
    return DeleteNoteResponse(message="Note deleted successfully")
