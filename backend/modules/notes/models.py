"""
Notes module data models.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class Note(BaseModel):
    """A stored note."""

    id: str = Field(..., description="Note ID")
    user_id: str = Field(..., description="Owning account ID")
    title: str
    content: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CreateNoteRequest(BaseModel):
    """Request to create a note. Blank fields are rejected by the service."""

    title: Optional[str] = None
    content: Optional[str] = None


class DeleteNoteResponse(BaseModel):
    message: str
