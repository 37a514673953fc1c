"""
Notes module.

Create, list and delete short text notes owned by an account.

Public API:
- INoteService: Interface for note operations
- Note, CreateNoteRequest: Note data
- NoteNotFoundError: Raised for missing or foreign notes
"""

from .interfaces import INoteService
from .models import Note, CreateNoteRequest
from .exceptions import NoteNotFoundError

__all__ = [
    "INoteService",
    "Note",
    "CreateNoteRequest",
    "NoteNotFoundError",
]
