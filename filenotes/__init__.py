"""filenotes - notes stored as one JSON file each."""

from .errors import (
    InvalidNoteError,
    NoteFormatError,
    NoteIOError,
    NoteNotFoundError,
    NoteStoreError,
    PermissionDeniedError,
    StorageUnavailableError,
)
from .models import Note
from .permissions import PermissionGate
from .store import NoteStore

__version__ = "0.1.0"

__all__ = [
    "InvalidNoteError",
    "Note",
    "NoteFormatError",
    "NoteIOError",
    "NoteNotFoundError",
    "NoteStore",
    "NoteStoreError",
    "PermissionDeniedError",
    "PermissionGate",
    "StorageUnavailableError",
]
