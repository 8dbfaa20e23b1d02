"""Exceptions raised by the note store."""


class NoteStoreError(Exception):
    """Base exception for note store errors."""
    pass


class PermissionDeniedError(NoteStoreError):
    """The platform declined access to the notes directory."""
    pass


class StorageUnavailableError(NoteStoreError):
    """No usable storage root could be resolved."""
    pass


class NoteIOError(NoteStoreError):
    """A read, write or delete failed at the filesystem layer."""
    pass


class NoteNotFoundError(NoteStoreError):
    """No note exists with the requested id."""
    pass


class NoteFormatError(NoteStoreError, ValueError):
    """A note record could not be deserialized."""
    pass


class InvalidNoteError(NoteStoreError, ValueError):
    """A note cannot be stored as given."""
    pass
