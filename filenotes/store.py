"""File-backed note store.

Each note lives in its own ``<id>.json`` file inside a ``Notes`` directory
under the platform's storage root. Every public operation checks storage
permission before it touches the filesystem.
"""

import json
import logging
import os
from pathlib import Path

from .environment import PlatformEnvironment
from .errors import (
    InvalidNoteError,
    NoteFormatError,
    NoteIOError,
    NoteNotFoundError,
    StorageUnavailableError,
)
from .models import Note
from .permissions import PermissionGate

logger = logging.getLogger(__name__)

NOTES_DIR_NAME = "Notes"
NOTE_SUFFIX = ".json"
EXPORT_FILENAME = "notes_export.json"


def validate_note_id(note_id: str) -> None:
    """Reject ids that cannot be used as a filename stem in the notes directory."""
    if not note_id:
        raise InvalidNoteError("Note id must not be empty")
    if "\x00" in note_id:
        raise InvalidNoteError(f"Note id contains a null byte: {note_id!r}")
    separators = {"/", "\\", os.sep, os.altsep} - {None}
    if any(sep in note_id for sep in separators):
        raise InvalidNoteError(f"Note id contains a path separator: {note_id!r}")
    if note_id.startswith("."):
        raise InvalidNoteError(f"Note id must not start with '.': {note_id!r}")
    if note_id + NOTE_SUFFIX == EXPORT_FILENAME:
        raise InvalidNoteError(f"Note id is reserved: {note_id!r}")


def _write_json(path: Path, data) -> None:
    """Write JSON to path, replacing any existing file in one step."""
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        tmp_path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp_path, path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise NoteIOError(f"Could not write {path}: {e}") from e


class NoteStore:
    """CRUD and export over the notes directory."""

    def __init__(self, env: PlatformEnvironment, gate: PermissionGate | None = None):
        self.env = env
        self.gate = gate or PermissionGate(env)

    def resolve_directory(self) -> Path:
        """Get the notes directory, creating it if it does not exist.

        Raises:
            StorageUnavailableError: If the platform has no storage root
                or the directory cannot be created
        """
        root = self.env.storage_root()
        if root is None:
            raise StorageUnavailableError("Storage directory not available")

        notes_dir = Path(root) / NOTES_DIR_NAME
        if notes_dir.is_dir():
            return notes_dir

        try:
            notes_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageUnavailableError(f"Cannot create notes directory {notes_dir}: {e}") from e

        logger.info("Created notes directory %s", notes_dir)
        return notes_dir

    def note_path(self, note_id: str) -> Path:
        return self.resolve_directory() / f"{note_id}{NOTE_SUFFIX}"

    def save(self, note: Note) -> Path:
        """Create or overwrite the note's record.

        Returns:
            Path of the written file
        """
        validate_note_id(note.id)
        self.gate.require_access()

        path = self.note_path(note.id)
        _write_json(path, note.to_dict())
        logger.debug("Saved note %s to %s", note.id, path)
        return path

    def get(self, note_id: str) -> Note:
        """Load a single note by id."""
        validate_note_id(note_id)
        self.gate.require_access()

        path = self.note_path(note_id)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise NoteNotFoundError(f"Note not found: {note_id}") from e
        except OSError as e:
            raise NoteIOError(f"Could not read {path}: {e}") from e

        return _parse_note(raw, path)

    def _load_notes(self, notes_dir: Path) -> list[Note]:
        try:
            entries = sorted(notes_dir.iterdir())
        except OSError as e:
            raise NoteIOError(f"Could not list {notes_dir}: {e}") from e

        notes = []
        for entry in entries:
            if entry.suffix != NOTE_SUFFIX or entry.name == EXPORT_FILENAME:
                continue
            if not entry.is_file():
                continue
            try:
                notes.append(_parse_note(entry.read_text(encoding="utf-8"), entry))
            except (OSError, UnicodeDecodeError, NoteFormatError) as e:
                logger.warning("Skipping unreadable note %s: %s", entry.name, e)

        # sorted() is stable with reverse=True, so equal dates keep file order
        return sorted(notes, key=lambda n: n.timestamp, reverse=True)

    def list(self) -> list[Note]:
        """Load every note, newest first.

        Records that cannot be read or parsed are logged and skipped.
        """
        self.gate.require_access()
        return self._load_notes(self.resolve_directory())

    def delete(self, note_id: str) -> bool:
        """Remove a note. Deleting a missing note is not an error.

        Returns:
            True if a file was removed
        """
        validate_note_id(note_id)
        self.gate.require_access()

        path = self.note_path(note_id)
        try:
            path.unlink()
        except FileNotFoundError:
            logger.debug("Note %s already absent", note_id)
            return False
        except OSError as e:
            raise NoteIOError(f"Could not delete {path}: {e}") from e

        logger.debug("Deleted note %s", note_id)
        return True

    def export_all(self) -> Path:
        """Write all notes as one JSON array and return the file's path."""
        self.gate.require_access()

        notes_dir = self.resolve_directory()
        notes = self._load_notes(notes_dir)
        path = notes_dir / EXPORT_FILENAME
        _write_json(path, [note.to_dict() for note in notes])
        logger.info("Exported %d notes to %s", len(notes), path)
        return path


def _parse_note(raw: str, path: Path) -> Note:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise NoteFormatError(f"{path.name} is not valid JSON: {e}") from e
    note = Note.from_dict(data)
    if note.id != path.stem:
        raise NoteFormatError(f"{path.name} holds note id {note.id!r}")
    return note
