"""Data models for filenotes."""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone

from .errors import NoteFormatError

NOTE_FIELDS = ("id", "title", "content", "date", "color")


def new_note_id() -> str:
    """Return a fresh note id."""
    return uuid.uuid4().hex


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def parse_date(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware datetime.

    Naive timestamps are taken to be local time.
    """
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt


@dataclass(frozen=True)
class Note:
    """A single user note."""

    id: str
    title: str
    content: str
    date: str
    color: int

    @property
    def timestamp(self) -> datetime:
        """Get date as an aware datetime."""
        return parse_date(self.date)

    @classmethod
    def create(cls, title: str, content: str = "", color: int = 0xFFFFFFFF) -> "Note":
        """Build a new note stamped with the current time."""
        return cls(id=new_note_id(), title=title, content=content, date=now_iso(), color=color)

    def revise(
        self,
        title: str | None = None,
        content: str | None = None,
        color: int | None = None,
    ) -> "Note":
        """Return an edited copy with the same id and a fresh date."""
        return replace(
            self,
            title=self.title if title is None else title,
            content=self.content if content is None else content,
            color=self.color if color is None else color,
            date=now_iso(),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "date": self.date,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data) -> "Note":
        """Build a note from a decoded JSON object.

        Raises:
            NoteFormatError: If a field is missing, has the wrong type,
                or the date cannot be parsed
        """
        if not isinstance(data, dict):
            raise NoteFormatError(f"Expected a JSON object, got {type(data).__name__}")

        missing = [name for name in NOTE_FIELDS if name not in data]
        if missing:
            raise NoteFormatError(f"Missing fields: {', '.join(missing)}")

        for name in ("id", "title", "content", "date"):
            if not isinstance(data[name], str):
                raise NoteFormatError(f"Field '{name}' must be a string")
        # bool is an int subclass
        if not isinstance(data["color"], int) or isinstance(data["color"], bool):
            raise NoteFormatError("Field 'color' must be an integer")

        try:
            parse_date(data["date"])
        except (ValueError, OverflowError) as e:
            raise NoteFormatError(f"Invalid date {data['date']!r}") from e

        return cls(
            id=data["id"],
            title=data["title"],
            content=data["content"],
            date=data["date"],
            color=data["color"],
        )
