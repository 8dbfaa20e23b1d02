"""Shared fixtures for filenotes tests."""

from pathlib import Path

import pytest

from filenotes.models import Note
from filenotes.store import NoteStore


class FakeEnvironment:
    """PlatformEnvironment double that records every call."""

    def __init__(
        self,
        root: Path | None,
        platform: str = "linux",
        version: int = 0,
        granted: bool = True,
        grant_on_request: bool = False,
    ):
        self.root = root
        self.platform = platform
        self.version = version
        self.granted = granted
        self.grant_on_request = grant_on_request
        self.calls = []

    def os_version(self) -> int:
        self.calls.append("os_version")
        return self.version

    def storage_root(self) -> Path | None:
        self.calls.append("storage_root")
        return self.root

    def permission_status(self) -> bool:
        self.calls.append("permission_status")
        return self.granted

    def request_permission(self) -> bool:
        self.calls.append("request_permission")
        if self.grant_on_request:
            self.granted = True
        return self.granted


@pytest.fixture
def env(tmp_path):
    return FakeEnvironment(tmp_path / "storage")


@pytest.fixture
def store(env):
    return NoteStore(env)


@pytest.fixture
def notes_dir(tmp_path):
    return tmp_path / "storage" / "Notes"


def make_note(note_id: str, date: str, title: str = "Title", content: str = "", color: int = 0) -> Note:
    return Note(id=note_id, title=title, content=content, date=date, color=color)
