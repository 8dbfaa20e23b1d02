"""Tests for the host platform environment."""

import pytest

from filenotes.environment import DEFAULT_HOME, HOME_ENV_VAR, HostEnvironment
from filenotes.permissions import PermissionGate


def test_explicit_home_wins(tmp_path, monkeypatch):
    monkeypatch.setenv(HOME_ENV_VAR, str(tmp_path / "from-env"))
    env = HostEnvironment(home=tmp_path / "explicit")
    assert env.storage_root() == tmp_path / "explicit"


def test_home_from_environment_variable(tmp_path, monkeypatch):
    monkeypatch.setenv(HOME_ENV_VAR, str(tmp_path / "from-env"))
    assert HostEnvironment().storage_root() == tmp_path / "from-env"


def test_default_home_under_user_directory(tmp_path, monkeypatch):
    monkeypatch.delenv(HOME_ENV_VAR, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    assert HostEnvironment().storage_root() == tmp_path / DEFAULT_HOME.removeprefix("~/")


def test_permission_status_checks_nearest_existing_parent(tmp_path):
    env = HostEnvironment(home=tmp_path / "not" / "yet" / "created")
    assert env.permission_status() is True


def test_request_without_prompt_is_refused(tmp_path):
    assert HostEnvironment(home=tmp_path).request_permission() is False


def test_request_uses_prompt(tmp_path):
    messages = []

    def prompt(message):
        messages.append(message)
        return True

    env = HostEnvironment(home=tmp_path, prompt=prompt)
    assert env.request_permission() is True
    assert str(tmp_path) in messages[0]


def test_declined_prompt(tmp_path):
    env = HostEnvironment(home=tmp_path, prompt=lambda message: False)
    assert env.request_permission() is False


@pytest.fixture
def read_only_root(tmp_path, monkeypatch):
    root = tmp_path / "locked"
    root.mkdir()
    root.chmod(0o500)
    # os.access ignores mode bits when running as root
    monkeypatch.setattr("filenotes.environment.os.access", lambda path, mode: False)
    yield root
    root.chmod(0o700)


def test_accepted_prompt_grants_access_to_read_only_root(read_only_root):
    messages = []

    def prompt(message):
        messages.append(message)
        return True

    env = HostEnvironment(home=read_only_root, prompt=prompt)
    gate = PermissionGate(env)

    assert env.permission_status() is False
    assert gate.ensure_access() is True
    assert gate.ensure_access() is True
    assert len(messages) == 1


def test_declined_prompt_on_read_only_root(read_only_root):
    env = HostEnvironment(home=read_only_root, prompt=lambda message: False)
    assert PermissionGate(env).ensure_access() is False
