"""Platform capabilities used by the note store.

The store never asks the interpreter about the platform directly; it talks
to a PlatformEnvironment so the permission and storage logic can run
against fakes.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

ANDROID = "android"
IOS = "ios"

DEFAULT_HOME = "~/.filenotes"
HOME_ENV_VAR = "FILENOTES_HOME"


class PlatformEnvironment(Protocol):
    """What the store needs to know about the platform it runs on."""

    @property
    def platform(self) -> str:
        """Platform family, e.g. "android", "ios", "linux"."""
        ...

    def os_version(self) -> int:
        """OS version number (API level on Android)."""
        ...

    def storage_root(self) -> Path | None:
        """App storage root, or None if the platform has none to offer."""
        ...

    def permission_status(self) -> bool:
        ...

    def request_permission(self) -> bool:
        """Ask the user for storage access and return the outcome."""
        ...


def detect_platform() -> str:
    """Get the platform family of the running interpreter."""
    if hasattr(sys, "getandroidapilevel"):
        return ANDROID
    if sys.platform == "ios":
        return IOS
    return sys.platform


class HostEnvironment:
    """PlatformEnvironment for the running interpreter.

    Args:
        home: Storage root. Defaults to $FILENOTES_HOME, then ~/.filenotes
        prompt: Called with a message when consent is needed; returns
            whether the user agreed. Without one, consent is refused.
    """

    def __init__(
        self,
        home: str | os.PathLike | None = None,
        prompt: Callable[[str], bool] | None = None,
    ):
        self.home = home
        self.prompt = prompt
        self.consented = False
        self._platform = detect_platform()

    @property
    def platform(self) -> str:
        return self._platform

    def os_version(self) -> int:
        if hasattr(sys, "getandroidapilevel"):
            return sys.getandroidapilevel()
        return 0

    def storage_root(self) -> Path | None:
        raw = self.home or os.environ.get(HOME_ENV_VAR) or DEFAULT_HOME
        root = Path(raw).expanduser()
        # expanduser leaves "~" in place when no home directory is known
        if str(root).startswith("~"):
            logger.debug("Cannot expand storage root %s", raw)
            return None
        return root

    def permission_status(self) -> bool:
        if self.consented:
            return True
        root = self.storage_root()
        if root is None:
            return False
        # Check the nearest ancestor that already exists
        target = root
        while not target.exists() and target != target.parent:
            target = target.parent
        return os.access(target, os.R_OK | os.W_OK)

    def request_permission(self) -> bool:
        if self.prompt is None:
            return False
        # Consent holds for the rest of the process
        self.consented = bool(self.prompt(f"Allow filenotes to store notes under {self.storage_root()}?"))
        return self.consented
