"""Storage permission checks."""

import logging

from .environment import ANDROID, IOS, PlatformEnvironment
from .errors import PermissionDeniedError

logger = logging.getLogger(__name__)

# From this Android API level, app-scoped storage needs no runtime permission
SCOPED_STORAGE_API_LEVEL = 29


class PermissionGate:
    """Decides whether the notes directory may be accessed."""

    def __init__(self, env: PlatformEnvironment):
        self.env = env

    def ensure_access(self) -> bool:
        """Check storage access, prompting the user if necessary.

        Returns:
            True if access is granted
        """
        platform = self.env.platform

        if platform == ANDROID:
            version = self.env.os_version()
            if version >= SCOPED_STORAGE_API_LEVEL:
                return True
            logger.debug("Android API level %d requires storage permission", version)
            return self._check_or_request()

        if platform == IOS:
            # App documents never need consent on iOS
            return True

        return self._check_or_request()

    def require_access(self) -> None:
        """Raise PermissionDeniedError unless access is granted."""
        if not self.ensure_access():
            raise PermissionDeniedError("Storage permission not granted")

    def _check_or_request(self) -> bool:
        if self.env.permission_status():
            return True
        logger.info("Requesting storage permission")
        return bool(self.env.request_permission())
