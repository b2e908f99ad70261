"""Capability checks for the signed-in user."""

import logging

from src.exceptions import UnauthorizedError
from src.models.enums import Capability
from src.models.user import User

logger = logging.getLogger(__name__)


class PermissionChecker:
    """Answers whether a user holds a capability.

    Handlers call ``require_any`` as their first step instead of relying on
    route decoration.
    """

    def allows(self, user: User, *capabilities: Capability | str) -> bool:
        """Check if the user holds at least one of the capabilities."""
        names = [str(getattr(c, "value", c)) for c in capabilities]
        return user.can(*names)

    def require_any(self, user: User, *capabilities: Capability | str) -> None:
        """Raise UnauthorizedError unless the user holds one of the capabilities."""
        if not self.allows(user, *capabilities):
            required = tuple(str(getattr(c, "value", c)) for c in capabilities)
            logger.info(f"User {user.id} denied, needs one of {required}")
            raise UnauthorizedError(required)

    def granted(self, user: User) -> list[str]:
        """List the capability names the user holds, for the current-user view."""
        return [capability.value for capability in Capability if user.can(capability.value)]
