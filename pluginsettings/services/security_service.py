"""Security service deciding who may administer plugin settings."""
from typing import Iterable, Union

from pluginsettings.models.username import ANONYMOUS, Username


class SecurityService:
    """
    Service for admin checks on plugin settings.

    Administrators are configured by name; comparison ignores case.
    The anonymous user is never an administrator.
    """

    def __init__(self, admin_usernames: Iterable[str] = ()):
        """
        Initialize security service.

        Args:
            admin_usernames: Names of users with admin rights
        """
        self._admins = {Username(name) for name in admin_usernames}

    def is_user_admin(self, user: Union[Username, str, None]) -> bool:
        """
        Check if user is an administrator.

        Args:
            user: Username (or plain name) of the caller

        Returns:
            True if user is admin
        """
        if user is None:
            return False
        if not isinstance(user, Username):
            user = Username(str(user))
        if user == ANONYMOUS:
            return False
        return user in self._admins
