"""Errors raised while handling plugin settings."""
from typing import List, Optional


class PluginSettingsError(Exception):
    """Base error for plugin settings operations.

    Carries the HTTP status and the machine-readable code the error maps to
    when it is surfaced to a caller.
    """

    http_code = 500
    code = "PLUGIN_SETTINGS_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnauthorizedError(PluginSettingsError):
    """Raised when the caller is not allowed to edit plugin settings."""

    http_code = 401
    code = "UNAUTHORIZED_TO_EDIT"

    def __init__(self, username: Optional[str] = None):
        who = f"User '{username}'" if username else "User"
        super().__init__(f"{who} is not authorized to edit plugin settings")
        self.username = username


class UnresolvedPluginError(PluginSettingsError):
    """Raised when no registered extension claims the plugin."""

    http_code = 422
    code = "PLUGIN_NOT_FOUND"

    def __init__(self, plugin_id: str):
        super().__init__(
            f"Plugin '{plugin_id}' does not exist or does not implement settings validation"
        )
        self.plugin_id = plugin_id


class SettingsValidationError(PluginSettingsError):
    """Raised when the owning extension reports field errors."""

    http_code = 422
    code = "VALIDATION_FAILED"

    def __init__(self, plugin_id: str, errors: List):
        super().__init__(
            f"Plugin settings for '{plugin_id}' failed validation ({len(errors)} error(s))"
        )
        self.plugin_id = plugin_id
        self.errors = list(errors)


class ConflictError(PluginSettingsError):
    """Raised when the caller's fingerprint does not match the stored settings."""

    http_code = 412
    code = "STALE_RESOURCE_CONFIG"

    def __init__(self, plugin_id: str):
        super().__init__(
            f"Someone has modified the settings for plugin '{plugin_id}'. "
            "Please update your copy with the changes and try again."
        )
        self.plugin_id = plugin_id


class NotificationError(PluginSettingsError):
    """Wraps a failure raised by an extension while being notified of a change."""

    code = "NOTIFICATION_FAILED"

    def __init__(self, plugin_id: str, cause: BaseException):
        super().__init__(
            f"Failed to notify plugin '{plugin_id}' of settings change: {cause}"
        )
        self.plugin_id = plugin_id
        self.cause = cause


class PluginStoreError(Exception):
    """Raised when a settings store cannot be safely written.

    Not a PluginSettingsError: store failures propagate to the caller unchanged.
    """
