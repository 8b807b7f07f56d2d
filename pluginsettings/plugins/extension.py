"""Abstract interface for extensions that own plugin settings."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pluginsettings.exceptions import NotificationError
from pluginsettings.plugins.configuration import PluginSettingsConfiguration


@dataclass(frozen=True)
class FieldError:
    """A validation error reported by a plugin for one settings key."""

    key: str
    message: str


@dataclass
class ValidationResult:
    """Errors reported by a plugin; no errors means the settings are valid."""

    errors: List[FieldError] = field(default_factory=list)

    def add_error(self, error: FieldError) -> "ValidationResult":
        self.errors.append(error)
        return self

    def is_successful(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class NotificationOutcome:
    """Outcome of notifying an extension that settings changed."""

    delivered: bool
    error: Optional[NotificationError] = None

    @classmethod
    def success(cls) -> "NotificationOutcome":
        return cls(delivered=True)

    @classmethod
    def failure(cls, error: NotificationError) -> "NotificationOutcome":
        return cls(delivered=False, error=error)


class PluginExtension(ABC):
    """
    An extension kind (scm, task, notification, ...) that can own plugins.

    The owning extension validates a plugin's settings and is told when
    they change.
    """

    @property
    @abstractmethod
    def kind(self) -> str:
        """Extension kind this provider implements."""
        ...

    @abstractmethod
    def owns_plugin(self, plugin_id: str) -> bool:
        """Whether this extension handles the plugin."""
        ...

    @abstractmethod
    def validate_plugin_settings(
        self, plugin_id: str, configuration: PluginSettingsConfiguration
    ) -> ValidationResult:
        """Validate the plugin's settings; every failing key is reported."""
        ...

    @abstractmethod
    def notify_plugin_settings_change(
        self, plugin_id: str, settings: Dict[str, Optional[str]]
    ) -> None:
        """Tell the plugin its settings changed."""
        ...

    def __repr__(self):
        return f"<{type(self).__name__} kind={self.kind}>"
