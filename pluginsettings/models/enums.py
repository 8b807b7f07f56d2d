"""Enumeration types for models."""
import enum


class ExtensionKind(str, enum.Enum):
    """Kind of extension a provider implements."""

    SCM = "scm"
    PACKAGE_MATERIAL = "package-repository"
    PLUGGABLE_TASK = "task"
    NOTIFICATION = "notification"
    CONFIG_REPO = "configrepo"


class ValueState(enum.Enum):
    """State of a single plugin setting value."""

    PRESENT = "present"
    EMPTY = "empty"
    ABSENT = "absent"
