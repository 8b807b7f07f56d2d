"""Identity of the caller performing an operation."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Username:
    """An authenticated user name. Comparison ignores case."""

    username: str

    def __eq__(self, other) -> bool:
        if not isinstance(other, Username):
            return NotImplemented
        return self.username.lower() == other.username.lower()

    def __hash__(self) -> int:
        return hash(self.username.lower())

    def __str__(self) -> str:
        return self.username


ANONYMOUS = Username("anonymous")
