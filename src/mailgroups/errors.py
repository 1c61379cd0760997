"""Error types and the diagnostic buffer used by group operations."""

from typing import Optional


class InvalidPatternError(Exception):
    """Raised when a group regular expression fails to compile."""
    pass


class ErrorBuffer:
    """
    Receives a human-readable diagnostic from an operation that reports
    failure through a status value instead of raising.

    Example:
        >>> err = ErrorBuffer()
        >>> ok = add_regex(group, "([", 0, err)
        >>> if not ok:
        ...     print(err.message)
    """

    def __init__(self):
        self.message: Optional[str] = None

    def set(self, message: str) -> None:
        self.message = message

    def clear(self) -> None:
        self.message = None

    def __bool__(self) -> bool:
        return bool(self.message)

    def __str__(self) -> str:
        return self.message or ""

    def __repr__(self) -> str:
        return f"ErrorBuffer({self.message!r})"
