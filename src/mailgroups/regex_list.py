"""
Ordered list of compiled regular expressions.

Patterns are matched with search semantics (an unanchored pattern matches
anywhere in the candidate), in insertion order, and the first hit wins.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Pattern

from mailgroups.errors import InvalidPatternError

logger = logging.getLogger(__name__)

# Removing this source string clears the whole list
REMOVE_ALL = "*"


@dataclass
class RegexEntry:
    """
    A compiled pattern together with the source it was compiled from.

    Fields:
        pattern: Source string as supplied by the caller
        flags: `re` flags used for compilation
        regex: Compiled pattern
    """
    pattern: str
    flags: int
    regex: Pattern[str]


class RegexList:
    """
    Owned sequence of RegexEntry objects.

    Example:
        >>> rl = RegexList()
        >>> rl.add("^boss@", re.IGNORECASE)
        >>> rl.match_any("Boss@example.com")
        True
    """

    def __init__(self):
        self._entries: List[RegexEntry] = []

    def add(self, pattern: Optional[str], flags: int = 0) -> None:
        """
        Compile `pattern` and append it.

        An empty or None pattern is ignored. A pattern whose source string is
        already present (case-insensitive comparison) is not added again.

        Raises:
            InvalidPatternError: If the pattern does not compile. The list is
                left unchanged.
        """
        if not pattern:
            return

        try:
            regex = re.compile(pattern, flags)
        except re.error as e:
            raise InvalidPatternError(f"Invalid regular expression '{pattern}': {e}") from e

        folded = pattern.lower()
        if any(entry.pattern.lower() == folded for entry in self._entries):
            logger.debug(f"Pattern already present, not adding: {pattern}")
            return

        self._entries.append(RegexEntry(pattern=pattern, flags=flags, regex=regex))

    def remove(self, pattern: Optional[str]) -> bool:
        """
        Remove every entry compiled from exactly `pattern`.

        The source string "*" removes all entries.

        Returns:
            True if anything was removed (or "*" was given), False otherwise
        """
        if not pattern:
            return False
        if pattern == REMOVE_ALL:
            self._entries.clear()
            return True

        before = len(self._entries)
        self._entries = [e for e in self._entries if e.pattern != pattern]
        return len(self._entries) != before

    def match_any(self, candidate: Optional[str]) -> bool:
        if candidate is None:
            return False
        for entry in self._entries:
            if entry.regex.search(candidate):
                logger.debug(f"'{candidate}' matched pattern '{entry.pattern}'")
                return True
        return False

    def release(self) -> None:
        self._entries.clear()

    @property
    def patterns(self) -> List[str]:
        """Source strings in insertion order."""
        return [e.pattern for e in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[RegexEntry]:
        return iter(list(self._entries))
