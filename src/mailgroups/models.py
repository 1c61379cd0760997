"""
Data models for email address groups.

Integration Pattern:
    Groups are never constructed directly by callers. They are created by
    GroupRegistry.resolve_or_create(), mutated through the functions in
    mailgroups.membership (usually via a GroupContext), and destroyed by the
    registry, either explicitly or when a removal leaves them empty.

    Example:
        registry = GroupRegistry()
        team = registry.resolve_or_create("team")
        add_addresses(team, parse_addresses("alice@example.com"))
        matches(team, "ALICE@example.com")  # True
"""

from typing import List, Optional

from mailgroups.address_list import Address
from mailgroups.regex_list import RegexList


class Group:
    """
    One named set of matching rules.

    Groups compare by identity; two groups with the same name are only ever
    the same object while the registry holds it.

    Attributes:
        name: Registry key, read-only after creation
        addresses: Explicit mailboxes, in insertion order
        patterns: Compiled regular expressions, in insertion order
        destroyed: Set once the registry has released this group
    """

    def __init__(
        self,
        name: str,
        addresses: Optional[List[Address]] = None,
        patterns: Optional[RegexList] = None
    ):
        self._name = name
        self.addresses: List[Address] = addresses if addresses is not None else []
        self.patterns: RegexList = patterns if patterns is not None else RegexList()
        self.destroyed = False

    @property
    def name(self) -> str:
        return self._name

    def is_empty(self) -> bool:
        """A group is empty when it has neither addresses nor patterns."""
        return not self.addresses and not self.patterns

    @property
    def mailboxes(self) -> List[str]:
        return [a.mailbox for a in self.addresses]

    def __repr__(self) -> str:
        state = " destroyed" if self.destroyed else ""
        return (
            f"<Group {self.name!r} addresses={len(self.addresses)} "
            f"patterns={len(self.patterns)}{state}>"
        )
