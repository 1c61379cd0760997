"""
Email address groups.

A group is a named set of matching rules: explicit mailboxes compared
case-insensitively and regular expressions searched against the candidate.
Groups live in a GroupRegistry; a GroupContext fans one statement out to
several groups at once.

Example:
    >>> from mailgroups import GroupRegistry, GroupContext, parse_addresses
    >>> registry = GroupRegistry()
    >>> ctx = GroupContext(registry)
    >>> ctx.add(registry.resolve_or_create("team"))
    >>> ctx.apply_addresses(parse_addresses("alice@example.com"))
    >>> ctx.release()
    >>> registry.match("team", "ALICE@example.com")
    True
"""

from mailgroups.address_list import Address, parse_addresses
from mailgroups.errors import ErrorBuffer, InvalidPatternError
from mailgroups.group_context import GroupContext
from mailgroups.membership import matches
from mailgroups.models import Group
from mailgroups.registry import GroupRegistry

__all__ = [
    "Address",
    "ErrorBuffer",
    "Group",
    "GroupContext",
    "GroupRegistry",
    "InvalidPatternError",
    "matches",
    "parse_addresses",
]

__version__ = "0.1.0"
