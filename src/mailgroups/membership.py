"""
Membership and matching operations on a single Group.

Address and regex mutations report success through a boolean status rather
than raising: a False return means "nothing was done" and, for regex
additions, a diagnostic is written into the caller's ErrorBuffer. Matching
never fails; absent inputs simply do not match.
"""

import logging
from typing import List, Optional

from mailgroups.address_list import Address, copy_address_list, remove_from_list, remove_xrefs
from mailgroups.errors import ErrorBuffer, InvalidPatternError
from mailgroups.models import Group

logger = logging.getLogger(__name__)


def add_addresses(group: Optional[Group], addresses: Optional[List[Address]]) -> None:
    """
    Append a copy of `addresses` to the group's address list.

    Entries whose mailbox is already in the group are skipped; existing order
    is kept and new entries go at the tail. Absent inputs are a no-op.

    Example:
        >>> add_addresses(team, parse_addresses("alice@example.com"))
        >>> team.mailboxes
        ['alice@example.com']
    """
    if group is None or addresses is None:
        return

    incoming = remove_xrefs(group.addresses, copy_address_list(addresses))
    group.addresses.extend(incoming)
    logger.debug(f"Group '{group.name}': added {len(incoming)} address(es)")


def remove_addresses(group: Optional[Group], addresses: Optional[List[Address]]) -> bool:
    """
    Remove every occurrence of each given mailbox from the group.

    Mailboxes are compared exactly. Removing a mailbox the group does not
    contain is not an error.

    Returns:
        False if `group` or `addresses` is absent, True otherwise
    """
    if group is None or addresses is None:
        return False

    removed = 0
    for address in addresses:
        removed += remove_from_list(group.addresses, address.mailbox)
    logger.debug(f"Group '{group.name}': removed {removed} address(es)")
    return True


def add_regex(
    group: Optional[Group],
    pattern: Optional[str],
    flags: int = 0,
    err: Optional[ErrorBuffer] = None
) -> bool:
    """
    Compile `pattern` and add it to the group.

    Args:
        group: Group to modify
        pattern: Regular expression source
        flags: `re` flags, e.g. re.IGNORECASE
        err: Receives the diagnostic if compilation fails

    Returns:
        True on success. False if the group is absent or the pattern is
        invalid; the group's patterns are unchanged in that case.
    """
    if group is None:
        return False

    try:
        group.patterns.add(pattern, flags)
    except InvalidPatternError as e:
        logger.warning(f"Group '{group.name}': {e}")
        if err is not None:
            err.set(str(e))
        return False

    return True


def remove_regex(group: Optional[Group], pattern: str) -> bool:
    """
    Remove a pattern from the group by its source string.

    Returns:
        False if the group is absent or does not contain the pattern
    """
    if group is None:
        return False

    if not group.patterns.remove(pattern):
        logger.warning(f"Group '{group.name}': pattern not found: {pattern}")
        return False
    return True


def is_empty(group: Optional[Group]) -> bool:
    """True if the group exists and has neither addresses nor patterns."""
    return group is not None and group.is_empty()


def matches(group: Optional[Group], candidate: Optional[str]) -> bool:
    """
    Does `candidate` belong to `group`?

    Regular expressions are tried first, in insertion order. Then the address
    list is scanned for a mailbox equal to the candidate ignoring case.

    Example:
        >>> matches(team, "ALICE@example.com")
        True
        >>> matches(team, "bob@example.com")
        False
    """
    if group is None or candidate is None:
        return False

    if group.patterns.match_any(candidate):
        return True

    folded = candidate.lower()
    for address in group.addresses:
        if address.mailbox and address.mailbox.lower() == folded:
            return True

    return False
