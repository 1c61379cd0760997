"""
Group contexts.

A GroupContext collects the groups named by one configuration statement so
the statement's payload can be applied to all of them. It only borrows the
groups: releasing a context never touches them, and the registry remains the
sole authority for destroying a group.

Removal operations stop at the first group that fails and destroy each group
they leave empty, so a group removed this way must not be used afterwards.
"""

import logging
from typing import TYPE_CHECKING, Iterator, List, Optional

from mailgroups.address_list import Address
from mailgroups.errors import ErrorBuffer
from mailgroups.membership import add_addresses, add_regex, remove_addresses, remove_regex
from mailgroups.models import Group

if TYPE_CHECKING:
    from mailgroups.registry import GroupRegistry

logger = logging.getLogger(__name__)


class GroupContext:
    """
    Ordered, identity-deduplicated list of borrowed Group references.

    Args:
        registry: Registry that owns the groups; needed by the removal
            operations, which destroy groups they leave empty

    Example:
        >>> ctx = GroupContext(registry)
        >>> ctx.add(registry.resolve_or_create("friends"))
        >>> ctx.add(registry.resolve_or_create("family"))
        >>> ctx.apply_regex(r"@example\\.com$", re.IGNORECASE, ErrorBuffer())
        True
        >>> ctx.release()
    """

    def __init__(self, registry: Optional["GroupRegistry"] = None):
        self.registry = registry
        self._groups: List[Group] = []

    def add(self, group: Optional[Group]) -> None:
        """Append `group` unless this exact object is already present."""
        if group is None:
            return
        if any(g is group for g in self._groups):
            return
        self._groups.append(group)

    def release(self) -> None:
        """Forget every reference. The groups themselves are untouched."""
        self._groups.clear()

    def clear(self, registry: Optional["GroupRegistry"] = None) -> None:
        """Destroy every referenced group, then release the context."""
        registry = registry or self.registry
        if registry is not None:
            for group in self._groups:
                registry.destroy(group)
        self.release()

    def apply_addresses(self, addresses: Optional[List[Address]]) -> None:
        for group in self._groups:
            add_addresses(group, addresses)

    def remove_addresses(self, addresses: Optional[List[Address]]) -> bool:
        """
        Remove `addresses` from every group, destroying groups left empty.

        Returns:
            False at the first group that fails; later groups are not touched
        """
        for group in self._groups:
            ok = remove_addresses(group, addresses)
            self._destroy_if_empty(group)
            if not ok:
                return False
        return True

    def apply_regex(self, pattern: str, flags: int = 0, err: Optional[ErrorBuffer] = None) -> bool:
        """
        Add `pattern` to every group.

        Returns:
            False at the first group that rejects the pattern, with the
            diagnostic written into `err`
        """
        for group in self._groups:
            if not add_regex(group, pattern, flags, err):
                return False
        return True

    def remove_regex(self, pattern: str) -> bool:
        """
        Remove `pattern` from every group, destroying groups left empty.

        Returns:
            False at the first group that does not contain the pattern
        """
        for group in self._groups:
            ok = remove_regex(group, pattern)
            self._destroy_if_empty(group)
            if not ok:
                return False
        return True

    def _destroy_if_empty(self, group: Group) -> None:
        if self.registry is None:
            logger.debug(f"No registry attached, leaving empty group {group.name} in place")
            return
        self.registry.destroy_if_empty(group)

    @property
    def groups(self) -> List[Group]:
        return list(self._groups)

    def __contains__(self, group: object) -> bool:
        return any(g is group for g in self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def __iter__(self) -> Iterator[Group]:
        return iter(list(self._groups))
