"""
Group registry.

The registry is the only owner of Group objects. It is constructed
explicitly and handed to whatever layer applies configuration, so tests can
build a fresh one each time.

Lifecycle:
    registry = GroupRegistry()        # empty, ready for use
    registry.resolve_or_create(name)  # groups appear on first reference
    registry.destroy(group)           # or implicitly when a removal empties it
    registry.reset()                  # configuration reload: drop everything
"""

import logging
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Optional

from mailgroups.address_list import release_address_list
from mailgroups.membership import matches
from mailgroups.models import Group

if TYPE_CHECKING:
    from mailgroups.group_context import GroupContext

logger = logging.getLogger(__name__)


class GroupRegistry:
    """
    Name-keyed store of Groups.

    Example:
        >>> registry = GroupRegistry()
        >>> a = registry.resolve_or_create("team")
        >>> a is registry.resolve_or_create("team")
        True
        >>> registry.destroy(a)
        >>> "team" in registry
        False
    """

    def __init__(self):
        self._groups: Dict[str, Group] = {}

    def resolve_or_create(self, name: Optional[str]) -> Optional[Group]:
        """
        Return the group called `name`, creating an empty one if needed.

        Returns:
            The Group, or None if `name` is empty
        """
        if not name:
            return None

        group = self._groups.get(name)
        if group is None:
            logger.debug(f"Creating group {name}")
            group = Group(name=name)
            self._groups[name] = group
        return group

    def find(self, name: Optional[str]) -> Optional[Group]:
        """Look up a group without creating it."""
        if not name:
            return None
        return self._groups.get(name)

    def destroy(self, group: Optional[Group]) -> None:
        """
        Remove `group` from the registry and release everything it owns.

        Safe to call with None or with a group that was already destroyed.
        """
        if group is None or group.destroyed:
            return

        # Only drop the mapping if it still points at this very object
        if self._groups.get(group.name) is group:
            del self._groups[group.name]

        release_address_list(group.addresses)
        group.patterns.release()
        group.destroyed = True
        logger.debug(f"Destroyed group {group.name}")

    def destroy_if_empty(self, group: Optional[Group]) -> bool:
        """
        Destroy `group` if it has neither addresses nor patterns left.

        Returns:
            True if the group was destroyed
        """
        if group is None or group.destroyed or not group.is_empty():
            return False
        self.destroy(group)
        return True

    def clear_all(self, contexts: Optional[Iterable["GroupContext"]]) -> bool:
        """
        Destroy every group referenced by `contexts` and release the contexts.

        Always succeeds.
        """
        for ctx in contexts or ():
            ctx.clear(self)
        return True

    def reset(self) -> None:
        """Destroy every group in the registry."""
        count = len(self._groups)
        for group in list(self._groups.values()):
            self.destroy(group)
        if count:
            logger.info(f"Registry reset, {count} group(s) destroyed")

    def match(self, name: Optional[str], candidate: Optional[str]) -> bool:
        """Match `candidate` against the group called `name`; unknown names never match."""
        return matches(self.find(name), candidate)

    def matching_groups(self, candidate: Optional[str]) -> List[str]:
        """Names of every group `candidate` belongs to, in creation order."""
        if candidate is None:
            return []
        return [name for name, group in self._groups.items() if matches(group, candidate)]

    def names(self) -> List[str]:
        return list(self._groups)

    def __contains__(self, name: object) -> bool:
        return name in self._groups

    def __len__(self) -> int:
        return len(self._groups)

    def __iter__(self) -> Iterator[Group]:
        return iter(list(self._groups.values()))
