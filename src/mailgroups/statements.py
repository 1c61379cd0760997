"""
Applying group/ungroup statements to a registry.

Each statement gets its own GroupContext: the named groups are resolved (and
created if needed) into the context, the payload is applied to all of them,
and the context is released afterwards whatever the outcome.

Integration Pattern:
    config = ConfigLoader('config/groups.yaml').load()
    registry = build_registry(config)
    registry.matching_groups('alice@example.com')
"""

import logging
import re
from typing import Iterable, Optional

from mailgroups.address_list import parse_addresses
from mailgroups.config_schema import GroupsConfigSchema, GroupStatementSchema
from mailgroups.errors import ErrorBuffer
from mailgroups.group_context import GroupContext
from mailgroups.registry import GroupRegistry

logger = logging.getLogger(__name__)


class GroupStatementError(Exception):
    """
    Raised when a statement cannot be applied.

    Attributes:
        index: 1-based position of the statement, if known
        statement: The statement that failed
    """

    def __init__(self, message: str, index: Optional[int] = None,
                 statement: Optional[GroupStatementSchema] = None):
        self.index = index
        self.statement = statement
        if index is not None:
            message = f"statement #{index}: {message}"
        super().__init__(message)


def _regex_flags(ignore_case: bool) -> int:
    return re.IGNORECASE if ignore_case else 0


def apply_statement(
    registry: GroupRegistry,
    statement: GroupStatementSchema,
    ignore_case: bool = True,
    index: Optional[int] = None
) -> None:
    """
    Apply one statement to `registry`.

    Raises:
        GroupStatementError: On an invalid pattern, or when an ungroup
            statement names a pattern a group does not have. Groups already
            processed by the failing statement keep their changes.
    """
    ctx = GroupContext(registry)
    # ungroup resolves too; a group it creates is empty and gets destroyed again
    for name in statement.groups:
        ctx.add(registry.resolve_or_create(name))

    try:
        if statement.action == "group":
            _apply_group(ctx, statement, ignore_case, index)
        elif statement.all:
            logger.debug(f"ungroup: destroying {len(ctx)} group(s)")
            ctx.clear(registry)
        else:
            _apply_ungroup(ctx, statement, index)
    finally:
        ctx.release()


def _apply_group(ctx: GroupContext, statement: GroupStatementSchema,
                 ignore_case: bool, index: Optional[int]) -> None:
    if statement.addresses:
        ctx.apply_addresses(parse_addresses(statement.addresses))

    err = ErrorBuffer()
    flags = _regex_flags(ignore_case)
    for pattern in statement.patterns:
        if not ctx.apply_regex(pattern, flags, err):
            raise GroupStatementError(str(err) or f"invalid pattern: {pattern}", index, statement)


def _apply_ungroup(ctx: GroupContext, statement: GroupStatementSchema, index: Optional[int]) -> None:
    if statement.addresses:
        if not ctx.remove_addresses(parse_addresses(statement.addresses)):
            raise GroupStatementError("could not remove addresses", index, statement)

    for pattern in statement.patterns:
        if not ctx.remove_regex(pattern):
            raise GroupStatementError(f"pattern not found: {pattern}", index, statement)


def apply_statements(
    registry: GroupRegistry,
    statements: Iterable[GroupStatementSchema],
    ignore_case: bool = True
) -> int:
    """
    Apply statements in order, stopping at the first failure.

    Returns:
        Number of statements applied

    Raises:
        GroupStatementError: From the first statement that fails
    """
    count = 0
    for idx, statement in enumerate(statements, start=1):
        apply_statement(registry, statement, ignore_case=ignore_case, index=idx)
        count += 1
    logger.info(f"Applied {count} statement(s), {len(registry)} group(s) defined")
    return count


def build_registry(config: GroupsConfigSchema) -> GroupRegistry:
    """Construct a fresh registry populated from `config`."""
    registry = GroupRegistry()
    apply_statements(registry, config.statements, ignore_case=config.matching.ignore_case)
    return registry
