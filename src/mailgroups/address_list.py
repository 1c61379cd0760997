"""
Address records and the list operations groups rely on.

An address list is a plain ordered Python list of Address records. Groups own
their list; everything handed in from outside is copied before it is stored.

Supported input formats for parse_addresses():
    - "user@example.com"
    - "Name <user@example.com>"
    - "a@example.com, Name <b@example.com>" (comma separated)
    - an iterable of any of the above, or of Address records
"""

import logging
from dataclasses import dataclass, replace
from email.utils import getaddresses
from typing import Iterable, List, Optional, Union

logger = logging.getLogger(__name__)


@dataclass
class Address:
    """
    A single mailbox entry.

    Fields:
        mailbox: The addr-spec portion ("user@example.com")
        personal: Optional display name ("Alice Example")
    """
    mailbox: str
    personal: Optional[str] = None

    def __str__(self) -> str:
        if self.personal:
            return f"{self.personal} <{self.mailbox}>"
        return self.mailbox


AddressInput = Union[str, Address, Iterable[Union[str, Address]]]


def parse_addresses(value: Optional[AddressInput]) -> List[Address]:
    """
    Parse one or more addresses into a list of Address records.

    Entries without a mailbox (e.g. empty strings) are skipped.

    Args:
        value: A string, an Address, or an iterable of strings/Addresses

    Returns:
        List of Address records in input order. Empty list for None.

    Example:
        >>> parse_addresses("Alice <alice@example.com>, bob@example.com")
        [Address(mailbox='alice@example.com', personal='Alice'), Address(mailbox='bob@example.com', personal=None)]
    """
    if value is None:
        return []
    if isinstance(value, (str, Address)):
        value = [value]

    result: List[Address] = []
    raw: List[str] = []
    for item in value:
        if isinstance(item, Address):
            if item.mailbox:
                result.append(replace(item))
            continue
        raw.append(str(item))

    for personal, mailbox in getaddresses(raw):
        mailbox = mailbox.strip()
        if not mailbox:
            continue
        result.append(Address(mailbox=mailbox, personal=personal or None))

    return result


def copy_address_list(addresses: Iterable[Address]) -> List[Address]:
    """Return a deep copy of an address list."""
    return [replace(a) for a in addresses]


def remove_xrefs(existing: Iterable[Address], incoming: List[Address]) -> List[Address]:
    """
    Drop entries from `incoming` whose mailbox already appears in `existing`.

    Mailboxes are compared case-insensitively. Duplicates inside `incoming`
    itself are left alone.
    """
    seen = {a.mailbox.lower() for a in existing if a.mailbox}
    kept = [a for a in incoming if a.mailbox.lower() not in seen]
    if len(kept) != len(incoming):
        logger.debug(f"Dropped {len(incoming) - len(kept)} address(es) already present")
    return kept


def remove_from_list(addresses: List[Address], mailbox: Optional[str]) -> int:
    """
    Remove every entry whose mailbox equals `mailbox` (exact comparison).

    The list is modified in place.

    Returns:
        Number of entries removed
    """
    if not mailbox:
        return 0
    before = len(addresses)
    addresses[:] = [a for a in addresses if a.mailbox != mailbox]
    return before - len(addresses)


def release_address_list(addresses: List[Address]) -> None:
    addresses.clear()
