"""
Tests for address_list module.

Tests address parsing, copying, cross-reference removal and removal by mailbox.
"""
import pytest

from mailgroups.address_list import (
    Address,
    copy_address_list,
    parse_addresses,
    release_address_list,
    remove_from_list,
    remove_xrefs,
)


class TestParseAddresses:
    """Tests for parse_addresses function."""

    def test_bare_mailbox(self):
        """Test parsing a bare mailbox."""
        result = parse_addresses("alice@example.com")
        assert result == [Address(mailbox="alice@example.com")]

    def test_display_name(self):
        """Test parsing 'Name <mailbox>' format."""
        result = parse_addresses("Alice Example <alice@example.com>")
        assert result[0].mailbox == "alice@example.com"
        assert result[0].personal == "Alice Example"

    def test_comma_separated(self):
        """Test a comma separated string yields one entry per address."""
        result = parse_addresses("a@example.com, B <b@example.com>")
        assert [a.mailbox for a in result] == ["a@example.com", "b@example.com"]

    def test_iterable_input_preserves_order(self):
        """Test list input keeps the given order."""
        result = parse_addresses(["z@example.com", "a@example.com"])
        assert [a.mailbox for a in result] == ["z@example.com", "a@example.com"]

    def test_address_records_are_copied(self):
        """Test Address records are copied rather than reused."""
        original = Address(mailbox="a@example.com")
        result = parse_addresses([original])
        assert result == [original]
        assert result[0] is not original

    def test_none_and_empty(self):
        """Test None and empty strings produce no entries."""
        assert parse_addresses(None) == []
        assert parse_addresses("") == []
        assert parse_addresses([""]) == []


class TestAddressStr:
    """Tests for Address.__str__."""

    def test_with_personal(self):
        assert str(Address("a@example.com", "A")) == "A <a@example.com>"

    def test_without_personal(self):
        assert str(Address("a@example.com")) == "a@example.com"


class TestCopyAddressList:
    """Tests for copy_address_list function."""

    def test_deep_copy(self):
        """Test the copy has equal but distinct records."""
        original = parse_addresses(["a@example.com", "b@example.com"])
        copied = copy_address_list(original)
        assert copied == original
        assert all(c is not o for c, o in zip(copied, original))

        copied[0].mailbox = "changed@example.com"
        assert original[0].mailbox == "a@example.com"


class TestRemoveXrefs:
    """Tests for remove_xrefs function."""

    def test_drops_existing_mailboxes(self):
        """Test incoming entries already present are dropped."""
        existing = parse_addresses(["a@example.com"])
        incoming = parse_addresses(["a@example.com", "b@example.com"])
        result = remove_xrefs(existing, incoming)
        assert [a.mailbox for a in result] == ["b@example.com"]

    def test_comparison_ignores_case(self):
        """Test mailbox comparison is case-insensitive."""
        existing = parse_addresses(["Alice@Example.com"])
        incoming = parse_addresses(["alice@example.com"])
        assert remove_xrefs(existing, incoming) == []

    def test_empty_existing_keeps_everything(self):
        incoming = parse_addresses(["a@example.com", "a@example.com"])
        assert remove_xrefs([], incoming) == incoming


class TestRemoveFromList:
    """Tests for remove_from_list function."""

    def test_removes_all_occurrences(self):
        """Test every entry with the mailbox is removed in place."""
        addresses = parse_addresses(["a@example.com", "b@example.com"])
        addresses.append(Address("a@example.com"))
        removed = remove_from_list(addresses, "a@example.com")
        assert removed == 2
        assert [a.mailbox for a in addresses] == ["b@example.com"]

    def test_comparison_is_exact(self):
        """Test mailbox comparison is case-sensitive."""
        addresses = parse_addresses(["a@example.com"])
        assert remove_from_list(addresses, "A@example.com") == 0
        assert len(addresses) == 1

    @pytest.mark.parametrize("mailbox", [None, ""])
    def test_empty_mailbox(self, mailbox):
        addresses = parse_addresses(["a@example.com"])
        assert remove_from_list(addresses, mailbox) == 0
        assert len(addresses) == 1


def test_release_address_list():
    addresses = parse_addresses(["a@example.com"])
    release_address_list(addresses)
    assert addresses == []
