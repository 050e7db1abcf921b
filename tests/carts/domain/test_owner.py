"""Tests for cart owner identity."""

import pytest
from carts.errors import InvalidOwner
from carts.owner import CartOwner, OwnerKind


class TestOwnerKeys:
    def test_guest_key(self):
        owner = CartOwner.guest("tok-123")
        assert owner.kind is OwnerKind.GUEST
        assert owner.key == "guest:tok-123"
        assert owner.is_guest

    def test_user_key(self):
        owner = CartOwner.user("42")
        assert owner.key == "user:42"
        assert not owner.is_guest

    def test_guest_sorts_before_user(self):
        assert CartOwner.guest("zzz").key < CartOwner.user("aaa").key

    def test_parse_round_trips_the_key(self):
        owner = CartOwner.user("cust-9")
        assert CartOwner.parse(owner.key) == owner

    def test_parse_keeps_colons_in_ref(self):
        owner = CartOwner.parse("guest:abc:def")
        assert owner.ref == "abc:def"

    def test_owners_are_equal_by_value(self):
        assert CartOwner.guest("t") == CartOwner.guest("t")
        assert CartOwner.guest("t") != CartOwner.user("t")


class TestInvalidOwner:
    @pytest.mark.parametrize("ref", ["", "   ", None, 42])
    def test_rejects_empty_or_non_string(self, ref):
        with pytest.raises(InvalidOwner):
            CartOwner.guest(ref)

    def test_rejects_surrounding_whitespace(self):
        with pytest.raises(InvalidOwner):
            CartOwner.user(" 42 ")

    def test_parse_rejects_unknown_kind(self):
        with pytest.raises(InvalidOwner):
            CartOwner.parse("admin:1")

    def test_parse_rejects_malformed_key(self):
        with pytest.raises(InvalidOwner) as exc:
            CartOwner.parse("no-separator")
        assert "invalid_owner" in exc.value.messages
