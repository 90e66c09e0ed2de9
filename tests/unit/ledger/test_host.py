"""Tests for the host clock and transaction boundary."""

import pytest

from metaswap.errors import InsufficientFunds
from metaswap.ledger import Host, Token
from tests.helpers import ALICE, BOB


class TestClock:
    def test_advance(self):
        host = Host(timestamp=100)
        assert host.advance(50) == 150
        assert host.timestamp == 150

    def test_cannot_go_backwards(self):
        host = Host(timestamp=100)
        with pytest.raises(ValueError):
            host.advance(-1)
        with pytest.raises(ValueError):
            host.set_timestamp(99)

    def test_set_timestamp(self):
        host = Host()
        host.set_timestamp(1_000)
        assert host.timestamp == 1_000


class TestAtomic:
    """Tests for all-or-nothing execution."""

    def test_commit(self):
        host = Host()
        token = Token(host, ALICE, "TKN")
        with host.atomic():
            token.mint(BOB, 10)
        assert token.balance_of(BOB) == 10

    def test_rollback_restores_every_participant(self):
        host = Host()
        first = Token(host, "0x01", "A")
        second = Token(host, "0x02", "B")
        first.mint(ALICE, 100)

        with pytest.raises(InsufficientFunds):
            with host.atomic():
                first.transfer(ALICE, BOB, 60)
                second.mint(BOB, 5)
                first.transfer(ALICE, BOB, 60)

        assert first.balance_of(ALICE) == 100
        assert first.balance_of(BOB) == 0
        assert second.balance_of(BOB) == 0
        assert second.total_supply() == 0

    def test_nested_calls_join_outer_transaction(self):
        """An inner block that succeeds is still rolled back with the outer one."""
        host = Host()
        token = Token(host, "0x01", "A")

        with pytest.raises(RuntimeError):
            with host.atomic():
                with host.atomic():
                    token.mint(ALICE, 10)
                assert host.in_transaction
                raise RuntimeError("abort")

        assert token.balance_of(ALICE) == 0
        assert not host.in_transaction

    def test_register_returns_participant(self):
        host = Host()
        token = Token(host, "0x01", "A")
        assert host.register(token) is token
