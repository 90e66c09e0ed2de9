"""Tests for the in-memory token ledgers."""

import pytest

from metaswap.constants import ZERO_ADDRESS
from metaswap.errors import InsufficientFunds
from metaswap.ledger import Host, LPToken, Token
from tests.helpers import ALICE, BOB


@pytest.fixture
def token(host: Host) -> Token:
    return Token(host, "0xAbC0000000000000000000000000000000000001", "TKN", decimals=6)


class TestToken:
    def test_address_is_lowercased(self, token: Token) -> None:
        assert token.address == "0xabc0000000000000000000000000000000000001"

    def test_mint_and_transfer(self, token: Token) -> None:
        token.mint(ALICE, 100)
        token.transfer(ALICE, BOB, 30)

        assert token.balance_of(ALICE) == 70
        assert token.balance_of(BOB) == 30
        assert token.total_supply() == 100

    def test_account_keys_are_case_insensitive(self, token: Token) -> None:
        token.mint(ALICE.upper().replace("0X", "0x"), 5)
        assert token.balance_of(ALICE) == 5

    def test_transfer_more_than_balance(self, token: Token) -> None:
        token.mint(ALICE, 10)
        with pytest.raises(InsufficientFunds):
            token.transfer_from(ALICE, BOB, 11)

    def test_negative_amounts_rejected(self, token: Token) -> None:
        with pytest.raises(ValueError):
            token.mint(ALICE, -1)
        with pytest.raises(ValueError):
            token.transfer(ALICE, BOB, -1)

    def test_fee_on_transfer_is_burned(self, host: Host) -> None:
        # 1% transfer fee
        token = Token(host, "0x01", "FEE", transfer_fee=10**8)
        token.mint(ALICE, 1_000)

        token.transfer(ALICE, BOB, 1_000)

        assert token.balance_of(BOB) == 990
        assert token.total_supply() == 990

    def test_invalid_transfer_fee(self, host: Host) -> None:
        with pytest.raises(ValueError):
            Token(host, "0x01", "BAD", transfer_fee=10**10)


class TestLPToken:
    """Tests for share issuance and the transfer hook."""

    def test_burn_from(self, host: Host) -> None:
        lp = LPToken(host, "0x02", "LP")
        lp.mint(ALICE, 100)
        lp.burn_from(ALICE, 40)

        assert lp.balance_of(ALICE) == 60
        assert lp.total_supply() == 60
        with pytest.raises(InsufficientFunds):
            lp.burn_from(ALICE, 61)

    def test_hook_runs_before_transfer(self, host: Host) -> None:
        lp = LPToken(host, "0x02", "LP")
        lp.mint(ALICE, 100)
        seen = []
        lp.set_transfer_hook(lambda to, amount: seen.append((to, amount, lp.balance_of(to))))

        lp.transfer(ALICE, BOB, 25)
        lp.transfer_from(ALICE, BOB, 5)

        # Recipient balance is observed before each transfer lands
        assert seen == [(BOB, 25, 0), (BOB, 5, 25)]

    def test_hook_skipped_for_zero_address(self, host: Host) -> None:
        lp = LPToken(host, "0x02", "LP")
        lp.mint(ALICE, 100)
        seen = []
        lp.set_transfer_hook(lambda to, amount: seen.append(to))

        lp.transfer(ALICE, ZERO_ADDRESS, 10)

        assert seen == []

    def test_failed_transfer_rolls_back_hook_effects(self, host: Host) -> None:
        lp = LPToken(host, "0x02", "LP")
        other = Token(host, "0x03", "OTHER")
        lp.set_transfer_hook(lambda to, amount: other.mint(to, amount))

        with pytest.raises(InsufficientFunds):
            lp.transfer(ALICE, BOB, 1)

        assert other.balance_of(BOB) == 0
