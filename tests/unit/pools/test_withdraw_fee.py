"""Tests for the per-depositor withdraw fee."""

import pytest

from metaswap.constants import FEE_DENOMINATOR, WITHDRAW_FEE_DECAY_TIME
from metaswap.ledger import Host
from metaswap.pools import StableSwapPool
from tests.helpers import ALICE, BOB, DEADLINE, ONE, START_TIME, WEEK, fund, make_pool, seed_pool

# 0.5%
WITHDRAW_FEE = 5 * 10**7


@pytest.fixture
def fee_pool(host: Host) -> StableSwapPool:
    """Fee-less 18/18 pool with a 0.5% default withdraw fee, seeded by ALICE."""
    pool = make_pool(host, withdraw_fee=WITHDRAW_FEE)
    seed_pool(pool, ALICE, [1_000 * ONE, 1_000 * ONE])
    return pool


class TestWithdrawFeeSchedule:
    """Tests for how the fee is recorded and decays."""

    def test_full_fee_after_deposit(self, fee_pool: StableSwapPool) -> None:
        assert fee_pool.get_deposit_timestamp(ALICE) == START_TIME
        assert fee_pool.get_withdraw_fee_multiplier(ALICE) == FEE_DENOMINATOR
        assert fee_pool.calculate_current_withdraw_fee(ALICE) == WITHDRAW_FEE

    def test_decays_linearly(self, host: Host, fee_pool: StableSwapPool) -> None:
        host.advance(2 * WEEK)
        assert fee_pool.calculate_current_withdraw_fee(ALICE) == WITHDRAW_FEE // 2

        host.advance(2 * WEEK)
        assert fee_pool.calculate_current_withdraw_fee(ALICE) == 0

    def test_unknown_account(self, fee_pool: StableSwapPool) -> None:
        assert fee_pool.get_deposit_timestamp(BOB) == 0
        assert fee_pool.calculate_current_withdraw_fee(BOB) == 0

    def test_second_deposit_blends_multiplier(self, host: Host, fee_pool: StableSwapPool) -> None:
        """Doubling a half-decayed position leaves 75% of the default fee."""
        host.advance(2 * WEEK)
        amounts = [1_000 * ONE, 1_000 * ONE]
        fund(fee_pool, ALICE, amounts)

        fee_pool.add_liquidity(ALICE, amounts, 0, DEADLINE)

        assert fee_pool.get_deposit_timestamp(ALICE) == host.timestamp
        assert fee_pool.get_withdraw_fee_multiplier(ALICE) == FEE_DENOMINATOR * 3 // 4
        assert fee_pool.calculate_current_withdraw_fee(ALICE) == WITHDRAW_FEE * 3 // 4

    def test_share_transfer_resets_recipient(self, host: Host, fee_pool: StableSwapPool) -> None:
        host.advance(WEEK)

        fee_pool.lp_token.transfer(ALICE, BOB, 100 * ONE)

        assert fee_pool.get_deposit_timestamp(BOB) == host.timestamp
        assert fee_pool.calculate_current_withdraw_fee(BOB) == WITHDRAW_FEE
        # Sender's schedule is untouched
        assert fee_pool.get_deposit_timestamp(ALICE) == START_TIME

    def test_no_default_fee(self, pool: StableSwapPool) -> None:
        seed_pool(pool, ALICE, [1_000 * ONE, 1_000 * 10**6])
        assert pool.get_withdraw_fee_multiplier(ALICE) == FEE_DENOMINATOR
        assert pool.calculate_current_withdraw_fee(ALICE) == 0


class TestWithdrawFeeCharged:
    """Tests for withdrawals paying the fee."""

    def test_balanced_withdrawal(self, fee_pool: StableSwapPool) -> None:
        amounts = fee_pool.remove_liquidity(ALICE, 1_000 * ONE, [0, 0], DEADLINE)

        # 0.5% of the burned shares stays in the pool
        assert amounts == [4975 * ONE // 10, 4975 * ONE // 10]
        assert fee_pool.lp_token.balance_of(ALICE) == 1_000 * ONE

    def test_balanced_withdrawal_after_decay(self, host: Host, fee_pool: StableSwapPool) -> None:
        host.advance(WITHDRAW_FEE_DECAY_TIME)
        amounts = fee_pool.remove_liquidity(ALICE, 1_000 * ONE, [0, 0], DEADLINE)
        assert amounts == [500 * ONE, 500 * ONE]

    def test_one_token_withdrawal(self, host: Host, fee_pool: StableSwapPool) -> None:
        with_fee = fee_pool.calculate_withdraw_one_token(ALICE, 100 * ONE, 0)
        host.advance(WITHDRAW_FEE_DECAY_TIME)
        without_fee = fee_pool.calculate_withdraw_one_token(ALICE, 100 * ONE, 0)

        assert with_fee == without_fee * (FEE_DENOMINATOR - WITHDRAW_FEE) // FEE_DENOMINATOR

    def test_imbalanced_withdrawal_grosses_up_burn(
        self, host: Host, fee_pool: StableSwapPool
    ) -> None:
        quote_with_fee = fee_pool.calculate_token_amount(ALICE, [100 * ONE, 0], False)
        host.advance(WITHDRAW_FEE_DECAY_TIME)
        quote_without_fee = fee_pool.calculate_token_amount(ALICE, [100 * ONE, 0], False)

        assert quote_with_fee == quote_without_fee * FEE_DENOMINATOR // (
            FEE_DENOMINATOR - WITHDRAW_FEE
        )
