"""Pool state aggregates.

PoolState is the single mutable aggregate behind a pool. It holds only plain
integers, lists and dicts so a pool can snapshot it with deepcopy and restore
it when a transaction aborts.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from metaswap.pools.amplification import AmplificationRamp


@dataclass
class WithdrawFeeAccount:
    """Withdraw fee decay schedule for a single depositor.

    Attributes:
        deposit_timestamp: Time of the depositor's last deposit (or share receipt)
        fee_multiplier: Scale applied to the default withdraw fee, with
            FEE_DENOMINATOR meaning 100% of the default
    """

    deposit_timestamp: int = 0
    fee_multiplier: int = 0


@dataclass
class PoolState:
    """Mutable state of a stable swap pool.

    Attributes:
        balances: Accounted per-token balances in native decimals
        precision_multipliers: Per-token factors mapping native decimals to 18
        swap_fee: Swap fee against FEE_DENOMINATOR
        admin_fee: Share of swap fees kept for the admin, against FEE_DENOMINATOR
        default_withdraw_fee: Withdraw fee charged right after a deposit
        ramp: Amplification ramp schedule
        withdraw_fee_accounts: Per-depositor withdraw fee schedules
    """

    balances: list[int]
    precision_multipliers: list[int]
    swap_fee: int
    admin_fee: int
    default_withdraw_fee: int
    ramp: AmplificationRamp
    withdraw_fee_accounts: dict[str, WithdrawFeeAccount] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if len(self.balances) != len(self.precision_multipliers):
            raise ValueError("balances and precision_multipliers must have the same length")

    @property
    def n_coins(self) -> int:
        return len(self.balances)

    def withdraw_fee_account(self, user: str) -> WithdrawFeeAccount:
        """Get the withdraw fee schedule for a user.

        Unknown users read as a zeroed account. The account is not inserted.
        """
        account = self.withdraw_fee_accounts.get(user.lower())
        if account is None:
            return WithdrawFeeAccount()
        return account

    def set_withdraw_fee_account(self, user: str, account: WithdrawFeeAccount) -> None:
        self.withdraw_fee_accounts[user.lower()] = account


@dataclass
class MetaPoolState(PoolState):
    """Pool state for a meta pool.

    The last token is the base pool's LP token. Its normalized balance is
    scaled by a cached copy of the base pool's virtual price.

    Attributes:
        base_virtual_price: Cached base pool virtual price
        base_cache_last_updated: When the cached price was fetched
    """

    base_virtual_price: int = 0
    base_cache_last_updated: int = 0

    @property
    def base_lp_token_index(self) -> int:
        return self.n_coins - 1
