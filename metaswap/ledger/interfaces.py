"""Protocols for the pool's external collaborators.

Pools only talk to tokens, the share ledger and the base pool through these
interfaces. The in-memory ledgers in metaswap.ledger.tokens and
StableSwapPool itself satisfy them.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol


class TransferableToken(Protocol):
    """Asset transfer primitive."""

    address: str
    decimals: int

    def balance_of(self, account: str) -> int: ...

    def transfer(self, sender: str, to: str, amount: int) -> None: ...

    def transfer_from(self, owner: str, to: str, amount: int) -> None: ...


class ShareLedger(TransferableToken, Protocol):
    """Liquidity share issuance and burn ledger."""

    symbol: str

    def total_supply(self) -> int: ...

    def mint(self, to: str, amount: int) -> None: ...

    def burn_from(self, holder: str, amount: int) -> None: ...

    def set_transfer_hook(self, hook: Callable[[str, int], None]) -> None: ...


class BasePool(Protocol):
    """Public pricing and liquidity interface of the base pool.

    Amounts are in the base tokens' native decimals. The meta pool passes
    its own address as sender/account.
    """

    address: str

    @property
    def lp_token(self) -> ShareLedger: ...

    @property
    def n_coins(self) -> int: ...

    @property
    def swap_fee(self) -> int: ...

    def get_token(self, index: int) -> TransferableToken: ...

    def get_virtual_price(self) -> int: ...

    def calculate_swap(self, token_index_from: int, token_index_to: int, dx: int) -> int: ...

    def swap(
        self,
        sender: str,
        token_index_from: int,
        token_index_to: int,
        dx: int,
        min_dy: int,
        deadline: int,
    ) -> int: ...

    def calculate_token_amount(self, account: str, amounts: Sequence[int], deposit: bool) -> int: ...

    def add_liquidity(
        self, sender: str, amounts: Sequence[int], min_to_mint: int, deadline: int
    ) -> int: ...

    def calculate_withdraw_one_token(self, account: str, token_amount: int, token_index: int) -> int: ...

    def remove_liquidity_one_token(
        self,
        sender: str,
        token_amount: int,
        token_index: int,
        min_amount: int,
        deadline: int,
    ) -> int: ...
