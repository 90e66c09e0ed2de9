"""In-memory token ledgers.

Token models a fungible asset with optional fee-on-transfer behaviour.
LPToken adds issuance and burning for liquidity shares, plus a hook that
lets the owning pool update withdraw fee schedules when shares change hands.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from metaswap.constants import FEE_DENOMINATOR, ZERO_ADDRESS
from metaswap.errors import InsufficientFunds
from metaswap.ledger.host import Host

logger = structlog.get_logger()

TransferHook = Callable[[str, int], None]


class Token:
    """Fungible token ledger.

    Attributes:
        address: Token address (lowercase)
        symbol: Display symbol
        decimals: Native decimals
        transfer_fee: Fee deducted from every transfer, against FEE_DENOMINATOR.
            The recipient receives amount minus the fee; the fee is burned.
    """

    def __init__(
        self,
        host: Host,
        address: str,
        symbol: str,
        decimals: int = 18,
        transfer_fee: int = 0,
    ) -> None:
        if not 0 <= transfer_fee < FEE_DENOMINATOR:
            raise ValueError(f"Transfer fee must be in [0, {FEE_DENOMINATOR}), got {transfer_fee}")
        self.host = host
        self.address = address.lower()
        self.symbol = symbol
        self.decimals = decimals
        self.transfer_fee = transfer_fee
        self._balances: dict[str, int] = {}
        self._total_supply = 0
        host.register(self)

    def __repr__(self) -> str:
        return f"Token({self.symbol}, {self.address[:10]}...)"

    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, account: str) -> int:
        return self._balances.get(account.lower(), 0)

    def mint(self, to: str, amount: int) -> None:
        """Issue new tokens to an account."""
        if amount < 0:
            raise ValueError(f"Cannot mint a negative amount: {amount}")
        to = to.lower()
        self._balances[to] = self._balances.get(to, 0) + amount
        self._total_supply += amount

    def transfer(self, sender: str, to: str, amount: int) -> None:
        """Move tokens from sender to a recipient."""
        self._move(sender, to, amount)

    def transfer_from(self, owner: str, to: str, amount: int) -> None:
        """Pull tokens from owner on their behalf.

        Allowances are not modelled; custody checks belong to the host.
        """
        self._move(owner, to, amount)

    def _move(self, sender: str, to: str, amount: int) -> None:
        sender = sender.lower()
        to = to.lower()
        if amount < 0:
            raise ValueError(f"Cannot transfer a negative amount: {amount}")
        balance = self._balances.get(sender, 0)
        if amount > balance:
            raise InsufficientFunds(
                f"{self.symbol}: transfer amount {amount} exceeds balance {balance}"
            )
        fee = amount * self.transfer_fee // FEE_DENOMINATOR
        self._balances[sender] = balance - amount
        self._balances[to] = self._balances.get(to, 0) + amount - fee
        self._total_supply -= fee

    # --- Journaling ---

    def snapshot(self) -> tuple[dict[str, int], int]:
        return dict(self._balances), self._total_supply

    def restore(self, snapshot: tuple[dict[str, int], int]) -> None:
        balances, total_supply = snapshot
        self._balances = dict(balances)
        self._total_supply = total_supply


class LPToken(Token):
    """Liquidity share ledger owned by a pool."""

    def __init__(self, host: Host, address: str, symbol: str, decimals: int = 18) -> None:
        super().__init__(host, address, symbol, decimals)
        self._transfer_hook: TransferHook | None = None

    def set_transfer_hook(self, hook: TransferHook) -> None:
        """Register a callback invoked as hook(recipient, amount) before each share transfer."""
        self._transfer_hook = hook

    def burn_from(self, holder: str, amount: int) -> None:
        """Destroy shares held by holder."""
        holder = holder.lower()
        balance = self._balances.get(holder, 0)
        if amount > balance:
            raise InsufficientFunds(f"{self.symbol}: burn amount {amount} exceeds balance {balance}")
        self._balances[holder] = balance - amount
        self._total_supply -= amount

    def transfer(self, sender: str, to: str, amount: int) -> None:
        with self.host.atomic():
            self._notify(to, amount)
            super().transfer(sender, to, amount)

    def transfer_from(self, owner: str, to: str, amount: int) -> None:
        with self.host.atomic():
            self._notify(to, amount)
            super().transfer_from(owner, to, amount)

    def _notify(self, to: str, amount: int) -> None:
        if self._transfer_hook is not None and to.lower() != ZERO_ADDRESS:
            self._transfer_hook(to, amount)
