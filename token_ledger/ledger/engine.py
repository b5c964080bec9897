"""
Ledger Engine — the token accounting state machine.

Composes the balance, supply, minter and freeze tables and enforces:
- total supply equals the sum of all balances
- no balance goes negative or leaves the 128-bit range
- the supply cap is never exceeded by a mint
- the per-account cap is never exceeded by an incoming transfer
- frozen accounts cannot originate transfers
- only the authorized minter mints or administers

Behavioral Contract:
- Every mutating operation checks all of its preconditions before its
  first write, then issues its writes inside one store batch.
- Failures raise a LedgerError subclass; nothing is logged here.
"""

from typing import List, Optional

from token_ledger.ledger.errors import (
    AccountFrozen,
    AlreadyInstantiated,
    CapExceeded,
    InsufficientBalance,
    Unauthorized,
)
from token_ledger.ledger.tables import (
    BalanceTable,
    FreezeTable,
    MinterTable,
    SupplyRecord,
    checked_add,
    require_amount,
)
from token_ledger.models.config import InstantiateRequest, TokenConfig
from token_ledger.models.ledger import MinterResponse, TokenInfoResponse
from token_ledger.storage.store import LedgerStore


class LedgerEngine:
    """Request/response processor over persistent ledger state."""

    def __init__(self, store: LedgerStore, token: Optional[TokenConfig] = None):
        self.store = store
        self.token = token or TokenConfig()
        self.balances = BalanceTable(store)
        self.supply = SupplyRecord(store)
        self.minter = MinterTable(store)
        self.frozen = FreezeTable(store)

    # === SETUP ===

    def instantiate(self, request: InstantiateRequest) -> None:
        """
        Install the first minter, both caps and any initial balances.
        Refuses a store that already has a minter record, since the initial
        supply would overwrite the total of balances already held there.
        """
        if self.is_instantiated():
            raise AlreadyInstantiated("Ledger store already holds a minter record")

        totals = {}
        supply = 0
        for entry in request.initial_balances:
            totals[entry.address] = checked_add(totals.get(entry.address, 0), entry.amount)
            supply = checked_add(supply, entry.amount)

        if request.cap is not None and supply > request.cap:
            raise CapExceeded(
                f"Initial supply {supply} exceeds the minter cap {request.cap}"
            )

        with self.store.batch():
            self.minter.install(request.minter, request.cap)
            self.supply.set_cap(request.effective_balance_cap())
            for address, amount in totals.items():
                self.balances.set(address, amount)
            self.supply.set_total_supply(supply)

    def is_instantiated(self) -> bool:
        return self.minter.current() is not None

    # === AUTHORIZATION ===

    def _require_minter(self, caller: str) -> None:
        if not self.minter.is_authorized(caller):
            raise Unauthorized(f"{caller} is not the authorized minter")

    # === MUTATIONS ===

    def mint(self, caller: str, recipient: str, amount: int) -> None:
        self._require_minter(caller)
        require_amount(amount)

        supply = self.supply.total_supply()
        cap = self.minter.cap()
        if cap is not None and supply + amount > cap:
            raise CapExceeded(
                f"Cannot mint more tokens than the minter cap: "
                f"supply {supply} + {amount} > {cap}"
            )
        # Overflow checks, before any write.
        checked_add(supply, amount)
        checked_add(self.balances.get(recipient), amount)

        with self.store.batch():
            self.balances.credit(recipient, amount)
            self.supply.increase_supply(amount)

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        if self.frozen.is_frozen(sender):
            raise AccountFrozen(f"Cannot transfer from frozen account {sender}")
        require_amount(amount)
        if sender == recipient or amount == 0:
            return

        sender_balance = self.balances.get(sender)
        if sender_balance < amount:
            raise InsufficientBalance(
                f"Cannot send more tokens than you have: "
                f"balance {sender_balance}, requested {amount}"
            )
        recipient_balance = checked_add(self.balances.get(recipient), amount)
        balance_cap = self.supply.cap()
        if balance_cap is not None and recipient_balance > balance_cap:
            raise CapExceeded(
                f"Cannot hold more tokens than the cap: "
                f"{recipient} would hold {recipient_balance} > {balance_cap}"
            )

        with self.store.batch():
            self.balances.debit(sender, amount)
            self.balances.credit(recipient, amount)

    def freeze(self, caller: str, address: str) -> None:
        self._require_minter(caller)
        with self.store.batch():
            self.frozen.freeze(address)

    def unfreeze(self, caller: str, address: str) -> None:
        self._require_minter(caller)
        with self.store.batch():
            self.frozen.unfreeze(address)

    def update_minter(self, caller: str, new_minter: str, cap: Optional[int] = None) -> None:
        """
        Hand the minter role to new_minter. Both the supply cap and the
        per-account cap take the new value; existing balances and supply
        are not re-checked against it.

        A missing cap is stored as 0: the new minter can still administer
        and hand over the role, but cannot mint until a larger cap is set.
        """
        self._require_minter(caller)
        cap = require_amount(cap) if cap is not None else 0
        with self.store.batch():
            self.minter.install(new_minter, cap)
            self.supply.set_cap(cap)

    def update_balance_cap(self, caller: str, cap: Optional[int]) -> None:
        """Change only the per-account ceiling. None removes it."""
        self._require_minter(caller)
        with self.store.batch():
            self.supply.set_cap(cap)

    # === QUERIES ===

    def balance(self, address: str) -> int:
        return self.balances.get(address)

    def total_supply(self) -> int:
        return self.supply.total_supply()

    def is_frozen(self, address: str) -> bool:
        return self.frozen.is_frozen(address)

    def all_accounts(self) -> List[str]:
        return self.balances.accounts()

    def token_info(self) -> TokenInfoResponse:
        return TokenInfoResponse(
            name=self.token.name,
            symbol=self.token.symbol,
            decimals=self.token.decimals,
            total_supply=self.total_supply(),
        )

    def minter_info(self) -> MinterResponse:
        record = self.minter.current()
        return MinterResponse(
            minter=record.minter if record else None,
            cap=record.cap if record else None,
            balance_cap=self.supply.cap(),
        )
