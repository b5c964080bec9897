"""
Ledger tables — typed views over the Ledger Store.

Each table owns one namespace. Missing keys resolve to explicit defaults:
zero balance, zero supply, no cap, not frozen.
"""

import json
from typing import List, Optional

from token_ledger.ledger.errors import ArithmeticOverflow, InsufficientBalance
from token_ledger.models.ledger import UINT128_MAX, MinterRecord
from token_ledger.storage.store import LedgerStore

BALANCES = "balances"
TOTAL_SUPPLY = "total_supply"
MINTER = "minter"
CAP = "cap"
FROZEN_BALANCES = "frozen_balances"

# Singleton records live under the empty key of their namespace.
_SINGLETON = b""


def _encode_uint(n: int) -> bytes:
    return str(n).encode()


def _decode_uint(raw: Optional[bytes]) -> int:
    return int(raw.decode()) if raw else 0


def _key(account: str) -> bytes:
    return account.encode()


def require_amount(amount: int) -> int:
    """Reject amounts outside the unsigned 128-bit range."""
    if not 0 <= amount <= UINT128_MAX:
        raise ArithmeticOverflow(f"Amount {amount} is outside the unsigned 128-bit range")
    return amount


def checked_add(a: int, b: int) -> int:
    """Add two ledger amounts, refusing to leave the 128-bit range."""
    require_amount(a)
    require_amount(b)
    total = a + b
    if total > UINT128_MAX:
        raise ArithmeticOverflow(f"Overflow: {a} + {b} exceeds the 128-bit range")
    return total


class BalanceTable:
    """Account -> balance."""

    def __init__(self, store: LedgerStore):
        self._store = store

    def get(self, account: str) -> int:
        return _decode_uint(self._store.load(BALANCES, _key(account)))

    def set(self, account: str, amount: int) -> None:
        self._store.save(BALANCES, _key(account), _encode_uint(amount))

    def credit(self, account: str, amount: int) -> int:
        new_balance = checked_add(self.get(account), amount)
        self.set(account, new_balance)
        return new_balance

    def debit(self, account: str, amount: int) -> int:
        require_amount(amount)
        balance = self.get(account)
        if balance < amount:
            raise InsufficientBalance(
                f"Cannot send more tokens than you have: "
                f"balance {balance}, requested {amount}"
            )
        self.set(account, balance - amount)
        return balance - amount

    def accounts(self) -> List[str]:
        return [k.decode() for k in self._store.keys(BALANCES)]


class SupplyRecord:
    """Total supply plus the per-account balance cap."""

    def __init__(self, store: LedgerStore):
        self._store = store

    def total_supply(self) -> int:
        return _decode_uint(self._store.load(TOTAL_SUPPLY, _SINGLETON))

    def set_total_supply(self, amount: int) -> None:
        self._store.save(TOTAL_SUPPLY, _SINGLETON, _encode_uint(amount))

    def increase_supply(self, amount: int) -> int:
        new_supply = checked_add(self.total_supply(), amount)
        self.set_total_supply(new_supply)
        return new_supply

    def cap(self) -> Optional[int]:
        raw = self._store.load(CAP, _SINGLETON)
        return int(raw.decode()) if raw else None

    def set_cap(self, cap: Optional[int]) -> None:
        if cap is None:
            self._store.remove(CAP, _SINGLETON)
        else:
            self._store.save(CAP, _SINGLETON, _encode_uint(cap))


class MinterTable:
    """The single minter record."""

    def __init__(self, store: LedgerStore):
        self._store = store

    def current(self) -> Optional[MinterRecord]:
        raw = self._store.load(MINTER, _SINGLETON)
        return MinterRecord.model_validate_json(raw) if raw else None

    def cap(self) -> Optional[int]:
        record = self.current()
        return record.cap if record else None

    def install(self, minter: str, cap: Optional[int]) -> MinterRecord:
        record = MinterRecord(minter=minter, cap=cap)
        self._store.save(MINTER, _SINGLETON, record.model_dump_json().encode())
        return record

    def is_authorized(self, caller: str) -> bool:
        # A minter without a cap has not finished installation and may not act.
        record = self.current()
        return record is not None and record.minter == caller and record.cap is not None


class FreezeTable:
    """Account -> frozen. Only frozen accounts have an entry."""

    def __init__(self, store: LedgerStore):
        self._store = store

    def is_frozen(self, account: str) -> bool:
        raw = self._store.load(FROZEN_BALANCES, _key(account))
        return bool(json.loads(raw)) if raw else False

    def freeze(self, account: str) -> None:
        self._store.save(FROZEN_BALANCES, _key(account), json.dumps(True).encode())

    def unfreeze(self, account: str) -> None:
        self._store.remove(FROZEN_BALANCES, _key(account))
