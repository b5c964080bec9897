"""Token configuration and instantiation parameters."""

from typing import List, Optional

from pydantic import BaseModel, Field

from token_ledger.models.ledger import UINT128_MAX


class TokenConfig(BaseModel):
    """Static metadata reported by token_info."""

    name: str = "My Token"
    symbol: str = "MTK"
    decimals: int = Field(ge=0, le=18, default=18)


class InitialBalance(BaseModel):
    address: str
    amount: int = Field(ge=0, le=UINT128_MAX)


class InstantiateRequest(BaseModel):
    """
    Parameters for creating a fresh ledger.

    balance_cap defaults to cap when left unset, so both ceilings start out
    equal unless the caller asks otherwise.
    """

    minter: str
    cap: Optional[int] = Field(default=None, ge=0, le=UINT128_MAX)
    balance_cap: Optional[int] = Field(default=None, ge=0, le=UINT128_MAX)
    initial_balances: List[InitialBalance] = []

    def effective_balance_cap(self) -> Optional[int]:
        return self.balance_cap if self.balance_cap is not None else self.cap
