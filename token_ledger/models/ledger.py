"""Ledger records and query responses."""

from typing import List, Optional

from pydantic import BaseModel, Field

UINT128_MAX = 2**128 - 1


class MinterRecord(BaseModel):
    """The single account allowed to mint and administer, plus its supply cap."""

    minter: str
    cap: Optional[int] = Field(default=None, ge=0, le=UINT128_MAX)


class BalanceResponse(BaseModel):
    address: str
    balance: int


class TotalSupplyResponse(BaseModel):
    total_supply: int


class TokenInfoResponse(BaseModel):
    """Static token metadata plus the live total supply."""

    name: str
    symbol: str
    decimals: int
    total_supply: int


class MinterResponse(BaseModel):
    minter: Optional[str] = None
    cap: Optional[int] = None
    balance_cap: Optional[int] = None


class FrozenResponse(BaseModel):
    address: str
    frozen: bool


class AllAccountsResponse(BaseModel):
    accounts: List[str] = []
