"""Decoded commands and queries accepted by the dispatcher."""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

from token_ledger.models.ledger import UINT128_MAX


# --- Execute commands ---

class Transfer(BaseModel):
    type: Literal["transfer"] = "transfer"
    recipient: str
    amount: int = Field(ge=0, le=UINT128_MAX)


class Mint(BaseModel):
    type: Literal["mint"] = "mint"
    recipient: str
    amount: int = Field(ge=0, le=UINT128_MAX)


class UpdateMinter(BaseModel):
    type: Literal["update_minter"] = "update_minter"
    minter: str
    cap: Optional[int] = Field(default=None, ge=0, le=UINT128_MAX)


class UpdateBalanceCap(BaseModel):
    type: Literal["update_balance_cap"] = "update_balance_cap"
    cap: Optional[int] = Field(default=None, ge=0, le=UINT128_MAX)


class Freeze(BaseModel):
    type: Literal["freeze"] = "freeze"
    address: str


class Unfreeze(BaseModel):
    type: Literal["unfreeze"] = "unfreeze"
    address: str


ExecuteCommand = Annotated[
    Union[Transfer, Mint, UpdateMinter, UpdateBalanceCap, Freeze, Unfreeze],
    Field(discriminator="type"),
]


# --- Queries ---

class BalanceQuery(BaseModel):
    type: Literal["balance"] = "balance"
    address: str


class TotalSupplyQuery(BaseModel):
    type: Literal["total_supply"] = "total_supply"


class TokenInfoQuery(BaseModel):
    type: Literal["token_info"] = "token_info"


class MinterQuery(BaseModel):
    type: Literal["minter"] = "minter"


class IsFrozenQuery(BaseModel):
    type: Literal["is_frozen"] = "is_frozen"
    address: str


class AllAccountsQuery(BaseModel):
    type: Literal["all_accounts"] = "all_accounts"


QueryCommand = Annotated[
    Union[
        BalanceQuery,
        TotalSupplyQuery,
        TokenInfoQuery,
        MinterQuery,
        IsFrozenQuery,
        AllAccountsQuery,
    ],
    Field(discriminator="type"),
]

execute_adapter = TypeAdapter(ExecuteCommand)
query_adapter = TypeAdapter(QueryCommand)


def parse_execute(raw: dict):
    """Decode a raw execute message into its command model."""
    return execute_adapter.validate_python(raw)


def parse_query(raw: dict):
    """Decode a raw query message into its query model."""
    return query_adapter.validate_python(raw)


# --- Responses ---

class ErrorResponse(BaseModel):
    """Structured failure reported back to the host."""

    kind: str
    message: str


class ExecuteResponse(BaseModel):
    success: bool
    command: str
    error: Optional[ErrorResponse] = None
