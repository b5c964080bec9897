"""Token ledger data models."""

from token_ledger.models.commands import (
    AllAccountsQuery,
    BalanceQuery,
    ErrorResponse,
    ExecuteCommand,
    ExecuteResponse,
    Freeze,
    IsFrozenQuery,
    Mint,
    MinterQuery,
    QueryCommand,
    TokenInfoQuery,
    TotalSupplyQuery,
    Transfer,
    Unfreeze,
    UpdateBalanceCap,
    UpdateMinter,
    parse_execute,
    parse_query,
)
from token_ledger.models.config import InitialBalance, InstantiateRequest, TokenConfig
from token_ledger.models.ledger import (
    UINT128_MAX,
    AllAccountsResponse,
    BalanceResponse,
    FrozenResponse,
    MinterRecord,
    MinterResponse,
    TokenInfoResponse,
    TotalSupplyResponse,
)

__all__ = [
    "AllAccountsQuery",
    "AllAccountsResponse",
    "BalanceQuery",
    "BalanceResponse",
    "ErrorResponse",
    "ExecuteCommand",
    "ExecuteResponse",
    "Freeze",
    "FrozenResponse",
    "InitialBalance",
    "InstantiateRequest",
    "IsFrozenQuery",
    "Mint",
    "MinterQuery",
    "MinterRecord",
    "MinterResponse",
    "QueryCommand",
    "TokenConfig",
    "TokenInfoQuery",
    "TokenInfoResponse",
    "TotalSupplyQuery",
    "TotalSupplyResponse",
    "Transfer",
    "UINT128_MAX",
    "Unfreeze",
    "UpdateBalanceCap",
    "UpdateMinter",
    "parse_execute",
    "parse_query",
]
