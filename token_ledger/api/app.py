"""
Token Ledger API — FastAPI endpoints.

Plays the host role around the Command Dispatcher:
- Execute commands on behalf of a sender
- Balance, supply, token and minter queries
- Account listing and freeze status
"""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from token_ledger.dispatch.address import AddressValidator
from token_ledger.dispatch.dispatcher import CommandDispatcher
from token_ledger.ledger.engine import LedgerEngine
from token_ledger.ledger.errors import ErrorKind, LedgerError
from token_ledger.models.commands import (
    AllAccountsQuery,
    BalanceQuery,
    ErrorResponse,
    ExecuteCommand,
    IsFrozenQuery,
    MinterQuery,
    TokenInfoQuery,
    TotalSupplyQuery,
)
from token_ledger.models.config import InstantiateRequest, TokenConfig
from token_ledger.storage.store import InMemoryStore, LedgerStore

logger = logging.getLogger(__name__)

HTTP_STATUS = {
    ErrorKind.UNAUTHORIZED.value: 403,
    ErrorKind.ACCOUNT_FROZEN.value: 403,
    ErrorKind.INSUFFICIENT_BALANCE.value: 400,
    ErrorKind.CAP_EXCEEDED.value: 400,
    ErrorKind.ARITHMETIC.value: 400,
    ErrorKind.INVALID_ADDRESS.value: 422,
    ErrorKind.ALREADY_INSTANTIATED.value: 409,
}


# --- Request/Response Models ---

class ExecuteRequest(BaseModel):
    sender: str
    msg: ExecuteCommand


def _error(err: ErrorResponse) -> HTTPException:
    return HTTPException(HTTP_STATUS.get(err.kind, 400), err.model_dump())


def _from_ledger_error(e: LedgerError) -> HTTPException:
    return _error(ErrorResponse(kind=e.kind.value, message=str(e)))


# --- Application Factory ---

def create_app(
    store: Optional[LedgerStore] = None,
    token: Optional[TokenConfig] = None,
    instantiate: Optional[InstantiateRequest] = None,
    validator: Optional[AddressValidator] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Token Ledger API",
        description="Fungible token ledger with capped minting and account freezing",
        version="0.1.0",
    )

    # Initialize components
    engine = LedgerEngine(store or InMemoryStore(), token=token)
    dispatcher = CommandDispatcher(engine, validator=validator)
    if instantiate is not None:
        if engine.is_instantiated():
            # A durable store reopened on restart keeps its existing ledger.
            logger.info("Ledger store already instantiated; skipping instantiate")
        else:
            dispatcher.instantiate(instantiate)

    # Store components on app state for access in endpoints
    app.state.engine = engine
    app.state.dispatcher = dispatcher

    # === EXECUTE ===

    @app.post("/execute")
    def execute(req: ExecuteRequest):
        """Run one mutating command as the given sender."""
        try:
            sender = dispatcher.validator.validate(req.sender)
        except LedgerError as e:
            raise _from_ledger_error(e)

        result = dispatcher.execute(sender, req.msg)
        if not result.success:
            raise _error(result.error)
        return {"status": "ok", "command": result.command}

    # === QUERIES ===

    def _query(query: BaseModel):
        try:
            return dispatcher.query(query).model_dump(mode="json")
        except LedgerError as e:
            raise _from_ledger_error(e)

    @app.get("/balance/{address}")
    def get_balance(address: str):
        return _query(BalanceQuery(address=address))

    @app.get("/total_supply")
    def get_total_supply():
        return _query(TotalSupplyQuery())

    @app.get("/token_info")
    def get_token_info():
        return _query(TokenInfoQuery())

    @app.get("/minter")
    def get_minter():
        return _query(MinterQuery())

    @app.get("/frozen/{address}")
    def get_frozen(address: str):
        return _query(IsFrozenQuery(address=address))

    @app.get("/accounts")
    def get_accounts():
        return _query(AllAccountsQuery())

    logger.debug("Token ledger app created for %s", engine.token.symbol)
    return app


# Default application instance
app = create_app()
