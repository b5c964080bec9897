"""
Command Dispatcher — the boundary between the host and the Ledger Engine.

Behavioral Contract:
- Accepts a decoded command plus the caller identity supplied by the host
- Validates every user-supplied address before the engine sees it
- Invokes exactly one engine operation per command
- Maps LedgerError kinds to structured ErrorResponses; never swallows them silently
"""

import logging
from typing import Callable, Dict, Optional

from pydantic import BaseModel

from token_ledger.dispatch.address import AddressValidator
from token_ledger.ledger.engine import LedgerEngine
from token_ledger.ledger.errors import LedgerError, Unauthorized
from token_ledger.models.commands import (
    ErrorResponse,
    ExecuteResponse,
    Freeze,
    Mint,
    Transfer,
    Unfreeze,
    UpdateBalanceCap,
    UpdateMinter,
)
from token_ledger.models.config import InitialBalance, InstantiateRequest
from token_ledger.models.ledger import (
    AllAccountsResponse,
    BalanceResponse,
    FrozenResponse,
    TotalSupplyResponse,
)

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Routes decoded commands and queries to the engine."""

    def __init__(
        self,
        engine: LedgerEngine,
        validator: Optional[AddressValidator] = None,
    ):
        self.engine = engine
        self.validator = validator or AddressValidator()
        self._handlers: Dict[str, Callable] = {}
        self._query_handlers: Dict[str, Callable] = {}
        self._register_default_handlers()

    def _register_default_handlers(self) -> None:
        self._handlers["transfer"] = self._handle_transfer
        self._handlers["mint"] = self._handle_mint
        self._handlers["update_minter"] = self._handle_update_minter
        self._handlers["update_balance_cap"] = self._handle_update_balance_cap
        self._handlers["freeze"] = self._handle_freeze
        self._handlers["unfreeze"] = self._handle_unfreeze

        self._query_handlers["balance"] = lambda q: BalanceResponse(
            address=q.address,
            balance=self.engine.balance(self.validator.validate(q.address)),
        )
        self._query_handlers["total_supply"] = lambda q: TotalSupplyResponse(
            total_supply=self.engine.total_supply(),
        )
        self._query_handlers["token_info"] = lambda q: self.engine.token_info()
        self._query_handlers["minter"] = lambda q: self.engine.minter_info()
        self._query_handlers["is_frozen"] = lambda q: FrozenResponse(
            address=q.address,
            frozen=self.engine.is_frozen(self.validator.validate(q.address)),
        )
        self._query_handlers["all_accounts"] = lambda q: AllAccountsResponse(
            accounts=self.engine.all_accounts(),
        )

    # === SETUP ===

    def instantiate(self, request: InstantiateRequest) -> None:
        """Validate every address in the request, then set up the ledger."""
        validated = InstantiateRequest(
            minter=self.validator.validate(request.minter),
            cap=request.cap,
            balance_cap=request.balance_cap,
            initial_balances=[
                InitialBalance(address=self.validator.validate(b.address), amount=b.amount)
                for b in request.initial_balances
            ],
        )
        self.engine.instantiate(validated)
        logger.info(
            "Ledger instantiated: minter=%s cap=%s initial_accounts=%d",
            validated.minter,
            validated.cap,
            len(validated.initial_balances),
        )

    # === EXECUTE ===

    def execute(self, sender: str, command: BaseModel) -> ExecuteResponse:
        """
        Run one command on behalf of sender.

        Returns a success acknowledgment, or an ErrorResponse carrying the
        kind of the LedgerError that rejected it.
        """
        handler = self._handlers.get(command.type)
        if handler is None:
            raise ValueError(f"No handler registered for command type: {command.type}")

        try:
            handler(sender, command)
        except LedgerError as e:
            logger.warning(
                "Rejected %s from %s: %s (%s)",
                command.type, sender, e.kind.value, e,
            )
            return ExecuteResponse(
                success=False,
                command=command.type,
                error=ErrorResponse(kind=e.kind.value, message=str(e)),
            )

        logger.info("Executed %s from %s", command.type, sender)
        return ExecuteResponse(success=True, command=command.type)

    def _handle_transfer(self, sender: str, cmd: Transfer) -> None:
        recipient = self.validator.validate(cmd.recipient)
        self.engine.transfer(sender, recipient, cmd.amount)

    def _require_minter(self, sender: str) -> None:
        # Authorization is decided before any address in the command is validated.
        if not self.engine.minter.is_authorized(sender):
            raise Unauthorized(f"{sender} is not the authorized minter")

    def _handle_mint(self, sender: str, cmd: Mint) -> None:
        self._require_minter(sender)
        recipient = self.validator.validate(cmd.recipient)
        self.engine.mint(sender, recipient, cmd.amount)

    def _handle_update_minter(self, sender: str, cmd: UpdateMinter) -> None:
        self._require_minter(sender)
        new_minter = self.validator.validate(cmd.minter)
        self.engine.update_minter(sender, new_minter, cmd.cap)

    def _handle_update_balance_cap(self, sender: str, cmd: UpdateBalanceCap) -> None:
        self.engine.update_balance_cap(sender, cmd.cap)

    def _handle_freeze(self, sender: str, cmd: Freeze) -> None:
        self._require_minter(sender)
        address = self.validator.validate(cmd.address)
        self.engine.freeze(sender, address)

    def _handle_unfreeze(self, sender: str, cmd: Unfreeze) -> None:
        self._require_minter(sender)
        address = self.validator.validate(cmd.address)
        self.engine.unfreeze(sender, address)

    # === QUERY ===

    def query(self, query: BaseModel) -> BaseModel:
        """Answer a read query. Only address validation can fail here."""
        handler = self._query_handlers.get(query.type)
        if handler is None:
            raise ValueError(f"No handler registered for query type: {query.type}")
        return handler(query)
