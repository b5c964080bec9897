"""Ledger error kinds. Every failed operation raises exactly one of these."""

from enum import Enum


class ErrorKind(str, Enum):
    UNAUTHORIZED = "unauthorized"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    CAP_EXCEEDED = "cap_exceeded"
    ACCOUNT_FROZEN = "account_frozen"
    INVALID_ADDRESS = "invalid_address"
    ARITHMETIC = "arithmetic"
    ALREADY_INSTANTIATED = "already_instantiated"


class LedgerError(Exception):
    """Base exception for all ledger-related errors."""

    kind: ErrorKind


class Unauthorized(LedgerError):
    """Raised when the caller is not the current authorized minter."""

    kind = ErrorKind.UNAUTHORIZED


class InsufficientBalance(LedgerError):
    """Raised when a debit exceeds the available balance."""

    kind = ErrorKind.INSUFFICIENT_BALANCE


class CapExceeded(LedgerError):
    """Raised when a mint or transfer would push supply or a balance above its cap."""

    kind = ErrorKind.CAP_EXCEEDED


class AccountFrozen(LedgerError):
    """Raised when a frozen account tries to send tokens."""

    kind = ErrorKind.ACCOUNT_FROZEN


class InvalidAddress(LedgerError):
    """Raised by address validation before the engine is reached."""

    kind = ErrorKind.INVALID_ADDRESS


class ArithmeticOverflow(LedgerError):
    """Raised when an amount or a credit leaves the unsigned 128-bit range."""

    kind = ErrorKind.ARITHMETIC


class AlreadyInstantiated(LedgerError):
    """Raised when instantiate runs against a store that already holds a ledger."""

    kind = ErrorKind.ALREADY_INSTANTIATED
