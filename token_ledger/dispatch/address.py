"""Address validation — turns user-supplied strings into canonical account ids."""

import re

from token_ledger.ledger.errors import InvalidAddress

_CANONICAL = re.compile(r"^[a-z0-9_\-]+$")


class AddressValidator:
    """
    Accepts only addresses already in canonical form. Anything that would
    need normalizing (case, surrounding whitespace) is rejected rather than
    silently rewritten, so two spellings can never name the same account.
    """

    def __init__(self, min_length: int = 3, max_length: int = 90):
        self.min_length = min_length
        self.max_length = max_length

    def validate(self, raw: str) -> str:
        if not isinstance(raw, str):
            raise InvalidAddress(f"Address must be a string, got {type(raw).__name__}")
        if not (self.min_length <= len(raw) <= self.max_length):
            raise InvalidAddress(
                f"Invalid address length {len(raw)}: "
                f"expected {self.min_length}..{self.max_length}"
            )
        if not _CANONICAL.match(raw):
            raise InvalidAddress(f"Address not normalized: {raw!r}")
        return raw
