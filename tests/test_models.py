"""Tests for command, config and record models."""

import pytest
from pydantic import ValidationError

from token_ledger.models import (
    UINT128_MAX,
    Freeze,
    InstantiateRequest,
    Mint,
    MinterRecord,
    TokenConfig,
    Transfer,
    UpdateMinter,
    parse_execute,
    parse_query,
)


class TestCommandParsing:
    def test_parse_transfer(self):
        cmd = parse_execute({"type": "transfer", "recipient": "bob", "amount": 5})
        assert isinstance(cmd, Transfer)
        assert cmd.amount == 5

    def test_parse_update_minter_without_cap(self):
        cmd = parse_execute({"type": "update_minter", "minter": "newminter"})
        assert isinstance(cmd, UpdateMinter)
        assert cmd.cap is None

    def test_parse_freeze(self):
        assert isinstance(parse_execute({"type": "freeze", "address": "bob"}), Freeze)

    def test_unknown_command_rejected(self):
        with pytest.raises(ValidationError):
            parse_execute({"type": "burn", "amount": 1})

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            Mint(recipient="alice", amount=-1)

    def test_amount_above_uint128_rejected(self):
        Mint(recipient="alice", amount=UINT128_MAX)
        with pytest.raises(ValidationError):
            Mint(recipient="alice", amount=UINT128_MAX + 1)

    def test_parse_queries(self):
        assert parse_query({"type": "balance", "address": "alice"}).address == "alice"
        assert parse_query({"type": "token_info"}).type == "token_info"
        with pytest.raises(ValidationError):
            parse_query({"type": "allowance"})


class TestConfig:
    def test_token_defaults(self):
        token = TokenConfig()
        assert (token.name, token.symbol, token.decimals) == ("My Token", "MTK", 18)

    def test_decimals_bounds(self):
        with pytest.raises(ValidationError):
            TokenConfig(decimals=19)

    def test_effective_balance_cap(self):
        assert InstantiateRequest(minter="minter", cap=10).effective_balance_cap() == 10
        assert InstantiateRequest(minter="minter", cap=10, balance_cap=3).effective_balance_cap() == 3
        assert InstantiateRequest(minter="minter").effective_balance_cap() is None


class TestMinterRecord:
    def test_json_round_trip(self):
        record = MinterRecord(minter="minter", cap=None)
        assert MinterRecord.model_validate_json(record.model_dump_json()) == record
