"""
Conservation Tests

INVARIANT: total supply equals the sum of all balances.

    ∀ reachable state S:
        total_supply(S) = Σ balance(S, a) over every account a

Every operation either applies fully or leaves the ledger unchanged,
so a rejected operation can never break the sum.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from token_ledger.ledger.engine import LedgerEngine
from token_ledger.ledger.errors import LedgerError
from token_ledger.models.config import InstantiateRequest
from token_ledger.storage.store import InMemoryStore

ACCOUNTS = ["minter", "alice", "bob", "carol"]

account = st.sampled_from(ACCOUNTS)
amount = st.integers(min_value=0, max_value=600)

operation = st.one_of(
    st.tuples(st.just("mint"), account, account, amount),
    st.tuples(st.just("transfer"), account, account, amount),
    st.tuples(st.just("freeze"), account, account),
    st.tuples(st.just("unfreeze"), account, account),
    st.tuples(st.just("update_minter"), account, account, st.one_of(st.none(), amount)),
    st.tuples(st.just("update_balance_cap"), account, st.one_of(st.none(), amount)),
)


def _fresh_engine() -> LedgerEngine:
    engine = LedgerEngine(InMemoryStore())
    engine.instantiate(InstantiateRequest(minter="minter", cap=1000))
    return engine


def _state(engine: LedgerEngine) -> tuple:
    return (
        tuple((a, engine.balance(a)) for a in engine.all_accounts()),
        engine.total_supply(),
        tuple(engine.is_frozen(a) for a in ACCOUNTS),
        engine.minter_info().model_dump_json(),
    )


def _apply(engine: LedgerEngine, op: tuple) -> None:
    name, *args = op
    getattr(engine, name)(*args)


class TestConservationProperties:
    @given(st.lists(operation, max_size=40))
    @settings(max_examples=200, deadline=None)
    def test_supply_equals_sum_of_balances(self, ops):
        """
        PROPERTY: after any sequence of operations, accepted or rejected,
        total supply is the sum of balances and no balance is negative.
        """
        engine = _fresh_engine()
        for op in ops:
            try:
                _apply(engine, op)
            except LedgerError:
                pass
            balances = [engine.balance(a) for a in engine.all_accounts()]
            assert all(b >= 0 for b in balances)
            assert engine.total_supply() == sum(balances)

    @given(st.lists(operation, max_size=40))
    @settings(max_examples=200, deadline=None)
    def test_rejected_operation_changes_nothing(self, ops):
        """PROPERTY: a rejected operation leaves every table exactly as it was."""
        engine = _fresh_engine()
        for op in ops:
            before = _state(engine)
            try:
                _apply(engine, op)
            except LedgerError:
                assert _state(engine) == before

    @given(account, account, amount)
    @settings(max_examples=100, deadline=None)
    def test_transfer_preserves_supply(self, sender, recipient, value):
        engine = _fresh_engine()
        engine.mint("minter", "alice", 500)
        engine.mint("minter", "bob", 300)
        try:
            engine.transfer(sender, recipient, value)
        except LedgerError:
            pass
        assert engine.total_supply() == 800
