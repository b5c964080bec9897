"""Tests for the Ledger Store backends."""

import pytest

from token_ledger.storage.store import InMemoryStore, SqliteStore


@pytest.fixture(params=["memory", "sqlite"])
def store(request):
    if request.param == "memory":
        yield InMemoryStore()
    else:
        s = SqliteStore(db_path=":memory:")
        yield s
        s.close()


class TestLedgerStore:
    def test_missing_key_loads_none(self, store):
        assert store.load("balances", b"alice") is None

    def test_save_and_load(self, store):
        store.save("balances", b"alice", b"100")
        assert store.load("balances", b"alice") == b"100"

    def test_namespaces_are_isolated(self, store):
        store.save("balances", b"alice", b"100")
        assert store.load("frozen_balances", b"alice") is None

    def test_remove(self, store):
        store.save("frozen_balances", b"alice", b"true")
        store.remove("frozen_balances", b"alice")
        assert store.load("frozen_balances", b"alice") is None

    def test_remove_missing_key_is_noop(self, store):
        store.remove("frozen_balances", b"nobody")
        assert store.load("frozen_balances", b"nobody") is None

    def test_keys_sorted_per_namespace(self, store):
        store.save("balances", b"carol", b"1")
        store.save("balances", b"alice", b"2")
        store.save("cap", b"", b"10")
        assert store.keys("balances") == [b"alice", b"carol"]


class TestBatch:
    def test_batch_commits_on_success(self, store):
        with store.batch():
            store.save("balances", b"alice", b"5")
            store.save("total_supply", b"", b"5")
        assert store.load("balances", b"alice") == b"5"
        assert store.load("total_supply", b"") == b"5"

    def test_writes_visible_inside_batch(self, store):
        with store.batch():
            store.save("balances", b"alice", b"5")
            assert store.load("balances", b"alice") == b"5"
            store.remove("balances", b"alice")
            assert store.load("balances", b"alice") is None
            assert store.keys("balances") == []

    def test_batch_discards_on_error(self, store):
        store.save("balances", b"alice", b"10")
        with pytest.raises(RuntimeError):
            with store.batch():
                store.save("balances", b"alice", b"0")
                store.save("balances", b"bob", b"10")
                raise RuntimeError("boom")
        assert store.load("balances", b"alice") == b"10"
        assert store.load("balances", b"bob") is None

    def test_nested_batch_commits_with_outer(self, store):
        with store.batch():
            with store.batch():
                store.save("balances", b"alice", b"1")
            store.save("balances", b"bob", b"2")
        assert store.keys("balances") == [b"alice", b"bob"]


    def test_failed_nested_batch_discards_only_its_writes(self, store):
        with store.batch():
            store.save("balances", b"alice", b"1")
            with pytest.raises(RuntimeError):
                with store.batch():
                    store.save("balances", b"bob", b"2")
                    store.save("balances", b"alice", b"9")
                    raise RuntimeError("inner")
            assert store.load("balances", b"alice") == b"1"
            assert store.load("balances", b"bob") is None
            store.save("balances", b"carol", b"3")
        assert store.keys("balances") == [b"alice", b"carol"]
        assert store.load("balances", b"alice") == b"1"


class TestSqlitePersistence:
    def test_reopen_file_keeps_data(self, tmp_path):
        path = str(tmp_path / "ledger.db")
        first = SqliteStore(db_path=path)
        first.save("balances", b"alice", b"42")
        first.close()

        second = SqliteStore(db_path=path)
        assert second.load("balances", b"alice") == b"42"
        second.close()
