"""Tests for the chain-backed clock, using a stand-in Substrate node."""

import pytest

from offering import chain as chain_module
from offering import utils
from offering.chain import ChainClock


class _Result:
    def __init__(self, value):
        self.value = value


class FakeSubstrate:
    instances = []

    def __init__(self, url):
        self.url = url
        self.closed = False
        self.head_failures = 0
        self.queries = []
        FakeSubstrate.instances.append(self)

    def get_chain_finalised_head(self):
        if self.head_failures:
            self.head_failures -= 1
            raise ConnectionError("node unavailable")
        return "0xhead"

    def query(self, module, storage_function, block_hash=None):
        self.queries.append((module, storage_function, block_hash))
        return _Result(1_700_000_000_987)

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def fake_node(monkeypatch):
    FakeSubstrate.instances = []
    monkeypatch.setattr(chain_module, "SubstrateInterface", FakeSubstrate)
    monkeypatch.setattr(utils.time, "sleep", lambda _: None)


def test_now_reads_finalized_timestamp():
    clock = ChainClock("ws://node")
    assert clock.now() == 1_700_000_000
    [node] = FakeSubstrate.instances
    assert node.url == "ws://node"
    assert node.queries == [("Timestamp", "Now", "0xhead")]
    assert clock.now_datetime().year == 2023


def test_connection_is_lazy_and_closed():
    with ChainClock() as clock:
        assert FakeSubstrate.instances == []
        clock.now()
        node = FakeSubstrate.instances[0]
    assert node.closed
    assert clock._substrate is None


def test_rpc_calls_are_retried():
    clock = ChainClock()
    clock.substrate.head_failures = 2
    assert clock.now() == 1_700_000_000
