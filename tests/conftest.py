"""Shared fixtures: a registry with small parameters and funded accounts."""

import pytest

from offering import (
    DEPOSIT_ASSET,
    MAX_START_PRICE,
    MAX_TOTAL_SUPPLY,
    NATIVE_ASSET,
    OFFERING_DURATION,
)
from offering.ledger import Ledger, ManualClock
from offering.params import ParameterStore
from offering.registry import Registry
from offering.utils import address_from_seed

START = 1_700_000_000
DEPOSIT = 500
SUPPLY = 100
START_PRICE = 100
DURATION = 1000


@pytest.fixture
def clock():
    return ManualClock(START)


@pytest.fixture
def ledger(clock):
    return Ledger(clock)


@pytest.fixture
def params():
    return ParameterStore({
        MAX_START_PRICE: 1000,
        MAX_TOTAL_SUPPLY: 10_000,
        OFFERING_DURATION: DURATION,
    })


@pytest.fixture
def registry(ledger, params):
    return Registry(ledger, params)


@pytest.fixture
def creator(ledger):
    address = address_from_seed("creator")
    ledger.credit(DEPOSIT_ASSET, address, DEPOSIT)
    return address


@pytest.fixture
def buyer(ledger):
    address = address_from_seed("buyer")
    ledger.credit(NATIVE_ASSET, address, 1_000_000)
    return address


@pytest.fixture
def entry(registry, creator):
    return registry.submit(creator, "Doge", b"\x12\x34", SUPPLY, START_PRICE, DEPOSIT)


@pytest.fixture
def listed(registry, entry):
    registry.whitelist(entry)
    return entry
