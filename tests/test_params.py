"""Tests for the parameter store."""

import json

import pytest

from offering import DEFAULT_PARAMETERS, MAX_START_PRICE, OFFERING_DURATION
from offering.params import ParameterStore


def test_defaults_and_overrides():
    store = ParameterStore({OFFERING_DURATION: 60})
    assert store[OFFERING_DURATION] == 60
    assert store.get(MAX_START_PRICE) == DEFAULT_PARAMETERS[MAX_START_PRICE]


@pytest.mark.parametrize("value", [-1, 1.5, "10", True])
def test_values_must_be_unsigned_ints(value):
    with pytest.raises(ValueError, match="unsigned integer"):
        ParameterStore({OFFERING_DURATION: value})


def test_unknown_key():
    with pytest.raises(KeyError):
        ParameterStore().get("missing")


def test_from_file(tmp_path):
    path = tmp_path / "params.json"
    path.write_text(json.dumps({OFFERING_DURATION: 3600}))
    assert ParameterStore.from_file(path).get(OFFERING_DURATION) == 3600

    path.write_text(json.dumps([1, 2]))
    with pytest.raises(ValueError, match="JSON object"):
        ParameterStore.from_file(path)

    with pytest.raises(FileNotFoundError):
        ParameterStore.from_file(tmp_path / "nope.json")
