"""Tests for the declining-price function and checked arithmetic."""

import pytest

from offering import UINT256_MAX
from offering.errors import Overflow
from offering.pricing import (
    checked_add,
    checked_mul,
    checked_sub,
    compute_current_price,
    elapsed_since,
)


@pytest.mark.parametrize(
    "elapsed, expected",
    [(0, 100), (1, 100), (10, 99), (500, 50), (999, 1), (1000, 0), (5000, 0)],
)
def test_linear_decay_with_truncation(elapsed, expected):
    assert compute_current_price(100, 1000, elapsed) == expected


def test_zero_duration_returns_zero_without_dividing():
    assert compute_current_price(100, 0, 0) == 0
    assert compute_current_price(0, 0, 0) == 0


@pytest.mark.parametrize("start_price", [0, 1, 7, 10**18, UINT256_MAX])
def test_price_is_zero_once_duration_elapsed(start_price):
    assert compute_current_price(start_price, 60, 60) == 0
    assert compute_current_price(start_price, 60, 61) == 0


@pytest.mark.parametrize("start_price", [1, 3, 10**18, UINT256_MAX])
def test_price_at_listing_is_start_price(start_price):
    assert compute_current_price(start_price, 3600, 0) == start_price


def test_price_never_increases():
    start_price, duration = 7 * 10**18 + 13, 86_400
    previous = start_price
    for elapsed in range(0, duration + 100, 97):
        price = compute_current_price(start_price, duration, elapsed)
        assert 0 <= price <= previous
        previous = price
    assert previous == 0


def test_intermediate_product_beyond_uint256_is_exact():
    price = compute_current_price(UINT256_MAX, UINT256_MAX, UINT256_MAX - 1)
    assert price == 1


def test_rejects_negative_and_oversized_inputs():
    with pytest.raises(ValueError, match="unsigned"):
        compute_current_price(-1, 10, 0)
    with pytest.raises(ValueError, match="integer"):
        compute_current_price(1.5, 10, 0)
    with pytest.raises(Overflow):
        compute_current_price(UINT256_MAX + 1, 10, 0)


def test_checked_mul_bounds():
    assert checked_mul(2**128, 2**127) == 2**255
    assert checked_mul(UINT256_MAX, 1) == UINT256_MAX
    with pytest.raises(Overflow, match="overflows"):
        checked_mul(2**255, 2)


def test_checked_add_and_sub():
    assert checked_add(2, 3) == 5
    with pytest.raises(Overflow):
        checked_add(UINT256_MAX, 1)
    assert checked_sub(5, 5) == 0
    with pytest.raises(Overflow, match="underflows"):
        checked_sub(4, 5)


def test_elapsed_since():
    assert elapsed_since(0, 1_000) == 0
    assert elapsed_since(500, 400) == 0
    assert elapsed_since(500, 500) == 0
    assert elapsed_since(500, 750) == 250
