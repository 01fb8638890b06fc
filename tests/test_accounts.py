"""Tests for the accounts file loader."""

import pytest

from accounts import demo_accounts, load_accounts, split_roles
from offering.utils import address_from_seed

CREATOR = address_from_seed("file:creator")
BUYER = address_from_seed("file:buyer")


def test_load_accounts(tmp_path):
    path = tmp_path / "accounts.txt"
    path.write_text(f"# registry accounts\n\nCreator = {CREATOR}\nbuyer {BUYER}\nincomplete\n")

    accounts = load_accounts(path)
    assert accounts == {"Creator": CREATOR, "buyer": BUYER}
    assert list(accounts) == ["Creator", "buyer"]


def test_invalid_address(tmp_path):
    path = tmp_path / "accounts.txt"
    path.write_text("bad = 0x1234\n")
    with pytest.raises(ValueError, match="line 1"):
        load_accounts(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_accounts(tmp_path / "missing.txt")


def test_split_roles():
    (name, creator), buyers = split_roles(demo_accounts(2))
    assert name == "creator"
    assert list(buyers) == ["buyer1", "buyer2"]
    assert creator not in buyers.values()

    with pytest.raises(ValueError, match="at least two"):
        split_roles({"solo": CREATOR})
