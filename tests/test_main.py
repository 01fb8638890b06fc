"""End-to-end tests for the simulator CLI."""

import json

import pytest

import main
from offering.utils import address_from_seed


def _run(tmp_path, *extra):
    return main.main(["--demo", "-o", str(tmp_path), "--duration", "1000", *extra])


def test_demo_run_writes_outputs(tmp_path, capsys):
    assert _run(tmp_path, "--buy", "0:10", "--buy", "500:5", "--buy", "2000:1") == 0

    state = json.loads((tmp_path / "Meme_state.json").read_text())
    assert state["state"]["unsold_balance"] == 1000 - 16
    assert [p["amount"] for p in state["purchases"]] == [10, 5, 1]
    assert state["purchases"][1]["unit_price"] == 5 * 10**17
    assert state["purchases"][2]["price"] == 0
    assert state["receipts"][-1]["fn"] == "transfer_deposit"
    assert state["receipts"][-1]["status"] == "success"

    events = json.loads((tmp_path / "Meme_events.json").read_text())
    assert [e["name"] for e in events].count("buy") == 3
    assert events[-1]["name"] == "depositTransferred"

    rows = (tmp_path / "Meme_offering.csv").read_text().splitlines()
    assert rows[0] == "offset,timestamp,unit_price"
    assert rows[-1].startswith("1000,")
    assert rows[-1].endswith(",0")
    assert "COMPLETED!" in capsys.readouterr().out


def test_graph_output(tmp_path):
    assert _run(tmp_path, "--buy", "100:1", "--graph") == 0
    assert (tmp_path / "Meme_offering.png").exists()


def test_failed_purchase_is_reported(tmp_path, capsys):
    assert _run(tmp_path, "--supply", "5", "--buy", "0:3", "--buy", "1:3") == 0
    out = capsys.readouterr().out
    assert "FAILED (InsufficientSupply" in out


def test_accounts_file(tmp_path):
    accounts = tmp_path / "accounts.txt"
    accounts.write_text(
        f"artist = {address_from_seed('artist')}\nfan = {address_from_seed('fan')}\n"
    )
    assert main.main(["-f", str(accounts), "-o", str(tmp_path), "--buy", "0:1"]) == 0


@pytest.mark.parametrize(
    "argv",
    [
        ["-f", "does-not-exist.txt"],
        ["--demo", "--start-price", "11"],
        ["--demo", "--meta-hash", "zz"],
    ],
)
def test_configuration_errors(tmp_path, argv):
    assert main.main([*argv, "-o", str(tmp_path)]) == 1


def test_argument_parsing():
    args = main.parse_args(["--demo", "--buy", "60:2", "--start-price", "0.5"])
    assert args.buy == [(60, 2)]
    assert args.start_price == 5 * 10**17
    with pytest.raises(SystemExit):
        main.parse_args(["--demo", "--buy", "sixty"])


def test_price_schedule():
    assert main.price_schedule(100, 1000, 4) == [(0, 100), (250, 75), (500, 50), (750, 25), (1000, 0)]
    assert main.price_schedule(100, 0, 4) == [(0, 0)]
