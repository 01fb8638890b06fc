#!/usr/bin/env python3
"""
Meme Offering Simulator - Main Script

Submits one registry entry, whitelists it and replays purchases against
its declining-price share offering, then releases the creator's deposit.

Usage:
    python main.py --demo
    python main.py -f accounts.txt --buy 0:10 --buy 3600:25 --graph
    python main.py --demo --params params.json --start-price 2.5 --live
"""

import argparse
import logging
import time
from decimal import Decimal, InvalidOperation
from pathlib import Path

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt

from accounts import demo_accounts, load_accounts, split_roles
from offering import CTC_DIVISOR, CTC_DIVISOR_DEC, DEPOSIT_ASSET, NATIVE_ASSET, OFFERING_DURATION
from offering.chain import ChainClock
from offering.errors import OfferingError
from offering.events import BUY
from offering.ledger import Ledger, ManualClock
from offering.params import ParameterStore
from offering.pricing import compute_current_price
from offering.registry import Registry
from offering.tx import TxSender
from offering.utils import format_ctc, save_csv, save_json


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

OUTPUT_DIR = Path(__file__).parent / "output"

# Buyers pay this much over the quoted price to exercise refunds
OVERPAY = CTC_DIVISOR // 100


def parse_ctc(value: str) -> int:
    """Parse a CTC amount ("1.5") into base units."""
    try:
        amount = Decimal(value) * CTC_DIVISOR_DEC
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"Invalid CTC amount: {value}")
    if amount < 0 or amount != amount.to_integral_value():
        raise argparse.ArgumentTypeError(f"Invalid CTC amount: {value}")
    return int(amount)


def parse_buy(value: str) -> tuple[int, int]:
    """Parse "OFFSET:AMOUNT" (seconds after whitelisting, token count)."""
    try:
        offset, amount = value.split(":", 1)
        offset, amount = int(offset), int(amount)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected OFFSET:AMOUNT, got {value}")
    if offset < 0 or amount <= 0:
        raise argparse.ArgumentTypeError(f"Offset must be >= 0 and amount > 0: {value}")
    return offset, amount


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Meme Offering Simulator - declining-price share offering for a registry entry",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("-f", "--file", help="Accounts file (first account is the creator)")
    source.add_argument("--demo", action="store_true", help="Use generated demo accounts")

    parser.add_argument("--params", help="JSON file with parameter overrides")
    parser.add_argument("-n", "--name", default="Meme", help="Share token name")
    parser.add_argument("--meta-hash", default="", help="Hex meta hash")
    parser.add_argument("--supply", type=int, default=1000, help="Total share supply")
    parser.add_argument("--start-price", type=parse_ctc, default=parse_ctc("1"), help="Start price in CTC")
    parser.add_argument("--duration", type=int, help="Override offering duration (seconds)")
    parser.add_argument("--deposit", type=parse_ctc, default=parse_ctc("100"), help="Deposit in CTC")
    parser.add_argument("--buy", type=parse_buy, action="append", default=[], metavar="OFFSET:AMOUNT",
                        help="Purchase at OFFSET seconds after whitelisting (repeatable)")
    parser.add_argument("--steps", type=int, default=20, help="Samples in the price schedule")
    parser.add_argument("-o", "--output", help="Output directory")
    parser.add_argument("--graph", "-g", action="store_true", help="Generate price curve graph")
    parser.add_argument("--live", action="store_true", help="Start the clock at the chain's finalized time")

    return parser.parse_args(argv)


def price_schedule(start_price: int, duration: int, steps: int) -> list[tuple[int, int]]:
    """(offset, unit price) pairs from whitelisting to the end of the offering."""
    steps = max(1, steps)
    offsets = sorted({duration * i // steps for i in range(steps + 1)})
    return [(offset, compute_current_price(start_price, duration, offset)) for offset in offsets]


def plot_price_curve(schedule: list[tuple[int, int]], purchases: list[dict], output_file: Path, title: str) -> Path:
    """Save the price decay curve with purchases marked."""
    hours = [offset / 3600 for offset, _ in schedule]
    prices = [price / CTC_DIVISOR for _, price in schedule]

    fig, ax = plt.subplots(figsize=(12, 6))
    fig.suptitle(f"Share Offering Price - {title}", fontsize=14, fontweight='bold')
    ax.plot(hours, prices, color='blue', linewidth=2, label="Unit price")
    ax.fill_between(hours, prices, alpha=0.2, color='blue')

    if purchases:
        ax.scatter(
            [p["offset"] / 3600 for p in purchases],
            [p["unit_price"] / CTC_DIVISOR for p in purchases],
            color='orange', zorder=3, label="Purchases",
        )

    ax.set_xlabel("Hours since whitelisting")
    ax.set_ylabel("Unit price (CTC)")
    ax.grid(True, alpha=0.3)
    ax.legend(loc='upper right')

    plt.tight_layout()
    graph_file = output_file.with_suffix('.png')
    plt.savefig(graph_file, dpi=150, bbox_inches='tight')
    plt.close()
    return graph_file


def main(argv=None):
    args = parse_args(argv)

    print("=" * 60)
    print("Meme Offering Simulator")
    print("=" * 60)

    # 1. Accounts
    print("\n[1/5] Loading accounts...")
    try:
        if args.file:
            accounts = load_accounts(args.file)
            print(f"  Loaded: {len(accounts)} accounts from {Path(args.file).name}")
        else:
            accounts = demo_accounts()
            print(f"  Demo: {len(accounts)} generated accounts")
        (creator_name, creator), buyers = split_roles(accounts)
        params = ParameterStore.from_file(args.params) if args.params else ParameterStore()
        if args.duration is not None:
            params.set(OFFERING_DURATION, args.duration)
        meta_hash = bytes.fromhex(args.meta_hash)
    except (FileNotFoundError, ValueError) as e:
        print(f"  ERROR: {e}")
        return 1

    # 2. Registry
    print("\n[2/5] Setting up registry...")
    if args.live:
        with ChainClock() as chain_clock:
            start = chain_clock.now()
        print(f"  Chain time: {start}")
    else:
        start = int(time.time())
    clock = ManualClock(start)
    ledger = Ledger(clock)
    registry = Registry(ledger, params)
    sender = TxSender(ledger)

    ledger.credit(DEPOSIT_ASSET, creator, args.deposit)
    # Every buyer can afford every purchase at the start price
    funding = args.start_price * sum(amount for _, amount in args.buy) + OVERPAY * len(args.buy)
    for address in buyers.values():
        ledger.credit(NATIVE_ASSET, address, funding)
    print(f"  Creator: {creator_name} ({creator})")
    print(f"  Buyers funded: {len(buyers)} x {format_ctc(funding)} CTC")

    # 3. Entry
    print("\n[3/5] Submitting entry...")
    try:
        entry = registry.submit(creator, args.name, meta_hash, args.supply, args.start_price, args.deposit)
    except (OfferingError, ValueError) as e:
        print(f"  ERROR: {e}")
        return 1
    registry.whitelist(entry)
    print(f"  Entry: {entry.address}")
    print(f"  Token: {entry.token.address}")
    print(f"  Duration: {entry.duration}s, start price {format_ctc(entry.start_price)} CTC")

    # 4. Purchases
    print(f"\n[4/5] Replaying {len(args.buy)} purchases...")
    purchases = []
    buyer_names = list(buyers)
    for i, (offset, amount) in enumerate(sorted(args.buy)):
        clock.set(start + offset)
        name = buyer_names[i % len(buyer_names)]
        unit_price = entry.current_price()
        value = unit_price * amount + OVERPAY
        receipt = sender.send(entry, "buy", amount, sender=buyers[name], value=value)
        if receipt.ok:
            price = next(e.payload["price"] for e in receipt.events if e.name == BUY)
            purchases.append({"offset": offset, "buyer": name, "amount": amount,
                              "unit_price": unit_price, "price": price})
            print(f"  +{offset}s {name}: {amount} @ {format_ctc(unit_price)} CTC")
        else:
            print(f"  +{offset}s {name}: FAILED ({receipt.error})")

    receipt = sender.send(entry, "transfer_deposit", sender=creator)
    print(f"  Deposit release: {receipt.status}")

    # 5. Output
    print("\n[5/5] Saving results...")
    output_dir = Path(args.output) if args.output else OUTPUT_DIR
    output_file = output_dir / f"{args.name}_offering.csv"

    schedule = price_schedule(entry.start_price, entry.duration, args.steps)
    save_csv(output_file, ["offset", "timestamp", "unit_price"],
             [[offset, start + offset, price] for offset, price in schedule])
    print(f"  CSV (Price schedule): {output_file}")

    events_file = output_dir / f"{args.name}_events.json"
    ledger.export_events(events_file)
    print(f"  JSON (Events): {events_file}")

    state = entry.load_meme()
    save_json(output_dir / f"{args.name}_state.json", {
        "entry": entry.address,
        "state": state.to_dict(),
        "purchases": purchases,
        "receipts": [r.to_dict() for r in sender.receipts],
    })

    if args.graph:
        graph_file = plot_price_curve(schedule, purchases, output_file, args.name)
        print(f"  Graph: {graph_file}")

    print(f"\n  Sold: {state.total_supply - state.unsold_balance}/{state.total_supply}")
    print(f"  Creator proceeds: {format_ctc(ledger.balance_of(NATIVE_ASSET, creator))} CTC")

    print("\n" + "=" * 60)
    print("COMPLETED!")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    exit(main())
