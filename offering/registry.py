"""
Minimal registry: the lifecycle machine around entries.

Holds the shared parameter store, the emergency flag, the deposit
collector and the factory that activates entries and their tokens.
Admission and vote rules are out of scope; whitelisting and challenges
are applied directly by the caller.
"""

import logging

from offering import DEPOSIT_ASSET
from offering.entry import MemeEntry
from offering.factory import EntryFactory
from offering.ledger import Ledger
from offering.lifecycle import EntryLifecycle
from offering.params import ParameterStore
from offering.utils import address_from_seed, require_address

logger = logging.getLogger(__name__)


class Registry:
    """Token-curated registry of meme entries."""

    def __init__(
        self,
        ledger: Ledger | None = None,
        params: ParameterStore | None = None,
        deposit_collector: str | None = None,
        address: str | None = None,
    ):
        self.ledger = ledger or Ledger()
        self.params = params or ParameterStore()
        self.address = require_address(address or address_from_seed("registry"))
        self.deposit_collector = require_address(
            deposit_collector or address_from_seed("deposit-collector")
        )
        self.emergency = False
        self.factory = EntryFactory(self, self.address)
        self.lifecycles: dict[str, EntryLifecycle] = {}
        self.entries: dict[str, MemeEntry] = {}

    def lifecycle_of(self, entry: str) -> EntryLifecycle:
        if entry not in self.lifecycles:
            raise KeyError(f"Unknown entry: {entry}")
        return self.lifecycles[entry]

    def submit(
        self,
        creator: str,
        name: str,
        meta_hash: bytes,
        total_supply: int,
        start_price: int,
        deposit: int,
        version: int = 1,
    ) -> MemeEntry:
        """Escrow the creator's deposit and construct a new entry."""
        ledger = self.ledger
        with ledger.transaction():
            entry = self.factory.activate(MemeEntry)
            lifecycle = EntryLifecycle(entry=entry.address, creator=creator, deposit=deposit)
            self.lifecycles[entry.address] = lifecycle
            ledger.record(lambda: self.lifecycles.pop(entry.address, None))
            ledger.transfer(DEPOSIT_ASSET, creator, entry.address, deposit)
            entry.construct(creator, version, name, meta_hash, total_supply, start_price)
            self.entries[entry.address] = entry
            ledger.record(lambda: self.entries.pop(entry.address, None))
        logger.info(f"Submitted entry {entry.address} by {creator}")
        return entry

    def whitelist(self, entry: MemeEntry):
        lifecycle = self.lifecycle_of(entry.address)
        if self.ledger.now() <= 0:
            raise ValueError("Whitelisting needs a positive clock; 0 means never whitelisted")
        with self.ledger.transaction():
            self.ledger.assign(lifecycle, "whitelisted_on", self.ledger.now())
            self.ledger.assign(lifecycle, "rejected", False)
        logger.info(f"Whitelisted entry {entry.address} at {lifecycle.whitelisted_on}")

    def challenge(self, entry: MemeEntry):
        lifecycle = self.lifecycle_of(entry.address)
        with self.ledger.transaction():
            self.ledger.assign(lifecycle, "challenged", True)
        logger.info(f"Entry {entry.address} challenged")

    def reject(self, entry: MemeEntry):
        lifecycle = self.lifecycle_of(entry.address)
        with self.ledger.transaction():
            self.ledger.assign(lifecycle, "rejected", True)
        logger.info(f"Entry {entry.address} rejected")

    def set_emergency(self, flag: bool):
        self.emergency = bool(flag)
        if self.emergency:
            logger.warning("Emergency halt engaged")
        else:
            logger.info("Emergency halt released")
