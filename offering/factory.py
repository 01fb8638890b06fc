"""
Activation mechanism: many lightweight instances over shared class logic.

Instances never run their setup in __init__; each exposes an explicit
one-shot initializer guarded by an "already initialized" flag.
"""

import logging

from offering.errors import AlreadyInitialized
from offering.utils import address_from_seed, require_address

logger = logging.getLogger(__name__)


class Activatable:
    """Base for activated instances: address binding plus init guard."""

    def __init__(self, registry, address: str):
        self.registry = registry
        self.address = address
        self.initialized = False

    @property
    def ledger(self):
        return self.registry.ledger

    def _initialize_once(self):
        if self.initialized:
            raise AlreadyInitialized(f"{type(self).__name__} {self.address} already initialized")
        self.ledger.assign(self, "initialized", True)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.address[:8]}…>"


class EntryFactory:
    """Creates activated instances with deterministic addresses."""

    def __init__(self, registry, address: str):
        self.registry = registry
        self.address = require_address(address)
        self.nonce = 0

    def next_address(self) -> str:
        return address_from_seed(f"{self.address}:{self.nonce}")

    def activate(self, cls: type[Activatable]) -> Activatable:
        """Allocate an address and bind a fresh, uninitialized instance."""
        ledger = self.registry.ledger
        with ledger.transaction():
            address = self.next_address()
            ledger.assign(self, "nonce", self.nonce + 1)
            instance = cls(self.registry, address)
            ledger.register_contract(address, instance)
        logger.debug(f"Activated {cls.__name__} at {address}")
        return instance
