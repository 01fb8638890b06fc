"""
Share token: fixed-supply token minted once for a single entry.
"""

import logging

from offering.errors import InsufficientSupply, Unauthorized
from offering.factory import Activatable
from offering.pricing import checked_add, checked_sub
from offering.utils import require_address

logger = logging.getLogger(__name__)


class ShareToken(Activatable):
    """Token whose transfers are relayed through its controlling entry."""

    def __init__(self, registry, address: str):
        super().__init__(registry, address)
        self.name = ""
        self.controller: str | None = None
        self.minting_finished = False
        self._total_supply = 0
        self._balances: dict[str, int] = {}

    def init(self, name: str, controller: str):
        with self.ledger.transaction():
            self._initialize_once()
            self.ledger.assign(self, "name", name)
            self.ledger.assign(self, "controller", require_address(controller))

    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, owner: str) -> int:
        return self._balances.get(owner, 0)

    def _set_balance(self, owner: str, amount: int):
        previous = self._balances.get(owner, 0)
        self._balances[owner] = amount

        def undo():
            self._balances[owner] = previous

        self.ledger.record(undo)

    def mint(self, sender: str, to: str, amount: int):
        if sender != self.controller:
            raise Unauthorized(f"{sender} cannot mint {self.name}")
        if self.minting_finished:
            raise Unauthorized(f"Minting of {self.name} is finished")
        require_address(to)
        with self.ledger.transaction():
            self.ledger.assign(self, "_total_supply", checked_add(self._total_supply, amount))
            self._set_balance(to, checked_add(self.balance_of(to), amount))

    def finish_minting(self, sender: str):
        if sender != self.controller:
            raise Unauthorized(f"{sender} cannot finish minting {self.name}")
        with self.ledger.transaction():
            self.ledger.assign(self, "minting_finished", True)

    def transfer(self, sender: str, to: str, value: int):
        """Move value tokens from sender to to, then relay through the entry."""
        require_address(to)
        with self.ledger.transaction():
            available = self.balance_of(sender)
            if available < value:
                raise InsufficientSupply(
                    f"{sender} holds {available} {self.name}, needs {value}"
                )
            self._set_balance(sender, checked_sub(available, value))
            self._set_balance(to, checked_add(self.balance_of(to), value))
            entry = self.ledger.contracts.get(self.controller)
            if entry is not None:
                entry.relay_token_transfer(sender, to, value, sender=self.address)
