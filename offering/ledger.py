"""
Sequential ledger: value balances, event log and atomic transactions.

Operations are totally ordered by a single re-entrant lock. Every
mutation registers an undo callable in the journal; when an exception
escapes a transaction, the journal is unwound back to the savepoint the
transaction opened, so no partial state is ever observable.
"""

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator

from offering import NATIVE_ASSET
from offering.errors import InsufficientBalance
from offering.events import Event
from offering.pricing import checked_add, checked_sub
from offering.utils import require_address, save_json

logger = logging.getLogger(__name__)


class ManualClock:
    """Clock driven by the caller; used for simulations and tests."""

    def __init__(self, now: int = 0):
        self._now = now

    def now(self) -> int:
        return self._now

    def set(self, timestamp: int):
        if timestamp < self._now:
            raise ValueError(f"Clock cannot move backwards: {timestamp} < {self._now}")
        self._now = timestamp

    def advance(self, seconds: int):
        self.set(self._now + seconds)


class Ledger:
    """Multi-asset balance book shared by every entry."""

    def __init__(self, clock=None):
        self.clock = clock or ManualClock()
        self._balances: dict[tuple[str, str], int] = {}
        self._journal: list[Callable[[], None]] = []
        self._events: list[Event] = []
        self._receivers: dict[str, Callable[[str, int], None]] = {}
        self.contracts: dict[str, object] = {}
        self._lock = threading.RLock()
        self._depth = 0

    def now(self) -> int:
        return self.clock.now()

    # ---- transactions ----

    @contextmanager
    def transaction(self) -> Iterator["Ledger"]:
        """Run a block atomically; nested calls act as savepoints."""
        with self._lock:
            savepoint = len(self._journal)
            self._depth += 1
            try:
                yield self
            except BaseException:
                self._rollback(savepoint)
                raise
            finally:
                self._depth -= 1
                if self._depth == 0:
                    self._journal.clear()

    def _rollback(self, savepoint: int):
        undone = len(self._journal) - savepoint
        while len(self._journal) > savepoint:
            undo = self._journal.pop()
            undo()
        logger.debug(f"Rolled back {undone} journaled mutations")

    def record(self, undo: Callable[[], None]):
        """Register an undo action for the current transaction."""
        if self._depth:
            self._journal.append(undo)

    def assign(self, obj: object, attr: str, value):
        """Set an attribute on obj with journaled undo."""
        previous = getattr(obj, attr)
        setattr(obj, attr, value)
        self.record(lambda: setattr(obj, attr, previous))

    # ---- balances ----

    def balance_of(self, asset: str, address: str) -> int:
        return self._balances.get((asset, address), 0)

    def _set_balance(self, asset: str, address: str, amount: int):
        key = (asset, address)
        previous = self._balances.get(key, 0)
        self._balances[key] = amount

        def undo():
            self._balances[key] = previous

        self.record(undo)

    def credit(self, asset: str, address: str, amount: int):
        """Create amount of asset at address (genesis funding)."""
        require_address(address)
        with self.transaction():
            self._set_balance(asset, address, checked_add(self.balance_of(asset, address), amount))

    def transfer(self, asset: str, sender: str, recipient: str, amount: int):
        """Move amount of asset; native value may trigger the recipient's receive hook."""
        require_address(recipient)
        with self.transaction():
            available = self.balance_of(asset, sender)
            if available < amount:
                raise InsufficientBalance(
                    f"{sender} holds {available} {asset}, needs {amount}"
                )
            self._set_balance(asset, sender, checked_sub(available, amount))
            self._set_balance(
                asset, recipient, checked_add(self.balance_of(asset, recipient), amount)
            )
            hook = self._receivers.get(recipient)
            if hook is not None and asset == NATIVE_ASSET and amount > 0:
                hook(sender, amount)

    def register_receiver(self, address: str, hook: Callable[[str, int], None]):
        """Install a callback run whenever address receives native value."""
        self._receivers[require_address(address)] = hook

    # ---- contracts ----

    def register_contract(self, address: str, contract: object):
        if address in self.contracts:
            raise ValueError(f"Address already in use: {address}")
        self.contracts[address] = contract
        self.record(lambda: self.contracts.pop(address, None))

    # ---- events ----

    def emit(self, name: str, address: str, *args) -> Event:
        event = Event(name=name, address=address, args=tuple(args), timestamp=self.now())
        self._events.append(event)
        self.record(self._events.pop)
        logger.debug(f"Event {name} from {address}: {args}")
        return event

    def events(self, name: str | None = None, address: str | None = None) -> list[Event]:
        return [
            e for e in self._events
            if (name is None or e.name == name) and (address is None or e.address == address)
        ]

    @property
    def event_count(self) -> int:
        return len(self._events)

    def export_events(self, path: Path):
        """Persist the event log as JSON."""
        save_json(path, [e.to_dict() for e in self._events])
