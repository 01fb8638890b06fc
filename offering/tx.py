"""
Transaction submission with success/error reporting.

Mirrors how a wallet front end sends a call: each transaction gets an
id, runs atomically on the ledger, and yields a receipt carrying the
events it emitted or the error that aborted it.
"""

import itertools
import logging
from dataclasses import dataclass, field

from offering.events import Event

logger = logging.getLogger(__name__)


@dataclass
class Receipt:
    """Outcome of one submitted transaction."""

    tx_id: str
    fn: str
    sender: str
    status: str  # "success" or "failed"
    error: str | None = None
    events: list[Event] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == "success"

    def to_dict(self) -> dict:
        return {
            "tx_id": self.tx_id,
            "fn": self.fn,
            "sender": self.sender,
            "status": self.status,
            "error": self.error,
            "events": [e.to_dict() for e in self.events],
        }


class TxSender:
    """Submits entry operations and keeps their receipts."""

    def __init__(self, ledger, raise_on_error: bool = False):
        self.ledger = ledger
        self.raise_on_error = raise_on_error
        self.receipts: list[Receipt] = []
        self._ids = itertools.count(1)

    def send(self, instance, fn: str, *args, sender: str, value: int = 0, tx_id: str | None = None) -> Receipt:
        tx_id = tx_id or f"tx-{next(self._ids)}"
        method = getattr(instance, fn)
        kwargs = {"sender": sender}
        if value:
            kwargs["value"] = value

        start = self.ledger.event_count
        try:
            with self.ledger.transaction():
                method(*args, **kwargs)
        except Exception as e:
            receipt = Receipt(tx_id, fn, sender, "failed", error=f"{type(e).__name__}: {e}")
            self.receipts.append(receipt)
            logger.error(f"[{tx_id}] {fn} failed: {receipt.error}")
            if self.raise_on_error:
                raise
            return receipt

        receipt = Receipt(tx_id, fn, sender, "success", events=self.ledger.events()[start:])
        self.receipts.append(receipt)
        logger.info(f"[{tx_id}] {fn} succeeded with {len(receipt.events)} events")
        return receipt
