"""
Events emitted by entries for off-chain indexers.

Payloads are positional and fixed per event name:
    depositTransferred  (version,)
    memeTokenTransfer   (version, from, to, value)
    buy                 (version, buyer, price, amount)
"""

from dataclasses import dataclass

DEPOSIT_TRANSFERRED = "depositTransferred"
MEME_TOKEN_TRANSFER = "memeTokenTransfer"
BUY = "buy"

EVENT_FIELDS = {
    DEPOSIT_TRANSFERRED: ("version",),
    MEME_TOKEN_TRANSFER: ("version", "from", "to", "value"),
    BUY: ("version", "buyer", "price", "amount"),
}


@dataclass(frozen=True)
class Event:
    """A single emitted event."""

    name: str
    address: str  # Emitting entry
    args: tuple
    timestamp: int

    def __post_init__(self):
        fields = EVENT_FIELDS.get(self.name)
        if fields is not None and len(fields) != len(self.args):
            raise ValueError(
                f"Event {self.name} expects {len(fields)} args, got {len(self.args)}"
            )

    @property
    def payload(self) -> dict:
        """Named view of the positional args."""
        fields = EVENT_FIELDS.get(self.name)
        if fields is None:
            return {str(i): v for i, v in enumerate(self.args)}
        return dict(zip(fields, self.args))

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "address": self.address,
            "args": list(self.args),
            "timestamp": self.timestamp,
        }
