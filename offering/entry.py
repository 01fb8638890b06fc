"""
Registry entry with its own declining-price share offering.

Each accepted entry mints a fixed supply of share tokens to itself and
sells them at a price that decays linearly from `start_price` to zero
over `duration` seconds after whitelisting. The entry also releases the
creator's escrowed deposit to the registry's collector once it is
whitelisted and was never challenged.
"""

import logging
from dataclasses import dataclass

from offering import MAX_START_PRICE, MAX_TOTAL_SUPPLY, NATIVE_ASSET, OFFERING_DURATION
from offering.errors import (
    AlreadyChallenged,
    AlreadySettled,
    EmergencyHalt,
    InsufficientPayment,
    NotWhitelisted,
    PreconditionViolation,
    Unauthorized,
)
from offering.events import BUY, DEPOSIT_TRANSFERRED, MEME_TOKEN_TRANSFER
from offering.factory import Activatable
from offering.pricing import checked_mul, checked_sub, compute_current_price, elapsed_since
from offering.token import ShareToken
from offering.utils import validate_ss58_address

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntryState:
    """Public read model of an entry."""

    start_price: int
    duration: int
    token: str
    total_supply: int
    unsold_balance: int
    meta_hash: bytes

    def to_dict(self) -> dict:
        return {
            "start_price": self.start_price,
            "duration": self.duration,
            "token": self.token,
            "total_supply": self.total_supply,
            "unsold_balance": self.unsold_balance,
            "meta_hash": self.meta_hash.hex(),
        }


def _is_uint(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


class MemeEntry(Activatable):
    """Offering engine and deposit settlement for one registry entry."""

    def __init__(self, registry, address: str):
        super().__init__(registry, address)
        self.version = 0
        self.start_price = 0
        self.duration = 0
        self.meta_hash = b""
        self.token: ShareToken | None = None
        self.deposit_settled = False

    @property
    def lifecycle(self):
        return self.registry.lifecycle_of(self.address)

    def construct(
        self,
        creator: str,
        version: int,
        name: str,
        meta_hash: bytes,
        total_supply: int,
        start_price: int,
    ):
        """
        One-shot initializer.

        Mints `total_supply` share tokens to the entry, disables further
        minting and snapshots the offering duration.

        Raises:
            AlreadyInitialized: If the entry was constructed before
            PreconditionViolation: If an argument violates a parameter bound
        """
        params = self.registry.params
        with self.ledger.transaction():
            self._initialize_once()

            lifecycle = self.registry.lifecycles.get(self.address)
            if not validate_ss58_address(creator):
                raise PreconditionViolation(f"Invalid creator address: {creator!r}")
            if lifecycle is None or lifecycle.creator != creator:
                raise PreconditionViolation(f"{creator} is not the recorded creator")
            if not _is_uint(version):
                raise PreconditionViolation(f"Invalid version: {version!r}")
            if not isinstance(meta_hash, (bytes, bytearray)):
                raise PreconditionViolation("meta_hash must be bytes")
            if not _is_uint(total_supply) or not _is_uint(start_price):
                raise PreconditionViolation("total_supply and start_price must be unsigned integers")
            if total_supply == 0:
                raise PreconditionViolation("total_supply must be greater than 0")
            if total_supply > params.get(MAX_TOTAL_SUPPLY):
                raise PreconditionViolation(
                    f"total_supply {total_supply} exceeds {MAX_TOTAL_SUPPLY} {params.get(MAX_TOTAL_SUPPLY)}"
                )
            if start_price > params.get(MAX_START_PRICE):
                raise PreconditionViolation(
                    f"start_price {start_price} exceeds {MAX_START_PRICE} {params.get(MAX_START_PRICE)}"
                )

            token = self.registry.factory.activate(ShareToken)
            token.init(name, controller=self.address)
            token.mint(self.address, self.address, total_supply)
            token.finish_minting(self.address)

            self.ledger.assign(self, "token", token)
            self.ledger.assign(self, "version", version)
            self.ledger.assign(self, "meta_hash", bytes(meta_hash))
            self.ledger.assign(self, "start_price", start_price)
            self.ledger.assign(self, "duration", params.get(OFFERING_DURATION))

        logger.info(
            f"Constructed entry {self.address} ({name}): supply={total_supply}, "
            f"start_price={start_price}, duration={self.duration}s"
        )

    def _require_not_halted(self):
        if self.registry.emergency:
            raise EmergencyHalt("Registry is in emergency mode")

    def _require_whitelisted(self):
        if not self.lifecycle.is_whitelisted():
            raise NotWhitelisted(f"Entry {self.address} is not whitelisted")

    # ---- pricing ----

    def current_price(self) -> int:
        """Unit price at the ledger's current time."""
        elapsed = elapsed_since(self.lifecycle.whitelisted_on, self.ledger.now())
        return compute_current_price(self.start_price, self.duration, elapsed)

    # ---- purchase ----

    def buy(self, amount: int, *, sender: str, value: int = 0):
        """
        Buy `amount` share tokens paying `value`; the excess is refunded.

        Token bookkeeping completes before any value leaves the entry, and
        the whole purchase rolls back on failure.
        """
        ledger = self.ledger
        with ledger.transaction():
            self._require_not_halted()
            self._require_whitelisted()
            if not _is_uint(amount) or amount == 0:
                raise PreconditionViolation(f"amount must be greater than 0, got {amount!r}")
            if not _is_uint(value):
                raise PreconditionViolation(f"value must be an unsigned integer, got {value!r}")

            price = checked_mul(self.current_price(), amount)
            if value < price:
                raise InsufficientPayment(f"Paid {value}, price is {price}")

            ledger.transfer(NATIVE_ASSET, sender, self.address, value)
            self.token.transfer(self.address, sender, amount)

            ledger.transfer(NATIVE_ASSET, self.address, self.lifecycle.creator, price)
            change = checked_sub(value, price)
            if change > 0:
                ledger.transfer(NATIVE_ASSET, self.address, sender, change)

            ledger.emit(BUY, self.address, self.version, sender, price, amount)

        logger.info(f"Buy on {self.address}: {amount} tokens to {sender} for {price}")

    # ---- deposit ----

    def transfer_deposit(self, *, sender: str | None = None):
        """Release the escrowed deposit to the registry's collector, once."""
        with self.ledger.transaction():
            self._require_not_halted()
            self._require_whitelisted()
            lifecycle = self.lifecycle
            if lifecycle.was_challenged():
                raise AlreadyChallenged(f"Entry {self.address} was challenged")
            if self.deposit_settled:
                raise AlreadySettled(f"Deposit of {self.address} already transferred")

            self.ledger.assign(self, "deposit_settled", True)
            amount = lifecycle.release_deposit(self.ledger, self.registry.deposit_collector)
            self.ledger.emit(DEPOSIT_TRANSFERRED, self.address, self.version)

        logger.info(f"Deposit of {amount} released from {self.address} by {sender or 'registry'}")

    # ---- token relay ----

    def relay_token_transfer(self, from_: str, to: str, value: int, *, sender: str):
        """Re-emit a transfer of this entry's own token."""
        if self.token is None or sender != self.token.address:
            raise Unauthorized(f"{sender} is not the token of {self.address}")
        self.ledger.emit(MEME_TOKEN_TRANSFER, self.address, self.version, from_, to, value)

    # ---- read model ----

    def load_meme(self) -> EntryState:
        token = self.token
        return EntryState(
            start_price=self.start_price,
            duration=self.duration,
            token=token.address if token else "",
            total_supply=token.total_supply() if token else 0,
            unsold_balance=token.balance_of(self.address) if token else 0,
            meta_hash=self.meta_hash,
        )
