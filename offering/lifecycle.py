"""
Entry lifecycle facts, owned by the registry's challenge/vote machinery.
"""

from dataclasses import dataclass

from offering import DEPOSIT_ASSET


@dataclass
class EntryLifecycle:
    """Creator, escrowed deposit and whitelisting state of one entry."""

    entry: str  # Entry address holding the deposit in escrow
    creator: str
    deposit: int
    whitelisted_on: int = 0  # 0 = never whitelisted
    challenged: bool = False
    rejected: bool = False

    def is_whitelisted(self) -> bool:
        return self.whitelisted_on > 0 and not self.rejected

    def was_challenged(self) -> bool:
        return self.challenged

    def release_deposit(self, ledger, to: str) -> int:
        """Move the escrowed deposit to `to`; returns the amount moved."""
        ledger.transfer(DEPOSIT_ASSET, self.entry, to, self.deposit)
        return self.deposit

    def to_dict(self) -> dict:
        return {
            "entry": self.entry,
            "creator": self.creator,
            "deposit": self.deposit,
            "whitelisted_on": self.whitelisted_on,
            "challenged": self.challenged,
            "rejected": self.rejected,
        }
