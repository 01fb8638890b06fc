"""
Chain-backed clock for live runs against a Substrate node.
"""

import logging
from datetime import datetime, timezone

from substrateinterface import SubstrateInterface

from offering.utils import retry

# Creditcoin3 mainnet
NODE_URL = "wss://mainnet3.creditcoin.network"

logger = logging.getLogger(__name__)


class ChainClock:
    """Reports the latest finalized block timestamp as the current time."""

    def __init__(self, url: str = NODE_URL):
        self.url = url
        self._substrate = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    @property
    def substrate(self) -> SubstrateInterface:
        """Lazy connection to substrate node."""
        if self._substrate is None:
            self._substrate = SubstrateInterface(url=self.url)
        return self._substrate

    def close(self):
        """Close the connection."""
        if self._substrate:
            try:
                self._substrate.close()
            except Exception as e:
                logger.debug(f"Error closing substrate connection: {e}")
            self._substrate = None

    @retry(max_retries=3)
    def get_finalized_head(self) -> str:
        """Get the latest finalized block hash."""
        return self.substrate.get_chain_finalised_head()

    @retry(max_retries=3)
    def get_block_timestamp(self, block_hash: str) -> int:
        """Get block timestamp in seconds (Unix timestamp)."""
        result = self.substrate.query(
            module="Timestamp",
            storage_function="Now",
            block_hash=block_hash,
        )
        return int(result.value) // 1000  # ms -> seconds

    def now(self) -> int:
        return self.get_block_timestamp(self.get_finalized_head())

    def now_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.now(), tz=timezone.utc)
