"""
Utility functions for the offering engine.
"""

import csv
import functools
import hashlib
import json
import logging
import re
import time
from pathlib import Path
from typing import Any, Callable, TypeVar, cast

from filelock import FileLock
from scalecodec.utils.ss58 import ss58_encode

from offering import CTC_DIVISOR

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Generic Substrate prefix; 32-byte keys encode to 48 chars starting with "5"
SS58_FORMAT = 42


def retry(
    max_retries: int = 5,
    base_delay: float = 1.0,
    exceptions: tuple[type[Exception], ...] = (Exception,),
):
    """
    Decorator to retry a function on exception with exponential backoff.
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            last_exception = None
            for i in range(max_retries):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    last_exception = e
                    delay = base_delay * (2**i)
                    logger.debug(f"Retry {i+1}/{max_retries} for {func.__name__} after {delay}s due to: {e}")
                    time.sleep(delay)
            raise cast(Exception, last_exception)

        return wrapper

    return decorator


def validate_ss58_address(address: str) -> bool:
    """
    Validate an SS58 address format.

    Returns True if the address appears to be a valid SS58 address.
    Note: This is a basic format check, not a full cryptographic validation.
    """
    if not address or not isinstance(address, str):
        return False
    if not re.match(r'^[1-9A-HJ-NP-Za-km-z]{47,48}$', address):
        return False
    # Generic substrate addresses start with 5
    if not address.startswith('5'):
        return False
    return True


def require_address(address: str) -> str:
    """Return the address unchanged, or raise ValueError if it is malformed."""
    if not validate_ss58_address(address):
        raise ValueError(f"Invalid SS58 address: {address!r}")
    return address


def address_from_seed(seed: str | bytes) -> str:
    """Derive a deterministic SS58 address from an arbitrary seed."""
    if isinstance(seed, str):
        seed = seed.encode("utf-8")
    public_key = hashlib.blake2b(seed, digest_size=32).digest()
    return ss58_encode(public_key, ss58_format=SS58_FORMAT)


def format_ctc(amount: int) -> str:
    """Format a base-unit amount as CTC with commas."""
    return f"{amount / CTC_DIVISOR:,.4f}"


def save_json(path: Path, data: Any):
    """Write JSON to path while holding a sibling .lock file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    lock_file = path.with_suffix('.lock')
    with FileLock(lock_file):
        with open(path, "w") as f:
            json.dump(data, f, indent=2)


def load_json(path: Path) -> Any | None:
    """Load JSON from path; None if the file does not exist."""
    path = Path(path)
    if not path.exists():
        return None
    with open(path) as f:
        return json.load(f)


def save_csv(output_file: Path, header: list[str], rows: list[list[Any]]):
    """Save data to CSV file."""
    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        writer.writerows(rows)
