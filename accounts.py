"""
Account loader module - loads named wallet addresses from text files.
"""

from pathlib import Path

from offering.utils import address_from_seed, validate_ss58_address


def load_accounts(file_path: str | Path) -> dict[str, str]:
    """
    Load accounts from a text file.

    File format:
        # Comment line
        AccountName = WalletAddress

    Args:
        file_path: Path to the accounts file

    Returns:
        Dict of {name: address}, in file order

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If an invalid SS58 address is found
    """
    accounts = {}
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"Accounts file not found: {path}")

    with open(path, "r") as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()
            # Skip empty lines and comments
            if not line or line.startswith("#"):
                continue

            # Parse "name = address" or "name address" format
            if "=" in line:
                name, address = line.split("=", 1)
                name = name.strip()
                address = address.strip()
            else:
                parts = line.split()
                if len(parts) >= 2:
                    name = parts[0]
                    address = parts[1]
                else:
                    continue

            if not validate_ss58_address(address):
                raise ValueError(f"Invalid SS58 address at line {line_num}: {name} = {address}")

            accounts[name] = address

    return accounts


def demo_accounts(buyers: int = 3) -> dict[str, str]:
    """Deterministic creator plus `buyers` buyer accounts."""
    names = ["creator"] + [f"buyer{i}" for i in range(1, buyers + 1)]
    return {name: address_from_seed(f"demo:{name}") for name in names}


def split_roles(accounts: dict[str, str]) -> tuple[tuple[str, str], dict[str, str]]:
    """
    First account is the creator, the rest are buyers.

    Raises:
        ValueError: If fewer than two accounts are given
    """
    if len(accounts) < 2:
        raise ValueError("Need at least two accounts: a creator and one buyer")
    items = list(accounts.items())
    return items[0], dict(items[1:])
