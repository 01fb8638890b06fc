"""
Parameter store: named unsigned-integer economic constants.

Values are live; entries read them during construction only.
"""

import logging
from pathlib import Path

from offering import DEFAULT_PARAMETERS, UINT256_MAX
from offering.utils import load_json

logger = logging.getLogger(__name__)


class ParameterStore:
    """Key-value store of unsigned integers."""

    def __init__(self, values: dict[str, int] | None = None):
        self._values: dict[str, int] = {}
        for key, value in {**DEFAULT_PARAMETERS, **(values or {})}.items():
            self.set(key, value)

    @classmethod
    def from_file(cls, file_path: str | Path) -> "ParameterStore":
        """
        Load parameter overrides from a JSON object file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not a JSON object of unsigned ints
        """
        path = Path(file_path)
        data = load_json(path)
        if data is None:
            raise FileNotFoundError(f"Parameter file not found: {path}")
        if not isinstance(data, dict):
            raise ValueError(f"Parameter file must hold a JSON object: {path}")
        logger.info(f"Loaded {len(data)} parameters from {path.name}")
        return cls(data)

    def get(self, key: str) -> int:
        if key not in self._values:
            raise KeyError(f"Unknown parameter: {key}")
        return self._values[key]

    def set(self, key: str, value: int):
        if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= UINT256_MAX:
            raise ValueError(f"Parameter {key} must be an unsigned integer, got {value!r}")
        self._values[key] = value

    def __getitem__(self, key: str) -> int:
        return self.get(key)

    def to_dict(self) -> dict:
        return dict(self._values)
