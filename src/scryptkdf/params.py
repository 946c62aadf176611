"""scrypt cost parameters and their validation."""

from dataclasses import dataclass
from typing import Any, Mapping

# Largest table size in bytes (int32-indexed buffers)
MAX_TABLE_BYTES = (1 << 31) - 1

# PBKDF2-HMAC-SHA256 can emit at most (2^32 - 1) blocks of 32 bytes
MAX_PBKDF2_BYTES = ((1 << 32) - 1) * 32


class ScryptParameterError(ValueError):
    """Raised when an scrypt parameter is out of range.

    Attributes:
        name: Parameter name ("dklen", "n", "r" or "p")
        value: The rejected value
    """

    def __init__(self, name: str, value: Any, message: str) -> None:
        super().__init__(f"{name}={value!r}: {message}")
        self.name = name
        self.value = value


def _require_int(name: str, value: Any) -> None:
    # bool is an int subclass but never a meaningful cost
    if isinstance(value, bool) or not isinstance(value, int):
        raise ScryptParameterError(name, value, f"{name} must be an integer")


@dataclass(frozen=True)
class ScryptParams:
    """Validated scrypt parameters.

    Attributes:
        n: CPU/memory cost N, power of two
        r: Block size factor
        p: Parallelization factor
        dklen: Derived key length in bytes
    """

    n: int
    r: int
    p: int
    dklen: int = 64

    def __post_init__(self) -> None:
        """Validate parameters."""
        _require_int("dklen", self.dklen)
        if self.dklen < 1 or self.dklen > MAX_PBKDF2_BYTES:
            raise ScryptParameterError(
                "dklen", self.dklen,
                f"dklen must be between 1 and {MAX_PBKDF2_BYTES} bytes",
            )

        _require_int("r", self.r)
        if self.r < 1:
            raise ScryptParameterError("r", self.r, "r must be greater than 0")

        _require_int("n", self.n)
        max_n = MAX_TABLE_BYTES // (128 * self.r)
        if self.n < 1 or self.n > max_n or self.n & (self.n - 1) != 0:
            raise ScryptParameterError(
                "n", self.n,
                f"n must be a power of 2 between 1 and {max_n} for r={self.r}",
            )

        _require_int("p", self.p)
        max_p = MAX_PBKDF2_BYTES // (128 * self.r)
        if self.p < 1 or self.p > max_p:
            raise ScryptParameterError(
                "p", self.p,
                f"p must be between 1 and {max_p} (((2^32-1) * 32) / (128 * r)) for r={self.r}",
            )

    @property
    def block_size(self) -> int:
        """Stretch block size in bytes (128 * r)."""
        return 128 * self.r

    @property
    def table_bytes(self) -> int:
        """Lookup table size in bytes for one stretch block (128 * r * N)."""
        return self.block_size * self.n

    @property
    def buffer_bytes(self) -> int:
        """Stretch buffer size in bytes (128 * r * p)."""
        return self.block_size * self.p

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "ScryptParams":
        """Build parameters from a mapping with keys n, r, p and optional dklen.

        Args:
            values: Mapping, e.g. the "scrypt" section of a config file

        Returns:
            Validated ScryptParams

        Raises:
            KeyError: If n, r or p is missing
            ScryptParameterError: If a value is out of range
        """
        return cls(
            n=values["n"],
            r=values["r"],
            p=values["p"],
            dklen=values.get("dklen", 64),
        )

    def to_dict(self) -> dict[str, int]:
        """Return parameters as a plain dict (config-file layout)."""
        return {"n": self.n, "r": self.r, "p": self.p, "dklen": self.dklen}
