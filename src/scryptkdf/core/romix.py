"""ROMix, the sequential memory-hard mixing stage (RFC 7914, section 5).

The lookup table V is stored as a flat ``array('I')`` of N * 32r words, so
a table costs 128 * r * N bytes rather than a Python int per word. The
table can be allocated once with :func:`new_table` and passed to
:func:`ro_mix` for every stretch block of a derivation.
"""

from array import array
from typing import Optional

from scryptkdf.core.blockmix import block_mix
from scryptkdf.core.salsa import BLOCK_WORDS, words_from_bytes, words_to_bytes

TABLE_TYPECODE = "I"

# Zero-fill chunk used by wipe_table
_WIPE_CHUNK = bytes(1 << 16)


def new_table(n: int, r: int) -> array:
    """Allocate a zero-filled lookup table for ROMix.

    Args:
        n: Cost parameter N (number of table entries)
        r: Block size factor

    Returns:
        array('I') holding n * 32 * r words
    """
    return array(TABLE_TYPECODE, [0]) * (n * 32 * r)


def wipe_table(table: array) -> None:
    """Overwrite a lookup table with zeros in place.

    Args:
        table: Table previously returned by new_table
    """
    with memoryview(table) as view, view.cast("B") as raw:
        size = len(raw)
        for off in range(0, size, len(_WIPE_CHUNK)):
            end = min(off + len(_WIPE_CHUNK), size)
            raw[off:end] = _WIPE_CHUNK[:end - off]


def integerify(words: list[int], n: int, r: int) -> int:
    """Select the table index for the next mix step.

    Reads the first word of the last 64-byte block (the low 32 bits of
    its first 8 bytes, little-endian) and reduces it modulo N. N is a
    power of two, so the reduction is a mask.

    Args:
        words: Current X as 32 * r words
        n: Cost parameter N (power of two)
        r: Block size factor

    Returns:
        Table index in [0, n)
    """
    return words[(2 * r - 1) * BLOCK_WORDS] & (n - 1)


def ro_mix(block: bytes, n: int, r: int, table: Optional[array] = None) -> bytes:
    """Run ROMix on one stretch block.

    Args:
        block: 128 * r bytes
        n: Cost parameter N (power of two)
        r: Block size factor (>= 1)
        table: Optional preallocated table from new_table(n, r). A table
            allocated here is wiped before returning; a caller-provided
            table is left for the caller to wipe.

    Returns:
        128 * r mixed bytes

    Raises:
        ValueError: If block or table has the wrong size, or n is not a
            positive power of two
    """
    if r < 1:
        raise ValueError(f"r must be >= 1, got {r}")
    if n < 1 or n & (n - 1) != 0:
        raise ValueError(f"n must be a positive power of 2, got {n}")
    if len(block) != 128 * r:
        raise ValueError(f"block must be {128 * r} bytes for r={r}, got {len(block)}")

    words_per_block = 32 * r
    owns_table = table is None
    if table is None:
        table = new_table(n, r)
    elif len(table) < n * words_per_block:
        raise ValueError(
            f"table must hold at least {n * words_per_block} words, got {len(table)}"
        )

    try:
        x = words_from_bytes(block)

        # Fill: V[i] = X, X = BlockMix(X)
        for i in range(n):
            off = i * words_per_block
            table[off:off + words_per_block] = array(TABLE_TYPECODE, x)
            x = block_mix(x, r)

        # Mix: X = BlockMix(X xor V[j])
        for _ in range(n):
            off = integerify(x, n, r) * words_per_block
            x = block_mix([a ^ b for a, b in zip(x, table[off:off + words_per_block])], r)

        return words_to_bytes(x)
    finally:
        if owns_table:
            wipe_table(table)
