"""Salsa20/8 core function.

This module provides the 8-round Salsa20 core used by scrypt's BlockMix
(RFC 7914, section 3). All functions operate on Python ints masked to
32 bits, so results are platform-independent and bit-exact.
"""

import struct
from typing import Sequence

# 32-bit mask for uint32 wrap semantics
MASK32 = (1 << 32) - 1  # 0xFFFFFFFF

BLOCK_BYTES = 64
BLOCK_WORDS = 16

_BLOCK_STRUCT = struct.Struct("<16I")


def u32(x: int) -> int:
    """Force integer into unsigned 32-bit domain.

    Args:
        x: Input integer (can be negative or any size)

    Returns:
        Unsigned 32-bit integer (value modulo 2^32)
    """
    return x & MASK32


def rotl32(x: int, s: int) -> int:
    """Rotate a 32-bit value left by s bits.

    Args:
        x: Input value (will be masked to 32 bits)
        s: Rotation amount in [0, 32)

    Returns:
        Rotated 32-bit unsigned integer
    """
    x = u32(x)
    return ((x << s) & MASK32) | (x >> (32 - s))


def words_from_bytes(data: bytes) -> list[int]:
    """Unpack a byte string into little-endian uint32 words.

    Args:
        data: Bytes-like object whose length is a multiple of 4

    Returns:
        List of len(data) // 4 unsigned 32-bit integers

    Raises:
        ValueError: If the length is not a multiple of 4
    """
    if len(data) % 4 != 0:
        raise ValueError(f"data length must be a multiple of 4, got {len(data)}")
    return list(struct.unpack(f"<{len(data) // 4}I", data))


def words_to_bytes(words: Sequence[int]) -> bytes:
    """Pack uint32 words into a little-endian byte string.

    Args:
        words: Sequence of unsigned 32-bit integers

    Returns:
        Byte string of length 4 * len(words)
    """
    return struct.pack(f"<{len(words)}I", *words)


def salsa20_8_core(words: Sequence[int]) -> list[int]:
    """Apply the Salsa20/8 core to 16 uint32 words.

    Runs four double rounds (column round then row round) of the Salsa20
    quarter-round network and adds the input words back, mod 2^32.
    The input is never modified, so callers may pass the same list they
    assign the result to.

    Args:
        words: Sequence of 16 unsigned 32-bit integers

    Returns:
        New list of 16 unsigned 32-bit integers

    Example:
        >>> out = salsa20_8_core([0] * 16)
        >>> out == [0] * 16
        True
    """
    (j0, j1, j2, j3, j4, j5, j6, j7,
     j8, j9, j10, j11, j12, j13, j14, j15) = words
    x0, x1, x2, x3, x4, x5, x6, x7 = j0, j1, j2, j3, j4, j5, j6, j7
    x8, x9, x10, x11, x12, x13, x14, x15 = j8, j9, j10, j11, j12, j13, j14, j15
    M = MASK32

    for _ in range(4):
        # Column round
        t = (x0 + x12) & M; x4 ^= ((t << 7) & M) | (t >> 25)
        t = (x4 + x0) & M; x8 ^= ((t << 9) & M) | (t >> 23)
        t = (x8 + x4) & M; x12 ^= ((t << 13) & M) | (t >> 19)
        t = (x12 + x8) & M; x0 ^= ((t << 18) & M) | (t >> 14)
        t = (x5 + x1) & M; x9 ^= ((t << 7) & M) | (t >> 25)
        t = (x9 + x5) & M; x13 ^= ((t << 9) & M) | (t >> 23)
        t = (x13 + x9) & M; x1 ^= ((t << 13) & M) | (t >> 19)
        t = (x1 + x13) & M; x5 ^= ((t << 18) & M) | (t >> 14)
        t = (x10 + x6) & M; x14 ^= ((t << 7) & M) | (t >> 25)
        t = (x14 + x10) & M; x2 ^= ((t << 9) & M) | (t >> 23)
        t = (x2 + x14) & M; x6 ^= ((t << 13) & M) | (t >> 19)
        t = (x6 + x2) & M; x10 ^= ((t << 18) & M) | (t >> 14)
        t = (x15 + x11) & M; x3 ^= ((t << 7) & M) | (t >> 25)
        t = (x3 + x15) & M; x7 ^= ((t << 9) & M) | (t >> 23)
        t = (x7 + x3) & M; x11 ^= ((t << 13) & M) | (t >> 19)
        t = (x11 + x7) & M; x15 ^= ((t << 18) & M) | (t >> 14)

        # Row round
        t = (x0 + x3) & M; x1 ^= ((t << 7) & M) | (t >> 25)
        t = (x1 + x0) & M; x2 ^= ((t << 9) & M) | (t >> 23)
        t = (x2 + x1) & M; x3 ^= ((t << 13) & M) | (t >> 19)
        t = (x3 + x2) & M; x0 ^= ((t << 18) & M) | (t >> 14)
        t = (x5 + x4) & M; x6 ^= ((t << 7) & M) | (t >> 25)
        t = (x6 + x5) & M; x7 ^= ((t << 9) & M) | (t >> 23)
        t = (x7 + x6) & M; x4 ^= ((t << 13) & M) | (t >> 19)
        t = (x4 + x7) & M; x5 ^= ((t << 18) & M) | (t >> 14)
        t = (x10 + x9) & M; x11 ^= ((t << 7) & M) | (t >> 25)
        t = (x11 + x10) & M; x8 ^= ((t << 9) & M) | (t >> 23)
        t = (x8 + x11) & M; x9 ^= ((t << 13) & M) | (t >> 19)
        t = (x9 + x8) & M; x10 ^= ((t << 18) & M) | (t >> 14)
        t = (x15 + x14) & M; x12 ^= ((t << 7) & M) | (t >> 25)
        t = (x12 + x15) & M; x13 ^= ((t << 9) & M) | (t >> 23)
        t = (x13 + x12) & M; x14 ^= ((t << 13) & M) | (t >> 19)
        t = (x14 + x13) & M; x15 ^= ((t << 18) & M) | (t >> 14)

    return [
        (x0 + j0) & M, (x1 + j1) & M, (x2 + j2) & M, (x3 + j3) & M,
        (x4 + j4) & M, (x5 + j5) & M, (x6 + j6) & M, (x7 + j7) & M,
        (x8 + j8) & M, (x9 + j9) & M, (x10 + j10) & M, (x11 + j11) & M,
        (x12 + j12) & M, (x13 + j13) & M, (x14 + j14) & M, (x15 + j15) & M,
    ]


def salsa20_8(block: bytes) -> bytes:
    """Apply the Salsa20/8 core to a 64-byte block.

    Args:
        block: 64 bytes, read as 16 little-endian uint32 words

    Returns:
        64-byte output block

    Raises:
        ValueError: If block is not exactly 64 bytes
    """
    if len(block) != BLOCK_BYTES:
        raise ValueError(f"block must be {BLOCK_BYTES} bytes, got {len(block)}")
    return _BLOCK_STRUCT.pack(*salsa20_8_core(_BLOCK_STRUCT.unpack(block)))
