"""BlockMix over the Salsa20/8 core (RFC 7914, section 4)."""

from typing import Sequence

from scryptkdf.core.salsa import BLOCK_WORDS, salsa20_8_core, words_from_bytes, words_to_bytes


def block_mix(words: Sequence[int], r: int) -> list[int]:
    """Mix 2r consecutive 64-byte blocks held as uint32 words.

    T starts as the last block. For each block B_i in order,
    T = Salsa20/8(T xor B_i) and Y_i = T. The output lists the
    even-indexed Y blocks first, then the odd-indexed ones.

    Args:
        words: 32 * r unsigned 32-bit words (2r blocks of 16 words)
        r: Block size factor

    Returns:
        New list of 32 * r words
    """
    t = list(words[(2 * r - 1) * BLOCK_WORDS:2 * r * BLOCK_WORDS])
    even: list[int] = []
    odd: list[int] = []

    for i in range(2 * r):
        off = i * BLOCK_WORDS
        t = salsa20_8_core([a ^ b for a, b in zip(t, words[off:off + BLOCK_WORDS])])
        # Y_0, Y_2, ... land in the first half, Y_1, Y_3, ... in the second
        if i % 2 == 0:
            even.extend(t)
        else:
            odd.extend(t)

    return even + odd


def block_mix_bytes(data: bytes, r: int) -> bytes:
    """Byte-level BlockMix.

    Args:
        data: 128 * r bytes
        r: Block size factor (>= 1)

    Returns:
        128 * r mixed bytes

    Raises:
        ValueError: If r < 1 or data has the wrong length
    """
    if r < 1:
        raise ValueError(f"r must be >= 1, got {r}")
    if len(data) != 128 * r:
        raise ValueError(f"data must be {128 * r} bytes for r={r}, got {len(data)}")
    return words_to_bytes(block_mix(words_from_bytes(data), r))
