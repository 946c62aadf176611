"""Vectorized scrypt operations on NumPy uint32 arrays.

Every function here works on a leading batch dimension, so the p stretch
blocks of one derivation (which are independent) can be mixed together.
Arrays are laid out as [batch, 2r, 16] uint32; uint32 arithmetic wraps
natively, which gives the mod 2^32 addition Salsa20 needs.
"""

import numpy as np

# Quarter-round operand groups (a, b, c, d): b ^= R(a+d, 7), c ^= R(b+a, 9),
# d ^= R(c+b, 13), a ^= R(d+c, 18)
COLUMN_GROUPS = (
    np.array([0, 5, 10, 15]),
    np.array([4, 9, 14, 3]),
    np.array([8, 13, 2, 7]),
    np.array([12, 1, 6, 11]),
)
ROW_GROUPS = (
    np.array([0, 5, 10, 15]),
    np.array([1, 6, 11, 12]),
    np.array([2, 7, 8, 13]),
    np.array([3, 4, 9, 14]),
)


def _rotl(v: np.ndarray, s: int) -> np.ndarray:
    return (v << np.uint32(s)) | (v >> np.uint32(32 - s))


def _quarter_round(x: np.ndarray, groups: tuple[np.ndarray, ...]) -> None:
    """Apply four independent quarter-rounds to x in place."""
    ia, ib, ic, id_ = groups
    a = x[..., ia]
    b = x[..., ib]
    c = x[..., ic]
    d = x[..., id_]
    b ^= _rotl(a + d, 7)
    c ^= _rotl(b + a, 9)
    d ^= _rotl(c + b, 13)
    a ^= _rotl(d + c, 18)
    x[..., ia] = a
    x[..., ib] = b
    x[..., ic] = c
    x[..., id_] = d


def salsa20_8_core(words: np.ndarray) -> np.ndarray:
    """Salsa20/8 core over the last axis.

    Args:
        words: uint32 array of shape [..., 16]

    Returns:
        New uint32 array of the same shape
    """
    x = words.copy()
    for _ in range(4):
        _quarter_round(x, COLUMN_GROUPS)
        _quarter_round(x, ROW_GROUPS)
    return x + words


def block_mix(b: np.ndarray) -> np.ndarray:
    """BlockMix over a batch.

    Args:
        b: uint32 array of shape [batch, 2r, 16]

    Returns:
        New uint32 array of shape [batch, 2r, 16]
    """
    two_r = b.shape[1]
    y = np.empty_like(b)
    t = b[:, two_r - 1]
    for i in range(two_r):
        t = salsa20_8_core(t ^ b[:, i])
        y[:, i] = t
    return np.concatenate([y[:, 0::2], y[:, 1::2]], axis=1)


def ro_mix(b: np.ndarray, n: int) -> np.ndarray:
    """ROMix over a batch of stretch blocks.

    Each batch row gets its own table slice, so the table holds
    n * batch * 32r words (128 * r * n * batch bytes). The table is zeroed
    before it is released.

    Args:
        b: uint32 array of shape [batch, 2r, 16]
        n: Cost parameter N (power of two)

    Returns:
        New uint32 array of shape [batch, 2r, 16]
    """
    if n < 1 or n & (n - 1) != 0:
        raise ValueError(f"n must be a positive power of 2, got {n}")

    batch = b.shape[0]
    rows = np.arange(batch)
    v = np.empty((n,) + b.shape, dtype=np.uint32)
    x = b.astype(np.uint32, copy=True)
    try:
        for i in range(n):
            v[i] = x
            x = block_mix(x)

        mask = np.uint32(n - 1)
        for _ in range(n):
            # First word of the last 64-byte block, per batch row
            j = (x[:, -1, 0] & mask).astype(np.intp)
            x = block_mix(x ^ v[j, rows])
        return x
    finally:
        v.fill(0)


def blocks_from_bytes(data: bytes, r: int) -> np.ndarray:
    """Read a stretch buffer as [p, 2r, 16] uint32 (little-endian words)."""
    words = np.frombuffer(data, dtype="<u4").astype(np.uint32)
    return words.reshape(-1, 2 * r, 16)


def blocks_to_bytes(blocks: np.ndarray) -> bytes:
    """Serialize [p, 2r, 16] uint32 blocks as little-endian bytes."""
    return blocks.astype("<u4").tobytes()


def mix_buffer(buffer: bytearray, n: int, r: int, batch_size: int) -> None:
    """ROMix every stretch block of buffer in place.

    Args:
        buffer: Stretch buffer of 128 * r * p bytes
        n: Cost parameter N
        r: Block size factor
        batch_size: Number of stretch blocks mixed together
    """
    block_size = 128 * r
    p = len(buffer) // block_size
    for start in range(0, p, batch_size):
        stop = min(start + batch_size, p)
        chunk = blocks_from_bytes(bytes(buffer[start * block_size:stop * block_size]), r)
        buffer[start * block_size:stop * block_size] = blocks_to_bytes(ro_mix(chunk, n))
