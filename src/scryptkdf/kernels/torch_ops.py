"""Vectorized scrypt operations on PyTorch tensors.

Tensors are int64 holding uint32 values. torch has no general uint32
arithmetic, so every addition and shift is masked back to 32 bits with
MASK32; values stay below 2^50 before masking, so int64 never overflows.
Layout matches numpy_ops: [batch, 2r, 16].
"""

from functools import lru_cache

import numpy as np
import torch

from scryptkdf.core.salsa import MASK32

# Quarter-round operand groups (a, b, c, d), same as numpy_ops
COLUMN_GROUPS = ((0, 5, 10, 15), (4, 9, 14, 3), (8, 13, 2, 7), (12, 1, 6, 11))
ROW_GROUPS = ((0, 5, 10, 15), (1, 6, 11, 12), (2, 7, 8, 13), (3, 4, 9, 14))


def _rotl(v: torch.Tensor, s: int) -> torch.Tensor:
    return ((v << s) & MASK32) | (v >> (32 - s))


def _quarter_round(x: torch.Tensor, groups: tuple[torch.Tensor, ...]) -> None:
    """Apply four independent quarter-rounds to x in place."""
    ia, ib, ic, id_ = groups
    a = x[..., ia]
    b = x[..., ib]
    c = x[..., ic]
    d = x[..., id_]
    b = b ^ _rotl((a + d) & MASK32, 7)
    c = c ^ _rotl((b + a) & MASK32, 9)
    d = d ^ _rotl((c + b) & MASK32, 13)
    a = a ^ _rotl((d + c) & MASK32, 18)
    x[..., ia] = a
    x[..., ib] = b
    x[..., ic] = c
    x[..., id_] = d


@lru_cache(maxsize=None)
def _index_groups(groups: tuple[tuple[int, ...], ...], device: torch.device) -> tuple[torch.Tensor, ...]:
    return tuple(torch.tensor(g, dtype=torch.long, device=device) for g in groups)


def salsa20_8_core(words: torch.Tensor) -> torch.Tensor:
    """Salsa20/8 core over the last axis.

    Args:
        words: int64 tensor of shape [..., 16] with values in [0, 2^32)

    Returns:
        New int64 tensor of the same shape
    """
    if words.dtype != torch.long:
        raise TypeError(f"words must be torch.long dtype, got {words.dtype}")
    columns = _index_groups(COLUMN_GROUPS, words.device)
    rows = _index_groups(ROW_GROUPS, words.device)
    x = words.clone()
    for _ in range(4):
        _quarter_round(x, columns)
        _quarter_round(x, rows)
    return (x + words) & MASK32


def block_mix(b: torch.Tensor) -> torch.Tensor:
    """BlockMix over a batch.

    Args:
        b: int64 tensor of shape [batch, 2r, 16]

    Returns:
        New int64 tensor of shape [batch, 2r, 16]
    """
    two_r = b.shape[1]
    y = torch.empty_like(b)
    t = b[:, two_r - 1]
    for i in range(two_r):
        t = salsa20_8_core(t ^ b[:, i])
        y[:, i] = t
    return torch.cat([y[:, 0::2], y[:, 1::2]], dim=1)


def ro_mix(b: torch.Tensor, n: int) -> torch.Tensor:
    """ROMix over a batch of stretch blocks.

    The table is allocated on b's device, holds n * batch * 32r int64
    values (256 * r * n * batch bytes) and is zeroed before release.

    Args:
        b: int64 tensor of shape [batch, 2r, 16]
        n: Cost parameter N (power of two)

    Returns:
        New int64 tensor of shape [batch, 2r, 16]
    """
    if n < 1 or n & (n - 1) != 0:
        raise ValueError(f"n must be a positive power of 2, got {n}")

    batch = b.shape[0]
    rows = torch.arange(batch, device=b.device)
    v = torch.empty((n,) + tuple(b.shape), dtype=torch.long, device=b.device)
    x = b.clone()
    try:
        for i in range(n):
            v[i] = x
            x = block_mix(x)

        for _ in range(n):
            # First word of the last 64-byte block, per batch row
            j = x[:, -1, 0] & (n - 1)
            x = block_mix(x ^ v[j, rows])
        return x
    finally:
        v.zero_()


def blocks_from_bytes(data: bytes, r: int, device: torch.device) -> torch.Tensor:
    """Read a stretch buffer as an int64 tensor [p, 2r, 16] on device."""
    words = np.frombuffer(data, dtype="<u4").astype(np.int64)
    return torch.from_numpy(words.reshape(-1, 2 * r, 16)).to(device)


def blocks_to_bytes(blocks: torch.Tensor) -> bytes:
    """Serialize [p, 2r, 16] blocks as little-endian uint32 bytes."""
    return blocks.cpu().numpy().astype("<u4").tobytes()


def mix_buffer(buffer: bytearray, n: int, r: int, batch_size: int, device: torch.device) -> None:
    """ROMix every stretch block of buffer in place.

    Args:
        buffer: Stretch buffer of 128 * r * p bytes
        n: Cost parameter N
        r: Block size factor
        batch_size: Number of stretch blocks mixed together
        device: Device the table and blocks live on
    """
    block_size = 128 * r
    p = len(buffer) // block_size
    for start in range(0, p, batch_size):
        stop = min(start + batch_size, p)
        chunk = blocks_from_bytes(bytes(buffer[start * block_size:stop * block_size]), r, device)
        buffer[start * block_size:stop * block_size] = blocks_to_bytes(ro_mix(chunk, n))
