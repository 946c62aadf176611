"""scrypt key derivation (RFC 7914).

derive_key() stretches a passphrase and salt with PBKDF2-HMAC-SHA256 into p
blocks of 128 * r bytes, runs each block through ROMix, and compresses the
mixed buffer with a second PBKDF2-HMAC-SHA256 pass into the derived key.

Backends:
- "python": pure-Python core, blocks mixed one after another with a single
  reused lookup table (128 * r * N bytes).
- "numpy": blocks mixed together in batches on uint32 arrays
  (128 * r * N * batch_size bytes of table).
- "torch": same batching on int64 tensors, on CPU or CUDA
  (256 * r * N * batch_size bytes of table).

All backends return identical keys.
"""

import hashlib
import logging
from typing import Optional, Union

from scryptkdf.core.romix import new_table, ro_mix, wipe_table
from scryptkdf.params import ScryptParams

logger = logging.getLogger(__name__)

BACKENDS = ("python", "numpy", "torch")

BytesLike = Union[bytes, bytearray, memoryview, str]


def pbkdf2_sha256(password: bytes, salt: bytes, dklen: int) -> bytes:
    """Single-iteration PBKDF2-HMAC-SHA256.

    Args:
        password: Password bytes
        salt: Salt bytes
        dklen: Output length in bytes

    Returns:
        dklen bytes of PBKDF2 output
    """
    return hashlib.pbkdf2_hmac("sha256", password, salt, 1, dklen)


def _to_bytes(name: str, value: BytesLike) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"{name} must be bytes-like or str, got {type(value).__name__}")


def _check_runtime(backend: str, batch_size: Optional[int]) -> None:
    if backend not in BACKENDS:
        raise ValueError(f"backend must be one of {list(BACKENDS)}, got {backend!r}")
    if batch_size is not None and batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")


def _mix_python(buffer: bytearray, params: ScryptParams) -> None:
    block_size = params.block_size
    table = new_table(params.n, params.r)
    try:
        for i in range(params.p):
            off = i * block_size
            buffer[off:off + block_size] = ro_mix(
                buffer[off:off + block_size], params.n, params.r, table
            )
    finally:
        wipe_table(table)


def _mix(buffer: bytearray, params: ScryptParams, backend: str, device: str, batch_size: Optional[int]) -> None:
    batch = min(batch_size or params.p, params.p)
    if backend == "python":
        _mix_python(buffer, params)
    elif backend == "numpy":
        from scryptkdf.kernels import numpy_ops

        numpy_ops.mix_buffer(buffer, params.n, params.r, batch)
    else:
        from scryptkdf.kernels import torch_ops
        from scryptkdf.utils.device import resolve_device

        torch_ops.mix_buffer(buffer, params.n, params.r, batch, resolve_device(device))


def derive_key_with_params(
    passphrase: BytesLike,
    salt: BytesLike,
    params: ScryptParams,
    *,
    backend: str = "python",
    device: str = "cpu",
    batch_size: Optional[int] = None,
) -> bytes:
    """Derive a key for already validated parameters.

    Args:
        passphrase: Passphrase (str is UTF-8 encoded)
        salt: Salt (str is UTF-8 encoded)
        params: Validated ScryptParams; params.dklen is the key length
        backend: "python", "numpy" or "torch"
        device: Torch device for the "torch" backend ("cpu", "cuda", "auto")
        batch_size: Stretch blocks mixed together by vectorized backends
            (default: all p)

    Returns:
        Derived key of params.dklen bytes

    Raises:
        ValueError: If backend or batch_size is invalid
        TypeError: If passphrase or salt is not bytes-like or str
    """
    _check_runtime(backend, batch_size)
    password = _to_bytes("passphrase", passphrase)
    salt_bytes = _to_bytes("salt", salt)

    logger.debug(
        f"Deriving {params.dklen}-byte key: n={params.n} r={params.r} p={params.p} "
        f"backend={backend} table={params.table_bytes} bytes"
    )

    buffer = bytearray(pbkdf2_sha256(password, salt_bytes, params.buffer_bytes))
    try:
        _mix(buffer, params, backend, device, batch_size)
        return pbkdf2_sha256(password, bytes(buffer), params.dklen)
    finally:
        buffer[:] = bytes(len(buffer))


def derive_key(
    passphrase: BytesLike,
    salt: BytesLike,
    n: int,
    r: int,
    p: int,
    dklen: int = 64,
    *,
    backend: str = "python",
    device: str = "cpu",
    batch_size: Optional[int] = None,
) -> bytes:
    """Derive a key with scrypt.

    Args:
        passphrase: Passphrase (str is UTF-8 encoded)
        salt: Salt (str is UTF-8 encoded)
        n: CPU/memory cost N, a power of two
        r: Block size factor
        p: Parallelization factor
        dklen: Derived key length in bytes
        backend: "python", "numpy" or "torch"
        device: Torch device for the "torch" backend
        batch_size: Stretch blocks mixed together by vectorized backends

    Returns:
        Derived key of dklen bytes

    Raises:
        ScryptParameterError: If n, r, p or dklen is out of range

    Example:
        >>> derive_key(b"", b"", n=16, r=1, p=1).hex()[:16]
        '77d6576238657b20'
    """
    params = ScryptParams(n=n, r=r, p=p, dklen=dklen)
    return derive_key_with_params(
        passphrase, salt, params,
        backend=backend, device=device, batch_size=batch_size,
    )


def derive_key_into(
    out: Union[bytearray, memoryview],
    passphrase: BytesLike,
    salt: BytesLike,
    n: int,
    r: int,
    p: int,
    *,
    backend: str = "python",
    device: str = "cpu",
    batch_size: Optional[int] = None,
) -> None:
    """Derive a key with scrypt directly into a caller-owned buffer.

    The key length is the size of out in bytes. Nothing is written unless
    the derivation succeeds.

    Args:
        out: Writable buffer (bytearray, writable memoryview, array, ...)
        passphrase: Passphrase (str is UTF-8 encoded)
        salt: Salt (str is UTF-8 encoded)
        n: CPU/memory cost N, a power of two
        r: Block size factor
        p: Parallelization factor
        backend: "python", "numpy" or "torch"
        device: Torch device for the "torch" backend
        batch_size: Stretch blocks mixed together by vectorized backends

    Raises:
        TypeError: If out is read-only
        ScryptParameterError: If out is empty or n, r, p is out of range
    """
    with memoryview(out) as view:
        if view.readonly:
            raise TypeError("out must be a writable buffer")
        params = ScryptParams(n=n, r=r, p=p, dklen=view.nbytes)
        key = derive_key_with_params(
            passphrase, salt, params,
            backend=backend, device=device, batch_size=batch_size,
        )
        with view.cast("B") as raw:
            raw[:] = key
