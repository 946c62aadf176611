"""Quick start guide for scryptkdf.

Demonstrates:
1. Deriving a key and checking it against RFC 7914
2. Filling a caller-owned buffer
3. Loading parameters from a YAML config
4. Parameter validation errors
"""

import os
from pathlib import Path

from scryptkdf import (
    ScryptParameterError,
    derive_key,
    derive_key_into,
    derive_key_with_params,
    load_config,
    params_from_config,
    runtime_from_config,
)

CONFIG_DIR = Path(__file__).resolve().parents[1] / "configs"


def example_1_rfc_vector():
    """Example 1: the first RFC 7914 test vector."""
    print("=" * 60)
    print("Example 1: RFC 7914 test vector")
    print("=" * 60)

    key = derive_key(b"", b"", n=16, r=1, p=1, dklen=64)
    print(f"scrypt('', '', N=16, r=1, p=1) = {key.hex()}")
    print()


def example_2_into_buffer():
    """Example 2: derive straight into a preallocated buffer."""
    print("=" * 60)
    print("Example 2: Caller-owned output buffer")
    print("=" * 60)

    salt = os.urandom(16)
    out = bytearray(32)
    derive_key_into(out, "correct horse battery staple", salt, n=1024, r=8, p=1)
    print(f"salt={salt.hex()}")
    print(f"key ={out.hex()}")
    print()


def example_3_config():
    """Example 3: parameters and backend from a YAML preset."""
    print("=" * 60)
    print("Example 3: Parameters from configs/rfc7914_vector2.yaml")
    print("=" * 60)

    config = load_config(CONFIG_DIR / "rfc7914_vector2.yaml")
    params = params_from_config(config)
    runtime = runtime_from_config(config)
    print(f"params={params.to_dict()} runtime={runtime}")

    key = derive_key_with_params(b"password", b"NaCl", params, **runtime)
    print(f"key={key.hex()}")
    print()


def example_4_invalid():
    """Example 4: invalid parameters fail before any work."""
    print("=" * 60)
    print("Example 4: Parameter validation")
    print("=" * 60)

    try:
        derive_key(b"pw", b"salt", n=1000, r=8, p=1)
    except ScryptParameterError as e:
        print(f"Rejected {e.name}={e.value}: {e}")
    print()


if __name__ == "__main__":
    example_1_rfc_vector()
    example_2_into_buffer()
    example_3_config()
    example_4_invalid()
