"""Pure-Python scrypt primitives."""

from scryptkdf.core.blockmix import block_mix, block_mix_bytes
from scryptkdf.core.romix import integerify, new_table, ro_mix, wipe_table
from scryptkdf.core.salsa import (
    MASK32,
    rotl32,
    salsa20_8,
    salsa20_8_core,
    u32,
    words_from_bytes,
    words_to_bytes,
)

__all__ = [
    "MASK32",
    "u32",
    "rotl32",
    "salsa20_8",
    "salsa20_8_core",
    "words_from_bytes",
    "words_to_bytes",
    "block_mix",
    "block_mix_bytes",
    "ro_mix",
    "new_table",
    "wipe_table",
    "integerify",
]
