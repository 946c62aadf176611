"""scryptkdf: scrypt key derivation (RFC 7914) with pure-Python, NumPy and PyTorch backends."""

from .config import load_config, params_from_config, runtime_from_config
from .core import block_mix, block_mix_bytes, ro_mix, salsa20_8, salsa20_8_core
from .kdf import BACKENDS, derive_key, derive_key_into, derive_key_with_params, pbkdf2_sha256
from .params import ScryptParameterError, ScryptParams
from .utils import Timer, get_logger, resolve_device

__version__ = "0.1.0"

__all__ = [
    # Key derivation
    "derive_key",
    "derive_key_into",
    "derive_key_with_params",
    "pbkdf2_sha256",
    "BACKENDS",
    # Parameters
    "ScryptParams",
    "ScryptParameterError",
    # Primitives
    "salsa20_8",
    "salsa20_8_core",
    "block_mix",
    "block_mix_bytes",
    "ro_mix",
    # Config
    "load_config",
    "params_from_config",
    "runtime_from_config",
    # Utils
    "get_logger",
    "Timer",
    "resolve_device",
]
