"""Vectorized scrypt kernels (NumPy and PyTorch).

Imported lazily by scryptkdf.kdf so the pure-Python path does not pay for
loading torch.
"""
