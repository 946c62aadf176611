"""Device management utilities."""

from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    import torch


def resolve_device(device: Union[str, "torch.device"]) -> "torch.device":
    """Resolve device string to torch.device.

    Validates device string and returns corresponding torch.device.

    Args:
        device: Device string ("cpu", "cuda" or "auto") or a torch.device.
            "auto" picks CUDA when available, else CPU.

    Returns:
        torch.device object

    Raises:
        ValueError: If device string is not "cpu", "cuda" or "auto"
        RuntimeError: If CUDA is requested but not available
    """
    import torch

    if isinstance(device, torch.device):
        device = device.type

    if device == "cpu":
        return torch.device("cpu")
    elif device == "cuda":
        if not torch.cuda.is_available():
            raise RuntimeError("CUDA requested but not available")
        return torch.device("cuda")
    elif device == "auto":
        return torch.device("cuda" if torch.cuda.is_available() else "cpu")
    else:
        raise ValueError(f"device must be 'cpu', 'cuda' or 'auto', got {device}")
