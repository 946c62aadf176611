"""Wall-clock timing for derivations, with CUDA synchronization for the torch backend."""

import logging
import time
from contextlib import contextmanager
from typing import Generator, Optional

logger = logging.getLogger(__name__)


class Timer:
    """Context manager that measures and logs the duration of a block."""

    def __init__(self, name: str = "Derivation", device: str = "cpu"):
        """
        Initialize timer.

        Args:
            name: Label used in the log line
            device: "cpu", "cuda" or "auto". On CUDA, pending kernels are
                synchronized at both ends so queued torch work is counted.
        """
        self.name = name
        self.start_time: Optional[float] = None
        self.elapsed_time: Optional[float] = None

        if device == "auto":
            import torch

            self.device = "cuda" if torch.cuda.is_available() else "cpu"
        else:
            self.device = device

    def _sync(self) -> None:
        if self.device == "cuda":
            import torch

            torch.cuda.synchronize()

    def __enter__(self) -> "Timer":
        self._sync()
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.start_time is not None:
            self._sync()
            self.elapsed_time = time.perf_counter() - self.start_time
            logger.info(f"{self.name} took {self.elapsed_time:.4f} seconds")

    @property
    def elapsed(self) -> float:
        """Elapsed seconds of the last timed block."""
        if self.elapsed_time is None:
            raise ValueError("Timer has not been used as context manager yet")
        return self.elapsed_time


@contextmanager
def timer(name: str = "Derivation", device: str = "cpu") -> Generator[Timer, None, None]:
    """Function form of Timer.

    Args:
        name: Label used in the log line
        device: "cpu", "cuda" or "auto"

    Yields:
        Timer instance
    """
    with Timer(name, device=device) as t:
        yield t
