"""Card counting systems."""

from bjodds.counting.base import CountingSystem, describe_true_count
from bjodds.counting.hilo import HiLoSystem

__all__ = [
    "CountingSystem",
    "HiLoSystem",
    "describe_true_count",
]
