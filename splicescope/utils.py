"""
Utility functions

General-purpose helpers used across SpliceScope modules.
"""

from __future__ import annotations
from typing import Iterable, List, Tuple, Union
import numpy as np

Number = Union[int, float, np.ndarray]


class LinearScale:
    """
    Linear map from a data domain to a pixel range

    Example:
        >>> scale = LinearScale((0, 1000), (0, 800))
        >>> scale(500)
        400.0
    """

    def __init__(self, domain: Tuple[float, float], output_range: Tuple[float, float]) -> None:
        if domain[1] == domain[0]:
            raise ValueError(f"Degenerate scale domain: {domain}")
        self.domain = domain
        self.range = output_range
        self._k = (output_range[1] - output_range[0]) / (domain[1] - domain[0])

    def __call__(self, value: Number) -> Number:
        return self.range[0] + (value - self.domain[0]) * self._k


def unique_sorted(positions: Iterable[int]) -> List[int]:
    """Distinct positions in ascending order"""
    return sorted(set(positions))
