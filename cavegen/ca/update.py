from dataclasses import dataclass

import numpy as np
from scipy.signal import convolve2d

from .grid import as_grid, DTYPE


@dataclass(frozen=True)
class CAParams:
    radius: int = 1
    threshold: float = 0.5

    def apply(self, grid) -> np.ndarray:
        return step_ca(grid, self.radius, self.threshold)


def _occupied_count(occ: np.ndarray, radius: int) -> np.ndarray:
    """Occupied cells in each (2R+1)^2 window; cells outside the grid count as occupied.

    The kernel is capped at the grid size: past that every extra window cell is
    off-grid, so it is added back as a constant.
    """
    r = min(radius, max(occ.shape))
    k = 2 * r + 1
    padded = np.pad(occ.astype(np.int64), r, mode='constant', constant_values=1)
    counts = convolve2d(padded, np.ones((k, k), dtype=np.int64), mode='valid')
    extra = (2 * radius + 1) ** 2 - k * k
    if extra:
        # float: the off-grid remainder outgrows int64 for radii past ~1.5e9
        return counts + float(extra)
    return counts


def step_ca(grid, radius: int = 1, threshold: float = 0.5) -> np.ndarray:
    """
    One generation of the threshold automaton.
    - every cell looks at the square window of half-width `radius` around it
    - a cell becomes occupied when the occupied share of the window is >= `threshold`
    - all cells read the same previous generation; the input is never modified
    """
    if radius < 0:
        raise ValueError(f"radius must be >= 0, got {radius}")
    old = as_grid(grid)
    if old.size == 0:
        return old

    counts = _occupied_count(old, radius)
    ratio = counts / float((2 * radius + 1) ** 2)
    return (ratio >= threshold).astype(DTYPE)


def run_automaton_step(grid, radius: int, threshold: float) -> np.ndarray:
    return step_ca(grid, radius, threshold)
