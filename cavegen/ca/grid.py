
import numpy as np

EMPTY, OCCUPIED = 0, 1
DTYPE = np.int8

def as_grid(cells) -> np.ndarray:
    """Copy any 2-D array-like into a fresh int8 grid of 0/1 cells."""
    try:
        a = np.array(cells)
    except ValueError as exc:
        raise ValueError("grid rows must all have the same length") from exc
    if a.ndim == 1 and a.size == 0:
        a = a.reshape(0, 0)
    if a.ndim != 2:
        raise ValueError(f"grid must be 2-D, got shape {a.shape}")
    return (a != 0).astype(DTYPE)

def empty_grid(h, w, fill=EMPTY):
    return np.full((h, w), fill, dtype=DTYPE)

def clamp(grid, i, j):
    h, w = grid.shape
    return min(max(i, 0), h - 1), min(max(j, 0), w - 1)

def occupied_fraction(grid):
    return float(grid.mean()) if grid.size else 0.0
