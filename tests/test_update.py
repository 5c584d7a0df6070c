import numpy as np
import pytest

from cavegen.ca.update import CAParams, run_automaton_step, step_ca


def _brute_force(grid: np.ndarray, radius: int, threshold: float) -> np.ndarray:
    h, w = grid.shape
    out = np.zeros_like(grid)
    for i in range(h):
        for j in range(w):
            count = 0
            for di in range(-radius, radius + 1):
                for dj in range(-radius, radius + 1):
                    ni, nj = i + di, j + dj
                    count += int(grid[ni, nj]) if (0 <= ni < h and 0 <= nj < w) else 1
            out[i, j] = 1 if count / (2 * radius + 1) ** 2 >= threshold else 0
    return out


def test_all_zero_map_only_corners_fill_at_half_threshold() -> None:
    out = step_ca(np.zeros((10, 20), dtype=np.int8), radius=1, threshold=0.5)
    expected = np.zeros((10, 20), dtype=np.int8)
    expected[[0, 0, -1, -1], [0, -1, 0, -1]] = 1
    assert np.array_equal(out, expected)


def test_all_zero_map_grows_full_border_at_low_threshold() -> None:
    out = step_ca(np.zeros((10, 20), dtype=np.int8), radius=1, threshold=0.3)
    expected = np.ones((10, 20), dtype=np.int8)
    expected[1:-1, 1:-1] = 0
    assert np.array_equal(out, expected)


def test_corner_ratio_is_five_ninths() -> None:
    zeros = np.zeros((4, 4), dtype=np.int8)
    assert step_ca(zeros, 1, 5 / 9)[0, 0] == 1
    assert step_ca(zeros, 1, 5 / 9 + 1e-9)[0, 0] == 0
    # non-corner edge cell sees three virtual neighbours
    assert step_ca(zeros, 1, 3 / 9)[0, 1] == 1
    assert step_ca(zeros, 1, 3 / 9 + 1e-9)[0, 1] == 0


def test_threshold_saturation() -> None:
    rng = np.random.default_rng(3)
    grid = (rng.random((6, 9)) < 0.4).astype(np.int8)
    assert step_ca(grid, 1, 0.0).all()
    assert not step_ca(grid, 1, 1.01).any()


def test_radius_zero_is_identity() -> None:
    rng = np.random.default_rng(5)
    grid = (rng.random((7, 7)) < 0.5).astype(np.int8)
    assert np.array_equal(step_ca(grid, 0, 0.5), grid)
    assert np.array_equal(step_ca(grid, 0, 1.0), grid)


@pytest.mark.parametrize("radius", [1, 2, 4, 9])
def test_matches_brute_force_window_count(radius) -> None:
    rng = np.random.default_rng(radius)
    grid = (rng.random((5, 8)) < 0.45).astype(np.int8)
    assert np.array_equal(step_ca(grid, radius, 0.55), _brute_force(grid, radius, 0.55))


def test_deterministic_and_does_not_touch_input() -> None:
    rng = np.random.default_rng(11)
    grid = (rng.random((10, 20)) < 0.5).astype(np.int8)
    before = grid.copy()
    a = step_ca(grid, 1, 0.5)
    b = step_ca(grid, 1, 0.5)
    assert np.array_equal(a, b)
    assert a.shape == grid.shape
    assert np.array_equal(grid, before)
    assert a is not grid


def test_accepts_nested_lists() -> None:
    out = step_ca([[0, 1, 0], [1, 1, 1], [0, 1, 0]], 1, 0.5)
    assert out.shape == (3, 3)
    assert out.dtype == np.int8


def test_empty_grids_are_returned_empty() -> None:
    assert step_ca([], 1, 0.5).shape == (0, 0)
    assert step_ca(np.zeros((3, 0)), 2, 0.5).shape == (3, 0)


def test_huge_radius_is_mostly_boundary() -> None:
    out = step_ca(np.zeros((3, 4), dtype=np.int8), 1000, 0.99)
    assert out.all()


def test_radius_beyond_int64_window_size() -> None:
    out = step_ca(np.zeros((3, 4), dtype=np.int8), 10**10, 0.5)
    assert out.shape == (3, 4)
    assert out.all()
    assert not step_ca(np.ones((3, 4), dtype=np.int8), 10**10, 1.01).any()


def test_rejects_bad_input() -> None:
    with pytest.raises(ValueError):
        step_ca(np.zeros((3, 3)), -1, 0.5)
    with pytest.raises(ValueError):
        step_ca([[0, 1], [1]], 1, 0.5)
    with pytest.raises(ValueError):
        step_ca(np.zeros((2, 2, 2)), 1, 0.5)


def test_params_and_positional_form_agree() -> None:
    rng = np.random.default_rng(2)
    grid = (rng.random((8, 8)) < 0.5).astype(np.int8)
    assert np.array_equal(CAParams(2, 0.6).apply(grid), run_automaton_step(grid, 2, 0.6))
