from dataclasses import dataclass, replace
from typing import Optional, Tuple

import numpy as np

from ..ca.grid import as_grid, clamp, OCCUPIED

# direction index -> (dx, dy); x is the row, y the column
DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))
START_DIRECTION = (0, 1)

# reset values used by the "fixed" policy
TURN_RESET = 0.2
ROOM_RESET = 0.1

RESET_POLICIES = ("fixed", "initial")


@dataclass(frozen=True)
class WalkParams:
    walks: int = 5
    steps: int = 10
    room_w: int = 5
    room_h: int = 3
    p_room: float = 0.1
    p_room_inc: float = 0.05
    p_turn: float = 0.2
    p_turn_inc: float = 0.03
    reset: str = "fixed"
    carry_over: bool = False

    def __post_init__(self):
        if self.reset not in RESET_POLICIES:
            raise ValueError(f"reset must be one of {RESET_POLICIES}, got {self.reset!r}")

    @property
    def turn_reset(self) -> float:
        return TURN_RESET if self.reset == "fixed" else self.p_turn

    @property
    def room_reset(self) -> float:
        return ROOM_RESET if self.reset == "fixed" else self.p_room


@dataclass(frozen=True)
class AgentState:
    x: int
    y: int
    dx: int = START_DIRECTION[0]
    dy: int = START_DIRECTION[1]
    p_turn: Optional[float] = None
    p_room: Optional[float] = None
    rooms: int = 0

    @property
    def pos(self) -> Tuple[int, int]:
        return self.x, self.y


def _random_direction(rng):
    return DIRECTIONS[int(rng.integers(0, 4))]


def carve_room(grid: np.ndarray, x: int, y: int, room_w: int, room_h: int) -> None:
    """Fill the rectangle of half-extents (room_w//2, room_h//2) around (x, y), clipped to the grid."""
    hx, hy = room_w // 2, room_h // 2
    h, w = grid.shape
    x0, x1 = max(x - hx, 0), min(x + hx + 1, h)
    y0, y1 = max(y - hy, 0), min(y + hy + 1, w)
    if x0 < x1 and y0 < y1:
        grid[x0:x1, y0:y1] = OCCUPIED


def drunk_walk(grid, params: WalkParams, state: AgentState, rng=None):
    """
    Run `params.walks` walks of `params.steps` steps on a copy of `grid`.
    - each step marks the agent cell, then moves along (dx, dy) if the target is inside the grid
    - hitting the edge rerolls the direction and skips the turn check for that step
    - after a move the agent turns with probability p_turn, which grows by p_turn_inc until it fires
    - after each walk a room is carved with probability p_room, which grows the same way
    Returns (new_grid, new_state).
    """
    rng = np.random.default_rng() if rng is None else rng
    g = as_grid(grid)
    if g.size == 0:
        return g, state
    h, w = g.shape

    x, y = clamp(g, state.x, state.y)
    if params.carry_over:
        dx, dy = state.dx, state.dy
        p_turn = params.p_turn if state.p_turn is None else state.p_turn
        p_room = params.p_room if state.p_room is None else state.p_room
    else:
        dx, dy = START_DIRECTION
        p_turn, p_room = params.p_turn, params.p_room
    rooms = state.rooms

    for _ in range(params.walks):
        for _ in range(params.steps):
            g[x, y] = OCCUPIED
            nx, ny = x + dx, y + dy
            if not (0 <= nx < h and 0 <= ny < w):
                dx, dy = _random_direction(rng)
                continue
            x, y = nx, ny

            if rng.random() < p_turn:
                dx, dy = _random_direction(rng)
                p_turn = params.turn_reset
            else:
                p_turn += params.p_turn_inc

        if rng.random() < p_room:
            carve_room(g, x, y, params.room_w, params.room_h)
            rooms += 1
            p_room = params.room_reset
        else:
            p_room += params.p_room_inc

    return g, replace(state, x=x, y=y, dx=dx, dy=dy, p_turn=p_turn, p_room=p_room, rooms=rooms)


def run_walk_agent(grid, width, height, walks, steps_per_walk, room_width, room_height,
                   prob_room_start, prob_room_increment, prob_turn_start, prob_turn_increment,
                   agent_pos, rng=None):
    """Positional form of `drunk_walk`; returns (new_grid, (x, y)).

    `width`/`height` bound the walk and are clipped to the grid's own shape.
    """
    g = as_grid(grid)
    h = max(0, min(height, g.shape[0]))
    w = max(0, min(width, g.shape[1]))
    params = WalkParams(walks=walks, steps=steps_per_walk, room_w=room_width, room_h=room_height,
                        p_room=prob_room_start, p_room_inc=prob_room_increment,
                        p_turn=prob_turn_start, p_turn_inc=prob_turn_increment)
    sub, state = drunk_walk(g[:h, :w], params, AgentState(*agent_pos), rng)
    g[:h, :w] = sub
    return g, state.pos
