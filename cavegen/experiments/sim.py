
import numpy as np

from ..ca.grid import occupied_fraction
from ..ca.update import CAParams, step_ca
from ..walk.agent import AgentState, WalkParams, drunk_walk
from .scenarios import initial_fill_factory

LOG_KEYS = ['t', 'occupied', 'agent_x', 'agent_y', 'p_turn', 'p_room', 'rooms']

def iterate(iterations=5, height=10, width=20, ca=CAParams(), walk=WalkParams(),
            seed=None, fill=None, start=None):
    """Yield (t, grid, state) after each automaton + walk iteration; t == -1 is the initial map."""
    rng = np.random.default_rng(seed)
    fill = fill or initial_fill_factory("empty")
    grid = fill(rng, height, width)
    state = AgentState(*(start if start is not None else (height // 2, width // 2)))
    yield -1, grid, state
    for t in range(iterations):
        grid = step_ca(grid, ca.radius, ca.threshold)
        grid, state = drunk_walk(grid, walk, state, rng)
        yield t, grid, state

def new_log():
    return {k: [] for k in LOG_KEYS}

def record(log, t, grid, state):
    log['t'].append(t); log['occupied'].append(occupied_fraction(grid))
    log['agent_x'].append(state.x); log['agent_y'].append(state.y)
    log['p_turn'].append(state.p_turn); log['p_room'].append(state.p_room)
    log['rooms'].append(state.rooms)

def run(iterations=5, height=10, width=20, ca=CAParams(), walk=WalkParams(),
        seed=None, fill=None, start=None):
    log = new_log()
    grid = None
    for t, grid, state in iterate(iterations, height, width, ca, walk, seed, fill, start):
        if t >= 0:
            record(log, t, grid, state)
    return grid, log
