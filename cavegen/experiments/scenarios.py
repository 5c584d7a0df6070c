
from ..ca.grid import empty_grid, DTYPE
from ..ca.update import CAParams
from ..walk.agent import WalkParams

PRESETS = {
    # parameters of the original console demo
    "reference": (CAParams(radius=1, threshold=0.5),
                  WalkParams(walks=5, steps=10, room_w=5, room_h=3,
                             p_room=0.1, p_room_inc=0.05, p_turn=0.2, p_turn_inc=0.03)),
    "caves": (CAParams(radius=1, threshold=0.55),
              WalkParams(walks=3, steps=20, room_w=3, room_h=3,
                         p_room=0.05, p_room_inc=0.02, p_turn=0.3, p_turn_inc=0.05)),
    "halls": (CAParams(radius=2, threshold=0.6),
              WalkParams(walks=4, steps=15, room_w=7, room_h=5,
                         p_room=0.2, p_room_inc=0.1, p_turn=0.1, p_turn_inc=0.02,
                         reset="initial", carry_over=True)),
}

FILLS = ("empty", "solid", "noise", "border")

def get_preset(name):
    if name not in PRESETS:
        raise ValueError(f"unknown preset {name!r}; choose from {sorted(PRESETS)}")
    return PRESETS[name]

def initial_fill_factory(kind="empty", density=0.45):
    if kind not in FILLS:
        raise ValueError(f"unknown fill {kind!r}; choose from {FILLS}")
    def fill(rng, h, w):
        if kind == "empty": return empty_grid(h, w)
        if kind == "solid": return empty_grid(h, w, fill=1)
        if kind == "noise": return (rng.random((h, w)) < density).astype(DTYPE)
        g = empty_grid(h, w, fill=1)
        g[1:-1, 1:-1] = 0
        return g
    return fill
