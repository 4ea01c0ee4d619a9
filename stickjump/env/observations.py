# stickjump/env/observations.py
from __future__ import annotations
from typing import List, Tuple
import numpy as np

from stickjump.game.config import WIDTH, HEIGHT, MAX_VX, JUMP_SPEED
from stickjump.game.level import PlatformKind
from stickjump.game.simulation import Snapshot

NEAREST_PLATFORMS = 4
OBS_SIZE = 3 + 3 * NEAREST_PLATFORMS
# Slot used when fewer platforms are visible: centred, a full screen below, static
EMPTY_SLOT: Tuple[float, float, float] = (0.0, 1.0, 0.0)


def _clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else (hi if x > hi else x)


def observation_bounds() -> Tuple[np.ndarray, np.ndarray]:
    low = np.array([0.0, -1.0, -1.0] + [-1.0, -1.0, 0.0] * NEAREST_PLATFORMS, dtype=np.float32)
    high = np.array([1.0, 1.0, 1.0] + [1.0, 1.0, 1.0] * NEAREST_PLATFORMS, dtype=np.float32)
    return low, high


def build_observation(snap: Snapshot, vx: float, vy: float) -> np.ndarray:
    """
    Returns a fixed (OBS_SIZE,) float32 vector:
      [ x_norm, vx_norm, vy_norm,
        (dx, dy, moving) x NEAREST_PLATFORMS ]
    - x_norm  : player centre x / WIDTH, in [0,1]
    - vx_norm : vx / MAX_VX, in [-1,1]
    - vy_norm : vy / JUMP_SPEED clipped to [-1,1] (gravity is unbounded)
    - dx, dy  : platform top-centre minus player bottom-centre, over WIDTH/HEIGHT,
                clipped to [-1,1]; nearest |dy| first, ties by creation order
    - moving  : 1.0 for oscillating platforms
    """
    p = snap.player
    cx = p.x + p.width / 2
    foot_y = p.y + p.height

    feats: List[float] = [
        _clamp(cx / WIDTH, 0.0, 1.0),
        _clamp(vx / MAX_VX, -1.0, 1.0),
        _clamp(vy / JUMP_SPEED, -1.0, 1.0),
    ]

    # Platforms currently within one screen of the player's feet
    near = []
    for order, plat in enumerate(snap.platforms):
        dy = plat.y - foot_y
        if abs(dy) <= HEIGHT:
            near.append((abs(dy), order, plat))
    near.sort(key=lambda t: (t[0], t[1]))

    for _, _, plat in near[:NEAREST_PLATFORMS]:
        dx = (plat.x + plat.width / 2 - cx) / WIDTH
        dy = (plat.y - foot_y) / HEIGHT
        moving = 1.0 if plat.kind is PlatformKind.OSCILLATING else 0.0
        feats.extend([_clamp(dx, -1.0, 1.0), _clamp(dy, -1.0, 1.0), moving])

    missing = NEAREST_PLATFORMS - min(len(near), NEAREST_PLATFORMS)
    for _ in range(missing):
        feats.extend(EMPTY_SLOT)

    return np.asarray(feats, dtype=np.float32)
