# stickjump/game/player.py
from __future__ import annotations
import enum
from dataclasses import dataclass
from typing import NamedTuple
from .config import (
    WIDTH, PLAYER_W, PLAYER_H, GRAVITY, ACCEL_X, FRICTION_X, MAX_VX, JUMP_SPEED
)


@dataclass(frozen=True)
class InputState:
    """Abstract horizontal signal consumed by one simulation tick."""
    left: bool = False
    right: bool = False


NO_INPUT = InputState()


class Box(NamedTuple):
    """Axis-aligned rectangle in world space (y grows downward)."""
    x: float
    y: float
    width: float
    height: float


def left(b: Box) -> float:
    return b.x

def right(b: Box) -> float:
    return b.x + b.width

def top(b: Box) -> float:
    return b.y

def bottom(b: Box) -> float:
    return b.y + b.height

def overlaps_x(a: Box, b: Box) -> bool:
    """Strict horizontal overlap: touching edges do not count."""
    return right(a) > left(b) and left(a) < right(b)


class Facing(enum.Enum):
    LEFT = -1
    RIGHT = 1


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


@dataclass
class Player:
    """
    Stick figure driven by explicit per-tick input.
    - velocities are in px per tick (one Euler sub-step per fixed tick)
    - the horizontal world is a cylinder: leaving one wall re-enters at the other
    """
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    facing: Facing = Facing.RIGHT
    highest_y: float | None = None

    width = PLAYER_W
    height = PLAYER_H

    def __post_init__(self):
        if self.highest_y is None:
            self.highest_y = self.y

    @property
    def box(self) -> Box:
        return Box(self.x, self.y, self.width, self.height)

    def update(self, inp: InputState):
        """Advance one tick: horizontal accel/friction, gravity, integrate, wrap."""
        if inp.left and not inp.right:
            self.vx -= ACCEL_X
            self.facing = Facing.LEFT
        elif inp.right and not inp.left:
            self.vx += ACCEL_X
            self.facing = Facing.RIGHT
        else:
            self.vx *= FRICTION_X
        self.vx = _clamp(self.vx, -MAX_VX, MAX_VX)

        # No terminal velocity
        self.vy += GRAVITY

        self.x += self.vx
        self.y += self.vy

        b = self.box
        if right(b) < 0:
            self.x = WIDTH
        elif left(b) > WIDTH:
            self.x = -self.width

        if self.y < self.highest_y:
            self.highest_y = self.y

    def bounce(self):
        self.vy = -JUMP_SPEED
