# stickjump/game/level.py
from __future__ import annotations
import enum
import logging
import math
import random
from dataclasses import dataclass
from typing import List, Optional
from .config import (
    WIDTH, HEIGHT, PLATFORM_H, PLATFORM_MIN_W, PLATFORM_MAX_W, PLATFORM_EDGE_MARGIN,
    GAP_MIN, GAP_MAX, OSCILLATING_CHANCE, OSCILLATING_SPEED,
    START_PLATFORM_W, START_PLATFORM_Y, START_GAP, INITIAL_PLATFORMS,
    LOOKAHEAD, CULL_MARGIN
)
from .player import Box

logger = logging.getLogger(__name__)


class GenerationError(RuntimeError):
    """Generation failed to climb past the lookahead threshold (degenerate gaps)."""


class PlatformKind(enum.Enum):
    STATIC = "static"
    OSCILLATING = "oscillating"


@dataclass
class Platform:
    x: float
    y: float
    width: float
    height: float = PLATFORM_H
    kind: PlatformKind = PlatformKind.STATIC
    vx: float = 0.0

    @property
    def box(self) -> Box:
        return Box(self.x, self.y, self.width, self.height)

    def update_movement(self):
        """Slide an oscillating platform, reflecting off the walls."""
        if self.kind is not PlatformKind.OSCILLATING:
            return
        self.x += self.vx
        if self.x < 0:
            self.x = 0.0
            self.vx = -self.vx
        elif self.x + self.width > WIDTH:
            self.x = WIDTH - self.width
            self.vx = -self.vx


class PlatformField:
    """
    Endless column of platforms above the camera.
    - platforms are kept in creation order; collision relies on that order
    - highest_generated_y is the y of the topmost platform created so far
    - all random draws come from a private RNG seeded at construction
    """
    def __init__(self, seed: int | None,
                 gap_min: float = GAP_MIN, gap_max: float = GAP_MAX,
                 oscillating_chance: float = OSCILLATING_CHANCE):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)
        self.gap_min = gap_min
        self.gap_max = gap_max
        self.oscillating_chance = oscillating_chance
        self.platforms: List[Platform] = []
        self.highest_generated_y: float = float(START_PLATFORM_Y)
        self.spawn_initial()

    def reset(self, seed: Optional[int] = None):
        """
        Clear and respawn.
        - reset(seed=s) replays the exact layout of PlatformField(s)
        - reset() moves on to a fresh layout whose seed is drawn from the
          current RNG stream, so a run of resets is still reproducible
        """
        if seed is None:
            seed = self.rng.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(self.seed)
        self.platforms = []
        self.highest_generated_y = float(START_PLATFORM_Y)
        self.spawn_initial()

    def spawn_initial(self):
        start = Platform(x=WIDTH / 2 - START_PLATFORM_W / 2, y=float(START_PLATFORM_Y),
                         width=START_PLATFORM_W)
        self.platforms.append(start)
        self.highest_generated_y = start.y

        y = start.y - START_GAP
        for i in range(INITIAL_PLATFORMS):
            if i > 0:
                y -= self._rand_gap()
            self._add_platform(y)

    def _rand_gap(self) -> float:
        return self.rng.uniform(self.gap_min, self.gap_max)

    def _add_platform(self, y: float) -> Platform:
        w = self.rng.uniform(PLATFORM_MIN_W, PLATFORM_MAX_W)
        x = self.rng.uniform(PLATFORM_EDGE_MARGIN, WIDTH - w - PLATFORM_EDGE_MARGIN)
        kind = PlatformKind.STATIC
        vx = 0.0
        if self.rng.random() < self.oscillating_chance:
            kind = PlatformKind.OSCILLATING
            vx = OSCILLATING_SPEED if self.rng.random() < 0.5 else -OSCILLATING_SPEED
        plat = Platform(x=x, y=y, width=w, kind=kind, vx=vx)
        self.platforms.append(plat)
        self.highest_generated_y = min(self.highest_generated_y, y)
        return plat

    def generate_above(self, camera_y: float) -> int:
        """Top up the field until a platform sits at or above camera_y - LOOKAHEAD."""
        target_y = camera_y - LOOKAHEAD
        deficit = self.highest_generated_y - target_y
        if deficit <= 0:
            return 0

        if self.gap_min <= 0:
            raise GenerationError(
                f"gap range [{self.gap_min}, {self.gap_max}] cannot climb "
                f"from y={self.highest_generated_y:.1f} to {target_y:.1f}"
            )
        # Each step climbs at least gap_min
        max_steps = int(math.ceil(deficit / self.gap_min)) + 1
        created = 0
        while self.highest_generated_y > target_y:
            if created >= max_steps:
                raise GenerationError(
                    f"generation stalled at y={self.highest_generated_y:.1f} "
                    f"(target {target_y:.1f}) after {created} platforms; "
                    f"gap range [{self.gap_min}, {self.gap_max}]"
                )
            self._add_platform(self.highest_generated_y - self._rand_gap())
            created += 1
        logger.debug("generated %d platforms, top y=%.1f", created, self.highest_generated_y)
        return created

    def update(self):
        for platform in self.platforms:
            platform.update_movement()

    def cull_below(self, camera_y: float) -> int:
        """Drop platforms that can no longer be reached below the viewport."""
        cutoff = camera_y + HEIGHT + CULL_MARGIN
        before = len(self.platforms)
        self.platforms = [p for p in self.platforms if p.y <= cutoff]
        return before - len(self.platforms)

