# stickjump/game/simulation.py
from __future__ import annotations
import enum
import logging
from dataclasses import dataclass
from typing import Optional, Tuple
from .config import HEIGHT, SPAWN_X, SPAWN_Y, GAMEOVER_MARGIN
from .camera import Camera
from .collision import resolve_landing
from .level import PlatformField, PlatformKind
from .player import Box, Facing, InputState, NO_INPUT, Player

logger = logging.getLogger(__name__)


class GameState(enum.Enum):
    MENU = "menu"
    PLAY = "play"
    GAMEOVER = "gameover"


@dataclass(frozen=True)
class PlatformView:
    x: float
    y: float
    width: float
    height: float
    kind: PlatformKind


@dataclass(frozen=True)
class Snapshot:
    """Read-only per-frame view handed to the renderer."""
    state: GameState
    player: Box
    facing: Facing
    platforms: Tuple[PlatformView, ...]
    camera_y: float
    score: int


class Simulation:
    """
    Deterministic game core: one call to step() is one fixed tick.

    MENU --confirm--> PLAY --fall--> GAMEOVER --confirm--> PLAY
    Leaving MENU or GAMEOVER always goes through reset(). The first game
    plays the launch seed; every restart after GAMEOVER gets a new layout
    drawn from the field's RNG. MENU and GAMEOVER run no physics.
    """

    def __init__(self, seed: int | None = None):
        self.field = PlatformField(seed)
        self.seed = self.field.seed
        self.player = self._spawn_player()
        self.camera = Camera()
        self.state = GameState.MENU
        self.ticks = 0          # PLAY ticks since the last reset
        self.landings = 0       # bounces since the last reset

    @staticmethod
    def _spawn_player() -> Player:
        return Player(x=float(SPAWN_X), y=float(SPAWN_Y))

    @property
    def score(self) -> int:
        return self.camera.score

    def reset(self, seed: Optional[int] = None):
        """Rebuild player, field and camera; enter PLAY. Pass seed to replay a layout."""
        self.field.reset(seed)
        self.seed = self.field.seed
        self.player = self._spawn_player()
        self.camera = Camera()
        self.ticks = 0
        self.landings = 0
        self._set_state(GameState.PLAY)

    def _set_state(self, state: GameState):
        if state is not self.state:
            logger.info("State %s -> %s (seed=%s, score=%d)",
                        self.state.value, state.value, self.seed, self.camera.score)
        self.state = state

    def step(self, inp: InputState = NO_INPUT, confirm: bool = False) -> GameState:
        """Run one fixed tick and return the resulting state."""
        if self.state is GameState.MENU:
            if confirm:
                self.reset(seed=self.seed)
            return self.state
        if self.state is GameState.GAMEOVER:
            if confirm:
                self.reset()
            return self.state

        self.player.update(inp)
        self.field.update()

        if resolve_landing(self.player, self.field.platforms) is not None:
            self.landings += 1

        self.camera.follow(self.player.y)
        self.field.generate_above(self.camera.camera_y)
        self.field.cull_below(self.camera.camera_y)
        self.ticks += 1

        if self.player.y - self.camera.camera_y > HEIGHT + GAMEOVER_MARGIN:
            self._set_state(GameState.GAMEOVER)
        return self.state

    def snapshot(self) -> Snapshot:
        return Snapshot(
            state=self.state,
            player=self.player.box,
            facing=self.player.facing,
            platforms=tuple(
                PlatformView(p.x, p.y, p.width, p.height, p.kind) for p in self.field.platforms
            ),
            camera_y=self.camera.camera_y,
            score=self.camera.score,
        )
