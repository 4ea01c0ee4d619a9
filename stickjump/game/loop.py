# stickjump/game/loop.py
from __future__ import annotations
from typing import Callable
from .config import SIM_DT, MAX_FRAME_S


class FixedStepScheduler:
    """
    Fixed-timestep accumulator: wall-clock time goes in, whole ticks come out.
    Render only after advance() returns, never between two ticks of one drain.
    """
    def __init__(self, step_s: float = SIM_DT, max_frame_s: float = MAX_FRAME_S):
        assert step_s > 0, "step_s must be > 0"
        self.step_s = float(step_s)
        self.max_frame_s = float(max_frame_s)
        self.accumulator = 0.0
        self.total_ticks = 0

    def advance(self, elapsed_s: float, tick: Callable[[], object]) -> int:
        """Feed elapsed seconds and run as many ticks as fit. Returns the tick count."""
        if elapsed_s < 0:
            elapsed_s = 0.0
        # clamp stalls (window drag, breakpoint) so we don't spiral
        if elapsed_s > self.max_frame_s:
            elapsed_s = self.max_frame_s
        self.accumulator += elapsed_s

        n = 0
        while self.accumulator >= self.step_s:
            tick()
            self.accumulator -= self.step_s
            n += 1
        self.total_ticks += n
        return n

    @property
    def alpha(self) -> float:
        """Leftover fraction of a step, in [0, 1)."""
        return self.accumulator / self.step_s
