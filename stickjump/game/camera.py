# stickjump/game/camera.py
from __future__ import annotations
import math
from dataclasses import dataclass
from .config import CAMERA_RAISE_THRESHOLD


@dataclass
class Camera:
    """Upward-only vertical scroll. camera_y never increases."""
    camera_y: float = 0.0
    max_camera_y: float = 0.0
    score: int = 0
    threshold: float = CAMERA_RAISE_THRESHOLD

    def follow(self, player_y: float) -> float:
        """Raise the camera so the player never sits above the threshold line. Returns the raise."""
        screen_y = player_y - self.camera_y
        delta = 0.0
        if screen_y < self.threshold:
            delta = self.threshold - screen_y
            self.camera_y -= delta
            if self.camera_y < self.max_camera_y:
                self.max_camera_y = self.camera_y
        self.score = max(self.score, int(math.floor(-self.max_camera_y)))
        return delta

    def to_screen(self, world_y: float) -> float:
        return world_y - self.camera_y
