# stickjump/game/input.py
from __future__ import annotations
import logging
from typing import Awaitable, Callable, Optional, Tuple
import pygame
from .config import (
    WIDTH, HEIGHT, TILT_DEADZONE, TILT_MAX, TILT_BTN,
    OVERLAY_BTN_LEFT, OVERLAY_BTN_RIGHT
)
from .player import InputState, NO_INPUT  # noqa: F401

logger = logging.getLogger(__name__)

LEFT_KEYS = (pygame.K_LEFT, pygame.K_a)
RIGHT_KEYS = (pygame.K_RIGHT, pygame.K_d)
CONFIRM_KEYS = (pygame.K_SPACE, pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_r)


def _in_rect(pos: Tuple[float, float], rect: Tuple[int, int, int, int]) -> bool:
    x, y = pos
    rx, ry, rw, rh = rect
    return rx <= x <= rx + rw and ry <= y <= ry + rh


class InputAggregator:
    """
    Merges keyboard, pointer (half-screen), on-screen buttons and tilt into
    one InputState plus one-shot confirm edges.

    Priority when sampling:
      1. on-screen buttons, when either is held
      2. tilt, only when enabled (beyond the deadzone)
      3. keyboard OR pointer
    """

    def __init__(self, deadzone: float = TILT_DEADZONE):
        self.keys_left = False
        self.keys_right = False
        self.pointer_left = False
        self.pointer_right = False
        self.overlay_left = False
        self.overlay_right = False
        self.tilt_enabled = False
        self.tilt_gamma = 0.0
        self.deadzone = float(deadzone)
        self._confirm = False

    # --- raw sources ---
    def set_key(self, key: int, down: bool):
        if key in LEFT_KEYS:
            self.keys_left = down
        elif key in RIGHT_KEYS:
            self.keys_right = down
        if down and key in CONFIRM_KEYS:
            self._confirm = True

    def press_pointer(self, x: float, width: float = WIDTH):
        # Half-screen touch is ignored while tilt steers
        if self.tilt_enabled:
            return
        self.pointer_left = x < width / 2
        self.pointer_right = not self.pointer_left

    def release_pointer(self):
        self.pointer_left = False
        self.pointer_right = False

    def set_overlay(self, side: str, active: bool):
        if side == "left":
            self.overlay_left = bool(active)
        elif side == "right":
            self.overlay_right = bool(active)
        else:
            raise ValueError(f"Unknown overlay side: {side!r}")

    def set_tilt(self, gamma: float):
        self.tilt_gamma = max(-TILT_MAX, min(TILT_MAX, float(gamma)))

    def confirm(self):
        self._confirm = True

    # --- consumers ---
    def pop_confirm(self) -> bool:
        """Return and clear the pending confirm edge."""
        fired = self._confirm
        self._confirm = False
        return fired

    def sample(self) -> InputState:
        if self.overlay_left or self.overlay_right:
            return InputState(left=self.overlay_left, right=self.overlay_right)
        if self.tilt_enabled:
            g = self.tilt_gamma
            return InputState(left=g < -self.deadzone, right=g > self.deadzone)
        return InputState(
            left=self.keys_left or self.pointer_left,
            right=self.keys_right or self.pointer_right,
        )

    async def toggle_tilt(self, request_permission: Optional[Callable[[], Awaitable[bool]]] = None) -> bool:
        """
        Enable or disable tilt steering. Enabling awaits the permission request;
        a denial or a failing request leaves tilt disabled.
        Returns the resulting tilt_enabled flag.
        """
        if not self.tilt_enabled and request_permission is not None:
            try:
                granted = bool(await request_permission())
            except Exception as e:
                logger.warning("Tilt permission request failed: %s", e)
                granted = False
            if not granted:
                logger.info("Tilt permission denied; keeping other input sources")
                return False
        self.tilt_enabled = not self.tilt_enabled
        if not self.tilt_enabled:
            self.release_pointer()
        logger.info("Tilt steering %s", "enabled" if self.tilt_enabled else "disabled")
        return self.tilt_enabled

    # --- pygame plumbing ---
    def handle_event(self, event: pygame.event.Event, screen_size: Tuple[int, int] = (WIDTH, HEIGHT)) -> bool:
        """
        Feed one pygame event. Returns True when the event asks for a tilt toggle
        (the caller schedules toggle_tilt so the frame loop never blocks).
        """
        if event.type == pygame.KEYDOWN:
            self.set_key(event.key, True)
        elif event.type == pygame.KEYUP:
            self.set_key(event.key, False)
        elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP) and getattr(event, "touch", False):
            # Synthesized from a touch; the FINGER event already handled it
            return False
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            return self._press_at(event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self._release_all_pointers()
        elif event.type == pygame.FINGERDOWN:
            # Finger coordinates are normalized to [0, 1]
            return self._press_at((event.x * screen_size[0], event.y * screen_size[1]))
        elif event.type == pygame.FINGERUP:
            self._release_all_pointers()
        elif event.type == pygame.JOYAXISMOTION and event.axis == 0:
            self.set_tilt(event.value * TILT_MAX)
        return False

    def _press_at(self, pos: Tuple[float, float]) -> bool:
        if _in_rect(pos, TILT_BTN):
            return True
        if _in_rect(pos, OVERLAY_BTN_LEFT):
            self.set_overlay("left", True)
            return False
        if _in_rect(pos, OVERLAY_BTN_RIGHT):
            self.set_overlay("right", True)
            return False
        self.press_pointer(pos[0])
        self.confirm()
        return False

    def _release_all_pointers(self):
        self.release_pointer()
        self.overlay_left = False
        self.overlay_right = False
