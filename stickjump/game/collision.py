# stickjump/game/collision.py
from __future__ import annotations
from typing import Iterable, Optional
from .config import LANDING_TOLERANCE
from .level import Platform
from .player import Player, bottom, overlaps_x


def resolve_landing(player: Player, platforms: Iterable[Platform]) -> Optional[Platform]:
    """
    One-way landing, checked only while descending (vy > 0).
    The first platform in iteration order that passes all three tests wins:
      - was_above: bottom before this tick's fall (bottom - vy) was at or above the top
      - now_in_band: bottom lies in [top, top + height + LANDING_TOLERANCE]
      - overlaps_x: strict horizontal overlap
    The player is snapped onto that platform and bounced. Returns it, or None.
    """
    if player.vy <= 0:
        return None

    me = player.box
    me_bottom = bottom(me)
    prev_bottom = me_bottom - player.vy

    for p in platforms:
        was_above = prev_bottom <= p.y
        now_in_band = p.y <= me_bottom <= p.y + p.height + LANDING_TOLERANCE
        if was_above and now_in_band and overlaps_x(me, p.box):
            player.y = p.y - player.height
            player.bounce()
            return p
    return None
