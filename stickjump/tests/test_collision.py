# stickjump/tests/test_collision.py
"""
One-way landing rules.

Usage (from repo root):
  pytest stickjump/tests/test_collision.py
  python -m stickjump.tests.test_collision
"""
from __future__ import annotations

from stickjump.game.config import PLAYER_H, JUMP_SPEED, PLATFORM_H, LANDING_TOLERANCE
from stickjump.game.collision import resolve_landing
from stickjump.game.level import Platform
from stickjump.game.player import Player


def _falling_player(bottom_y: float, vy: float, x: float = 100.0) -> Player:
    """Player whose bottom edge is at bottom_y after this tick's fall of vy."""
    return Player(x=x, y=bottom_y - PLAYER_H, vy=vy)


def test_lands_and_snaps():
    plat = Platform(x=90.0, y=100.0, width=60.0)
    p = _falling_player(bottom_y=103.0, vy=6.0)
    assert resolve_landing(p, [plat]) is plat
    assert p.y == 100.0 - PLAYER_H
    assert p.vy == -JUMP_SPEED


def test_first_in_order_wins():
    a = Platform(x=80.0, y=100.0, width=60.0)
    b = Platform(x=90.0, y=100.0, width=60.0)
    p = _falling_player(bottom_y=102.0, vy=4.0)
    assert resolve_landing(p, [a, b]) is a

    p = _falling_player(bottom_y=102.0, vy=4.0)
    assert resolve_landing(p, [b, a]) is b


def test_first_match_not_best_match():
    lower = Platform(x=80.0, y=100.0, width=60.0)
    higher = Platform(x=80.0, y=95.0, width=60.0)
    p = _falling_player(bottom_y=102.0, vy=8.0)
    assert resolve_landing(p, [lower, higher]) is lower
    assert p.y == 100.0 - PLAYER_H


def test_no_landing_while_ascending():
    plat = Platform(x=90.0, y=100.0, width=60.0)
    for vy in (-3.0, 0.0):
        p = _falling_player(bottom_y=104.0, vy=vy)
        y_before = p.y
        assert resolve_landing(p, [plat]) is None
        assert p.vy == vy
        assert p.y == y_before


def test_started_below_top_is_ignored():
    plat = Platform(x=90.0, y=100.0, width=60.0)
    # previous bottom = 110 - 5 = 105, already under the surface
    p = _falling_player(bottom_y=110.0, vy=5.0)
    assert resolve_landing(p, [plat]) is None
    assert p.vy == 5.0


def test_band_includes_tolerance():
    plat = Platform(x=90.0, y=100.0, width=60.0)
    deepest = 100.0 + PLATFORM_H + LANDING_TOLERANCE
    p = _falling_player(bottom_y=deepest, vy=deepest - 100.0)
    assert resolve_landing(p, [plat]) is plat

    p = _falling_player(bottom_y=deepest + 1.0, vy=deepest + 1.0 - 100.0)
    assert resolve_landing(p, [plat]) is None


def test_touching_edges_do_not_land():
    plat = Platform(x=100.0, y=100.0, width=60.0)
    # player spans [76, 100]: right edge touches platform left edge
    p = _falling_player(bottom_y=103.0, vy=6.0, x=76.0)
    assert resolve_landing(p, [plat]) is None
    # player spans [160, 184]: left edge touches platform right edge
    p = _falling_player(bottom_y=103.0, vy=6.0, x=160.0)
    assert resolve_landing(p, [plat]) is None


def main():
    import argparse
    argparse.ArgumentParser(description=__doc__).parse_args()
    for name, fn in sorted(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
            print(f"✓ {name}")
    print("🎉 Collision checks passed")


if __name__ == "__main__":
    main()
