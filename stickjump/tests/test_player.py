# stickjump/tests/test_player.py
"""
Unit checks for Player motion and the Box bound helpers.

Usage (from repo root):
  pytest stickjump/tests/test_player.py
  python -m stickjump.tests.test_player
"""
from __future__ import annotations
import subprocess
import sys
from pathlib import Path
import pytest

from stickjump.game.config import WIDTH, PLAYER_W, GRAVITY, ACCEL_X, FRICTION_X, MAX_VX, JUMP_SPEED
from stickjump.game.player import InputState
from stickjump.game.player import Box, Facing, Player, left, right, top, bottom, overlaps_x


def test_box_bounds():
    b = Box(1.0, 2.0, 3.0, 4.0)
    assert (left(b), right(b), top(b), bottom(b)) == (1.0, 4.0, 2.0, 6.0)
    # touching edges do not overlap
    assert not overlaps_x(Box(0, 0, 10, 1), Box(10, 0, 10, 1))
    assert overlaps_x(Box(0, 0, 10.5, 1), Box(10, 0, 10, 1))


def test_accel_sets_facing_and_integrates():
    p = Player(x=100.0, y=100.0)
    p.update(InputState(right=True))
    assert p.vx == pytest.approx(ACCEL_X)
    assert p.x == pytest.approx(100.0 + ACCEL_X)
    assert p.vy == pytest.approx(GRAVITY)
    assert p.y == pytest.approx(100.0 + GRAVITY)
    assert p.facing is Facing.RIGHT

    p.update(InputState(left=True))
    assert p.facing is Facing.LEFT
    assert p.vx == pytest.approx(0.0)


def test_speed_clamped():
    p = Player(x=0.0, y=0.0)
    for _ in range(30):
        p.update(InputState(left=True))
    assert p.vx == -MAX_VX


def test_friction_when_none_or_both():
    for inp in (InputState(), InputState(left=True, right=True)):
        p = Player(x=200.0, y=0.0, vx=5.0)
        p.update(inp)
        assert p.vx == pytest.approx(5.0 * FRICTION_X)
        assert p.facing is Facing.RIGHT


def test_gravity_is_unbounded():
    p = Player(x=200.0, y=0.0)
    for _ in range(1000):
        p.update(InputState())
    assert p.vy == pytest.approx(1000 * GRAVITY)


def test_wrap_left_to_right():
    p = Player(x=-PLAYER_W - 1.0, y=0.0)
    p.update(InputState())
    assert p.x == WIDTH


def test_wrap_right_to_left():
    p = Player(x=WIDTH + 1.0, y=0.0)
    p.update(InputState())
    assert p.x == -PLAYER_W


def test_bounce_overwrites_velocity():
    p = Player(x=0.0, y=0.0, vy=3.0)
    p.bounce()
    assert p.vy == -JUMP_SPEED
    p.bounce()
    assert p.vy == -JUMP_SPEED


def test_highest_y_only_decreases():
    p = Player(x=0.0, y=500.0)
    assert p.highest_y == 500.0
    p.bounce()
    seen = [p.y]
    prev_highest = p.highest_y
    for _ in range(100):
        p.update(InputState())
        seen.append(p.y)
        assert p.highest_y <= prev_highest
        prev_highest = p.highest_y
    assert p.highest_y == min(seen)
    assert p.y > p.highest_y  # fell back down after the apex


def test_core_imports_without_pygame():
    repo_root = Path(__file__).resolve().parents[2]
    code = (
        "import sys; sys.modules['pygame'] = None\n"
        "import stickjump.game.simulation\n"
        "assert 'stickjump.game.input' not in sys.modules\n"
    )
    proc = subprocess.run([sys.executable, "-c", code], cwd=repo_root,
                          capture_output=True, text=True)
    assert proc.returncode == 0, proc.stderr


def main():
    import argparse
    argparse.ArgumentParser(description=__doc__).parse_args()
    for name, fn in sorted(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
            print(f"✓ {name}")
    print("🎉 Player checks passed")


if __name__ == "__main__":
    main()
