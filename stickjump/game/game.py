# stickjump/game/game.py
import argparse
import asyncio
import logging
import random
import sys
import pygame
from pygame import K_ESCAPE, K_n, K_r
from .config import (
    WIDTH, HEIGHT, FPS, SEED_DEFAULT, TILT_BTN, OVERLAY_BTN_LEFT, OVERLAY_BTN_RIGHT,
    COLOR_BG, COLOR_GRID, COLOR_FG, COLOR_PLAT, COLOR_PLAT_MOVING
)
from .input import InputAggregator
from .level import PlatformKind
from .loop import FixedStepScheduler
from .player import Facing
from .simulation import GameState, Simulation, Snapshot

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Stick Jump: endless vertical platformer")
    p.add_argument("--seed", type=int, default=None,
                   help="Level seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--log-level", type=str, default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


async def joystick_permission() -> bool:
    """Tilt is read from joystick axis 0; grant only when a joystick is attached."""
    await asyncio.sleep(0)
    if pygame.joystick.get_count() == 0:
        return False
    pygame.joystick.Joystick(0).init()
    return True


# ---------------------------- Rendering ----------------------------

def draw_background(screen: pygame.Surface):
    screen.fill(COLOR_BG)
    for y in range(0, HEIGHT, 24):
        pygame.draw.line(screen, COLOR_GRID, (0, y), (WIDTH, y), 1)


def draw_platforms(screen: pygame.Surface, snap: Snapshot):
    for p in snap.platforms:
        sx, sy = int(p.x), int(p.y - snap.camera_y)
        if sy < -p.height or sy > HEIGHT:
            continue
        color = COLOR_PLAT_MOVING if p.kind is PlatformKind.OSCILLATING else COLOR_PLAT
        pygame.draw.line(screen, color, (sx, sy), (sx + int(p.width), sy), 2)
        pygame.draw.line(screen, (235, 235, 235), (sx, sy + 3), (sx + int(p.width), sy + 3), 1)


def draw_stick_figure(screen: pygame.Surface, snap: Snapshot):
    b = snap.player
    sx, sy = int(b.x), int(b.y - snap.camera_y)
    face = 1 if snap.facing is Facing.RIGHT else -1
    cx = sx + b.width // 2
    head_y = sy + 10
    pygame.draw.circle(screen, COLOR_BG, (cx, head_y), 8)
    pygame.draw.circle(screen, COLOR_FG, (cx, head_y), 8, 2)

    body_top, body_bot = head_y + 8, sy + int(b.height) - 8
    pygame.draw.line(screen, COLOR_FG, (cx, body_top), (cx, body_bot), 2)
    arm_y = body_top + 8
    pygame.draw.line(screen, COLOR_FG, (cx, arm_y), (cx + 14 * face, arm_y - 4), 2)
    pygame.draw.line(screen, COLOR_FG, (cx, arm_y), (cx - 14 * face, arm_y + 2), 2)
    pygame.draw.line(screen, COLOR_FG, (cx, body_bot), (cx - 8, body_bot + 14), 2)
    pygame.draw.line(screen, COLOR_FG, (cx, body_bot), (cx + 8, body_bot + 12), 2)


def draw_ui(screen: pygame.Surface, snap: Snapshot, font, big_font, tilt_enabled: bool):
    screen.blit(big_font.render(f"Score: {snap.score}", True, COLOR_FG), (12, 10))

    tilt_rect = pygame.Rect(*TILT_BTN)
    pygame.draw.rect(screen, COLOR_BG, tilt_rect)
    pygame.draw.rect(screen, COLOR_FG, tilt_rect, width=1)
    txt = font.render("Tilt: on" if tilt_enabled else "Tilt: off", True, COLOR_FG)
    screen.blit(txt, (tilt_rect.centerx - txt.get_width() // 2, tilt_rect.centery - txt.get_height() // 2))

    for rect, label in ((OVERLAY_BTN_LEFT, "<"), (OVERLAY_BTN_RIGHT, ">")):
        r = pygame.Rect(*rect)
        pygame.draw.rect(screen, (200, 200, 200), r, width=2, border_radius=10)
        t = big_font.render(label, True, (150, 150, 150))
        screen.blit(t, (r.centerx - t.get_width() // 2, r.centery - t.get_height() // 2))

    if snap.state is GameState.MENU:
        panel = pygame.Rect(40, 160, WIDTH - 80, HEIGHT - 320)
        pygame.draw.rect(screen, (250, 250, 250), panel)
        pygame.draw.rect(screen, COLOR_FG, panel, width=2)
        lines = ["Stick Jump",
                 "Left/Right, A/D or tap a screen half",
                 "Toggle tilt with the top-right button",
                 "Start: Space / Enter / tap"]
        for i, msg in enumerate(lines):
            f = big_font if i == 0 else font
            t = f.render(msg, True, COLOR_FG)
            screen.blit(t, (WIDTH // 2 - t.get_width() // 2, 210 + i * 34))

    if snap.state is GameState.GAMEOVER:
        shade = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 140))
        screen.blit(shade, (0, 0))
        for i, msg in enumerate(("Game over", f"Best height: {snap.score}",
                                 "Next: Enter / Space / tap   Replay: R   New seed: N")):
            f = big_font if i == 0 else font
            t = f.render(msg, True, (255, 255, 255))
            screen.blit(t, (WIDTH // 2 - t.get_width() // 2, HEIGHT // 2 - 40 + i * 36))


def render(screen, snap: Snapshot, font, big_font, tilt_enabled: bool):
    draw_background(screen)
    draw_platforms(screen, snap)
    draw_stick_figure(screen, snap)
    draw_ui(screen, snap, font, big_font, tilt_enabled)


# ---------------------------- Main loop ----------------------------

async def run_async(launch_seed):
    pygame.init()
    pygame.display.set_caption("Stick Jump")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("system-ui", 18)
    big_font = pygame.font.SysFont("system-ui", 26, bold=True)

    sim = Simulation(launch_seed)
    inputs = InputAggregator()
    scheduler = FixedStepScheduler()
    pending_toggle = None
    logger.info("Stick Jump started (seed=%s)", sim.seed)

    def tick():
        # Confirm edges are only consumed on a tick so none is lost between frames
        sim.step(inputs.sample(), inputs.pop_confirm())

    while True:
        elapsed = clock.tick(FPS) / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key == K_n and sim.state is GameState.GAMEOVER:
                    # Restart with NEW RANDOM seed
                    sim.reset(seed=random.randrange(0, 2**32 - 1))
                    continue
                if event.key == K_r and sim.state is GameState.GAMEOVER:
                    # Replay the same layout
                    sim.reset(seed=sim.seed)
                    continue
            if event.type == pygame.JOYDEVICEADDED:
                pygame.joystick.Joystick(event.device_index).init()
            wants_toggle = inputs.handle_event(event, screen.get_size())
            if wants_toggle and (pending_toggle is None or pending_toggle.done()):
                pending_toggle = asyncio.ensure_future(inputs.toggle_tilt(joystick_permission))

        scheduler.advance(elapsed, tick)
        render(screen, sim.snapshot(), font, big_font, inputs.tilt_enabled)
        pygame.display.flip()
        await asyncio.sleep(0)


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    # Resolve seed: None -> use SEED_DEFAULT; -1 -> random
    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None  # signals PlatformField to randomize
    else:
        launch_seed = args.seed

    asyncio.run(run_async(launch_seed))


if __name__ == "__main__":
    run()
