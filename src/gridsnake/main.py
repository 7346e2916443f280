# main.py
from __future__ import annotations
import argparse
import logging
from typing import List, Optional
import pygame # type: ignore

from .config import Config, Direction, FPS, GRID_W, GRID_H, TICK_MS
from .simulation import ConstructionError, GameStatus, Simulation
from .autopilot import choose_direction
from .render import draw_simulation

KEY_TO_DIRECTION = {
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
}


def report(sim: Simulation, ticks: int) -> None:
    print(f"[GAME] status={sim.status.value} score={sim.score} ticks={ticks}")


# --------------------------
# Headless loop (autopilot, no window)
# --------------------------
def run_headless(cfg: Config, max_ticks: int = 10_000) -> Simulation:
    """
    Drive a Simulation with the autopilot until it ends or max_ticks steps ran.
    Every call hands over exactly one tick's worth of time, so each call steps.
    """
    sim = Simulation(cfg.width, cfg.height, rng=cfg.make_rng(), tick_ms=cfg.tick_ms)
    ticks = 0
    # The accumulator starts full: the first step costs no time
    elapsed = 0
    while sim.status is GameStatus.RUNNING and ticks < max_ticks:
        sim.handle_direction_input(choose_direction(sim))
        if sim.advance_tick(elapsed):
            ticks += 1
        elapsed = cfg.tick_ms
    report(sim, ticks)
    return sim


# --------------------------
# Windowed loop (pygame)
# --------------------------
def run(cfg: Config) -> Simulation:
    sim = Simulation(cfg.width, cfg.height, rng=cfg.make_rng(), tick_ms=cfg.tick_ms)

    pygame.init()
    font = pygame.font.SysFont(None, 24)
    screen = pygame.display.set_mode(cfg.window_size())
    pygame.display.set_caption("Snake")
    clock = pygame.time.Clock()
    ticks = 0
    elapsed = 0
    running = True

    while running:
        # 1) input
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key in KEY_TO_DIRECTION:
                sim.handle_direction_input(KEY_TO_DIRECTION[event.key])
        if cfg.autopilot and sim.status is GameStatus.RUNNING:
            sim.handle_direction_input(choose_direction(sim))

        # 2) update; terminal states just keep the last frame up
        if sim.advance_tick(elapsed):
            ticks += 1

        # 3) render
        draw_simulation(screen, sim, font)
        pygame.display.flip()
        elapsed = clock.tick(cfg.fps)  # ms since the previous frame

    pygame.quit()
    report(sim, ticks)
    return sim


# --------------------------
# Main
# --------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Grid snake")
    parser.add_argument("--width", type=int, default=GRID_W)
    parser.add_argument("--height", type=int, default=GRID_H)
    parser.add_argument("--tick-ms", type=int, default=TICK_MS, help="ms per grid step")
    parser.add_argument("--seed", type=int, default=None, help="seed for fruit placement")
    parser.add_argument("--fps", type=int, default=FPS)
    parser.add_argument(
        "--autopilot",
        action="store_true",
        help="let the greedy autopilot steer",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="no window; autopilot plays until the game ends or --max-ticks",
    )
    parser.add_argument("--max-ticks", type=int, default=10_000)
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    cfg = Config(
        width=args.width,
        height=args.height,
        tick_ms=args.tick_ms,
        seed=args.seed,
        fps=args.fps,
        autopilot=args.autopilot or args.headless,
    )

    try:
        if args.headless:
            run_headless(cfg, args.max_ticks)
        else:
            run(cfg)
    except ConstructionError as exc:
        parser.error(str(exc))  # exits with status 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
