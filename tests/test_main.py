import pygame
import pytest

from gridsnake import Direction
from gridsnake.config import FPS, GRID_H, GRID_W, TICK_MS
from gridsnake.main import KEY_TO_DIRECTION, build_parser, main


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert (args.width, args.height) == (GRID_W, GRID_H)
    assert args.tick_ms == TICK_MS
    assert args.fps == FPS
    assert args.seed is None
    assert not args.headless and not args.autopilot


def test_arrow_keys_map_to_directions():
    assert KEY_TO_DIRECTION[pygame.K_UP] is Direction.UP
    assert KEY_TO_DIRECTION[pygame.K_LEFT] is Direction.LEFT
    assert set(KEY_TO_DIRECTION.values()) == set(Direction)


def test_headless_main(capsys):
    rc = main(["--headless", "--width", "6", "--height", "6", "--seed", "3", "--max-ticks", "50"])
    assert rc == 0
    assert capsys.readouterr().out.startswith("[GAME] status=")


def test_too_small_grid_is_a_usage_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--headless", "--width", "1", "--height", "1"])
    assert excinfo.value.code == 2
    assert "too small" in capsys.readouterr().err
