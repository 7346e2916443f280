import pygame

from gridsnake import Config, Position, Simulation
from gridsnake.config import BG, FRUIT_COLOR, HEAD_COLOR, TAIL_COLORS, TILE_COLORS
from gridsnake.render import checker_color, draw_simulation, tile_rect


def rgb(surface, point):
    return tuple(surface.get_at(point))[:3]


def test_tile_rect_full_and_scaled():
    assert tile_rect(0, 0) == pygame.Rect(10, 10, 50, 50)
    assert tile_rect(1, 2, 0.5) == pygame.Rect(72, 122, 25, 25)


def test_checkerboard_alternates():
    assert checker_color(0, 0) == TILE_COLORS[0]
    assert checker_color(1, 0) == TILE_COLORS[1]
    assert checker_color(1, 1) == TILE_COLORS[0]


def test_window_size_includes_border():
    assert Config(width=10, height=4).window_size() == (520, 220)


def test_draws_head_fruit_and_tail(scripted):
    sim = Simulation(5, 5, rng=scripted([3, 2, 0]))
    sim.advance_tick(0)  # eat the fruit at (3, 2): tail = [(2, 2)], next fruit (0, 0)
    assert sim.tail == (Position(2, 2),)

    surface = pygame.Surface(Config(width=5, height=5).window_size())
    draw_simulation(surface, sim)

    assert rgb(surface, (0, 0)) == BG
    assert rgb(surface, tile_rect(3, 2).center) == HEAD_COLOR
    assert rgb(surface, tile_rect(0, 0).center) == FRUIT_COLOR
    assert rgb(surface, tile_rect(2, 2).center) == TAIL_COLORS[0]
    # outside the scaled square the board colour shows through
    assert rgb(surface, tile_rect(0, 0).topleft) == checker_color(0, 0)
    assert rgb(surface, tile_rect(4, 4).center) == checker_color(4, 4)
