# render.py
from typing import Optional, Tuple
import pygame # type: ignore

from .config import (
    TILE_SIZE, BORDER_SIZE,
    BG, TILE_COLORS, TAIL_COLORS, HEAD_COLOR, FRUIT_COLOR, TEXT,
    HEAD_SCALE, TAIL_SCALE, FRUIT_SCALE,
)
from .simulation import GameStatus, Simulation

Color = Tuple[int, int, int]


# ---------- Helpers ----------
def tile_rect(gx: int, gy: int, scale: float = 1.0) -> pygame.Rect:
    """Pixel rect of grid cell (gx, gy), shrunk to `scale` and kept centred."""
    size = round(scale * TILE_SIZE)
    pad = (TILE_SIZE - size) // 2
    return pygame.Rect(
        BORDER_SIZE + gx * TILE_SIZE + pad,
        BORDER_SIZE + gy * TILE_SIZE + pad,
        size,
        size,
    )

def draw_cell(screen: pygame.Surface, gx: int, gy: int, color: Color, scale: float = 1.0) -> None:
    pygame.draw.rect(screen, color, tile_rect(gx, gy, scale))

def checker_color(gx: int, gy: int) -> Color:
    return TILE_COLORS[0] if (gx + gy) % 2 == 0 else TILE_COLORS[1]


# ---------- Draw ----------
def draw_simulation(
    screen: pygame.Surface,
    sim: Simulation,
    font: Optional[pygame.font.Font] = None,
) -> None:
    screen.fill(BG)
    # board
    for y in range(sim.height):
        for x in range(sim.width):
            draw_cell(screen, x, y, checker_color(x, y))
    # head & fruit
    draw_cell(screen, sim.head.x, sim.head.y, HEAD_COLOR, HEAD_SCALE)
    draw_cell(screen, sim.fruit.x, sim.fruit.y, FRUIT_COLOR, FRUIT_SCALE)
    # tail, alternating shades
    for i, (x, y) in enumerate(sim.tail):
        draw_cell(screen, x, y, TAIL_COLORS[i % 2], TAIL_SCALE)

    if font is not None:
        label = f"Score: {sim.score}"
        if sim.status is not GameStatus.RUNNING:
            label += f"  ({sim.status.value.upper()})"
        txt = font.render(label, True, TEXT)
        screen.blit(txt, (BORDER_SIZE, 0))
