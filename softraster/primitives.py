"""Elementary drawing operations."""

from __future__ import annotations

from softraster.tga import TGAColor, TGAImage


def draw_point(image: TGAImage, x: int, y: int, color: TGAColor) -> None:
    """Paint a single pixel; points outside the image are ignored."""
    image.set(x, y, color)