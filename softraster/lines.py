"""Straight line rasterisation."""

from __future__ import annotations

from softraster.geometry import Vec3
from softraster.primitives import draw_point
from softraster.tga import TGAColor, TGAImage


def _plot(image: TGAImage, x: int, y: int, steep: bool, color: TGAColor) -> None:
    if steep:
        draw_point(image, y, x, color)
    else:
        draw_point(image, x, y, color)


def draw_line(
    x0: int, y0: int, x1: int, y1: int, image: TGAImage, color: TGAColor
) -> None:
    """Draw a line between two integer points, one pixel per step of the long axis."""
    x0, y0, x1, y1 = int(x0), int(y0), int(x1), int(y1)
    steep = abs(x0 - x1) < abs(y0 - y1)
    if steep:
        x0, y0, x1, y1 = y0, x0, y1, x1
    if x0 > x1:
        x0, y0, x1, y1 = x1, y1, x0, y0
    span = x1 - x0
    for x in range(x0, x1 + 1):
        t = (x - x0) / span if span else 0.0
        y = int(y0 * (1.0 - t) + y1 * t)
        _plot(image, x, y, steep, color)


def draw_line_vec(p0: Vec3, p1: Vec3, image: TGAImage, color: TGAColor) -> None:
    """Draw a line between the x/y parts of two points, rounding the minor axis."""
    x0, y0 = float(p0.x), float(p0.y)
    x1, y1 = float(p1.x), float(p1.y)
    steep = abs(x0 - x1) < abs(y0 - y1)
    if steep:
        x0, y0, x1, y1 = y0, x0, y1, x1
    if x0 > x1:
        x0, y0, x1, y1 = x1, y1, x0, y0
    span = x1 - x0
    x = int(x0)
    while x <= x1:
        t = (x - x0) / span if span else 0.0
        y = int(y0 * (1.0 - t) + y1 * t + 0.5)
        _plot(image, x, y, steep, color)
        x += 1