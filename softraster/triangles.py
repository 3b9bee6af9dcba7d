"""Triangle rasterisation: scanline, barycentric, z-buffered and Gouraud shaded."""

from __future__ import annotations

from typing import Iterator, MutableSequence, Sequence

from softraster.geometry import Vec2, Vec3, cross
from softraster.tga import TGAColor, TGAImage

_WHITE = TGAColor.rgb(255, 255, 255)


def barycentric(a: Vec3, b: Vec3, c: Vec3, p: Vec3) -> Vec3:
    """Barycentric coordinates of p in triangle abc (x/y only).

    A degenerate triangle yields (-1, 1, 1), which rasterisers discard.
    """
    sx = Vec3(c.x - a.x, b.x - a.x, a.x - p.x)
    sy = Vec3(c.y - a.y, b.y - a.y, a.y - p.y)
    u = cross(sx, sy)
    if abs(u.z) > 1e-2:
        return Vec3(1.0 - (u.x + u.y) / u.z, u.y / u.z, u.x / u.z)
    return Vec3(-1, 1, 1)


def _int_vec2(v: Vec2) -> Vec2:
    return Vec2(int(v.x), int(v.y))


def _int_vec3(v: Vec3) -> Vec3:
    return Vec3(int(v.x), int(v.y), int(v.z))


def triangle_scanline(
    t0: Vec2, t1: Vec2, t2: Vec2, image: TGAImage, color: TGAColor
) -> None:
    """Fill a 2D triangle row by row between its left and right edges."""
    t0, t1, t2 = _int_vec2(t0), _int_vec2(t1), _int_vec2(t2)
    if t0.y > t1.y:
        t0, t1 = t1, t0
    if t0.y > t2.y:
        t0, t2 = t2, t0
    if t1.y > t2.y:
        t1, t2 = t2, t1

    total_height = t2.y - t0.y
    for i in range(total_height):
        second_half = i > t1.y - t0.y or t1.y == t0.y
        segment_height = t2.y - t1.y if second_half else t1.y - t0.y
        alpha = i / total_height
        beta = (i - (t1.y - t0.y if second_half else 0)) / segment_height
        a = t0 + (t2 - t0) * alpha
        b = t1 + (t2 - t1) * beta if second_half else t0 + (t1 - t0) * beta
        if a.x > b.x:
            a, b = b, a
        for x in range(a.x, b.x + 1):
            image.set(x, t0.y + i, color)


def _frange(start: float, stop: float) -> Iterator[float]:
    value = start
    while value <= stop:
        yield value
        value += 1.0


def _bounding_box(
    pts: Sequence[Vec3], image: TGAImage
) -> tuple[float, float, float, float]:
    clamp = (float(image.width - 1), float(image.height - 1))
    lo = [max(0.0, float(min(p[j] for p in pts))) for j in range(2)]
    hi = [min(clamp[j], float(max(p[j] for p in pts))) for j in range(2)]
    return lo[0], lo[1], hi[0], hi[1]


def _covered(pts: Sequence[Vec3], image: TGAImage) -> Iterator[tuple[float, float, Vec3]]:
    """Yield each pixel of the clipped bounding box inside the triangle."""
    xmin, ymin, xmax, ymax = _bounding_box(pts, image)
    a, b, c = pts[0], pts[1], pts[2]
    for px in _frange(xmin, xmax):
        for py in _frange(ymin, ymax):
            bc = barycentric(a, b, c, Vec3(px, py, 0.0))
            if bc.x < 0 or bc.y < 0 or bc.z < 0:
                continue
            yield px, py, bc


def triangle_barycentric(pts: Sequence[Vec3], image: TGAImage, color: TGAColor) -> None:
    """Fill a triangle by testing every pixel of its bounding box."""
    pts = list(pts)[:3]
    for px, py, _bc in _covered(pts, image):
        image.set(px, py, color)


def triangle_zbuffer(
    width: int,
    pts: Sequence[Vec3],
    zbuffer: MutableSequence[float],
    image: TGAImage,
    color: TGAColor,
) -> None:
    """Fill a triangle, keeping only pixels nearer than what the z-buffer holds."""
    pts = list(pts)[:3]
    for px, py, bc in _covered(pts, image):
        z = sum(pt[2] * weight for pt, weight in zip(pts, bc))
        idx = int(px + py * width)
        if zbuffer[idx] < z:
            zbuffer[idx] = z
            image.set(px, py, color)


def triangle_gouraud(
    width: int,
    height: int,
    t0: Vec3,
    t1: Vec3,
    t2: Vec3,
    ity0: float,
    ity1: float,
    ity2: float,
    image: TGAImage,
    zbuffer: MutableSequence[int],
) -> None:
    """Fill a triangle with interpolated light intensity and an integer z-buffer."""
    t0, t1, t2 = _int_vec3(t0), _int_vec3(t1), _int_vec3(t2)
    if t0.y == t1.y and t0.y == t2.y:
        return
    if t0.y > t1.y:
        t0, t1, ity0, ity1 = t1, t0, ity1, ity0
    if t0.y > t2.y:
        t0, t2, ity0, ity2 = t2, t0, ity2, ity0
    if t1.y > t2.y:
        t1, t2, ity1, ity2 = t2, t1, ity2, ity1

    total_height = t2.y - t0.y
    for i in range(total_height):
        second_half = i > t1.y - t0.y or t1.y == t0.y
        segment_height = t2.y - t1.y if second_half else t1.y - t0.y
        alpha = i / total_height
        beta = (i - (t1.y - t0.y if second_half else 0)) / segment_height
        a = t0 + ((t2 - t0).to_float() * alpha).rounded()
        if second_half:
            b = t1 + ((t2 - t1).to_float() * beta).rounded()
            ity_b = ity1 + (ity2 - ity1) * beta
        else:
            b = t0 + ((t1 - t0).to_float() * beta).rounded()
            ity_b = ity0 + (ity1 - ity0) * beta
        ity_a = ity0 + (ity2 - ity0) * alpha
        if a.x > b.x:
            a, b, ity_a, ity_b = b, a, ity_b, ity_a
        for j in range(a.x, b.x + 1):
            phi = 1.0 if b.x == a.x else (j - a.x) / (b.x - a.x)
            p = (a.to_float() + (b - a).to_float() * phi).rounded()
            ity_p = ity_a + (ity_b - ity_a) * phi
            if p.x >= width or p.y >= height or p.x < 0 or p.y < 0:
                continue
            idx = p.x + p.y * width
            if zbuffer[idx] < p.z:
                zbuffer[idx] = p.z
                image.set(p.x, p.y, _WHITE * ity_p)