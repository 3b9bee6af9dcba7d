import itertools

import pytest

from softraster.geometry import Vec2, Vec3
from softraster.tga import ImageFormat, TGAColor, TGAImage
from softraster.triangles import (
    barycentric,
    triangle_barycentric,
    triangle_gouraud,
    triangle_scanline,
    triangle_zbuffer,
)

RED = TGAColor.rgb(255, 0, 0)
GREEN = TGAColor.rgb(0, 255, 0)
BLUE = TGAColor.rgb(0, 0, 255)


def _lit(image):
    bpp = image.bytespp
    buf = image.buffer()
    lit = set()
    for pixel, start in enumerate(range(0, len(buf), bpp)):
        if any(buf[start:start + bpp]):
            lit.add((pixel % image.width, pixel // image.width))
    return lit


def _image(size=40):
    return TGAImage(size, size, ImageFormat.RGB)


A = Vec3(0.0, 0.0, 0.0)
B = Vec3(10.0, 0.0, 0.0)
C = Vec3(0.0, 10.0, 0.0)


@pytest.mark.parametrize(
    "point, expected",
    [(A, (1.0, 0.0, 0.0)), (B, (0.0, 1.0, 0.0)), (C, (0.0, 0.0, 1.0))],
)
def test_barycentric_of_vertices(point, expected):
    bc = barycentric(A, B, C, point)
    assert tuple(bc) == pytest.approx(expected)


def test_barycentric_sums_to_one():
    bc = barycentric(A, B, C, Vec3(3.0, 4.0, 0.0))
    assert sum(bc) == pytest.approx(1.0)
    assert min(bc) >= 0


def test_barycentric_outside_is_negative():
    bc = barycentric(A, B, C, Vec3(9.0, 9.0, 0.0))
    assert min(bc) < 0


def test_barycentric_degenerate():
    bc = barycentric(A, Vec3(5.0, 5.0, 0.0), Vec3(10.0, 10.0, 0.0), Vec3(1.0, 1.0, 0.0))
    assert tuple(bc) == (-1, 1, 1)


SCAN = (Vec2(10, 5), Vec2(30, 20), Vec2(5, 35))


def test_scanline_vertex_order_does_not_matter():
    results = []
    for order in itertools.permutations(SCAN):
        image = _image()
        triangle_scanline(*order, image, RED)
        results.append(_lit(image))
    assert all(result == results[0] for result in results)
    assert results[0]


def test_scanline_stays_in_bounding_box():
    image = _image()
    triangle_scanline(*SCAN, image, RED)
    lit = _lit(image)
    xs = [v.x for v in SCAN]
    ys = [v.y for v in SCAN]
    assert all(min(xs) <= x <= max(xs) and min(ys) <= y <= max(ys) for x, y in lit)
    assert (10, 5) in lit


def test_scanline_flat_triangle_draws_nothing():
    image = _image()
    triangle_scanline(Vec2(1, 10), Vec2(20, 10), Vec2(30, 10), image, RED)
    assert _lit(image) == set()


def test_scanline_clips_outside_points():
    image = _image(20)
    triangle_scanline(Vec2(-10, -10), Vec2(50, 0), Vec2(0, 50), image, RED)
    assert (0, 0) in _lit(image)


def test_barycentric_fill_respects_coordinates():
    image = _image(20)
    pts = [A, B, C]
    triangle_barycentric(pts, image, RED)
    lit = _lit(image)
    assert (2, 2) in lit
    assert (9, 9) not in lit
    for x, y in lit:
        assert min(barycentric(A, B, C, Vec3(float(x), float(y), 0.0))) >= 0
    assert image.get(2, 2).bgra[:3] == RED.bgra[:3]


def test_barycentric_fill_degenerate_draws_nothing():
    image = _image(20)
    triangle_barycentric(
        [Vec3(0.0, 0.0, 0.0), Vec3(5.0, 5.0, 0.0), Vec3(10.0, 10.0, 0.0)], image, RED
    )
    assert _lit(image) == set()


def test_barycentric_fill_clipped_to_image():
    image = _image(10)
    pts = [Vec3(-5.0, -5.0, 0.0), Vec3(30.0, -5.0, 0.0), Vec3(-5.0, 30.0, 0.0)]
    triangle_barycentric(pts, image, RED)
    assert (0, 0) in _lit(image)


def _flat(z):
    return [Vec3(0.0, 0.0, z), Vec3(10.0, 0.0, z), Vec3(0.0, 10.0, z)]


def test_zbuffer_nearer_triangle_wins():
    size = 20
    image = _image(size)
    zbuffer = [-float("inf")] * (size * size)
    triangle_zbuffer(size, _flat(1.0), zbuffer, image, RED)
    assert zbuffer[2 + 2 * size] == pytest.approx(1.0)
    triangle_zbuffer(size, _flat(2.0), zbuffer, image, GREEN)
    assert image.get(2, 2).bgra[:3] == GREEN.bgra[:3]
    assert zbuffer[2 + 2 * size] == pytest.approx(2.0)


def test_zbuffer_farther_triangle_hidden():
    size = 20
    image = _image(size)
    zbuffer = [-float("inf")] * (size * size)
    triangle_zbuffer(size, _flat(2.0), zbuffer, image, RED)
    triangle_zbuffer(size, _flat(0.5), zbuffer, image, BLUE)
    assert image.get(2, 2).bgra[:3] == RED.bgra[:3]
    assert zbuffer[2 + 2 * size] == pytest.approx(2.0)


def test_zbuffer_touches_only_lit_pixels():
    size = 20
    image = _image(size)
    zbuffer = [-float("inf")] * (size * size)
    triangle_zbuffer(size, _flat(1.0), zbuffer, image, RED)
    written = {(i % size, i // size) for i, z in enumerate(zbuffer) if z != -float("inf")}
    assert written == _lit(image)


GOURAUD = (Vec3(0, 0, 5), Vec3(10, 0, 5), Vec3(0, 10, 5))


def _zbuffer(size):
    return [-(10**9)] * (size * size)


def test_gouraud_full_intensity_is_white():
    size = 20
    image = _image(size)
    zbuffer = _zbuffer(size)
    triangle_gouraud(size, size, *GOURAUD, 1.0, 1.0, 1.0, image, zbuffer)
    lit = _lit(image)
    assert (0, 0) in lit
    assert image.get(0, 0).bgra[:3] == (255, 255, 255)
    assert all(zbuffer[x + y * size] == 5 for x, y in lit)


def test_gouraud_depth_test():
    size = 20
    image = _image(size)
    zbuffer = _zbuffer(size)
    triangle_gouraud(size, size, *GOURAUD, 1.0, 1.0, 1.0, image, zbuffer)
    behind = tuple(Vec3(v.x, v.y, 3) for v in GOURAUD)
    triangle_gouraud(size, size, *behind, 0.5, 0.5, 0.5, image, zbuffer)
    assert image.get(0, 0).bgra[:3] == (255, 255, 255)
    assert zbuffer[0] == 5
    front = tuple(Vec3(v.x, v.y, 9) for v in GOURAUD)
    triangle_gouraud(size, size, *front, 0.0, 0.0, 0.0, image, zbuffer)
    assert image.get(0, 0).bgra[:3] == (0, 0, 0)
    assert zbuffer[0] == 9


def test_gouraud_degenerate_does_nothing():
    size = 20
    image = _image(size)
    zbuffer = _zbuffer(size)
    triangle_gouraud(
        size, size, Vec3(0, 4, 1), Vec3(5, 4, 1), Vec3(9, 4, 1), 1.0, 1.0, 1.0, image, zbuffer
    )
    assert _lit(image) == set()
    assert zbuffer == _zbuffer(size)


def test_gouraud_clips_outside_points():
    size = 10
    image = _image(size)
    zbuffer = _zbuffer(size)
    triangle_gouraud(
        size, size, Vec3(-20, -20, 1), Vec3(40, -5, 1), Vec3(-5, 40, 1),
        1.0, 1.0, 1.0, image, zbuffer,
    )
    lit = _lit(image)
    assert lit
    assert all(0 <= x < size and 0 <= y < size for x, y in lit)
    assert len(zbuffer) == size * size