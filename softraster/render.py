"""Camera transforms and the Gouraud-shaded model renderer."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from softraster.geometry import Matrix, Vec3
from softraster.model import Model
from softraster.tga import ImageFormat, TGAColor, TGAImage
from softraster.triangles import triangle_gouraud

_log = logging.getLogger(__name__)

_WIDTH = 800
_HEIGHT = 800
_DEPTH = 255
_ZBUFFER_EMPTY = -(2**31)


def get_parent_path(path: str, separators: str = "\\") -> str:
    """Cut `path` at the last of any of the separator characters."""
    pos = max((path.rfind(sep) for sep in separators), default=-1)
    return path[:pos] if pos >= 0 else path


def m2v(m: Matrix) -> Vec3:
    """Turn a homogeneous 4x1 column into a 3D point."""
    return Vec3.from_matrix(m)


def v2m(v: Vec3) -> Matrix:
    """Turn a 3D point into a homogeneous 4x1 column."""
    return Matrix.from_vec3(v)


def world2screen(v: Vec3, width: int = _WIDTH, height: int = _HEIGHT) -> Vec3:
    """Map x/y from [-1, 1] onto pixel coordinates, keeping z."""
    return Vec3(
        float(int((v.x + 1.0) * width / 2.0 + 0.5)),
        float(int((v.y + 1.0) * height / 2.0 + 0.5)),
        v.z,
    )


def viewport(x: float, y: float, w: float, h: float, depth: float = _DEPTH) -> Matrix:
    """Map the [-1, 1] cube onto the box [x, x+w] x [y, y+h] x [0, depth]."""
    m = Matrix.identity(4)
    m[0][3] = x + w / 2.0
    m[1][3] = y + h / 2.0
    m[2][3] = depth / 2.0
    m[0][0] = w / 2.0
    m[1][1] = h / 2.0
    m[2][2] = depth / 2.0
    return m


def translation(v: Vec3) -> Matrix:
    tr = Matrix.identity(4)
    tr[0][3] = float(v.x)
    tr[1][3] = float(v.y)
    tr[2][3] = float(v.z)
    return tr


def zoom(factor: float) -> Matrix:
    z = Matrix.identity(4)
    for i in range(3):
        z[i][i] = float(factor)
    return z


def rotation_x(cosangle: float, sinangle: float) -> Matrix:
    r = Matrix.identity(4)
    r[1][1] = r[2][2] = float(cosangle)
    r[1][2] = -float(sinangle)
    r[2][1] = float(sinangle)
    return r


def rotation_y(cosangle: float, sinangle: float) -> Matrix:
    r = Matrix.identity(4)
    r[0][0] = r[2][2] = float(cosangle)
    r[0][2] = float(sinangle)
    r[2][0] = -float(sinangle)
    return r


def rotation_z(cosangle: float, sinangle: float) -> Matrix:
    r = Matrix.identity(4)
    r[0][0] = r[1][1] = float(cosangle)
    r[0][1] = -float(sinangle)
    r[1][0] = float(sinangle)
    return r


def lookat(eye: Vec3, center: Vec3, up: Vec3) -> Matrix:
    """Model-view matrix of a camera at `eye` looking at `center`."""
    z = (eye - center).to_float().normalized()
    x = (up.to_float() ^ z).normalized()
    y = (z ^ x).normalized()
    res = Matrix.identity(4)
    for i in range(3):
        res[0][i] = x[i]
        res[1][i] = y[i]
        res[2][i] = z[i]
        res[i][3] = -float(center[i])
    return res


_DEFAULT_EYE = Vec3(1.0, 1.0, 3.0)
_DEFAULT_CENTER = Vec3(0.0, 0.0, 0.0)
_DEFAULT_LIGHT = Vec3(1.0, -1.0, 1.0).normalized()


def render(
    model: Model,
    width: int = _WIDTH,
    height: int = _HEIGHT,
    eye: Vec3 = _DEFAULT_EYE,
    center: Vec3 = _DEFAULT_CENTER,
    light_dir: Vec3 = _DEFAULT_LIGHT,
) -> tuple[TGAImage, list[int]]:
    """Render a model with Gouraud shading.

    Returns the RGB image, flipped so its origin is the bottom-left corner,
    and the integer z-buffer in rendering (unflipped) order.
    """
    zbuffer = [_ZBUFFER_EMPTY] * (width * height)
    model_view = lookat(eye, center, Vec3(0.0, 1.0, 0.0))
    projection = Matrix.identity(4)
    projection[3][2] = -1.0 / (eye - center).norm()
    view_port = viewport(width // 8, height // 8, width * 3 // 4, height * 3 // 4)
    transform = view_port * projection * model_view
    _log.debug("model view:\n%s", model_view)
    _log.debug("projection:\n%s", projection)
    _log.debug("viewport:\n%s", view_port)
    _log.debug("transform:\n%s", transform)

    image = TGAImage(width, height, ImageFormat.RGB)
    for i in range(model.nfaces()):
        face = model.face(i)[:3]
        screen = [
            Vec3.from_matrix(transform * Matrix.from_vec3(model.vert(index))).rounded()
            for index in face
        ]
        intensity = [model.norm(i, j) * light_dir for j in range(3)]
        triangle_gouraud(width, height, *screen, *intensity, image, zbuffer)
    image.flip_vertically()
    return image, zbuffer


def zbuffer_image(zbuffer: Sequence[int], width: int, height: int) -> TGAImage:
    """Grayscale picture of a z-buffer, origin at the bottom-left corner."""
    image = TGAImage(width, height, ImageFormat.GRAYSCALE)
    for j in range(height):
        for i in range(width):
            image.set(i, j, TGAColor.gray(zbuffer[i + j * width]))
    image.flip_vertically()
    return image


def _parser() -> argparse.ArgumentParser:
    project = Path.cwd().parent.parent
    parser = argparse.ArgumentParser(description="Render an OBJ model to TGA images.")
    parser.add_argument(
        "--model", type=Path, default=project / "objs" / "african_head.obj",
        help="OBJ file to render",
    )
    parser.add_argument(
        "--output-dir", type=Path, default=project / "outpur_images",
        help="directory receiving output.tga and zbuffer.tga",
    )
    parser.add_argument("--width", type=int, default=_WIDTH)
    parser.add_argument("--height", type=int, default=_HEIGHT)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parser().parse_args(argv)
    if args.width <= 0 or args.height <= 0:
        print("width and height must be positive", file=sys.stderr)
        return 2
    print("start running...")
    try:
        model = Model.load(args.model)
    except OSError as exc:
        print(f"can't open file {args.model}: {exc}", file=sys.stderr)
        model = Model()

    image, zbuffer = render(model, args.width, args.height)
    try:
        image.write(args.output_dir / "output.tga")
        zbuffer_image(zbuffer, args.width, args.height).write(
            args.output_dir / "zbuffer.tga"
        )
    except OSError as exc:
        print(f"can't dump the tga file: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())