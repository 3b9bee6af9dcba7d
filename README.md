# softraster

A small software rasterizer in pure Python. It reads a Wavefront OBJ model,
projects it through a look-at camera, a simple perspective and a viewport
transform, fills its triangles with Gouraud shading against an integer
z-buffer, and writes the result as a TGA image together with a grayscale
picture of the z-buffer.

No third-party libraries are needed at run time.

## Installation

```
pip install .
```

## Command line

```
softraster
```

The `softraster` command renders one model and writes two files into the
output directory:

- `output.tga`: the shaded RGB image, origin at the bottom-left corner;
- `zbuffer.tga`: a grayscale image of the depth buffer (each depth value is
  kept to its lowest byte).

Options:

- `--model PATH`: the OBJ file to render. The default is
  `objs/african_head.obj` two directories above the current one.
- `--output-dir PATH`: where the two images go. The default is
  `outpur_images` two directories above the current one. The directory must
  already exist.
- `--width N`, `--height N`: image size in pixels, 800 by 800 by default.

The model must have vertex normals and `v/vt/vn` faces, since the shading is
taken from the normals. If the model file cannot be opened, an error is
printed and a blank image is rendered. The exit status is 0 on success, 1
when the images cannot be written and 2 for a non-positive size.

## Library use

- `softraster.tga`: `TGAImage` and `TGAColor` for TGA files (raw and RLE;
  grayscale, RGB and RGBA). `TGAImage.read(path)` and
  `TGAImage.from_bytes(data)` decode, `write(path, rle)` and `to_bytes(rle)`
  encode. Pixels are read and written with `get(x, y)` and `set(x, y, color)`;
  points outside the image give a blank colour or are ignored. There are also
  `flip_horizontally()`, `flip_vertically()`, `scale(width, height)`,
  `clear()`, `copy()` and `buffer()`. Colours are made with
  `TGAColor.rgb(r, g, b, a)`, `TGAColor.gray(value)` or
  `TGAColor.from_bytes(data, bytespp)`, and multiplying a colour by a number
  scales it by an intensity clamped to 0..1. `ImageFormat` names the pixel
  sizes. Undecodable data raises `TGAError`.
- `softraster.geometry`: `Vec2`, `Vec3` (addition, subtraction, scaling, dot
  product with `*`, cross product with `^`, `norm()`, `normalized()`,
  `rounded()`, `Vec3.from_matrix`), `Matrix` (`identity`, `from_vec3`,
  multiplication, `transpose()`, `inverse()`) and `cross`.
- `softraster.model`: `Model.load(path)` reads an OBJ file and, if present,
  a texture named `<name>_diffuse.tga` beside it; `Model.parse(lines)` builds
  a model from text lines. A model answers `nverts()`, `nfaces()`,
  `face(i)`, `vert(i)`, `uv(iface, nvert)`, `norm(iface, nvert)` and
  `diffuse(uv)`.
- `softraster.primitives`: `draw_point`.
- `softraster.lines`: `draw_line(x0, y0, x1, y1, image, color)` and
  `draw_line_vec(p0, p1, image, color)`.
- `softraster.triangles`: `barycentric`, `triangle_scanline`,
  `triangle_barycentric`, `triangle_zbuffer` and `triangle_gouraud`.
- `softraster.render`: transform helpers (`lookat`, `viewport`,
  `translation`, `zoom`, `rotation_x`, `rotation_y`, `rotation_z`, `m2v`,
  `v2m`, `world2screen`, `get_parent_path`), `render(model, ...)`, which
  returns the shaded image and the z-buffer, and
  `zbuffer_image(zbuffer, width, height)`.

```python
from softraster.tga import TGAImage, TGAColor, ImageFormat
from softraster.lines import draw_line

image = TGAImage(100, 100, ImageFormat.RGB)
draw_line(13, 20, 80, 40, image, TGAColor.rgb(255, 255, 255, 255))
image.flip_vertically()
image.write("line.tga", True)
```

Image coordinates start at the top-left corner. Call `flip_vertically()`
before writing if you want the origin at the bottom-left.

## What it does not do

The renderer draws shaded white surfaces only: the diffuse texture is loaded
and can be sampled through `Model.diffuse`, but `render` does not apply it.
There is no window or on-screen preview; output is written to TGA files only.

## Running the tests

```
pip install .[test]
pytest
```