"""Wavefront OBJ meshes with an optional diffuse texture."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Optional, Union

from softraster.geometry import Vec2, Vec3
from softraster.tga import TGAColor, TGAError, TGAImage

_log = logging.getLogger(__name__)

_FACE_VERTEX = re.compile(
    r"\s*([+-]?\d+)(?!\d)\s*\S\s*([+-]?\d+)(?!\d)\s*\S\s*([+-]?\d+)(?!\d)"
)
_DIFFUSE_SUFFIX = "_diffuse.tga"


def _floats(line: str, count: int) -> list[float]:
    """Read up to `count` numbers after the keyword, padding with zeros."""
    values: list[float] = []
    for token in line.split()[1:count + 1]:
        try:
            values.append(float(token))
        except ValueError:
            break
    return values + [0.0] * (count - len(values))


def _face(line: str) -> list[Vec3]:
    rest = line[1:]
    entries = []
    pos = 0
    while match := _FACE_VERTEX.match(rest, pos):
        v, vt, vn = (int(group) - 1 for group in match.groups())
        entries.append(Vec3(v, vt, vn))
        pos = match.end()
    return entries


class Model:
    """A triangle mesh: vertices, texture coordinates, normals and faces."""

    def __init__(
        self,
        verts: Optional[Iterable[Vec3]] = None,
        faces: Optional[Iterable[Iterable[Vec3]]] = None,
        norms: Optional[Iterable[Vec3]] = None,
        uvs: Optional[Iterable[Vec2]] = None,
        diffusemap: Optional[TGAImage] = None,
    ) -> None:
        self.verts = list(verts or ())
        # each face entry holds vertex / uv / normal indices
        self.faces = [list(face) for face in faces or ()]
        self.norms = list(norms or ())
        self.uvs = list(uvs or ())
        self.diffusemap = diffusemap if diffusemap is not None else TGAImage()

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Model":
        """Read an OBJ file and its "<name>_diffuse.tga" texture if present."""
        text = Path(path).read_text(encoding="utf-8", errors="replace")
        model = cls.parse(text.splitlines())
        model.diffusemap = _load_texture(str(path), _DIFFUSE_SUFFIX)
        return model

    @classmethod
    def parse(cls, lines: Iterable[str]) -> "Model":
        """Build a model from the lines of an OBJ document."""
        model = cls()
        for line in lines:
            if line.startswith("v "):
                model.verts.append(Vec3(*_floats(line, 3)))
            elif line.startswith("vn "):
                model.norms.append(Vec3(*_floats(line, 3)))
            elif line.startswith("vt "):
                model.uvs.append(Vec2(*_floats(line, 2)))
            elif line.startswith("f "):
                model.faces.append(_face(line))
        _log.info(
            "# v# %d f# %d vt# %d vn# %d",
            len(model.verts), len(model.faces), len(model.uvs), len(model.norms),
        )
        return model

    def nverts(self) -> int:
        return len(self.verts)

    def nfaces(self) -> int:
        return len(self.faces)

    def face(self, idx: int) -> list[int]:
        """Vertex indices of a face."""
        return [entry.x for entry in self.faces[idx]]

    def vert(self, i: int) -> Vec3:
        return self.verts[i]

    def uv(self, iface: int, nvert: int) -> Vec2:
        """Texture pixel coordinates of a face corner."""
        u, v = self.uvs[self.faces[iface][nvert].y]
        return Vec2(int(u * self.diffusemap.width), int(v * self.diffusemap.height))

    def norm(self, iface: int, nvert: int) -> Vec3:
        """Unit normal of a face corner."""
        return self.norms[self.faces[iface][nvert].z].normalized()

    def diffuse(self, uv: Vec2) -> TGAColor:
        return self.diffusemap.get(uv.x, uv.y)


def _load_texture(filename: str, suffix: str) -> TGAImage:
    dot = filename.rfind(".")
    if dot < 0:
        return TGAImage()
    texfile = filename[:dot] + suffix
    try:
        image = TGAImage.read(texfile)
    except (OSError, TGAError):
        _log.info("texture file %s loading failed", texfile)
        return TGAImage()
    _log.info("texture file %s loading ok", texfile)
    image.flip_vertically()
    return image