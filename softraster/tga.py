"""Reading, writing and editing of Truevision TGA images."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Union

_HEADER = struct.Struct("<BBBhhBhhhhBB")
_FOOTER = b"TRUEVISION-XFILE.\0"
_DEVELOPER_AREA_REF = bytes(4)
_EXTENSION_AREA_REF = bytes(4)
_MAX_CHUNK_LENGTH = 128

_TOP_LEFT_ORIGIN = 0x20
_RIGHT_TO_LEFT = 0x10


class TGAError(ValueError):
    """Raised when TGA data cannot be decoded."""


class ImageFormat(IntEnum):
    """Bytes per pixel of the supported pixel layouts."""

    GRAYSCALE = 1
    RGB = 3
    RGBA = 4


def _to_byte(value: float) -> int:
    return int(value) & 0xFF


@dataclass(frozen=True)
class TGAColor:
    """A pixel colour stored in BGRA byte order."""

    bgra: tuple[int, int, int, int] = (0, 0, 0, 0)
    bytespp: int = 1

    @classmethod
    def rgb(cls, r: float, g: float, b: float, a: float = 255) -> "TGAColor":
        return cls((_to_byte(b), _to_byte(g), _to_byte(r), _to_byte(a)), 4)

    @classmethod
    def gray(cls, value: float) -> "TGAColor":
        return cls((_to_byte(value), 0, 0, 0), 1)

    @classmethod
    def from_bytes(cls, data: bytes, bytespp: int) -> "TGAColor":
        raw = bytes(data[:bytespp])
        padded = raw + bytes(4 - len(raw))
        return cls(tuple(padded), bytespp)  # type: ignore[arg-type]

    @property
    def r(self) -> int:
        return self.bgra[2]

    @property
    def g(self) -> int:
        return self.bgra[1]

    @property
    def b(self) -> int:
        return self.bgra[0]

    @property
    def a(self) -> int:
        return self.bgra[3]

    def __mul__(self, intensity: float) -> "TGAColor":
        intensity = min(1.0, max(0.0, float(intensity)))
        scaled = tuple(int(channel * intensity) for channel in self.bgra)
        return TGAColor(scaled, self.bytespp)  # type: ignore[arg-type]


class TGAImage:
    """An in-memory raster image with TGA encoding and decoding."""

    def __init__(self, width: int = 0, height: int = 0, bytespp: int = 0) -> None:
        if width < 0 or height < 0 or bytespp < 0:
            raise ValueError("image dimensions must not be negative")
        self._width = int(width)
        self._height = int(height)
        self._bytespp = int(bytespp)
        self._data = bytearray(self._width * self._height * self._bytespp)

    def __repr__(self) -> str:
        return f"TGAImage({self._width}x{self._height}, bytespp={self._bytespp})"

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def bytespp(self) -> int:
        return self._bytespp

    # ---- decoding -------------------------------------------------------

    @classmethod
    def read(cls, path: Union[str, Path]) -> "TGAImage":
        """Load an image from a TGA file."""
        return cls.from_bytes(Path(path).read_bytes())

    @classmethod
    def from_bytes(cls, data: bytes) -> "TGAImage":
        """Decode an image from the bytes of a TGA file."""
        if len(data) < _HEADER.size:
            raise TGAError("an error occured while reading the header")
        (
            _idlength,
            _colormaptype,
            datatypecode,
            _colormaporigin,
            _colormaplength,
            _colormapdepth,
            _x_origin,
            _y_origin,
            width,
            height,
            bitsperpixel,
            imagedescriptor,
        ) = _HEADER.unpack_from(data)
        bytespp = bitsperpixel >> 3
        if width <= 0 or height <= 0 or bytespp not in tuple(ImageFormat):
            raise TGAError("bad bpp (or width/height) value")

        image = cls(width, height, bytespp)
        nbytes = width * height * bytespp
        body = data[_HEADER.size:]
        if datatypecode in (2, 3):
            if len(body) < nbytes:
                raise TGAError("an error occured while reading the data")
            image._data[:] = body[:nbytes]
        elif datatypecode in (10, 11):
            image._data[:] = _decode_rle(body, width * height, bytespp)
        else:
            raise TGAError(f"unknown file format {datatypecode}")

        if not imagedescriptor & _TOP_LEFT_ORIGIN:
            image.flip_vertically()
        if imagedescriptor & _RIGHT_TO_LEFT:
            image.flip_horizontally()
        return image

    # ---- encoding -------------------------------------------------------

    def write(self, path: Union[str, Path], rle: bool = True) -> None:
        """Write the image to a TGA file."""
        Path(path).write_bytes(self.to_bytes(rle))

    def to_bytes(self, rle: bool = True) -> bytes:
        """Encode the image as the bytes of a TGA file."""
        if self._bytespp == ImageFormat.GRAYSCALE:
            datatypecode = 11 if rle else 3
        else:
            datatypecode = 10 if rle else 2
        header = _HEADER.pack(
            0, 0, datatypecode, 0, 0, 0, 0, 0,
            self._width, self._height, self._bytespp << 3, _TOP_LEFT_ORIGIN,
        )
        body = self._encode_rle() if rle else bytes(self._data)
        return b"".join((header, body, _DEVELOPER_AREA_REF, _EXTENSION_AREA_REF, _FOOTER))

    def _encode_rle(self) -> bytes:
        bpp = self._bytespp
        data = self._data
        npixels = self._width * self._height
        out = bytearray()
        curpix = 0
        while curpix < npixels:
            chunkstart = curpix * bpp
            curbyte = chunkstart
            run_length = 1
            raw = True
            while curpix + run_length < npixels and run_length < _MAX_CHUNK_LENGTH:
                succ_eq = (
                    data[curbyte:curbyte + bpp] == data[curbyte + bpp:curbyte + 2 * bpp]
                )
                curbyte += bpp
                if run_length == 1:
                    raw = not succ_eq
                if raw and succ_eq:
                    run_length -= 1
                    break
                if not raw and not succ_eq:
                    break
                run_length += 1
            curpix += run_length
            out.append(run_length - 1 if raw else run_length + 127)
            length = run_length * bpp if raw else bpp
            out += data[chunkstart:chunkstart + length]
        return bytes(out)

    # ---- pixel access ---------------------------------------------------

    def _inside(self, x: int, y: int) -> bool:
        return bool(self._data) and 0 <= x < self._width and 0 <= y < self._height

    def get(self, x: int, y: int) -> TGAColor:
        """Return the colour at (x, y), or a blank colour outside the image."""
        x, y = int(x), int(y)
        if not self._inside(x, y):
            return TGAColor()
        offset = (x + y * self._width) * self._bytespp
        return TGAColor.from_bytes(self._data[offset:offset + self._bytespp], self._bytespp)

    def set(self, x: int, y: int, color: TGAColor) -> bool:
        """Store a colour at (x, y); return False if the point lies outside."""
        x, y = int(x), int(y)
        if not self._inside(x, y):
            return False
        offset = (x + y * self._width) * self._bytespp
        self._data[offset:offset + self._bytespp] = bytes(color.bgra[:self._bytespp])
        return True

    # ---- whole-image operations ------------------------------------------

    def _rows(self) -> list[bytearray]:
        line = self._width * self._bytespp
        return [self._data[start:start + line] for start in range(0, len(self._data), line)]

    def flip_horizontally(self) -> None:
        """Mirror the image left to right."""
        if not self._data:
            return
        bpp = self._bytespp
        flipped = bytearray()
        for row in self._rows():
            pixels = [row[start:start + bpp] for start in range(0, len(row), bpp)]
            flipped += b"".join(reversed(pixels))
        self._data[:] = flipped

    def flip_vertically(self) -> None:
        """Mirror the image top to bottom."""
        if not self._data:
            return
        self._data[:] = b"".join(reversed(self._rows()))

    def scale(self, width: int, height: int) -> None:
        """Resize the image in place by nearest-pixel sampling."""
        if width <= 0 or height <= 0:
            raise ValueError("target size must be positive")
        if not self._data:
            raise ValueError("cannot scale an empty image")
        bpp = self._bytespp
        data = self._data
        scaled = bytearray(width * height * bpp)
        new_line = width * bpp
        old_line = self._width * bpp
        new_scanline = 0
        erry = 0
        for old_scanline in range(0, self._height * old_line, old_line):
            errx = self._width - width
            nx = -bpp
            for ox in range(old_scanline, old_scanline + old_line, bpp):
                errx += width
                while errx >= self._width:
                    errx -= self._width
                    nx += bpp
                    start = new_scanline + nx
                    scaled[start:start + bpp] = data[ox:ox + bpp]
            erry += height
            while erry >= self._height:
                if erry >= self._height << 1:
                    scaled[new_scanline + new_line:new_scanline + 2 * new_line] = (
                        scaled[new_scanline:new_scanline + new_line]
                    )
                erry -= self._height
                new_scanline += new_line
        self._data = scaled
        self._width = width
        self._height = height

    def clear(self) -> None:
        """Set every byte of the image to zero."""
        self._data[:] = bytes(len(self._data))

    def copy(self) -> "TGAImage":
        """Return an independent copy of the image."""
        duplicate = TGAImage(self._width, self._height, self._bytespp)
        duplicate._data[:] = self._data
        return duplicate

    def buffer(self) -> bytearray:
        """Return the raw pixel bytes, row by row, top row first."""
        return self._data


def _decode_rle(body: bytes, pixelcount: int, bytespp: int) -> bytearray:
    out = bytearray()
    pos = 0
    currentpixel = 0
    while currentpixel < pixelcount:
        if pos >= len(body):
            raise TGAError("an error occured while reading the data")
        chunkheader = body[pos]
        pos += 1
        if chunkheader < 128:
            for _ in range(chunkheader + 1):
                pixel = body[pos:pos + bytespp]
                if len(pixel) < bytespp:
                    raise TGAError("an error occured while reading the header")
                pos += bytespp
                out += pixel
                currentpixel += 1
                if currentpixel > pixelcount:
                    raise TGAError("Too many pixels read")
        else:
            pixel = body[pos:pos + bytespp]
            if len(pixel) < bytespp:
                raise TGAError("an error occured while reading the header")
            pos += bytespp
            for _ in range(chunkheader - 127):
                out += pixel
                currentpixel += 1
                if currentpixel > pixelcount:
                    raise TGAError("Too many pixels read")
    return out