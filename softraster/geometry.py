"""Small vectors and dense matrices for 3D transformations."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Union

Number = Union[int, float]


def _integral(values: tuple[Number, ...]) -> bool:
    return all(isinstance(value, int) for value in values)


def _scale(values: tuple[Number, ...], factor: float) -> tuple[Number, ...]:
    """Scale components; integer vectors stay integer, truncating toward zero."""
    if _integral(values):
        return tuple(int(value * factor) for value in values)
    return tuple(value * factor for value in values)


@dataclass(frozen=True)
class Vec2:
    """A two-component vector of ints or floats."""

    x: Number = 0
    y: Number = 0

    def __iter__(self) -> Iterator[Number]:
        yield self.x
        yield self.y

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Vec2":
        return Vec2(*_scale((self.x, self.y), factor))

    def __getitem__(self, index: int) -> Number:
        return self.x if index <= 0 else self.y

    def __str__(self) -> str:
        return f"({self.x:g}, {self.y:g})"


@dataclass(frozen=True)
class Vec3:
    """A three-component vector of ints or floats."""

    x: Number = 0
    y: Number = 0
    z: Number = 0

    def __iter__(self) -> Iterator[Number]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other: Union["Vec3", float]) -> Union["Vec3", Number]:
        """Dot product with a vector, or scaling by a number."""
        if isinstance(other, Vec3):
            return self.x * other.x + self.y * other.y + self.z * other.z
        return Vec3(*_scale((self.x, self.y, self.z), other))

    def __xor__(self, other: "Vec3") -> "Vec3":
        """Cross product."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def __getitem__(self, index: int) -> Number:
        if index <= 0:
            return self.x
        return self.y if index == 1 else self.z

    def __str__(self) -> str:
        return f"({self.x:g}, {self.y:g}, {self.z:g})"

    def norm(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self, length: float = 1) -> "Vec3":
        """Return the vector rescaled to the given length."""
        return self * (length / self.norm())

    def rounded(self) -> "Vec3":
        """Return an integer vector, each component taken as int(c + 0.5)."""
        return Vec3(int(self.x + 0.5), int(self.y + 0.5), int(self.z + 0.5))

    def to_float(self) -> "Vec3":
        """Return the same vector with float components."""
        return Vec3(float(self.x), float(self.y), float(self.z))

    @classmethod
    def from_matrix(cls, matrix: "Matrix") -> "Vec3":
        """Project a 4x1 homogeneous column back to 3D."""
        w = matrix[3][0]
        return cls(matrix[0][0] / w, matrix[1][0] / w, matrix[2][0] / w)


def cross(v1: Vec3, v2: Vec3) -> Vec3:
    """Cross product of two vectors."""
    return v1 ^ v2


class Matrix:
    """A dense rows x cols matrix of floats."""

    def __init__(self, rows: int = 4, cols: int = 4) -> None:
        if rows < 0 or cols < 0:
            raise ValueError("matrix dimensions must not be negative")
        self._rows = rows
        self._cols = cols
        self._m = [[0.0] * cols for _ in range(rows)]

    @classmethod
    def from_vec3(cls, v: Vec3) -> "Matrix":
        """Return the homogeneous 4x1 column (x, y, z, 1)."""
        m = cls(4, 1)
        m._m = [[float(v.x)], [float(v.y)], [float(v.z)], [1.0]]
        return m

    @classmethod
    def identity(cls, dimensions: int) -> "Matrix":
        m = cls(dimensions, dimensions)
        for i, row in enumerate(m._m):
            row[i] = 1.0
        return m

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    def __getitem__(self, index: int) -> list[float]:
        if not 0 <= index < self._rows:
            raise IndexError(f"row {index} out of range")
        return self._m[index]

    def __mul__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        if self._cols != other._rows:
            raise ValueError(
                f"cannot multiply {self._rows}x{self._cols} by {other._rows}x{other._cols}"
            )
        result = Matrix(self._rows, other._cols)
        columns = list(zip(*other._m)) if other._m else []
        result._m = [
            [sum(a * b for a, b in zip(row, column)) for column in columns] or [0.0] * other._cols
            for row in self._m
        ]
        return result

    def transpose(self) -> "Matrix":
        result = Matrix(self._cols, self._rows)
        if self._m:
            result._m = [list(column) for column in zip(*self._m)]
        return result

    def inverse(self) -> "Matrix":
        """Gauss-Jordan inverse without pivoting."""
        if self._rows != self._cols:
            raise ValueError("only square matrices can be inverted")
        n = self._rows
        aug = [
            row[:] + [1.0 if j == i else 0.0 for j in range(n)]
            for i, row in enumerate(self._m)
        ]
        try:
            for i in range(n - 1):
                pivot = aug[i][i]
                aug[i] = [value / pivot for value in aug[i]]
                for k in range(i + 1, n):
                    coeff = aug[k][i]
                    aug[k] = [a - b * coeff for a, b in zip(aug[k], aug[i])]
            if n:
                last = aug[n - 1]
                pivot = last[n - 1]
                aug[n - 1] = last[:n - 1] + [value / pivot for value in last[n - 1:]]
        except ZeroDivisionError as exc:
            raise ValueError("matrix is singular") from exc
        for i in range(n - 1, 0, -1):
            for k in range(i - 1, -1, -1):
                coeff = aug[k][i]
                aug[k] = [a - b * coeff for a, b in zip(aug[k], aug[i])]
        result = Matrix(n, n)
        result._m = [row[n:] for row in aug]
        return result

    def __str__(self) -> str:
        return "".join("\t".join(f"{value:g}" for value in row) + "\n" for row in self._m)

    def __repr__(self) -> str:
        return f"Matrix({self._rows}x{self._cols}, {self._m!r})"