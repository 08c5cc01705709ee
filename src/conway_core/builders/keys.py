"""
Key Space
=========

Canonical identities for vertices and faces of a mesh under construction.

Operators never compare vertex positions. A synthesized vertex is named by
HOW it was derived from the input mesh, so two discovery paths for the same
vertex produce equal keys and the Builder merges them.

VERTEX KEYS (closed set):
    SeedVertex(i)     - input vertex i carried through unchanged
    Midpoint(a, b)    - midpoint of input edge {a, b}, stored with a < b
    Centroid(f)       - synthesized centre of input face f

FACE KEYS (closed set):
    SeedFace(f)             - output face derived from input face f
    VertexFace(v)           - output face created around input vertex v
    PyramidFace(f, start)   - kis triangle of face f on the edge leaving `start`

Keys are frozen dataclasses: equal by value, hashable, and totally ordered
within their family (variant order first, then fields).
"""

from dataclasses import dataclass
from functools import total_ordering


@total_ordering
class VertexKey:
    """Base of the vertex key family. Not instantiated directly."""
    __slots__ = ()

    def sort_key(self) -> tuple:
        raise NotImplementedError

    def __lt__(self, other):
        if not isinstance(other, VertexKey):
            return NotImplemented
        return self.sort_key() < other.sort_key()


@dataclass(frozen=True)
class SeedVertex(VertexKey):
    index: int

    def sort_key(self) -> tuple:
        return (0, self.index)


@dataclass(frozen=True)
class Midpoint(VertexKey):
    low: int
    high: int

    def __post_init__(self):
        if not self.low < self.high:
            raise ValueError(f"Midpoint requires low < high, got ({self.low}, {self.high}); "
                             f"use midpoint(a, b)")

    def sort_key(self) -> tuple:
        return (1, self.low, self.high)


@dataclass(frozen=True)
class Centroid(VertexKey):
    face: int

    def sort_key(self) -> tuple:
        return (2, self.face)


def midpoint(a: int, b: int) -> Midpoint:
    """Key of the midpoint of edge {a, b}; (a, b) and (b, a) give the same key."""
    if a == b:
        raise ValueError(f"Midpoint of a degenerate edge ({a}, {b})")
    return Midpoint(a, b) if a < b else Midpoint(b, a)


@total_ordering
class FaceKey:
    """Base of the face key family. Not instantiated directly."""
    __slots__ = ()

    def sort_key(self) -> tuple:
        raise NotImplementedError

    def __lt__(self, other):
        if not isinstance(other, FaceKey):
            return NotImplemented
        return self.sort_key() < other.sort_key()


@dataclass(frozen=True)
class SeedFace(FaceKey):
    face: int

    def sort_key(self) -> tuple:
        return (0, self.face)


@dataclass(frozen=True)
class VertexFace(FaceKey):
    vertex: int

    def sort_key(self) -> tuple:
        return (1, self.vertex)


@dataclass(frozen=True)
class PyramidFace(FaceKey):
    face: int
    start: VertexKey

    def sort_key(self) -> tuple:
        return (2, self.face, self.start.sort_key())
