"""
Builder - face assembly from keyed flags
========================================

Single-use accumulator used by every operator:

    builder = Builder()
    builder.add_vertex(key, position)          # keyed, deduplicated
    builder.add_flag(face_key, src, dst)       # directed edge of an output face
    polyhedron = builder.build()               # consumes the builder

FACE ASSEMBLY:
    Each output face is a bucket: a successor map  source key → destination key.
    Flags may arrive in any order and from different input faces (ambo and
    dual build one face per input vertex from one edge per incident face).
    build() walks each bucket once, from any entry, until it returns to the
    start, which recovers the cyclic vertex order of the face.

FAIL-FAST:
    Every inconsistency raises TopologyError. Operator input is always a
    well-formed seed or a previous operator's output, so an inconsistency is
    a defect in the operator, never bad data to be tolerated:
        - flag with source == destination
        - same source registered twice in one bucket with different destinations
        - face walk reaches a key with no successor (face does not close)
        - face walk closes without using every edge of its bucket
        - face references a key that was never registered as a vertex
        - vertex key re-registered at a different position
    Exceeding the index space raises VertexIndexExhausted instead.
"""

from typing import Dict, List, Optional

import numpy as np

from ..spec.constants import EPS_CLOSE, EPS_ZERO, MAX_VERTEX_COUNT
from ..spec.errors import TopologyError, VertexIndexExhausted
from ..spec.structures import Polyhedron
from .keys import FaceKey, VertexKey


class Builder:
    """
    Transient accumulator of keyed vertices and per-face flags.

    Args:
        max_vertices: size of the output index space (default: 32-bit indices)
    """

    def __init__(self, max_vertices: int = MAX_VERTEX_COUNT):
        self.max_vertices = max_vertices
        self._indices: Dict[VertexKey, int] = {}
        self._positions: List[np.ndarray] = []
        self._flags: Dict[FaceKey, Dict[VertexKey, VertexKey]] = {}
        self._consumed = False

    @property
    def vertex_count(self) -> int:
        return len(self._positions)

    @property
    def face_count(self) -> int:
        return len(self._flags)

    def has_vertex(self, key: VertexKey) -> bool:
        return key in self._indices

    def index_of(self, key: VertexKey) -> Optional[int]:
        return self._indices.get(key)

    def add_vertex(self, key: VertexKey, position) -> int:
        """
        Register `key` at `position` and return its output index.

        Indices are assigned sequentially in registration order. Registering
        an existing key again is a no-op when the position agrees; a
        conflicting position means two derivations disagree about one vertex.
        """
        self._check_open()
        position = np.asarray(position, dtype=float)

        existing = self._indices.get(key)
        if existing is not None:
            if not np.allclose(self._positions[existing], position, rtol=EPS_CLOSE, atol=EPS_ZERO):
                raise TopologyError(
                    f"Vertex {key} re-registered at {position.tolist()}, "
                    f"already at {self._positions[existing].tolist()}"
                )
            return existing

        if len(self._positions) >= self.max_vertices:
            raise VertexIndexExhausted(self.max_vertices)

        index = len(self._positions)
        self._indices[key] = index
        self._positions.append(position)
        return index

    def add_flag(self, face: FaceKey, source: VertexKey, destination: VertexKey) -> None:
        """Add directed edge source → destination to the bucket of output face `face`."""
        self._check_open()
        if source == destination:
            raise TopologyError(f"Degenerate flag {source} → {destination} in face {face}")

        bucket = self._flags.setdefault(face, {})
        existing = bucket.get(source)
        if existing is None:
            bucket[source] = destination
        elif existing != destination:
            raise TopologyError(
                f"Face {face}: {source} already leads to {existing}, "
                f"cannot also lead to {destination}"
            )

    def build(self) -> Polyhedron:
        """Resolve every bucket into a face loop and return the finished mesh."""
        self._check_open()
        self._consumed = True

        faces = []
        for face_key, bucket in self._flags.items():
            if not bucket:
                continue
            faces.append(self._walk(face_key, bucket))

        if self._positions:
            vertices = np.vstack(self._positions)
        else:
            vertices = np.zeros((0, 3))
        return Polyhedron(vertices, tuple(faces))

    def _walk(self, face_key: FaceKey, bucket: Dict[VertexKey, VertexKey]) -> tuple:
        # Start at an arbitrary vertex: the first registered edge's destination
        start = next(iter(bucket.values()))
        indices = []
        current = start
        while True:
            index = self._indices.get(current)
            if index is None:
                raise TopologyError(f"Face {face_key}: key {current} has no registered vertex")
            indices.append(index)

            successor = bucket.get(current)
            if successor is None:
                raise TopologyError(
                    f"Face {face_key}: walk from {start} stops at {current} (face does not close)"
                )
            current = successor
            if current == start:
                break
            if len(indices) > len(bucket):
                raise TopologyError(f"Face {face_key}: walk from {start} never returns to it")

        if len(indices) != len(bucket):
            raise TopologyError(
                f"Face {face_key}: bucket holds {len(bucket)} edges, "
                f"walk closed after {len(indices)}"
            )
        return tuple(indices)

    def _check_open(self):
        if self._consumed:
            raise RuntimeError("Builder already built; create a new Builder per operator application")
