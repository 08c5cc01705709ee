"""
Render Mesh Preparation
=======================

Flatten a Polyhedron into the arrays a renderer uploads: one vertex group
per face (flat shading), fan-triangulated, with texture coordinates that
select the atlas cell of the face's congruence class.

    positions  (N, 3) float32
    tex_coords (N, 2) float32   centre of atlas cell for the face class
    normals    (N, 3) float32   face normal, repeated per face vertex
    triangles  (T, 3) uint32    fan: (first, first+i, first+i+1)

Window, GPU buffers and texture images are the renderer's business.
"""

import warnings
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from ..operators.conway import face_normal
from ..spec.constants import ATLAS_GRID
from ..spec.structures import Polyhedron
from .classify import classify_faces


@dataclass(frozen=True)
class RenderMesh:
    positions: np.ndarray
    tex_coords: np.ndarray
    normals: np.ndarray
    triangles: np.ndarray

    @property
    def index_count(self) -> int:
        return int(self.triangles.size)


def atlas_coordinates(class_id: int, grid: int = ATLAS_GRID) -> Tuple[float, float]:
    """Centre of atlas cell `class_id` in a grid × grid atlas, row-major."""
    return ((class_id % grid) + 0.5) / grid, ((class_id // grid) + 0.5) / grid


def fan_triangles(first_index: int, count: int) -> np.ndarray:
    """(count - 2, 3) fan triangulation of a convex polygon starting at first_index."""
    i = np.arange(1, count - 1, dtype=np.uint32)
    first = np.full_like(i, first_index)
    return np.stack([first, first + i, first + i + 1], axis=1)


def build_render_mesh(poly: Polyhedron,
                      face_classes: Optional[Sequence[int]] = None,
                      grid: int = ATLAS_GRID) -> RenderMesh:
    """
    Build flat-shaded render arrays for `poly`.

    Args:
        poly: finished mesh
        face_classes: class id per face (default: classify_faces(poly))
        grid: atlas cells per side

    Returns:
        RenderMesh
    """
    if face_classes is None:
        face_classes = classify_faces(poly)
    if len(face_classes) != poly.n_faces:
        raise ValueError(f"Expected {poly.n_faces} face classes, got {len(face_classes)}")

    capacity = grid * grid
    overflow = sum(1 for c in set(face_classes) if c >= capacity)
    if overflow:
        warnings.warn(
            f"{overflow} face class(es) beyond the {grid}x{grid} atlas; "
            f"their texture coordinates fall outside [0, 1]",
            UserWarning,
            stacklevel=2,
        )

    positions, tex_coords, normals, triangles = [], [], [], []
    first = 0
    for f_idx, class_id in enumerate(face_classes):
        points = poly.face_vertices(f_idx)
        n = len(points)
        positions.append(points)
        tex_coords.append(np.tile(atlas_coordinates(class_id, grid), (n, 1)))
        normals.append(np.tile(face_normal(points), (n, 1)))
        triangles.append(fan_triangles(first, n))
        first += n

    if not positions:
        return RenderMesh(np.zeros((0, 3), np.float32), np.zeros((0, 2), np.float32),
                          np.zeros((0, 3), np.float32), np.zeros((0, 3), np.uint32))

    return RenderMesh(
        positions=np.vstack(positions).astype(np.float32),
        tex_coords=np.vstack(tex_coords).astype(np.float32),
        normals=np.vstack(normals).astype(np.float32),
        triangles=np.vstack(triangles).astype(np.uint32),
    )
