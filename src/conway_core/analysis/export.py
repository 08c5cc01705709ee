"""
OFF Export
==========

Plain-text Object File Format:

    OFF
    V F 0
    x y z            (V lines)
    n i0 i1 ... in-1 (F lines)
"""

from pathlib import Path
from typing import Union

from ..spec.structures import Polyhedron


def polyhedron_to_off(poly: Polyhedron) -> str:
    lines = ["OFF", f"{poly.n_vertices} {poly.n_faces} 0"]
    for x, y, z in poly.vertices.tolist():
        lines.append(f"{x!r} {y!r} {z!r}")
    for face in poly.faces:
        lines.append(" ".join(str(v) for v in (len(face),) + face))
    return "\n".join(lines) + "\n"


def write_off(poly: Polyhedron, path: Union[str, Path]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(polyhedron_to_off(poly))
