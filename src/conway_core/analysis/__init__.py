"""
Analysis functions - read-only passes over finished meshes.

Separated from operators to maintain clean layering:
    builders → spec
    operators → builders → spec
    analysis → operators → spec

Includes:
- classify: face congruence classes (signature + mantissa truncation)
- verify_topology: closed/manifold/winding checks, volume, convexity
- render_mesh: fan-triangulated arrays with atlas texture coordinates
- export: OFF text output
"""

from .classify import (
    truncate_mantissa,
    corner_magnitudes,
    face_signature,
    face_signatures,
    classify_signatures,
    classify_faces,
    face_class_count,
)
from .verify_topology import (
    verify_closed_manifold,
    assert_closed_manifold,
    signed_volume,
    verify_convex_position,
    face_valence_histogram,
    face_multiset,
    same_combinatorics,
    vertex_degrees,
    edge_lengths,
    summarize,
)
from .render_mesh import RenderMesh, atlas_coordinates, fan_triangles, build_render_mesh
from .export import polyhedron_to_off, write_off
