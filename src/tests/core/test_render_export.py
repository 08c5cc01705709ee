"""
Tests for render preparation and OFF export.

Validates:
    - Atlas cell centres
    - Flat-shaded vertex groups, fan triangulation, dtypes
    - Overflow warning for class ids beyond the atlas
    - OFF text layout and file output

Run with:
    python3 -m pytest tests/core/test_render_export.py -v
"""

import pytest
import numpy as np

from conway_core.analysis import (
    atlas_coordinates,
    fan_triangles,
    build_render_mesh,
    classify_faces,
    polyhedron_to_off,
    write_off,
)
from conway_core.builders import build_cube, build_dodecahedron, build_tetrahedron
from conway_core.operators import ambo


# ============================================================================
# Atlas and triangulation
# ============================================================================

class TestAtlas:

    def test_cell_centres(self):
        assert atlas_coordinates(0) == (0.0625, 0.0625)
        assert atlas_coordinates(7) == (0.9375, 0.0625)
        assert atlas_coordinates(9) == (0.1875, 0.1875)
        assert atlas_coordinates(63) == (0.9375, 0.9375)

    def test_custom_grid(self):
        assert atlas_coordinates(3, grid=2) == (0.75, 0.75)

    def test_fan(self):
        tris = fan_triangles(10, 5)
        assert tris.tolist() == [[10, 11, 12], [10, 12, 13], [10, 13, 14]]
        assert tris.dtype == np.uint32


# ============================================================================
# Render mesh
# ============================================================================

class TestRenderMesh:

    def test_cube_layout(self):
        render = build_render_mesh(build_cube())
        assert render.positions.shape == (24, 3)
        assert render.tex_coords.shape == (24, 2)
        assert render.normals.shape == (24, 3)
        assert render.triangles.shape == (12, 3)
        assert render.index_count == 36
        assert render.positions.dtype == np.float32
        assert render.triangles.dtype == np.uint32
        assert int(render.triangles.max()) == 23

    def test_single_class_uses_first_cell(self):
        render = build_render_mesh(build_dodecahedron())
        assert render.positions.shape == (60, 3)
        assert render.triangles.shape == (36, 3)
        assert np.allclose(render.tex_coords, [0.0625, 0.0625])

    def test_normals_outward_and_unit(self):
        render = build_render_mesh(build_dodecahedron())
        assert np.allclose(np.linalg.norm(render.normals, axis=1), 1.0, atol=1e-6)
        # Seeds are centred at the origin: outward normals point away from it
        assert np.all(np.einsum('ij,ij->i', render.normals, render.positions) > 0)

    def test_triangles_wound_like_faces(self):
        """Fan triangles keep the face winding (normal agrees with face normal)."""
        render = build_render_mesh(build_tetrahedron())
        p = render.positions[render.triangles.astype(np.int64)]
        tri_normals = np.cross(p[:, 1] - p[:, 0], p[:, 2] - p[:, 0])
        face_normals = render.normals[render.triangles[:, 0]]
        assert np.all(np.einsum('ij,ij->i', tri_normals, face_normals) > 0)

    def test_class_coordinates_follow_classes(self):
        poly = ambo(build_cube())
        classes = classify_faces(poly)
        render = build_render_mesh(poly, classes)
        first = 0
        for f_idx, face in enumerate(poly.faces):
            expected = atlas_coordinates(classes[f_idx])
            assert np.allclose(render.tex_coords[first:first + len(face)], expected)
            first += len(face)

    def test_overflow_warns(self):
        cube = build_cube()
        with pytest.warns(UserWarning, match="atlas"):
            render = build_render_mesh(cube, face_classes=[0, 1, 2, 3, 4, 64])
        assert render.tex_coords[-1, 1] > 1.0

    def test_wrong_class_count_raises(self):
        with pytest.raises(ValueError, match="face classes"):
            build_render_mesh(build_cube(), face_classes=[0, 0])


# ============================================================================
# OFF export
# ============================================================================

class TestOff:

    def test_layout(self):
        tet = build_tetrahedron()
        lines = polyhedron_to_off(tet).splitlines()
        assert lines[0] == "OFF"
        assert lines[1] == "4 4 0"
        assert len(lines) == 2 + 4 + 4
        assert lines[6] == "3 0 1 2"
        assert all(line.startswith("3 ") for line in lines[6:])

    def test_coordinates_exact(self):
        tet = build_tetrahedron()
        lines = polyhedron_to_off(tet).splitlines()
        coords = np.array([[float(x) for x in line.split()] for line in lines[2:6]])
        assert np.array_equal(coords, tet.vertices)

    def test_mixed_faces(self):
        text = polyhedron_to_off(ambo(build_cube()))
        counts = [int(line.split()[0]) for line in text.splitlines()[14:]]
        assert sorted(counts) == [3] * 8 + [4] * 6

    def test_write_off(self, tmp_path):
        path = tmp_path / "cube.off"
        cube = build_cube()
        write_off(cube, path)
        assert path.read_text(encoding="utf-8") == polyhedron_to_off(cube)
